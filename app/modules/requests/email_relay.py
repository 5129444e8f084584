"""
EmailJS relay for offer form notifications.

The agency receives one templated email per submitted request. When the
relay is not configured (local development) the send is logged and skipped.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from app.config import settings, Settings
from app.core.errors import BackendOperationError

logger = logging.getLogger(__name__)


class EmailRelay:
    def __init__(self, config: Settings = None, client: Optional[httpx.Client] = None):
        self.config = config or settings
        self.client = client

    @property
    def configured(self) -> bool:
        return self.config.emailjs_configured

    def build_payload(self, template_params: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "service_id": self.config.emailjs_service_id,
            "template_id": self.config.emailjs_template_id,
            "user_id": self.config.emailjs_public_key,
            "template_params": template_params,
        }

    def send(self, template_params: Dict[str, Any]) -> bool:
        """Send a templated email. Returns False when skipped because the relay is not configured."""
        if not self.configured:
            logger.info(f"[DEV MODE] Email relay not configured, skipping notification: {template_params}")
            return False

        payload = self.build_payload(template_params)
        try:
            if self.client is not None:
                response = self.client.post(self.config.emailjs_api_url, json=payload)
            else:
                response = httpx.post(
                    self.config.emailjs_api_url,
                    json=payload,
                    timeout=self.config.emailjs_timeout,
                )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Failed to send email via relay: {str(e)}")
            raise BackendOperationError(f"Failed to send email: {str(e)}")

        logger.info(f"Notification email sent via template {self.config.emailjs_template_id}")
        return True


def get_email_relay() -> EmailRelay:
    return EmailRelay()
