import logging
from supabase import Client
from app.core.crud import fetch_page, fetch_by_id, insert_row, update_row, delete_row
from app.core.errors import FormValidationError
from app.core.pagination import Page
from app.modules.requests.email_relay import EmailRelay
from app.modules.requests.schemas import RequestCreate, RequestUpdate, RequestResponse, OfferSubmitted
from typing import Optional

logger = logging.getLogger(__name__)

TABLE = "requests"


class RequestService:
    def __init__(self, supabase: Client, email_relay: Optional[EmailRelay] = None):
        self.supabase = supabase
        self.email_relay = email_relay or EmailRelay()

    def create_request(self, request_data: RequestCreate) -> RequestResponse:
        """Insert a lead from the public offer form"""
        created = insert_row(self.supabase, TABLE, request_data.model_dump(mode="json"), "request")
        logger.info(f"Request {created.get('id')} received ({request_data.category})")
        return RequestResponse(**created)

    def submit_offer(self, request_data: RequestCreate) -> OfferSubmitted:
        """Store the request, then notify the agency. A failed email leaves the stored row in place."""
        created = self.create_request(request_data)
        email_sent = self.email_relay.send({"from_name": request_data.name})
        return OfferSubmitted(id=created.id, email_sent=email_sent)

    def list_requests(self, page: int = 1, limit: int = 6) -> Page[RequestResponse]:
        rows, total = fetch_page(self.supabase, TABLE, page, limit, "requests")
        return Page[RequestResponse](
            items=[RequestResponse(**row) for row in rows],
            total=total,
            page=page,
            limit=limit,
        )

    def get_request_by_id(self, request_id: str) -> RequestResponse:
        return RequestResponse(**fetch_by_id(self.supabase, TABLE, request_id, "request"))

    def update_request(self, request_id: str, request_data: RequestUpdate) -> RequestResponse:
        values = request_data.model_dump(mode="json", exclude_unset=True)
        if not values:
            raise FormValidationError({"general": "No fields to update"})
        updated = update_row(self.supabase, TABLE, request_id, values, "request")
        return RequestResponse(**updated)

    def delete_request(self, request_id: str) -> None:
        delete_row(self.supabase, TABLE, request_id, "request")
        logger.info(f"Request {request_id} deleted")
