import json
from typing import List

import httpx
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.core.rate_limit import limiter
from app.database.supabase_client import get_supabase, get_service_supabase
from app.main import app
from app.modules.auth.service import clear_auth_cache
from app.modules.requests.email_relay import EmailRelay, get_email_relay
from tests.fakes import FakeSupabase


@pytest.fixture(autouse=True)
def _reset_process_state():
    clear_auth_cache()
    limiter.reset()
    yield
    clear_auth_cache()
    app.dependency_overrides.clear()


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def relay_settings() -> Settings:
    return Settings(
        emailjs_service_id="service_agency",
        emailjs_template_id="template_offer",
        emailjs_public_key="public-key",
    )


@pytest.fixture
def sent_emails() -> List[dict]:
    return []


@pytest.fixture
def email_relay(relay_settings, sent_emails) -> EmailRelay:
    def handler(request: httpx.Request) -> httpx.Response:
        sent_emails.append(json.loads(request.content))
        return httpx.Response(200, text="OK")

    return EmailRelay(relay_settings, client=httpx.Client(transport=httpx.MockTransport(handler)))


@pytest.fixture
def client(fake_supabase, email_relay) -> TestClient:
    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_service_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_email_relay] = lambda: email_relay
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def editor(fake_supabase):
    user, token = fake_supabase.add_member("editor@agency.dk", role="editor", name="Eddie")
    return user, {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin(fake_supabase):
    user, token = fake_supabase.add_member("admin@agency.dk", role="admin", name="Ada")
    return user, {"Authorization": f"Bearer {token}"}
