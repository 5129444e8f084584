"""
Tests for the admin panel state machine wired to real services over the
in-memory backend.
"""

import pytest

from app.modules.cases.service import CaseService
from app.modules.panels.factories import build_panel, case_actions, request_actions, review_actions
from app.modules.panels.state import PanelMode
from app.modules.requests.schemas import RequestCreate
from app.modules.requests.service import RequestService
from app.modules.reviews.service import ReviewService
from tests.fakes import make_image

CASE_FORM = {
    "company_name": "Acme",
    "desc": "Shop",
    "city": "Aarhus",
    "country": "Denmark",
    "contact_person": "Jens",
}


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def case_panel(fake_supabase, clock):
    return build_panel(case_actions(CaseService(fake_supabase), "user-1"), clock=clock)


def test_create_returns_to_list_with_toast(case_panel, clock):
    case_panel.start_create()
    assert case_panel.mode == PanelMode.CREATING

    assert case_panel.submit({**CASE_FORM, "image": make_image()}) is True
    assert case_panel.mode == PanelMode.LISTING
    assert case_panel.total == 1
    assert case_panel.items[0].image is not None
    assert case_panel.toast_message == "Created"

    clock.now = 102.5
    assert case_panel.toast_visible
    clock.now = 103.0
    assert not case_panel.toast_visible
    assert case_panel.toast_message is None


def test_invalid_form_stays_open_without_backend_call(case_panel, fake_supabase):
    case_panel.start_create()
    calls = len(fake_supabase.backend_calls("cases"))

    assert case_panel.submit({**CASE_FORM, "city": ""}) is False
    assert case_panel.mode == PanelMode.CREATING
    assert case_panel.errors == {"city": "City is required"}
    assert len(fake_supabase.backend_calls("cases")) == calls


def test_backend_failure_is_shown_as_general_error(case_panel, fake_supabase):
    fake_supabase.fail("cases", "insert", "row level security")
    case_panel.start_create()

    assert case_panel.submit(CASE_FORM) is False
    assert case_panel.mode == PanelMode.CREATING
    assert case_panel.errors == {"general": "Failed to create case: row level security"}
    assert not case_panel.loading


def test_edit_loads_record_and_keeps_image(case_panel):
    case_panel.start_create()
    case_panel.submit({**CASE_FORM, "image": make_image()})
    case = case_panel.items[0]

    case_panel.start_edit(case.id)
    assert case_panel.selected.company_name == "Acme"
    assert case_panel.submit({**CASE_FORM, "company_name": "Acme ApS"}) is True
    assert case_panel.toast_message == "Updated"
    assert case_panel.items[0].company_name == "Acme ApS"
    assert case_panel.items[0].image == case.image


def test_delete_needs_confirmation(case_panel):
    case_panel.start_create()
    case_panel.submit(CASE_FORM)
    case_id = case_panel.items[0].id

    case_panel.request_delete(case_id)
    assert case_panel.confirm_open
    case_panel.cancel_delete()
    assert case_panel.total == 1

    case_panel.request_delete(case_id)
    assert case_panel.confirm_delete() is True
    assert not case_panel.confirm_open
    assert case_panel.total == 0


def test_deleting_last_item_on_page_steps_back(fake_supabase, clock):
    service = ReviewService(fake_supabase)
    panel = build_panel(review_actions(service, "user-1"), limit=2, clock=clock)
    for i in range(3):
        panel.start_create()
        assert panel.submit({"name": f"R{i}", "city": "Vejle", "desc": "Good", "rate": 4})

    panel.set_page(2)
    assert panel.page == 2
    assert len(panel.items) == 1

    panel.request_delete(panel.items[0].id)
    panel.confirm_delete()
    assert panel.page == 1
    assert len(panel.items) == 2


def test_set_page_is_clamped(case_panel):
    case_panel.set_page(9)
    assert case_panel.page == 1


def test_submit_ignored_while_listing(case_panel, fake_supabase):
    assert case_panel.submit(CASE_FORM) is False
    assert fake_supabase.backend_calls("cases") == [("cases", "select")]


def test_requests_panel_is_edit_only(fake_supabase, email_relay, clock):
    service = RequestService(fake_supabase, email_relay)
    created = service.create_request(RequestCreate(
        name="Ole", mobile="87654321", mail="ole@tommer.dk", category="Website", consent=True,
    ))
    panel = build_panel(request_actions(service), clock=clock)

    assert not panel.can_create
    panel.start_create()
    assert panel.mode == PanelMode.LISTING

    panel.start_edit(created.id)
    assert panel.submit({"category": "Plumbing", "city": None}) is False
    assert set(panel.errors) == {"category"}

    assert panel.submit({"category": "Branding", "city": None}) is True
    assert service.get_request_by_id(created.id).category == "Branding"
