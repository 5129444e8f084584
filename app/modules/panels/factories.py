"""PanelActions bundles wired to the entity services for a signed-in member."""
from typing import Any, Mapping, Optional

from app.core.validation import build_model
from app.modules.cases.schemas import CaseCreate, CaseImages, CaseUpdate
from app.modules.cases.service import CaseService
from app.modules.cases.validation import normalize_case_form, validate_case_form
from app.modules.panels.state import AdminPanel, PanelActions
from app.modules.requests.schemas import RequestUpdate
from app.modules.requests.service import RequestService
from app.modules.requests.validation import validate_request_update
from app.modules.reviews.schemas import ReviewCreate, ReviewUpdate
from app.modules.reviews.service import ReviewService
from app.modules.reviews.validation import normalize_review_form, validate_review_form

CASE_IMAGE_FIELDS = ("image", "image_before", "image_after")


def _case_images(form: Mapping[str, Any]) -> Optional[CaseImages]:
    files = {field: form.get(field) for field in CASE_IMAGE_FIELDS if form.get(field)}
    return CaseImages(**files) if files else None


def _case_normalize(form: Mapping[str, Any]) -> dict:
    data = normalize_case_form(form)
    for field in CASE_IMAGE_FIELDS:
        data[field] = form.get(field)
    return data


def case_actions(service: CaseService, user_id: str) -> PanelActions:
    def create(form):
        fields = {k: v for k, v in form.items() if k not in CASE_IMAGE_FIELDS}
        return service.create_case(build_model(CaseCreate, fields), user_id, _case_images(form))

    def update(case_id, form):
        fields = {k: v for k, v in form.items() if k not in CASE_IMAGE_FIELDS}
        return service.update_case(case_id, build_model(CaseUpdate, fields), user_id, _case_images(form))

    return PanelActions(
        list_page=service.list_cases,
        create=create,
        update=update,
        delete=service.delete_case,
        get=service.get_case_by_id,
        validate=validate_case_form,
        normalize=_case_normalize,
    )


def review_actions(service: ReviewService, user_id: str) -> PanelActions:
    return PanelActions(
        list_page=service.list_reviews,
        create=lambda form: service.create_review(build_model(ReviewCreate, form), user_id),
        update=lambda review_id, form: service.update_review(review_id, build_model(ReviewUpdate, form)),
        delete=service.delete_review,
        get=service.get_review_by_id,
        validate=validate_review_form,
        normalize=normalize_review_form,
    )


def request_actions(service: RequestService) -> PanelActions:
    """Edit-only: requests are created by the public offer form."""
    return PanelActions(
        list_page=service.list_requests,
        update=lambda request_id, form: service.update_request(request_id, build_model(RequestUpdate, form)),
        delete=service.delete_request,
        get=service.get_request_by_id,
        validate=validate_request_update,
        normalize=lambda form: {k: v for k, v in form.items() if v is not None},
    )


def build_panel(actions: PanelActions, **kwargs) -> AdminPanel:
    panel = AdminPanel(actions, **kwargs)
    panel.refresh()
    return panel
