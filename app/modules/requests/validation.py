import re
from typing import Any, Dict, Mapping

from email_validator import EmailNotValidError, validate_email

from app.core.validation import clamp_text, required_errors
from app.modules.requests.schemas import MESSAGE_MAX_LENGTH, TASK_CATEGORIES

DANISH_PHONE_RE = re.compile(r"^(?:\+45\d{8}|\d{8})$")

REQUIRED_FIELDS = {
    "name": "Name",
    "mail": "Email address",
    "mobile": "Phone number",
    "category": "Task",
}


def is_valid_phone_number(phone_number: str) -> bool:
    return bool(DANISH_PHONE_RE.match(phone_number or ""))


def is_valid_email(address: str) -> bool:
    try:
        validate_email(address, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def normalize_offer_form(data: Mapping[str, Any]) -> Dict[str, Any]:
    form = dict(data)
    for field in ("name", "mail", "mobile", "category", "address", "city"):
        form[field] = clamp_text(form.get(field), 200)
    form["message"] = clamp_text(form.get("message"), MESSAGE_MAX_LENGTH)
    form["consent"] = bool(form.get("consent"))
    return form


def _field_errors(data: Mapping[str, Any], errors: Dict[str, str]) -> Dict[str, str]:
    if "mobile" in data and "mobile" not in errors and not is_valid_phone_number(data["mobile"]):
        errors["mobile"] = "Invalid phone number."
    if "mail" in data and "mail" not in errors and not is_valid_email(data["mail"]):
        errors["mail"] = "Invalid email address."
    if "category" in data and "category" not in errors and data["category"] not in TASK_CATEGORIES:
        errors["category"] = "Choose one of the listed tasks."
    return errors


def validate_offer_form(data: Mapping[str, Any]) -> Dict[str, str]:
    """Offer form rules: required contact fields, Danish phone, known task, storage consent."""
    errors = _field_errors(data, required_errors(data, REQUIRED_FIELDS))
    if not data.get("consent"):
        errors["consent"] = "You must accept storage of your information."
    return errors


def validate_request_update(data: Mapping[str, Any]) -> Dict[str, str]:
    """Partial update rules: a required field that is sent, even as null, must hold a value."""
    sent = {field: label for field, label in REQUIRED_FIELDS.items() if field in data}
    return _field_errors(data, required_errors(data, sent))
