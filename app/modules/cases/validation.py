from typing import Any, Dict, Mapping

from app.core.validation import clamp_text, required_errors
from app.modules.cases.schemas import DESC_MAX_LENGTH

REQUIRED_FIELDS = {
    "company_name": "Company name",
    "desc": "Description",
    "city": "City",
    "country": "Country",
    "contact_person": "Contact person",
}

FORM_TYPES = ("normal", "beforeAfter")


def normalize_case_form(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Strip text fields and cut the description at its maximum length."""
    form = dict(data)
    for field in REQUIRED_FIELDS:
        form[field] = clamp_text(form.get(field), DESC_MAX_LENGTH if field == "desc" else 500)
    form["form_type"] = form.get("form_type") or "normal"
    return form


def validate_case_form(data: Mapping[str, Any]) -> Dict[str, str]:
    errors = required_errors(data, REQUIRED_FIELDS)
    if data.get("form_type", "normal") not in FORM_TYPES:
        errors["form_type"] = "Form type must be normal or beforeAfter"
    return errors
