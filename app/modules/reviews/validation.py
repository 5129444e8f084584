from typing import Any, Dict, Mapping

from app.core.validation import clamp_text, required_errors
from app.modules.reviews.schemas import DESC_MAX_LENGTH, MIN_RATE, MAX_RATE

REQUIRED_FIELDS = {
    "name": "Name",
    "city": "City",
    "desc": "Description",
    "rate": "Rating",
}


def normalize_review_form(data: Mapping[str, Any]) -> Dict[str, Any]:
    form = dict(data)
    form["name"] = clamp_text(form.get("name"), 200)
    form["city"] = clamp_text(form.get("city"), 200)
    form["desc"] = clamp_text(form.get("desc"), DESC_MAX_LENGTH)
    return form


def validate_review_form(data: Mapping[str, Any]) -> Dict[str, str]:
    errors = required_errors(data, REQUIRED_FIELDS)
    rate = data.get("rate")
    if "rate" not in errors:
        try:
            rate = int(rate)
        except (TypeError, ValueError):
            rate = None
        if rate is None or not MIN_RATE <= rate <= MAX_RATE:
            errors["rate"] = f"Rating must be between {MIN_RATE} and {MAX_RATE}"
    return errors
