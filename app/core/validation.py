"""Form helpers shared by the admin and public forms."""
from typing import Dict, Mapping, Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from app.core.errors import FormValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def clamp_text(value: Any, max_length: int) -> str:
    """Trim surrounding whitespace and cut the text at max_length characters."""
    text = (value or "").strip() if isinstance(value, str) else ("" if value is None else str(value))
    return text[:max_length]


def required_errors(data: Mapping[str, Any], labels: Mapping[str, str]) -> Dict[str, str]:
    """One '<Label> is required' message per empty field; valid fields are omitted."""
    errors = {}
    for field, label in labels.items():
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            errors[field] = f"{label} is required"
    return errors


def raise_for_errors(errors: Dict[str, str]) -> None:
    if errors:
        raise FormValidationError(errors)


def build_model(model_cls: Type[ModelT], data: Mapping[str, Any]) -> ModelT:
    """Instantiate a schema, reporting pydantic errors as field-level form errors."""
    try:
        return model_cls(**data)
    except ValidationError as e:
        errors = {}
        for error in e.errors():
            field = str(error["loc"][0]) if error.get("loc") else "general"
            errors.setdefault(field, error["msg"])
        raise FormValidationError(errors)
