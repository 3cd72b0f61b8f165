"""Shared DTO plumbing: pure Pydantic, no HTTP, no Streamlit."""
from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from bluemoon.domain.exceptions import FormValidationError


class BackendModel(BaseModel):
    """Backend documents: camelCase on the wire, ``_id`` as ``id``."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore",
    )


class HouseholdRef(BackendModel):
    id: str = Field(alias="_id")
    apartment_number: str = ""


class FeeRef(BackendModel):
    id: str = Field(default="", alias="_id")
    name: str = ""
    fee_type: str | None = None


class PersonRef(BackendModel):
    id: str = Field(default="", alias="_id")
    full_name: str = ""


class FormModel(BaseModel):
    """Base for client-side forms: every field validator runs, even on defaults."""

    model_config = ConfigDict(validate_default=True, str_strip_whitespace=False)


def field_errors(exc: ValidationError) -> dict[str, str]:
    """Flatten a pydantic ``ValidationError`` into ``{field: message}``."""
    errors: dict[str, str] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "__root__"
        ctx_error = (err.get("ctx") or {}).get("error")
        errors.setdefault(field, str(ctx_error) if ctx_error else err["msg"])
    return errors


F = TypeVar("F", bound=FormModel)


def validate_form(form_cls: type[F], **values) -> F:
    """Build *form_cls* or raise ``FormValidationError`` with per-field messages."""
    try:
        return form_cls(**values)
    except ValidationError as exc:
        raise FormValidationError(field_errors(exc)) from exc
