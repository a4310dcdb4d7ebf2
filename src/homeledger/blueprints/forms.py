"""Pydantic form base and field types shared by the blueprint forms."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, ClassVar, Iterable, Mapping

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    PlainSerializer,
    TypeAdapter,
    ValidationError,
)

from ..errors import ValidationFailed


def naive_utc(value: datetime) -> datetime:
    """Store timestamps as naive UTC."""

    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def split_tags(value: Any) -> Any:
    """Convert comma-separated tag strings into a list."""

    if isinstance(value, str):
        return value.split(",")
    return value


UtcDatetime = Annotated[datetime, AfterValidator(naive_utc)]
Tags = Annotated[
    list[str],
    BeforeValidator(split_tags),
    AfterValidator(lambda tags: [tag for tag in tags if tag]),
    PlainSerializer(lambda tags: ",".join(tags), return_type=str),
]

_datetime_adapter = TypeAdapter(UtcDatetime)


def parse_moment(value: str) -> datetime:
    """Parse an ISO-8601 date or timestamp; raises ``ValidationError``."""

    return _datetime_adapter.validate_python(value)


def error_key(loc: Iterable[Any]) -> str:
    """Render a pydantic error location as ``categories[1].name``."""

    key = ""
    for part in loc:
        if isinstance(part, int):
            key += f"[{part}]"
        else:
            key += f".{part}" if key else str(part)
    return key


def structured_errors(exc: ValidationError, root: str = "__root__") -> dict[str, list[str]]:
    structured: dict[str, list[str]] = {}
    for error in exc.errors(include_url=False):
        key = error_key(error.get("loc", ())) or root
        structured.setdefault(key, []).append(error.get("msg", "Invalid value"))
    return structured


class PayloadForm(BaseModel):
    """Base for JSON payload forms.

    Defaults are not validated, so update forms give required fields a
    ``None`` default and only the keys a client sent are dumped.
    """

    model_config = ConfigDict(
        validate_default=False,
        str_strip_whitespace=True,
        allow_inf_nan=False,
    )

    root_error_field: ClassVar[str] = "__root__"

    @classmethod
    def clean(cls, payload: Mapping[str, Any], message: str = "Validation failed") -> dict[str, Any]:
        """Validate ``payload`` and return the submitted fields."""

        try:
            form = cls.model_validate(payload)
        except ValidationError as exc:
            raise ValidationFailed(message, structured_errors(exc, cls.root_error_field)) from exc
        return form.model_dump(exclude_unset=True)


__all__ = [
    "PayloadForm",
    "Tags",
    "UtcDatetime",
    "error_key",
    "naive_utc",
    "parse_moment",
    "split_tags",
    "structured_errors",
]
