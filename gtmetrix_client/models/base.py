"""Base model configuration for all API payloads."""

import logging
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
    model_validator,
)

log = logging.getLogger(__name__)


class Model(BaseModel):
    """Base model with standard configuration.

    The API sends ``null`` for fields it has no value for yet, so nulls are
    dropped before validation and the field keeps its zero-value default.
    A field with a value of the wrong type also keeps its default, unless
    validation runs with ``context={"strict": True}``.
    """

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Remove ``None`` values so defaults apply."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @field_validator("*", mode="wrap")
    @classmethod
    def default_invalid(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> Any:
        """Replace a mistyped value with the field default."""
        try:
            return handler(value)
        except ValidationError as exc:
            if info.context and info.context.get("strict"):
                raise
            log.warning(
                "Ignoring invalid %s.%s value %r: %s",
                cls.__name__,
                info.field_name,
                value,
                exc.errors()[0]["msg"],
            )
            field = cls.model_fields[info.field_name]
            return field.get_default(call_default_factory=True)
