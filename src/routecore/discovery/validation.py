"""Route definition validation."""

from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

__all__ = ["RouteConfig", "validate_route"]


class RouteConfig(BaseModel):
    """Required shape of a route definition's ``config`` mapping."""

    model_config = ConfigDict(extra="allow")

    url: str
    method: Union[str, list[str]]

    @field_validator("url")
    @classmethod
    def _url_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must be a non-empty string")
        return v

    @field_validator("method")
    @classmethod
    def _method_not_empty(cls, v: str | list[str]) -> str | list[str]:
        tokens = [v] if isinstance(v, str) else v
        if not tokens or any(not token.strip() for token in tokens):
            raise ValueError("must be a non-empty method or list of methods")
        return v


def validate_route(definition: Any) -> list[str]:
    """Validate that a route definition exposes a usable config and handler.

    Returns a list of validation error strings. Empty list means valid.
    """
    errors: list[str] = []

    config = getattr(definition, "config", None)
    if not isinstance(config, dict):
        errors.append("Missing config: must be a mapping with 'url' and 'method'")
    else:
        try:
            RouteConfig.model_validate(config)
        except ValidationError as e:
            for err in e.errors():
                field = ".".join(str(loc) for loc in err["loc"]) or "config"
                errors.append(f"{field}: {err['msg']}")

    handler = getattr(definition, "handler", None)
    if handler is None or not callable(handler):
        errors.append("Missing handler method")

    return errors
