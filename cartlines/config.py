"""Runtime settings for the line item registry, read from the environment."""
import os
from functools import cache

from pydantic import BaseModel, Field, field_validator

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class Settings(BaseModel):
    """Registry settings."""
    strict_resolution: bool = False  # raise on ambiguous handler matches
    max_quantity: int = Field(default=100, ge=1)
    default_currency: str = "USD"

    @field_validator("strict_resolution", mode="before")
    @classmethod
    def parse_bool(cls, v):
        if isinstance(v, str):
            value = v.strip().lower()
            if value in _TRUE_VALUES:
                return True
            if value in _FALSE_VALUES:
                return False
            raise ValueError(f"not a boolean: {v!r}")
        return v

    @field_validator("default_currency", mode="before")
    @classmethod
    def normalize_currency(cls, v):
        return v.strip().upper() if isinstance(v, str) else v


def load_settings(environ: dict | None = None) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Validated Settings

    Raises:
        ValueError: If a variable is malformed
    """
    env = os.environ if environ is None else environ
    values = {}
    if "LINE_ITEM_STRICT_RESOLUTION" in env:
        values["strict_resolution"] = env["LINE_ITEM_STRICT_RESOLUTION"]
    if "LINE_ITEM_MAX_QUANTITY" in env:
        values["max_quantity"] = env["LINE_ITEM_MAX_QUANTITY"]
    if "LINE_ITEM_DEFAULT_CURRENCY" in env:
        values["default_currency"] = env["LINE_ITEM_DEFAULT_CURRENCY"]
    # pydantic's ValidationError subclasses ValueError
    return Settings(**values)


@cache
def get_settings() -> Settings:
    """Process-wide settings, loaded once."""
    return load_settings()
