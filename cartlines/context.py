"""Caller environment passed through the registry to handlers untouched."""
from dataclasses import dataclass, field
from typing import Any, Optional

from cartlines.config import Settings, get_settings


@dataclass
class CartContext:
    """Sales channel state for a cart operation."""
    sales_channel_id: str = "default"
    currency: str = ""
    locale: str = "en"
    customer_id: Optional[str] = None
    extensions: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.currency:
            self.currency = get_settings().default_currency
        self.currency = self.currency.upper()

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "CartContext":
        """Build a context whose currency defaults to the configured one."""
        kwargs.setdefault("currency", settings.default_currency)
        return cls(**kwargs)
