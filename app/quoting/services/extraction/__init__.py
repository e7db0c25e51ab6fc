"""
Rule-based quote extraction.

Modules:
- rules: the ordered vendor rule table
- parsing: amount parsing and display formatting
- detector: insurer detection by keywords
- extractor: per-vendor price extraction
- dispatcher: detection and extraction combined into one result
"""

from ...config import get_settings
from .detector import VendorDetector
from .dispatcher import ExtractionDispatcher
from .extractor import PriceExtractor, PriceRecord
from .parsing import format_price, parse_amount
from .rules import DEFAULT_RULES, VendorRule, label_pattern

# Singleton instance for convenience
_dispatcher: ExtractionDispatcher | None = None


def get_dispatcher() -> ExtractionDispatcher:
    """Get or create the dispatcher singleton over the default rule table."""
    global _dispatcher
    if _dispatcher is None:
        settings = get_settings()
        _dispatcher = ExtractionDispatcher(
            DEFAULT_RULES,
            currency_symbol=settings.currency_symbol,
            fallback_on_unparseable=settings.fallback_on_unparseable,
        )
    return _dispatcher


__all__ = [
    "DEFAULT_RULES",
    "ExtractionDispatcher",
    "PriceExtractor",
    "PriceRecord",
    "VendorDetector",
    "VendorRule",
    "format_price",
    "get_dispatcher",
    "label_pattern",
    "parse_amount",
]
