"""
Per-vendor price extraction.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ...models import Insurer
from .parsing import format_price, parse_amount
from .rules import DEFAULT_RULES, VendorRule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PriceRecord:
    """Canonical price recovered from a document."""

    insurer: Insurer
    price: float
    formatted_price: str
    plans: dict[str, float] | None = None


class PriceExtractor:
    """
    Applies a vendor's label pattern to recover its quoted price.

    Only the first match in the document is used. Multi-tier rules keep
    every tier in capture order and report the cheapest as the price.
    """

    def __init__(
        self,
        rules: Sequence[VendorRule] = DEFAULT_RULES,
        currency_symbol: str = "₡",
    ):
        self.currency_symbol = currency_symbol
        self._rules = {rule.insurer: rule for rule in rules}

    def extract(self, insurer: Insurer, text: str) -> PriceRecord | None:
        """
        Extract the price for a known insurer.

        Args:
            insurer: Insurer already detected for this document.
            text: Full document text.

        Returns:
            PriceRecord, or None when the insurer's label is not found.

        Raises:
            KeyError: If no rule is registered for the insurer.
        """
        return self.extract_with_rule(self._rules[insurer], text)

    def extract_with_rule(self, rule: VendorRule, text: str) -> PriceRecord | None:
        """Run a single rule's pattern over the text."""
        match = rule.pattern.search(text or "")
        if match is None:
            logger.debug("%s price label not found", rule.insurer.value)
            return None

        amounts = [parse_amount(group) for group in match.groups()]
        if any(amount is None for amount in amounts):
            logger.warning(
                "%s price label found but amount unreadable: %r",
                rule.insurer.value,
                match.group(0),
            )
            return None

        plans = None
        if rule.is_multi_tier:
            plans = dict(zip(rule.plan_names, amounts))
            price = min(amounts)
        else:
            price = amounts[0]

        return PriceRecord(
            insurer=rule.insurer,
            price=price,
            formatted_price=format_price(price, self.currency_symbol),
            plans=plans,
        )
