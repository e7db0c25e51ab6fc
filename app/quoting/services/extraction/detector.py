"""
Vendor detection: which insurer issued a document.
"""

import logging
from collections.abc import Iterator, Sequence

from ...models import Insurer
from .rules import DEFAULT_RULES, VendorRule

logger = logging.getLogger(__name__)


class VendorDetector:
    """
    Identifies the issuing insurer by testing rules in priority order.

    The first rule whose keywords appear wins; there is no scoring.
    """

    def __init__(self, rules: Sequence[VendorRule] = DEFAULT_RULES):
        self.rules = tuple(rules)

    def matching_rules(self, text: str) -> Iterator[VendorRule]:
        """Yield every rule whose keywords appear in text, in priority order."""
        if not text:
            return
        for rule in self.rules:
            if rule.matches(text):
                yield rule

    def detect(self, text: str) -> Insurer | None:
        """
        Return the first insurer whose keywords appear in text.

        Args:
            text: Full document text.

        Returns:
            The detected Insurer, or None when no rule matches.
        """
        rule = next(self.matching_rules(text), None)
        if rule is None:
            logger.debug("No vendor rule matched document text")
            return None
        return rule.insurer
