"""
Extraction dispatcher: detect the vendor, then extract its price.
"""

import logging
from collections.abc import Sequence

from ...models import Confidence, FailureReason, Insurer, QuoteExtractionResult
from .detector import VendorDetector
from .extractor import PriceExtractor, PriceRecord
from .rules import DEFAULT_RULES, VendorRule

logger = logging.getLogger(__name__)


class ExtractionDispatcher:
    """
    Runs vendor rules in priority order over a document's text.

    For each rule whose keywords match, the rule's price pattern is applied
    straight away. The first successful extraction wins. A detected vendor
    whose price label is missing ends the dispatch with a
    VENDOR_UNPARSEABLE failure unless ``fallback_on_unparseable`` is set,
    in which case later matching rules are tried too.

    The dispatcher keeps no state between calls.
    """

    def __init__(
        self,
        rules: Sequence[VendorRule] = DEFAULT_RULES,
        currency_symbol: str = "₡",
        fallback_on_unparseable: bool = False,
    ):
        rules = tuple(rules)
        insurers = [rule.insurer for rule in rules]
        if len(insurers) != len(set(insurers)):
            raise ValueError("Each insurer may have only one vendor rule")

        self.rules = rules
        self.fallback_on_unparseable = fallback_on_unparseable
        self.detector = VendorDetector(rules)
        self.extractor = PriceExtractor(rules, currency_symbol=currency_symbol)

    def classify(self, text: str) -> Insurer | None:
        """Detect the issuing insurer without extracting a price."""
        return self.detector.detect(text)

    def extract(self, text: str) -> QuoteExtractionResult:
        """
        Produce the extraction result for one document.

        Args:
            text: Full document text.

        Returns:
            A high-confidence result with the price, or a low-confidence
            result whose reason tells an unknown insurer apart from a
            known one whose price could not be read.
        """
        detected: Insurer | None = None

        for rule in self.detector.matching_rules(text):
            record = self.extractor.extract_with_rule(rule, text)
            if record is not None:
                logger.info(
                    "Extracted %s quote: %s", record.insurer.value, record.formatted_price
                )
                return _to_result(record)

            logger.info("%s detected but no price could be extracted", rule.insurer.value)
            if detected is None:
                detected = rule.insurer
            if not self.fallback_on_unparseable:
                break

        if detected is not None:
            return QuoteExtractionResult.failure(
                FailureReason.VENDOR_UNPARSEABLE, insurer=detected
            )

        logger.info("Insurer not recognized")
        return QuoteExtractionResult.failure(FailureReason.NO_VENDOR_MATCHED)


def _to_result(record: PriceRecord) -> QuoteExtractionResult:
    return QuoteExtractionResult(
        insurer=record.insurer,
        price=record.price,
        formatted_price=record.formatted_price,
        plans=dict(record.plans) if record.plans else None,
        confidence=Confidence.HIGH,
    )
