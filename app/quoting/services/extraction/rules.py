"""
Vendor rule table.

Each insurer has one immutable rule: the keywords that identify its
documents and the single pattern that captures its quoted amount(s).
Rules are evaluated in the order of DEFAULT_RULES.
"""

import re
from dataclasses import dataclass

from ...models import Insurer

# Currency symbol followed by a number with optional thousands separators
_AMOUNT = r"[₡¢]\s*([\d,]+\.?\d*)"


def label_pattern(label: str, tiers: int = 1) -> re.Pattern[str]:
    """Compile a pattern anchored on ``label`` followed by ``tiers`` amounts."""
    return re.compile(re.escape(label) + (r"\s*" + _AMOUNT) * tiers)


@dataclass(frozen=True)
class VendorRule:
    """
    Detection and extraction rule for one insurer.

    Attributes:
        insurer: Insurer the rule recognises.
        pattern: Label pattern; one capture group per quoted amount.
        any_of: Keywords of which at least one must appear.
        all_of: Keywords that must all appear.
        plan_names: Tier names, one per capture group, for multi-tier quotes.
    """

    insurer: Insurer
    pattern: re.Pattern[str]
    any_of: tuple[str, ...] = ()
    all_of: tuple[str, ...] = ()
    plan_names: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.any_of and not self.all_of:
            raise ValueError(f"Rule for {self.insurer.value} has no keywords")
        expected_groups = len(self.plan_names) or 1
        if self.pattern.groups != expected_groups:
            raise ValueError(
                f"Rule for {self.insurer.value} captures {self.pattern.groups} "
                f"amount(s), expected {expected_groups}"
            )

    @property
    def is_multi_tier(self) -> bool:
        return bool(self.plan_names)

    def matches(self, text: str) -> bool:
        """Return True if the document text carries this vendor's keywords."""
        if self.all_of and not all(keyword in text for keyword in self.all_of):
            return False
        if self.any_of and not any(keyword in text for keyword in self.any_of):
            return False
        return True


DEFAULT_RULES: tuple[VendorRule, ...] = (
    VendorRule(
        insurer=Insurer.INS,
        any_of=("Instituto Nacional de Seguros", "grupoins.com"),
        pattern=label_pattern("Costo Anual (IVA)"),
    ),
    VendorRule(
        insurer=Insurer.ASSA,
        all_of=("ASSA", "Seguros"),
        pattern=label_pattern("Precio total", tiers=3),
        plan_names=("platino", "dorado", "economico"),
    ),
    VendorRule(
        insurer=Insurer.MNK,
        all_of=("MNK", "SEGUROS"),
        pattern=label_pattern("Anual"),
    ),
    VendorRule(
        insurer=Insurer.QUALITAS,
        any_of=("Quálitas", "QUALITAS"),
        pattern=label_pattern("IMPORTE TOTAL"),
    ),
)
