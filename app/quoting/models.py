"""
Pydantic models for the quote extraction pipeline and the HTTP API.

Defines the extraction result with its success/failure invariant, plus the
request and response bodies for tenants, quotations and price comparison.
"""

import re
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

UNRECOGNIZED_INSURER_ERROR = "insurer not recognized"

_DOMAIN_PATTERN = re.compile(r"^[a-z0-9](?:[a-z0-9.-]*[a-z0-9])?$")


class Insurer(str, Enum):
    """Insurers with a registered extraction rule."""

    INS = "INS"
    ASSA = "ASSA"
    MNK = "MNK"
    QUALITAS = "QUALITAS"


class Confidence(str, Enum):
    """Coarse extraction outcome."""

    HIGH = "high"
    LOW = "low"


class FailureReason(str, Enum):
    """Why an extraction produced no usable price."""

    NO_VENDOR_MATCHED = "no_vendor_matched"
    VENDOR_UNPARSEABLE = "vendor_unparseable"


class QuoteExtractionResult(BaseModel):
    """
    Outcome of running the vendor rules over one document's text.

    Either a success (price, formatted_price, confidence=high) or a
    failure (error, reason, confidence=low), never both.

    Attributes:
        insurer: Issuing insurer. Also set on VENDOR_UNPARSEABLE failures.
        price: Canonical amount in local currency.
        formatted_price: Currency-prefixed display string for price.
        plans: Tier name to price, only for multi-tier quotes.
        confidence: HIGH on success, LOW on failure.
        error: Generic failure message.
        reason: Tagged failure kind.
    """

    insurer: Insurer | None = Field(
        default=None,
        description="Insurer that issued the quote",
    )
    price: float | None = Field(
        default=None,
        ge=0.0,
        description="Canonical price (minimum tier for multi-tier quotes)",
    )
    formatted_price: str | None = Field(
        default=None,
        description="Price prefixed with the currency symbol",
        examples=["₡150,000"],
    )
    plans: dict[str, float] | None = Field(
        default=None,
        description="Per-tier prices in the order they appear in the document",
    )
    confidence: Confidence = Field(
        ...,
        description="high when a price was extracted, low otherwise",
    )
    error: str | None = Field(
        default=None,
        description="Failure message (low confidence only)",
    )
    reason: FailureReason | None = Field(
        default=None,
        description="Failure kind (low confidence only)",
    )

    @model_validator(mode="after")
    def check_outcome(self) -> "QuoteExtractionResult":
        """Ensure the result is exactly one of success or failure."""
        if self.confidence == Confidence.HIGH:
            if self.insurer is None or self.price is None or self.formatted_price is None:
                raise ValueError("A high-confidence result needs insurer, price and formatted_price")
            if self.error is not None or self.reason is not None:
                raise ValueError("A high-confidence result cannot carry an error")
            if self.plans and self.price != min(self.plans.values()):
                raise ValueError("price must equal the cheapest plan")
        else:
            if self.error is None or self.reason is None:
                raise ValueError("A low-confidence result needs error and reason")
            if self.price is not None or self.formatted_price is not None or self.plans:
                raise ValueError("A low-confidence result cannot carry a price")
        return self

    @property
    def succeeded(self) -> bool:
        return self.confidence == Confidence.HIGH

    @classmethod
    def failure(
        cls, reason: FailureReason, insurer: Insurer | None = None
    ) -> "QuoteExtractionResult":
        """Build the generic low-confidence result."""
        return cls(
            insurer=insurer,
            confidence=Confidence.LOW,
            error=UNRECOGNIZED_INSURER_ERROR,
            reason=reason,
        )


class ProcessQuoteResponse(QuoteExtractionResult):
    """Successful processing response: the result plus request metadata."""

    id: int = Field(..., description="Stored quotation ID")
    tenant: str = Field(..., description="Tenant domain the quote was filed under")
    timestamp: str = Field(..., description="Processing timestamp (ISO format)")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy")
    version: str = Field(default="1.0.0")
    timestamp: str | None = Field(default=None, description="Server time (ISO format)")


# =============================================================================
# Tenant Models
# =============================================================================


class CreateTenantRequest(BaseModel):
    """Request model for registering a tenant."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Organization name",
    )
    domain: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Domain-like identifier used in API paths",
        examples=["acme.cr"],
    )
    email: str = Field(
        ...,
        min_length=3,
        max_length=100,
        description="Contact email",
    )

    @field_validator("domain")
    @classmethod
    def validate_domain_format(cls, v: str) -> str:
        """Normalize the domain to lowercase and check its characters."""
        v = v.strip().lower()
        if not _DOMAIN_PATTERN.match(v):
            raise ValueError(
                "Domain must contain only letters, digits, dots or hyphens"
            )
        return v

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        v = v.strip()
        if "@" not in v:
            raise ValueError("Invalid email address")
        return v


class TenantResponse(BaseModel):
    """Response model for a tenant."""

    id: int = Field(..., description="Tenant ID")
    name: str = Field(..., description="Organization name")
    domain: str = Field(..., description="Domain-like identifier")
    email: str = Field(..., description="Contact email")
    active: bool = Field(default=True, description="Whether tenant is active")
    plan: str = Field(default="basico", description="Subscription plan")
    created_at: str = Field(..., description="Creation timestamp (ISO format)")


# =============================================================================
# Quotation Models
# =============================================================================


class QuotationResponse(BaseModel):
    """A stored quotation."""

    id: int = Field(..., description="Quotation ID")
    tenant_id: int = Field(..., description="Owning tenant ID")
    tenant_name: str = Field(..., description="Owning tenant name")
    insurer: str = Field(..., description="Insurer that issued the quote")
    price: float = Field(..., ge=0.0, description="Canonical price")
    vehicle: str | None = Field(default=None, description="Insured vehicle")
    quote_date: str = Field(..., description="Quote date (ISO format)")
    full_data: dict | None = Field(default=None, description="Full extraction result")
    created_at: str = Field(..., description="Creation timestamp (ISO format)")


class QuotationListResponse(BaseModel):
    """Response model for listing a tenant's quotations."""

    quotations: list[QuotationResponse] = Field(
        default_factory=list,
        description="Quotations, newest first",
    )
    total: int = Field(..., ge=0, description="Number of quotations")


class InsurerComparison(BaseModel):
    """Aggregated prices for one insurer."""

    insurer: str = Field(..., description="Insurer identifier")
    average_price: float = Field(..., ge=0.0, description="Average quoted price")
    total_quotations: int = Field(..., ge=0, description="Number of quotations")


class ComparisonResponse(BaseModel):
    """Per-insurer price comparison for a tenant, cheapest first."""

    tenant: str = Field(..., description="Tenant domain")
    insurers: list[InsurerComparison] = Field(
        default_factory=list,
        description="Insurers ordered by average price ascending",
    )
