"""
SQLAlchemy database models for the quote comparison service.

Tenants own quotations; each quotation keeps the insurer, the canonical
price and the full serialized extraction result.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .database import Base

VEHICLE_PLACEHOLDER = "pending extraction"


class Tenant(Base):
    """
    A client organization on whose behalf quotes are processed.

    Identified externally by its domain-like string.
    """

    __tablename__ = "tenants"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    domain: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        index=True,
    )
    email: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )
    plan: Mapped[str] = mapped_column(
        String(20),
        default="basico",
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
    )

    # Relationships
    quotations: Mapped[list["Quotation"]] = relationship(
        "Quotation",
        back_populates="tenant",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, domain='{self.domain}')>"


class Quotation(Base):
    """
    A single processed quote document.

    Stores the detected insurer, the canonical price and the
    full extraction result as JSON.
    """

    __tablename__ = "quotations"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    tenant_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tenants.id"),
        nullable=False,
        index=True,
    )
    insurer: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )
    price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
    )
    vehicle: Mapped[str | None] = mapped_column(
        String(200),
        nullable=True,
        default=VEHICLE_PLACEHOLDER,
    )
    quote_date: Mapped[date] = mapped_column(
        Date,
        default=date.today,
        nullable=False,
    )
    full_data: Mapped[dict | None] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=True,
        comment="Serialized QuoteExtractionResult",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
    )

    # Relationships
    tenant: Mapped[Tenant] = relationship(
        "Tenant",
        back_populates="quotations",
    )

    def __repr__(self) -> str:
        return f"<Quotation(id={self.id}, insurer='{self.insurer}', price={self.price})>"
