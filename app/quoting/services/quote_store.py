"""
Persistence helpers for tenants and quotations.

Routers call these with a request-scoped SQLAlchemy session.
"""

import logging
from datetime import date

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models import QuoteExtractionResult
from ..models_db import VEHICLE_PLACEHOLDER, Quotation, Tenant

logger = logging.getLogger(__name__)


class TenantAlreadyExistsError(Exception):
    """Raised when a tenant domain is already registered."""

    pass


def normalize_domain(domain: str) -> str:
    """Canonical form of a tenant domain as stored in the database."""
    return domain.strip().lower()


def get_tenant_by_domain(db: Session, domain: str) -> Tenant | None:
    """Look up a tenant by its domain-like identifier."""
    return db.query(Tenant).filter(Tenant.domain == normalize_domain(domain)).first()


def get_tenant_id(db: Session, domain: str) -> int | None:
    """Return the tenant ID for a domain, or None if it is not registered."""
    tenant = get_tenant_by_domain(db, domain)
    return tenant.id if tenant else None


def create_tenant(db: Session, name: str, domain: str, email: str) -> Tenant:
    """
    Insert a tenant and return it with its generated ID.

    Raises:
        TenantAlreadyExistsError: If the domain is already registered.
    """
    tenant = Tenant(name=name, domain=normalize_domain(domain), email=email)
    db.add(tenant)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("Tenant %s already exists", tenant.domain)
        raise TenantAlreadyExistsError(f"Tenant '{tenant.domain}' already exists") from e
    db.refresh(tenant)
    logger.info("Created tenant %s (id=%d)", tenant.domain, tenant.id)
    return tenant


def save_quotation(
    db: Session,
    tenant_id: int,
    result: QuoteExtractionResult,
    vehicle: str = VEHICLE_PLACEHOLDER,
) -> int:
    """
    Store a successful extraction result for a tenant.

    Args:
        db: Database session.
        tenant_id: Owning tenant.
        result: High-confidence extraction result.
        vehicle: Vehicle description.

    Returns:
        The generated quotation ID.

    Raises:
        ValueError: If the result carries no price.
    """
    if not result.succeeded:
        raise ValueError("Only successful extractions can be stored")

    quotation = Quotation(
        tenant_id=tenant_id,
        insurer=result.insurer.value,
        price=result.price,
        vehicle=vehicle,
        quote_date=date.today(),
        full_data=result.model_dump(mode="json", exclude_none=True),
    )
    db.add(quotation)
    db.commit()
    db.refresh(quotation)
    logger.info(
        "Stored %s quotation %d for tenant %d", quotation.insurer, quotation.id, tenant_id
    )
    return quotation.id


def list_quotations(db: Session, domain: str) -> list[tuple[Quotation, str]]:
    """Return a tenant's quotations with the tenant name, newest first."""
    return (
        db.query(Quotation, Tenant.name)
        .join(Tenant, Quotation.tenant_id == Tenant.id)
        .filter(Tenant.domain == normalize_domain(domain))
        .order_by(Quotation.quote_date.desc(), Quotation.id.desc())
        .all()
    )


def compare_prices(db: Session, domain: str) -> list[tuple[str, float, int]]:
    """
    Average price and quotation count per insurer for a tenant.

    Returns:
        (insurer, average_price, total_quotations) rows, cheapest first.
    """
    average_price = func.avg(Quotation.price).label("average_price")
    rows = (
        db.query(
            Quotation.insurer,
            average_price,
            func.count(Quotation.id).label("total_quotations"),
        )
        .join(Tenant, Quotation.tenant_id == Tenant.id)
        .filter(Tenant.domain == normalize_domain(domain))
        .group_by(Quotation.insurer)
        .order_by(average_price.asc())
        .all()
    )
    return [(insurer, float(avg), int(count)) for insurer, avg, count in rows]
