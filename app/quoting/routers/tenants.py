"""
Router for tenant management endpoints.

Handles:
- Registering a tenant
- Getting tenant details
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import CreateTenantRequest, TenantResponse
from ..models_db import Tenant
from ..services import quote_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tenants", tags=["tenants"])


def _tenant_to_response(tenant: Tenant) -> TenantResponse:
    return TenantResponse(
        id=tenant.id,
        name=tenant.name,
        domain=tenant.domain,
        email=tenant.email,
        active=tenant.active,
        plan=tenant.plan,
        created_at=tenant.created_at.isoformat(),
    )


@router.post("", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
async def create_tenant(
    request: CreateTenantRequest,
    db: Session = Depends(get_db),
) -> TenantResponse:
    """
    Register a new tenant.

    Args:
        request: Tenant name, domain and contact email.
        db: Database session.

    Returns:
        The created tenant with its generated ID.
    """
    if quote_store.get_tenant_by_domain(db, request.domain):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Tenant '{request.domain}' already exists",
        )

    try:
        tenant = quote_store.create_tenant(
            db,
            name=request.name,
            domain=request.domain,
            email=request.email,
        )
    except quote_store.TenantAlreadyExistsError as e:
        # Registered concurrently between the check above and the insert
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    return _tenant_to_response(tenant)


@router.get("/{domain}", response_model=TenantResponse)
async def get_tenant(
    domain: str,
    db: Session = Depends(get_db),
) -> TenantResponse:
    """Get a tenant by its domain."""
    tenant = quote_store.get_tenant_by_domain(db, domain)
    if not tenant:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tenant {domain} not found",
        )
    return _tenant_to_response(tenant)
