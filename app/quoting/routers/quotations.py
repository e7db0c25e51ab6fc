"""
Router for quote processing and comparison endpoints.

Handles:
- Processing an uploaded quote PDF for a tenant
- Listing a tenant's stored quotations
- Comparing average prices per insurer
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..config import Settings, get_settings
from ..database import get_db
from ..models import (
    ComparisonResponse,
    InsurerComparison,
    ProcessQuoteResponse,
    QuotationListResponse,
    QuotationResponse,
)
from ..services import quote_store
from ..services.extraction import ExtractionDispatcher, get_dispatcher
from ..services.pdf_service import PDFReadError, PDFService, get_pdf_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["quotations"])


@router.post(
    "/process-pdf/{tenant}",
    response_model=ProcessQuoteResponse,
    response_model_exclude_none=True,
)
async def process_pdf(
    tenant: str,
    pdf: UploadFile | None = File(default=None, description="Quote PDF to process"),
    db: Session = Depends(get_db),
    pdf_service: PDFService = Depends(get_pdf_service),
    dispatcher: ExtractionDispatcher = Depends(get_dispatcher),
    settings: Settings = Depends(get_settings),
):
    """
    Extract the quoted price from a PDF and store it for the tenant.

    Returns 400 with the low-confidence result when the insurer is not
    recognized or its price cannot be read, and 404 for unknown tenants.
    """
    if pdf is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No PDF file sent",
        )

    if not pdf.filename or not pdf.filename.lower().endswith(".pdf"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only PDF files are accepted",
        )

    tenant = quote_store.normalize_domain(tenant)

    try:
        # Read one byte past the limit so oversized uploads are never fully buffered
        file_bytes = await pdf.read(settings.max_upload_bytes + 1)

        if not file_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Empty file provided",
            )

        if len(file_bytes) > settings.max_upload_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File exceeds {settings.max_upload_bytes} bytes",
            )

        logger.info("Processing PDF for %s: %s (%d bytes)", tenant, pdf.filename, len(file_bytes))

        text = pdf_service.read_all_page_text(file_bytes)
        result = dispatcher.extract(text)

        if not result.succeeded:
            logger.info("Extraction failed for %s: %s", pdf.filename, result.reason.value)
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=result.model_dump(mode="json", exclude_none=True),
            )

        tenant_id = quote_store.get_tenant_id(db, tenant)
        if tenant_id is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Tenant {tenant} not found",
            )

        quotation_id = quote_store.save_quotation(db, tenant_id, result)

        return ProcessQuoteResponse(
            **result.model_dump(),
            id=quotation_id,
            tenant=tenant,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    except (HTTPException, PDFReadError):
        raise
    except Exception as e:
        logger.exception("Unexpected error processing PDF")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal error: {e}",
        )
    finally:
        await pdf.close()


@router.get("/quotations/{tenant}", response_model=QuotationListResponse)
async def list_quotations(
    tenant: str,
    db: Session = Depends(get_db),
) -> QuotationListResponse:
    """
    Get a tenant's quotations, newest first.

    Args:
        tenant: Tenant domain.
        db: Database session.
    """
    rows = quote_store.list_quotations(db, tenant)

    quotations = [
        QuotationResponse(
            id=quotation.id,
            tenant_id=quotation.tenant_id,
            tenant_name=tenant_name,
            insurer=quotation.insurer,
            price=float(quotation.price),
            vehicle=quotation.vehicle,
            quote_date=quotation.quote_date.isoformat(),
            full_data=quotation.full_data,
            created_at=quotation.created_at.isoformat(),
        )
        for quotation, tenant_name in rows
    ]

    return QuotationListResponse(quotations=quotations, total=len(quotations))


@router.get("/comparison/{tenant}", response_model=ComparisonResponse)
async def compare_prices(
    tenant: str,
    db: Session = Depends(get_db),
) -> ComparisonResponse:
    """Average price per insurer for a tenant, cheapest first."""
    tenant = quote_store.normalize_domain(tenant)
    rows = quote_store.compare_prices(db, tenant)

    return ComparisonResponse(
        tenant=tenant,
        insurers=[
            InsurerComparison(
                insurer=insurer,
                average_price=round(average_price, 2),
                total_quotations=total,
            )
            for insurer, average_price, total in rows
        ],
    )
