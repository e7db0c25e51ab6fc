"""Pytest configuration and fixtures."""

import os
from typing import Generator

# Configure an in-memory database before the application is imported
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from app.quoting.database import Base, SessionLocal, engine
from app.quoting.main import app
from app.quoting.services.pdf_service import PDFReadError, get_pdf_service

INS_TEXT = (
    "Instituto Nacional de Seguros\n"
    "Cotización Seguro Voluntario de Automóviles\n"
    "Costo Anual (IVA) ₡ 150,000.00\n"
)

ASSA_TEXT = (
    "ASSA Compañía de Seguros\n"
    "Plan Platino Dorado Económico\n"
    "Precio total ₡100,000 ₡90,000 ₡80,000\n"
)

MNK_TEXT = "MNK SEGUROS\nPrima Anual ₡ 210,500.50\n"

QUALITAS_TEXT = "Quálitas Compañía de Seguros\nIMPORTE TOTAL ₡ 98,765.43\n"


class FakePDFService:
    """Stands in for the PDF reader and returns canned text."""

    def __init__(self, text: str = "", error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls = 0

    def read_all_page_text(self, file_bytes: bytes) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture(autouse=True)
def reset_database() -> Generator[None, None, None]:
    """Recreate all tables around each test."""
    from app.quoting import models_db  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """A session on the test database."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def fake_pdf(client: TestClient):
    """
    Replace the PDF reader with a FakePDFService.

    Set ``fake_pdf.text`` or ``fake_pdf.error`` inside the test.
    """
    service = FakePDFService()
    app.dependency_overrides[get_pdf_service] = lambda: service
    return service


@pytest.fixture
def unreadable_pdf_error() -> PDFReadError:
    return PDFReadError("Document unreadable: corrupted xref")


@pytest.fixture
def tenant(client: TestClient) -> dict:
    """Register a tenant through the API."""
    response = client.post(
        "/api/tenants",
        json={"name": "Acme Seguros Corredora", "domain": "acme", "email": "ops@acme.cr"},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """Bytes with a PDF header; content is served by the fake reader."""
    return b"%PDF-1.4\n% quote\n%%EOF"


@pytest.fixture
def invalid_file_bytes() -> bytes:
    """Create invalid (non-PDF) file bytes for testing."""
    return b"This is not a PDF file"


@pytest.fixture
def quote_texts() -> dict[str, str]:
    """Document text for each registered insurer."""
    return {
        "INS": INS_TEXT,
        "ASSA": ASSA_TEXT,
        "MNK": MNK_TEXT,
        "QUALITAS": QUALITAS_TEXT,
    }


def build_pdf(pages: list[list[str]]) -> bytes:
    """
    Build a small text PDF, one list of lines per page.

    Text is set in Helvetica with WinAnsiEncoding, so only cp1252
    characters (including "¢") can be used.
    """
    page_count = len(pages)
    font_ref = 3
    page_refs = [4 + 2 * i for i in range(page_count)]

    objects: list[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        (
            "<< /Type /Pages /Kids [%s] /Count %d >>"
            % (" ".join(f"{ref} 0 R" for ref in page_refs), page_count)
        ).encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica /Encoding /WinAnsiEncoding >>",
    ]

    for page_ref, lines in zip(page_refs, pages):
        ops = ["BT", "/F1 12 Tf", "72 720 Td"]
        for line in lines:
            escaped = line.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
            ops.append(f"({escaped}) Tj")
            ops.append("0 -16 Td")
        ops.append("ET")
        stream = "\n".join(ops).encode("cp1252")

        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                "/Resources << /Font << /F1 %d 0 R >> >> /Contents %d 0 R >>"
                % (font_ref, page_ref + 1)
            ).encode()
        )
        objects.append(
            b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_position = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_position
    return bytes(out)


@pytest.fixture
def ins_quote_pdf() -> bytes:
    """A two-page INS quote: insurer name on page 1, price on page 2."""
    return build_pdf(
        [
            ["Instituto Nacional de Seguros", "Seguro Voluntario de Automoviles"],
            ["Costo Anual (IVA) ¢ 150,000.00"],
        ]
    )
