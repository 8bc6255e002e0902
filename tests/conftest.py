"""
Pytest configuration and shared fixtures.

Registers the integration marker and builds document payloads shaped like
the extraction backend's responses.
"""

import pytest
from src.models.document import Document


def pytest_addoption(parser):
    """Add custom command-line options"""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration tests against a running extraction backend"
    )


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test requiring a running extraction backend"
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --run-integration is specified"""
    if config.getoption("--run-integration"):
        return

    skip_integration = pytest.mark.skip(reason="need --run-integration option to run")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


def field(value, confidence=0.9, method="regex"):
    return {"value": value, "confidence": confidence, "method": method}


def make_payload(doc_id, filename=None, line_items=None, raw_text=None, **fields):
    """Backend-shaped payload; keyword arguments become extracted fields."""
    payload = {
        "id": doc_id,
        "filename": filename or f"{doc_id}.pdf",
        "line_items": line_items or [],
    }
    if raw_text is not None:
        payload["raw_text"] = raw_text
    for name, value in fields.items():
        payload[name] = value if isinstance(value, dict) else field(value)
    return payload


def make_document(doc_id, **kwargs) -> Document:
    return Document.from_payload(make_payload(doc_id, **kwargs))


@pytest.fixture
def sample_payloads():
    """Three invoices as the backend lists them"""
    return [
        make_payload(
            "doc-1",
            invoice_number=field("INV-001", 0.95),
            invoice_date=field("2024-03-01", 0.9),
            issuer_name=field("Acme Corp", 0.9),
            recipient_name=field("Initech", 0.8),
            total_amount=field("1200.50", 0.85),
            currency=field("USD", 0.99),
            line_items=[
                {"description": "Widgets", "quantity": "10", "unit_price": "100.05", "amount": "1000.50"},
                {"description": "Shipping", "quantity": "1", "unit_price": "n/a", "amount": "200"},
            ],
            raw_text="INVOICE INV-001 Acme Corp",
        ),
        make_payload(
            "doc-2",
            invoice_number=field("INV-002", 0.6),
            invoice_date=field("2024-01-15", 0.7),
            issuer_name=field("Acme Inc", 0.5),
            total_amount=field("300.00", 0.6),
        ),
        make_payload(
            "doc-3",
            invoice_number=field("GX-77", 0.4),
            issuer_name=field("Globex Ltd", 0.3),
            total_amount=field("abc", 0.2),
        ),
    ]


@pytest.fixture
def sample_documents(sample_payloads):
    return [Document.from_payload(p) for p in sample_payloads]
