"""
Tests for the dashboard summary and the row/detail document views.
"""

import pytest
from conftest import field, make_document
from src.models.document import Document
from src.services.confidence import ConfidenceBucket
from src.services.dashboard import build_summary, recent_documents, total_amount
from src.services.document_views import document_detail, field_label, search_row


class TestDashboardSummary:
    def test_summary_of_sample_documents(self, sample_documents):
        summary = build_summary(sample_documents)
        assert summary.total_documents == 3
        assert summary.success_rate == "33.3"
        assert summary.total_amount == pytest.approx(1500.5)
        assert summary.total_amount_display == "$1,500.50"
        assert summary.confidence_overview.model_dump() == {"high": 1, "medium": 1, "low": 1}
        assert [(g.key, g.count) for g in summary.sender_distribution] == [("Acme", 2), ("Globex", 1)]
        assert [r.id for r in summary.recent_documents] == ["doc-1", "doc-2", "doc-3"]

    def test_empty_summary(self):
        summary = build_summary([])
        assert summary.total_documents == 0
        assert summary.success_rate == "0.0"
        assert summary.total_amount == 0.0
        assert summary.sender_distribution == []
        assert summary.recent_documents == []
        assert summary.confidence_overview.model_dump() == {"high": 0, "medium": 0, "low": 0}

    def test_total_amount_skips_unparseable_and_missing(self):
        docs = [
            make_document("1", total_amount=field("10.25")),
            make_document("2", total_amount=field("oops")),
            make_document("3"),
            make_document("4", amount=field("5")),
        ]
        assert total_amount(docs) == pytest.approx(15.25)

    def test_recent_documents_limit_and_placeholders(self):
        docs = [Document.from_payload({"id": str(i)}) for i in range(8)]
        rows = recent_documents(docs, limit=5)
        assert [r.id for r in rows] == ["0", "1", "2", "3", "4"]
        assert rows[0].filename == "Unknown"
        assert rows[0].sender == "Unknown"
        assert rows[0].amount_display == "N/A"
        assert rows[0].confidence.bucket == ConfidenceBucket.LOW


class TestSearchRow:
    def test_row_for_document(self, sample_documents):
        row = search_row(sample_documents[0])
        assert row.invoice_number == "INV-001"
        assert row.invoice_date_display == "Mar 1, 2024"
        assert row.sender == "Acme Corp"
        assert row.total_amount == pytest.approx(1200.5)
        assert row.total_amount_display == "$1,200.50"
        assert row.badge.text == "95%"
        assert row.badge.bucket == ConfidenceBucket.HIGH

    def test_row_without_invoice_number(self):
        row = search_row(make_document("x", total_amount=field("abc")))
        assert row.badge.score == 0.0
        assert row.badge.text == "0%"
        assert row.badge.bucket == ConfidenceBucket.LOW
        assert row.total_amount is None
        assert row.total_amount_display == "N/A"

    def test_row_badge_uses_field_badge_thresholds(self):
        row = search_row(make_document("x", invoice_number=field("INV", 0.75)))
        assert row.badge.bucket == ConfidenceBucket.MEDIUM


class TestDocumentDetail:
    def test_detail_fields_and_badges(self, sample_documents):
        detail = document_detail(sample_documents[0])
        assert detail.title == "Invoice: INV-001"
        assert detail.currency == "USD"
        recipient = next(f for f in detail.fields if f.name == "recipient_name")
        assert recipient.label == "Recipient Name"
        assert recipient.confidence_text == "80%"
        assert recipient.confidence_class == "confidence-high"
        assert recipient.needs_review is False
        assert recipient.bucket == ConfidenceBucket.HIGH
        assert detail.overall_confidence.bucket == ConfidenceBucket.HIGH

    def test_detail_flags_low_confidence_fields(self, sample_documents):
        detail = document_detail(sample_documents[1])
        issuer = next(f for f in detail.fields if f.name == "issuer_name")
        assert issuer.needs_review is True
        assert issuer.confidence_class == "confidence-medium"
        assert issuer.bucket == ConfidenceBucket.MEDIUM

    def test_detail_line_items_parse_defensively(self, sample_documents):
        detail = document_detail(sample_documents[0])
        widgets, shipping = detail.line_items
        assert widgets.quantity == 10
        assert widgets.unit_price == pytest.approx(100.05)
        assert widgets.amount_display == "$1,000.50"
        assert shipping.unit_price is None
        assert shipping.unit_price_display is None
        assert shipping.amount == 200

    def test_detail_totals_and_raw_text(self, sample_documents):
        detail = document_detail(sample_documents[0])
        assert detail.total == pytest.approx(1200.5)
        assert detail.subtotal is None
        assert detail.tax is None
        assert detail.raw_text == "INVOICE INV-001 Acme Corp"

    def test_detail_includes_unknown_fields(self):
        doc = make_document("x", iban=field("NL00BANK", 0.6, "llm"))
        detail = document_detail(doc)
        assert [(f.name, f.label, f.method) for f in detail.fields] == [("iban", "Iban", "llm")]
        assert detail.title == "Invoice: Unknown"

    def test_detail_currency_falls_back_to_default(self):
        detail = document_detail(make_document("x"), default_currency="EUR")
        assert detail.currency == "EUR"

    @pytest.mark.parametrize("name,label", [
        ("payment_terms", "Payment Terms"),
        ("invoice_number", "Invoice Number"),
        ("vatID", "VatID"),
    ])
    def test_field_label(self, name, label):
        assert field_label(name) == label
