"""
Row and detail views of single documents for the search table and the
document page.
"""

import re
from pydantic import BaseModel
from ..models.document import Document, LineItem, WellKnownField
from .confidence import (
    DASHBOARD_FIELDS,
    FIELD_BADGE,
    INLINE_REVIEW,
    ROW_BADGE_FIELDS,
    THREE_LEVEL,
    ConfidenceBucket,
    DerivedConfidence,
    aggregate,
    confidence_class,
    confidence_text,
)
from .formatters import format_currency, format_date, parse_amount


class ConfidenceBadge(BaseModel):
    score: float
    bucket: ConfidenceBucket
    text: str


class SearchResultRow(BaseModel):
    id: str
    filename: str
    invoice_number: str | None = None
    invoice_date: str | None = None
    invoice_date_display: str | None = None
    sender: str | None = None
    total_amount: float | None = None
    total_amount_display: str
    badge: ConfidenceBadge


class FieldView(BaseModel):
    name: str
    label: str
    value: str
    confidence: float
    method: str
    confidence_text: str
    confidence_class: str
    needs_review: bool
    bucket: ConfidenceBucket


class LineItemView(BaseModel):
    description: str
    quantity: float | None = None
    unit_price: float | None = None
    amount: float | None = None
    unit_price_display: str | None = None
    amount_display: str | None = None


class DocumentDetail(BaseModel):
    id: str
    filename: str
    title: str
    overall_confidence: DerivedConfidence
    fields: list[FieldView]
    line_items: list[LineItemView]
    subtotal: float | None = None
    tax: float | None = None
    total: float | None = None
    currency: str
    raw_text: str | None = None


def field_label(name: str) -> str:
    """ "payment_terms" -> "Payment Terms" """
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), name.replace("_", " "))


def _display_amount(value: float | None, currency: str) -> str | None:
    return format_currency(value, currency) if value is not None else None


def search_row(document: Document, currency: str = "USD") -> SearchResultRow:
    total = parse_amount(document.field_value(WellKnownField.TOTAL_AMOUNT.value))
    invoice_date = document.field_value(WellKnownField.INVOICE_DATE.value)
    badge = aggregate(document, ROW_BADGE_FIELDS, FIELD_BADGE)
    return SearchResultRow(
        id=document.id,
        filename=document.filename,
        invoice_number=document.field_value(WellKnownField.INVOICE_NUMBER.value),
        invoice_date=invoice_date,
        invoice_date_display=format_date(invoice_date) if invoice_date else None,
        sender=document.field_value(WellKnownField.ISSUER_NAME.value),
        total_amount=total,
        total_amount_display=_display_amount(total, currency) or "N/A",
        badge=ConfidenceBadge(score=badge.score, bucket=badge.bucket, text=confidence_text(badge.score)),
    )


def line_item_view(item: LineItem, currency: str = "USD") -> LineItemView:
    unit_price = parse_amount(item.unit_price)
    amount = parse_amount(item.amount)
    return LineItemView(
        description=item.description,
        quantity=parse_amount(item.quantity),
        unit_price=unit_price,
        amount=amount,
        unit_price_display=_display_amount(unit_price, currency),
        amount_display=_display_amount(amount, currency),
    )


def document_detail(document: Document, default_currency: str = "USD") -> DocumentDetail:
    currency = document.field_value(WellKnownField.CURRENCY.value) or default_currency

    fields = [
        FieldView(
            name=name,
            label=field_label(name),
            value=field.value,
            confidence=field.confidence,
            method=field.method,
            confidence_text=confidence_text(field.confidence),
            confidence_class=confidence_class(field.confidence),
            needs_review=INLINE_REVIEW.needs_review(field.confidence),
            bucket=THREE_LEVEL.classify(field.confidence),
        )
        for name, field in document.fields.items()
    ]

    return DocumentDetail(
        id=document.id,
        filename=document.filename,
        title=f"Invoice: {document.field_value(WellKnownField.INVOICE_NUMBER.value) or 'Unknown'}",
        overall_confidence=aggregate(document, DASHBOARD_FIELDS, THREE_LEVEL),
        fields=fields,
        line_items=[line_item_view(item, currency) for item in document.line_items],
        subtotal=parse_amount(document.field_value(WellKnownField.SUBTOTAL.value)),
        tax=parse_amount(document.field_value(WellKnownField.TAX_AMOUNT.value)),
        total=parse_amount(document.field_value(WellKnownField.TOTAL_AMOUNT.value)),
        currency=currency,
        raw_text=document.raw_text,
    )
