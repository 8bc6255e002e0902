"""
Dashboard summary: headline metrics, confidence overview, sender
distribution and the most recent documents.

Everything is derived from one already-fetched snapshot of documents.
"""

from collections.abc import Sequence
from pydantic import BaseModel
from ..models.document import Document, WellKnownField
from .confidence import DASHBOARD_FIELDS, THREE_LEVEL, DerivedConfidence, aggregate, bucket_counts, success_rate
from .formatters import format_currency, parse_amount
from .grouping import GroupCount, sender_key, summarize


class ConfidenceOverview(BaseModel):
    high: int = 0
    medium: int = 0
    low: int = 0


class RecentDocument(BaseModel):
    id: str
    filename: str
    sender: str
    recipient: str
    amount: float | None = None
    amount_display: str
    confidence: DerivedConfidence


class DashboardSummary(BaseModel):
    total_documents: int
    success_rate: str  # one decimal place, e.g. "66.7"
    total_amount: float
    total_amount_display: str
    confidence_overview: ConfidenceOverview
    sender_distribution: list[GroupCount]
    recent_documents: list[RecentDocument]


def total_amount(documents: Sequence[Document]) -> float:
    """Sum of the parseable total amounts; unparseable or missing ones are skipped."""
    total = 0.0
    for document in documents:
        amount = parse_amount(document.field_value(WellKnownField.TOTAL_AMOUNT.value))
        if amount is not None:
            total += amount
    return total


def recent_documents(documents: Sequence[Document], limit: int = 5, currency: str = "USD") -> list[RecentDocument]:
    """First `limit` documents in backend order, each with its dashboard confidence."""
    rows = []
    for document in documents[:max(limit, 0)]:
        amount = parse_amount(document.field_value(WellKnownField.TOTAL_AMOUNT.value))
        rows.append(RecentDocument(
            id=document.id,
            filename=document.filename or "Unknown",
            sender=document.field_value(WellKnownField.ISSUER_NAME.value) or "Unknown",
            recipient=document.field_value(WellKnownField.RECIPIENT_NAME.value) or "Unknown",
            amount=amount,
            amount_display=format_currency(amount, currency) if amount is not None else "N/A",
            confidence=aggregate(document, DASHBOARD_FIELDS, THREE_LEVEL),
        ))
    return rows


def build_summary(
    documents: Sequence[Document],
    top_n: int = 5,
    recent_limit: int = 5,
    currency: str = "USD",
) -> DashboardSummary:
    amount = total_amount(documents)
    return DashboardSummary(
        total_documents=len(documents),
        success_rate=f"{success_rate(documents, DASHBOARD_FIELDS, THREE_LEVEL):.1f}",
        total_amount=amount,
        total_amount_display=format_currency(amount, currency),
        confidence_overview=ConfidenceOverview(**bucket_counts(documents, DASHBOARD_FIELDS, THREE_LEVEL)),
        sender_distribution=summarize(documents, sender_key, top_n),
        recent_documents=recent_documents(documents, recent_limit, currency),
    )
