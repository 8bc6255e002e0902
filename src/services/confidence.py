"""
Derived confidence for documents.

A document's confidence is the mean confidence of a chosen subset of its
fields. Different surfaces sample different subsets (the dashboard looks at
sender, recipient and amount; a search row looks at the invoice number) and
classify the result with different threshold policies. The policies are
kept as separate named objects so a caller always states which one it uses.
"""

from collections.abc import Iterable, Sequence
from enum import Enum
from statistics import fmean
from pydantic import BaseModel, ConfigDict
from ..models.document import Document, WellKnownField


class ConfidenceBucket(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TieredPolicy(BaseModel):
    """Three-way classification with inclusive lower bounds."""
    model_config = ConfigDict(frozen=True)

    name: str
    high: float
    medium: float

    def classify(self, score: float) -> ConfidenceBucket:
        if score >= self.high:
            return ConfidenceBucket.HIGH
        if score >= self.medium:
            return ConfidenceBucket.MEDIUM
        return ConfidenceBucket.LOW


class ReviewPolicy(BaseModel):
    """Two-way classification for inline field badges: fine, or flag for review."""
    model_config = ConfigDict(frozen=True)

    name: str
    threshold: float

    def needs_review(self, confidence: float) -> bool:
        return confidence < self.threshold

    def classify(self, confidence: float) -> ConfidenceBucket:
        return ConfidenceBucket.LOW if self.needs_review(confidence) else ConfidenceBucket.HIGH


# Document-level badges and the dashboard overview chart
THREE_LEVEL = TieredPolicy(name="three_level", high=0.7, medium=0.5)

# Per-field percentage badges and the search table's invoice-number badge
FIELD_BADGE = TieredPolicy(name="field_badge", high=0.8, medium=0.5)

# Warning icon next to an editable field value
INLINE_REVIEW = ReviewPolicy(name="inline_review", threshold=0.8)

DASHBOARD_FIELDS: tuple[str, ...] = (
    WellKnownField.ISSUER_NAME.value,
    WellKnownField.RECIPIENT_NAME.value,
    WellKnownField.TOTAL_AMOUNT.value,
)
ROW_BADGE_FIELDS: tuple[str, ...] = (WellKnownField.INVOICE_NUMBER.value,)


class DerivedConfidence(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: float
    bucket: ConfidenceBucket


def sampled_confidences(document: Document, field_names: Iterable[str]) -> list[float]:
    """
    Confidences of the present fields among `field_names`.

    Absent fields and zero confidences are skipped, not counted as zero.
    A name and its legacy alias resolving to the same field count once.
    """
    seen: set[str] = set()
    confidences = []
    for name in field_names:
        key = document.resolve_field_name(name)
        if key is None or key in seen:
            continue
        seen.add(key)
        confidence = document.fields[key].confidence
        if confidence:
            confidences.append(confidence)
    return confidences


def aggregate(
    document: Document,
    field_names: Iterable[str] = DASHBOARD_FIELDS,
    policy: TieredPolicy = THREE_LEVEL,
) -> DerivedConfidence:
    """
    Mean confidence of the sampled fields, classified by `policy`.

    Args:
        document: Document to score (never modified)
        field_names: Names of the fields to sample
        policy: Threshold policy used for the bucket

    Returns:
        DerivedConfidence; score 0.0 in the Low bucket when no field is present
    """
    confidences = sampled_confidences(document, field_names)
    if not confidences:
        return DerivedConfidence(score=0.0, bucket=ConfidenceBucket.LOW)
    score = fmean(confidences)
    return DerivedConfidence(score=score, bucket=policy.classify(score))


def bucket_counts(
    documents: Sequence[Document],
    field_names: Iterable[str] = DASHBOARD_FIELDS,
    policy: TieredPolicy = THREE_LEVEL,
) -> dict[str, int]:
    """Number of documents per bucket, always with all three keys."""
    names = tuple(field_names)
    counts = {bucket.value: 0 for bucket in ConfidenceBucket}
    for document in documents:
        counts[aggregate(document, names, policy).bucket.value] += 1
    return counts


def success_rate(
    documents: Sequence[Document],
    field_names: Iterable[str] = DASHBOARD_FIELDS,
    policy: TieredPolicy = THREE_LEVEL,
) -> float:
    """Percentage of documents in the High bucket; 0.0 for no documents."""
    if not documents:
        return 0.0
    counts = bucket_counts(documents, field_names, policy)
    return counts[ConfidenceBucket.HIGH.value] / len(documents) * 100


def confidence_text(confidence: float) -> str:
    """Rounded percentage label, e.g. 0.874 -> "87%"."""
    # rounds half up
    return f"{int(confidence * 100 + 0.5)}%"


def confidence_class(confidence: float) -> str:
    """CSS class of a field confidence badge."""
    return f"confidence-{FIELD_BADGE.classify(confidence).value}"
