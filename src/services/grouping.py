"""
Group documents by a derived key for the dashboard's distribution chart.
"""

from collections.abc import Callable, Sequence
from pydantic import BaseModel, ConfigDict
from ..models.document import Document, WellKnownField

OTHERS_KEY = "Others"
UNKNOWN_SENDER = "Unknown"


class GroupCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    count: int


def sender_key(document: Document) -> str:
    """
    First word of the sender organization, or "Unknown".

    Crude normalization: "Acme Corp" and "Acme Inc" land in the same group.
    """
    name = document.field_value(WellKnownField.ISSUER_NAME.value) or UNKNOWN_SENDER
    tokens = name.split()
    return tokens[0] if tokens else UNKNOWN_SENDER


def summarize(
    documents: Sequence[Document],
    key_fn: Callable[[Document], str] = sender_key,
    top_n: int = 5,
) -> list[GroupCount]:
    """
    Count documents per key and keep the `top_n` largest groups.

    Groups are ordered by count, largest first; equal counts keep the order
    in which their key was first seen. When the kept groups do not cover
    every document, an "Others" entry with the remainder is appended last.
    """
    if not documents:
        return []

    counts: dict[str, int] = {}
    for document in documents:
        key = key_fn(document)
        counts[key] = counts.get(key, 0) + 1

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    kept = [GroupCount(key=key, count=count) for key, count in ranked[:max(top_n, 0)]]

    kept_total = sum(group.count for group in kept)
    if kept_total < len(documents):
        kept.append(GroupCount(key=OTHERS_KEY, count=len(documents) - kept_total))
    return kept
