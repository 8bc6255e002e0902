"""
Document records as returned by the extraction backend.

The backend sends a flat JSON object per document: `id`, `filename`,
`line_items` and `raw_text` sit next to any number of extracted fields,
each shaped as {"value", "confidence", "method"}. The set of field names
is open-ended, so fields are held in a mapping rather than as attributes.
"""

from enum import Enum
from typing import Any
from loguru import logger
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class WellKnownField(str, Enum):
    """Field names the dashboard surfaces know about. Others are still accepted."""
    ISSUER_NAME = "issuer_name"
    RECIPIENT_NAME = "recipient_name"
    TOTAL_AMOUNT = "total_amount"
    INVOICE_NUMBER = "invoice_number"
    INVOICE_DATE = "invoice_date"
    DUE_DATE = "due_date"
    SUBTOTAL = "subtotal"
    TAX_AMOUNT = "tax_amount"
    CURRENCY = "currency"
    PAYMENT_TERMS = "payment_terms"


# Older backend payloads name the organization/amount fields differently
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    WellKnownField.ISSUER_NAME.value: ("from_organization",),
    WellKnownField.RECIPIENT_NAME.value: ("to_organization",),
    WellKnownField.TOTAL_AMOUNT.value: ("amount",),
}

# Top-level payload keys that are never extracted fields
RESERVED_KEYS = frozenset({"id", "filename", "line_items", "raw_text"})


def is_field_payload(value: Any) -> bool:
    """True when a payload value carries the extracted-field shape."""
    return isinstance(value, dict) and "value" in value and "confidence" in value


class ExtractedField(BaseModel):
    """One extracted datum: value, confidence in [0, 1] and extraction method."""
    model_config = ConfigDict(frozen=True)

    value: str = ""
    confidence: float = 0.0
    method: str = ""

    @field_validator("value", "method", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str:
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)

    @field_validator("confidence", mode="before")
    @classmethod
    def _coerce_confidence(cls, v: Any) -> float:
        try:
            score = float(v)
        except (TypeError, ValueError):
            return 0.0
        if score != score:  # NaN
            return 0.0
        return max(0.0, min(1.0, score))


class LineItem(BaseModel):
    """
    A single invoice line. Numeric columns stay strings as the backend
    sends them; parse them with `parse_amount` where they are used.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    description: str = ""
    quantity: str = ""
    unit_price: str = Field("", validation_alias=AliasChoices("unit_price", "unitPrice"))
    amount: str = ""

    @field_validator("description", "quantity", "unit_price", "amount", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str:
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)


class Document(BaseModel):
    """
    A processed invoice keyed by its stable backend id.

    `fields` holds every extracted field by name; `attributes` keeps any
    other top-level payload values so they can still be sorted on.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    filename: str = ""
    fields: dict[str, ExtractedField] = Field(default_factory=dict)
    line_items: list[LineItem] = Field(default_factory=list)
    raw_text: str | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Document":
        """Partition a flat backend payload into fields and plain attributes."""
        fields: dict[str, ExtractedField] = {}
        attributes: dict[str, Any] = {}
        for key, value in payload.items():
            if key in RESERVED_KEYS:
                continue
            if is_field_payload(value):
                fields[key] = ExtractedField.model_validate(value)
            else:
                attributes[key] = value

        line_items = payload.get("line_items") or []
        if not isinstance(line_items, list):
            logger.warning("Ignoring malformed line_items", document_id=payload.get("id"))
            line_items = []

        return cls(
            id=payload.get("id"),
            filename=payload.get("filename") or "",
            fields=fields,
            line_items=[item for item in line_items if isinstance(item, dict)],
            raw_text=payload.get("raw_text"),
            attributes=attributes,
        )

    def get_field(self, name: str) -> ExtractedField | None:
        """Look up a field by name, falling back to its legacy aliases."""
        field = self.fields.get(name)
        if field is not None:
            return field
        for alias in FIELD_ALIASES.get(name, ()):
            field = self.fields.get(alias)
            if field is not None:
                return field
        return None

    def resolve_field_name(self, name: str) -> str | None:
        """Return the key actually holding `name` (or one of its aliases)."""
        if name in self.fields:
            return name
        for alias in FIELD_ALIASES.get(name, ()):
            if alias in self.fields:
                return alias
        return None

    def field_value(self, name: str) -> str | None:
        field = self.get_field(name)
        return field.value if field is not None else None

    def sort_value(self, name: str) -> Any:
        """
        Value used when ordering by `name`: the field's value for extracted
        fields, otherwise the raw top-level value under that key.
        """
        field = self.get_field(name)
        if field is not None:
            return field.value
        if name in RESERVED_KEYS:
            return getattr(self, name)
        return self.attributes.get(name)
