"""
Quote lifecycle model.
"""

from enum import Enum


class QuoteStatus(str, Enum):
    """Quote status as persisted by the quoting application."""
    DRAFT = "draft"
    PROCESSING = "processing"
    HITL_PENDING = "hitl_pending"
    HITL_IN_REVIEW = "hitl_in_review"
    QUOTE_READY = "quote_ready"
    AWAITING_PAYMENT = "awaiting_payment"
    PAID = "paid"
    IN_PRODUCTION = "in_production"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_pricing_editable(self) -> bool:
        """Pricing may be recomputed until a payment is confirmed."""
        return self not in FROZEN_STATUSES


FROZEN_STATUSES = frozenset({
    QuoteStatus.PAID,
    QuoteStatus.IN_PRODUCTION,
    QuoteStatus.COMPLETED,
    QuoteStatus.CANCELLED,
})
