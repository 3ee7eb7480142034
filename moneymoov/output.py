"""
Output Builder

Constructs the API response from reconstructed payment attempts.
"""

from datetime import datetime
from decimal import Decimal

from .models import PaymentRequestPaymentAttempt, ReconstructionResult


def to_money(value: Decimal | None) -> float | None:
    """Convert Decimal to float with 2 decimal places."""
    if value is None:
        return None
    return round(float(value), 2)


def to_timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


class OutputBuilder:
    """Builds the final output response."""

    def build(self, attempts: list[PaymentRequestPaymentAttempt]) -> ReconstructionResult:
        """Construct the reconstruction result from the attempts."""
        return ReconstructionResult(
            payment_request_id=self._payment_request_id(attempts),
            payment_attempts=[self._build_attempt(a) for a in attempts],
        )

    def _payment_request_id(self, attempts: list[PaymentRequestPaymentAttempt]) -> str | None:
        # Near-empty card attempts have no request ID.
        return next((a.payment_request_id for a in attempts if a.payment_request_id), None)

    def _build_attempt(self, attempt: PaymentRequestPaymentAttempt) -> dict:
        """Build a single attempt section."""
        return {
            "attempt_key": attempt.attempt_key,
            "payment_request_id": attempt.payment_request_id,
            "initiated_at": to_timestamp(attempt.initiated_at),
            "payment_method": attempt.payment_method.value,
            "currency": attempt.currency,
            "attempted_amount": to_money(attempt.attempted_amount),
            "payment_processor": attempt.processor.value if attempt.processor else None,
            "authorised_at": to_timestamp(attempt.authorised_at),
            "authorised_amount": to_money(attempt.authorised_amount),
            "settled_at": to_timestamp(attempt.settled_at),
            "settled_amount": to_money(attempt.settled_amount),
            "refunded_at": to_timestamp(attempt.refunded_at),
            "refunded_amount": to_money(attempt.refunded_amount),
            "settle_failed_at": to_timestamp(attempt.settle_failed_at),
            "institution_id": attempt.institution_id,
            "wallet_name": attempt.wallet_name,
            "status": {
                "authorised": attempt.is_authorised,
                "settled": attempt.is_settled,
                "refunded": attempt.is_refunded,
                "settle_failed": attempt.is_settle_failed,
            },
        }
