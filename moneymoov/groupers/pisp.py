"""
PISP Attempt Grouper

Groups bank transfer (payment initiation) events by payment initiation ID
and derives the authorised, settled and settlement failed milestones.
"""

from ..models import (
    PaymentMethod,
    PaymentRequestEvent,
    PaymentRequestEventType,
    PaymentRequestPaymentAttempt,
    ReconstructionContext,
)
from ..statuses import is_pisp_authorised
from .grouping import first_of, group_events

PISP_EVENT_TYPES = frozenset({
    PaymentRequestEventType.PISP_INITIATE,
    PaymentRequestEventType.PISP_CALLBACK,
    PaymentRequestEventType.PISP_WEBHOOK,
    PaymentRequestEventType.PISP_SETTLE,
    PaymentRequestEventType.PISP_SETTLE_FAILURE,
})

# The initiate event should always be present. If it isn't, the next best
# event in this order anchors the attempt.
ANCHOR_EVENT_TYPES = (
    PaymentRequestEventType.PISP_INITIATE,
    PaymentRequestEventType.PISP_CALLBACK,
    PaymentRequestEventType.PISP_WEBHOOK,
    PaymentRequestEventType.PISP_SETTLE,
)

AUTHORISATION_EVENT_TYPES = frozenset({
    PaymentRequestEventType.PISP_CALLBACK,
    PaymentRequestEventType.PISP_WEBHOOK,
})


class PispAttemptGrouper:
    """Reconstructs PISP payment attempts."""

    def group(self, ctx: ReconstructionContext) -> list[PaymentRequestPaymentAttempt]:
        """
        Build one attempt per payment initiation ID with an anchor event.

        The attempted amount is the payment request amount; PISP events
        don't carry it reliably.
        """
        groups = group_events(
            ctx.events,
            PISP_EVENT_TYPES,
            key=lambda e: e.pisp_payment_initiation_id,
        )

        attempts = []
        for key, events in groups.items():
            anchor = first_of(events, *ANCHOR_EVENT_TYPES)
            if anchor is None:
                continue
            attempts.append(self._build_attempt(key, anchor, events, ctx.amount))
        return attempts

    def _build_attempt(
        self,
        key: str,
        anchor: PaymentRequestEvent,
        events: list[PaymentRequestEvent],
        amount,
    ) -> PaymentRequestPaymentAttempt:
        attempt = PaymentRequestPaymentAttempt(
            attempt_key=key,
            payment_request_id=anchor.payment_request_id,
            initiated_at=anchor.inserted,
            payment_method=PaymentMethod.PISP,
            currency=anchor.currency,
            attempted_amount=amount,
            processor=anchor.processor,
            institution_id=anchor.pisp_payment_service_provider_id,
        )

        authorisation = next(
            (e for e in events if e.event_type in AUTHORISATION_EVENT_TYPES and is_pisp_authorised(e)),
            None,
        )
        if authorisation is not None:
            attempt.authorised_at = authorisation.inserted
            attempt.authorised_amount = authorisation.amount

        self._apply_settlement(attempt, events)
        return attempt

    def _apply_settlement(self, attempt: PaymentRequestPaymentAttempt, events: list[PaymentRequestEvent]) -> None:
        """A settle event wins over a settle failure."""
        settle = first_of(events, PaymentRequestEventType.PISP_SETTLE)
        if settle is not None:
            attempt.settled_at = settle.inserted
            attempt.settled_amount = settle.amount
            return

        failure = first_of(events, PaymentRequestEventType.PISP_SETTLE_FAILURE)
        if failure is not None:
            attempt.settle_failed_at = failure.inserted
