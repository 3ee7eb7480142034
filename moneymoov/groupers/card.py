"""
Card Attempt Grouper

Groups card events by authorization response ID and derives the authorised,
settled and refunded milestones of each attempt.
"""

from ..models import (
    PaymentMethod,
    PaymentRequestEvent,
    PaymentRequestEventType,
    PaymentRequestPaymentAttempt,
    ReconstructionContext,
)
from ..statuses import (
    AUTHORISED_ON_CAPTURE_PROCESSORS,
    is_card_authorised,
    is_card_captured,
    is_card_voided,
)
from .grouping import first_of, group_events

CARD_EVENT_TYPES = frozenset({
    PaymentRequestEventType.CARD_PAYER_AUTHENTICATION_SETUP,
    PaymentRequestEventType.CARD_AUTHORIZATION,
    PaymentRequestEventType.CARD_SALE,
    PaymentRequestEventType.CARD_CAPTURE,
    PaymentRequestEventType.CARD_VOID,
})


class CardAttemptGrouper:
    """Reconstructs card payment attempts."""

    def group(self, ctx: ReconstructionContext) -> list[PaymentRequestPaymentAttempt]:
        """
        Build one attempt per distinct authorization response ID.

        Every group produces an attempt, even when none of its events
        reached a recognised phase.
        """
        groups = group_events(
            ctx.events,
            CARD_EVENT_TYPES,
            key=lambda e: e.card_authorization_response_id,
        )
        return [self._build_attempt(key, events) for key, events in groups.items()]

    def _build_attempt(self, key: str, events: list[PaymentRequestEvent]) -> PaymentRequestPaymentAttempt:
        attempt = PaymentRequestPaymentAttempt()
        self._apply_authorization(attempt, key, events)
        self._apply_capture(attempt, key, events)
        self._apply_void(attempt, events)

        wallet_name = next((e.wallet_name for e in events if e.wallet_name is not None), None)
        if wallet_name is not None:
            attempt.wallet_name = wallet_name

        return attempt

    def _apply_authorization(
        self,
        attempt: PaymentRequestPaymentAttempt,
        key: str,
        events: list[PaymentRequestEvent],
    ) -> None:
        """
        Initialise the attempt from its authorization.

        The paired payer authentication setup event, when present, supplies
        the initiation details.
        """
        authorization = first_of(events, PaymentRequestEventType.CARD_AUTHORIZATION)
        if authorization is None:
            return

        setup = next(
            (
                e for e in events
                if e.event_type == PaymentRequestEventType.CARD_PAYER_AUTHENTICATION_SETUP
                and e.card_request_id == authorization.card_request_id
            ),
            None,
        )
        self._initialise(attempt, key, setup or authorization)

        if is_card_authorised(authorization.status):
            attempt.authorised_at = authorization.inserted
            attempt.authorised_amount = authorization.amount

    def _apply_capture(
        self,
        attempt: PaymentRequestPaymentAttempt,
        key: str,
        events: list[PaymentRequestEvent],
    ) -> None:
        """Record settlement from the sale, or failing that the capture."""
        capture = first_of(events, PaymentRequestEventType.CARD_SALE, PaymentRequestEventType.CARD_CAPTURE)
        if capture is None:
            return

        # An empty key means the authorization phase found nothing.
        if not attempt.attempt_key:
            self._initialise(attempt, key, capture)

        if not is_card_captured(capture.status):
            return

        attempt.settled_at = capture.inserted
        attempt.settled_amount = capture.amount
        if capture.processor in AUTHORISED_ON_CAPTURE_PROCESSORS:
            attempt.authorised_at = capture.inserted
            attempt.authorised_amount = capture.amount

    def _apply_void(self, attempt: PaymentRequestPaymentAttempt, events: list[PaymentRequestEvent]) -> None:
        void = first_of(events, PaymentRequestEventType.CARD_VOID)
        if void is not None and is_card_voided(void.status):
            attempt.refunded_at = void.inserted
            attempt.refunded_amount = void.amount

    @staticmethod
    def _initialise(attempt: PaymentRequestPaymentAttempt, key: str, event: PaymentRequestEvent) -> None:
        attempt.attempt_key = key
        attempt.payment_request_id = event.payment_request_id
        attempt.initiated_at = event.inserted
        attempt.payment_method = PaymentMethod.CARD
        attempt.currency = event.currency
        attempt.attempted_amount = event.amount
        attempt.processor = event.processor
