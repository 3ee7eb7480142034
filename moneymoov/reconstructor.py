"""
Attempt Reconstructor - Main Orchestrator

Turns the event log of a payment request into one summary per payment
attempt by running each rail's grouper and concatenating the results.
"""

import json
import logging
from decimal import Decimal
from typing import Any, Dict, Iterable

from .groupers import CardAttemptGrouper, PispAttemptGrouper
from .models import (
    PaymentRequestEvent,
    PaymentRequestPaymentAttempt,
    ReconstructionContext,
    ReconstructionInput,
)
from .output import OutputBuilder
from .validators import InputValidator

logger = logging.getLogger(__name__)


class AttemptReconstructor:
    """
    Main orchestrator for attempt reconstruction.

    Runs a fixed pipeline of groupers, one per payment rail:
    1. Card attempts
    2. PISP attempts

    Reconstruction is best effort. Incomplete or contradictory event logs
    produce partially populated attempts, never an error.
    """

    def __init__(self):
        self.validator = InputValidator()
        self.card_grouper = CardAttemptGrouper()
        self.pisp_grouper = PispAttemptGrouper()
        self.output_builder = OutputBuilder()

        # TODO: Append a lightning grouper once lightning event types are recorded.
        self.groupers = [self.card_grouper, self.pisp_grouper]

    def reconstruct(
        self,
        events: Iterable[PaymentRequestEvent] | None,
        amount: Decimal = Decimal("0"),
    ) -> list[PaymentRequestPaymentAttempt]:
        """
        Reconstruct the payment attempts of a single payment request.

        Args:
            events: The payment request's events, in any order
            amount: The payment request amount, used as the PISP attempted amount

        Returns:
            Card attempts followed by PISP attempts
        """
        if not events:
            return []

        ctx = ReconstructionContext(events=list(events), amount=amount)

        attempts = []
        for grouper in self.groupers:
            grouped = grouper.group(ctx)
            logger.debug(f"{type(grouper).__name__} reconstructed {len(grouped)} attempt(s)")
            attempts.extend(grouped)
        return attempts

    def process_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Reconstruct attempts from raw dictionary input.

        Convenience method for API usage.
        """
        self.validator.validate(data)
        input_data = ReconstructionInput.from_dict(data)
        attempts = self.reconstruct(input_data.events, input_data.amount)
        result = self.output_builder.build(attempts)
        return {
            "payment_request_id": result.payment_request_id,
            "attempt_count": result.attempt_count,
            "payment_attempts": result.payment_attempts,
        }


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def get_payment_attempts(
    events: Iterable[PaymentRequestEvent] | None, amount: Decimal = Decimal("0")
) -> list[PaymentRequestPaymentAttempt]:
    """Reconstruct the card and PISP attempts of a payment request."""
    return AttemptReconstructor().reconstruct(events, amount)


def get_card_payment_attempts(events: Iterable[PaymentRequestEvent]) -> list[PaymentRequestPaymentAttempt]:
    """Group the events into card payment attempts."""
    return CardAttemptGrouper().group(ReconstructionContext(events=list(events or [])))


def get_pisp_payment_attempts(
    events: Iterable[PaymentRequestEvent], amount: Decimal
) -> list[PaymentRequestPaymentAttempt]:
    """Group the events into PISP payment attempts."""
    return PispAttemptGrouper().group(ReconstructionContext(events=list(events or []), amount=amount))


def process_events_from_dict(input_data: Dict[str, Any]) -> Dict[str, Any]:
    """Reconstruct attempts from a Python dict and return a Python dict."""
    reconstructor = AttemptReconstructor()
    return reconstructor.process_from_dict(input_data)


def process_events_from_json(json_input: str) -> str:
    """
    Reconstruct attempts from a JSON string and return a JSON string.
    Failures are reported in the response body rather than raised.
    """
    try:
        input_data = json.loads(json_input)
        reconstructor = AttemptReconstructor()
        result = reconstructor.process_from_dict(input_data)
        return json.dumps(result, indent=2)

    except ValueError as e:
        error_response = {"error": str(e), "status": "validation_failed"}
        return json.dumps(error_response, indent=2)

    except Exception as e:
        logger.error(f"Attempt reconstruction failed: {str(e)}")
        error_response = {"error": str(e), "status": "failed"}
        return json.dumps(error_response, indent=2)
