"""
Input Validation for the MoneyMoov Payment Attempt Engine

Validates raw request payloads before they are parsed into events.
Raises ValueError with clear messages for any constraint violations.
The reconstruction itself never raises; malformed data is stopped here.
"""

from decimal import Decimal, InvalidOperation

from .models import parse_timestamp


class InputValidator:
    """Validates a reconstruction request payload."""

    def validate(self, data: dict) -> None:
        """
        Run all validations. Raises ValueError if any check fails.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Request payload must be an object, got: {type(data).__name__}")

        self._validate_amount(data)

        events = data.get("events")
        if events is None:
            return
        if not isinstance(events, list):
            raise ValueError(f"events must be a list, got: {type(events).__name__}")

        for i, event in enumerate(events):
            self._validate_event(i, event)

    def _validate_amount(self, data: dict) -> None:
        """Validate the payment request amount."""
        if data.get("amount") is None:
            raise ValueError("amount is required")

        amount = self._to_decimal(data["amount"])
        if amount is None:
            raise ValueError(f"amount must be numeric, got: {data['amount']!r}")
        if amount < 0:
            raise ValueError(f"amount cannot be negative, got: {amount}")

    def _validate_event(self, index: int, event) -> None:
        """Validate a single event record."""
        if not isinstance(event, dict):
            raise ValueError(f"Event {index} must be an object")

        if not event.get("eventType"):
            raise ValueError(f"Event {index} is missing eventType")

        if not event.get("inserted"):
            raise ValueError(f"Event {index} is missing inserted")
        try:
            parse_timestamp(event["inserted"])
        except (TypeError, ValueError):
            raise ValueError(f"Event {index} has an invalid inserted timestamp: {event['inserted']!r}")

        if event.get("amount") is not None and self._to_decimal(event["amount"]) is None:
            raise ValueError(f"Event {index} amount must be numeric, got: {event['amount']!r}")

    @staticmethod
    def _to_decimal(value) -> Decimal | None:
        if isinstance(value, bool):
            return None
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            return None
        return amount if amount.is_finite() else None
