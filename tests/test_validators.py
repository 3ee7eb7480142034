"""Tests for request payload validation."""

import pytest

from moneymoov.validators import InputValidator


def _valid_event(**overrides) -> dict:
    event = {
        "eventType": "card_authorization",
        "inserted": "2024-03-01T09:00:00Z",
        "amount": 12.5,
        "cardAuthorizationResponseID": "auth-1",
    }
    event.update(overrides)
    return event


class TestInputValidator:
    """Test payload constraints."""

    @pytest.fixture
    def validator(self):
        return InputValidator()

    def test_valid_payload(self, validator):
        validator.validate({"amount": "12.50", "events": [_valid_event()]})

    def test_events_may_be_omitted(self, validator):
        validator.validate({"amount": 0})

    def test_payload_must_be_object(self, validator):
        with pytest.raises(ValueError, match="must be an object"):
            validator.validate([_valid_event()])

    def test_amount_required(self, validator):
        with pytest.raises(ValueError, match="amount is required"):
            validator.validate({"events": []})

    @pytest.mark.parametrize("amount", ["abc", True, "NaN", [1]])
    def test_amount_must_be_numeric(self, validator, amount):
        with pytest.raises(ValueError, match="amount must be numeric"):
            validator.validate({"amount": amount, "events": []})

    def test_amount_cannot_be_negative(self, validator):
        with pytest.raises(ValueError, match="cannot be negative"):
            validator.validate({"amount": -0.01, "events": []})

    def test_events_must_be_list(self, validator):
        with pytest.raises(ValueError, match="events must be a list"):
            validator.validate({"amount": 1, "events": {"eventType": "card_sale"}})

    def test_event_must_be_object(self, validator):
        with pytest.raises(ValueError, match="Event 0 must be an object"):
            validator.validate({"amount": 1, "events": ["card_sale"]})

    def test_event_type_required(self, validator):
        event = _valid_event()
        del event["eventType"]
        with pytest.raises(ValueError, match="Event 0 is missing eventType"):
            validator.validate({"amount": 1, "events": [event]})

    def test_inserted_required(self, validator):
        with pytest.raises(ValueError, match="Event 1 is missing inserted"):
            validator.validate({"amount": 1, "events": [_valid_event(), _valid_event(inserted=None)]})

    def test_inserted_must_parse(self, validator):
        with pytest.raises(ValueError, match="invalid inserted timestamp"):
            validator.validate({"amount": 1, "events": [_valid_event(inserted="yesterday")]})

    def test_event_amount_must_be_numeric(self, validator):
        with pytest.raises(ValueError, match="Event 0 amount must be numeric"):
            validator.validate({"amount": 1, "events": [_valid_event(amount="ten")]})

    def test_unknown_event_type_is_allowed(self, validator):
        validator.validate({"amount": 1, "events": [_valid_event(eventType="lightning_invoice_paid")]})
