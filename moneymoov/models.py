"""
Domain Models for the MoneyMoov Payment Attempt Engine

These dataclasses provide type-safe representations of payment request events
and the payment attempts reconstructed from them.
All monetary values use Decimal for precision.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

# =============================================================================
# ENUMERATIONS
# =============================================================================


class PaymentRequestEventType(str, Enum):
    """Lifecycle event types recorded against a payment request."""

    UNKNOWN = "unknown"
    CARD_PAYER_AUTHENTICATION_SETUP = "card_payer_authentication_setup"
    CARD_AUTHORIZATION = "card_authorization"
    CARD_SALE = "card_sale"
    CARD_CAPTURE = "card_capture"
    CARD_VOID = "card_void"
    PISP_INITIATE = "pisp_initiate"
    PISP_CALLBACK = "pisp_callback"
    PISP_WEBHOOK = "pisp_webhook"
    PISP_SETTLE = "pisp_settle"
    PISP_SETTLE_FAILURE = "pisp_settle_failure"

    @classmethod
    def _missing_(cls, value):
        # Event types this library doesn't model take no part in grouping.
        return cls.UNKNOWN


class PaymentProcessor(str, Enum):
    """Upstream payment processing partners."""

    NONE = "None"
    CYBERSOURCE = "CyberSource"
    CHECKOUT = "Checkout"
    MODULR = "Modulr"
    STRIPE = "Stripe"
    PLAID = "Plaid"
    YAPILY = "Yapily"
    NORDIGEN = "Nordigen"
    NOFRIXION = "NoFrixion"

    @classmethod
    def _missing_(cls, value):
        return cls.NONE


class PaymentMethod(str, Enum):
    """Payment rail an attempt was made on."""

    NONE = "None"
    CARD = "card"
    PISP = "pisp"


def as_utc(value: datetime | None) -> datetime | None:
    """Timestamps without an offset are taken to be UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def parse_timestamp(value) -> datetime | None:
    """Parse an ISO-8601 timestamp as sent by the MoneyMoov API."""
    if value is None or isinstance(value, datetime):
        return as_utc(value)
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return as_utc(datetime.fromisoformat(text))


def _optional_str(value) -> str | None:
    return str(value) if value is not None else None


# =============================================================================
# INPUT MODELS
# =============================================================================


@dataclass(frozen=True)
class PaymentRequestEvent:
    """A single lifecycle record for a payment request."""

    event_type: PaymentRequestEventType
    inserted: datetime | None = None
    payment_request_id: str | None = None
    id: str | None = None
    amount: Decimal = Decimal("0")
    currency: str | None = None
    status: str | None = None
    processor: PaymentProcessor = PaymentProcessor.NONE
    card_request_id: str | None = None
    card_authorization_response_id: str | None = None  # Card correlation key
    pisp_payment_initiation_id: str | None = None  # PISP correlation key
    pisp_payment_service_provider_id: str | None = None
    pisp_bank_status: str | None = None
    wallet_name: str | None = None
    error_reason: str | None = None
    error_message: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "PaymentRequestEvent":
        processor = data.get("paymentProcessorName")
        return cls(
            event_type=PaymentRequestEventType(data["eventType"]),
            inserted=parse_timestamp(data.get("inserted")),
            payment_request_id=_optional_str(data.get("paymentRequestID")),
            id=_optional_str(data.get("id")),
            amount=Decimal(str(data.get("amount") or 0)),
            currency=data.get("currency"),
            status=data.get("status"),
            processor=PaymentProcessor(processor) if processor is not None else PaymentProcessor.NONE,
            card_request_id=data.get("cardRequestID"),
            card_authorization_response_id=data.get("cardAuthorizationResponseID"),
            pisp_payment_initiation_id=data.get("pispPaymentInitiationID"),
            pisp_payment_service_provider_id=data.get("pispPaymentServiceProviderID"),
            pisp_bank_status=data.get("pispBankStatus"),
            wallet_name=data.get("walletName"),
            error_reason=data.get("errorReason"),
            error_message=data.get("errorMessage"),
        )


@dataclass
class ReconstructionInput:
    """Complete input for reconstructing the attempts of one payment request."""

    amount: Decimal
    events: list[PaymentRequestEvent] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "ReconstructionInput":
        return cls(
            amount=Decimal(str(data["amount"])),
            events=[PaymentRequestEvent.from_dict(e) for e in data.get("events") or []],
        )


# =============================================================================
# OUTPUT / RESULT MODELS
# =============================================================================


@dataclass
class PaymentRequestPaymentAttempt:
    """A payment attempt reconstructed from a group of correlated events."""

    attempt_key: str = ""
    payment_request_id: str | None = None
    initiated_at: datetime | None = None
    payment_method: PaymentMethod = PaymentMethod.NONE
    currency: str | None = None
    attempted_amount: Decimal = Decimal("0")
    processor: PaymentProcessor | None = None

    # Milestones, only set when observed
    authorised_at: datetime | None = None
    authorised_amount: Decimal | None = None
    settled_at: datetime | None = None
    settled_amount: Decimal | None = None
    refunded_at: datetime | None = None  # Card only
    refunded_amount: Decimal | None = None  # Card only
    settle_failed_at: datetime | None = None  # PISP only

    institution_id: str | None = None  # PISP only
    wallet_name: str | None = None  # Card only

    @property
    def is_authorised(self) -> bool:
        return self.authorised_at is not None

    @property
    def is_settled(self) -> bool:
        return self.settled_at is not None

    @property
    def is_refunded(self) -> bool:
        return self.refunded_at is not None

    @property
    def is_settle_failed(self) -> bool:
        return self.settle_failed_at is not None


@dataclass
class ReconstructionContext:
    """
    Holds the inputs shared by every grouper.
    This is the "bag" that flows through the grouper pipeline.
    """

    events: list[PaymentRequestEvent]
    amount: Decimal = Decimal("0")


@dataclass
class ReconstructionResult:
    """Final output of attempt reconstruction."""

    payment_request_id: str | None
    payment_attempts: list[dict]

    @property
    def attempt_count(self) -> int:
        return len(self.payment_attempts)
