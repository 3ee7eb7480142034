"""
Status Classification Tables

Status codes reported by the card and PISP processors, and the tables that
classify them into attempt milestones. New processors or status codes are
added here rather than in the groupers.
"""

from .models import PaymentProcessor, PaymentRequestEvent

# =============================================================================
# CARD STATUS CODES
# =============================================================================

CARD_AUTHORIZED_SUCCESS_STATUS = "AUTHORIZED"
CARD_PAYMENT_SOFT_DECLINE_STATUS = "AUTHORIZED_RISK_DECLINED"
CARD_CHECKOUT_AUTHORIZED_STATUS = "Authorized"
CARD_CHECKOUT_CARDVERIFIED_STATUS = "Card Verified"
CARD_CHECKOUT_CAPTURED_STATUS = "Captured"
CARD_CAPTURE_SUCCESS_STATUS = "PENDING"
CARD_VOIDED_SUCCESS_STATUS = "VOIDED"

CARD_AUTHORISED_STATUSES = frozenset({
    CARD_AUTHORIZED_SUCCESS_STATUS,
    CARD_PAYMENT_SOFT_DECLINE_STATUS,
    CARD_CHECKOUT_AUTHORIZED_STATUS,
    CARD_CHECKOUT_CARDVERIFIED_STATUS,
})

CARD_CAPTURED_STATUSES = frozenset({
    CARD_AUTHORIZED_SUCCESS_STATUS,
    CARD_PAYMENT_SOFT_DECLINE_STATUS,
    CARD_CHECKOUT_CAPTURED_STATUS,
    CARD_CAPTURE_SUCCESS_STATUS,
})

CARD_VOIDED_STATUSES = frozenset({CARD_VOIDED_SUCCESS_STATUS})

# Processors with no separate authorization confirmation: a successful
# capture implies the authorization.
AUTHORISED_ON_CAPTURE_PROCESSORS = frozenset({PaymentProcessor.CHECKOUT})

# =============================================================================
# PISP STATUS CODES
# =============================================================================

PISP_MODULR_SUCCESS_STATUS = "EXECUTED"
PISP_MODULR_BANK_REJECTED_STATUS = "REJECTED"
PISP_PLAID_INITIATED_STATUS = "PAYMENT_STATUS_INITIATED"
PISP_PLAID_SUCCESS_STATUS = "PAYMENT_STATUS_EXECUTED"
PISP_YAPILY_PENDING_STATUS = "PENDING"
PISP_YAPILY_COMPLETED_STATUS = "COMPLETED"

# NoFrixion PISP callbacks carry payout statuses.
PAYOUT_STATUS_QUEUED = "QUEUED"
PAYOUT_STATUS_QUEUED_UPSTREAM = "QUEUED_UPSTREAM"
PAYOUT_STATUS_PENDING = "PENDING"
PAYOUT_STATUS_PROCESSED = "PROCESSED"

PISP_AUTHORISED_STATUSES = {
    PaymentProcessor.MODULR: frozenset({PISP_MODULR_SUCCESS_STATUS}),
    PaymentProcessor.NOFRIXION: frozenset({
        PAYOUT_STATUS_QUEUED,
        PAYOUT_STATUS_QUEUED_UPSTREAM,
        PAYOUT_STATUS_PENDING,
        PAYOUT_STATUS_PROCESSED,
    }),
    PaymentProcessor.PLAID: frozenset({PISP_PLAID_INITIATED_STATUS, PISP_PLAID_SUCCESS_STATUS}),
    PaymentProcessor.YAPILY: frozenset({PISP_YAPILY_PENDING_STATUS, PISP_YAPILY_COMPLETED_STATUS}),
}

# Bank statuses that veto an otherwise successful PISP status.
PISP_BANK_REJECTED_STATUSES = {
    PaymentProcessor.MODULR: frozenset({PISP_MODULR_BANK_REJECTED_STATUS}),
}


def is_card_authorised(status: str | None) -> bool:
    return status in CARD_AUTHORISED_STATUSES


def is_card_captured(status: str | None) -> bool:
    return status in CARD_CAPTURED_STATUSES


def is_card_voided(status: str | None) -> bool:
    return status in CARD_VOIDED_STATUSES


def is_pisp_authorised(event: PaymentRequestEvent) -> bool:
    """
    Check whether a PISP callback or webhook confirms authorization.

    Processors missing from the table never authorise.
    """
    successes = PISP_AUTHORISED_STATUSES.get(event.processor, frozenset())
    if event.status not in successes:
        return False
    rejected = PISP_BANK_REJECTED_STATUSES.get(event.processor, frozenset())
    return event.pisp_bank_status not in rejected
