"""
MONEYMOOV PAYMENT ATTEMPT ENGINE
Reconstructs payment attempts from payment request events.
"""

from .models import (
    PaymentMethod,
    PaymentProcessor,
    PaymentRequestEvent,
    PaymentRequestEventType,
    PaymentRequestPaymentAttempt,
)
from .reconstructor import AttemptReconstructor, get_payment_attempts

__all__ = [
    'AttemptReconstructor',
    'get_payment_attempts',
    'PaymentRequestEvent',
    'PaymentRequestEventType',
    'PaymentRequestPaymentAttempt',
    'PaymentMethod',
    'PaymentProcessor',
]
