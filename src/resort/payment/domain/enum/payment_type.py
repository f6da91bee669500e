from enum import Enum


class PaymentType(str, Enum):
    """支払の種類"""

    DEPOSIT = "deposit"
    FULL_PAYMENT = "full_payment"
    PARTIAL_PAYMENT = "partial_payment"
    REFUND = "refund"
