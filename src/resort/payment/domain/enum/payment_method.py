from enum import Enum


class PaymentMethod(str, Enum):
    """支払方法"""

    CREDIT_CARD = "credit_card"
    BANK_TRANSFER = "bank_transfer"
    CASH = "cash"
    PAYPAL = "paypal"
    OTHER = "other"
