from .payment_factory import PaymentDetails, PaymentFactory

__all__ = ["PaymentDetails", "PaymentFactory"]
