from .payment_query import PaymentQuery
from .payment_repository import PaymentRepository

__all__ = ["PaymentQuery", "PaymentRepository"]
