from resort.payment.domain.entity import Payment
from resort.payment.domain.repository import PaymentQuery, PaymentRepository
from resort.payment.domain.value_object import PaymentId
from resort.shared.domain import ResourceNotFoundException


class PaymentQueryService:
    """決済の参照ユースケース"""

    def __init__(self, repository: PaymentRepository) -> None:
        self._repository = repository

    def get(self, payment_id: PaymentId) -> Payment:
        payment = self._repository.find_by_id(payment_id)
        if payment is None:
            raise ResourceNotFoundException(f"Payment not found: {payment_id}")
        return payment

    def list(self, query: PaymentQuery | None = None) -> list[Payment]:
        return self._repository.find(query or PaymentQuery())
