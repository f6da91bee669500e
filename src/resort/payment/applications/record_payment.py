from resort.booking.domain.entity import Booking
from resort.booking.domain.enum import BookingStatus
from resort.booking.domain.repository import BookingRepository
from resort.booking.domain.value_object import BookingId
from resort.payment.applications.commands import RecordPaymentCommand
from resort.payment.domain.entity import Payment
from resort.payment.domain.enum import PaymentStatus
from resort.payment.domain.factory import PaymentDetails, PaymentFactory
from resort.payment.domain.repository import PaymentRepository
from resort.payment.domain.value_object import PaymentId
from resort.shared.domain import InvalidStateException, ResourceNotFoundException
from resort.shared.utils import get_logger

logger = get_logger()


class RecordPaymentService:
    """予約に対する決済記録のユースケース

    決済の取り込み自体は外部の責務。ここではキャンセル済み予約への記録を拒否する。
    状態確認と保存は予約の施設単位の transactionally スコープ内で行い、
    インメモリ実装ではキャンセル操作と直列化される。
    """

    def __init__(
        self,
        repository: PaymentRepository,
        booking_repository: BookingRepository,
        factory: PaymentFactory | None = None,
    ) -> None:
        self._repository = repository
        self._booking_repository = booking_repository
        self._factory = factory or PaymentFactory()

    def record(self, command: RecordPaymentCommand) -> Payment:
        """決済を記録する（通貨は予約の通貨に合わせる）"""
        booking_id = BookingId(command.booking_id)
        booking = self._get_booking(booking_id)

        payment_details: PaymentDetails = {
            "amount": command.amount,
            "currency_code": str(booking.total_amount.currency),
            "payment_method": command.payment_method,
            "payment_type": command.payment_type,
            "transaction_id": command.transaction_id,
            "payment_date": command.payment_date,
            "notes": command.notes,
        }
        payment = self._factory.create(booking_id, payment_details)
        if command.status == PaymentStatus.COMPLETED:
            payment.complete()
        elif command.status == PaymentStatus.FAILED:
            payment.fail()

        def _record() -> None:
            current = self._get_booking(booking_id)
            if current.status == BookingStatus.CANCELLED:
                raise InvalidStateException("Cannot add payment to cancelled booking")
            self._repository.save(payment)

        self._booking_repository.transactionally(booking.accommodation_id, _record)
        logger.info(
            "Payment recorded",
            extra={
                "payment_id": str(payment.id),
                "booking_id": str(booking_id),
                "status": payment.status.value,
            },
        )
        return payment

    def complete(self, payment_id: PaymentId) -> Payment:
        """保留中の決済を完了にする"""
        payment = self._get(payment_id)
        payment.complete()
        self._repository.update(payment)
        return payment

    def refund(self, payment_id: PaymentId) -> Payment:
        """完了済みの決済を払い戻し済みにする"""
        payment = self._get(payment_id)
        payment.refund()
        self._repository.update(payment)
        logger.info("Payment refunded", extra={"payment_id": str(payment_id)})
        return payment

    def _get_booking(self, booking_id: BookingId) -> Booking:
        booking = self._booking_repository.find_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException(f"Booking not found: {booking_id}")
        return booking

    def _get(self, payment_id: PaymentId) -> Payment:
        payment = self._repository.find_by_id(payment_id)
        if payment is None:
            raise ResourceNotFoundException(f"Payment not found: {payment_id}")
        return payment
