from dataclasses import dataclass, field

import boto3

from resort.accommodation.applications.accommodation_registry import (
    AccommodationRegistry,
)
from resort.accommodation.domain.repository import AccommodationRepository
from resort.accommodation.infrastructure.dynamodb_accommodation_repository import (
    DynamoDBAccommodationRepository,
)
from resort.accommodation.infrastructure.in_memory_accommodation_repository import (
    InMemoryAccommodationRepository,
)
from resort.booking.applications.availability_checker import AvailabilityChecker
from resort.booking.applications.booking_lifecycle import BookingLifecycleService
from resort.booking.applications.booking_queries import BookingQueryService
from resort.booking.applications.external_form_intake import (
    ExternalFormIntakeService,
)
from resort.booking.domain.enum import TurnoverPolicy
from resort.booking.domain.event import Notifier
from resort.booking.domain.repository import BookingRepository
from resort.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from resort.booking.infrastructure.eventbridge_notifier import EventBridgeNotifier
from resort.booking.infrastructure.in_memory_booking_repository import (
    InMemoryBookingRepository,
)
from resort.booking.infrastructure.logging_notifier import LoggingNotifier
from resort.payment.applications.payment_balance import PaymentBalanceService
from resort.payment.applications.payment_queries import PaymentQueryService
from resort.payment.applications.record_payment import RecordPaymentService
from resort.payment.domain.repository import PaymentRepository
from resort.payment.infrastructure.dynamodb_payment_repository import (
    DynamoDBPaymentRepository,
)
from resort.payment.infrastructure.in_memory_payment_repository import (
    InMemoryPaymentRepository,
)
from resort.shared.config import Settings
from resort.shared.utils import get_logger


@dataclass
class ResortApp:
    """組み立て済みのサービス群

    プロセスごとに1つ生成し、終了時に close() で外部接続を閉じる。
    """

    settings: Settings
    registry: AccommodationRegistry
    bookings: BookingQueryService
    lifecycle: BookingLifecycleService
    availability: AvailabilityChecker
    external_forms: ExternalFormIntakeService
    payments: RecordPaymentService
    payment_queries: PaymentQueryService
    balances: PaymentBalanceService
    _clients: list = field(default_factory=list, repr=False)

    def close(self) -> None:
        for client in self._clients:
            client.close()
        self._clients.clear()


def create_app(
    settings: Settings | None = None, notifier: Notifier | None = None
) -> ResortApp:
    """設定に従ってリポジトリと通知先を選び、サービスを組み立てる"""
    settings = settings or Settings.from_env()
    logger = get_logger(settings.service_name)
    clients: list = []

    accommodation_repository: AccommodationRepository
    booking_repository: BookingRepository
    payment_repository: PaymentRepository
    if settings.storage_backend == "memory":
        accommodation_repository = InMemoryAccommodationRepository()
        booking_repository = InMemoryBookingRepository()
        payment_repository = InMemoryPaymentRepository()
    else:
        if not settings.table_name:
            raise ValueError("TABLE_NAME is required for the dynamodb backend")
        dynamodb = boto3.resource("dynamodb")
        clients.append(dynamodb.meta.client)
        accommodation_repository = DynamoDBAccommodationRepository(
            settings.table_name, dynamodb
        )
        booking_repository = DynamoDBBookingRepository(settings.table_name, dynamodb)
        payment_repository = DynamoDBPaymentRepository(settings.table_name, dynamodb)

    if notifier is None:
        if settings.event_bus_name:
            events = boto3.client("events")
            clients.append(events)
            notifier = EventBridgeNotifier(
                settings.event_bus_name, settings.event_source, events
            )
        else:
            notifier = LoggingNotifier(logger)

    registry = AccommodationRegistry(accommodation_repository)
    availability = AvailabilityChecker(
        booking_repository, TurnoverPolicy(settings.turnover_policy)
    )
    lifecycle = BookingLifecycleService(
        repository=booking_repository,
        registry=registry,
        availability=availability,
        notifier=notifier,
    )

    logger.info(
        "Resort booking services initialized",
        extra={
            "storage_backend": settings.storage_backend,
            "turnover_policy": settings.turnover_policy,
        },
    )
    return ResortApp(
        settings=settings,
        registry=registry,
        bookings=BookingQueryService(booking_repository),
        lifecycle=lifecycle,
        availability=availability,
        external_forms=ExternalFormIntakeService(registry, lifecycle),
        payments=RecordPaymentService(payment_repository, booking_repository),
        payment_queries=PaymentQueryService(payment_repository),
        balances=PaymentBalanceService(payment_repository, booking_repository),
        _clients=clients,
    )


def create_in_memory_app(
    turnover_policy: str = "closed", notifier: Notifier | None = None
) -> ResortApp:
    """プロセス内メモリで動く構成（ローカル実行・テスト用）"""
    return create_app(
        Settings(storage_backend="memory", turnover_policy=turnover_policy),
        notifier=notifier,
    )
