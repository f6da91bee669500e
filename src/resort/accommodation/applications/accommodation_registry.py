from resort.accommodation.applications.commands import (
    RegisterAccommodationCommand,
    UpdateAccommodationCommand,
)
from resort.accommodation.domain.entity import Accommodation
from resort.accommodation.domain.repository import (
    AccommodationQuery,
    AccommodationRepository,
)
from resort.accommodation.domain.value_object import (
    AccommodationId,
    AccommodationName,
)
from resort.shared.domain import (
    Currency,
    DuplicateResourceException,
    Money,
    ResourceNotFoundException,
)
from resort.shared.utils import get_logger

logger = get_logger()


class AccommodationRegistry:
    """予約可能な宿泊施設のカタログ

    予約処理からは読み取り専用で参照される。登録・更新は管理操作。
    """

    def __init__(self, repository: AccommodationRepository) -> None:
        self._repository = repository

    def get(self, accommodation_id: AccommodationId) -> Accommodation:
        """宿泊施設を取得する"""
        accommodation = self._repository.find_by_id(accommodation_id)
        if accommodation is None:
            raise ResourceNotFoundException(
                f"Accommodation not found: {accommodation_id}"
            )
        return accommodation

    def is_active(self, accommodation_id: AccommodationId) -> bool:
        return self.get(accommodation_id).is_active

    def capacity(self, accommodation_id: AccommodationId) -> int:
        return self.get(accommodation_id).max_guests

    def list(self, query: AccommodationQuery | None = None) -> list[Accommodation]:
        return self._repository.find(query or AccommodationQuery())

    def find_active_by_name(self, name: str) -> Accommodation:
        """公開中の施設を名前で解決する

        完全一致（大文字小文字を区別しない）を優先し、なければ部分一致の先頭を返す。
        """
        accommodation = self._repository.find_by_name(AccommodationName(name))
        if accommodation is not None and accommodation.is_active:
            return accommodation

        keyword = name.strip().lower()
        for candidate in self._repository.find(AccommodationQuery(is_active=True)):
            if keyword in candidate.name.normalized():
                return candidate
        raise ResourceNotFoundException(f"Accommodation not found: {name}")

    def register(self, command: RegisterAccommodationCommand) -> Accommodation:
        """宿泊施設を登録する"""
        name = AccommodationName(command.name)
        self._ensure_name_available(name)

        accommodation = Accommodation(
            id=AccommodationId.generate(),
            name=name,
            category=command.category,
            max_guests=command.max_guests,
            base_price=Money(
                amount=command.base_price, currency=Currency(command.currency)
            ),
            description=command.description,
            amenities=command.amenities,
        )
        self._repository.save(accommodation)
        logger.info(
            "Accommodation registered",
            extra={"accommodation_id": str(accommodation.id)},
        )
        return accommodation

    def update(
        self, accommodation_id: AccommodationId, command: UpdateAccommodationCommand
    ) -> Accommodation:
        """宿泊施設を部分更新する"""
        accommodation = self.get(accommodation_id)

        if command.name is not None:
            name = AccommodationName(command.name)
            if name.normalized() != accommodation.name.normalized():
                self._ensure_name_available(name)
            accommodation.rename(name)
        if command.description is not None:
            accommodation.describe(command.description)
        if command.base_price is not None:
            accommodation.reprice(
                Money(
                    amount=command.base_price,
                    currency=accommodation.base_price.currency,
                )
            )
        if command.amenities is not None:
            accommodation.replace_amenities(command.amenities)
        if command.is_active is True:
            accommodation.activate()
        elif command.is_active is False:
            accommodation.deactivate()

        self._repository.update(accommodation)
        logger.info(
            "Accommodation updated",
            extra={"accommodation_id": str(accommodation.id)},
        )
        return accommodation

    def _ensure_name_available(self, name: AccommodationName) -> None:
        if self._repository.find_by_name(name) is not None:
            raise DuplicateResourceException(
                f"Accommodation name already exists: {name}"
            )
