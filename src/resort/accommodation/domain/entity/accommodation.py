from resort.accommodation.domain.enum import AccommodationCategory
from resort.accommodation.domain.value_object import AccommodationId, AccommodationName
from resort.shared.domain import Entity, Money


class Accommodation(Entity[AccommodationId]):
    """宿泊施設エンティティ

    種別と定員は登録時に固定し、予約から参照された後に変わらないようにする。
    名前・説明・料金・設備・公開フラグの変更は既存の予約に影響しない。
    """

    def __init__(
        self,
        id: AccommodationId,
        name: AccommodationName,
        category: AccommodationCategory,
        max_guests: int,
        base_price: Money,
        description: str | None = None,
        amenities: list[str] | None = None,
        is_active: bool = True,
    ) -> None:
        super().__init__(id)
        if max_guests < 1:
            raise ValueError("Max guests must be a positive integer")
        self._name = name
        self._category = category
        self._max_guests = max_guests
        self._base_price = base_price
        self._description = description
        self._amenities = list(amenities or [])
        self._is_active = is_active

    @property
    def name(self) -> AccommodationName:
        return self._name

    @property
    def category(self) -> AccommodationCategory:
        return self._category

    @property
    def max_guests(self) -> int:
        return self._max_guests

    @property
    def base_price(self) -> Money:
        return self._base_price

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def amenities(self) -> list[str]:
        return list(self._amenities)

    @property
    def is_active(self) -> bool:
        return self._is_active

    def can_host(self, number_of_guests: int) -> bool:
        """指定人数が定員内かどうか"""
        return number_of_guests <= self._max_guests

    def rename(self, name: AccommodationName) -> None:
        self._name = name

    def describe(self, description: str | None) -> None:
        self._description = description

    def reprice(self, base_price: Money) -> None:
        self._base_price = base_price

    def replace_amenities(self, amenities: list[str]) -> None:
        self._amenities = list(amenities)

    def activate(self) -> None:
        self._is_active = True

    def deactivate(self) -> None:
        self._is_active = False
