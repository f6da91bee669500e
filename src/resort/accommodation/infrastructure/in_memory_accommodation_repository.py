import copy
import threading

from resort.accommodation.domain.entity import Accommodation
from resort.accommodation.domain.repository import (
    AccommodationQuery,
    AccommodationRepository,
)
from resort.accommodation.domain.value_object import (
    AccommodationId,
    AccommodationName,
)
from resort.shared.domain import DuplicateResourceException, ResourceNotFoundException


class InMemoryAccommodationRepository(AccommodationRepository):
    """プロセス内メモリを使用した AccommodationRepository の実装（ローカル実行・テスト用）"""

    def __init__(self) -> None:
        self._items: dict[AccommodationId, Accommodation] = {}
        self._lock = threading.Lock()

    def save(self, accommodation: Accommodation) -> None:
        with self._lock:
            if accommodation.id in self._items:
                raise DuplicateResourceException(
                    f"Accommodation already exists: {accommodation.id}"
                )
            self._ensure_unique_name(accommodation)
            self._items[accommodation.id] = copy.deepcopy(accommodation)

    def find_by_id(self, accommodation_id: AccommodationId) -> Accommodation | None:
        with self._lock:
            item = self._items.get(accommodation_id)
            return copy.deepcopy(item) if item is not None else None

    def find_by_name(self, name: AccommodationName) -> Accommodation | None:
        with self._lock:
            for item in self._items.values():
                if item.name.normalized() == name.normalized():
                    return copy.deepcopy(item)
            return None

    def find(self, query: AccommodationQuery) -> list[Accommodation]:
        with self._lock:
            matched = [item for item in self._items.values() if query.matches(item)]
            matched.sort(key=lambda item: item.name.normalized())
            return [copy.deepcopy(item) for item in matched]

    def update(self, accommodation: Accommodation) -> None:
        with self._lock:
            if accommodation.id not in self._items:
                raise ResourceNotFoundException(
                    f"Accommodation not found: {accommodation.id}"
                )
            self._ensure_unique_name(accommodation)
            self._items[accommodation.id] = copy.deepcopy(accommodation)

    def _ensure_unique_name(self, accommodation: Accommodation) -> None:
        for item in self._items.values():
            if (
                item.id != accommodation.id
                and item.name.normalized() == accommodation.name.normalized()
            ):
                raise DuplicateResourceException(
                    f"Accommodation name already exists: {accommodation.name}"
                )
