from dataclasses import dataclass

from resort.accommodation.domain.entity.accommodation import Accommodation
from resort.accommodation.domain.enum import AccommodationCategory


@dataclass(frozen=True)
class AccommodationQuery:
    """宿泊施設一覧の検索条件（指定された条件のみ AND で適用）"""

    is_active: bool | None = None
    category: AccommodationCategory | None = None

    def matches(self, accommodation: Accommodation) -> bool:
        if self.is_active is not None and accommodation.is_active != self.is_active:
            return False
        if self.category is not None and accommodation.category != self.category:
            return False
        return True
