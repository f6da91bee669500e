from abc import abstractmethod

from resort.accommodation.domain.entity.accommodation import Accommodation
from resort.accommodation.domain.repository.accommodation_query import (
    AccommodationQuery,
)
from resort.accommodation.domain.value_object import (
    AccommodationId,
    AccommodationName,
)
from resort.shared.domain import Repository


class AccommodationRepository(Repository[Accommodation, AccommodationId]):
    """宿泊施設リポジトリのインターフェース

    名前の一意性はストア側でも保証し、重複時は DuplicateResourceException を送出する。
    """

    @abstractmethod
    def save(self, accommodation: Accommodation) -> None:
        """宿泊施設を新規保存する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, accommodation_id: AccommodationId) -> Accommodation | None:
        """IDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_name(self, name: AccommodationName) -> Accommodation | None:
        """名前で検索する（大文字小文字を区別しない）"""
        raise NotImplementedError

    @abstractmethod
    def find(self, query: AccommodationQuery) -> list[Accommodation]:
        """条件に一致する宿泊施設を名前順で返す"""
        raise NotImplementedError

    @abstractmethod
    def update(self, accommodation: Accommodation) -> None:
        """宿泊施設を更新する"""
        raise NotImplementedError
