from typing import Generic, TypeVar

from .entity import Entity

ID = TypeVar("ID")
E = TypeVar("E")


class AggregateRoot(Entity[ID], Generic[ID, E]):
    """AggregateRoot 基底クラス

    - 集約の状態変更は必ず集約ルートのメソッドを経由する
    - 状態変更で発生した事実はドメインイベントとして記録し、コミット後に取り出す
    """

    def __init__(self, id: ID) -> None:
        super().__init__(id)
        self._domain_events: list[E] = []

    def add_domain_event(self, event: E) -> None:
        """ドメインイベントを追加する"""
        self._domain_events.append(event)

    def flush_domain_events(self) -> list[E]:
        """記録済みのドメインイベントを返してクリアする"""
        events = self._domain_events.copy()
        self._domain_events.clear()
        return events
