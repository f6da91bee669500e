from enum import Enum


class TurnoverPolicy(str, Enum):
    """同日入れ替え（前の予約のチェックアウト日に次の予約がチェックイン）の扱い"""

    CLOSED = "closed"
    SAME_DAY_TURNOVER = "same_day_turnover"
