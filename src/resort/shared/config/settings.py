from __future__ import annotations

import os
from typing import Literal

from pydantic import BaseModel, Field

from resort.shared.utils.logger import DEFAULT_SERVICE_NAME


class Settings(BaseModel):
    """アプリケーション設定

    Lambda と同じく環境変数から読み込む。
    """

    storage_backend: Literal["dynamodb", "memory"] = "dynamodb"
    table_name: str | None = None
    event_bus_name: str | None = None
    event_source: str = Field(default="resort.booking", min_length=1)
    service_name: str = Field(default=DEFAULT_SERVICE_NAME, min_length=1)
    turnover_policy: Literal["closed", "same_day_turnover"] = "closed"

    @classmethod
    def from_env(cls) -> Settings:
        """環境変数から設定を生成する"""
        values: dict[str, str] = {}
        env_keys = {
            "storage_backend": "STORAGE_BACKEND",
            "table_name": "TABLE_NAME",
            "event_bus_name": "EVENT_BUS_NAME",
            "event_source": "EVENT_SOURCE",
            "service_name": "POWERTOOLS_SERVICE_NAME",
            "turnover_policy": "BOOKING_TURNOVER_POLICY",
        }
        for field_name, env_key in env_keys.items():
            value = os.getenv(env_key)
            if value:
                values[field_name] = value
        return cls.model_validate(values)
