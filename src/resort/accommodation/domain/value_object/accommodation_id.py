from __future__ import annotations

import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class AccommodationId:
    """宿泊施設ID"""

    value: str

    def __post_init__(self) -> None:
        if not self.value or len(self.value.strip()) == 0:
            raise ValueError("Accommodation id cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> AccommodationId:
        return cls(value=str(uuid.uuid4()))
