from dataclasses import dataclass


@dataclass(frozen=True)
class AccommodationName:
    """宿泊施設名（施設間で一意）"""

    value: str

    def __post_init__(self) -> None:
        if not self.value or len(self.value.strip()) == 0:
            raise ValueError("Accommodation name cannot be empty")
        if len(self.value) > 200:
            raise ValueError("Accommodation name is too long (max 200 characters)")

    def __str__(self) -> str:
        return self.value

    def normalized(self) -> str:
        """一意性チェック用のキー（大文字小文字と前後の空白を無視）"""
        return self.value.strip().lower()
