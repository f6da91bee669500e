from dataclasses import dataclass

from pydantic import EmailStr, TypeAdapter, ValidationError

_email_adapter = TypeAdapter(EmailStr)


@dataclass(frozen=True)
class GuestContact:
    """宿泊者の連絡先（氏名・メールアドレス・電話番号）"""

    name: str
    email: str
    phone: str

    def __post_init__(self) -> None:
        if not self.name or len(self.name.strip()) == 0:
            raise ValueError("Guest name cannot be empty")
        if len(self.name) > 200:
            raise ValueError("Guest name is too long (max 200 characters)")
        try:
            _email_adapter.validate_python(self.email)
        except ValidationError as e:
            raise ValueError(f"Invalid guest email: {self.email}") from e
        if not self.phone or len(self.phone.strip()) == 0:
            raise ValueError("Guest phone cannot be empty")
        if len(self.phone) > 50:
            raise ValueError("Guest phone is too long (max 50 characters)")
