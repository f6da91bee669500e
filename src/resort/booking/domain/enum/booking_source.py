from enum import Enum


class BookingSource(str, Enum):
    """予約の受付経路"""

    MANUAL = "manual"
    PHONE = "phone"
    WALK_IN = "walk_in"
    EXTERNAL_FORM = "external_form"
