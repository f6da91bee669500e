from enum import Enum


class AccommodationCategory(str, Enum):
    """宿泊施設の種別"""

    VILLA = "villa"
    SUITE = "suite"
    ROOM = "room"
    BUNGALOW = "bungalow"
