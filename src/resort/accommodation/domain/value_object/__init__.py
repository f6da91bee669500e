from .accommodation_id import AccommodationId
from .accommodation_name import AccommodationName

__all__ = ["AccommodationId", "AccommodationName"]
