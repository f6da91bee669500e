from .accommodation_query import AccommodationQuery
from .accommodation_repository import AccommodationRepository

__all__ = ["AccommodationQuery", "AccommodationRepository"]
