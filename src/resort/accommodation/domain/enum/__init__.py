from .accommodation_category import AccommodationCategory

__all__ = ["AccommodationCategory"]
