from .entity import Accommodation as Accommodation
from .enum import AccommodationCategory as AccommodationCategory
from .repository import AccommodationQuery as AccommodationQuery
from .repository import AccommodationRepository as AccommodationRepository
from .value_object import AccommodationId as AccommodationId
from .value_object import AccommodationName as AccommodationName
