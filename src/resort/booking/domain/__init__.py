from .entity import Booking as Booking
from .enum import BookingSource as BookingSource
from .enum import BookingStatus as BookingStatus
from .enum import LifecycleEventKind as LifecycleEventKind
from .enum import TurnoverPolicy as TurnoverPolicy
from .event import BookingSnapshot as BookingSnapshot
from .event import Notifier as Notifier
from .factory import BookingDetails as BookingDetails
from .factory import BookingFactory as BookingFactory
from .repository import BookingQuery as BookingQuery
from .repository import BookingRepository as BookingRepository
from .value_object import BookingId as BookingId
from .value_object import GuestContact as GuestContact
from .value_object import StayPeriod as StayPeriod
