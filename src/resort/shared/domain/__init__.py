from .entity import AggregateRoot as AggregateRoot
from .entity import Entity as Entity
from .exception import (
    BookingConflictException as BookingConflictException,
)
from .exception import (
    BusinessRuleViolationException as BusinessRuleViolationException,
)
from .exception import (
    CapacityExceededException as CapacityExceededException,
)
from .exception import (
    DomainException as DomainException,
)
from .exception import (
    DuplicateResourceException as DuplicateResourceException,
)
from .exception import (
    ErrorKind as ErrorKind,
)
from .exception import (
    InvalidDateRangeException as InvalidDateRangeException,
)
from .exception import (
    InvalidStateException as InvalidStateException,
)
from .exception import (
    InvalidTransitionException as InvalidTransitionException,
)
from .exception import (
    OptimisticLockException as OptimisticLockException,
)
from .exception import (
    ResourceNotFoundException as ResourceNotFoundException,
)
from .repository import Repository as Repository
from .value_object import (
    Currency as Currency,
)
from .value_object import (
    Money as Money,
)
