from .exceptions import (
    BookingConflictException,
    BusinessRuleViolationException,
    CapacityExceededException,
    DomainException,
    DuplicateResourceException,
    ErrorKind,
    InvalidDateRangeException,
    InvalidStateException,
    InvalidTransitionException,
    OptimisticLockException,
    ResourceNotFoundException,
)

__all__ = [
    "ErrorKind",
    "DomainException",
    "ResourceNotFoundException",
    "InvalidDateRangeException",
    "BusinessRuleViolationException",
    "CapacityExceededException",
    "BookingConflictException",
    "InvalidTransitionException",
    "InvalidStateException",
    "DuplicateResourceException",
    "OptimisticLockException",
]
