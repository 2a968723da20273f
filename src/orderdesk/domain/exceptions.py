"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


# --- Value-object construction -----------------------------------------------


class InvalidAmount(ValidationError):
    pass


class InvalidCurrency(ValidationError):
    pass


class InvalidQuantity(ValidationError):
    pass


class InvalidName(ValidationError):
    pass


class InvalidEmail(ValidationError):
    pass


class EmptyId(ValidationError):
    pass


# --- Money arithmetic ---------------------------------------------------------


class IncompatibleCurrency(ValidationError):
    """Two amounts in different currencies were combined."""


class NegativeResult(ValidationError):
    """A subtraction would have produced a negative amount."""


class InvalidMultiplier(ValidationError):
    pass


# --- Order lifecycle ----------------------------------------------------------


class InvalidTransition(DomainException):
    """The order is not in a state that allows the requested operation."""


class AlreadyCanceled(InvalidTransition):
    pass


# --- Persistence ----------------------------------------------------------------


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConcurrentModificationError(DomainException):
    """The aggregate was saved by someone else since it was loaded."""
