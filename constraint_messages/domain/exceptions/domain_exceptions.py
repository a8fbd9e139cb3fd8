"""Domain layer exceptions for business rule violations."""


class DomainException(Exception):
    """
    Base exception for domain layer.

    Domain exceptions represent business rule violations and should be
    raised when domain invariants are broken.

    Examples:
        - Invalid entity state
        - Business rule violations
        - Domain constraint failures
    """

    def __init__(self, message: str, error_code: str = "DOMAIN_ERROR"):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
        """
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class InvalidEntityStateException(DomainException):
    """Raised when an entity is in an invalid state."""

    def __init__(self, message: str):
        super().__init__(message, error_code="INVALID_ENTITY_STATE")


class InternalInconsistencyException(DomainException):
    """
    Raised when the validation engine and the bean shapes it validates
    disagree, e.g. a parameter-backed bean has no field for a parameter.

    This is a programming error, not a client error.
    """

    def __init__(self, message: str):
        super().__init__(message, error_code="INTERNAL_INCONSISTENCY")
