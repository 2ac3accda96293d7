"""
Exception classes for schemaguard.

This module defines the exception types raised while resolving schemas and
abilities and while validating queries and entity payloads against a
principal's permitted fields.
"""


class SchemaGuardError(Exception):
    """Base exception for all schemaguard errors."""

    pass


class ValidationError(SchemaGuardError):
    """
    Raised when a query or payload references a field the principal may not use.

    This is the single request-rejection signal of the package. Callers are
    expected to translate it into a client error response.
    """

    def __init__(self, key: str, path: str | None = None, reason: str | None = None):
        """
        Initialize the exception.

        Params:
            key: The offending key as it appeared in the input
            path: Dotted attribute path of the offending key, if known
            reason: Short machine-oriented explanation of the rejection
        """
        self.key = key
        self.path = path
        self.reason = reason

        if path and path != key:
            message = f"Invalid parameter {key} at {path}"
        else:
            message = f"Invalid parameter {key}"

        super().__init__(message)

    @property
    def details(self) -> dict[str, str | None]:
        """Key and path of the rejected parameter, for error responses."""
        return {"key": self.key, "path": self.path}


class UnknownModelError(SchemaGuardError, KeyError):
    """Raised when a model uid is not present in the schema registry."""

    def __init__(self, uid: str, available: list[str] | None = None):
        """
        Initialize the exception.

        Params:
            uid: The model uid that was looked up
            available: Registered model uids, for the error message
        """
        self.uid = uid
        self.available = available or []
        message = f"Model '{uid}' is not registered"
        if self.available:
            message += f". Available models: {', '.join(self.available)}"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return self.args[0]


class DuplicateModelError(SchemaGuardError):
    """Raised when attempting to register a model uid that already exists."""

    def __init__(self, uid: str):
        """
        Initialize the exception.

        Params:
            uid: The model uid that is already registered
        """
        self.uid = uid
        super().__init__(f"Model '{uid}' is already registered")


class RuleDefinitionError(SchemaGuardError):
    """Raised when a permission rule cannot be built from its definition."""

    def __init__(self, reason: str):
        """
        Initialize the exception.

        Params:
            reason: Why the rule definition is invalid
        """
        self.reason = reason
        super().__init__(f"Invalid rule definition: {reason}")
