"""
Exception hierarchy for the scale set resource handler.

Provides layered exception structure for validation and remote-call errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the handler
"""

from typing import Any


class ScaleSetProviderException(Exception):
    """Base exception for all scale set handler errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(ScaleSetProviderException):
    """Raised when configuration validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, details)


class ResourceIdParseError(ScaleSetProviderException):
    """Raised when an Azure resource ID cannot be parsed."""

    def __init__(self, resource_id: str, reason: str) -> None:
        """
        Initialize resource ID parse error.

        Args:
            resource_id: The malformed ID
            reason: Why parsing failed
        """
        self.resource_id = resource_id
        super().__init__(f"Cannot parse Azure ID {resource_id!r}: {reason}")


class ResourceAlreadyExistsError(ScaleSetProviderException):
    """Raised when creating a resource that already exists and must be imported."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """
        Initialize import-required error.

        Args:
            resource_type: Handler resource type name
            resource_id: ID of the existing resource
        """
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(
            f"A resource with the ID {resource_id!r} already exists - to be managed it "
            f"needs to be imported into the state. Please see the resource documentation "
            f"for {resource_type!r} for more information."
        )


class ScaleSetOperationError(ScaleSetProviderException):
    """Raised when a remote call against a scale set fails."""

    def __init__(
        self,
        verb: str,
        name: str,
        resource_group: str,
        cause: Any,
    ) -> None:
        """
        Initialize remote operation error.

        Args:
            verb: What was being done (creating, retrieving, ...)
            name: Scale set name
            resource_group: Resource group name
            cause: Underlying error or reason text
        """
        self.verb = verb
        self.name = name
        self.resource_group = resource_group
        super().__init__(
            f"Error {verb} Linux Virtual Machine Scale Set {name!r} "
            f"(Resource Group {resource_group!r}): {cause}"
        )


class OperationTimeoutError(ScaleSetProviderException):
    """Raised when a long-running operation does not finish in time."""

    def __init__(self, operation: str, timeout_seconds: float) -> None:
        """
        Initialize timeout error.

        Args:
            operation: Operation being waited on
            timeout_seconds: Limit that was exceeded
        """
        self.operation = operation
        super().__init__(
            f"timed out after {timeout_seconds:.0f}s waiting for {operation}",
            {"operation": operation, "timeout_seconds": timeout_seconds},
        )


class FlattenError(ScaleSetProviderException):
    """Raised when a remote value cannot be mapped back onto the schema."""

    def __init__(self, field: str, reason: str) -> None:
        """
        Initialize flatten error.

        Args:
            field: Schema field being populated
            reason: What was wrong with the remote value
        """
        self.field = field
        super().__init__(f"Error flattening `{field}`: {reason}", {"field": field})
