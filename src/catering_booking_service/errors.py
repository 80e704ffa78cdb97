"""Typed failures raised by the booking service.

Read operations report absence with ``None`` or an empty list; these
exceptions are reserved for writes that cannot proceed.
"""

from typing import Any


class BookingServiceError(Exception):
    """Base class for all booking service failures."""


class ValidationError(BookingServiceError):
    """Input failed a field constraint.

    Attributes:
        errors: One entry per offending field, each with ``field`` and ``message``
    """

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        self.errors = errors
        fields = ", ".join(str(error["field"]) for error in errors)
        super().__init__(f"Invalid input: {fields}")


class NotFoundError(BookingServiceError):
    """A referenced entity does not exist."""

    entity = "Entity"

    def __init__(self, entity_id: str) -> None:
        self.entity_id = entity_id
        super().__init__(f"{self.entity} {entity_id} not found")


class MenuNotFoundError(NotFoundError):
    entity = "Menu"


class ServiceOptionNotFoundError(NotFoundError):
    entity = "Service option"


class EventRequestNotFoundError(NotFoundError):
    entity = "Event request"


class ConsistencyError(BookingServiceError):
    """A cross-entity invariant would be violated."""


class ServiceOptionMenuMismatchError(ConsistencyError):
    """The service option belongs to a different menu than the one requested."""

    def __init__(self, service_option_id: str, menu_id: str) -> None:
        self.service_option_id = service_option_id
        self.menu_id = menu_id
        super().__init__(
            f"Service option {service_option_id} does not belong to menu {menu_id}"
        )


class StorageError(BookingServiceError):
    """The underlying store rejected or failed an operation."""

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(f"Storage operation '{operation}' failed: {message}")
