"""Nested response shapes assembled from several entities."""

from pydantic import Field

from catering_booking_service.models.catering_models import (
    EventRequest,
    Menu,
    Money,
    Review,
    ServiceOption,
)


class MenuWithServiceOptions(Menu):
    """Menu with its ordered service options and lowest per-person price."""

    service_options: list[ServiceOption] = Field(default_factory=list)
    min_price: Money | None = Field(None, description="Lowest price per person, if any")


class MenuWithReviews(MenuWithServiceOptions):
    """Menu detail view including every review."""

    reviews: list[Review] = Field(default_factory=list)


class EventRequestWithDetails(EventRequest):
    """Event request with its menu and service option as they are now."""

    menu: Menu
    service_option: ServiceOption
