"""Pricing and view assembly for the booking service.

Pure functions that join entity records into the nested shapes clients
consume and compute the two derived prices. Nothing here touches storage.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable
from decimal import Decimal

from catering_booking_service.models.catering_models import (
    EventRequest,
    Menu,
    Review,
    ServiceOption,
    ServiceType,
)
from catering_booking_service.models.view_models import (
    EventRequestWithDetails,
    MenuWithReviews,
    MenuWithServiceOptions,
)

logger = logging.getLogger(__name__)

_SERVICE_TYPE_ORDER = {service_type: position for position, service_type in enumerate(ServiceType)}


def calculate_min_price(service_options: Iterable[ServiceOption]) -> Decimal | None:
    """Lowest price per person among the options, or None when there are none."""
    prices = [option.price_per_person for option in service_options]
    return min(prices) if prices else None


def calculate_total_price(service_option: ServiceOption, guest_count: int) -> Decimal:
    """Price of an event for ``guest_count`` guests at the option's per-person rate."""
    return service_option.price_per_person * guest_count


def order_service_options(service_options: Iterable[ServiceOption]) -> list[ServiceOption]:
    """Order options by service type declaration order, then creation time."""
    return sorted(
        service_options,
        key=lambda option: (_SERVICE_TYPE_ORDER[option.service_type], option.created_at),
    )


def assemble_menu_with_service_options(
    menu: Menu, service_options: Iterable[ServiceOption]
) -> MenuWithServiceOptions:
    """Combine a menu with its service options and minimum price."""
    ordered = order_service_options(service_options)

    return MenuWithServiceOptions(
        **menu.model_dump(),
        service_options=ordered,
        min_price=calculate_min_price(ordered),
    )


def assemble_menu_listing(
    menus: Iterable[Menu], service_options: Iterable[ServiceOption]
) -> list[MenuWithServiceOptions]:
    """Build the browse view: every menu with its options, ordered by name.

    Args:
        menus: All menus to present
        service_options: Service options of any menu; unrelated ones are ignored

    Returns:
        List of MenuWithServiceOptions ordered by menu name (case-sensitive)
    """
    options_by_menu: dict[str, list[ServiceOption]] = defaultdict(list)
    for option in service_options:
        options_by_menu[option.menu_id].append(option)

    return [
        assemble_menu_with_service_options(menu, options_by_menu.get(menu.id, []))
        for menu in sorted(menus, key=lambda menu: menu.name)
    ]


def assemble_menu_with_reviews(
    menu: Menu,
    service_options: Iterable[ServiceOption],
    reviews: Iterable[Review],
) -> MenuWithReviews:
    """Build the menu detail view with options, every review and minimum price."""
    ordered = order_service_options(service_options)

    return MenuWithReviews(
        **menu.model_dump(),
        service_options=ordered,
        min_price=calculate_min_price(ordered),
        reviews=sorted(reviews, key=lambda review: review.created_at),
    )


def assemble_event_request_with_details(
    event_request: EventRequest, menu: Menu, service_option: ServiceOption
) -> EventRequestWithDetails:
    """Embed the current menu and service option rows into an event request."""
    return EventRequestWithDetails(
        **event_request.model_dump(),
        menu=menu,
        service_option=service_option,
    )


def assemble_event_request_listing(
    event_requests: Iterable[EventRequest],
    menus: Iterable[Menu],
    service_options: Iterable[ServiceOption],
) -> list[EventRequestWithDetails]:
    """Join event requests with their menus and service options.

    Requests whose menu or service option no longer exists are left out.

    Args:
        event_requests: Event requests to present
        menus: Menus available for the join
        service_options: Service options available for the join

    Returns:
        List of EventRequestWithDetails ordered by creation time
    """
    menus_by_id = {menu.id: menu for menu in menus}
    options_by_id = {option.id: option for option in service_options}

    details: list[EventRequestWithDetails] = []
    for event_request in sorted(event_requests, key=lambda request: request.created_at):
        menu = menus_by_id.get(event_request.menu_id)
        service_option = options_by_id.get(event_request.service_option_id)

        if menu is None or service_option is None:
            logger.warning(
                f"Skipping event request {event_request.id}: "
                f"menu or service option no longer exists"
            )
            continue

        details.append(assemble_event_request_with_details(event_request, menu, service_option))

    return details
