"""Booking service implementing the catering client operations."""

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any

from catering_booking_service.errors import (
    EventRequestNotFoundError,
    MenuNotFoundError,
    ServiceOptionMenuMismatchError,
    ServiceOptionNotFoundError,
    StorageError,
)
from catering_booking_service.models.catering_models import (
    EventRequest,
    EventStatus,
    Menu,
    Review,
    ServiceOption,
)
from catering_booking_service.models.input_models import (
    CreateEventRequestInput,
    CreateMenuInput,
    CreateReviewInput,
    CreateServiceOptionInput,
    UpdateEventRequestStatusInput,
    parse_input,
)
from catering_booking_service.models.view_models import (
    EventRequestWithDetails,
    MenuWithReviews,
    MenuWithServiceOptions,
)
from catering_booking_service.observability.decorators import traced
from catering_booking_service.observability.metrics import (
    record_event_request_created,
    record_review_created,
    record_status_update,
)
from catering_booking_service.repositories.catering_repositories import (
    EventRequestRepository,
    MenuRepository,
    ReviewRepository,
    ServiceOptionRepository,
    generate_id,
)
from catering_booking_service.services.view_assemblers import (
    assemble_event_request_listing,
    assemble_event_request_with_details,
    assemble_menu_listing,
    assemble_menu_with_reviews,
    calculate_total_price,
    order_service_options,
)

logger = logging.getLogger(__name__)


@contextmanager
def _storage_boundary(operation: str) -> Iterator[None]:
    """Log storage failures for an operation before letting them propagate."""
    try:
        yield
    except StorageError as e:
        logger.error(f"{operation} failed: {e}")
        raise


class BookingService:
    """Service for browsing menus, submitting event requests and reviewing.

    Each operation validates its input, checks references fail-fast and
    performs its single write last, so a rejected request never leaves a
    partial row behind. Storage failures are logged and re-raised without
    retry.
    """

    def __init__(
        self,
        menu_repository: MenuRepository,
        service_option_repository: ServiceOptionRepository,
        event_request_repository: EventRequestRepository,
        review_repository: ReviewRepository,
    ) -> None:
        """Initialize the BookingService.

        Args:
            menu_repository: Repository for menus
            service_option_repository: Repository for service options
            event_request_repository: Repository for event requests
            review_repository: Repository for reviews
        """
        self.menu_repository = menu_repository
        self.service_option_repository = service_option_repository
        self.event_request_repository = event_request_repository
        self.review_repository = review_repository

    def _require_menu(self, menu_id: str) -> Menu:
        menu = self.menu_repository.get_menu(menu_id)
        if menu is None:
            logger.warning(f"Menu {menu_id} not found")
            raise MenuNotFoundError(menu_id)
        return menu

    @traced("create_menu")
    async def create_menu(self, data: CreateMenuInput | Mapping[str, Any]) -> Menu:
        """Create a menu.

        Args:
            data: Menu name, optional description and thumbnail URL

        Returns:
            The persisted Menu

        Raises:
            ValidationError: If the input is invalid
            StorageError: If the menu cannot be stored
        """
        menu_input = parse_input(CreateMenuInput, data)

        with _storage_boundary("create_menu"):
            menu = self.menu_repository.create_menu(menu_input)

        logger.info(f"Created menu {menu.id} ({menu.name})")
        return menu

    @traced("create_service_option")
    async def create_service_option(
        self, data: CreateServiceOptionInput | Mapping[str, Any]
    ) -> ServiceOption:
        """Add a priced service option to an existing menu.

        Raises:
            ValidationError: If the input is invalid
            MenuNotFoundError: If the menu does not exist
            StorageError: If storage fails
        """
        option_input = parse_input(CreateServiceOptionInput, data)

        with _storage_boundary("create_service_option"):
            self._require_menu(option_input.menu_id)
            service_option = self.service_option_repository.create_service_option(option_input)

        logger.info(
            f"Created {service_option.service_type.value} service option {service_option.id} "
            f"for menu {service_option.menu_id}"
        )
        return service_option

    @traced("get_menus")
    async def get_menus(self) -> list[MenuWithServiceOptions]:
        """List all menus with their service options, ordered by name."""
        with _storage_boundary("get_menus"):
            menus = self.menu_repository.list_menus()
            service_options = self.service_option_repository.list_service_options()

        return assemble_menu_listing(menus, service_options)

    @traced("get_menu_by_id")
    async def get_menu_by_id(self, menu_id: str) -> MenuWithReviews | None:
        """Get a menu with its service options and reviews.

        Args:
            menu_id: Menu identifier

        Returns:
            MenuWithReviews if the menu exists, None otherwise
        """
        with _storage_boundary("get_menu_by_id"):
            menu = self.menu_repository.get_menu(menu_id)
            if menu is None:
                return None

            service_options = self.service_option_repository.list_service_options_for_menu(menu_id)
            reviews = self.review_repository.list_reviews_for_menu(menu_id)

        return assemble_menu_with_reviews(menu, service_options, reviews)

    @traced("get_service_options_by_menu")
    async def get_service_options_by_menu(self, menu_id: str) -> list[ServiceOption]:
        """List a menu's service options; unknown menus yield an empty list."""
        with _storage_boundary("get_service_options_by_menu"):
            service_options = self.service_option_repository.list_service_options_for_menu(menu_id)

        return order_service_options(service_options)

    @traced("delete_menu")
    async def delete_menu(self, menu_id: str) -> None:
        """Delete a menu together with its service options and reviews.

        Event requests referencing the menu are kept.

        Raises:
            MenuNotFoundError: If the menu does not exist
            StorageError: If storage fails
        """
        with _storage_boundary("delete_menu"):
            self._require_menu(menu_id)

            option_count = self.service_option_repository.delete_service_options_for_menu(menu_id)
            review_count = self.review_repository.delete_reviews_for_menu(menu_id)

            if not self.menu_repository.delete_menu(menu_id):
                raise MenuNotFoundError(menu_id)

        logger.info(
            f"Deleted menu {menu_id} with {option_count} service options "
            f"and {review_count} reviews"
        )

    @traced("create_event_request")
    async def create_event_request(
        self, data: CreateEventRequestInput | Mapping[str, Any]
    ) -> EventRequestWithDetails:
        """Submit a priced event request.

        The total price is ``price_per_person * guest_count`` at the time of
        submission and is stored, not recomputed later.

        Args:
            data: Customer details, menu and service option references, event details

        Returns:
            The persisted request with its menu and service option, status ``pending``

        Raises:
            ValidationError: If the input is invalid
            MenuNotFoundError: If the menu does not exist
            ServiceOptionNotFoundError: If the service option does not exist
            ServiceOptionMenuMismatchError: If the option belongs to another menu
            StorageError: If storage fails
        """
        request_input = parse_input(CreateEventRequestInput, data)

        with _storage_boundary("create_event_request"):
            menu = self._require_menu(request_input.menu_id)

            service_option = self.service_option_repository.get_service_option(
                request_input.service_option_id
            )
            if service_option is None:
                logger.warning(f"Service option {request_input.service_option_id} not found")
                raise ServiceOptionNotFoundError(request_input.service_option_id)

            if service_option.menu_id != menu.id:
                logger.warning(
                    f"Service option {service_option.id} belongs to menu "
                    f"{service_option.menu_id}, not {menu.id}"
                )
                raise ServiceOptionMenuMismatchError(service_option.id, menu.id)

            now = datetime.now(UTC)
            event_request = self.event_request_repository.create_event_request(
                EventRequest(
                    id=generate_id("evt"),
                    customer_name=request_input.customer_name,
                    customer_email=request_input.customer_email,
                    customer_phone=request_input.customer_phone,
                    menu_id=menu.id,
                    service_option_id=service_option.id,
                    event_date=request_input.event_date,
                    event_time=request_input.event_time,
                    location=request_input.location,
                    guest_count=request_input.guest_count,
                    special_requests=request_input.special_requests,
                    dietary_restrictions=request_input.dietary_restrictions,
                    total_price=calculate_total_price(service_option, request_input.guest_count),
                    status=EventStatus.PENDING,
                    created_at=now,
                    updated_at=now,
                )
            )

        record_event_request_created(service_option.service_type.value, event_request.total_price)
        logger.info(
            f"Created event request {event_request.id} for menu {menu.id}: "
            f"{event_request.guest_count} guests, total {event_request.total_price}"
        )
        return assemble_event_request_with_details(event_request, menu, service_option)

    @traced("get_event_requests")
    async def get_event_requests(self) -> list[EventRequestWithDetails]:
        """List all event requests with their current menu and service option."""
        with _storage_boundary("get_event_requests"):
            event_requests = self.event_request_repository.list_event_requests()
            menus = self.menu_repository.list_menus()
            service_options = self.service_option_repository.list_service_options()

        return assemble_event_request_listing(event_requests, menus, service_options)

    @traced("get_event_request_by_id")
    async def get_event_request_by_id(
        self, event_request_id: str
    ) -> EventRequestWithDetails | None:
        """Get an event request with its current menu and service option.

        Args:
            event_request_id: Event request identifier

        Returns:
            EventRequestWithDetails if found, None otherwise. A request whose
            menu or service option has been deleted is reported as None.
        """
        with _storage_boundary("get_event_request_by_id"):
            event_request = self.event_request_repository.get_event_request(event_request_id)
            if event_request is None:
                return None

            menu = self.menu_repository.get_menu(event_request.menu_id)
            service_option = self.service_option_repository.get_service_option(
                event_request.service_option_id
            )

        if menu is None or service_option is None:
            logger.warning(
                f"Event request {event_request_id} references a deleted menu or service option"
            )
            return None

        return assemble_event_request_with_details(event_request, menu, service_option)

    @traced("update_event_request_status")
    async def update_event_request_status(
        self, data: UpdateEventRequestStatusInput | Mapping[str, Any]
    ) -> EventRequestWithDetails:
        """Move an event request to a new status.

        Any status may be set regardless of the current one. Only ``status``,
        ``checkout_url`` and ``updated_at`` change.

        Raises:
            ValidationError: If the input is invalid
            EventRequestNotFoundError: If the event request does not exist
            MenuNotFoundError: If the request's menu has been deleted
            ServiceOptionNotFoundError: If the request's service option has been deleted
            StorageError: If storage fails
        """
        status_input = parse_input(UpdateEventRequestStatusInput, data)

        with _storage_boundary("update_event_request_status"):
            event_request = self.event_request_repository.update_status(
                status_input.id, status_input.status, status_input.checkout_url
            )
            if event_request is None:
                logger.warning(f"Event request {status_input.id} not found")
                raise EventRequestNotFoundError(status_input.id)

            menu = self._require_menu(event_request.menu_id)
            service_option = self.service_option_repository.get_service_option(
                event_request.service_option_id
            )
            if service_option is None:
                raise ServiceOptionNotFoundError(event_request.service_option_id)

        record_status_update(event_request.status.value)
        logger.info(f"Event request {event_request.id} moved to {event_request.status.value}")
        return assemble_event_request_with_details(event_request, menu, service_option)

    @traced("create_review")
    async def create_review(self, data: CreateReviewInput | Mapping[str, Any]) -> Review:
        """Review an existing menu.

        The menu's ``average_rating`` is not updated.

        Raises:
            ValidationError: If the input is invalid
            MenuNotFoundError: If the menu does not exist
            StorageError: If storage fails
        """
        review_input = parse_input(CreateReviewInput, data)

        with _storage_boundary("create_review"):
            self._require_menu(review_input.menu_id)
            review = self.review_repository.create_review(review_input)

        record_review_created(review.rating)
        logger.info(f"Created review {review.id} for menu {review.menu_id}")
        return review

    @traced("get_reviews_by_menu")
    async def get_reviews_by_menu(self, menu_id: str) -> list[Review]:
        """List a menu's reviews oldest first; unknown menus yield an empty list."""
        with _storage_boundary("get_reviews_by_menu"):
            reviews = self.review_repository.list_reviews_for_menu(menu_id)

        return sorted(reviews, key=lambda review: review.created_at)
