"""Environment-driven wiring shared by the uvicorn and Lambda entry points."""

import logging
import os
from typing import Any

from catering_booking_service.repositories.catering_repositories import (
    EventRequestRepository,
    MenuRepository,
    ReviewRepository,
    ServiceOptionRepository,
)
from catering_booking_service.services.booking_service import BookingService

logger = logging.getLogger(__name__)


def create_booking_service(dynamodb_resource: Any) -> BookingService:
    """Create the booking service with one repository per table.

    Table names come from ``DYNAMODB_*_TABLE`` environment variables.

    Args:
        dynamodb_resource: Boto3 DynamoDB resource

    Returns:
        Configured BookingService instance
    """
    menus_table = os.getenv("DYNAMODB_MENUS_TABLE", "catering-menus")
    options_table = os.getenv("DYNAMODB_SERVICE_OPTIONS_TABLE", "catering-service-options")
    requests_table = os.getenv("DYNAMODB_EVENT_REQUESTS_TABLE", "catering-event-requests")
    reviews_table = os.getenv("DYNAMODB_REVIEWS_TABLE", "catering-reviews")

    logger.info(
        f"Repositories configured - menus: {menus_table}, service options: {options_table}, "
        f"event requests: {requests_table}, reviews: {reviews_table}"
    )

    return BookingService(
        menu_repository=MenuRepository(dynamodb_resource, menus_table),
        service_option_repository=ServiceOptionRepository(dynamodb_resource, options_table),
        event_request_repository=EventRequestRepository(dynamodb_resource, requests_table),
        review_repository=ReviewRepository(dynamodb_resource, reviews_table),
    )


def get_cors_allow_origins() -> list[str]:
    """Read allowed CORS origins from the comma-separated ``CORS_ALLOW_ORIGINS``."""
    origins = os.getenv("CORS_ALLOW_ORIGINS", "*")
    return [origin.strip() for origin in origins.split(",") if origin.strip()]
