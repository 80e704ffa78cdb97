"""Custom metrics for the catering booking service."""

from decimal import Decimal

from opentelemetry import metrics

# Get meter for booking service
meter = metrics.get_meter("catering-svc")

# Event request submissions counter
event_request_counter = meter.create_counter(
    name="event_requests_created_total",
    description="Total number of event requests created by service type",
    unit="1",
)

# Booking value histogram
booking_value_histogram = meter.create_histogram(
    name="event_request_total_price",
    description="Total price of created event requests",
    unit="1",
)

status_update_counter = meter.create_counter(
    name="event_request_status_updates_total",
    description="Total number of event request status updates by new status",
    unit="1",
)

review_counter = meter.create_counter(
    name="reviews_created_total",
    description="Total number of reviews created by rating",
    unit="1",
)

storage_failure_counter = meter.create_counter(
    name="storage_failures_total",
    description="Total number of failed storage operations by operation",
    unit="1",
)


def record_event_request_created(service_type: str, total_price: Decimal) -> None:
    """Record a newly created event request.

    Args:
        service_type: Service type of the booked option (e.g., "plated")
        total_price: Price snapshot of the request
    """
    event_request_counter.add(1, {"service_type": service_type})
    booking_value_histogram.record(float(total_price), {"service_type": service_type})


def record_status_update(status: str) -> None:
    """Record an event request status change.

    Args:
        status: The status the request was moved to
    """
    status_update_counter.add(1, {"status": status})


def record_review_created(rating: int) -> None:
    """Record a newly created review.

    Args:
        rating: Rating given by the reviewer
    """
    review_counter.add(1, {"rating": rating})


def record_storage_failure(operation: str) -> None:
    """Record a storage operation that failed.

    Args:
        operation: The storage operation that failed (e.g., "create_menu")
    """
    storage_failure_counter.add(1, {"operation": operation})
