"""Unit tests for catering entity models."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from catering_booking_service.models.catering_models import (
    EventRequest,
    EventStatus,
    Menu,
    Review,
    ServiceOption,
    ServiceType,
)


@pytest.mark.unit
class TestEnums:
    """Test suite for ServiceType and EventStatus."""

    def test_service_type_values(self) -> None:
        """Test that the closed set of service types is defined in order."""
        assert [service_type.value for service_type in ServiceType] == [
            "plated",
            "buffet",
            "cook-along",
        ]

    def test_event_status_values(self) -> None:
        """Test that all lifecycle statuses are defined."""
        assert EventStatus.PENDING == "pending"
        assert EventStatus.ACCEPTED == "accepted"
        assert EventStatus.REJECTED == "rejected"
        assert EventStatus.CONFIRMED == "confirmed"
        assert EventStatus.COMPLETED == "completed"


@pytest.mark.unit
class TestMenu:
    """Test suite for Menu model."""

    def test_to_dynamodb_item_omits_null_attributes(self, sample_menu: Menu) -> None:
        """Test that optional attributes are left out when null."""
        menu = sample_menu.model_copy(update={"description": None, "thumbnail_image_url": None})

        item = menu.to_dynamodb_item()

        assert item["id"] == menu.id
        assert item["name"] == "Test Menu"
        assert "description" not in item
        assert "thumbnail_image_url" not in item
        assert "average_rating" not in item

    def test_average_rating_stored_as_string(self, sample_menu: Menu) -> None:
        """Test that the rating is stored as an exact decimal string."""
        menu = sample_menu.model_copy(update={"average_rating": Decimal("4.25")})

        item = menu.to_dynamodb_item()

        assert item["average_rating"] == "4.25"

    def test_from_dynamodb_item_parses_rating(self, sample_menu: Menu) -> None:
        """Test that a stored rating string comes back as Decimal."""
        item = sample_menu.to_dynamodb_item()
        item["average_rating"] = "4.50"

        menu = Menu.from_dynamodb_item(item)

        assert menu.average_rating == Decimal("4.50")
        assert isinstance(menu.average_rating, Decimal)
        assert menu.created_at == sample_menu.created_at

    def test_average_rating_serializes_as_json_number(self, sample_menu: Menu) -> None:
        """Test that JSON output carries ratings as numbers, not strings."""
        menu = sample_menu.model_copy(update={"average_rating": Decimal("4.5")})

        data = menu.model_dump(mode="json")

        assert data["average_rating"] == 4.5


@pytest.mark.unit
class TestServiceOption:
    """Test suite for ServiceOption model."""

    def test_price_round_trip_is_exact(self, sample_service_option: ServiceOption) -> None:
        """Test that price survives storage without float drift."""
        item = sample_service_option.to_dynamodb_item()

        assert item["price_per_person"] == "25.00"
        assert item["service_type"] == "plated"

        option = ServiceOption.from_dynamodb_item(item)

        assert option.price_per_person == Decimal("25.00")
        assert option.service_type == ServiceType.PLATED

    def test_price_must_be_positive(self, sample_service_option: ServiceOption) -> None:
        """Test that non-positive prices are rejected."""
        data = sample_service_option.model_dump()
        data["price_per_person"] = Decimal("0")

        with pytest.raises(ValidationError):
            ServiceOption(**data)

    def test_price_serializes_as_json_number(self, sample_service_option: ServiceOption) -> None:
        """Test that prices are JSON numbers."""
        assert sample_service_option.model_dump(mode="json")["price_per_person"] == 25.0


@pytest.mark.unit
class TestEventRequest:
    """Test suite for EventRequest model."""

    def test_to_dynamodb_item_keeps_date_and_time_separate(
        self, sample_event_request: EventRequest
    ) -> None:
        """Test that the event date is a plain date and the time a raw string."""
        item = sample_event_request.to_dynamodb_item()

        assert item["event_date"] == "2024-06-15"
        assert item["event_time"] == "18:30"
        assert item["total_price"] == "250.00"
        assert item["status"] == "pending"
        assert "checkout_url" not in item
        assert "external_request_id" not in item

    def test_from_dynamodb_item_coerces_numbers(self, sample_event_request: EventRequest) -> None:
        """Test that DynamoDB Decimal numbers are coerced back to int."""
        item = sample_event_request.to_dynamodb_item()
        item["guest_count"] = Decimal("10")

        event_request = EventRequest.from_dynamodb_item(item)

        assert event_request.guest_count == 10
        assert isinstance(event_request.guest_count, int)
        assert event_request.event_date == date(2024, 6, 15)
        assert event_request.total_price == Decimal("250.00")
        assert event_request.model_dump() == sample_event_request.model_dump()

    def test_optional_payment_fields_round_trip(self, sample_event_request: EventRequest) -> None:
        """Test that external request id and checkout URL are preserved."""
        event_request = sample_event_request.model_copy(
            update={
                "external_request_id": "ext_123",
                "checkout_url": "https://pay.example.com/checkout/1",
                "status": EventStatus.ACCEPTED,
            }
        )

        restored = EventRequest.from_dynamodb_item(event_request.to_dynamodb_item())

        assert restored.external_request_id == "ext_123"
        assert restored.checkout_url == "https://pay.example.com/checkout/1"
        assert restored.status == EventStatus.ACCEPTED

    def test_total_price_serializes_as_json_number(
        self, sample_event_request: EventRequest
    ) -> None:
        """Test that the total price is a JSON number."""
        data = sample_event_request.model_dump(mode="json")

        assert data["total_price"] == 250.0
        assert data["event_date"] == "2024-06-15"


@pytest.mark.unit
class TestReview:
    """Test suite for Review model."""

    def test_from_dynamodb_item_coerces_rating(self, sample_review: Review) -> None:
        """Test that the rating comes back as int."""
        item = sample_review.to_dynamodb_item()
        item["rating"] = Decimal("5")

        review = Review.from_dynamodb_item(item)

        assert review.rating == 5
        assert isinstance(review.rating, int)

    def test_comment_omitted_when_null(self, sample_review: Review) -> None:
        """Test that a missing comment is not stored."""
        review = sample_review.model_copy(update={"comment": None})

        assert "comment" not in review.to_dynamodb_item()
        assert Review.from_dynamodb_item(review.to_dynamodb_item()).comment is None

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range_rejected(self, sample_review: Review, rating: int) -> None:
        """Test that ratings outside 1..5 are rejected."""
        data = sample_review.model_dump()
        data["rating"] = rating

        with pytest.raises(ValidationError):
            Review(**data)
