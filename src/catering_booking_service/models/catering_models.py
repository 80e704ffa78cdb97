"""Catering entity models.

These models represent the persisted menus, service options, event requests
and reviews, and convert between the typed records and DynamoDB items.
Money and rating values are stored as exact decimal strings and parsed back
to ``Decimal`` on read.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, Field, PlainSerializer

# Decimal in Python, JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ServiceType(str, Enum):
    """Enumeration of the ways a menu can be served.

    Declaration order is the presentation order of service options.
    """

    PLATED = "plated"
    BUFFET = "buffet"
    COOK_ALONG = "cook-along"


class EventStatus(str, Enum):
    """Enumeration of event request status values."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"


def to_decimal(value: Any) -> Decimal:
    """Parse a stored number (string or DynamoDB ``Decimal``) exactly."""
    return Decimal(str(value))


def _put_optional(item: dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        item[key] = value


class Menu(BaseModel):
    """A sellable culinary experience.

    Stored in DynamoDB with ``id`` as partition key. Owns its service options
    and reviews.
    """

    id: str = Field(..., description="Unique menu identifier")
    name: str = Field(..., description="Menu name")
    description: str | None = Field(None, description="Menu description")
    thumbnail_image_url: str | None = Field(None, description="URL to a thumbnail image")
    average_rating: Money | None = Field(
        None, description="Average review rating (never recomputed)", ge=0, le=5
    )
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB item format.

        Returns:
            dict: DynamoDB-compatible representation
        """
        item: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

        _put_optional(item, "description", self.description)
        _put_optional(item, "thumbnail_image_url", self.thumbnail_image_url)

        if self.average_rating is not None:
            item["average_rating"] = str(self.average_rating)

        return item

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "Menu":
        """Create Menu from DynamoDB item.

        Args:
            item: DynamoDB item dictionary

        Returns:
            Menu: Parsed model instance
        """
        average_rating = item.get("average_rating")

        return cls(
            id=item["id"],
            name=item["name"],
            description=item.get("description"),
            thumbnail_image_url=item.get("thumbnail_image_url"),
            average_rating=to_decimal(average_rating) if average_rating is not None else None,
            created_at=datetime.fromisoformat(item["created_at"]),
            updated_at=datetime.fromisoformat(item["updated_at"]),
        )


class ServiceOption(BaseModel):
    """A priced way to deliver a menu.

    Stored in DynamoDB with ``id`` as partition key and a ``menu_id`` index.
    """

    id: str = Field(..., description="Unique service option identifier")
    menu_id: str = Field(..., description="Menu this option belongs to")
    service_type: ServiceType = Field(..., description="How the menu is served")
    price_per_person: Money = Field(..., description="Price per guest", gt=0)
    description: str | None = Field(None, description="Service option description")
    created_at: datetime = Field(..., description="Creation timestamp")

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB item format.

        Returns:
            dict: DynamoDB-compatible representation
        """
        item: dict[str, Any] = {
            "id": self.id,
            "menu_id": self.menu_id,
            "service_type": self.service_type.value,
            "price_per_person": str(self.price_per_person),
            "created_at": self.created_at.isoformat(),
        }

        _put_optional(item, "description", self.description)

        return item

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "ServiceOption":
        """Create ServiceOption from DynamoDB item.

        Args:
            item: DynamoDB item dictionary

        Returns:
            ServiceOption: Parsed model instance
        """
        return cls(
            id=item["id"],
            menu_id=item["menu_id"],
            service_type=ServiceType(item["service_type"]),
            price_per_person=to_decimal(item["price_per_person"]),
            description=item.get("description"),
            created_at=datetime.fromisoformat(item["created_at"]),
        )


class EventRequest(BaseModel):
    """A customer's booking request for a menu and service option.

    ``total_price`` is a snapshot taken at creation time; later changes to the
    service option price never alter it.
    """

    id: str = Field(..., description="Unique event request identifier")
    customer_name: str = Field(..., description="Customer name")
    customer_email: str = Field(..., description="Customer email address")
    customer_phone: str | None = Field(None, description="Customer phone number")
    menu_id: str = Field(..., description="Requested menu")
    service_option_id: str = Field(..., description="Requested service option")
    event_date: date = Field(..., description="Calendar date of the event")
    event_time: str = Field(..., description="Wall-clock time of the event")
    location: str = Field(..., description="Event location")
    guest_count: int = Field(..., description="Number of guests", gt=0)
    special_requests: str | None = Field(None, description="Free-text special requests")
    dietary_restrictions: str | None = Field(None, description="Free-text dietary restrictions")
    total_price: Money = Field(..., description="Price snapshot for the whole event")
    status: EventStatus = Field(default=EventStatus.PENDING, description="Current status")
    external_request_id: str | None = Field(
        None, description="Identifier of the request in an external payment system"
    )
    checkout_url: str | None = Field(None, description="Checkout URL sent to the customer")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB item format.

        Returns:
            dict: DynamoDB-compatible representation
        """
        item: dict[str, Any] = {
            "id": self.id,
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "menu_id": self.menu_id,
            "service_option_id": self.service_option_id,
            "event_date": self.event_date.isoformat(),
            "event_time": self.event_time,
            "location": self.location,
            "guest_count": self.guest_count,
            "total_price": str(self.total_price),
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

        _put_optional(item, "customer_phone", self.customer_phone)
        _put_optional(item, "special_requests", self.special_requests)
        _put_optional(item, "dietary_restrictions", self.dietary_restrictions)
        _put_optional(item, "external_request_id", self.external_request_id)
        _put_optional(item, "checkout_url", self.checkout_url)

        return item

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "EventRequest":
        """Create EventRequest from DynamoDB item.

        DynamoDB returns numbers as ``Decimal``, so ``guest_count`` is coerced
        back to ``int``.

        Args:
            item: DynamoDB item dictionary

        Returns:
            EventRequest: Parsed model instance
        """
        return cls(
            id=item["id"],
            customer_name=item["customer_name"],
            customer_email=item["customer_email"],
            customer_phone=item.get("customer_phone"),
            menu_id=item["menu_id"],
            service_option_id=item["service_option_id"],
            event_date=date.fromisoformat(item["event_date"]),
            event_time=item["event_time"],
            location=item["location"],
            guest_count=int(item["guest_count"]),
            special_requests=item.get("special_requests"),
            dietary_restrictions=item.get("dietary_restrictions"),
            total_price=to_decimal(item["total_price"]),
            status=EventStatus(item["status"]),
            external_request_id=item.get("external_request_id"),
            checkout_url=item.get("checkout_url"),
            created_at=datetime.fromisoformat(item["created_at"]),
            updated_at=datetime.fromisoformat(item["updated_at"]),
        )


class Review(BaseModel):
    """Customer feedback on a menu."""

    id: str = Field(..., description="Unique review identifier")
    menu_id: str = Field(..., description="Reviewed menu")
    customer_name: str = Field(..., description="Reviewer name")
    customer_email: str = Field(..., description="Reviewer email address")
    rating: int = Field(..., description="Rating from 1 to 5", ge=1, le=5)
    comment: str | None = Field(None, description="Free-text comment")
    created_at: datetime = Field(..., description="Creation timestamp")

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB item format.

        Returns:
            dict: DynamoDB-compatible representation
        """
        item: dict[str, Any] = {
            "id": self.id,
            "menu_id": self.menu_id,
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "rating": self.rating,
            "created_at": self.created_at.isoformat(),
        }

        _put_optional(item, "comment", self.comment)

        return item

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "Review":
        """Create Review from DynamoDB item.

        Args:
            item: DynamoDB item dictionary

        Returns:
            Review: Parsed model instance
        """
        return cls(
            id=item["id"],
            menu_id=item["menu_id"],
            customer_name=item["customer_name"],
            customer_email=item["customer_email"],
            rating=int(item["rating"]),
            comment=item.get("comment"),
            created_at=datetime.fromisoformat(item["created_at"]),
        )
