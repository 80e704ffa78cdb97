"""Input models for booking service operations.

Each model holds the acceptance rules for one write operation. Service
operations accept either an instance or a plain mapping; mappings go through
``parse_input`` so failures surface as the service's own ``ValidationError``.
"""

from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Annotated, Any, TypeVar

from pydantic import AfterValidator, AnyUrl, BaseModel, EmailStr, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from catering_booking_service.errors import ValidationError
from catering_booking_service.models.catering_models import EventStatus, ServiceType

InputModel = TypeVar("InputModel", bound=BaseModel)

_URL_ADAPTER = TypeAdapter(AnyUrl)
_EMAIL_ADAPTER = TypeAdapter(EmailStr)


def _check_url(value: str) -> str:
    try:
        _URL_ADAPTER.validate_python(value)
    except PydanticValidationError as e:
        raise ValueError("value is not a valid URL") from e
    return value


def _check_email(value: str) -> str:
    try:
        _EMAIL_ADAPTER.validate_python(value)
    except PydanticValidationError as e:
        raise ValueError("value is not a valid email address") from e
    return value


# Validated but stored exactly as sent
UrlString = Annotated[str, AfterValidator(_check_url)]
EmailString = Annotated[str, AfterValidator(_check_email)]


class CreateMenuInput(BaseModel):
    """Input for creating a menu."""

    name: str = Field(..., min_length=1, description="Menu name")
    description: str | None = Field(None, description="Menu description")
    thumbnail_image_url: UrlString | None = Field(None, description="Thumbnail image URL")


class CreateServiceOptionInput(BaseModel):
    """Input for creating a service option on an existing menu."""

    menu_id: str = Field(..., min_length=1, description="Owning menu")
    service_type: ServiceType = Field(..., description="How the menu is served")
    price_per_person: Decimal = Field(
        ..., gt=0, max_digits=10, decimal_places=2, description="Price per guest"
    )
    description: str | None = Field(None, description="Service option description")


class CreateEventRequestInput(BaseModel):
    """Input for submitting an event request.

    ``event_date`` accepts any calendar date, including past ones, and
    ``event_time`` is free text.
    """

    customer_name: str = Field(..., min_length=1, description="Customer name")
    customer_email: EmailString = Field(..., description="Customer email address")
    customer_phone: str | None = Field(None, description="Customer phone number")
    menu_id: str = Field(..., min_length=1, description="Requested menu")
    service_option_id: str = Field(..., min_length=1, description="Requested service option")
    event_date: date = Field(..., description="Calendar date of the event")
    event_time: str = Field(..., description="Wall-clock time of the event")
    location: str = Field(..., min_length=1, description="Event location")
    guest_count: int = Field(..., gt=0, description="Number of guests")
    special_requests: str | None = Field(None, description="Free-text special requests")
    dietary_restrictions: str | None = Field(None, description="Free-text dietary restrictions")


class UpdateEventRequestStatusInput(BaseModel):
    """Input for moving an event request to a new status.

    Any status may follow any other.
    """

    id: str = Field(..., min_length=1, description="Event request to update")
    status: EventStatus = Field(..., description="New status")
    checkout_url: UrlString | None = Field(None, description="Checkout URL for the customer")


class CreateReviewInput(BaseModel):
    """Input for reviewing a menu."""

    menu_id: str = Field(..., min_length=1, description="Reviewed menu")
    customer_name: str = Field(..., min_length=1, description="Reviewer name")
    customer_email: EmailString = Field(..., description="Reviewer email address")
    rating: int = Field(..., ge=1, le=5, description="Rating from 1 to 5")
    comment: str | None = Field(None, description="Free-text comment")


def parse_input(model: type[InputModel], data: InputModel | Mapping[str, Any]) -> InputModel:
    """Validate raw operation input against an input model.

    Args:
        model: Input model class to validate against
        data: Model instance or plain mapping

    Returns:
        Validated model instance

    Raises:
        ValidationError: If any field fails its constraint
    """
    if isinstance(data, model):
        return data

    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        errors = [
            {
                "field": ".".join(str(part) for part in error["loc"]) or "input",
                "message": error["msg"],
            }
            for error in e.errors()
        ]
        raise ValidationError(errors) from e
