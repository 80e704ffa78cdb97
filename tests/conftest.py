"""Shared pytest fixtures and configuration for all tests."""

import copy
import os
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

import pytest
from botocore.exceptions import ClientError

# Entry modules skip eager app creation in test mode
os.environ.setdefault("ENVIRONMENT", "test")

from catering_booking_service.models.catering_models import (  # noqa: E402
    EventRequest,
    EventStatus,
    Menu,
    Review,
    ServiceOption,
    ServiceType,
)


def _condition_failed(operation: str) -> ClientError:
    return ClientError(
        {"Error": {"Code": "ConditionalCheckFailedException", "Message": "Condition failed"}},
        operation,
    )


def _as_stored(item: dict[str, Any]) -> dict[str, Any]:
    """Mimic DynamoDB: numbers come back as Decimal."""
    return {
        key: Decimal(value) if isinstance(value, int) and not isinstance(value, bool) else value
        for key, value in item.items()
    }


class InMemoryTable:
    """Dict-backed stand-in for the subset of the boto3 Table API the repositories use."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.items: dict[str, dict[str, Any]] = {}

    def put_item(self, Item: dict[str, Any], **_kwargs: Any) -> dict[str, Any]:  # noqa: N803
        self.items[Item["id"]] = _as_stored(copy.deepcopy(Item))
        return {}

    def get_item(self, Key: dict[str, Any], **_kwargs: Any) -> dict[str, Any]:  # noqa: N803
        item = self.items.get(Key["id"])
        return {"Item": copy.deepcopy(item)} if item is not None else {}

    def delete_item(
        self, Key: dict[str, Any], ConditionExpression: str | None = None  # noqa: N803
    ) -> dict[str, Any]:
        if ConditionExpression == "attribute_exists(id)" and Key["id"] not in self.items:
            raise _condition_failed("DeleteItem")
        self.items.pop(Key["id"], None)
        return {}

    def scan(self, **_kwargs: Any) -> dict[str, Any]:
        return {"Items": [copy.deepcopy(item) for item in self.items.values()]}

    def query(
        self,
        KeyConditionExpression: str,  # noqa: N803
        ExpressionAttributeValues: dict[str, Any],  # noqa: N803
        **_kwargs: Any,
    ) -> dict[str, Any]:
        attribute, placeholder = (part.strip() for part in KeyConditionExpression.split("="))
        value = ExpressionAttributeValues[placeholder]
        return {
            "Items": [
                copy.deepcopy(item) for item in self.items.values() if item.get(attribute) == value
            ]
        }

    def update_item(
        self,
        Key: dict[str, Any],  # noqa: N803
        UpdateExpression: str,  # noqa: N803
        ExpressionAttributeValues: dict[str, Any],  # noqa: N803
        ExpressionAttributeNames: dict[str, str] | None = None,  # noqa: N803
        ConditionExpression: str | None = None,  # noqa: N803
        **_kwargs: Any,
    ) -> dict[str, Any]:
        if ConditionExpression == "attribute_exists(id)" and Key["id"] not in self.items:
            raise _condition_failed("UpdateItem")

        names = ExpressionAttributeNames or {}
        item = self.items.setdefault(Key["id"], dict(Key))

        set_clause, _, remove_clause = UpdateExpression.partition(" REMOVE ")
        for assignment in set_clause.removeprefix("SET ").split(","):
            attribute, placeholder = (part.strip() for part in assignment.split("="))
            item[names.get(attribute, attribute)] = ExpressionAttributeValues[placeholder]

        for attribute in filter(None, (part.strip() for part in remove_clause.split(","))):
            item.pop(names.get(attribute, attribute), None)

        self.items[Key["id"]] = _as_stored(item)
        return {"Attributes": copy.deepcopy(self.items[Key["id"]])}


class InMemoryDynamoDB:
    """Stand-in for ``boto3.resource("dynamodb")`` handing out in-memory tables."""

    def __init__(self) -> None:
        self.tables: dict[str, InMemoryTable] = {}

    def Table(self, name: str) -> InMemoryTable:  # noqa: N802
        return self.tables.setdefault(name, InMemoryTable(name))


@pytest.fixture
def in_memory_dynamodb() -> InMemoryDynamoDB:
    """Fixture providing an empty in-memory DynamoDB resource."""
    return InMemoryDynamoDB()


@pytest.fixture
def fixed_now() -> datetime:
    """Fixture providing a fixed UTC timestamp."""
    return datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def sample_menu(fixed_now: datetime) -> Menu:
    """Fixture providing a stored menu."""
    return Menu(
        id="menu_aaaaaaaaaaaa",
        name="Test Menu",
        description="Seasonal tasting menu",
        thumbnail_image_url="https://images.example.com/menus/test.jpg",
        average_rating=None,
        created_at=fixed_now,
        updated_at=fixed_now,
    )


@pytest.fixture
def sample_service_option(sample_menu: Menu, fixed_now: datetime) -> ServiceOption:
    """Fixture providing a plated service option at 25.00 per person."""
    return ServiceOption(
        id="svc_bbbbbbbbbbbb",
        menu_id=sample_menu.id,
        service_type=ServiceType.PLATED,
        price_per_person=Decimal("25.00"),
        description="Three courses served at the table",
        created_at=fixed_now,
    )


@pytest.fixture
def sample_event_request(
    sample_menu: Menu, sample_service_option: ServiceOption, fixed_now: datetime
) -> EventRequest:
    """Fixture providing a pending event request for ten guests."""
    return EventRequest(
        id="evt_cccccccccccc",
        customer_name="Jane Doe",
        customer_email="jane.doe@gmail.com",
        customer_phone="555-0100",
        menu_id=sample_menu.id,
        service_option_id=sample_service_option.id,
        event_date=datetime(2024, 6, 15).date(),
        event_time="18:30",
        location="12 Harbour Street",
        guest_count=10,
        special_requests="Window seating",
        dietary_restrictions="Two vegetarians",
        total_price=Decimal("250.00"),
        status=EventStatus.PENDING,
        created_at=fixed_now,
        updated_at=fixed_now,
    )


@pytest.fixture
def sample_review(sample_menu: Menu, fixed_now: datetime) -> Review:
    """Fixture providing a five-star review."""
    return Review(
        id="rev_dddddddddddd",
        menu_id=sample_menu.id,
        customer_name="John Smith",
        customer_email="john.smith@gmail.com",
        rating=5,
        comment="Wonderful evening",
        created_at=fixed_now,
    )


@pytest.fixture
def event_request_payload(sample_menu: Menu, sample_service_option: ServiceOption) -> dict:
    """Fixture providing a valid createEventRequest payload."""
    return {
        "customer_name": "Jane Doe",
        "customer_email": "jane.doe@gmail.com",
        "customer_phone": "555-0100",
        "menu_id": sample_menu.id,
        "service_option_id": sample_service_option.id,
        "event_date": "2024-06-15",
        "event_time": "18:30",
        "location": "12 Harbour Street",
        "guest_count": 10,
        "special_requests": "Window seating",
        "dietary_restrictions": "Two vegetarians",
    }
