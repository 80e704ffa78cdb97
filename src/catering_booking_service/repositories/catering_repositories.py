"""DynamoDB repository classes for catering entities.

These repositories provide CRUD operations for menus, service options, event
requests and reviews. Absence is reported with ``None`` (single reads) or an
empty list (listings); DynamoDB failures are logged and re-raised as
``StorageError`` so callers can tell them apart from missing rows.
Reads by id are strongly consistent; per-menu queries go through the
``menu_id`` index and are eventually consistent.
"""

import logging
import uuid
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from botocore.exceptions import ClientError
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table

from catering_booking_service.errors import StorageError
from catering_booking_service.models.catering_models import (
    EventRequest,
    EventStatus,
    Menu,
    Review,
    ServiceOption,
)
from catering_booking_service.models.input_models import (
    CreateMenuInput,
    CreateReviewInput,
    CreateServiceOptionInput,
)

logger = logging.getLogger(__name__)

MENU_ID_INDEX = "menu_id-index"


def generate_id(prefix: str) -> str:
    """Generate a short unique identifier such as ``menu_1a2b3c4d5e6f``."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def _is_condition_failure(error: ClientError) -> bool:
    return error.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException"


def _collect_pages(fetch: Callable[..., dict[str, Any]], **kwargs: Any) -> list[dict[str, Any]]:
    """Run a scan or query to completion, following ``LastEvaluatedKey``."""
    items: list[dict[str, Any]] = []

    while True:
        response = fetch(**kwargs)
        items.extend(response.get("Items", []))

        last_key = response.get("LastEvaluatedKey")
        if not last_key:
            return items

        kwargs["ExclusiveStartKey"] = last_key


class _TableRepository:
    """Shared table wiring for the catering repositories."""

    def __init__(self, dynamodb_resource: DynamoDBServiceResource, table_name: str) -> None:
        """Initialize repository.

        Args:
            dynamodb_resource: Boto3 DynamoDB resource
            table_name: Name of the DynamoDB table
        """
        self.dynamodb = dynamodb_resource
        self.table_name = table_name
        self.table: Table = dynamodb_resource.Table(table_name)

    def _storage_error(self, operation: str, error: ClientError) -> StorageError:
        logger.error(f"Failed to {operation.replace('_', ' ')} in {self.table_name}: {error}")
        return StorageError(operation, str(error))

    def _get_item(self, operation: str, item_id: str) -> dict[str, Any] | None:
        try:
            response = self.table.get_item(Key={"id": item_id}, ConsistentRead=True)
        except ClientError as e:
            raise self._storage_error(operation, e) from e

        return response.get("Item")

    def _put_item(self, operation: str, item: dict[str, Any]) -> None:
        try:
            self.table.put_item(Item=item)
        except ClientError as e:
            raise self._storage_error(operation, e) from e

    def _scan_all(self, operation: str) -> list[dict[str, Any]]:
        try:
            return _collect_pages(self.table.scan)
        except ClientError as e:
            raise self._storage_error(operation, e) from e

    def _query_by_menu(self, operation: str, menu_id: str) -> list[dict[str, Any]]:
        try:
            return _collect_pages(
                self.table.query,
                IndexName=MENU_ID_INDEX,
                KeyConditionExpression="menu_id = :menu_id",
                ExpressionAttributeValues={":menu_id": menu_id},
            )
        except ClientError as e:
            raise self._storage_error(operation, e) from e

    def _delete_by_menu(self, operation: str, menu_id: str) -> int:
        items = self._query_by_menu(operation, menu_id)

        try:
            for item in items:
                self.table.delete_item(Key={"id": item["id"]})
        except ClientError as e:
            raise self._storage_error(operation, e) from e

        return len(items)


class MenuRepository(_TableRepository):
    """Repository for menu CRUD operations.

    Manages menu records in DynamoDB with ``id`` as partition key.
    """

    def create_menu(self, menu_input: CreateMenuInput) -> Menu:
        """Persist a new menu.

        Args:
            menu_input: Validated menu input

        Returns:
            Menu: The stored menu including generated id and timestamps

        Raises:
            StorageError: If DynamoDB rejects the write
        """
        now = datetime.now(UTC)

        menu = Menu(
            id=generate_id("menu"),
            name=menu_input.name,
            description=menu_input.description,
            thumbnail_image_url=menu_input.thumbnail_image_url,
            average_rating=None,
            created_at=now,
            updated_at=now,
        )

        self._put_item("create_menu", menu.to_dynamodb_item())
        return menu

    def get_menu(self, menu_id: str) -> Menu | None:
        """Retrieve a menu by ID.

        Args:
            menu_id: Menu identifier

        Returns:
            Menu if found, None otherwise
        """
        item = self._get_item("get_menu", menu_id)
        return Menu.from_dynamodb_item(item) if item is not None else None

    def list_menus(self) -> list[Menu]:
        """List every menu.

        Returns:
            list: List of Menu objects (empty list if none found)
        """
        return [Menu.from_dynamodb_item(item) for item in self._scan_all("list_menus")]

    def delete_menu(self, menu_id: str) -> bool:
        """Delete a menu row.

        Child service options and reviews are removed by their own
        repositories; see ``BookingService.delete_menu``.

        Args:
            menu_id: Menu identifier

        Returns:
            bool: True if the menu existed and was deleted, False if it did not exist
        """
        try:
            self.table.delete_item(
                Key={"id": menu_id},
                ConditionExpression="attribute_exists(id)",
            )
            return True

        except ClientError as e:
            if _is_condition_failure(e):
                return False
            raise self._storage_error("delete_menu", e) from e


class ServiceOptionRepository(_TableRepository):
    """Repository for service option CRUD operations.

    Uses a Global Secondary Index on ``menu_id`` for per-menu lookups.
    """

    def create_service_option(self, option_input: CreateServiceOptionInput) -> ServiceOption:
        """Persist a new service option.

        Args:
            option_input: Validated service option input

        Returns:
            ServiceOption: The stored option including generated id and timestamp
        """
        service_option = ServiceOption(
            id=generate_id("svc"),
            menu_id=option_input.menu_id,
            service_type=option_input.service_type,
            price_per_person=option_input.price_per_person,
            description=option_input.description,
            created_at=datetime.now(UTC),
        )

        self._put_item("create_service_option", service_option.to_dynamodb_item())
        return service_option

    def get_service_option(self, service_option_id: str) -> ServiceOption | None:
        """Retrieve a service option by ID.

        Args:
            service_option_id: Service option identifier

        Returns:
            ServiceOption if found, None otherwise
        """
        item = self._get_item("get_service_option", service_option_id)
        return ServiceOption.from_dynamodb_item(item) if item is not None else None

    def list_service_options(self) -> list[ServiceOption]:
        """List every service option across all menus."""
        return [
            ServiceOption.from_dynamodb_item(item)
            for item in self._scan_all("list_service_options")
        ]

    def list_service_options_for_menu(self, menu_id: str) -> list[ServiceOption]:
        """List service options belonging to a menu.

        Args:
            menu_id: Menu identifier

        Returns:
            list: List of ServiceOption objects (empty list if none found)
        """
        return [
            ServiceOption.from_dynamodb_item(item)
            for item in self._query_by_menu("list_service_options_for_menu", menu_id)
        ]

    def delete_service_options_for_menu(self, menu_id: str) -> int:
        """Delete every service option of a menu.

        Returns:
            int: Number of deleted options
        """
        return self._delete_by_menu("delete_service_options_for_menu", menu_id)


class EventRequestRepository(_TableRepository):
    """Repository for event request CRUD operations.

    Event requests are never deleted; only their status fields change.
    """

    def create_event_request(self, event_request: EventRequest) -> EventRequest:
        """Persist a priced event request.

        Args:
            event_request: Fully populated event request

        Returns:
            EventRequest: The stored request
        """
        self._put_item("create_event_request", event_request.to_dynamodb_item())
        return event_request

    def get_event_request(self, event_request_id: str) -> EventRequest | None:
        """Retrieve an event request by ID.

        Args:
            event_request_id: Event request identifier

        Returns:
            EventRequest if found, None otherwise
        """
        item = self._get_item("get_event_request", event_request_id)
        return EventRequest.from_dynamodb_item(item) if item is not None else None

    def list_event_requests(self) -> list[EventRequest]:
        """List every event request.

        Returns:
            list: List of EventRequest objects (empty list if none found)
        """
        return [
            EventRequest.from_dynamodb_item(item)
            for item in self._scan_all("list_event_requests")
        ]

    def update_status(
        self,
        event_request_id: str,
        status: EventStatus,
        checkout_url: str | None,
    ) -> EventRequest | None:
        """Update status, checkout URL and ``updated_at`` of an event request.

        All other attributes are left untouched. A null checkout URL removes
        the attribute.

        Args:
            event_request_id: Event request identifier
            status: New status
            checkout_url: New checkout URL or None

        Returns:
            The updated EventRequest, or None if no such request exists
        """
        update_expression = "SET #status = :status, updated_at = :updated_at"
        values: dict[str, Any] = {
            ":status": status.value,
            ":updated_at": datetime.now(UTC).isoformat(),
        }

        if checkout_url is None:
            update_expression += " REMOVE checkout_url"
        else:
            update_expression += ", checkout_url = :checkout_url"
            values[":checkout_url"] = checkout_url

        try:
            response = self.table.update_item(
                Key={"id": event_request_id},
                UpdateExpression=update_expression,
                ConditionExpression="attribute_exists(id)",
                ExpressionAttributeNames={"#status": "status"},
                ExpressionAttributeValues=values,
                ReturnValues="ALL_NEW",
            )

        except ClientError as e:
            if _is_condition_failure(e):
                return None
            raise self._storage_error("update_event_request_status", e) from e

        return EventRequest.from_dynamodb_item(response["Attributes"])


class ReviewRepository(_TableRepository):
    """Repository for review CRUD operations.

    Uses a Global Secondary Index on ``menu_id`` for per-menu lookups.
    """

    def create_review(self, review_input: CreateReviewInput) -> Review:
        """Persist a new review.

        Args:
            review_input: Validated review input

        Returns:
            Review: The stored review including generated id and timestamp
        """
        review = Review(
            id=generate_id("rev"),
            menu_id=review_input.menu_id,
            customer_name=review_input.customer_name,
            customer_email=review_input.customer_email,
            rating=review_input.rating,
            comment=review_input.comment,
            created_at=datetime.now(UTC),
        )

        self._put_item("create_review", review.to_dynamodb_item())
        return review

    def list_reviews_for_menu(self, menu_id: str) -> list[Review]:
        """List reviews of a menu.

        Args:
            menu_id: Menu identifier

        Returns:
            list: List of Review objects (empty list if none found)
        """
        return [
            Review.from_dynamodb_item(item)
            for item in self._query_by_menu("list_reviews_for_menu", menu_id)
        ]

    def delete_reviews_for_menu(self, menu_id: str) -> int:
        """Delete every review of a menu.

        Returns:
            int: Number of deleted reviews
        """
        return self._delete_by_menu("delete_reviews_for_menu", menu_id)
