"""FastAPI application exposing the booking operations over HTTP."""

import logging
from typing import Any

from fastapi import Body, FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from catering_booking_service.errors import (
    ConsistencyError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from catering_booking_service.models.catering_models import Menu, Review, ServiceOption
from catering_booking_service.models.view_models import (
    EventRequestWithDetails,
    MenuWithReviews,
    MenuWithServiceOptions,
)
from catering_booking_service.services.booking_service import BookingService

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


def _register_error_handlers(app: FastAPI) -> None:
    """Map booking service failures to HTTP responses."""

    @app.exception_handler(ValidationError)
    async def handle_validation_error(_request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc), "errors": exc.errors})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(_request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ConsistencyError)
    async def handle_consistency_error(_request: Request, exc: ConsistencyError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(StorageError)
    async def handle_storage_error(_request: Request, exc: StorageError) -> JSONResponse:
        logger.error(f"Storage failure surfaced to client: {exc}")
        return JSONResponse(status_code=503, content={"detail": "Storage temporarily unavailable"})


def create_app(
    booking_service: BookingService,
    cors_allow_origins: list[str] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Request bodies are passed to the service as plain mappings; the service
    owns validation.

    Args:
        booking_service: Service implementing the booking operations
        cors_allow_origins: Origins allowed to call the API from a browser

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Catering Booking Service API",
        description="Browse catering menus, submit event requests and leave reviews",
        version="1.0.0",
    )

    # Store services in app state for access in route handlers
    app.state.booking_service = booking_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_allow_origins or ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _register_error_handlers(app)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint.

        Returns:
            Health status indicating service is running
        """
        return HealthResponse(status="healthy")

    @app.get("/menus", response_model=list[MenuWithServiceOptions], tags=["Menus"])
    async def get_menus() -> list[MenuWithServiceOptions]:
        """List menus ordered by name, each with service options and minimum price."""
        menus: list[MenuWithServiceOptions] = await app.state.booking_service.get_menus()
        return menus

    @app.post("/menus", response_model=Menu, status_code=201, tags=["Menus"])
    async def create_menu(body: dict[str, Any] = Body(...)) -> Menu:
        """Create a menu."""
        menu: Menu = await app.state.booking_service.create_menu(body)
        return menu

    @app.get("/menus/{menu_id}", response_model=MenuWithReviews, tags=["Menus"])
    async def get_menu(menu_id: str) -> MenuWithReviews:
        """Get a menu with its service options and reviews.

        Raises:
            HTTPException: If the menu does not exist
        """
        menu = await app.state.booking_service.get_menu_by_id(menu_id)
        if menu is None:
            raise HTTPException(status_code=404, detail=f"Menu {menu_id} not found")
        return menu

    @app.delete("/menus/{menu_id}", status_code=204, tags=["Menus"])
    async def delete_menu(menu_id: str) -> Response:
        """Delete a menu with its service options and reviews."""
        await app.state.booking_service.delete_menu(menu_id)
        return Response(status_code=204)

    @app.get(
        "/menus/{menu_id}/service-options",
        response_model=list[ServiceOption],
        tags=["Service Options"],
    )
    async def get_service_options(menu_id: str) -> list[ServiceOption]:
        """List the service options of a menu."""
        options: list[ServiceOption] = await app.state.booking_service.get_service_options_by_menu(
            menu_id
        )
        return options

    @app.post(
        "/service-options",
        response_model=ServiceOption,
        status_code=201,
        tags=["Service Options"],
    )
    async def create_service_option(body: dict[str, Any] = Body(...)) -> ServiceOption:
        """Add a service option to a menu."""
        option: ServiceOption = await app.state.booking_service.create_service_option(body)
        return option

    @app.get("/menus/{menu_id}/reviews", response_model=list[Review], tags=["Reviews"])
    async def get_reviews(menu_id: str) -> list[Review]:
        """List the reviews of a menu."""
        reviews: list[Review] = await app.state.booking_service.get_reviews_by_menu(menu_id)
        return reviews

    @app.post("/reviews", response_model=Review, status_code=201, tags=["Reviews"])
    async def create_review(body: dict[str, Any] = Body(...)) -> Review:
        """Review a menu."""
        review: Review = await app.state.booking_service.create_review(body)
        return review

    @app.get(
        "/event-requests",
        response_model=list[EventRequestWithDetails],
        tags=["Event Requests"],
    )
    async def get_event_requests() -> list[EventRequestWithDetails]:
        """List event requests with their menus and service options."""
        requests: list[EventRequestWithDetails] = (
            await app.state.booking_service.get_event_requests()
        )
        return requests

    @app.post(
        "/event-requests",
        response_model=EventRequestWithDetails,
        status_code=201,
        tags=["Event Requests"],
    )
    async def create_event_request(body: dict[str, Any] = Body(...)) -> EventRequestWithDetails:
        """Submit an event request."""
        request: EventRequestWithDetails = await app.state.booking_service.create_event_request(
            body
        )
        return request

    @app.get(
        "/event-requests/{event_request_id}",
        response_model=EventRequestWithDetails,
        tags=["Event Requests"],
    )
    async def get_event_request(event_request_id: str) -> EventRequestWithDetails:
        """Get an event request with its menu and service option.

        Raises:
            HTTPException: If the event request does not exist
        """
        request = await app.state.booking_service.get_event_request_by_id(event_request_id)
        if request is None:
            raise HTTPException(
                status_code=404, detail=f"Event request {event_request_id} not found"
            )
        return request

    @app.patch(
        "/event-requests/{event_request_id}/status",
        response_model=EventRequestWithDetails,
        tags=["Event Requests"],
    )
    async def update_event_request_status(
        event_request_id: str, body: dict[str, Any] = Body(...)
    ) -> EventRequestWithDetails:
        """Change the status and checkout URL of an event request."""
        request: EventRequestWithDetails = (
            await app.state.booking_service.update_event_request_status(
                {**body, "id": event_request_id}
            )
        )
        return request

    return app
