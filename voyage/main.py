"""Voyage Central FastAPI application."""
import logging
import os
from contextlib import asynccontextmanager

# macOS: so WeasyPrint finds pango/glib when generating PDFs (only if not already set)
if os.name == "posix" and os.environ.get("DYLD_LIBRARY_PATH") in (None, ""):
    _brew_lib = "/opt/homebrew/opt/glib/lib:/opt/homebrew/opt/pango/lib:/opt/homebrew/lib"
    if os.path.exists("/opt/homebrew/opt/glib/lib"):
        os.environ["DYLD_LIBRARY_PATH"] = _brew_lib

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import IntegrityError

from voyage.core.auth.router import roles_router, router as auth_router
from voyage.core.config import settings
from voyage.core.exceptions import AppException
from voyage.core.exceptions.handlers import (
    app_exception_handler,
    http_exception_handler,
    integrity_error_handler,
    validation_exception_handler,
)
from voyage.core.logging_config import configure_logging
from voyage.modules.agencies.router import router as agencies_router
from voyage.modules.agents.router import router as agents_router
from voyage.modules.bookings.router import router as bookings_router
from voyage.modules.branches.router import router as branches_router
from voyage.modules.clients.router import router as clients_router
from voyage.modules.dashboard.router import router as dashboard_router
from voyage.modules.follow_ups.router import router as follow_ups_router
from voyage.modules.group_bookings.router import (
    client_bookings_router as group_client_bookings_router,
    router as group_bookings_router,
)
from voyage.modules.hotel_bookings.router import router as hotel_bookings_router
from voyage.modules.hotels.router import router as hotels_router
from voyage.modules.journey_bookings.router import router as journey_bookings_router
from voyage.modules.locations.router import cities_router, countries_router, states_router
from voyage.modules.packages.router import router as packages_router
from voyage.modules.receipts.router import router as receipts_router
from voyage.modules.reference_data.router import routers as reference_routers
from voyage.modules.staff.router import router as staff_router
from voyage.modules.subscriptions.router import router as subscriptions_router
from voyage.modules.tours.router import router as tours_router
from voyage.modules.vehicle_bookings.router import (
    group_client_router as group_client_vehicle_bookings_router,
    router as vehicle_bookings_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Voyage Central starting (%s)", settings.app_env)
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    configure_logging()
    app = FastAPI(
        title="Voyage Central",
        description="Admin backend for travel agencies",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)

    # Health check endpoint (must be first for Railway/Heroku health checks)
    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    # Platform
    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(roles_router, prefix="/api/v1")
    app.include_router(packages_router, prefix="/api/v1")
    app.include_router(agencies_router, prefix="/api/v1")
    app.include_router(subscriptions_router, prefix="/api/v1")

    # Agency setup
    app.include_router(branches_router, prefix="/api/v1")
    app.include_router(staff_router, prefix="/api/v1")
    app.include_router(countries_router, prefix="/api/v1")
    app.include_router(states_router, prefix="/api/v1")
    app.include_router(cities_router, prefix="/api/v1")
    for reference_router in reference_routers:
        app.include_router(reference_router, prefix="/api/v1")
    app.include_router(hotels_router, prefix="/api/v1")
    app.include_router(agents_router, prefix="/api/v1")
    app.include_router(tours_router, prefix="/api/v1")
    app.include_router(clients_router, prefix="/api/v1")

    # Bookings
    app.include_router(bookings_router, prefix="/api/v1")
    app.include_router(follow_ups_router, prefix="/api/v1")
    app.include_router(hotel_bookings_router, prefix="/api/v1")
    app.include_router(journey_bookings_router, prefix="/api/v1")
    app.include_router(vehicle_bookings_router, prefix="/api/v1")
    app.include_router(receipts_router, prefix="/api/v1")
    app.include_router(group_bookings_router, prefix="/api/v1")
    app.include_router(group_client_bookings_router, prefix="/api/v1")
    app.include_router(group_client_vehicle_bookings_router, prefix="/api/v1")
    app.include_router(dashboard_router, prefix="/api/v1")

    return app


app = create_app()
