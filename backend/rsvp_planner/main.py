"""FastAPI application entry point."""
import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from rsvp_planner.config import settings
from rsvp_planner.core.logging_config import setup_logging
from rsvp_planner.database import Base, engine

# Import routers
from rsvp_planner.routers import events, guests, guest_groups, rsvps, venues, logistics, reporting

# Import all models so Base.metadata knows about them
from rsvp_planner.models.venue import Venue                                  # noqa: F401
from rsvp_planner.models.event import Event                                  # noqa: F401
from rsvp_planner.models.guest import Guest, EventGuest                      # noqa: F401
from rsvp_planner.models.guest_group import GuestGroup, GuestGroupMember        # noqa: F401
from rsvp_planner.models.rsvp import RSVP                                    # noqa: F401
from rsvp_planner.models.logistics import LogisticsItem, LogisticsAssignment  # noqa: F401

setup_logging(settings.LOG_LEVEL, settings.LOG_FILE or None)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="RSVP Planner",
    description="Event planning API — guests, RSVPs, venues, logistics and reporting",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Every error leaves as {"success": false, "error": "..."}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg", "Invalid input"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": "; ".join(messages) or "Invalid input"},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "Server Error"},
    )


# Register routers
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(guests.router, prefix="/api/guests", tags=["Guests"])
app.include_router(guest_groups.router, prefix="/api/guest-groups", tags=["Guest Groups"])
app.include_router(rsvps.router, prefix="/api/rsvps", tags=["RSVPs"])
app.include_router(venues.router, prefix="/api/venues", tags=["Venues"])
app.include_router(logistics.router, prefix="/api/logistics", tags=["Logistics"])
app.include_router(reporting.router, prefix="/api/reporting", tags=["Reporting"])


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
