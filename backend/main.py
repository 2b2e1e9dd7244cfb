import logging
import re
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from settings import get_settings
from src.middleware import RequestLoggingMiddleware
from src.monitoring import get_metrics
from src.mrt.client import MRTClient
from src.mrt.errors import InvalidTimeFormat, StationNotFound, UpstreamError
from src.mrt.models import ScheduleResponse, StationEstimateResponse, StationFacilityResponse, StationResponse
from src.mrt.service import StationService

settings = get_settings()

# Structured logging: include module and level; handlers can add JSON later
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])

STATION_ID_MAX_LEN = 64
STATION_ID_PATTERN = re.compile(r"[a-zA-Z0-9_\-]+")


@asynccontextmanager
async def lifespan(app: FastAPI):
    client = MRTClient(url=settings.mrt_stations_url, timeout=settings.mrt_request_timeout_seconds)
    app.state.station_service = StationService(client, timezone=settings.timezone)
    yield
    app.state.station_service = None
    client.close()


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
def unhandled_exception_handler(request: Request, exc: Exception):
    """Return consistent JSON error for unhandled exceptions (500). Skip validation/HTTP errors."""
    from fastapi.exceptions import RequestValidationError
    if isinstance(exc, (HTTPException, RequestValidationError)):
        raise exc
    logger.exception("telemetry unhandled_exception path=%s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occurred. Please try again later."},
    )


# Order: last added = outermost. RequestLogging wraps rate limiting, which wraps CORS.
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(RequestLoggingMiddleware)


def _get_service() -> StationService:
    service: StationService | None = getattr(app.state, "station_service", None)
    if not service:
        raise HTTPException(status_code=503, detail="Station service not ready.")
    return service


def _validate_station_id(station_id: str) -> None:
    if not station_id or len(station_id) > STATION_ID_MAX_LEN or not STATION_ID_PATTERN.fullmatch(station_id):
        raise HTTPException(
            status_code=400,
            detail="Invalid station_id (alphanumeric, underscore, hyphen only; max 64 chars).",
        )


def _upstream_failure(route: str, station_id: str, exc: Exception) -> HTTPException:
    logger.warning(
        "telemetry %s_route_error station_id=%s error=%s",
        route,
        station_id,
        str(exc),
        extra={"station_id": station_id, "error": str(exc)},
    )
    return HTTPException(status_code=502, detail=str(exc))


@app.get("/health")
@limiter.exempt
def health(request: Request):
    logger.info("telemetry route=health")
    return {"status": "ok"}


@app.get("/metrics")
@limiter.exempt
def metrics(request: Request):
    """Request counts by status class, upstream fetch outcomes, uptime."""
    return get_metrics()


# --- Stations ---


@app.get("/v1/api/stations", response_model=list[StationResponse])
def list_stations(request: Request):
    logger.info("telemetry route=stations")
    service = _get_service()
    try:
        return service.list_stations()
    except UpstreamError as e:
        raise _upstream_failure("stations", "", e) from e


@app.get("/v1/api/stations/{station_id}", response_model=list[ScheduleResponse])
def get_station_schedule(request: Request, station_id: str):
    """Departures after the current time (Asia/Jakarta by default) in both directions."""
    _validate_station_id(station_id)
    logger.info("telemetry route=schedule station_id=%s", station_id)
    service = _get_service()
    try:
        return service.get_schedule(station_id)
    except StationNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except (UpstreamError, InvalidTimeFormat) as e:
        raise _upstream_failure("schedule", station_id, e) from e


@app.get("/v1/api/stations/{station_id}/estimates", response_model=list[StationEstimateResponse])
def get_station_estimates(request: Request, station_id: str):
    _validate_station_id(station_id)
    logger.info("telemetry route=estimates station_id=%s", station_id)
    service = _get_service()
    try:
        return service.get_estimates(station_id)
    except StationNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except UpstreamError as e:
        raise _upstream_failure("estimates", station_id, e) from e


@app.get("/v1/api/stations/{station_id}/facilities", response_model=list[StationFacilityResponse])
def get_station_facilities(request: Request, station_id: str):
    _validate_station_id(station_id)
    logger.info("telemetry route=facilities station_id=%s", station_id)
    service = _get_service()
    try:
        return service.get_facilities(station_id)
    except StationNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except UpstreamError as e:
        raise _upstream_failure("facilities", station_id, e) from e
