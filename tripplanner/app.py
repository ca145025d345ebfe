from __future__ import annotations

import logging
import math

from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from .auth.dependencies import RequestContext, require_user
from .config import DEFAULT_APP_CONFIG
from .errors import TripPlannerError, ValidationError
from .geo.distance import Coordinate
from .places.models import PlaceOut, TripKind, TripOut, TripRequest, TripsResponse
from .places.service import (
    find_by_popular_names,
    find_nearby,
    recommend,
    search,
    search_by_location_and_tags,
)
from .users.interests import get_user_interests, update_interests, validate_interests
from .users.models import (
    InterestsResponse,
    InterestsUpdate,
    LoginRequest,
    RegisterRequest,
    UserOut,
)
from .users.store import authenticate, get_user, public_user, register
from .users.trips import add_trip, get_trips
from .validation import unwrap_or_raise, validate_place_id

logging.basicConfig(level=DEFAULT_APP_CONFIG.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(title="Trip Planner API", version="1.0.0")
app.add_middleware(SessionMiddleware, secret_key=DEFAULT_APP_CONFIG.session_secret)


# ── Error handling ───────────────────────────────────────────────────────


@app.exception_handler(TripPlannerError)
async def trip_planner_error_handler(request: Request, exc: TripPlannerError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path"))
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"message": message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": str(exc)})


def _reference(lat: float | None, lon: float | None) -> Coordinate | None:
    if lat is None or lon is None:
        return None
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise ValidationError("lat and lon must be finite numbers")
    return Coordinate(lat, lon)


def _start_session(request: Request, user: dict) -> None:
    request.session["user"] = {"id": user["id"], "name": user["name"], "email": user["email"]}


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/register", response_model=UserOut, status_code=201)
def register_user(body: RegisterRequest, request: Request) -> dict:
    user = register(body.name, body.email, body.password, body.date_of_birth)
    _start_session(request, user)
    return user


@app.post("/auth/login", response_model=UserOut)
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.email, body.password)
    if not user:
        raise ValidationError("Invalid credentials")
    _start_session(request, user)
    return user


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me", response_model=UserOut)
def auth_me(ctx: RequestContext = Depends(require_user)) -> dict:
    return public_user(get_user(ctx.user_id))


@app.put("/auth/interests", response_model=InterestsResponse)
@app.put("/auth/update-interests", response_model=InterestsResponse)
def put_interests(
    body: InterestsUpdate,
    ctx: RequestContext = Depends(require_user),
) -> InterestsResponse:
    interests = unwrap_or_raise(validate_interests(body.interests))
    saved = update_interests(ctx.user_id, interests)
    return InterestsResponse(message="Interests updated", interests=saved)


# ── Place endpoints ──────────────────────────────────────────────────────


@app.get("/places/nearby", response_model=list[PlaceOut])
def places_nearby(
    lat: float | None = Query(default=None),
    lon: float | None = Query(default=None),
) -> list[PlaceOut]:
    return find_nearby(_reference(lat, lon), limit=DEFAULT_APP_CONFIG.nearby_limit)


@app.get("/places/search", response_model=list[PlaceOut])
def places_search(
    query: str | None = Query(default=None),
    location: str | None = Query(default=None),
    tags: str | None = Query(default=None),
) -> list[PlaceOut]:
    if location or tags:
        return search_by_location_and_tags(location, tags)
    return search(query)


@app.get("/places/common", response_model=list[PlaceOut])
def places_common() -> list[PlaceOut]:
    return find_by_popular_names(
        DEFAULT_APP_CONFIG.popular_places, limit=DEFAULT_APP_CONFIG.popular_limit,
    )


@app.get("/places/recommended", response_model=list[PlaceOut])
def places_recommended(
    lat: float | None = Query(default=None),
    lon: float | None = Query(default=None),
    ctx: RequestContext = Depends(require_user),
) -> list[PlaceOut]:
    return recommend(
        get_user_interests(ctx.user_id),
        _reference(lat, lon),
        candidate_limit=DEFAULT_APP_CONFIG.recommend_candidate_limit,
        result_limit=DEFAULT_APP_CONFIG.recommend_result_limit,
    )


# ── Trip endpoints ───────────────────────────────────────────────────────


@app.get("/places/trips", response_model=TripsResponse)
def trips(ctx: RequestContext = Depends(require_user)) -> TripsResponse:
    return TripsResponse(
        upcoming=get_trips(ctx.user_id, TripKind.upcoming),
        completed=get_trips(ctx.user_id, TripKind.completed),
    )


@app.put("/places/trips/{kind}", response_model=list[TripOut])
def put_trip(
    kind: TripKind,
    body: TripRequest,
    ctx: RequestContext = Depends(require_user),
) -> list[TripOut]:
    place_id = unwrap_or_raise(validate_place_id(body.place_id))
    return add_trip(ctx.user_id, kind, place_id)
