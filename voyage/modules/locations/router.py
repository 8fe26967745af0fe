"""API endpoints for Locations module."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.auth.dependencies import require_permission
from voyage.core.auth.models import User
from voyage.core.database.session import get_db
from voyage.modules.locations.schemas import (
    CityCreate,
    CityResponse,
    CityUpdate,
    CountryCreate,
    CountryResponse,
    CountryUpdate,
    StateCreate,
    StateResponse,
    StateUpdate,
)
from voyage.modules.locations.service import LocationService
from voyage.shared.schemas.base import ApiResponse, OptionResponse, PaginatedResponse, SortOrder

countries_router = APIRouter(prefix="/countries", tags=["Locations"])
states_router = APIRouter(prefix="/states", tags=["Locations"])
cities_router = APIRouter(prefix="/cities", tags=["Locations"])


# --- Countries ---


@countries_router.get("", response_model=ApiResponse[PaginatedResponse[CountryResponse]])
async def list_countries(
    search: str | None = Query(None),
    sort_by: str | None = Query(None),
    sort_order: SortOrder = Query(SortOrder.ASC),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("countries.read")),
):
    countries, total = await LocationService(db).list_countries(
        current_user.agency_id, search, sort_by, sort_order, page, limit
    )
    return ApiResponse(
        success=True,
        data=PaginatedResponse.create(
            items=[CountryResponse.model_validate(c) for c in countries],
            total=total,
            page=page,
            limit=limit,
        ),
    )


@countries_router.get("/all", response_model=ApiResponse[list[OptionResponse]])
async def list_all_countries(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("countries.read")),
):
    countries = await LocationService(db).list_all_countries(current_user.agency_id)
    return ApiResponse(
        success=True, data=[OptionResponse(id=c.id, name=c.country_name) for c in countries]
    )


@countries_router.post("", response_model=ApiResponse[CountryResponse], status_code=status.HTTP_201_CREATED)
async def create_country(
    data: CountryCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("countries.write")),
):
    country = await LocationService(db).create_country(current_user.agency_id, data, current_user.id)
    return ApiResponse(
        success=True,
        message="Country created successfully",
        data=CountryResponse.model_validate(country),
    )


@countries_router.get("/{country_id}", response_model=ApiResponse[CountryResponse])
async def get_country(
    country_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("countries.read")),
):
    country = await LocationService(db).get_country(country_id, current_user.agency_id)
    return ApiResponse(success=True, data=CountryResponse.model_validate(country))


@countries_router.put("/{country_id}", response_model=ApiResponse[CountryResponse])
async def update_country(
    country_id: int,
    data: CountryUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("countries.write")),
):
    country = await LocationService(db).update_country(
        country_id, current_user.agency_id, data, current_user.id
    )
    return ApiResponse(
        success=True,
        message="Country updated successfully",
        data=CountryResponse.model_validate(country),
    )


@countries_router.delete("/{country_id}", response_model=ApiResponse[None])
async def delete_country(
    country_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("countries.delete")),
):
    await LocationService(db).delete_country(country_id, current_user.agency_id, current_user.id)
    return ApiResponse(success=True, message="Country deleted successfully", data=None)


# --- States ---


@states_router.get("", response_model=ApiResponse[PaginatedResponse[StateResponse]])
async def list_states(
    search: str | None = Query(None),
    country_id: int | None = Query(None),
    sort_by: str | None = Query(None),
    sort_order: SortOrder = Query(SortOrder.ASC),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("states.read")),
):
    states, total = await LocationService(db).list_states(
        current_user.agency_id, search, country_id, sort_by, sort_order, page, limit
    )
    return ApiResponse(
        success=True,
        data=PaginatedResponse.create(
            items=[StateResponse.model_validate(s) for s in states],
            total=total,
            page=page,
            limit=limit,
        ),
    )


@states_router.get("/all", response_model=ApiResponse[list[OptionResponse]])
async def list_all_states(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("states.read")),
):
    states = await LocationService(db).list_all_states(current_user.agency_id)
    return ApiResponse(success=True, data=[OptionResponse(id=s.id, name=s.state_name) for s in states])


@states_router.get("/country/{country_id}", response_model=ApiResponse[list[OptionResponse]])
async def list_states_of_country(
    country_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("states.read")),
):
    """States of one country, for cascading selects."""
    states = await LocationService(db).list_states_of_country(country_id, current_user.agency_id)
    return ApiResponse(success=True, data=[OptionResponse(id=s.id, name=s.state_name) for s in states])


@states_router.post("", response_model=ApiResponse[StateResponse], status_code=status.HTTP_201_CREATED)
async def create_state(
    data: StateCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("states.write")),
):
    state = await LocationService(db).create_state(current_user.agency_id, data, current_user.id)
    return ApiResponse(
        success=True,
        message="State created successfully",
        data=StateResponse.model_validate(state),
    )


@states_router.get("/{state_id}", response_model=ApiResponse[StateResponse])
async def get_state(
    state_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("states.read")),
):
    state = await LocationService(db).get_state(state_id, current_user.agency_id)
    return ApiResponse(success=True, data=StateResponse.model_validate(state))


@states_router.put("/{state_id}", response_model=ApiResponse[StateResponse])
async def update_state(
    state_id: int,
    data: StateUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("states.write")),
):
    state = await LocationService(db).update_state(state_id, current_user.agency_id, data, current_user.id)
    return ApiResponse(
        success=True,
        message="State updated successfully",
        data=StateResponse.model_validate(state),
    )


@states_router.delete("/{state_id}", response_model=ApiResponse[None])
async def delete_state(
    state_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("states.delete")),
):
    await LocationService(db).delete_state(state_id, current_user.agency_id, current_user.id)
    return ApiResponse(success=True, message="State deleted successfully", data=None)


# --- Cities ---


@cities_router.get("", response_model=ApiResponse[PaginatedResponse[CityResponse]])
async def list_cities(
    search: str | None = Query(None),
    state_id: int | None = Query(None),
    sort_by: str | None = Query(None),
    sort_order: SortOrder = Query(SortOrder.ASC),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("cities.read")),
):
    cities, total = await LocationService(db).list_cities(
        current_user.agency_id, search, state_id, sort_by, sort_order, page, limit
    )
    return ApiResponse(
        success=True,
        data=PaginatedResponse.create(
            items=[CityResponse.model_validate(c) for c in cities],
            total=total,
            page=page,
            limit=limit,
        ),
    )


@cities_router.get("/all", response_model=ApiResponse[list[OptionResponse]])
async def list_all_cities(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("cities.read")),
):
    cities = await LocationService(db).list_all_cities(current_user.agency_id)
    return ApiResponse(success=True, data=[OptionResponse(id=c.id, name=c.city_name) for c in cities])


@cities_router.get("/state/{state_id}", response_model=ApiResponse[list[OptionResponse]])
async def list_cities_of_state(
    state_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("cities.read")),
):
    """Cities of one state, for cascading selects."""
    cities = await LocationService(db).list_cities_of_state(state_id, current_user.agency_id)
    return ApiResponse(success=True, data=[OptionResponse(id=c.id, name=c.city_name) for c in cities])


@cities_router.post("", response_model=ApiResponse[CityResponse], status_code=status.HTTP_201_CREATED)
async def create_city(
    data: CityCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("cities.write")),
):
    city = await LocationService(db).create_city(current_user.agency_id, data, current_user.id)
    return ApiResponse(
        success=True,
        message="City created successfully",
        data=CityResponse.model_validate(city),
    )


@cities_router.get("/{city_id}", response_model=ApiResponse[CityResponse])
async def get_city(
    city_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("cities.read")),
):
    city = await LocationService(db).get_city(city_id, current_user.agency_id)
    return ApiResponse(success=True, data=CityResponse.model_validate(city))


@cities_router.put("/{city_id}", response_model=ApiResponse[CityResponse])
async def update_city(
    city_id: int,
    data: CityUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("cities.write")),
):
    city = await LocationService(db).update_city(city_id, current_user.agency_id, data, current_user.id)
    return ApiResponse(
        success=True,
        message="City updated successfully",
        data=CityResponse.model_validate(city),
    )


@cities_router.delete("/{city_id}", response_model=ApiResponse[None])
async def delete_city(
    city_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("cities.delete")),
):
    await LocationService(db).delete_city(city_id, current_user.agency_id, current_user.id)
    return ApiResponse(success=True, message="City deleted successfully", data=None)
