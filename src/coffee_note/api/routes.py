"""Per-user API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from coffee_note.api.schemas import (
    ConversionResponse,
    ConvertRequest,
    MapResponse,
    NotesUpdate,
    ProfileRequest,
    ProfileResponse,
    ProfileUpdate,
    StatisticsResponse,
    VisitRequest,
    VisitResponse,
    WishlistRequest,
    WishlistResponse,
)
from coffee_note.errors import NotFoundError
from coffee_note.services.visits import SortOption
from coffee_note.services.wishlist import distance_label

if TYPE_CHECKING:
    from coffee_note.containers import AppContainer


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


router = APIRouter(
    prefix="/users/{user_id}", tags=["users"], dependencies=[Depends(require_token)]
)


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.put("/profile", response_model=ProfileResponse)
async def get_or_create_profile(
    user_id: str, payload: ProfileRequest, request: Request
) -> ProfileResponse:
    """Return the profile, creating a free-tier one on first access."""
    profile = _container(request).profile_service.get_or_create_profile(
        user_id, email=payload.email, name=payload.name
    )
    return ProfileResponse.model_validate(profile)


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(user_id: str, request: Request) -> ProfileResponse:
    """Return the stored profile."""
    profile = _container(request).profile_service.get_profile(user_id)
    if profile is None:
        raise NotFoundError(f"Profile {user_id} not found")
    return ProfileResponse.model_validate(profile)


@router.patch("/profile", response_model=ProfileResponse)
async def update_profile(
    user_id: str, payload: ProfileUpdate, request: Request
) -> ProfileResponse:
    """Change the display name."""
    profile = _container(request).profile_service.update_display_name(
        user_id, payload.name
    )
    return ProfileResponse.model_validate(profile)


@router.post("/subscription/upgrade", response_model=ProfileResponse)
async def upgrade(user_id: str, request: Request) -> ProfileResponse:
    """Switch the account to premium."""
    profile = _container(request).profile_service.upgrade_to_premium(user_id)
    return ProfileResponse.model_validate(profile)


@router.post("/subscription/downgrade", response_model=ProfileResponse)
async def downgrade(user_id: str, request: Request) -> ProfileResponse:
    """Switch the account to free."""
    profile = _container(request).profile_service.downgrade_to_free(user_id)
    return ProfileResponse.model_validate(profile)


@router.get("/visits", response_model=list[VisitResponse])
async def list_visits(
    user_id: str,
    request: Request,
    q: str = "",
    sort: SortOption = SortOption.DATE_DESCENDING,
) -> list[VisitResponse]:
    """Return visits filtered by ``q`` and ordered by ``sort``."""
    visits = _container(request).visit_service.list_visits(user_id, q, sort)
    return [VisitResponse.model_validate(visit) for visit in visits]


@router.post(
    "/visits", response_model=VisitResponse, status_code=status.HTTP_201_CREATED
)
async def create_visit(
    user_id: str, payload: VisitRequest, request: Request
) -> VisitResponse:
    """Log a new visit."""
    visit = _container(request).visit_service.create_visit(
        user_id, payload.to_draft()
    )
    return VisitResponse.model_validate(visit)


@router.get("/visits/{visit_id}", response_model=VisitResponse)
async def get_visit(user_id: str, visit_id: str, request: Request) -> VisitResponse:
    """Return a single visit."""
    visit = _container(request).visit_service.get_visit(user_id, visit_id)
    return VisitResponse.model_validate(visit)


@router.put("/visits/{visit_id}", response_model=VisitResponse)
async def replace_visit(
    user_id: str, visit_id: str, payload: VisitRequest, request: Request
) -> VisitResponse:
    """Replace the content of a visit."""
    visit = _container(request).visit_service.update_visit(
        user_id, visit_id, payload.to_draft()
    )
    return VisitResponse.model_validate(visit)


@router.patch("/visits/{visit_id}/notes", response_model=VisitResponse)
async def update_visit_notes(
    user_id: str, visit_id: str, payload: NotesUpdate, request: Request
) -> VisitResponse:
    """Edit the notes of a visit."""
    visit = _container(request).visit_service.update_notes(
        user_id, visit_id, payload.notes
    )
    return VisitResponse.model_validate(visit)


@router.delete("/visits/{visit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_visit(user_id: str, visit_id: str, request: Request) -> None:
    """Delete a visit."""
    _container(request).visit_service.delete_visit(user_id, visit_id)


@router.get("/wishlist", response_model=list[WishlistResponse])
async def list_wishlist(
    user_id: str,
    request: Request,
    lat: float | None = None,
    lon: float | None = None,
) -> list[WishlistResponse]:
    """Return the wishlist, with distances when ``lat``/``lon`` are given."""
    entries = _container(request).wishlist_service.list_entries(user_id)
    responses = []
    for entry in entries:
        response = WishlistResponse.model_validate(entry)
        response.distance = distance_label(entry, lat, lon)
        responses.append(response)
    return responses


@router.post(
    "/wishlist", response_model=WishlistResponse, status_code=status.HTTP_201_CREATED
)
async def add_to_wishlist(
    user_id: str, payload: WishlistRequest, request: Request
) -> WishlistResponse:
    """Add a shop to the wishlist."""
    entry = _container(request).wishlist_service.add_entry(
        user_id,
        shop_name=payload.shop_name,
        address=payload.address,
        latitude=payload.latitude,
        longitude=payload.longitude,
        notes=payload.notes,
    )
    return WishlistResponse.model_validate(entry)


@router.patch("/wishlist/{entry_id}/notes", response_model=WishlistResponse)
async def update_wishlist_notes(
    user_id: str, entry_id: str, payload: NotesUpdate, request: Request
) -> WishlistResponse:
    """Edit the notes of a wishlist entry."""
    entry = _container(request).wishlist_service.update_notes(
        user_id, entry_id, payload.notes
    )
    return WishlistResponse.model_validate(entry)


@router.delete("/wishlist/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_wishlist_entry(user_id: str, entry_id: str, request: Request) -> None:
    """Remove a wishlist entry."""
    _container(request).wishlist_service.delete_entry(user_id, entry_id)


@router.post(
    "/wishlist/{entry_id}/convert",
    response_model=ConversionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def convert_wishlist_entry(
    user_id: str, entry_id: str, payload: ConvertRequest, request: Request
) -> ConversionResponse:
    """Log a visit for a wishlist shop and remove the entry."""
    result = _container(request).wishlist_service.convert_to_visit(
        user_id,
        entry_id,
        items_ordered=payload.items_ordered,
        rating=payload.rating,
        price=payload.price,
        notes=payload.notes,
        date_visited=payload.date_visited,
    )
    return ConversionResponse(
        visit=VisitResponse.model_validate(result.visit),
        entry_removed=result.entry_removed,
    )


@router.get("/stats", response_model=StatisticsResponse)
async def statistics(user_id: str, request: Request) -> StatisticsResponse:
    """Return summary statistics."""
    snapshot = _container(request).statistics_service.get_statistics(user_id)
    return StatisticsResponse.model_validate(snapshot)


@router.get("/map", response_model=MapResponse)
async def map_view(
    user_id: str,
    request: Request,
    show_visits: bool = True,
    show_wishlist: bool = True,
) -> MapResponse:
    """Return pins and a region fitted to them."""
    view = _container(request).map_service.get_map(
        user_id, show_visits=show_visits, show_wishlist=show_wishlist
    )
    return MapResponse.model_validate(view)
