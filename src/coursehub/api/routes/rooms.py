"""Room endpoints."""

from fastapi import APIRouter, status

from coursehub.api.dependencies import CatalogStoreDep, EngineDep
from coursehub.api.models import (
    APIResponse,
    RoomCreate,
    RoomResponse,
    room_to_response,
)

router = APIRouter(prefix="/rooms", tags=["rooms"])


@router.get("", response_model=APIResponse[list[RoomResponse]])
def list_rooms(store: CatalogStoreDep) -> APIResponse[list[RoomResponse]]:
    """List all rooms."""
    return APIResponse(data=[room_to_response(r) for r in store.list_rooms()])


@router.post(
    "",
    response_model=APIResponse[RoomResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_room(room: RoomCreate, store: CatalogStoreDep) -> APIResponse[RoomResponse]:
    """Create a new room."""
    return APIResponse(data=room_to_response(store.create_room(room.room_number)))


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_room(room_id: str, engine: EngineDep) -> None:
    """Delete a room with no sessions booked in it."""
    engine.delete_room(room_id)
