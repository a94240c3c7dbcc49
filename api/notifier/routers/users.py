"""CRUD routes for username to Discord ID mappings."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from notifier.schemas.user_mapping import (
    ResolveResponse,
    UserMappingCreate,
    UserMappingResponse,
    UserMappingUpdate,
)
from notifier.store import MappingConflict, MappingNotFound, UserMappingStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])
resolve_router = APIRouter(tags=["users"])


@router.get("", summary="List user mappings")
async def list_users(store: UserMappingStore = Depends(get_store)) -> list[UserMappingResponse]:
    mappings = await store.list_all()
    return [UserMappingResponse.model_validate(m) for m in mappings]


@router.post("", status_code=201, summary="Create a user mapping")
async def create_user(
    body: UserMappingCreate,
    store: UserMappingStore = Depends(get_store),
) -> UserMappingResponse:
    try:
        mapping = await store.create(body.username, body.platform_id)
    except MappingConflict:
        raise HTTPException(status_code=409, detail="Username already exists")
    return UserMappingResponse.model_validate(mapping)


@router.get("/{username}", summary="Get a user mapping")
async def get_user(username: str, store: UserMappingStore = Depends(get_store)) -> UserMappingResponse:
    try:
        mapping = await store.get(username)
    except MappingNotFound:
        raise HTTPException(status_code=404, detail="User not found")
    return UserMappingResponse.model_validate(mapping)


@router.put("/{username}", summary="Update a user mapping")
async def update_user(
    username: str,
    body: UserMappingUpdate,
    store: UserMappingStore = Depends(get_store),
) -> UserMappingResponse:
    try:
        mapping = await store.update(username, body.platform_id)
    except MappingNotFound:
        raise HTTPException(status_code=404, detail="User not found")
    return UserMappingResponse.model_validate(mapping)


@router.delete("/{username}", summary="Delete a user mapping")
async def delete_user(username: str, store: UserMappingStore = Depends(get_store)):
    try:
        await store.delete(username)
    except MappingNotFound:
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "User deleted successfully"}


@resolve_router.get("/resolve/{username}", summary="Resolve a username to a Discord ID")
async def resolve_user(username: str, store: UserMappingStore = Depends(get_store)) -> ResolveResponse:
    discord_id = await store.resolve(username)
    if not discord_id:
        logger.info("Failed to resolve Discord ID for username %s", username)
        raise HTTPException(status_code=404, detail="User not found")
    return ResolveResponse(username=username, platform_id=discord_id)
