from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Request

from jsonboard.services.collection_service import CollectionService


def get_collection_service(request: Request, name: str) -> CollectionService:
    services = getattr(getattr(request.app, "state", None), "collections", None)
    svc = (services or {}).get(name)
    if not svc:
        raise RuntimeError(f"Collection service '{name}' not configured")
    return svc


def build_collection_router(name: str) -> APIRouter:
    """CRUD + soft delete endpoints for `/{name}`; the service is looked up on app.state."""
    router = APIRouter(prefix=f"/{name}", tags=[name])

    @router.get("")
    def list_items(request: Request):
        return get_collection_service(request, name).list_items()

    @router.get("/{item_id}")
    def get_item(item_id: str, request: Request):
        return get_collection_service(request, name).get_item(item_id)

    @router.post("")
    def create_item(request: Request, payload: Optional[dict] = Body(None)):
        return get_collection_service(request, name).create_item(payload or {})

    @router.patch("/{item_id}")
    def patch_item(item_id: str, request: Request, payload: Optional[dict] = Body(None)):
        return get_collection_service(request, name).patch_item(item_id, payload or {})

    @router.delete("/{item_id}")
    def delete_item(item_id: str, request: Request):
        message = get_collection_service(request, name).soft_delete(item_id)
        return {"message": message}

    return router
