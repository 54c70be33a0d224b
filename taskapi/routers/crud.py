from typing import Callable

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from taskapi.models import MessageResponse
from taskapi.services.resource_store import ResourceStore


def build_crud_router(
    prefix: str,
    tag: str,
    label: str,
    get_resource_store: Callable[..., ResourceStore],
    create_model: type[BaseModel],
    update_model: type[BaseModel],
    response_model: type[BaseModel],
) -> APIRouter:
    """
    Router exposing create/list/get/update/delete for one resource.

    Every endpoint calls exactly one ResourceStore operation; failures are
    raised as ResourceError and turned into responses by the app's
    exception handlers.
    """
    router = APIRouter(prefix=prefix, tags=[tag])

    @router.post("/", response_model=response_model, status_code=status.HTTP_201_CREATED)
    @router.post(
        "",
        response_model=response_model,
        status_code=status.HTTP_201_CREATED,
        include_in_schema=False,
    )
    async def create_resource(
        payload: create_model,
        store: ResourceStore = Depends(get_resource_store),
    ):
        return await store.create(payload.model_dump(exclude_none=True))

    @router.get("/", response_model=list[response_model])
    @router.get("", response_model=list[response_model], include_in_schema=False)
    async def list_resources(store: ResourceStore = Depends(get_resource_store)):
        return await store.list_all()

    @router.get("/{resource_id}", response_model=response_model)
    async def get_resource(
        resource_id: int,
        store: ResourceStore = Depends(get_resource_store),
    ):
        return await store.get_by_id(resource_id)

    @router.put("/{resource_id}", response_model=response_model)
    async def update_resource(
        resource_id: int,
        payload: update_model,
        store: ResourceStore = Depends(get_resource_store),
    ):
        return await store.update(resource_id, payload.model_dump(exclude_unset=True))

    @router.delete("/{resource_id}", response_model=MessageResponse)
    async def delete_resource(
        resource_id: int,
        store: ResourceStore = Depends(get_resource_store),
    ):
        await store.delete(resource_id)
        return {"message": f"{label} deleted"}

    return router
