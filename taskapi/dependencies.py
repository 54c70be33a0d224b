from fastapi import Depends, Request

from taskapi.core.security import hash_password
from taskapi.services.resource_store import ResourceStore
from taskapi.services.schemas import PRIORITY, TAG, TASK, USER
from taskapi.store.protocol import KeyValueStore


# Dependency for getting the shared store, opened by the app lifespan
def get_store(request: Request) -> KeyValueStore:
    return request.app.state.store


def get_user_store(store: KeyValueStore = Depends(get_store)) -> ResourceStore:
    return ResourceStore(store, USER, password_hasher=hash_password)


def get_task_store(store: KeyValueStore = Depends(get_store)) -> ResourceStore:
    return ResourceStore(store, TASK)


def get_priority_store(store: KeyValueStore = Depends(get_store)) -> ResourceStore:
    return ResourceStore(store, PRIORITY)


def get_tag_store(store: KeyValueStore = Depends(get_store)) -> ResourceStore:
    return ResourceStore(store, TAG)
