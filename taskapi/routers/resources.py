from taskapi import models
from taskapi.dependencies import (
    get_priority_store,
    get_tag_store,
    get_task_store,
    get_user_store,
)
from taskapi.routers.crud import build_crud_router

users = build_crud_router(
    "/users",
    "users",
    "User",
    get_user_store,
    models.UserCreate,
    models.UserUpdate,
    models.UserResponse,
)

tasks = build_crud_router(
    "/tasks",
    "tasks",
    "Task",
    get_task_store,
    models.TaskCreate,
    models.TaskUpdate,
    models.TaskResponse,
)

priorities = build_crud_router(
    "/priorities",
    "priorities",
    "Priority",
    get_priority_store,
    models.PriorityCreate,
    models.PriorityUpdate,
    models.PriorityResponse,
)

tags = build_crud_router(
    "/tags",
    "tags",
    "Tag",
    get_tag_store,
    models.TagCreate,
    models.TagUpdate,
    models.TagResponse,
)

ALL_ROUTERS = (users, tasks, priorities, tags)
