"""Storage layout of each resource type."""

from taskapi.services.resource_store import FieldSpec, ResourceSchema

USER = ResourceSchema(
    label="User",
    prefix="user",
    counter_key="userIdCounter",
    fields=(
        FieldSpec("name", required=True),
        FieldSpec("email", required=True, unique_index="userByEmail"),
        FieldSpec("password", required=True, secret=True),
    ),
)

TASK = ResourceSchema(
    label="Task",
    prefix="task",
    counter_key="taskIdCounter",
    index_key="taskIdsSet",
    fields=(
        FieldSpec("title", required=True),
        FieldSpec("description", default=""),
        FieldSpec("status", default="pending"),
    ),
)

PRIORITY = ResourceSchema(
    label="Priority",
    prefix="priority",
    counter_key="priorityIdCounter",
    index_key="priorityIdsSet",
    fields=(
        FieldSpec("name", required=True),
        FieldSpec("color", default="#000000"),
        FieldSpec("order", kind=int, default=1),
    ),
    sort_key=lambda record: record["order"],
)

TAG = ResourceSchema(
    label="Tag",
    prefix="tag",
    counter_key="tagIdCounter",
    index_key="tagIdsSet",
    fields=(FieldSpec("name", required=True),),
    sort_key=lambda record: record["name"],
)
