from pydantic import BaseModel, ConfigDict


class RequestModel(BaseModel):
    """
    Base for request bodies.

    Every field is optional and loosely typed: presence of required fields
    and integer parsing are checked by the resource stores, which answer
    400 on failure.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)


class UserCreate(RequestModel):
    """Schema for registering a user"""

    name: str | None = None
    email: str | None = None
    password: str | None = None


class UserUpdate(UserCreate):
    """Schema for updating a user - only sent fields change"""

    pass


class UserResponse(BaseModel):
    """User as returned to clients, never with the password"""

    id: int
    name: str
    email: str


class TaskCreate(RequestModel):
    title: str | None = None
    description: str | None = None
    status: str | None = None


class TaskUpdate(TaskCreate):
    pass


class TaskResponse(BaseModel):
    id: int
    title: str
    description: str
    status: str


class PriorityCreate(RequestModel):
    name: str | None = None
    color: str | None = None
    order: int | str | None = None


class PriorityUpdate(PriorityCreate):
    pass


class PriorityResponse(BaseModel):
    id: int
    name: str
    color: str
    order: int


class TagCreate(RequestModel):
    name: str | None = None


class TagUpdate(TagCreate):
    pass


class TagResponse(BaseModel):
    id: int
    name: str


class MessageResponse(BaseModel):
    message: str
