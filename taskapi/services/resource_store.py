import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from taskapi.core.exceptions import ConflictError, NotFoundError, StoreError, ValidationError
from taskapi.store.protocol import KeyValueStore

logger = logging.getLogger(__name__)

Record = dict[str, Any]


@dataclass(frozen=True)
class FieldSpec:
    """One stored field of a resource. Values are kept as strings in the hash."""

    name: str
    kind: type = str  # str or int
    default: Any = None
    required: bool = False
    secret: bool = False  # hashed on write, never returned
    unique_index: Optional[str] = None  # prefix of a value -> id string key


@dataclass(frozen=True)
class ResourceSchema:
    """How one resource type maps onto the key-value store."""

    label: str
    prefix: str
    counter_key: str
    fields: tuple[FieldSpec, ...]
    index_key: Optional[str] = None
    sort_key: Optional[Callable[[Record], Any]] = field(default=None, compare=False)

    def key_for(self, record_id) -> str:
        return f"{self.prefix}:{record_id}"

    def field_spec(self, name: str) -> Optional[FieldSpec]:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    @property
    def unique_fields(self) -> tuple[FieldSpec, ...]:
        return tuple(spec for spec in self.fields if spec.unique_index)

    @property
    def secret_fields(self) -> tuple[FieldSpec, ...]:
        return tuple(spec for spec in self.fields if spec.secret)


def serialize_value(spec: FieldSpec, value: Any) -> str:
    """Encode a native value as the string stored in the hash."""
    if spec.kind is int:
        try:
            return str(int(value))
        except (TypeError, ValueError):
            raise ValidationError(f"Field '{spec.name}' must be an integer")
    return str(value)


def deserialize_value(spec: FieldSpec, raw: Optional[str]) -> Any:
    if raw is None:
        return spec.default
    if spec.kind is int:
        try:
            return int(raw)
        except ValueError:
            raise StoreError(f"Stored field '{spec.name}' is not an integer: {raw!r}")
    return raw


class ResourceStore:
    """
    Generic CRUD over one resource schema.

    Layout for a schema with prefix "tag":
      tag:{id}      hash holding every field, including "id"
      tagIdCounter  INCR counter allocating ids, never reused
      tagIdsSet     set of live record keys ("tag:1", ...) used by list_all

    Multi-step writes are not atomic. A crash between writing a hash and
    indexing it leaves the record gettable but missing from list_all; a
    crash between deleting a hash and unindexing it leaves a stale member
    that list_all skips. Neither case is repaired here.
    """

    def __init__(
        self,
        store: KeyValueStore,
        schema: ResourceSchema,
        password_hasher: Optional[Callable[[str], str]] = None,
    ):
        if schema.secret_fields and password_hasher is None:
            raise ValueError(f"{schema.label} schema has secret fields but no hasher")
        self.store = store
        self.schema = schema
        self._hasher = password_hasher

    async def create(self, fields: Mapping[str, Any]) -> Record:
        """Validate, allocate an id, write the hash and register it in the index."""
        stored = {}
        for spec in self.schema.fields:
            value = fields.get(spec.name)
            if spec.required and (value is None or value == ""):
                raise ValidationError(f"Field '{spec.name}' is required")
            if value is None:
                value = spec.default
            if value is None:
                continue
            stored[spec.name] = serialize_value(spec, value)

        for spec in self.schema.unique_fields:
            if spec.name in stored:
                await self._ensure_unique(spec, stored[spec.name])

        for spec in self.schema.secret_fields:
            if spec.name in stored:
                stored[spec.name] = await self._hash(stored[spec.name])

        record_id = await self.store.increment(self.schema.counter_key)
        key = self.schema.key_for(record_id)
        stored = {"id": str(record_id), **stored}

        await self.store.set_fields(key, stored)
        if self.schema.index_key:
            await self.store.add_to_index(self.schema.index_key, key)
        for spec in self.schema.unique_fields:
            if spec.name not in stored:
                continue
            await self.store.set_string(
                f"{spec.unique_index}:{stored[spec.name]}", str(record_id)
            )

        logger.info(f"Created {key}")
        return self._to_record(stored)

    async def get_by_id(self, record_id) -> Record:
        return self._to_record(await self._load(record_id))

    async def list_all(self) -> list[Record]:
        if self.schema.index_key:
            keys = await self.store.list_index_members(self.schema.index_key)
        else:
            keys = await self.store.scan_keys(f"{self.schema.prefix}:*")

        records = []
        for key in keys:
            raw = await self.store.get_field_map(key)
            if not raw or "id" not in raw:
                # Indexed key whose hash is gone
                logger.debug(f"Skipping stale entry {key}")
                continue
            records.append(self._to_record(raw))

        if self.schema.sort_key:
            records.sort(key=self.schema.sort_key)
        return records

    async def update(self, record_id, partial: Mapping[str, Any]) -> Record:
        """Overwrite only the fields present in ``partial``; others keep their value."""
        current = await self._load(record_id)
        key = self.schema.key_for(record_id)

        changes = {}
        for name, value in partial.items():
            spec = self.schema.field_spec(name)
            if spec is None or value is None:
                continue
            changes[name] = serialize_value(spec, value)

        moved = []
        for spec in self.schema.unique_fields:
            new_value = changes.get(spec.name)
            old_value = current.get(spec.name)
            if new_value is None or new_value == old_value:
                continue
            await self._ensure_unique(spec, new_value, owner_id=current["id"])
            moved.append((spec, old_value, new_value))

        for spec in self.schema.secret_fields:
            if spec.name in changes:
                changes[spec.name] = await self._hash(changes[spec.name])

        for name, value in changes.items():
            await self.store.set_field(key, name, value)
        for spec, old_value, new_value in moved:
            await self.store.set_string(f"{spec.unique_index}:{new_value}", current["id"])
            if old_value:
                await self.store.delete_key(f"{spec.unique_index}:{old_value}")

        return self._to_record(await self._load(record_id))

    async def delete(self, record_id) -> None:
        current = await self._load(record_id)
        key = self.schema.key_for(record_id)

        await self.store.delete_key(key)
        if self.schema.index_key:
            await self.store.remove_from_index(self.schema.index_key, key)
        for spec in self.schema.unique_fields:
            if current.get(spec.name):
                await self.store.delete_key(f"{spec.unique_index}:{current[spec.name]}")

        logger.info(f"Deleted {key}")

    async def _load(self, record_id) -> dict[str, str]:
        raw = await self.store.get_field_map(self.schema.key_for(record_id))
        if not raw or "id" not in raw:
            logger.debug(f"{self.schema.label} {record_id} not found")
            raise NotFoundError(f"{self.schema.label} {record_id} not found")
        return raw

    async def _ensure_unique(self, spec: FieldSpec, value: str, owner_id: Optional[str] = None):
        existing = await self.store.get_string(f"{spec.unique_index}:{value}")
        if existing is not None and existing != owner_id:
            raise ConflictError(f"{self.schema.label} with {spec.name} '{value}' already exists")

    async def _hash(self, value: str) -> str:
        # bcrypt is CPU bound
        return await asyncio.to_thread(self._hasher, value)

    def _to_record(self, raw: Mapping[str, str]) -> Record:
        record: Record = {"id": int(raw["id"])}
        for spec in self.schema.fields:
            if spec.secret:
                continue
            record[spec.name] = deserialize_value(spec, raw.get(spec.name))
        return record
