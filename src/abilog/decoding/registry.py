"""Event registry: topic0 dispatch or a single pre-selected event.

Two modes:
- `EventRegistry.named(schemas, "Transfer")` → every log decodes as the first
  schema called "Transfer" (in load order).
- `EventRegistry.dispatch(schemas)` → logs are routed by topic0 to the
  matching non-anonymous schema. Colliding hashes overwrite in insertion
  order (last wins); this is a known limitation, not detected.

The registry is built once and only read afterwards, so it can be shared
across threads without locking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from abilog.core.errors import EmptyAbiError, EventNotFoundError, TopicCountMismatchError, UnknownTopic0Error
from abilog.core.interfaces import IEventRegistryProvider
from abilog.decoding.specs import EventSchema

logger = logging.getLogger(__name__)


class EventRegistry:
    def __init__(
        self,
        *,
        by_topic0: dict[bytes, EventSchema] | None = None,
        selected: EventSchema | None = None,
    ) -> None:
        if (by_topic0 is None) == (selected is None):
            raise ValueError("EventRegistry needs exactly one of `by_topic0` or `selected`")
        self._by_topic0 = by_topic0
        self._selected = selected

    # ---------- constructors ----------

    @classmethod
    def named(cls, schemas: Iterable[EventSchema], name: str) -> EventRegistry:
        """Select the first schema called `name`."""
        for schema in schemas:
            if schema.name == name:
                return cls(selected=schema)
        raise EventNotFoundError(name)

    @classmethod
    def dispatch(cls, schemas: Iterable[EventSchema]) -> EventRegistry:
        """Index every non-anonymous schema by its topic0 hash."""
        schemas = list(schemas)
        if not schemas:
            raise EmptyAbiError()
        reg: dict[bytes, EventSchema] = {}
        for schema in schemas:
            add_event_schema(reg, schema)
        return cls(by_topic0=reg)

    # ---------- lookup ----------

    @property
    def is_dispatch(self) -> bool:
        return self._by_topic0 is not None

    @property
    def selected(self) -> EventSchema | None:
        return self._selected

    def resolve(self, topics: Sequence[bytes]) -> EventSchema:
        """Return the schema a log with these topics should be decoded with."""
        if self._selected is not None:
            return self._selected
        assert self._by_topic0 is not None
        if not topics:
            raise TopicCountMismatchError(1, 0)
        schema = self._by_topic0.get(bytes(topics[0]))
        if schema is None:
            raise UnknownTopic0Error(bytes(topics[0]))
        return schema

    def get(self, topic0: bytes) -> EventSchema | None:
        if self._selected is not None:
            return self._selected if self._selected.topic0 == topic0 else None
        assert self._by_topic0 is not None
        return self._by_topic0.get(topic0)

    def schemas(self) -> list[EventSchema]:
        if self._selected is not None:
            return [self._selected]
        assert self._by_topic0 is not None
        return list(self._by_topic0.values())

    def topic0s(self) -> list[str]:
        """Lowercased 0x-hex topic0 of every registered non-anonymous schema."""
        return [s.topic0_hex for s in self.schemas() if not s.anonymous]

    def __len__(self) -> int:
        return len(self.schemas())

    def __contains__(self, topic0: object) -> bool:
        return isinstance(topic0, bytes) and self.get(topic0) is not None

    def __repr__(self) -> str:
        mode = "dispatch" if self.is_dispatch else f"named={self._selected.name!r}"  # type: ignore[union-attr]
        return f"EventRegistry({mode}, events={len(self)})"


def add_event_schema(registry: dict[bytes, EventSchema], schema: EventSchema) -> None:
    """Insert one schema keyed by its topic0 (anonymous schemas have no topic0 slot)."""
    if schema.anonymous:
        logger.debug("not dispatching anonymous event %s", schema.signature)
        return
    previous = registry.get(schema.topic0)
    if previous is not None:
        logger.debug("topic0 %s: %s overrides %s", schema.topic0_hex, schema.signature, previous.signature)
    registry[schema.topic0] = schema


class EventRegistryProvider(IEventRegistryProvider):
    """
    Simple registry provider that always returns the same EventRegistry.

    Bridges registry construction (ABI files, signatures) and the stream use
    case, which only depends on the interface.
    """

    def __init__(self, registry: EventRegistry) -> None:
        self._registry = registry

    def get_registry(self) -> EventRegistry:
        return self._registry
