"""Action events raised by interactive components.

A component's action definition may name an event and attach a context of
DynamicValues. When the user triggers the action, the host builds an
ActionEvent whose context holds the resolved values and sends
``event.to_dict()`` back to the agent.

Action definition shape::

    {
        "event": {
            "name": "submitForm",
            "context": {"userId": {"path": "/user/id"}, "literal": "ok"},
        },
        "functionCall": {"call": "..."},  # optional, handled by the host
    }
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from bindery.bindings import (
    UNDEFINED,
    DynamicResolver,
    HostFunction,
    iso_timestamp,
)
from bindery.config import EngineSettings
from bindery.logging import bound_context, get_logger

__all__ = ["ActionEvent", "build_action_event"]

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ActionEvent:
    """Event emitted when a component action fires.

    Attributes:
        name: Event name from the action definition.
        surface_id: Surface that hosts the component.
        source_component_id: Component that triggered the action.
        context: Resolved context values, keyed as in the definition.
        timestamp: When the action fired (UTC).
    """

    name: str
    surface_id: str
    source_component_id: str
    context: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        """Return the wire payload.

        Context entries that resolved to UNDEFINED are omitted.
        """
        return {
            "action": {
                "name": self.name,
                "surfaceId": self.surface_id,
                "sourceComponentId": self.source_component_id,
                "timestamp": iso_timestamp(self.timestamp),
                "context": {
                    key: value
                    for key, value in self.context.items()
                    if value is not UNDEFINED
                },
            }
        }


def build_action_event(
    action: Mapping[str, Any] | None,
    surface_id: str,
    source_component_id: str,
    *,
    data_model: Mapping[str, Any],
    scope: Mapping[str, Any] | None = None,
    functions: Mapping[str, HostFunction] | None = None,
    timestamp: datetime | None = None,
    settings: EngineSettings | None = None,
) -> ActionEvent | None:
    """Build the event for a triggered action.

    Args:
        action: Action definition, or None when the component has none.
        surface_id: Surface that hosts the component.
        source_component_id: Component that triggered the action.
        data_model: Data model snapshot used to resolve the context.
        scope: Scope of the component (e.g. the current list item).
        functions: Functions layered over the built-ins.
        timestamp: When the action fired; defaults to now.
        settings: Engine limits.

    Returns:
        The ActionEvent, or None when no event name is configured.

    Example:
        ```python
        event = build_action_event(
            {"event": {"name": "submitForm",
                       "context": {"userId": {"path": "/user/id"}}}},
            "main",
            "submit_button",
            data_model={"user": {"id": "u-1"}},
        )
        event.context  # {"userId": "u-1"}
        ```
    """
    event = (action or {}).get("event")
    name = event.get("name") if isinstance(event, Mapping) else None
    if not name:
        return None

    raw_context = event.get("context")
    if not isinstance(raw_context, Mapping):
        raw_context = {}
    resolver = DynamicResolver(data_model, scope, functions, settings)
    with bound_context(
        surface_id=surface_id, source_component_id=source_component_id
    ):
        context = resolver.resolve_mapping(raw_context)
        logger.debug(
            "action_event_built", event_name=name, context_keys=sorted(context)
        )
    return ActionEvent(
        name=name,
        surface_id=surface_id,
        source_component_id=source_component_id,
        context=context,
        timestamp=timestamp or datetime.now(UTC),
    )
