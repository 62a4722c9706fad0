"""PlayerHost interface between the selection controller and a player."""

from __future__ import annotations

import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class PlayerHost(Protocol):
    """Protocol for the media player the controller drives.

    The controller reads host properties such as ``track-list``,
    ``options/aid``, ``alang``, ``aid``, ``options/sid`` and
    ``track-auto-selection``, and writes ``sid``, ``secondary-sid``,
    ``aid``, ``sub-visibility`` and ``secondary-sub-visibility``.
    """

    def get_property(self, name: str, default: Any = None) -> Any:
        """Return the current value of a host property.

        Args:
            name: Property name.
            default: Value returned when the property is not available.
        """
        ...

    def set_property(self, name: str, value: Any) -> None:
        """Set a host property."""
        ...

    def show_message(self, text: str) -> None:
        """Show a short on-screen message."""
        ...


class InMemoryHost:
    """PlayerHost backed by a plain dict.

    Every set_property() call is recorded in ``writes`` in call order and
    every message in ``messages``, so callers can inspect exactly what a
    selection run changed.
    """

    def __init__(self, properties: dict[str, Any] | None = None) -> None:
        self.properties: dict[str, Any] = dict(properties or {})
        self.writes: list[tuple[str, Any]] = []
        self.messages: list[str] = []

    def get_property(self, name: str, default: Any = None) -> Any:
        return self.properties.get(name, default)

    def set_property(self, name: str, value: Any) -> None:
        logger.debug("Host property %s set to %r", name, value)
        self.properties[name] = value
        self.writes.append((name, value))

    def show_message(self, text: str) -> None:
        self.messages.append(text)
