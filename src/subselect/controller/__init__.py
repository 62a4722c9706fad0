"""Selection controller and host interface."""

from subselect.controller.controller import SelectionController
from subselect.controller.host import InMemoryHost, PlayerHost
from subselect.controller.session import SessionState

__all__ = [
    "InMemoryHost",
    "PlayerHost",
    "SelectionController",
    "SessionState",
]
