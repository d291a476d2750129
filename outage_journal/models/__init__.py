"""Database models package."""

from .line import Line
from .outage_event import EventLine, EventTp, OutageEvent
from .outage_reason import OutageReason
from .substation import Cell, Substation
from .topology_switch import TopologySwitch
from .tp import Tp
from .user import User

__all__ = [
    "Cell",
    "EventLine",
    "EventTp",
    "Line",
    "OutageEvent",
    "OutageReason",
    "Substation",
    "TopologySwitch",
    "Tp",
    "User",
]
