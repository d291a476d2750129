"""Pydantic schemas package."""

from .event_filter import FilteredEvents, FilterState
from .line import Line, LineCreate, LineUpdate
from .outage_event import OutageEvent, OutageEventCreate, OutageEventPatch, OutageEventReplace
from .report import ReportBundle
from .substation import Cell, CellCreate, CellUpdate, Substation, SubstationCreate, SubstationUpdate
from .tp import Tp, TpCreate, TpUpdate
from .user import Token, UserCreate, UserLogin, UserResponse, UserUpdate

__all__ = [
    "Cell",
    "CellCreate",
    "CellUpdate",
    "FilterState",
    "FilteredEvents",
    "Line",
    "LineCreate",
    "LineUpdate",
    "OutageEvent",
    "OutageEventCreate",
    "OutageEventPatch",
    "OutageEventReplace",
    "ReportBundle",
    "Substation",
    "SubstationCreate",
    "SubstationUpdate",
    "Token",
    "Tp",
    "TpCreate",
    "TpUpdate",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "UserUpdate",
]
