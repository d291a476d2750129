"""Application-wide constants."""

from enum import Enum


class Role(str, Enum):
    """User roles, lowest privilege first."""

    READER = "READER"
    EDITOR = "EDITOR"
    SENIOR = "SENIOR"
    ADMIN = "ADMIN"


EVENT_WRITE_ROLES = (Role.EDITOR, Role.SENIOR, Role.ADMIN)
"""Roles allowed to create, edit and delete outage events."""

REFERENCE_WRITE_ROLES = (Role.SENIOR, Role.ADMIN)
"""Roles allowed to edit reference data and switch topology."""

ADMIN_ROLES = (Role.ADMIN,)


# Event types
EVENT_TYPE_EMERGENCY = "Emergency"
EVENT_TYPE_PLANNED = "Planned"
EVENT_TYPE_OPERATIVE = "Operative switching"
EVENT_TYPE_PREVENTIVE = "Preventive measures"
EVENT_TYPE_SWITCHING = "SWITCHING"

EVENT_TYPES = (
    EVENT_TYPE_EMERGENCY,
    EVENT_TYPE_PLANNED,
    EVENT_TYPE_OPERATIVE,
    EVENT_TYPE_PREVENTIVE,
    EVENT_TYPE_SWITCHING,
)

# Reason attached to events generated by topology switching
SWITCHING_REASON_CATEGORY = "Operative switching"
SWITCHING_REASON_SUBCATEGORY = "Power supply scheme change"

UNSPECIFIED_CAUSE = "Unspecified"
"""Cause label used by reports when an event has no reason category."""

# Asset type labels used by analytics rows
ASSET_TYPE_SUBSTATION = "PS"
ASSET_TYPE_TP = "TP"
