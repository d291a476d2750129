#!/usr/bin/env python3
"""
Seed the journal database with users, the outage reason taxonomy, a small
sample network and a few events.

Usage:
    python scripts/seed_data.py
"""

import asyncio
from datetime import timedelta
from typing import Dict, List

import structlog
from sqlalchemy import delete, select

from outage_journal.core.config import get_settings
from outage_journal.core.constants import (
    EVENT_TYPE_EMERGENCY,
    EVENT_TYPE_PLANNED,
    Role,
)
from outage_journal.core.database import get_session_factory, init_db
from outage_journal.core.logging import configure_logging
from outage_journal.core.security import get_password_hash
from outage_journal.core.timeutils import to_storage, utcnow
from outage_journal.models import (
    Cell,
    EventLine,
    EventTp,
    Line,
    OutageEvent,
    OutageReason,
    Substation,
    TopologySwitch,
    Tp,
    User,
)

logger = structlog.get_logger()

USERS = [
    {"username": "admin", "password": "admin", "name": "Administrator", "role": Role.ADMIN},
    {"username": "senior", "password": "123", "name": "Ivan Ivanov (Senior)", "role": Role.SENIOR},
    {"username": "editor", "password": "123", "name": "Petr Petrov (Dispatcher)", "role": Role.EDITOR},
    {"username": "reader", "password": "123", "name": "Sidor Sidorov (Viewer)", "role": Role.READER},
]

CABLE = "Cable line 0.4/6/10 kV failures"
OVERHEAD = "Overhead line 0.4/6/10 kV failures"
THIRD_PARTY = "Outage caused by third-party equipment"
SUBSTATION = "TP, KTPN, STP, KTPS 10/6/0.4 kV failures"

REASONS: Dict[str, List[str]] = {
    CABLE: [
        "Insulation breakdown",
        "Unauthorized earthworks in the cable protection zone",
        "Overload or short-circuit currents",
        "Manufacturing defects",
        "Cable joint installation defect",
        "Cable joint design defects",
        "Cause not established",
    ],
    OVERHEAD: [
        "Lightning overvoltage (thunderstorm)",
        "Ice, wet snow",
        "Birds and animals",
        "Flood, ice drift",
        "Wildfires",
        "Wind loads",
        "Temperature effects",
        "Vehicle collision",
        "Oversized vehicle passage",
        "Unauthorized construction or loading works in protection zones",
        "Object thrown onto the line",
        "Insulator destruction",
        "Insulator slipped off the hook",
        "Hook came out of the pole",
        "Falling trees and branches",
        "Unauthorized tree felling",
        "Other external impacts",
        "Overload or short-circuit currents",
        "Conductor break",
        "Manufacturing defects",
        "Crossarm destruction",
        "Cause not established",
    ],
    THIRD_PARTY: [
        "Outage (damage) in an adjacent network",
        "Outage (damage) of consumer equipment",
        "Outage (damage) in the upstream network",
    ],
    SUBSTATION: [
        "Animals inside the installation",
        "Personnel error",
        "Operating mode violation",
        "Missed repair schedule or scope",
        "Rated current exceeded",
        "Contact connection overheating",
        "Water ingress on equipment",
        "Other operating shortcomings",
        "Turn-to-turn fault inside the power transformer",
        "Phase break inside the power transformer",
        "Short circuit in the transformer tank",
        "Insulator destruction",
        "6/10 kV fuse failure",
        "Oil leak (expansion tank, power transformer)",
        "Equipment wear",
        "Meltwater flooding",
        "Building or structure destruction",
        "Cause not established",
    ],
}


async def seed_users(db) -> None:
    for data in USERS:
        result = await db.execute(select(User).where(User.username == data["username"]))
        user = result.scalar_one_or_none()
        if user is None:
            user = User(username=data["username"])
            db.add(user)
        user.hashed_password = get_password_hash(data["password"])
        user.name = data["name"]
        user.role = data["role"].value
    logger.info("Users seeded", count=len(USERS))


async def seed_reasons(db) -> None:
    await db.execute(delete(OutageReason))
    for category, subcategories in REASONS.items():
        db.add_all(OutageReason(category=category, subcategory=sub) for sub in subcategories)
    logger.info("Outage reasons seeded", categories=len(REASONS))


async def clear_network(db) -> None:
    for model in (EventLine, EventTp, TopologySwitch, OutageEvent, Tp, Line, Cell, Substation):
        await db.execute(delete(model))


async def seed_network(db) -> None:
    north = Substation(name='PS 110/35/10 kV "Northern"', voltage_class="110 kV", district="Northern district")
    river = Substation(name='PS 35/6 kV "Riverside"', voltage_class="35 kV", district="Central district")
    db.add_all([north, river])
    await db.flush()

    north_cable = Cell(name="Cell #1 (cable 10 kV)", voltage_class="10 kV", substation_id=north.id)
    north_overhead = Cell(name="Cell #2 (overhead 10 kV)", voltage_class="10 kV", substation_id=north.id)
    river_cell = Cell(name="Cell #5", voltage_class="6 kV", substation_id=river.id)
    db.add_all([north_cable, north_overhead, river_cell])
    await db.flush()

    line101 = Line(
        name="OHL-10 kV #101", voltage_class="10 kV", line_type="overhead",
        source_cell_id=north_overhead.id, normal_source_cell_id=north_overhead.id,
    )
    line102 = Line(
        name="CL-10 kV #102", voltage_class="10 kV", line_type="cable",
        source_cell_id=north_cable.id, normal_source_cell_id=north_cable.id,
    )
    line_river = Line(
        name="L-6 kV (Riverside)", voltage_class="6 kV", line_type="cable",
        source_cell_id=river_cell.id, normal_source_cell_id=river_cell.id,
    )
    db.add_all([line101, line102, line_river])
    await db.flush()

    tp101 = Tp(name="TP-101", voltage_class="10/0.4 kV", capacity="400 kVA", feeder_id=line101.id, normal_feeder_id=line101.id)
    tp102 = Tp(name="TP-102", voltage_class="10/0.4 kV", capacity="250 kVA", feeder_id=line101.id, normal_feeder_id=line101.id)
    tp205 = Tp(name="TP-205", voltage_class="6/0.4 kV", capacity="630 kVA", feeder_id=line_river.id, normal_feeder_id=line_river.id)
    db.add_all([tp101, tp102, tp205])
    await db.flush()

    db.add_all([
        Line(name="OHL-0.4 kV L1 (from TP-101)", voltage_class="0.4 kV", line_type="overhead",
             source_tp_id=tp101.id, normal_source_tp_id=tp101.id),
        Line(name="OHL-0.4 kV L2 (from TP-101)", voltage_class="0.4 kV", line_type="overhead",
             source_tp_id=tp101.id, normal_source_tp_id=tp101.id),
    ])

    now = to_storage(utcnow())
    emergency = OutageEvent(
        type=EVENT_TYPE_EMERGENCY,
        reason_category=CABLE,
        reason_subcategory="Insulation breakdown",
        time_start=now - timedelta(hours=5),
        comment="Automatic trip of the cable line. No visible damage found.",
        substation_id=north.id,
        cell_id=north_cable.id,
        is_completed=0,
    )
    planned = OutageEvent(
        type=EVENT_TYPE_PLANNED,
        reason_category=SUBSTATION,
        reason_subcategory="Equipment wear",
        time_start=now,
        measures_planned="Transformer maintenance",
        comment="Scheduled works",
        tp_id=tp101.id,
        is_completed=0,
    )
    completed = OutageEvent(
        type=EVENT_TYPE_EMERGENCY,
        reason_category=OVERHEAD,
        reason_subcategory="Falling trees and branches",
        time_start=now - timedelta(days=1, hours=3),
        time_end=now - timedelta(days=1, hours=1, minutes=30),
        measures_taken="Branches removed, line re-energized",
        tp_id=tp101.id,
        is_completed=1,
    )
    db.add_all([emergency, planned, completed])
    await db.flush()
    db.add_all([
        EventLine(event_id=emergency.id, line_id=line102.id),
        EventLine(event_id=completed.id, line_id=line101.id),
    ])
    logger.info("Sample network seeded")


async def main() -> None:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, json_logs=False)

    await init_db()
    async with get_session_factory()() as db:
        try:
            await seed_users(db)
            await seed_reasons(db)
            await clear_network(db)
            await seed_network(db)
            await db.commit()
        except Exception as e:
            await db.rollback()
            logger.error("Seeding failed", error=str(e))
            raise

    logger.info("Database seeded", database=settings.DATABASE_URL)


if __name__ == "__main__":
    asyncio.run(main())
