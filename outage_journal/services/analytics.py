"""Dashboard aggregation queries."""

from typing import List

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from outage_journal.core.config import get_settings
from outage_journal.core.constants import (
    ASSET_TYPE_SUBSTATION,
    ASSET_TYPE_TP,
    EVENT_TYPE_EMERGENCY,
    EVENT_TYPE_OPERATIVE,
    EVENT_TYPE_PLANNED,
    EVENT_TYPE_PREVENTIVE,
)
from outage_journal.schemas.analytics import (
    AnalyticsResponse,
    AssetCount,
    CategoryCount,
    GlobalStats,
    HazardousObject,
    TimelinePoint,
    TypeBreakdown,
    TypeStats,
)

logger = structlog.get_logger()

# Preventive and operative types are matched by their first word
PREVENTIVE_MARKER = EVENT_TYPE_PREVENTIVE.split()[0]
OPERATIVE_MARKER = EVENT_TYPE_OPERATIVE.split()[0]


def bucket_type_stats(rows) -> TypeBreakdown:
    """Fold ``(type, total, active)`` rows into the four dashboard buckets.

    Emergency and planned match the trimmed type exactly; preventive and
    operative match by substring and accumulate across rows.
    """
    breakdown = TypeBreakdown()
    for event_type, total, active in rows:
        t = event_type.strip() if event_type else ""
        total, active = int(total or 0), int(active or 0)
        if t == EVENT_TYPE_EMERGENCY:
            breakdown.emergency = TypeStats(total=total, active=active)
        if t == EVENT_TYPE_PLANNED:
            breakdown.planned = TypeStats(total=total, active=active)
        if PREVENTIVE_MARKER in t:
            breakdown.preventive.total += total
            breakdown.preventive.active += active
        if OPERATIVE_MARKER in t:
            breakdown.operative.total += total
            breakdown.operative.active += active
    return breakdown


def merge_hazardous(
    cells: List[HazardousObject], feeders: List[HazardousObject], limit: int = 50
) -> List[HazardousObject]:
    """Merge cell and feeder counts, highest first, keeping ``limit`` rows."""
    merged = sorted([*cells, *feeders], key=lambda row: row.count, reverse=True)
    return merged[:limit]


class AnalyticsService:
    """Aggregations over the whole event table. Nothing is cached."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.settings = get_settings()

    async def by_category(self) -> List[CategoryCount]:
        result = await self.db.execute(text("""
            SELECT reason_category AS category, reason_subcategory AS subcategory, COUNT(*) AS value
            FROM outage_events
            GROUP BY reason_category, reason_subcategory
        """))
        return [
            CategoryCount(category=row.category, subcategory=row.subcategory, value=row.value)
            for row in result
        ]

    async def by_asset(self) -> List[AssetCount]:
        """Event counts per substation and per TP, merged by count."""
        substations = await self.db.execute(text("""
            SELECT s.name AS name, COUNT(*) AS hits
            FROM outage_events e
            JOIN substations s ON e.substation_id = s.id
            GROUP BY e.substation_id
        """))
        tps = await self.db.execute(text("""
            SELECT t.name AS name, COUNT(*) AS hits
            FROM outage_events e
            JOIN tps t ON e.tp_id = t.id
            GROUP BY e.tp_id
        """))

        rows = [
            AssetCount(name=row.name, count=row.hits, type=ASSET_TYPE_SUBSTATION)
            for row in substations
        ]
        rows.extend(AssetCount(name=row.name, count=row.hits, type=ASSET_TYPE_TP) for row in tps)
        return sorted(rows, key=lambda row: row.count, reverse=True)

    async def global_stats(self) -> GlobalStats:
        total = await self.db.scalar(text("SELECT COUNT(*) FROM outage_events"))
        active = await self.db.scalar(
            text("SELECT COUNT(*) FROM outage_events WHERE is_completed = 0")
        )
        result = await self.db.execute(text("""
            SELECT type,
                   COUNT(*) AS total,
                   SUM(CASE WHEN is_completed = 0 THEN 1 ELSE 0 END) AS active
            FROM outage_events
            GROUP BY type
        """))
        return GlobalStats(
            total=total or 0,
            active=active or 0,
            by_type=bucket_type_stats(result.all()),
        )

    async def timeline(self) -> List[TimelinePoint]:
        """Monthly emergency/planned counts since ``TIMELINE_START``."""
        result = await self.db.execute(
            text("""
                SELECT strftime('%Y-%m', time_start) AS month, type, COUNT(*) AS hits
                FROM outage_events
                WHERE time_start >= :start
                GROUP BY month, type
                ORDER BY month
            """),
            {"start": self.settings.TIMELINE_START},
        )

        months = {}
        for row in result:
            point = months.setdefault(row.month, TimelinePoint(date=row.month))
            t = row.type.strip() if row.type else ""
            if t == EVENT_TYPE_EMERGENCY:
                point.emergency += row.hits
            if t == EVENT_TYPE_PLANNED:
                point.planned += row.hits
        return list(months.values())

    async def top_hazardous(self) -> List[HazardousObject]:
        """Cells and feeders with the most emergency events."""
        params = {"pattern": f"%{EVENT_TYPE_EMERGENCY}%"}
        cells = await self.db.execute(
            text("""
                SELECT s.name AS substation, c.name AS cell, COUNT(*) AS hits
                FROM outage_events e
                JOIN cells c ON e.cell_id = c.id
                JOIN substations s ON e.substation_id = s.id
                WHERE e.type LIKE :pattern
                GROUP BY e.cell_id, s.id
                ORDER BY hits DESC, c.id
            """),
            params,
        )
        feeders = await self.db.execute(
            text("""
                SELECT t.name AS substation, l.name AS cell, COUNT(el.line_id) AS hits
                FROM outage_events e
                JOIN event_lines el ON e.id = el.event_id
                JOIN lines l ON el.line_id = l.id
                JOIN tps t ON e.tp_id = t.id
                WHERE e.type LIKE :pattern
                GROUP BY l.id, t.id
                ORDER BY hits DESC, l.id
            """),
            params,
        )

        return merge_hazardous(
            [
                HazardousObject(substation=r.substation, cell=r.cell, count=r.hits, type=ASSET_TYPE_SUBSTATION)
                for r in cells
            ],
            [
                HazardousObject(substation=r.substation, cell=r.cell, count=r.hits, type=ASSET_TYPE_TP)
                for r in feeders
            ],
            self.settings.HAZARDOUS_LIMIT,
        )

    async def get_dashboard(self) -> AnalyticsResponse:
        """Everything the dashboard renders, in one payload."""
        response = AnalyticsResponse(
            by_category=await self.by_category(),
            by_substation=await self.by_asset(),
            stats=await self.global_stats(),
            timeline=await self.timeline(),
            top_hazardous=await self.top_hazardous(),
        )
        logger.debug(
            "Analytics computed",
            total=response.stats.total,
            hazardous=len(response.top_hazardous),
        )
        return response
