"""Dashboard analytics schemas."""

from typing import List, Optional

from pydantic import Field

from outage_journal.schemas.base import CamelModel


class CategoryCount(CamelModel):
    category: Optional[str] = None
    subcategory: Optional[str] = None
    value: int


class AssetCount(CamelModel):
    name: str
    count: int
    type: str = Field(..., description="PS for substations, TP for transformer points")


class TypeStats(CamelModel):
    total: int = 0
    active: int = 0


class TypeBreakdown(CamelModel):
    emergency: TypeStats = Field(default_factory=TypeStats)
    planned: TypeStats = Field(default_factory=TypeStats)
    preventive: TypeStats = Field(default_factory=TypeStats)
    operative: TypeStats = Field(default_factory=TypeStats)


class GlobalStats(CamelModel):
    total: int
    active: int
    by_type: TypeBreakdown


class TimelinePoint(CamelModel):
    date: str = Field(..., description="YYYY-MM")
    emergency: int = 0
    planned: int = 0


class HazardousObject(CamelModel):
    """A cell (under a substation) or a line (under a TP) with emergency counts."""

    substation: str
    cell: str
    count: int
    type: str


class AnalyticsResponse(CamelModel):
    by_category: List[CategoryCount]
    by_substation: List[AssetCount]
    stats: GlobalStats
    timeline: List[TimelinePoint]
    top_hazardous: List[HazardousObject]
