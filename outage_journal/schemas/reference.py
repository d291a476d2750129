"""Reference data payload schemas."""

from typing import Dict, List

from outage_journal.schemas.base import CamelModel
from outage_journal.schemas.line import Line
from outage_journal.schemas.substation import Substation
from outage_journal.schemas.tp import Tp


class ReferenceData(CamelModel):
    """Everything the journal needs to render pickers and resolve ids."""

    substations: List[Substation]
    tps: List[Tp]
    lines: List[Line]
    reasons: Dict[str, List[str]]
