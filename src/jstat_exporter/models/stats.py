"""
jstat statistic categories and the gauges read from each of them.

Each category is one ``jstat`` output option. The gauge table pins the
0-indexed token position of every exported value within a data row of that
option; the positions follow the column layout of the HotSpot ``jstat``
tool and are treated as a fixed contract.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class StatCategory(Enum):
    """The four jstat views sampled by the exporter."""

    CAPACITY = "capacity"
    OLD_GEN = "old-gen"
    YOUNG_GEN = "young-gen"
    FULL_GC = "full-gc"

    @property
    def flag(self) -> str:
        """The jstat command-line option for this category."""
        return _JSTAT_FLAGS[self]


_JSTAT_FLAGS: Dict[StatCategory, str] = {
    StatCategory.CAPACITY: "-gccapacity",
    StatCategory.OLD_GEN: "-gcold",
    StatCategory.YOUNG_GEN: "-gcnew",
    StatCategory.FULL_GC: "-gc",
}


@dataclass(frozen=True)
class GaugeField:
    """
    One exported gauge.

    Attributes:
        name: Gauge name without the namespace prefix (e.g. "newMax").
        position: 0-indexed whitespace-delimited token in the jstat row.
        help: Help text shown in the exposition output.
    """

    name: str
    position: int
    help: str


GAUGE_FIELDS: Dict[StatCategory, Tuple[GaugeField, ...]] = {
    # NGCMN NGCMX NGC S0C S1C EC OGCMN OGCMX OGC OC MCMN MCMX MC ...
    StatCategory.CAPACITY: (
        GaugeField("newMax", 1, "Maximum new generation capacity (kB)."),
        GaugeField("newCommit", 2, "Current new generation capacity (kB)."),
        GaugeField("oldMax", 7, "Maximum old generation capacity (kB)."),
        GaugeField("oldCommit", 8, "Current old generation capacity (kB)."),
        GaugeField("metaMax", 11, "Maximum metaspace capacity (kB)."),
        GaugeField("metaCommit", 12, "Metaspace capacity (kB)."),
    ),
    # MC MU CCSC CCSU OC OU YGC FGC FGCT GCT
    StatCategory.OLD_GEN: (
        GaugeField("metaUsed", 1, "Metaspace utilization (kB)."),
        GaugeField("oldUsed", 5, "Old space utilization (kB)."),
    ),
    # S0C S1C S0U S1U TT MTT DSS EC EU YGC YGCT
    StatCategory.YOUNG_GEN: (
        GaugeField("sv0Used", 2, "Survivor space 0 utilization (kB)."),
        GaugeField("sv1Used", 3, "Survivor space 1 utilization (kB)."),
        GaugeField("edenUsed", 8, "Eden space utilization (kB)."),
    ),
    # S0C S1C S0U S1U EC EU OC OU MC MU CCSC CCSU YGC YGCT FGC FGCT ...
    StatCategory.FULL_GC: (
        GaugeField("fgcTimes", 14, "Number of full GC events."),
        GaugeField("fgcSec", 15, "Full garbage collection time (seconds)."),
    ),
}


def min_token_count(category: StatCategory) -> int:
    """Number of tokens a row must have to cover every gauge of the category."""
    return max(field.position for field in GAUGE_FIELDS[category]) + 1
