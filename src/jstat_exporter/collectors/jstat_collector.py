"""
Prometheus collector turning cached jstat rows into gauges.

The collector is registered with a ``prometheus_client`` registry and is
called once per scrape. It reads one consistent snapshot of the
SampleStore and, for every category that has a row, emits the gauges of
the fixed field table. Categories without a row yet emit nothing.

A row that lacks a required token or holds a non-numeric token means the
jstat output layout is not the one this exporter understands. That is
reported as MalformedSampleError to the ``on_fatal`` callback and raised,
rather than served as a wrong value.
"""

import logging
from typing import Callable, Dict, Iterator, List, Optional

from prometheus_client.core import GaugeMetricFamily
from prometheus_client.registry import Collector

from ..models.config import METRICS_NAMESPACE
from ..models.stats import GAUGE_FIELDS, StatCategory
from ..validation import MalformedSampleError
from .store import SampleStore

logger = logging.getLogger(__name__)


def parse_sample(category: StatCategory, line: str) -> Dict[str, float]:
    """
    Extract the gauge values of a category from one jstat row.

    Args:
        category: Category the row belongs to
        line: Raw whitespace-delimited jstat row

    Returns:
        Mapping of gauge name to value, in field table order

    Raises:
        MalformedSampleError: If a required token is missing or not a number
    """
    tokens = line.split()
    values: Dict[str, float] = {}
    for field in GAUGE_FIELDS[category]:
        if field.position >= len(tokens):
            raise MalformedSampleError(
                category.value, field.position, line,
                f"only {len(tokens)} tokens",
            )
        try:
            values[field.name] = float(tokens[field.position])
        except ValueError as e:
            raise MalformedSampleError(
                category.value, field.position, line, str(e)
            ) from e
    return values


class JstatCollector(Collector):
    """
    Custom collector exposing the jstat gauges.

    Args:
        store: Store holding the latest row per category
        namespace: Prefix of every gauge name
        on_fatal: Called with the error before a MalformedSampleError is raised
    """

    def __init__(
        self,
        store: SampleStore,
        namespace: str = METRICS_NAMESPACE,
        on_fatal: Optional[Callable[[MalformedSampleError], None]] = None,
    ):
        self.store = store
        self.namespace = namespace
        self.on_fatal = on_fatal

    def _metric_name(self, gauge_name: str) -> str:
        return f"{self.namespace}_{gauge_name}"

    def describe(self) -> Iterator[GaugeMetricFamily]:
        for fields in GAUGE_FIELDS.values():
            for field in fields:
                yield GaugeMetricFamily(self._metric_name(field.name), field.help)

    def collect(self) -> Iterator[GaugeMetricFamily]:
        samples = self.store.snapshot()
        metrics: List[GaugeMetricFamily] = []

        for category in StatCategory:
            line = samples.get(category)
            if not line:
                continue
            try:
                values = parse_sample(category, line)
            except MalformedSampleError as e:
                logger.critical(f"Cannot parse jstat output: {e}")
                if self.on_fatal is not None:
                    self.on_fatal(e)
                raise

            for field in GAUGE_FIELDS[category]:
                metrics.append(GaugeMetricFamily(
                    self._metric_name(field.name),
                    field.help,
                    value=values[field.name],
                ))

        return iter(metrics)
