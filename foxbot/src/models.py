"""
Pydantic models for FoxESS Cloud Open API responses.

Every endpoint used by the bot gets an explicit result type, so a malformed
vendor response fails validation instead of silently rendering ``N/A`` for
every field. Unknown keys are ignored; the vendor adds fields freely.

Also provides :class:`SampleIndex`, the per-response mapping from variable
name to sample used by the real-time report.

CHANGELOG:
- 2026-10-19: History energy integration, last non-null reading, optional hardware flags
- 2026-10-19: Initial creation (STORY-003)

TODO:
- None
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

Value = int | float | str
"""A vendor sample value. Numbers stay numbers; some variables are strings."""


class Envelope(BaseModel):
    """Common response wrapper: ``{"errno": 0, "msg": "...", "result": ...}``.

    Attributes:
        errno: Vendor status code; ``0`` means success.
        msg: Optional vendor message, present mostly on failures.
        result: Endpoint-specific payload, validated by the report models.
    """

    errno: int
    msg: str | None = None
    result: Any = None


# ---------------------------------------------------------------------------
# /op/v0/device/real/query
# ---------------------------------------------------------------------------


class Sample(BaseModel):
    """A single named measurement inside a real-time result."""

    variable: str
    value: Value | None = None
    unit: str | None = None
    name: str | None = None


class RealTimeResult(BaseModel):
    """One device entry of a real-time query result.

    Attributes:
        datas: Unordered list of samples.
        time: Vendor-formatted sample timestamp string.
        device_sn: Serial number echoed by the vendor.
    """

    datas: list[Sample]
    time: str | None = None
    device_sn: str | None = Field(default=None, alias="deviceSN")


class SampleIndex(Mapping[str, Sample]):
    """Read-only mapping of variable name to :class:`Sample`.

    Built once per response so lookups do not rescan the sample list.
    When the vendor repeats a variable, the first occurrence wins.
    """

    def __init__(self, samples: Iterable[Sample]) -> None:
        self._samples: dict[str, Sample] = {}
        for sample in samples:
            self._samples.setdefault(sample.variable, sample)

    def __getitem__(self, variable: str) -> Sample:
        return self._samples[variable]

    def __iter__(self) -> Iterator[str]:
        return iter(self._samples)

    def __len__(self) -> int:
        return len(self._samples)

    def value(self, variable: str) -> Value | None:
        """Return the value of *variable*, or ``None`` if it is absent."""
        sample = self._samples.get(variable)
        return sample.value if sample is not None else None

    def unit(self, variable: str) -> str | None:
        """Return the unit of *variable*, or ``None`` if absent or unset."""
        sample = self._samples.get(variable)
        return sample.unit if sample is not None else None


# ---------------------------------------------------------------------------
# /op/v0/device/report/query
# ---------------------------------------------------------------------------


class ReportVariable(BaseModel):
    """One variable of a report query; ``values`` is one entry per bucket."""

    variable: str
    unit: str | None = None
    values: list[float | None] = Field(default_factory=list)

    def first(self) -> float | None:
        """Return the first bucket value, or ``None`` when there is none."""
        return self.values[0] if self.values else None


# ---------------------------------------------------------------------------
# /op/v0/device/detail
# ---------------------------------------------------------------------------


class DeviceDetail(BaseModel):
    """Device detail record.

    Attributes:
        status: ``1`` on-line, ``2`` fault, ``3`` off-line.
        has_battery: Whether a battery is attached; ``None`` when omitted.
        has_pv: Whether solar panels are attached; ``None`` when omitted.
    """

    device_sn: str | None = Field(default=None, alias="deviceSN")
    device_type: str | None = Field(default=None, alias="deviceType")
    product_type: str | None = Field(default=None, alias="productType")
    station_name: str | None = Field(default=None, alias="stationName")
    status: int
    master_version: str | None = Field(default=None, alias="masterVersion")
    slave_version: str | None = Field(default=None, alias="slaveVersion")
    manager_version: str | None = Field(default=None, alias="managerVersion")
    has_battery: bool | None = Field(default=None, alias="hasBattery")
    has_pv: bool | None = Field(default=None, alias="hasPV")


# ---------------------------------------------------------------------------
# /op/v0/device/history/query
# ---------------------------------------------------------------------------


DEFAULT_SAMPLE_MINUTES = 5.0
"""Vendor history sampling period used when it cannot be derived."""


def _clock_minutes(timestamp: str) -> float:
    """Minutes since midnight of a vendor time such as
    ``2026-10-19 14:05:11 BRT-0300``."""
    clock = datetime.strptime(timestamp[11:19], "%H:%M:%S")
    return clock.hour * 60 + clock.minute + clock.second / 60


class HistoryPoint(BaseModel):
    """A single timestamped value of a history series."""

    time: str
    value: float | None = None


class HistorySeries(BaseModel):
    """All samples of one variable over the requested window, in order."""

    variable: str
    unit: str | None = None
    name: str | None = None
    data: list[HistoryPoint] = Field(default_factory=list)

    def total(self) -> float | None:
        """Sum of all non-null values, or ``None`` for an empty series."""
        values = [p.value for p in self.data if p.value is not None]
        return sum(values) if values else None

    def last(self) -> HistoryPoint | None:
        """The last sample of the series, or ``None`` for an empty series."""
        return self.data[-1] if self.data else None

    def last_value(self) -> float | None:
        """The last non-null value, or ``None`` when every sample is null."""
        for point in reversed(self.data):
            if point.value is not None:
                return point.value
        return None

    def sample_interval_minutes(self) -> float:
        """Average spacing between samples, rounded to half a minute.

        Derived from the clock part (``HH:MM:SS`` at offset 11) of the first
        and last sample times. Fewer than two samples, or a series whose
        samples share one time, falls back to
        :data:`DEFAULT_SAMPLE_MINUTES`.

        Raises:
            ValueError: If a sample time has no parsable clock part.
        """
        if len(self.data) < 2:
            return DEFAULT_SAMPLE_MINUTES
        span = _clock_minutes(self.data[-1].time) - _clock_minutes(self.data[0].time)
        if span <= 0:
            return DEFAULT_SAMPLE_MINUTES
        return round(2 * span / (len(self.data) - 1)) / 2 or DEFAULT_SAMPLE_MINUTES

    def energy(self) -> float | None:
        """Integrate a kW series into kWh over the sample interval.

        Returns ``None`` when the series has no non-null value.
        """
        total = self.total()
        if total is None:
            return None
        return total * self.sample_interval_minutes() / 60


class HistoryResult(BaseModel):
    """One device entry of a history query result."""

    datas: list[HistorySeries]
    device_sn: str | None = Field(default=None, alias="deviceSN")

    def series(self) -> dict[str, HistorySeries]:
        """Index the series by variable name (first occurrence wins)."""
        indexed: dict[str, HistorySeries] = {}
        for series in self.datas:
            indexed.setdefault(series.variable, series)
        return indexed
