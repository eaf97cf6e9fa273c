"""
Report formatters: turn FoxESS API responses into Telegram text replies.

Each formatter owns one fixed vendor call (path, method, parameters) and one
fixed rendering. :meth:`ReportFormatter.run` performs the call and
:meth:`ReportFormatter.format` renders the raw response; both convert every
failure (transport error, ``errno != 0``, schema mismatch) into the
formatter's fixed failure message, so no exception reaches the chat layer
and no report is ever partially rendered.

A missing variable is not a failure: it renders as ``N/A`` and the report
continues.

CHANGELOG:
- 2026-10-19: History power lines show integrated kWh; readings skip trailing nulls
- 2026-10-19: Label history lines by reduction (sum of samples / last reading)
- 2026-10-19: Initial creation (STORY-006)

TODO:
- None
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter

from foxbot.src.client import VendorError, check_errno
from foxbot.src.models import (
    DeviceDetail,
    HistoryResult,
    HistorySeries,
    RealTimeResult,
    ReportVariable,
    SampleIndex,
)
from foxbot.src.variables import (
    DEFAULT_ENERGY_UNIT,
    ENERGY_VARIABLES,
    HISTORY_MARKER_VARIABLE,
    HISTORY_VARIABLES,
    REAL_TIME_VARIABLES,
    Aggregate,
    VariableDef,
    variable_names,
)

if TYPE_CHECKING:
    from foxbot.src.client import FoxESSClient

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"
YES = "Sim"
NO = "Não"

_REAL_TIME_RESULTS = TypeAdapter(list[RealTimeResult])
_REPORT_RESULTS = TypeAdapter(list[ReportVariable])
_HISTORY_RESULTS = TypeAdapter(list[HistoryResult])


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------


def format_value(value: Any) -> str:
    """Render a sample value; ``None`` becomes ``N/A``.

    Floats keep at most two decimals with trailing zeros stripped, so
    ``1.5`` stays ``1.5`` and ``230.0`` becomes ``230``.
    """
    if value is None:
        return NOT_AVAILABLE
    if isinstance(value, bool):
        return YES if value else NO
    if isinstance(value, float):
        text = f"{value:.2f}".rstrip("0").rstrip(".")
        return "0" if text in ("-0", "") else text
    return str(value)


def format_quantity(value: Any, unit: str | None, sep: str = " ") -> str:
    """Render *value* followed by *unit*; a missing value drops the unit."""
    text = format_value(value)
    if value is None or not unit:
        return text
    return f"{text}{sep}{unit}"


def _line(definition: VariableDef, rendered: str, suffix: str = "") -> str:
    return f"{definition.emoji} {definition.label}{suffix}: {rendered}"


def _first(adapter: TypeAdapter, result: Any) -> Any:
    """Validate a list result and return its first entry."""
    entries = adapter.validate_python(result)
    if not entries:
        raise ValueError("FoxESS returned an empty result list")
    return entries[0]


def reduce_series(series: HistorySeries | None, aggregate: Aggregate) -> float | None:
    """Reduce a history series to the value shown in the report.

    Args:
        series: The series, or ``None`` when the vendor omitted it.
        aggregate: ``ENERGY`` integrates the kW samples into kWh;
            ``LAST`` takes the last non-null sample.

    Returns:
        The reduced value, or ``None`` for a missing or all-null series.
    """
    if series is None:
        return None
    if aggregate is Aggregate.ENERGY:
        return series.energy()
    return series.last_value()


# ---------------------------------------------------------------------------
# Base formatter
# ---------------------------------------------------------------------------


class ReportFormatter:
    """One report type: a fixed vendor call plus a fixed text rendering.

    Subclasses set the class attributes and implement :meth:`render`;
    override :meth:`build_params` when the call needs more than the serial
    number.
    """

    name: str = ""
    path: str = ""
    method: str = "POST"
    failure_message: str = "Erro ao buscar dados."

    def build_params(self, device_sn: str, now: datetime) -> dict[str, Any]:
        """Build the query parameters (GET) or JSON body (POST)."""
        return {"sn": device_sn}

    def render(self, result: Any) -> str:
        """Render the ``result`` of a successful response."""
        raise NotImplementedError

    def format(self, raw: Any) -> str:
        """Render a raw response, or return the failure message.

        ``errno`` is checked before anything is extracted.
        """
        try:
            envelope = check_errno(raw)
            return self.render(envelope.result)
        except VendorError as exc:
            logger.warning(
                "Report '%s': vendor error errno=%s msg=%s", self.name, exc.errno, exc.msg
            )
        except Exception:
            logger.error("Report '%s': could not render response", self.name, exc_info=True)
        return self.failure_message

    async def run(
        self,
        client: FoxESSClient,
        device_sn: str,
        now: datetime | None = None,
    ) -> str:
        """Fetch this report for *device_sn* and render it.

        Args:
            client: Signed FoxESS client.
            device_sn: Serial number of the inverter.
            now: Local wall-clock time used for date-scoped calls; defaults
                to :func:`datetime.now`.

        Returns:
            The rendered report, or :attr:`failure_message` on any failure.
        """
        if now is None:
            now = datetime.now()
        try:
            raw = await client.call(self.path, self.build_params(device_sn, now), self.method)
        except Exception:
            logger.error(
                "Report '%s': request to %s failed", self.name, self.path, exc_info=True
            )
            return self.failure_message
        return self.format(raw)


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


class RealTimeReport(ReportFormatter):
    """Live telemetry: grid voltage, PV and load power, temperature, frequency."""

    name = "real_time"
    path = "/op/v0/device/real/query"
    failure_message = "Erro ao buscar dados em tempo real."

    def render(self, result: Any) -> str:
        entry: RealTimeResult = _first(_REAL_TIME_RESULTS, result)
        samples = SampleIndex(entry.datas)
        lines = ["📡 Dados em Tempo Real"]
        for d in REAL_TIME_VARIABLES:
            lines.append(_line(d, format_quantity(samples.value(d.variable), d.unit, d.unit_sep)))
        lines.append(f"⏱️ Última Atualização: {entry.time or NOT_AVAILABLE}")
        return "\n".join(lines)


class EnergyReport(ReportFormatter):
    """Today's energy totals from the day-dimension report."""

    name = "energy"
    path = "/op/v0/device/report/query"
    failure_message = "Erro ao buscar dados de energia."

    def build_params(self, device_sn: str, now: datetime) -> dict[str, Any]:
        return {
            "sn": device_sn,
            "year": now.year,
            "month": now.month,
            "day": now.day,
            "dimension": "day",
            "variables": variable_names(ENERGY_VARIABLES),
        }

    def render(self, result: Any) -> str:
        report = {v.variable: v for v in reversed(_REPORT_RESULTS.validate_python(result))}
        lines = ["⚡ Produção de Energia"]
        for d in ENERGY_VARIABLES:
            entry = report.get(d.variable)
            if entry is None:
                lines.append(_line(d, NOT_AVAILABLE))
                continue
            lines.append(_line(d, format_quantity(entry.first(), entry.unit or DEFAULT_ENERGY_UNIT)))
        return "\n".join(lines)


class StatusReport(ReportFormatter):
    """Device detail: on-line state, firmware versions, attached hardware."""

    name = "status"
    path = "/op/v0/device/detail"
    method = "GET"
    failure_message = "Erro ao buscar status do sistema."

    def render(self, result: Any) -> str:
        detail = DeviceDetail.model_validate(result)
        state = "Online" if detail.status == 1 else "Offline"
        return "\n".join(
            [
                "✅ Status do Sistema",
                f"⚙ Estado: {state}",
                f"📟 Modelo: {format_value(detail.device_type)}",
                f"🧩 Firmware Master: {format_value(detail.master_version)}",
                f"🧩 Firmware Slave: {format_value(detail.slave_version)}",
                f"🧩 Firmware Manager: {format_value(detail.manager_version)}",
                f"🔋 Bateria: {format_value(detail.has_battery)}",
                f"☀️ Painéis Solares: {format_value(detail.has_pv)}",
            ]
        )


class HistoryReport(ReportFormatter):
    """Today's history: energy integrated from power samples, last readings."""

    name = "history"
    path = "/op/v0/device/history/query"
    failure_message = "Erro ao buscar histórico do dia."

    _SUFFIXES = {
        Aggregate.ENERGY: " (estimada)",
        Aggregate.LAST: " (última leitura)",
    }

    def build_params(self, device_sn: str, now: datetime) -> dict[str, Any]:
        start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        end = now.replace(hour=23, minute=59, second=59, microsecond=0)
        return {
            "sn": device_sn,
            "variables": variable_names(HISTORY_VARIABLES),
            "begin": round(start.timestamp() * 1000),
            "end": round(end.timestamp() * 1000),
        }

    def render(self, result: Any) -> str:
        entry: HistoryResult = _first(_HISTORY_RESULTS, result)
        series = entry.series()
        lines = ["📈 Histórico do Dia"]
        for d in HISTORY_VARIABLES:
            value = reduce_series(series.get(d.variable), d.aggregate)
            lines.append(_line(d, format_quantity(value, d.unit, d.unit_sep), self._SUFFIXES[d.aggregate]))

        marker = series.get(HISTORY_MARKER_VARIABLE)
        last = marker.last() if marker is not None else None
        lines.append(f"⏱️ Última Atualização: {last.time if last is not None else NOT_AVAILABLE}")
        return "\n".join(lines)


REPORTS: tuple[ReportFormatter, ...] = (
    RealTimeReport(),
    EnergyReport(),
    StatusReport(),
    HistoryReport(),
)
"""One instance per report type, in menu order. Formatters hold no state."""
