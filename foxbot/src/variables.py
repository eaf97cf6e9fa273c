"""
FoxESS variable catalog -- single source of truth for the reports.

Defines the vendor variable names each report reads, together with the
Portuguese label, emoji prefix and display unit used when rendering. The
order of each tuple is the order lines appear in the rendered report.

References:
    - FoxESS Open API: /op/v0/device/variable/get lists every variable name.

CHANGELOG:
- 2026-10-19: History power series integrate to kWh
- 2026-10-19: Initial creation (STORY-004)

TODO:
- None
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# ---------------------------------------------------------------------------
# Data definitions
# ---------------------------------------------------------------------------


class Aggregate(str, Enum):
    """How a history series is reduced to one displayed value.

    ``ENERGY`` integrates a kW power series into kWh for the day;
    ``LAST`` keeps the last non-null reading.
    """

    ENERGY = "energy"
    LAST = "last"


@dataclass(frozen=True, slots=True)
class VariableDef:
    """Definition of a single vendor variable as shown in a report.

    Attributes:
        variable: Vendor variable name used as lookup key.
        label: Portuguese label rendered in the report line.
        emoji: Prefix rendered before the label.
        unit: Display unit. An empty string renders the value bare.
        unit_sep: Text between value and unit (``""`` renders ``230V``).
        aggregate: History reduction; ignored by the other reports.
    """

    variable: str
    label: str
    emoji: str
    unit: str = ""
    unit_sep: str = " "
    aggregate: Aggregate = Aggregate.LAST


# ---------------------------------------------------------------------------
# Real-time report (/op/v0/device/real/query)
# ---------------------------------------------------------------------------

REAL_TIME_VARIABLES: tuple[VariableDef, ...] = (
    VariableDef("RVolt", "Tensão da Rede", "🔋", "V", unit_sep=""),
    VariableDef("pvPower", "Potência Solar", "⚡", "kW"),
    VariableDef("loadsPower", "Potência de Carga", "🔌", "kW"),
    VariableDef("ambientTemperation", "Temperatura Ambiente", "🌡️", "℃"),
    VariableDef("RFreq", "Frequência", "🔄", "Hz"),
)

# ---------------------------------------------------------------------------
# Energy report (/op/v0/device/report/query)
# ---------------------------------------------------------------------------

DEFAULT_ENERGY_UNIT = "kWh"

ENERGY_VARIABLES: tuple[VariableDef, ...] = (
    VariableDef("generation", "Geração", "🔆", DEFAULT_ENERGY_UNIT),
    VariableDef("feedin", "Injetado na Rede", "📤", DEFAULT_ENERGY_UNIT),
    VariableDef("gridConsumption", "Consumo da Rede", "📥", DEFAULT_ENERGY_UNIT),
    VariableDef("chargeEnergyToTal", "Carga da Bateria", "🔋", DEFAULT_ENERGY_UNIT),
    VariableDef("dischargeEnergyToTal", "Descarga da Bateria", "🪫", DEFAULT_ENERGY_UNIT),
)

# ---------------------------------------------------------------------------
# History report (/op/v0/device/history/query)
# ---------------------------------------------------------------------------

HISTORY_MARKER_VARIABLE = "pvPower"
"""Series whose last sample time is shown as the report's last update."""

HISTORY_VARIABLES: tuple[VariableDef, ...] = (
    VariableDef("pvPower", "Energia Solar", "⚡", "kWh", aggregate=Aggregate.ENERGY),
    VariableDef("loadsPower", "Energia Consumida", "🔌", "kWh", aggregate=Aggregate.ENERGY),
    VariableDef("feedinPower", "Energia Injetada", "📤", "kWh", aggregate=Aggregate.ENERGY),
    VariableDef("ambientTemperation", "Temperatura Ambiente", "🌡️", "℃"),
    VariableDef("pv1Volt", "Tensão PV1", "🔋", "V"),
    VariableDef("pv1Current", "Corrente PV1", "〰️", "A"),
)


def variable_names(defs: tuple[VariableDef, ...]) -> list[str]:
    """Return the vendor variable names of *defs*, in report order."""
    return [d.variable for d in defs]
