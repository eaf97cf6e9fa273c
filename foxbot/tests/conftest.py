"""
Shared test fixtures for the FoxESS bot tests.

Provides environment variable fixtures for BotSettings configuration tests
and canned FoxESS responses for the report tests. All bot env vars are
cleaned before each test to ensure isolation.

CHANGELOG:
- 2026-10-19: Initial creation (STORY-001)

TODO:
- None
"""

from __future__ import annotations

from typing import Any

import pytest

# All BotSettings environment variable names, used for cleanup.
_ALL_BOT_ENV_VARS = (
    "TELEGRAM_TOKEN",
    "FOXESS_API_KEY",
    "DEVICE_SN",
    "FOXESS_BASE_URL",
    "FOXESS_LANG",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_bot_env(monkeypatch: pytest.MonkeyPatch, tmp_path: str) -> None:
    """Remove all bot env vars and isolate from .env files before each test.

    Changes working directory to tmp_path so no .env file is accidentally
    loaded by Pydantic BaseSettings.
    """
    for var in _ALL_BOT_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def env_vars_required_only(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set only the required environment variables (no optional ones)."""
    env = {
        "TELEGRAM_TOKEN": "123456:telegram-test-token",
        "FOXESS_API_KEY": "foxess-test-key",
        "DEVICE_SN": "60BH37202BFA097",
    }
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    return env


@pytest.fixture()
def env_vars_full(
    monkeypatch: pytest.MonkeyPatch, env_vars_required_only: dict[str, str]
) -> dict[str, str]:
    """Set every environment variable BotSettings reads."""
    env = dict(env_vars_required_only)
    env.update(
        {
            "FOXESS_BASE_URL": "https://www.foxesscloud.com/",
            "FOXESS_LANG": "pt",
            "LOG_LEVEL": "debug",
        }
    )
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    return env


# ---------------------------------------------------------------------------
# Canned FoxESS responses
# ---------------------------------------------------------------------------


def ok(result: Any) -> dict[str, Any]:
    """Wrap *result* in a successful FoxESS envelope."""
    return {"errno": 0, "msg": "success", "result": result}


@pytest.fixture()
def real_time_response() -> dict[str, Any]:
    return ok(
        [
            {
                "datas": [
                    {"variable": "pvPower", "unit": "kW", "name": "PVPower", "value": 1.5},
                    {"variable": "RVolt", "unit": "V", "name": "RVolt", "value": 230},
                    {"variable": "loadsPower", "unit": "kW", "name": "Load Power", "value": 0.82},
                    {"variable": "ambientTemperation", "unit": "℃", "value": 31.4},
                    {"variable": "RFreq", "unit": "Hz", "value": 60.01},
                ],
                "time": "2026-10-19 14:05:11 BRT-0300",
                "deviceSN": "60BH37202BFA097",
            }
        ]
    )


@pytest.fixture()
def energy_response() -> dict[str, Any]:
    return ok(
        [
            {"variable": "generation", "unit": "kWh", "values": [12.3, 0.0]},
            {"variable": "feedin", "unit": "kWh", "values": [4.0]},
            {"variable": "gridConsumption", "values": [1.25]},
            {"variable": "chargeEnergyToTal", "unit": "kWh", "values": []},
            {"variable": "dischargeEnergyToTal", "unit": "kWh", "values": [None]},
        ]
    )


@pytest.fixture()
def status_response() -> dict[str, Any]:
    return ok(
        {
            "deviceSN": "60BH37202BFA097",
            "deviceType": "H1-5.0-E",
            "productType": "H",
            "stationName": "Casa",
            "status": 1,
            "masterVersion": "1.54",
            "slaveVersion": "1.02",
            "managerVersion": "1.67",
            "hasBattery": True,
            "hasPV": False,
        }
    )


@pytest.fixture()
def history_response() -> dict[str, Any]:
    def series(variable: str, unit: str, values: list[float]) -> dict[str, Any]:
        return {
            "variable": variable,
            "unit": unit,
            "name": variable,
            "data": [
                {"time": f"2026-10-19 0{i}:00:00 BRT-0300", "value": v}
                for i, v in enumerate(values)
            ],
        }

    return ok(
        [
            {
                "datas": [
                    series("pvPower", "kW", [1, 2, 3]),
                    series("loadsPower", "kW", [0.5, 0.5]),
                    series("feedinPower", "kW", [0.25, 0.5, 0.25]),
                    series("ambientTemperation", "℃", [22.0, 24.5]),
                    series("pv1Volt", "V", [310.0, 298.4]),
                    series("pv1Current", "A", [4.1, 3.9]),
                ],
                "deviceSN": "60BH37202BFA097",
            }
        ]
    )
