"""
Unit tests for FoxESS response models.

Tests verify:
- SampleIndex maps variable names to samples; absent names give None.
- Integer and float sample values keep their type.
- Report variables expose their first bucket.
- History series sum, last-sample and last-non-null reducers, including empty series.
- History energy integration derives the sample interval from sample times.
- Omitted hardware flags stay None.
- Device detail reads the vendor's camelCase keys.
- Malformed results fail validation.

CHANGELOG:
- 2026-10-19: Energy integration, last non-null reading, optional flags
- 2026-10-19: Initial creation (STORY-003)

TODO:
- None
"""

from __future__ import annotations

import pytest
from foxbot.src.models import (
    DEFAULT_SAMPLE_MINUTES,
    DeviceDetail,
    HistoryResult,
    HistorySeries,
    RealTimeResult,
    ReportVariable,
    Sample,
    SampleIndex,
)
from pydantic import ValidationError


class TestSampleIndex:
    """Lookup by variable name over an unordered sample list."""

    def test_lookup_and_absence(self) -> None:
        index = SampleIndex(
            [Sample(variable="RVolt", value=230, unit="V"), Sample(variable="pvPower", value=1.5)]
        )

        assert index.value("RVolt") == 230
        assert index.unit("RVolt") == "V"
        assert index.value("pvPower") == 1.5
        assert index.value("RFreq") is None
        assert index.unit("RFreq") is None
        assert "RFreq" not in index
        assert len(index) == 2

    def test_first_occurrence_wins(self) -> None:
        index = SampleIndex([Sample(variable="pvPower", value=1), Sample(variable="pvPower", value=9)])

        assert index["pvPower"].value == 1

    def test_value_types_preserved(self) -> None:
        result = RealTimeResult.model_validate(
            {"datas": [{"variable": "RVolt", "value": 230}, {"variable": "pvPower", "value": 1.5}]}
        )

        index = SampleIndex(result.datas)
        assert isinstance(index.value("RVolt"), int)
        assert isinstance(index.value("pvPower"), float)


class TestRealTimeResult:
    def test_reads_device_sn_alias(self) -> None:
        result = RealTimeResult.model_validate({"datas": [], "time": "t", "deviceSN": "SN1"})

        assert result.device_sn == "SN1"
        assert result.time == "t"

    def test_missing_datas_fails(self) -> None:
        with pytest.raises(ValidationError):
            RealTimeResult.model_validate({"time": "t"})


class TestReportVariable:
    def test_first_value(self) -> None:
        assert ReportVariable(variable="generation", values=[12.3, 1.0]).first() == 12.3

    def test_empty_values(self) -> None:
        assert ReportVariable(variable="generation").first() is None


class TestDeviceDetail:
    def test_camel_case_keys(self) -> None:
        detail = DeviceDetail.model_validate(
            {
                "status": 3,
                "deviceType": "H1-5.0-E",
                "masterVersion": "1.54",
                "slaveVersion": "1.02",
                "managerVersion": "1.67",
                "hasBattery": True,
                "hasPV": True,
            }
        )

        assert detail.status == 3
        assert detail.device_type == "H1-5.0-E"
        assert detail.manager_version == "1.67"
        assert detail.has_battery is True
        assert detail.has_pv is True

    def test_hardware_flags_default_to_unknown(self) -> None:
        detail = DeviceDetail.model_validate({"status": 1})

        assert detail.has_battery is None
        assert detail.has_pv is None

    def test_status_required(self) -> None:
        with pytest.raises(ValidationError):
            DeviceDetail.model_validate({"deviceType": "H1"})


class TestHistorySeries:
    """Sum and last-element reducers."""

    def _series(self, values: list[float | None]) -> HistorySeries:
        return HistorySeries.model_validate(
            {
                "variable": "pvPower",
                "data": [{"time": f"t{i}", "value": v} for i, v in enumerate(values)],
            }
        )

    def test_total_and_last(self) -> None:
        series = self._series([1, 2, 3])

        assert series.total() == 6
        assert series.last() is not None
        assert series.last().value == 3
        assert series.last().time == "t2"

    def test_nulls_skipped_in_total(self) -> None:
        assert self._series([1, None, 2]).total() == 3

    def test_empty_series(self) -> None:
        series = self._series([])

        assert series.total() is None
        assert series.last() is None
        assert series.last_value() is None
        assert series.energy() is None

    def test_last_value_skips_trailing_nulls(self) -> None:
        series = self._series([22.0, 24.5, None])

        assert series.last().value is None
        assert series.last().time == "t2"
        assert series.last_value() == 24.5

    def test_all_null_series_has_no_last_value(self) -> None:
        assert self._series([None, None]).last_value() is None

    def test_sample_interval_from_times(self) -> None:
        series = HistorySeries.model_validate(
            {
                "variable": "pvPower",
                "data": [
                    {"time": "2026-10-19 10:00:00 BRT-0300", "value": 2.0},
                    {"time": "2026-10-19 10:05:00 BRT-0300", "value": None},
                    {"time": "2026-10-19 10:10:00 BRT-0300", "value": 4.0},
                ],
            }
        )

        assert series.sample_interval_minutes() == 5.0
        assert series.energy() == pytest.approx(0.5)

    def test_single_sample_uses_default_interval(self) -> None:
        series = HistorySeries.model_validate(
            {"variable": "pvPower", "data": [{"time": "2026-10-19 10:00:00 BRT-0300", "value": 12.0}]}
        )

        assert series.sample_interval_minutes() == DEFAULT_SAMPLE_MINUTES
        assert series.energy() == pytest.approx(1.0)

    def test_result_indexes_series_by_variable(self) -> None:
        result = HistoryResult.model_validate(
            {"datas": [{"variable": "pvPower", "data": []}, {"variable": "pv1Volt", "data": []}]}
        )

        assert set(result.series()) == {"pvPower", "pv1Volt"}
