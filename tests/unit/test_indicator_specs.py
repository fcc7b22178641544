from __future__ import annotations

from dataclasses import replace
from types import MappingProxyType

import pytest

from water_grade.models.indicator import (
    GRADE_LABELS,
    INDICATOR_KEYS,
    INDICATORS,
    PRIORITY_KEYS,
    IndicatorSpec,
    Ordering,
    ThresholdTableError,
    WaterType,
    get_indicator,
    validate_threshold_tables,
)


def test_shipped_threshold_tables_are_valid():
    # Must never raise: the severity multiple relies on monotonic tables
    validate_threshold_tables()


def test_declaration_order_and_priority_keys():
    assert INDICATOR_KEYS == ("ph", "do", "cod_mn", "cod", "bod5", "nh3_n", "tp")
    assert PRIORITY_KEYS == {"ph", "do"}
    assert GRADE_LABELS == ("I", "II", "III", "IV", "V", "below V")


def test_every_monotonic_table_has_five_entries():
    for spec in INDICATORS:
        if spec.ordering is Ordering.RANGE:
            assert spec.bounds == (6, 9)
            continue
        for water_type in WaterType:
            assert len(spec.limits(water_type)) == 5, spec.key


def test_total_phosphorus_differs_by_water_type():
    tp = get_indicator("tp")
    assert tp.limits(WaterType.RIVER) == (0.02, 0.1, 0.2, 0.3, 0.4)
    assert tp.limits(WaterType.LAKE) == (0.005, 0.025, 0.05, 0.1, 0.2)
    # other indicators ignore the water type
    cod = get_indicator("cod")
    assert cod.limits(WaterType.RIVER) == cod.limits(WaterType.LAKE) == (15, 15, 20, 30, 40)


def test_get_indicator_unknown_key():
    with pytest.raises(KeyError):
        get_indicator("chlorophyll")


def test_non_monotonic_ascending_table_rejected():
    broken = replace(get_indicator("cod"), thresholds=(15, 20, 18, 30, 40))
    with pytest.raises(ThresholdTableError) as e:
        validate_threshold_tables((broken,))
    assert "non-decreasing" in str(e.value)


def test_non_monotonic_descending_table_rejected():
    broken = replace(get_indicator("do"), thresholds=(7.5, 6, 6.5, 3, 2))
    with pytest.raises(ThresholdTableError) as e:
        validate_threshold_tables((broken,))
    assert "non-increasing" in str(e.value)


def test_wrong_table_length_rejected():
    broken = replace(get_indicator("bod5"), thresholds=(3, 3, 4, 6))
    with pytest.raises(ThresholdTableError):
        validate_threshold_tables((broken,))


def test_non_positive_grade_iii_boundary_rejected():
    broken = IndicatorSpec("x", "X", Ordering.ASCENDING, thresholds=(0, 0, 0, 1, 2))
    with pytest.raises(ThresholdTableError) as e:
        validate_threshold_tables((broken,))
    assert "Grade III" in str(e.value)


def test_per_water_type_table_must_cover_both_types():
    broken = replace(
        get_indicator("tp"),
        per_water_type=MappingProxyType({WaterType.RIVER: (0.02, 0.1, 0.2, 0.3, 0.4)}),
    )
    with pytest.raises(ThresholdTableError) as e:
        validate_threshold_tables((broken,))
    assert "lake" in str(e.value)


def test_invalid_range_bounds_rejected():
    broken = replace(get_indicator("ph"), bounds=(9, 6))
    with pytest.raises(ThresholdTableError):
        validate_threshold_tables((broken,))


def test_indicator_spec_is_frozen():
    spec = get_indicator("nh3_n")
    with pytest.raises(AttributeError):
        spec.thresholds = (1, 2, 3, 4, 5)
