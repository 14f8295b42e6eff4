"""Tests for the field registry."""

import pytest

from diastolic import DEFAULT_REGISTRY, FieldRegistry
from diastolic.fields import field_spec
from diastolic.normalizers import number


def _spec(key, derive=None, depends_on=()):
    return field_spec(key, key, "", [], number(2), derive=derive, depends_on=depends_on)


class TestDefaultRegistry:
    def test_field_count_and_order(self):
        keys = DEFAULT_REGISTRY.keys()
        assert len(keys) == 27
        assert keys[0] == "MV_E_m_s"
        assert keys[-1] == "TR_Vmax_exercise_m_s"
        assert len(set(keys)) == len(keys)

    def test_covers_all_groups(self):
        for key in (
            "EA_ratio", "DT_ms", "eprime_avg_cm_s", "E_over_eprime_avg",
            "TR_Vmax_m_s", "LAVI_ml_m2", "BSA_m2", "HR_bpm", "BP_sys", "BP_dia",
            "Rhythm", "LA_reservoir_strain_pct", "PV_SD_ratio", "IVRT_ms",
            "PASP_mmHg", "RA_pressure_mmHg", "LV_GLS_pct", "LA_stiffness_index",
            "E_over_eprime_avg_exercise",
        ):
            assert key in DEFAULT_REGISTRY

    def test_dependencies_come_first(self):
        order = [spec.key for spec in DEFAULT_REGISTRY.derivation_order]
        assert order.index("eprime_avg_cm_s") < order.index("E_over_eprime_avg")
        assert order.index("E_over_eprime_avg") < order.index("LA_stiffness_index")

    def test_only_derivable_fields_in_derivation_order(self):
        assert all(spec.derived for spec in DEFAULT_REGISTRY.derivation_order)
        assert {spec.key for spec in DEFAULT_REGISTRY.derivation_order} == {
            "EA_ratio", "eprime_avg_cm_s", "E_over_eprime_septal",
            "E_over_eprime_lateral", "E_over_eprime_avg", "LAVI_ml_m2",
            "PASP_mmHg", "LA_stiffness_index",
        }

    def test_list_fields(self):
        info = DEFAULT_REGISTRY.list_fields()
        assert info[0] == {
            "key": "MV_E_m_s",
            "label": "Mitral E velocity (m/s)",
            "unit": "m/s",
            "places": 3,
            "derived": False,
        }


class TestRegistryValidation:
    def test_duplicate_key(self):
        with pytest.raises(ValueError, match="Duplicate"):
            FieldRegistry([_spec("a"), _spec("a")])

    def test_unknown_dependency(self):
        with pytest.raises(ValueError, match="unknown"):
            FieldRegistry([_spec("a", derive=lambda bag: 1, depends_on=("missing",))])

    def test_cycle(self):
        with pytest.raises(ValueError, match="cycle"):
            FieldRegistry([
                _spec("a", derive=lambda bag: 1, depends_on=("b",)),
                _spec("b", derive=lambda bag: 1, depends_on=("a",)),
            ])

    def test_dependent_declared_first_is_ordered_after(self):
        registry = FieldRegistry([
            _spec("c", derive=lambda bag: 1, depends_on=("b",)),
            _spec("b", derive=lambda bag: 1, depends_on=("a",)),
            _spec("a"),
        ])
        assert [s.key for s in registry.derivation_order] == ["b", "c"]
