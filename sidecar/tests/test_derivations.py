"""Tests for derivation formulas."""

from diastolic import derivations as d


class TestRatios:
    def test_ea_ratio(self):
        assert d.ea_ratio({"MV_E_m_s": 0.80, "MV_A_m_s": 0.50}) == 1.6

    def test_ea_ratio_needs_nonzero_a(self):
        assert d.ea_ratio({"MV_E_m_s": 0.80, "MV_A_m_s": 0}) is None
        assert d.ea_ratio({"MV_E_m_s": 0.80}) is None

    def test_eprime_average(self):
        assert d.eprime_average({"eprime_septal_cm_s": 6, "eprime_lateral_cm_s": 10}) == 8.0
        assert d.eprime_average({"eprime_septal_cm_s": 6}) is None

    def test_e_over_eprime_aligns_units(self):
        bag = {"MV_E_m_s": 0.80, "eprime_septal_cm_s": 6.0, "eprime_lateral_cm_s": 10.0}
        assert d.e_over_eprime_septal(bag) == 13.33
        assert d.e_over_eprime_lateral(bag) == 8.0

    def test_e_over_eprime_zero_denominator(self):
        bag = {"MV_E_m_s": 0.80, "eprime_septal_cm_s": 0.0}
        assert d.e_over_eprime_septal(bag) is None

    def test_e_over_eprime_average_uses_average(self):
        bag = {"MV_E_m_s": 0.80, "eprime_avg_cm_s": 8.0}
        assert d.e_over_eprime_average(bag) == 10.0

    def test_e_over_eprime_average_inline_fallback(self):
        bag = {"MV_E_m_s": 0.80, "eprime_septal_cm_s": 6, "eprime_lateral_cm_s": 10}
        assert d.e_over_eprime_average(bag) == 10.0

    def test_e_over_eprime_average_missing_e(self):
        assert d.e_over_eprime_average({"eprime_avg_cm_s": 8.0}) is None


class TestVolumesAndPressures:
    def test_lavi(self):
        assert d.la_volume_index({"LA_volume_ml": 57.0, "BSA_m2": 1.9}) == 30.0

    def test_lavi_zero_bsa(self):
        assert d.la_volume_index({"LA_volume_ml": 57.0, "BSA_m2": 0.0}) is None

    def test_pasp_bernoulli(self):
        value = d.pasp_from_tr({"TR_Vmax_m_s": 2.8, "RA_pressure_mmHg": 5})
        assert value == 36
        assert isinstance(value, int)

    def test_pasp_needs_both_inputs(self):
        assert d.pasp_from_tr({"TR_Vmax_m_s": 2.8}) is None
        assert d.pasp_from_tr({"RA_pressure_mmHg": 5}) is None

    def test_la_stiffness(self):
        assert d.la_stiffness_index({"E_over_eprime_avg": 10.0, "LA_reservoir_strain_pct": 25.0}) == 0.4

    def test_la_stiffness_zero_strain(self):
        assert d.la_stiffness_index({"E_over_eprime_avg": 10.0, "LA_reservoir_strain_pct": 0.0}) is None

    def test_categorical_inputs_are_ignored(self):
        assert d.ea_ratio({"MV_E_m_s": "0.8", "MV_A_m_s": 0.5}) is None
