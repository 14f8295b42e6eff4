"""Derivation formulas for fields that can be computed from other fields.

Every function reads the bag only and returns None when an input is missing
or a denominator is zero.
"""

from __future__ import annotations

from typing import Mapping, Optional, Union

from .fields import CanonicalValue, round_to

Number = Union[int, float]


def _num(bag: Mapping[str, CanonicalValue], key: str) -> Optional[Number]:
    value = bag.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def ea_ratio(bag: Mapping[str, CanonicalValue]) -> Optional[Number]:
    e = _num(bag, "MV_E_m_s")
    a = _num(bag, "MV_A_m_s")
    if e is None or a is None or a == 0:
        return None
    return round_to(e / a, 2)


def eprime_average(bag: Mapping[str, CanonicalValue]) -> Optional[Number]:
    septal = _num(bag, "eprime_septal_cm_s")
    lateral = _num(bag, "eprime_lateral_cm_s")
    if septal is None or lateral is None:
        return None
    return round_to((septal + lateral) / 2, 2)


def _e_over_eprime(e_m_s: Optional[Number], eprime_cm_s: Optional[Number]) -> Optional[Number]:
    # E is stored in m/s, e' in cm/s
    if e_m_s is None or eprime_cm_s is None or eprime_cm_s == 0:
        return None
    return round_to(e_m_s * 100 / eprime_cm_s, 2)


def e_over_eprime_septal(bag: Mapping[str, CanonicalValue]) -> Optional[Number]:
    return _e_over_eprime(_num(bag, "MV_E_m_s"), _num(bag, "eprime_septal_cm_s"))


def e_over_eprime_lateral(bag: Mapping[str, CanonicalValue]) -> Optional[Number]:
    return _e_over_eprime(_num(bag, "MV_E_m_s"), _num(bag, "eprime_lateral_cm_s"))


def e_over_eprime_average(bag: Mapping[str, CanonicalValue]) -> Optional[Number]:
    """E over the average e'; averages septal and lateral inline when needed."""
    eprime = _num(bag, "eprime_avg_cm_s")
    if eprime is None:
        septal = _num(bag, "eprime_septal_cm_s")
        lateral = _num(bag, "eprime_lateral_cm_s")
        if septal is not None and lateral is not None:
            eprime = (septal + lateral) / 2
    return _e_over_eprime(_num(bag, "MV_E_m_s"), eprime)


def la_volume_index(bag: Mapping[str, CanonicalValue]) -> Optional[Number]:
    volume = _num(bag, "LA_volume_ml")
    bsa = _num(bag, "BSA_m2")
    if volume is None or bsa is None or bsa == 0:
        return None
    return round_to(volume / bsa, 1)


def pasp_from_tr(bag: Mapping[str, CanonicalValue]) -> Optional[Number]:
    """Simplified Bernoulli: 4 * TR Vmax^2 + RA pressure."""
    tr_vmax = _num(bag, "TR_Vmax_m_s")
    rap = _num(bag, "RA_pressure_mmHg")
    if tr_vmax is None or rap is None:
        return None
    return round_to(4 * tr_vmax * tr_vmax + rap, 0)


def la_stiffness_index(bag: Mapping[str, CanonicalValue]) -> Optional[Number]:
    e_over_eprime = _num(bag, "E_over_eprime_avg")
    lars = _num(bag, "LA_reservoir_strain_pct")
    if e_over_eprime is None or lars is None or lars == 0:
        return None
    return round_to(e_over_eprime / lars, 2)
