"""
Default mapping from field keys to form destinations and the apply step.

Destinations are CSS selector strings for the browser form; the writer
callback is supplied by whoever owns the form.
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping, Optional, Tuple

from diastolic import CanonicalValue

logger = logging.getLogger(__name__)

Writer = Callable[[str, CanonicalValue], bool]

DEFAULT_DESTINATIONS: dict[str, str] = {
    # Core
    "MV_E_m_s": "#mv_e, [name='mv_e']",
    "MV_A_m_s": "#mv_a, [name='mv_a']",
    "EA_ratio": "#ea_ratio, [name='ea_ratio']",
    "DT_ms": "#dt_ms, [name='dt_ms']",
    "eprime_septal_cm_s": "#eprime_septal, [name='eprime_septal']",
    "eprime_lateral_cm_s": "#eprime_lateral, [name='eprime_lateral']",
    "eprime_avg_cm_s": "#eprime_avg, [name='eprime_avg']",
    "E_over_eprime_septal": "#e_over_eprime_septal, [name='e_over_eprime_septal']",
    "E_over_eprime_lateral": "#e_over_eprime_lateral, [name='e_over_eprime_lateral']",
    "E_over_eprime_avg": "#e_over_eprime_avg, [name='e_over_eprime_avg']",
    "TR_Vmax_m_s": "#tr_vmax, [name='tr_vmax']",
    "LAVI_ml_m2": "#lavi, [name='lavi']",
    "LA_volume_ml": "#la_volume, [name='la_volume']",
    "BSA_m2": "#bsa, [name='bsa']",
    "HR_bpm": "#hr, [name='hr']",
    "BP_sys": "#bp_sys, [name='bp_sys']",
    "BP_dia": "#bp_dia, [name='bp_dia']",
    "Rhythm": "#rhythm, [name='rhythm']",
    # Strain, PV flow, pressures
    "LA_reservoir_strain_pct": "#la_strain, [name='la_strain'], [name='lars'], [name='lasr'], [name='pals']",
    "PV_SD_ratio": "#pv_sd, [name='pv_sd']",
    "IVRT_ms": "#ivrt, [name='ivrt']",
    "PASP_mmHg": "#pasp, [name='pasp'], #rvsp, [name='rvsp']",
    "RA_pressure_mmHg": "#rap, [name='rap']",
    "LV_GLS_pct": "#gls, [name='gls'], [name='lv_gls']",
    "LA_stiffness_index": "#la_stiffness, [name='la_stiffness']",
    # Exercise
    "E_over_eprime_avg_exercise": "#e_over_eprime_avg_ex, [name='e_over_eprime_avg_ex']",
    "TR_Vmax_exercise_m_s": "#tr_vmax_ex, [name='tr_vmax_ex']",
}


def merge_destinations(overrides: Optional[Mapping[str, str]] = None) -> dict[str, str]:
    """Defaults with caller overrides on top; an empty override unmaps a key."""
    merged = dict(DEFAULT_DESTINATIONS)
    for key, destination in (overrides or {}).items():
        if destination:
            merged[key] = destination
        else:
            merged.pop(key, None)
    return merged


def mapped_entries(
    bag: Mapping[str, CanonicalValue],
    destinations: Mapping[str, str],
) -> list[Tuple[str, str, CanonicalValue]]:
    """(key, destination, value) for every present entry that has a destination.

    Keys sharing a destination each get their own entry.
    """
    return [
        (key, destinations[key], value)
        for key, value in bag.items()
        if value is not None and destinations.get(key)
    ]


def plan_assignments(
    bag: Mapping[str, CanonicalValue],
    destinations: Mapping[str, str],
) -> dict[str, CanonicalValue]:
    """Destination -> value; the last key written to a shared destination wins."""
    return {destination: value for _, destination, value in mapped_entries(bag, destinations)}


def apply_bag(
    bag: Mapping[str, CanonicalValue],
    destinations: Mapping[str, str],
    write: Writer,
) -> int:
    """Write each mapped value through ``write`` and count the writes that landed."""
    updated = 0
    for key, destination, value in mapped_entries(bag, destinations):
        try:
            if write(destination, value):
                updated += 1
        except Exception:
            logger.warning("Failed to write %s to %s", key, destination, exc_info=True)
    return updated
