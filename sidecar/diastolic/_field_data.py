"""
The ordered diastolic field table.

Rules within a field run in the order written: specific phrasing first,
generic fallbacks last. Group 1 is the value token, group 2 (where present)
the unit token. Adding a field only means adding an entry here.
"""

from __future__ import annotations

from . import derivations as d
from .fields import FieldSpec, field_spec
from .normalizers import number, rhythm, tissue_velocity_cm_s, velocity_m_s

_NUM = r"([0-9.]+)"
_SIGNED = r"(-?[0-9.]+)"
_SEP = r"\s*[:=]?\s*"
_PRIME = r"(?:e['′’` ]|e-?prime)"
_FLOW_UNIT = r"(m/s|cm/s)?"
_TISSUE_UNIT = r"(cm/s|m/s)?"
_M2 = r"m(?:2|\^2|²)"
# Rest readings preceded by this belong to the exercise fields.
_STRESS_PREFIX = r"\b(?:exercise|stress|peak)\b[\s:=\-]*$"
_STRESS = r"\b(?:exercise|stress|peak)[\s:=\-]*"

FIELD_SPECS: list[FieldSpec] = [
    # --- Mitral inflow ---
    field_spec(
        "MV_E_m_s",
        "Mitral E velocity (m/s)",
        "m/s",
        [
            rf"\b(?:MV|Mitral)\s*E\b(?!\s*/)(?:\s*(?:peak|wave))?(?:\s*velocity)?[^0-9]{{0,10}}{_NUM}\s*{_FLOW_UNIT}",
            rf"\bE\s*wave(?:\s*velocity)?{_SEP}{_NUM}\s*{_FLOW_UNIT}\b",
            rf"(?<![\w/])(?-i:E)(?:\s*velocity)?{_SEP}{_NUM}\s*(m/s|cm/s)\b",
        ],
        velocity_m_s(3),
        places=3,
    ),
    field_spec(
        "MV_A_m_s",
        "Mitral A velocity (m/s)",
        "m/s",
        [
            rf"\b(?:MV|Mitral)\s*A\b(?!\s*/)(?:\s*(?:peak|wave))?(?:\s*velocity)?[^0-9]{{0,10}}{_NUM}\s*{_FLOW_UNIT}",
            rf"\bA\s*wave(?:\s*velocity)?{_SEP}{_NUM}\s*{_FLOW_UNIT}\b",
            rf"(?<![\w/])(?-i:A)(?:\s*velocity)?{_SEP}{_NUM}\s*(m/s|cm/s)\b",
        ],
        velocity_m_s(3),
        places=3,
    ),
    field_spec(
        "EA_ratio",
        "E/A ratio",
        "",
        [
            rf"\bE\s*/\s*A\s*(?:ratio)?{_SEP}{_NUM}",
            rf"\bE:?A\s*(?:ratio)?{_SEP}{_NUM}",
        ],
        number(2),
        derive=d.ea_ratio,
        depends_on=("MV_E_m_s", "MV_A_m_s"),
        places=2,
    ),
    field_spec(
        "DT_ms",
        "MV E deceleration time (ms)",
        "ms",
        [rf"\b(?:Deceleration\s*time|DT){_SEP}{_NUM}\s*ms\b"],
        number(0),
        places=0,
    ),
    # --- Tissue Doppler e' ---
    field_spec(
        "eprime_septal_cm_s",
        "e′ (septal) (cm/s)",
        "cm/s",
        [
            rf"\b(?:septal|medial)\s*{_PRIME}(?:\s*velocity)?{_SEP}{_NUM}\s*{_TISSUE_UNIT}\b",
            rf"(?<![\w/]){_PRIME}\s*(?:septal|medial)(?:\s*velocity)?{_SEP}{_NUM}\s*{_TISSUE_UNIT}\b",
        ],
        tissue_velocity_cm_s(2),
        places=2,
    ),
    field_spec(
        "eprime_lateral_cm_s",
        "e′ (lateral) (cm/s)",
        "cm/s",
        [
            rf"\b(?:lateral|lat)\s*{_PRIME}(?:\s*velocity)?{_SEP}{_NUM}\s*{_TISSUE_UNIT}\b",
            rf"(?<![\w/]){_PRIME}\s*(?:lateral|lat)(?:\s*velocity)?{_SEP}{_NUM}\s*{_TISSUE_UNIT}\b",
        ],
        tissue_velocity_cm_s(2),
        places=2,
    ),
    field_spec(
        "eprime_avg_cm_s",
        "e′ (average) (cm/s)",
        "cm/s",
        [rf"\b(?:average|avg)\s*{_PRIME}(?:\s*velocity)?{_SEP}{_NUM}\s*{_TISSUE_UNIT}\b"],
        tissue_velocity_cm_s(2),
        derive=d.eprime_average,
        depends_on=("eprime_septal_cm_s", "eprime_lateral_cm_s"),
        places=2,
    ),
    # --- E/e' ---
    field_spec(
        "E_over_eprime_septal",
        "E/e′ (septal)",
        "",
        [rf"\bE\s*/\s*{_PRIME}\s*(?:septal|medial){_SEP}{_NUM}"],
        number(2),
        derive=d.e_over_eprime_septal,
        depends_on=("MV_E_m_s", "eprime_septal_cm_s"),
        places=2,
        not_after=_STRESS_PREFIX,
    ),
    field_spec(
        "E_over_eprime_lateral",
        "E/e′ (lateral)",
        "",
        [rf"\bE\s*/\s*{_PRIME}\s*(?:lateral|lat){_SEP}{_NUM}"],
        number(2),
        derive=d.e_over_eprime_lateral,
        depends_on=("MV_E_m_s", "eprime_lateral_cm_s"),
        places=2,
        not_after=_STRESS_PREFIX,
    ),
    field_spec(
        "E_over_eprime_avg",
        "E/e′ (average)",
        "",
        [rf"\bE\s*/\s*{_PRIME}\s*(?:avg|average){_SEP}{_NUM}"],
        number(2),
        derive=d.e_over_eprime_average,
        depends_on=("MV_E_m_s", "eprime_avg_cm_s", "eprime_septal_cm_s", "eprime_lateral_cm_s"),
        places=2,
        not_after=_STRESS_PREFIX,
    ),
    # --- TR & LA ---
    field_spec(
        "TR_Vmax_m_s",
        "TR peak velocity (m/s)",
        "m/s",
        [
            rf"\bTR\s*(?:Vmax\.?|V\s*max|peak\s*velocity){_SEP}{_NUM}\s*m/s\b",
            rf"\btricuspid\s*regurgitation.*?peak\s*velocity[^0-9]{{0,10}}{_NUM}\s*m/s\b",
        ],
        number(2),
        places=2,
        not_after=_STRESS_PREFIX,
    ),
    field_spec(
        "LAVI_ml_m2",
        "LA volume index (mL/m²)",
        "mL/m²",
        [rf"\b(?:LA\s*volume\s*index|LAVI){_SEP}{_NUM}\s*ml\s*/\s*{_M2}"],
        number(1),
        derive=d.la_volume_index,
        depends_on=("LA_volume_ml", "BSA_m2"),
        places=1,
    ),
    field_spec(
        "LA_volume_ml",
        "LA volume (mL)",
        "mL",
        [rf"\bLA\s*volume(?:\s*\(biplane\))?{_SEP}{_NUM}\s*ml\b"],
        number(1),
        places=1,
    ),
    field_spec(
        "BSA_m2",
        "Body surface area (m²)",
        "m²",
        [
            rf"\bBSA{_SEP}{_NUM}\s*{_M2}",
            rf"\bBody\s*surface\s*area{_SEP}{_NUM}\s*{_M2}",
        ],
        number(2),
        places=2,
    ),
    # --- Vitals / context ---
    field_spec(
        "HR_bpm",
        "Heart rate (bpm)",
        "bpm",
        [rf"\b(?:HR|Heart\s*rate){_SEP}{_NUM}\s*bpm\b"],
        number(0),
        places=0,
    ),
    field_spec(
        "BP_sys",
        "Systolic BP (mmHg)",
        "mmHg",
        [rf"\b(?:BP|Blood\s*pressure){_SEP}([0-9]{{2,3}})\s*/\s*([0-9]{{2,3}})\b"],
        number(0),
        group_keys=("BP_sys", "BP_dia"),
        places=0,
    ),
    field_spec(
        "BP_dia",
        "Diastolic BP (mmHg)",
        "mmHg",
        [rf"\b(?:BP|Blood\s*pressure){_SEP}([0-9]{{2,3}})\s*/\s*([0-9]{{2,3}})\b"],
        number(0),
        group_keys=("BP_sys", "BP_dia"),
        places=0,
    ),
    field_spec(
        "Rhythm",
        "Rhythm",
        "",
        [
            rf"(?<![A-Za-z] )\b(?:Underlying\s*rhythm|Rhythm)[ \t]*[:=]?[ \t]*([A-Za-z ]{{2,}})",
            r"\bAtrial\s*fibrillation\b",
            r"\bAF(?:ib)?\b",
            r"\bSinus\s*rhythm\b",
            r"\bNSR\b",
        ],
        rhythm(),
    ),
    # --- LA strain, PV flow, IVRT, pressures, GLS ---
    field_spec(
        "LA_reservoir_strain_pct",
        "LA reservoir strain (%, LASr/LARS/PALS)",
        "%",
        [
            rf"\b(?:LA|Left\s*atrial)\s*(?:reservoir\s*strain|strain\s*\(reservoir\)|LASr|LARS|PALS){_SEP}{_SIGNED}\s*%",
            rf"\bLA\s*strain{_SEP}{_SIGNED}\s*%",
            rf"\b(?:LASr|LARS|PALS){_SEP}{_SIGNED}\s*%",
        ],
        number(1),
        places=1,
    ),
    field_spec(
        "PV_SD_ratio",
        "Pulmonary vein S/D ratio",
        "",
        [
            rf"\b(?:pulmonary\s*vein(?:ous)?|PV)\s*S\s*/\s*D\s*(?:ratio)?{_SEP}{_NUM}",
            rf"\bS\s*/\s*D{_SEP}{_NUM}\b(?=.*pulmonary\s*vein)",
        ],
        number(2),
        places=2,
    ),
    field_spec(
        "IVRT_ms",
        "Isovolumic relaxation time (ms)",
        "ms",
        [
            rf"\bIVRT{_SEP}{_NUM}\s*ms\b",
            rf"\bisovolumic\s*relaxation\s*time{_SEP}{_NUM}\s*ms\b",
        ],
        number(0),
        places=0,
    ),
    field_spec(
        "PASP_mmHg",
        "Pulmonary artery systolic pressure (mmHg)",
        "mmHg",
        [
            rf"\bPASP{_SEP}{_NUM}\s*mmHg\b",
            rf"\bRVSP{_SEP}{_NUM}\s*mmHg\b",
            rf"\bSystolic\s*PAP{_SEP}{_NUM}\s*mmHg\b",
        ],
        number(0),
        derive=d.pasp_from_tr,
        depends_on=("TR_Vmax_m_s", "RA_pressure_mmHg"),
        places=0,
    ),
    field_spec(
        "RA_pressure_mmHg",
        "Right atrial pressure (mmHg)",
        "mmHg",
        [rf"\b(?:Estimated\s*RA\s*pressure|RA\s*pressure|RAP){_SEP}{_NUM}\s*mmHg\b"],
        number(0),
        places=0,
    ),
    field_spec(
        "LV_GLS_pct",
        "LV global longitudinal strain (%)",
        "%",
        [rf"\b(?:LV\s*)?(?:global\s*longitudinal\s*strain|GLS){_SEP}{_SIGNED}\s*%"],
        number(1),
        places=1,
    ),
    field_spec(
        "LA_stiffness_index",
        "LA stiffness index (E/e′avg ÷ LARS%)",
        "",
        [],
        number(2),
        derive=d.la_stiffness_index,
        depends_on=("E_over_eprime_avg", "LA_reservoir_strain_pct"),
        places=2,
    ),
    # --- Exercise (diastolic stress) ---
    field_spec(
        "E_over_eprime_avg_exercise",
        "Exercise E/e′ (average)",
        "",
        [rf"{_STRESS}E\s*/\s*{_PRIME}\s*(?:avg|average)?{_SEP}{_NUM}"],
        number(2),
        places=2,
    ),
    field_spec(
        "TR_Vmax_exercise_m_s",
        "Exercise TR Vmax (m/s)",
        "m/s",
        [
            rf"{_STRESS}TR\s*(?:Vmax|peak\s*velocity){_SEP}{_NUM}\s*m/s\b",
            rf"{_STRESS}tricuspid\s*regurgitation.*?peak\s*velocity[^0-9]{{0,10}}{_NUM}\s*m/s\b",
        ],
        number(2),
        places=2,
    ),
]
