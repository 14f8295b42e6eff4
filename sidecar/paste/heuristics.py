from __future__ import annotations

import re

# Vocabulary that marks pasted text as an echo report worth parsing.
_REPORT_VOCAB_RE = re.compile(
    r"\b(?:MV\s*E|Mitral\s*E|E/A|e['′’` ]|TR\s*(?:Vmax|peak)|LAVI|LA\s*volume"
    r"|Deceleration\s*time|DT|HR|BP|Rhythm|LASr|LARS|PALS|IVRT|PASP|RVSP"
    r"|pulmonary\s*vein|PV\s*S/D)\b",
    re.IGNORECASE,
)

MIN_REPORT_LINES = 3
MIN_LABEL_COLONS = 2


def looks_like_report(text: str | None) -> bool:
    """Cheap check that pasted text is a report rather than a single value."""
    if not text:
        return False
    lines = re.split(r"\r?\n", text.strip())
    if len(lines) >= MIN_REPORT_LINES:
        return True
    if _REPORT_VOCAB_RE.search(text):
        return True
    return text.count(":") >= MIN_LABEL_COLONS
