import pytest

SAMPLE_REPORT = """TRANSTHORACIC ECHOCARDIOGRAM
BSA: 1.9 m2
HR 72 bpm
BP 128/82 mmHg
Rhythm: Sinus rhythm
Mitral E velocity: 80 cm/s
Mitral A velocity: 50 cm/s
Deceleration time: 210 ms
Septal e': 6 cm/s
Lateral e': 10 cm/s
TR Vmax: 2.8 m/s
RA pressure: 5 mmHg
LA volume: 57 mL
LA reservoir strain: 25 %
LV GLS: -18.5 %
IVRT: 95 ms
"""


@pytest.fixture
def sample_report() -> str:
    return SAMPLE_REPORT
