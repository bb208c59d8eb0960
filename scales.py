"""Grading scale registry and institution directory."""
from typing import Dict, List, Optional

from models import GradingScale, Institution

_LETTER_4 = {
    "A": 4.0, "A-": 3.7, "B+": 3.3, "B": 3.0, "B-": 2.7, "C+": 2.3,
    "C": 2.0, "C-": 1.7, "D+": 1.3, "D": 1.0, "F": 0.0,
}

_LETTER_5 = {
    "A": 5.0, "A-": 4.7, "B+": 4.3, "B": 4.0, "B-": 3.7, "C+": 3.3,
    "C": 3.0, "C-": 2.7, "D+": 2.3, "D": 2.0, "F": 0.0,
}

# Scales offered by the calculator form.
CALCULATOR_SCALES = [
    GradingScale(name="4.0 Scale (Standard)", type="4.0", grades=_LETTER_4),
    GradingScale(name="5.0 Scale (Weighted)", type="5.0", grades=_LETTER_5),
    GradingScale(
        name="Percentage Scale",
        type="percentage",
        grades={"90-100": 4.0, "80-89": 3.0, "70-79": 2.0, "60-69": 1.0, "0-59": 0.0},
    ),
]

# Tables used to bring a foreign transcript onto a 4.0 scale.
# 10-point CGPA points above 4 are rescaled by the transcript converter.
CONVERSION_SCALES = [
    GradingScale(
        name="10-point CGPA",
        type="10-point",
        grades={
            "AA": 10, "AB": 9, "BB": 8, "BC": 7, "CC": 6, "CD": 5, "DD": 4,
            "A+": 10, "A": 9, "A-": 8, "B+": 7, "B": 6, "B-": 5, "C+": 4,
            "C": 3, "D": 2, "F": 0, "O": 10,
        },
    ),
    GradingScale(name="4.0 GPA", type="4.0", grades=_LETTER_4),
    GradingScale(
        name="Class Honours",
        type="honours",
        grades={"First": 4.0, "2:1": 3.5, "2:2": 3.0, "Third": 2.5, "Pass": 2.0, "Fail": 0.0},
    ),
    GradingScale(name="Letter Grades", type="letter", grades=_LETTER_4),
    GradingScale(
        name="Percentage",
        type="percentage",
        grades={
            "90-100": 4.0, "80-89": 3.5, "70-79": 3.0, "60-69": 2.5,
            "50-59": 2.0, "40-49": 1.0, "0-39": 0.0,
        },
    ),
]

DEFAULT_CONVERSION_SCALE = "4.0 GPA"

_SCALES: Dict[str, GradingScale] = {s.name: s for s in CALCULATOR_SCALES + CONVERSION_SCALES}


def list_scales() -> List[GradingScale]:
    return list(_SCALES.values())


def get_scale(name: str) -> GradingScale:
    """Return the registered scale called *name*; raise KeyError if unknown."""
    return _SCALES[name]


def get_conversion_scale(grading_system: str) -> GradingScale:
    """Conversion table for *grading_system*, falling back to the 4.0 table."""
    return _SCALES.get(grading_system) or _SCALES[DEFAULT_CONVERSION_SCALE]


# ── Institution directory ────────────────────────────────────────────────────

INSTITUTIONS = [
    Institution(
        id="iit-bombay", name="Indian Institute of Technology Bombay", country="India",
        rigor=4.8, type="Technical", grading_system="10-point CGPA", conversion_factor=0.4,
        recognition_level="High", specializations=["Engineering", "Technology", "Sciences"],
    ),
    Institution(
        id="iit-delhi", name="Indian Institute of Technology Delhi", country="India",
        rigor=4.8, type="Technical", grading_system="10-point CGPA", conversion_factor=0.4,
        recognition_level="High", specializations=["Engineering", "Technology", "Management"],
    ),
    Institution(
        id="iisc-bangalore", name="Indian Institute of Science Bangalore", country="India",
        rigor=4.9, type="Research", grading_system="Letter Grades", conversion_factor=1.0,
        recognition_level="High", specializations=["Sciences", "Engineering", "Research"],
    ),
    Institution(
        id="nit-trichy", name="National Institute of Technology Tiruchirappalli", country="India",
        rigor=4.2, type="Technical", grading_system="10-point CGPA", conversion_factor=0.4,
        recognition_level="High", specializations=["Engineering", "Technology"],
    ),
    Institution(
        id="bits-pilani", name="Birla Institute of Technology and Science Pilani", country="India",
        rigor=4.3, type="Technical", grading_system="10-point CGPA", conversion_factor=0.4,
        recognition_level="High", specializations=["Engineering", "Sciences", "Management"],
    ),
    Institution(
        id="mit", name="Massachusetts Institute of Technology", country="USA",
        rigor=4.9, type="Technical", grading_system="4.0 GPA", conversion_factor=1.0,
        recognition_level="High", specializations=["Engineering", "Technology", "Sciences"],
    ),
    Institution(
        id="cambridge", name="University of Cambridge", country="UK",
        rigor=4.7, type="Research", grading_system="Class Honours", conversion_factor=0.8,
        recognition_level="High", specializations=["Sciences", "Engineering", "Liberal Arts"],
    ),
    Institution(
        id="tsinghua", name="Tsinghua University", country="China",
        rigor=4.6, type="Technical", grading_system="Percentage", conversion_factor=0.04,
        recognition_level="High", specializations=["Engineering", "Technology", "Sciences"],
    ),
]


def search_institutions(term: str = "", country: Optional[str] = None) -> List[Institution]:
    """Match *term* against name or country, case-insensitively."""
    needle = term.lower()
    return [
        inst for inst in INSTITUTIONS
        if (needle in inst.name.lower() or needle in inst.country.lower())
        and (country is None or country == "all" or inst.country == country)
    ]


def list_countries() -> List[str]:
    countries = []
    for inst in INSTITUTIONS:
        if inst.country not in countries:
            countries.append(inst.country)
    return countries
