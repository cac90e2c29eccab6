# unit_converter.py

from typing import Optional

STANDARD_GLUCOSE_UNIT = "mg/dL"
MMOL_TO_MG_DL = 18.0182  # glucose molar mass / 10

# Conversion lambdas keyed by lower-cased source unit
GLUCOSE_CONVERSIONS = {
    "mg/dl": lambda v: v,                     # identity
    "mmol/l": lambda v: v * MMOL_TO_MG_DL,    # mmol/L to mg/dL
}


def normalize_blood_sugar(value: Optional[float], unit: Optional[str] = None) -> Optional[float]:
    """
    Convert a blood glucose reading to mg/dL, rounded to one decimal.
    A missing value stays missing; a missing unit is taken as mg/dL.
    Raises ValueError for units with no known conversion.
    """
    if value is None:
        return None

    unit_lower = (unit or STANDARD_GLUCOSE_UNIT).strip().lower()
    if unit_lower not in GLUCOSE_CONVERSIONS:
        raise ValueError(f"Unsupported blood sugar unit: {unit}")

    return round(GLUCOSE_CONVERSIONS[unit_lower](float(value)), 1)
