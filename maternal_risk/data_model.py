# data_model.py

from dataclasses import dataclass, field
from typing import List, Optional

# --- Levels and conditions ---

LOW = "low"
MODERATE = "moderate"
HIGH = "high"

RISK_LEVELS = (LOW, MODERATE, HIGH)  # ordered: low < moderate < high
LEVEL_RANK = {level: rank for rank, level in enumerate(RISK_LEVELS)}

PREECLAMPSIA = "preeclampsia"
GESTATIONAL_DIABETES = "gestational_diabetes"
DEPRESSION = "depression"

CONDITIONS = (PREECLAMPSIA, GESTATIONAL_DIABETES, DEPRESSION)


# --- Check-in input ---

@dataclass(frozen=True)
class BloodPressure:
    systolic: int   # mmHg
    diastolic: int  # mmHg


@dataclass(frozen=True)
class WeeklyCheckIn:
    week: int
    date: str  # ISO timestamp of submission

    # Symptom ratings, 1 (none) to 5 (severe)
    headache: int
    swelling: int
    sleep_quality: int  # 1=poor, 5=excellent
    fatigue: int
    mood: int  # 1=very low, 5=great
    dizziness: int

    # Optional clinical inputs
    blood_pressure: Optional[BloodPressure] = None
    blood_sugar: Optional[float] = None  # mg/dL
    activity_level: Optional[int] = None  # 1-5

    id: Optional[str] = None


# --- Engine output ---

@dataclass
class RiskIndicator:
    condition: str
    level: str
    confidence: int  # 0-100
    triggers: List[str] = field(default_factory=list)
    explanation: str = ""
    recommendation: str = ""


@dataclass
class SystemAction:
    type: str
    description: str
    priority: str
    ai_content: Optional[str] = None  # filled by the optional LLM add-on only


@dataclass
class RiskAssessment:
    overall_level: str
    timestamp: str
    week: int
    indicators: List[RiskIndicator]
    system_actions: List[SystemAction] = field(default_factory=list)

    def indicator_for(self, condition: str) -> Optional[RiskIndicator]:
        return next((i for i in self.indicators if i.condition == condition), None)


@dataclass
class RiskTrajectoryPoint:
    week: int
    date: str
    overall_level: str
    preeclampsia_level: str
    diabetes_level: str
    depression_level: str
