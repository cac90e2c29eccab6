from datetime import datetime, timezone
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from dotenv import load_dotenv
import logging

load_dotenv()

from maternal_risk.data_model import BloodPressure, WeeklyCheckIn
from maternal_risk.risk_engine import assess_risk, assess_latest
from maternal_risk.trajectory import build_risk_trajectory, upsert_check_in
from maternal_risk.doctor_summary import generate_doctor_summary
from maternal_risk.explanation_utils import get_risk_level_display
from maternal_risk.llm_insight import generate_risk_insight, enrich_actions_with_ai
from maternal_risk.serialization import assessment_to_dict, check_in_to_dict, trajectory_to_list
from maternal_risk.system_actions import determine_chat_tone
from maternal_risk.unit_converter import normalize_blood_sugar

app = FastAPI()

# -----------------------------
# Middleware
# -----------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # replace "*" with your frontend URL in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
@app.head("/")
def root():
    return {"message": "Welcome to the Maternal Risk API"}

logger = logging.getLogger("uvicorn.error")

NO_DATA_SUMMARY = "No check-in data available."

# -----------------------------
# Request models
# -----------------------------


class BloodPressureInput(BaseModel):
    systolic: int = Field(..., gt=0)
    diastolic: int = Field(..., gt=0)


class CheckInInput(BaseModel):
    # the web client posts camelCase keys
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    week: int = Field(..., ge=1)
    date: Optional[str] = None

    headache: int = Field(..., ge=1, le=5)
    swelling: int = Field(..., ge=1, le=5)
    sleep_quality: int = Field(..., ge=1, le=5, alias="sleepQuality")
    fatigue: int = Field(..., ge=1, le=5)
    mood: int = Field(..., ge=1, le=5)
    dizziness: int = Field(..., ge=1, le=5)

    blood_pressure: Optional[BloodPressureInput] = Field(None, alias="bloodPressure")
    blood_sugar: Optional[float] = Field(None, gt=0, alias="bloodSugar")
    blood_sugar_unit: Optional[str] = Field("mg/dL", alias="bloodSugarUnit")
    activity_level: Optional[int] = Field(None, ge=1, le=5, alias="activityLevel")


class AssessRequest(BaseModel):
    current: CheckInInput
    history: List[CheckInInput] = Field(default_factory=list)


class CheckInListRequest(BaseModel):
    check_ins: List[CheckInInput] = Field(default_factory=list)


class SubmitRequest(BaseModel):
    check_in: CheckInInput
    history: List[CheckInInput] = Field(default_factory=list)


def to_check_in(item: CheckInInput) -> WeeklyCheckIn:
    try:
        blood_sugar = normalize_blood_sugar(item.blood_sugar, item.blood_sugar_unit)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    bp = item.blood_pressure
    return WeeklyCheckIn(
        id=item.id,
        week=item.week,
        date=item.date or datetime.now(timezone.utc).isoformat(),
        headache=item.headache,
        swelling=item.swelling,
        sleep_quality=item.sleep_quality,
        fatigue=item.fatigue,
        mood=item.mood,
        dizziness=item.dizziness,
        blood_pressure=BloodPressure(bp.systolic, bp.diastolic) if bp else None,
        blood_sugar=blood_sugar,
        activity_level=item.activity_level,
    )


# -----------------------------
# Engine endpoints
# -----------------------------
@app.post("/assess", response_model=dict)
def assess(request: AssessRequest):
    current = to_check_in(request.current)
    history = [to_check_in(h) for h in request.history]
    try:
        assessment = assess_risk(current, history)
    except Exception as e:
        logger.error(f"Error in /assess endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error. Please check your input and try again.")

    logger.info(f"Assessed week {assessment.week}: overall={assessment.overall_level}, "
                f"actions={len(assessment.system_actions)}")
    out = assessment_to_dict(assessment)
    out["chat_tone"] = determine_chat_tone(assessment.overall_level)
    return out


@app.post("/check-ins", response_model=dict)
def submit_check_in(request: SubmitRequest):
    """
    Record a check-in against the caller's history. A check-in for a week
    already in the history replaces it. Storage stays with the caller, so
    the updated list is returned alongside the assessment and trajectory.
    """
    current = to_check_in(request.check_in)
    history = [to_check_in(h) for h in request.history]
    try:
        updated = upsert_check_in(history, current)
        assessment = assess_risk(current, updated[:-1])
        points = build_risk_trajectory(updated)
    except Exception as e:
        logger.error(f"Error in /check-ins endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error. Please check your input and try again.")

    logger.info(f"Recorded week {current.week}: {len(updated)} check-ins, overall={assessment.overall_level}")
    out = assessment_to_dict(assessment)
    out["chat_tone"] = determine_chat_tone(assessment.overall_level)
    out["check_ins"] = [check_in_to_dict(c) for c in sorted(updated, key=lambda c: c.week)]
    out["trajectory"] = trajectory_to_list(points)
    return out


@app.post("/trajectory", response_model=list)
def trajectory(request: CheckInListRequest):
    check_ins = [to_check_in(c) for c in request.check_ins]
    try:
        return trajectory_to_list(build_risk_trajectory(check_ins))
    except Exception as e:
        logger.error(f"Error in /trajectory endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error. Please check your input and try again.")


@app.post("/doctor-summary", response_model=dict)
def doctor_summary(request: CheckInListRequest):
    check_ins = [to_check_in(c) for c in request.check_ins]
    assessment = assess_latest(check_ins)
    if assessment is None:
        return {"summary": NO_DATA_SUMMARY}
    return {"summary": generate_doctor_summary(assessment, check_ins)}


@app.get("/risk-display/{level}", response_model=dict)
def risk_display(level: str):
    try:
        return dict(get_risk_level_display(level))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.post("/insight", response_model=dict)
def insight(request: AssessRequest):
    current = to_check_in(request.current)
    history = [to_check_in(h) for h in request.history]
    try:
        assessment = assess_risk(current, history)
        enriched = enrich_actions_with_ai(assessment)
        result = generate_risk_insight(assessment)
    except Exception as e:
        logger.error(f"Error in /insight endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error. Please check your input and try again.")

    out = assessment_to_dict(enriched)
    out["chat_tone"] = determine_chat_tone(assessment.overall_level)
    out["insight"] = result.get("message")
    out["insight_error"] = result.get("error")
    return out
