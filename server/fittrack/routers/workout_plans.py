import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from fittrack.auth.jwt_auth import get_current_user_id
from fittrack.database.connection import db
from fittrack.database.helpers import oid, serialize_doc
from fittrack.dependencies import get_workout_plan_service
from fittrack.models.workout_plan import (
    NutritionAdviceRequest,
    WorkoutPlanOut,
    WorkoutPlanRequest,
    WorkoutPlanUpdate,
)
from fittrack.services.body_metrics import bmi_value, round_half_up
from fittrack.services.workout_plan_service import WorkoutPlanService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Workout Plans"])


def _owned_plan(plan_id: str, user_id: str) -> dict:
    plan = db.workout_plans.find_one({"_id": oid(plan_id), "user_id": oid(user_id)})
    if not plan:
        raise HTTPException(404, "Workout plan not found")
    return plan


@router.post("/workout-plans/generate", response_model=WorkoutPlanOut)
def generate_workout_plan(
    payload: WorkoutPlanRequest,
    user_id: str = Depends(get_current_user_id),
    service: WorkoutPlanService = Depends(get_workout_plan_service),
):
    """Generate a weekly plan (AI when available, templates otherwise) and save it"""
    if payload.bmi is None:
        payload = payload.model_copy(
            update={"bmi": round_half_up(bmi_value(payload.height_cm, payload.weight_kg), 1)}
        )

    generated = service.generate(payload)
    logger.info(f"Generated {generated.source} workout plan for user {user_id}")

    doc = {
        "user_id": oid(user_id),
        "title": generated.plan.title,
        "description": generated.plan.description,
        "goal": payload.fitness_goal,
        "experience_level": payload.experience_level,
        "days_per_week": payload.days_per_week,
        "session_duration": payload.session_duration_minutes,
        "plan_data": generated.plan.model_dump(),
        "source": generated.source,
        "is_active": True,
        "created_at": datetime.utcnow(),
    }
    result = db.workout_plans.insert_one(doc)
    doc["_id"] = result.inserted_id
    return serialize_doc(doc)


@router.get("/workout-plans", response_model=List[WorkoutPlanOut])
def list_workout_plans(user_id: str = Depends(get_current_user_id)):
    cursor = db.workout_plans.find({"user_id": oid(user_id)}).sort("created_at", -1)
    return [serialize_doc(p) for p in cursor]


@router.get("/workout-plans/{plan_id}", response_model=WorkoutPlanOut)
def read_workout_plan(plan_id: str, user_id: str = Depends(get_current_user_id)):
    return serialize_doc(_owned_plan(plan_id, user_id))


@router.put("/workout-plans/{plan_id}", response_model=WorkoutPlanOut)
def update_workout_plan(plan_id: str, payload: WorkoutPlanUpdate, user_id: str = Depends(get_current_user_id)):
    updates = payload.model_dump(exclude_unset=True)
    updates["updated_at"] = datetime.utcnow()
    updated = db.workout_plans.find_one_and_update(
        {"_id": oid(plan_id), "user_id": oid(user_id)},
        {"$set": updates},
        return_document=True,
    )
    if not updated:
        raise HTTPException(404, "Workout plan not found")
    return serialize_doc(updated)


@router.delete("/workout-plans/{plan_id}")
def delete_workout_plan(plan_id: str, user_id: str = Depends(get_current_user_id)):
    result = db.workout_plans.delete_one({"_id": oid(plan_id), "user_id": oid(user_id)})
    if result.deleted_count == 0:
        raise HTTPException(404, "Workout plan not found")
    return {"deleted": True}


@router.post("/nutrition/advice")
def nutrition_advice(
    payload: NutritionAdviceRequest,
    service: WorkoutPlanService = Depends(get_workout_plan_service),
):
    return {"advice": service.nutrition_advice(payload.bmi, payload.goal, payload.calories)}
