from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from fittrack.auth.jwt_auth import get_current_user_id
from fittrack.database.connection import db
from fittrack.database.helpers import day_bounds, oid, serialize_entry, to_datetime
from fittrack.models.tracking import (
    TrackerSessionIn,
    TrackerSessionOut,
    TrackerSessionUpdate,
    TrackerStats,
    WorkoutSessionIn,
    WorkoutSessionOut,
    WorkoutSessionUpdate,
)

router = APIRouter(tags=["Workout Sessions"])


def _user_day_filter(user_id: str, day: Optional[date]) -> dict:
    query = {"user_id": oid(user_id)}
    bounds = day_bounds(day)
    if bounds:
        query["date"] = {"$gte": bounds[0], "$lt": bounds[1]}
    return query


# -------------------- Plan sessions --------------------

@router.post("/workout-sessions", response_model=WorkoutSessionOut, status_code=201)
def create_workout_session(payload: WorkoutSessionIn, user_id: str = Depends(get_current_user_id)):
    doc = payload.model_dump()
    doc.update({
        "user_id": oid(user_id),
        "date": to_datetime(payload.date),
        "created_at": datetime.utcnow(),
    })
    result = db.workout_sessions.insert_one(doc)
    doc["_id"] = result.inserted_id
    return serialize_entry(doc)


@router.get("/workout-sessions", response_model=List[WorkoutSessionOut])
def list_workout_sessions(
    day: Optional[date] = Query(None, alias="date"),
    user_id: str = Depends(get_current_user_id),
):
    cursor = db.workout_sessions.find(_user_day_filter(user_id, day)).sort("date", -1)
    return [serialize_entry(s) for s in cursor]


@router.put("/workout-sessions/{session_id}", response_model=WorkoutSessionOut)
def update_workout_session(
    session_id: str, payload: WorkoutSessionUpdate, user_id: str = Depends(get_current_user_id)
):
    updates = payload.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(400, "No fields to update")
    updated = db.workout_sessions.find_one_and_update(
        {"_id": oid(session_id), "user_id": oid(user_id)},
        {"$set": updates},
        return_document=True,
    )
    if not updated:
        raise HTTPException(404, "Workout session not found")
    return serialize_entry(updated)


# -------------------- Tracker sessions --------------------

@router.post("/workout-tracker-sessions", response_model=TrackerSessionOut, status_code=201)
def create_tracker_session(payload: TrackerSessionIn, user_id: str = Depends(get_current_user_id)):
    doc = payload.model_dump()
    doc.update({
        "user_id": oid(user_id),
        "date": to_datetime(payload.date),
        "created_at": datetime.utcnow(),
    })
    result = db.workout_tracker_sessions.insert_one(doc)
    doc["_id"] = result.inserted_id
    return serialize_entry(doc)


@router.get("/workout-tracker-sessions", response_model=List[TrackerSessionOut])
def list_tracker_sessions(
    day: Optional[date] = Query(None, alias="date"),
    user_id: str = Depends(get_current_user_id),
):
    cursor = db.workout_tracker_sessions.find(_user_day_filter(user_id, day)).sort("date", -1)
    return [serialize_entry(s) for s in cursor]


@router.put("/workout-tracker-sessions/{session_id}", response_model=TrackerSessionOut)
def update_tracker_session(
    session_id: str, payload: TrackerSessionUpdate, user_id: str = Depends(get_current_user_id)
):
    updates = payload.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(400, "No fields to update")
    if "date" in updates:
        updates["date"] = to_datetime(updates["date"])
    updated = db.workout_tracker_sessions.find_one_and_update(
        {"_id": oid(session_id), "user_id": oid(user_id)},
        {"$set": updates},
        return_document=True,
    )
    if not updated:
        raise HTTPException(404, "Workout session not found")
    return serialize_entry(updated)


@router.delete("/workout-tracker-sessions/{session_id}")
def delete_tracker_session(session_id: str, user_id: str = Depends(get_current_user_id)):
    result = db.workout_tracker_sessions.delete_one({"_id": oid(session_id), "user_id": oid(user_id)})
    if result.deleted_count == 0:
        raise HTTPException(404, "Workout session not found")
    return {"deleted": True}


def summarize_sessions(sessions) -> TrackerStats:
    """Totals across logged sessions; sets and reps are summed per exercise row."""
    total_workouts = total_sets = total_reps = total_duration = 0
    for session in sessions:
        total_workouts += 1
        total_duration += session.get("total_duration") or 0
        for ex in session.get("exercises") or []:
            sets = ex.get("sets") or 0
            total_sets += sets
            total_reps += sets * (ex.get("reps") or 0)
    return TrackerStats(
        total_workouts=total_workouts,
        total_sets=total_sets,
        total_reps=total_reps,
        total_duration=total_duration,
    )


@router.get("/workout-tracker-stats", response_model=TrackerStats)
def tracker_stats(user_id: str = Depends(get_current_user_id)):
    return summarize_sessions(db.workout_tracker_sessions.find({"user_id": oid(user_id)}))
