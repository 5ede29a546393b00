from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from fittrack.auth.jwt_auth import get_current_user_id
from fittrack.database.connection import db
from fittrack.database.helpers import oid, serialize_entry, to_datetime
from fittrack.models.tracking import WeightEntryIn, WeightEntryOut, WeightEntryUpdate

router = APIRouter(prefix="/weight-entries", tags=["Weight"])

# newest first; created_at breaks ties between entries on the same day
NEWEST_FIRST = [("date", -1), ("created_at", -1)]


@router.post("", response_model=WeightEntryOut, status_code=201)
def create_weight_entry(payload: WeightEntryIn, user_id: str = Depends(get_current_user_id)):
    doc = payload.model_dump()
    doc.update({
        "user_id": oid(user_id),
        "date": to_datetime(payload.date),
        "created_at": datetime.utcnow(),
    })
    result = db.weight_entries.insert_one(doc)
    doc["_id"] = result.inserted_id
    return serialize_entry(doc)


@router.get("", response_model=List[WeightEntryOut])
def list_weight_entries(user_id: str = Depends(get_current_user_id)):
    cursor = db.weight_entries.find({"user_id": oid(user_id)}).sort(NEWEST_FIRST)
    return [serialize_entry(e) for e in cursor]


@router.get("/latest", response_model=Optional[WeightEntryOut])
def latest_weight_entry(user_id: str = Depends(get_current_user_id)):
    entry = db.weight_entries.find_one({"user_id": oid(user_id)}, sort=NEWEST_FIRST)
    return serialize_entry(entry) if entry else None


@router.put("/{entry_id}", response_model=WeightEntryOut)
def update_weight_entry(entry_id: str, payload: WeightEntryUpdate, user_id: str = Depends(get_current_user_id)):
    updates = payload.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(400, "No fields to update")
    if "date" in updates:
        updates["date"] = to_datetime(updates["date"])
    updated = db.weight_entries.find_one_and_update(
        {"_id": oid(entry_id), "user_id": oid(user_id)},
        {"$set": updates},
        return_document=True,
    )
    if not updated:
        raise HTTPException(404, "Weight entry not found")
    return serialize_entry(updated)


@router.delete("/{entry_id}")
def delete_weight_entry(entry_id: str, user_id: str = Depends(get_current_user_id)):
    result = db.weight_entries.delete_one({"_id": oid(entry_id), "user_id": oid(user_id)})
    if result.deleted_count == 0:
        raise HTTPException(404, "Weight entry not found")
    return {"deleted": True}
