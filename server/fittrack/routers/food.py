import logging
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from fittrack.auth.jwt_auth import get_current_user_id
from fittrack.database.connection import db
from fittrack.database.helpers import day_bounds, oid, serialize_entry, to_datetime
from fittrack.dependencies import get_food_client
from fittrack.errors import FoodApiError
from fittrack.models.tracking import FoodEntryIn, FoodEntryOut, FoodEntryUpdate, FoodNutritionRequest
from fittrack.services.food_service import EdamamFoodClient, fallback_nutrition_totals, fallback_search_hit

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Food"])


# -------------------- Food database proxy --------------------

@router.get("/food/search")
async def search_food(q: str = Query("", max_length=200), client: EdamamFoodClient = Depends(get_food_client)):
    query = q.strip()
    if not query:
        raise HTTPException(400, "Search query is required")
    try:
        return await client.search_food(query)
    except FoodApiError as e:
        logger.warning(f"Food search unavailable, using fallback data: {e}")
        return [fallback_search_hit(query)]


@router.post("/food/nutrition")
async def food_nutrition(payload: FoodNutritionRequest, client: EdamamFoodClient = Depends(get_food_client)):
    try:
        return await client.get_food_nutrition(payload.food_id, payload.measure_uri, payload.quantity)
    except FoodApiError as e:
        logger.warning(f"Food nutrition unavailable, using fallback data: {e}")
        return fallback_nutrition_totals(payload.food_name or payload.food_id, payload.quantity)


# -------------------- Food entries --------------------

@router.post("/food-entries", response_model=FoodEntryOut, status_code=201)
def create_food_entry(payload: FoodEntryIn, user_id: str = Depends(get_current_user_id)):
    doc = payload.model_dump()
    doc.update({
        "user_id": oid(user_id),
        "date": to_datetime(payload.date),
        "created_at": datetime.utcnow(),
    })
    result = db.food_entries.insert_one(doc)
    doc["_id"] = result.inserted_id
    return serialize_entry(doc)


@router.get("/food-entries", response_model=List[FoodEntryOut])
def list_food_entries(
    day: Optional[date] = Query(None, alias="date"),
    user_id: str = Depends(get_current_user_id),
):
    query = {"user_id": oid(user_id)}
    bounds = day_bounds(day)
    if bounds:
        query["date"] = {"$gte": bounds[0], "$lt": bounds[1]}
    cursor = db.food_entries.find(query).sort([("date", -1), ("created_at", 1)])
    return [serialize_entry(e) for e in cursor]


@router.put("/food-entries/{entry_id}", response_model=FoodEntryOut)
def update_food_entry(entry_id: str, payload: FoodEntryUpdate, user_id: str = Depends(get_current_user_id)):
    updates = payload.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(400, "No fields to update")
    updated = db.food_entries.find_one_and_update(
        {"_id": oid(entry_id), "user_id": oid(user_id)},
        {"$set": updates},
        return_document=True,
    )
    if not updated:
        raise HTTPException(404, "Food entry not found")
    return serialize_entry(updated)


@router.delete("/food-entries/{entry_id}")
def delete_food_entry(entry_id: str, user_id: str = Depends(get_current_user_id)):
    result = db.food_entries.delete_one({"_id": oid(entry_id), "user_id": oid(user_id)})
    if result.deleted_count == 0:
        raise HTTPException(404, "Food entry not found")
    return {"deleted": True}
