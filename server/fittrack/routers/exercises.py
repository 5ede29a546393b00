import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from fittrack.cache import cache_result
from fittrack.config import Config
from fittrack.dependencies import get_exercise_client
from fittrack.errors import ExerciseApiError
from fittrack.services.exercise_service import ExerciseDBClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/exercises", tags=["Exercises"])


@cache_result("exercise_cache", expiry_seconds=Config.EXERCISE_CACHE_SECONDS)
async def _fetch(method: str, *args, client: ExerciseDBClient):
    return await getattr(client, method)(*args)


async def _list_or_error(method: str, *args, client: ExerciseDBClient) -> dict:
    try:
        items = await _fetch(method, *args, client=client)
    except ExerciseApiError as e:
        logger.error(f"ExerciseDB {method} failed: {e}")
        return {"items": [], "error": str(e)}
    return {"items": items}


@router.get("")
async def list_exercises(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    client: ExerciseDBClient = Depends(get_exercise_client),
):
    result = await _list_or_error("list_exercises", limit, offset, client=client)
    result.update({"limit": limit, "offset": offset})
    return result


@router.get("/search")
async def search_exercises(q: str = "", client: ExerciseDBClient = Depends(get_exercise_client)):
    query = q.strip()
    if not query:
        return {"items": []}
    return await _list_or_error("search", query, client=client)


@router.get("/bodyparts")
async def list_body_parts(client: ExerciseDBClient = Depends(get_exercise_client)):
    return await _list_or_error("body_parts", client=client)


@router.get("/bodypart/{name}")
async def exercises_by_body_part(
    name: str,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    client: ExerciseDBClient = Depends(get_exercise_client),
):
    return await _list_or_error("by_body_part", name, limit, offset, client=client)


@router.get("/equipment/{name}")
async def exercises_by_equipment(name: str, client: ExerciseDBClient = Depends(get_exercise_client)):
    return await _list_or_error("by_equipment", name, client=client)


@router.get("/target/{name}")
async def exercises_by_target(name: str, client: ExerciseDBClient = Depends(get_exercise_client)):
    return await _list_or_error("by_target", name, client=client)


@router.get("/{exercise_id}")
async def read_exercise(exercise_id: str, client: ExerciseDBClient = Depends(get_exercise_client)):
    try:
        exercise = await _fetch("get_exercise", exercise_id, client=client)
    except ExerciseApiError as e:
        logger.error(f"ExerciseDB lookup for {exercise_id} failed: {e}")
        raise HTTPException(502, "Exercise service unavailable")
    if not exercise:
        raise HTTPException(404, "Exercise not found")
    return exercise
