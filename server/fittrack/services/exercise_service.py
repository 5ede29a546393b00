# fittrack/services/exercise_service.py
from typing import Any, Dict, List, Optional
from urllib.parse import quote, urlparse

import httpx

from fittrack.errors import ExerciseApiError


def normalize_exercise(item: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": str(item.get("id") or item.get("exerciseId") or ""),
        "name": item.get("name") or "Unknown Exercise",
        "bodyPart": item.get("bodyPart") or "",
        "target": item.get("target") or "",
        "equipment": item.get("equipment") or "",
        "secondaryMuscles": item.get("secondaryMuscles") or [],
        "instructions": item.get("instructions") or [],
    }


def _segment(value: str) -> str:
    return quote(value, safe="")


class ExerciseDBClient:
    """Thin async wrapper over the RapidAPI ExerciseDB endpoints."""

    def __init__(self, base_url: str, api_key: str, timeout: float = 20.0):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        return {
            "x-rapidapi-key": self.api_key,
            "x-rapidapi-host": urlparse(self.base_url).netloc,
        }

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        if not self.api_key:
            raise ExerciseApiError("RAPIDAPI_KEY not configured")
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                r = await client.get(url, params=params, headers=self._headers())
            r.raise_for_status()
            return r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise ExerciseApiError(f"ExerciseDB request to {path} failed: {e}") from e

    async def _get_list(self, path: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        data = await self._get(path, params)
        if not isinstance(data, list):
            raise ExerciseApiError(f"Unexpected ExerciseDB payload from {path}")
        return [normalize_exercise(item) for item in data if isinstance(item, dict)]

    async def list_exercises(self, limit: int = 20, offset: int = 0) -> List[Dict[str, Any]]:
        return await self._get_list("/exercises", {"limit": limit, "offset": offset})

    async def search(self, query: str) -> List[Dict[str, Any]]:
        return await self._get_list(f"/exercises/name/{_segment(query.lower())}")

    async def get_exercise(self, exercise_id: str) -> Optional[Dict[str, Any]]:
        data = await self._get(f"/exercises/exercise/{_segment(exercise_id)}")
        if not isinstance(data, dict) or not data:
            return None
        return normalize_exercise(data)

    async def body_parts(self) -> List[str]:
        data = await self._get("/exercises/bodyPartList")
        return [str(x) for x in data] if isinstance(data, list) else []

    async def by_body_part(self, body_part: str, limit: int = 20, offset: int = 0) -> List[Dict[str, Any]]:
        return await self._get_list(f"/exercises/bodyPart/{_segment(body_part)}", {"limit": limit, "offset": offset})

    async def by_equipment(self, equipment: str) -> List[Dict[str, Any]]:
        return await self._get_list(f"/exercises/equipment/{_segment(equipment)}")

    async def by_target(self, target: str) -> List[Dict[str, Any]]:
        return await self._get_list(f"/exercises/target/{_segment(target)}")
