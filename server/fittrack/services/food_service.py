# fittrack/services/food_service.py
"""
Edamam food database client plus an offline per-100 g fallback table.
"""

import logging
import re
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

import httpx

from fittrack.errors import FoodApiError
from fittrack.services.body_metrics import round_half_up

logger = logging.getLogger(__name__)

EDAMAM_BASE_URL = "https://api.edamam.com/api/food-database/v2"
GRAM_MEASURE_URI = "http://www.edamam.com/ontologies/edamam.owl#Measure_gram"
SERVING_MEASURE_URI = "http://www.edamam.com/ontologies/edamam.owl#Measure_serving"

# calories, protein, carbs, fat per 100 g
FALLBACK_FOODS: Mapping[str, Dict[str, float]] = MappingProxyType({
    "apple": {"calories": 52, "protein": 0.3, "carbs": 14, "fat": 0.2},
    "banana": {"calories": 89, "protein": 1.1, "carbs": 23, "fat": 0.3},
    "chicken breast": {"calories": 165, "protein": 31, "carbs": 0, "fat": 3.6},
    "rice": {"calories": 130, "protein": 2.7, "carbs": 28, "fat": 0.3},
    "bread": {"calories": 265, "protein": 9, "carbs": 49, "fat": 3.2},
    "egg": {"calories": 155, "protein": 13, "carbs": 1.1, "fat": 11},
    "milk": {"calories": 42, "protein": 3.4, "carbs": 5, "fat": 1},
    "yogurt": {"calories": 59, "protein": 10, "carbs": 3.6, "fat": 0.4},
    "salmon": {"calories": 208, "protein": 20, "carbs": 0, "fat": 13},
    "broccoli": {"calories": 34, "protein": 2.8, "carbs": 7, "fat": 0.4},
    "pasta": {"calories": 131, "protein": 5, "carbs": 25, "fat": 1.1},
    "cheese": {"calories": 113, "protein": 7, "carbs": 1, "fat": 9},
    "orange": {"calories": 47, "protein": 0.9, "carbs": 12, "fat": 0.1},
    "potato": {"calories": 77, "protein": 2, "carbs": 17, "fat": 0.1},
    "beef": {"calories": 250, "protein": 26, "carbs": 0, "fat": 15},
})
DEFAULT_FOOD = MappingProxyType({"calories": 100, "protein": 5, "carbs": 15, "fat": 3})

_FIRST_INT_RE = re.compile(r"(\d+)")


def _lookup_food(food_name: str) -> Mapping[str, float]:
    key = (food_name or "").strip().lower()
    if key in FALLBACK_FOODS:
        return FALLBACK_FOODS[key]
    if key:
        for name, values in FALLBACK_FOODS.items():
            if name in key or key in name:
                return values
    return DEFAULT_FOOD


def fallback_nutrition(food_name: str, quantity: Optional[str] = "100g") -> Dict[str, float]:
    """Estimate nutrition for `quantity` of a food; the first integer in quantity is grams."""
    base = _lookup_food(food_name)
    match = _FIRST_INT_RE.search(str(quantity or ""))
    grams = int(match.group(1)) if match else 100
    factor = grams / 100
    return {
        "calories": int(round_half_up(base["calories"] * factor)),
        "protein": round_half_up(base["protein"] * factor, 1),
        "carbs": round_half_up(base["carbs"] * factor, 1),
        "fat": round_half_up(base["fat"] * factor, 1),
    }


def fallback_search_hit(query: str) -> Dict[str, Any]:
    """A single Edamam-shaped search hit built from the fallback table."""
    estimate = fallback_nutrition(query, "100g")
    slug = "-".join(query.lower().split())
    return {
        "food": {
            "foodId": f"fallback-{slug}",
            "label": query,
            "nutrients": {
                "ENERC_KCAL": estimate["calories"],
                "PROCNT": estimate["protein"],
                "CHOCDF": estimate["carbs"],
                "FAT": estimate["fat"],
            },
            "category": "Generic",
        },
        "measures": [
            {"uri": GRAM_MEASURE_URI, "label": "Gram", "weight": 1},
            {"uri": SERVING_MEASURE_URI, "label": "Serving", "weight": 100},
        ],
    }


def fallback_nutrition_totals(food_name: str, quantity: Optional[float]) -> Dict[str, Any]:
    """An Edamam nutrients-shaped body built from the fallback table."""
    grams = quantity or 100
    estimate = fallback_nutrition(food_name, f"{int(grams)}g")
    return {
        "calories": estimate["calories"],
        "totalWeight": grams,
        "totalNutrients": {
            "ENERC_KCAL": {"quantity": estimate["calories"], "unit": "kcal"},
            "PROCNT": {"quantity": estimate["protein"], "unit": "g"},
            "CHOCDF": {"quantity": estimate["carbs"], "unit": "g"},
            "FAT": {"quantity": estimate["fat"], "unit": "g"},
        },
    }


class EdamamFoodClient:
    def __init__(self, app_id: str, app_key: str, base_url: str = EDAMAM_BASE_URL, timeout: float = 20.0):
        self.app_id = app_id
        self.app_key = app_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _credentials(self) -> Dict[str, str]:
        if not self.app_id or not self.app_key:
            raise FoodApiError("Edamam API credentials not configured")
        return {"app_id": self.app_id, "app_key": self.app_key}

    async def search_food(self, query: str) -> List[Dict[str, Any]]:
        """Parsed (exact) matches first, then hints."""
        params = {**self._credentials(), "ingr": query, "nutrition-type": "cooking"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                r = await client.get(f"{self.base_url}/parser", params=params, headers={"Accept": "application/json"})
            r.raise_for_status()
            data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise FoodApiError(f"Edamam search failed: {e}") from e

        results: List[Dict[str, Any]] = []
        for item in data.get("parsed") or []:
            results.append({"food": item.get("food"), "measures": [item.get("measure")]})
        results.extend(data.get("hints") or [])
        return results

    async def get_food_nutrition(self, food_id: str, measure_uri: str, quantity: float = 1) -> Dict[str, Any]:
        body = {"ingredients": [{"quantity": quantity, "measureURI": measure_uri, "foodId": food_id}]}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                r = await client.post(f"{self.base_url}/nutrients", params=self._credentials(), json=body)
            r.raise_for_status()
            return r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise FoodApiError(f"Edamam nutrients failed: {e}") from e
