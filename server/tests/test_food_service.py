# server/tests/test_food_service.py
from unittest.mock import patch

import httpx
import pytest

from fittrack.errors import FoodApiError
from fittrack.services.food_service import (
    EdamamFoodClient,
    fallback_nutrition,
    fallback_nutrition_totals,
    fallback_search_hit,
)

_RealAsyncClient = httpx.AsyncClient


def _mock_http(handler):
    """Route every AsyncClient the service opens through `handler`."""
    def factory(*args, **kwargs):
        return _RealAsyncClient(*args, transport=httpx.MockTransport(handler), **kwargs)
    return patch("fittrack.services.food_service.httpx.AsyncClient", side_effect=factory)


class TestFallbackNutrition:
    """Offline per-100 g estimates"""

    def test_exact_match_scaled(self):
        assert fallback_nutrition("apple", "200g") == {"calories": 104, "protein": 0.6, "carbs": 28.0, "fat": 0.4}

    def test_substring_match(self):
        result = fallback_nutrition("Grilled Chicken Breast", "150 g")
        assert result["calories"] == 248
        assert result["protein"] == 46.5
        assert result["carbs"] == 0
        assert result["fat"] == 5.4

    def test_unknown_food_and_quantity(self):
        assert fallback_nutrition("dragonfruit", "a bowl") == {"calories": 100, "protein": 5, "carbs": 15, "fat": 3}

    def test_first_integer_is_grams(self):
        assert fallback_nutrition("rice", "50g (about 2 spoons)")["calories"] == 65

    def test_search_hit_shape(self):
        hit = fallback_search_hit("Brown Rice")

        assert hit["food"]["foodId"] == "fallback-brown-rice"
        assert hit["food"]["label"] == "Brown Rice"
        assert hit["food"]["nutrients"]["ENERC_KCAL"] == 130
        assert hit["food"]["category"] == "Generic"
        assert [m["label"] for m in hit["measures"]] == ["Gram", "Serving"]

    def test_nutrition_totals_shape(self):
        totals = fallback_nutrition_totals("banana", 150)

        assert totals["calories"] == 134
        assert totals["totalWeight"] == 150
        assert totals["totalNutrients"]["ENERC_KCAL"] == {"quantity": 134, "unit": "kcal"}
        assert totals["totalNutrients"]["FAT"]["unit"] == "g"


class TestEdamamClient:
    """Edamam calls over a mocked transport"""

    @pytest.mark.asyncio
    async def test_missing_credentials(self):
        client = EdamamFoodClient("", "")
        with pytest.raises(FoodApiError):
            await client.search_food("apple")
        with pytest.raises(FoodApiError):
            await client.get_food_nutrition("food_1", "uri", 1)

    @pytest.mark.asyncio
    async def test_search_orders_parsed_before_hints(self):
        def handler(request):
            assert request.url.path.endswith("/parser")
            assert request.url.params["ingr"] == "apple"
            return httpx.Response(200, json={
                "parsed": [{"food": {"foodId": "f1", "label": "Apple"}, "measure": {"label": "Whole"}}],
                "hints": [{"food": {"foodId": "f2", "label": "Apple juice"}, "measures": []}],
            })

        with _mock_http(handler):
            results = await EdamamFoodClient("id", "key").search_food("apple")

        assert [r["food"]["foodId"] for r in results] == ["f1", "f2"]
        assert results[0]["measures"] == [{"label": "Whole"}]

    @pytest.mark.asyncio
    async def test_nutrients_posts_ingredient(self):
        seen = {}

        def handler(request):
            seen["body"] = request.content
            return httpx.Response(200, json={"calories": 95})

        with _mock_http(handler):
            result = await EdamamFoodClient("id", "key").get_food_nutrition("f1", "uri#gram", 100)

        assert result == {"calories": 95}
        assert b'"foodId":"f1"' in seen["body"].replace(b" ", b"")

    @pytest.mark.asyncio
    async def test_http_error(self):
        with _mock_http(lambda request: httpx.Response(500, json={})):
            with pytest.raises(FoodApiError):
                await EdamamFoodClient("id", "key").search_food("apple")
