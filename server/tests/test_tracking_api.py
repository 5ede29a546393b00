# server/tests/test_tracking_api.py
from datetime import datetime
from unittest.mock import MagicMock, patch

from bson import ObjectId
from fastapi.testclient import TestClient

from fittrack.auth.jwt_auth import get_current_user_id
from fittrack.dependencies import get_exercise_client, get_food_client
from fittrack.main import create_app
from fittrack.routers.workout_sessions import summarize_sessions
from fittrack.services.exercise_service import ExerciseDBClient
from fittrack.services.food_service import EdamamFoodClient
from fittrack.services.workout_plan_service import WorkoutPlanService
from fittrack.services.workout_templates import default_engine

USER_ID = "64b7f0c2a1b2c3d4e5f60718"

app = create_app(WorkoutPlanService(default_engine()))
client = TestClient(app)

TRACKER_SESSIONS = [
    {
        "workout_name": "Push day",
        "exercises": [
            {"name": "Bench Press", "sets": 4, "reps": 8, "weight": 60},
            {"name": "Dips", "sets": 3, "reps": 10},
        ],
        "total_duration": 50,
    },
    {
        "workout_name": "Run",
        "exercises": [],
        "total_duration": None,
    },
]


class AuthenticatedTest:
    def setup_method(self):
        app.dependency_overrides[get_current_user_id] = lambda: USER_ID

    def teardown_method(self):
        app.dependency_overrides.clear()


class TestTrackerStats(AuthenticatedTest):
    """Workout tracker totals"""

    def test_summarize_sessions(self):
        stats = summarize_sessions(TRACKER_SESSIONS)

        assert stats.total_workouts == 2
        assert stats.total_sets == 7
        assert stats.total_reps == 4 * 8 + 3 * 10
        assert stats.total_duration == 50

    def test_summarize_empty(self):
        stats = summarize_sessions([])
        assert (stats.total_workouts, stats.total_sets, stats.total_reps, stats.total_duration) == (0, 0, 0, 0)

    @patch("fittrack.routers.workout_sessions.db")
    def test_stats_endpoint(self, mock_db):
        mock_db.workout_tracker_sessions.find.return_value = TRACKER_SESSIONS

        response = client.get("/api/workout-tracker-stats")

        assert response.status_code == 200
        assert response.json() == {"total_workouts": 2, "total_sets": 7, "total_reps": 62, "total_duration": 50}
        mock_db.workout_tracker_sessions.find.assert_called_once_with({"user_id": ObjectId(USER_ID)})

    @patch("fittrack.routers.workout_sessions.db")
    def test_create_tracker_session(self, mock_db):
        mock_db.workout_tracker_sessions.insert_one.return_value = MagicMock(inserted_id=ObjectId())

        response = client.post("/api/workout-tracker-sessions", json={
            "date": "2024-05-01",
            "workout_name": "Legs",
            "exercises": [{"name": "Squat", "sets": 5, "reps": 5, "weight": 100}],
            "total_duration": 45,
        })

        assert response.status_code == 201
        assert response.json()["date"] == "2024-05-01"
        saved = mock_db.workout_tracker_sessions.insert_one.call_args.args[0]
        assert saved["date"] == datetime(2024, 5, 1)

    @patch("fittrack.routers.workout_sessions.db")
    def test_list_sessions_for_day(self, mock_db):
        mock_db.workout_sessions.find.return_value.sort.return_value = []

        response = client.get("/api/workout-sessions?date=2024-05-01")

        assert response.status_code == 200
        query = mock_db.workout_sessions.find.call_args.args[0]
        assert query["date"] == {"$gte": datetime(2024, 5, 1), "$lt": datetime(2024, 5, 2)}

    @patch("fittrack.routers.workout_sessions.db")
    def test_update_session_without_fields(self, mock_db):
        response = client.put(f"/api/workout-sessions/{ObjectId()}", json={})
        assert response.status_code == 400

    @patch("fittrack.routers.workout_sessions.db")
    def test_delete_missing_tracker_session(self, mock_db):
        mock_db.workout_tracker_sessions.delete_one.return_value = MagicMock(deleted_count=0)

        response = client.delete(f"/api/workout-tracker-sessions/{ObjectId()}")

        assert response.status_code == 404


class TestWeightEntries(AuthenticatedTest):
    """Weight log"""

    @patch("fittrack.routers.weight.db")
    def test_create_weight_entry(self, mock_db):
        mock_db.weight_entries.insert_one.return_value = MagicMock(inserted_id=ObjectId())

        response = client.post("/api/weight-entries", json={"weight": 72.5, "date": "2024-05-02", "goal_weight": 68})

        assert response.status_code == 201
        data = response.json()
        assert data["weight"] == 72.5
        assert data["user_id"] == USER_ID

    def test_rejects_non_positive_weight(self):
        response = client.post("/api/weight-entries", json={"weight": 0})
        assert response.status_code == 422

    @patch("fittrack.routers.weight.db")
    def test_latest_when_empty(self, mock_db):
        mock_db.weight_entries.find_one.return_value = None

        response = client.get("/api/weight-entries/latest")

        assert response.status_code == 200
        assert response.json() is None

    @patch("fittrack.routers.weight.db")
    def test_list_newest_first(self, mock_db):
        mock_db.weight_entries.find.return_value.sort.return_value = [
            {"_id": ObjectId(), "user_id": ObjectId(USER_ID), "weight": 71.0, "date": datetime(2024, 5, 3)},
            {"_id": ObjectId(), "user_id": ObjectId(USER_ID), "weight": 72.0, "date": datetime(2024, 5, 1)},
        ]

        response = client.get("/api/weight-entries")

        assert [e["date"] for e in response.json()] == ["2024-05-03", "2024-05-01"]
        mock_db.weight_entries.find.return_value.sort.assert_called_once_with([("date", -1), ("created_at", -1)])


class TestFood(AuthenticatedTest):
    """Food search proxy and food log"""

    def setup_method(self):
        super().setup_method()
        # no credentials, so every Edamam call falls back
        app.dependency_overrides[get_food_client] = lambda: EdamamFoodClient("", "")

    def test_search_falls_back(self):
        response = client.get("/api/food/search", params={"q": "Banana"})

        assert response.status_code == 200
        hits = response.json()
        assert len(hits) == 1
        assert hits[0]["food"]["foodId"] == "fallback-banana"
        assert hits[0]["food"]["nutrients"]["ENERC_KCAL"] == 89

    def test_search_requires_query(self):
        assert client.get("/api/food/search").status_code == 400

    def test_nutrition_falls_back(self):
        response = client.post("/api/food/nutrition", json={"foodId": "fallback-egg", "foodName": "egg", "quantity": 50})

        assert response.status_code == 200
        data = response.json()
        assert data["calories"] == 78
        assert data["totalWeight"] == 50
        assert data["totalNutrients"]["PROCNT"] == {"quantity": 6.5, "unit": "g"}

    @patch("fittrack.routers.food.db")
    def test_create_food_entry(self, mock_db):
        mock_db.food_entries.insert_one.return_value = MagicMock(inserted_id=ObjectId())

        response = client.post("/api/food-entries", json={
            "date": "2024-05-01", "meal": "lunch", "food_name": "Rice", "serving": "150g", "calories": 195,
        })

        assert response.status_code == 201
        assert response.json()["meal"] == "lunch"

    def test_rejects_unknown_meal(self):
        response = client.post("/api/food-entries", json={"meal": "brunch", "food_name": "Toast", "calories": 80})
        assert response.status_code == 422

    @patch("fittrack.routers.food.db")
    def test_update_missing_entry(self, mock_db):
        mock_db.food_entries.find_one_and_update.return_value = None

        response = client.put(f"/api/food-entries/{ObjectId()}", json={"calories": 120})

        assert response.status_code == 404


class TestExercises:
    """ExerciseDB proxy failures"""

    def setup_method(self):
        app.dependency_overrides[get_exercise_client] = lambda: ExerciseDBClient("https://exercisedb.p.rapidapi.com", "")

    def teardown_method(self):
        app.dependency_overrides.clear()

    def test_list_reports_error(self):
        response = client.get("/api/exercises")

        assert response.status_code == 200
        data = response.json()
        assert data["items"] == []
        assert "RAPIDAPI_KEY" in data["error"]

    def test_empty_search(self):
        assert client.get("/api/exercises/search").json() == {"items": []}

    def test_lookup_unavailable(self):
        assert client.get("/api/exercises/0001").status_code == 502
