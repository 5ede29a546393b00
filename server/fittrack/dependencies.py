from fastapi import Request

from fittrack.config import Config
from fittrack.services.exercise_service import ExerciseDBClient
from fittrack.services.food_service import EdamamFoodClient
from fittrack.services.workout_plan_service import WorkoutPlanService


def get_workout_plan_service(request: Request) -> WorkoutPlanService:
    """The service built once in create_app and kept on app.state"""
    return request.app.state.workout_plan_service


def get_food_client() -> EdamamFoodClient:
    return EdamamFoodClient(Config.EDAMAM_APP_ID, Config.EDAMAM_APP_KEY)


def get_exercise_client() -> ExerciseDBClient:
    return ExerciseDBClient(Config.EXERCISEDB_BASE_URL, Config.RAPIDAPI_KEY)
