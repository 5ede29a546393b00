import json
import logging
from datetime import date, datetime
from typing import Optional

from bson import ObjectId
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from fittrack.config import Config
from fittrack.database import connection
from fittrack.errors import ValidationError, tagged_error
from fittrack.routers import auth, exercises, food, metrics, weight, workout_plans, workout_sessions
from fittrack.services.ai_provider import build_workout_plan_provider
from fittrack.services.workout_plan_service import WorkoutPlanService
from fittrack.services.workout_templates import default_engine

logging.basicConfig(level=Config.LOG_LEVEL)
logger = logging.getLogger(__name__)


# Custom JSON encoder for MongoDB ObjectId and datetime
class MongoJSONEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, ObjectId):
            return str(obj)
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        return super().default(obj)


class MongoJSONResponse(JSONResponse):
    def render(self, content) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
            cls=MongoJSONEncoder
        ).encode("utf-8")


def create_app(workout_plan_service: Optional[WorkoutPlanService] = None) -> FastAPI:
    app = FastAPI(title="FitTrack API", version="1.0.0", default_response_class=MongoJSONResponse)

    if workout_plan_service is None:
        workout_plan_service = WorkoutPlanService(default_engine(), build_workout_plan_provider(Config))
    app.state.workout_plan_service = workout_plan_service

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValidationError)
    async def _validation_error_handler(request: Request, exc: ValidationError):
        return MongoJSONResponse(status_code=400, content=tagged_error(exc))

    for module in (auth, metrics, workout_plans, workout_sessions, weight, food, exercises):
        app.include_router(module.router, prefix="/api")

    @app.on_event("startup")
    def _app_startup():
        connection.ensure_indexes()

    @app.get("/")
    def home():
        return {"message": "FitTrack API Running"}

    @app.get("/api/health")
    def health_check(request: Request):
        return {
            "status": "healthy",
            "database": connection.db is not None,
            "ai_provider": request.app.state.workout_plan_service.ai_enabled,
            "timestamp": datetime.utcnow().isoformat() + "Z",
        }

    return app


app = create_app()
