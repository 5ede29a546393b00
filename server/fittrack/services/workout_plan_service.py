# fittrack/services/workout_plan_service.py
"""
Chooses between the AI provider and the template engine.
"""

import logging
from typing import Literal, NamedTuple, Optional

from fittrack.errors import AIProviderError
from fittrack.models.workout_plan import WorkoutPlanRequest, WorkoutPlanResult
from fittrack.services.ai_provider import WorkoutPlanProvider
from fittrack.services.workout_templates import (
    MAX_EXERCISES_PER_DAY,
    MIN_EXERCISES_PER_DAY,
    WorkoutTemplateEngine,
)

logger = logging.getLogger(__name__)

DEFAULT_NUTRITION_ADVICE = "Consult with a registered dietitian for personalized nutrition guidance."


class GeneratedPlan(NamedTuple):
    plan: WorkoutPlanResult
    source: Literal["ai", "fallback"]


def schedule_problem(plan: WorkoutPlanResult, days_per_week: int) -> Optional[str]:
    """Describe why a plan's schedule is unusable, or None if it is fine."""
    if len(plan.weekly_schedule) != days_per_week:
        return f"expected {days_per_week} days, got {len(plan.weekly_schedule)}"
    for entry in plan.weekly_schedule:
        count = len(entry.exercises)
        if not MIN_EXERCISES_PER_DAY <= count <= MAX_EXERCISES_PER_DAY:
            return f"day {entry.day} has {count} exercises"
    return None


class WorkoutPlanService:
    def __init__(self, engine: WorkoutTemplateEngine, provider: Optional[WorkoutPlanProvider] = None):
        self.engine = engine
        self.provider = provider

    @property
    def ai_enabled(self) -> bool:
        return self.provider is not None

    def generate(self, request: WorkoutPlanRequest) -> GeneratedPlan:
        """AI plan when available and well formed, otherwise the template plan. One attempt only."""
        if self.provider is None:
            return GeneratedPlan(self.engine.generate_fallback(request), "fallback")

        try:
            plan = self.provider.generate_workout_plan(request)
        except AIProviderError as e:
            logger.warning(f"AI workout plan failed, using template plan: {e}")
            return GeneratedPlan(self.engine.generate_fallback(request), "fallback")

        problem = schedule_problem(plan, request.days_per_week)
        if problem:
            logger.warning(f"AI workout plan rejected ({problem}), using template plan")
            return GeneratedPlan(self.engine.generate_fallback(request), "fallback")
        return GeneratedPlan(plan, "ai")

    def nutrition_advice(self, bmi: float, goal: str, calories: int) -> str:
        if self.provider is None:
            return DEFAULT_NUTRITION_ADVICE
        try:
            return self.provider.generate_nutrition_advice(bmi, goal, calories)
        except AIProviderError as e:
            logger.warning(f"AI nutrition advice failed: {e}")
            return DEFAULT_NUTRITION_ADVICE
