# fittrack/services/ai_provider.py
import json
import logging
import re
from typing import Any, Dict, Optional

from groq import Groq
from pydantic import ValidationError as PydanticValidationError

from fittrack.errors import AIProviderError
from fittrack.models.workout_plan import WorkoutPlanRequest, WorkoutPlanResult

logger = logging.getLogger(__name__)

TRAINER_SYSTEM_PROMPT = (
    "You are a certified personal trainer and fitness expert. Generate detailed, safe, and effective "
    "workout plans based on user requirements. Always provide specific exercise names, sets, reps, "
    "and safety notes. Respond with valid JSON only."
)

NUTRITIONIST_SYSTEM_PROMPT = (
    "You are a certified nutritionist. Provide helpful, safe nutrition advice based on BMI and fitness goals."
)

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)


def extract_json_block(text: str) -> str:
    """
    Return the JSON payload from a model reply.

    Replies wrapped in a ```json (or bare ```) fence yield the fenced body,
    anything else is returned stripped.
    """
    if not text:
        return ""
    match = _FENCE_RE.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def build_workout_prompt(request: WorkoutPlanRequest) -> str:
    bmi = request.bmi if request.bmi is not None else "unknown"
    duration = request.session_duration_minutes
    return f"""Generate a {request.days_per_week}-day weekly workout plan for a {request.age}-year-old {request.sex} with the following details:

Physical Stats:
- Height: {request.height_cm}cm
- Weight: {request.weight_kg}kg
- BMI: {bmi}
- Activity Level: {request.activity_level}

Goals & Preferences:
- Primary Goal: {request.fitness_goal}
- Experience Level: {request.experience_level}
- Session Duration: {duration} minutes
- Available Days: {request.days_per_week} days per week

Please provide a JSON response with the following structure:
{{
  "title": "Descriptive plan title",
  "description": "Brief overview of the plan",
  "weeklySchedule": [
    {{
      "day": 1,
      "name": "Day 1 - Upper Body",
      "focus": "Chest, Back, Shoulders, Arms",
      "duration": {duration},
      "exercises": [
        {{
          "name": "Specific exercise name",
          "sets": "3-4 sets",
          "reps": "8-12 reps",
          "notes": "Form tips and modifications",
          "restTime": "60-90 seconds"
        }}
      ]
    }}
  ],
  "tips": ["Safety and progression tips"],
  "progressionNotes": "How to advance the plan over time"
}}

Include exactly {request.days_per_week} days and 4-6 exercises per day with proper warm-up recommendations. Focus on compound movements for beginners and include isolation exercises for intermediate/advanced users. Ensure the plan is safe and progressive."""


class WorkoutPlanProvider:
    """Something that can write a workout plan and nutrition advice."""

    def generate_workout_plan(self, request: WorkoutPlanRequest) -> WorkoutPlanResult:
        raise NotImplementedError

    def generate_nutrition_advice(self, bmi: float, goal: str, calories: int) -> str:
        raise NotImplementedError


class GroqWorkoutPlanProvider(WorkoutPlanProvider):
    def __init__(self, client: Groq, model: str):
        self.client = client
        self.model = model

    def _chat(self, system: str, user: str, temperature: float = 0.7, max_tokens: Optional[int] = None) -> str:
        params: Dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "system", "content": system}, {"role": "user", "content": user}],
            "temperature": temperature,
        }
        if max_tokens:
            params["max_tokens"] = max_tokens
        try:
            response = self.client.chat.completions.create(**params)
        except Exception as e:
            logger.warning(f"Groq call with model {self.model} failed: {e}")
            raise AIProviderError(f"AI call failed: {e}") from e
        try:
            return response.choices[0].message.content or ""
        except (IndexError, AttributeError, TypeError) as e:
            raise AIProviderError(f"AI response had no message: {e}") from e

    def generate_workout_plan(self, request: WorkoutPlanRequest) -> WorkoutPlanResult:
        text = self._chat(TRAINER_SYSTEM_PROMPT, build_workout_prompt(request))
        logger.debug(f"Workout plan AI response (length: {len(text)}): {text[:300]}...")
        try:
            parsed = json.loads(extract_json_block(text))
        except json.JSONDecodeError as e:
            raise AIProviderError(f"AI did not return valid JSON: {e}") from e
        if not isinstance(parsed, dict):
            raise AIProviderError("AI response is not a JSON object")
        try:
            return WorkoutPlanResult.model_validate(parsed)
        except PydanticValidationError as e:
            raise AIProviderError(f"AI plan has the wrong shape: {e.error_count()} error(s)") from e

    def generate_nutrition_advice(self, bmi: float, goal: str, calories: int) -> str:
        prompt = (
            f"Provide nutrition advice for someone with BMI {bmi}, goal of {goal}, and daily calorie "
            f"target of {calories}. Include meal timing, macronutrient ratios, and practical tips."
        )
        text = self._chat(NUTRITIONIST_SYSTEM_PROMPT, prompt, temperature=0.5, max_tokens=300).strip()
        if not text:
            raise AIProviderError("AI returned empty nutrition advice")
        return text


def build_workout_plan_provider(config) -> Optional[WorkoutPlanProvider]:
    """Groq-backed provider when an API key is configured, else None."""
    if not config.GROQ_API_KEY:
        logger.info("GROQ_API_KEY not set; workout plans will use templates only")
        return None
    return GroqWorkoutPlanProvider(Groq(api_key=config.GROQ_API_KEY), config.GROQ_MODEL)
