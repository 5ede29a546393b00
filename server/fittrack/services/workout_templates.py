# fittrack/services/workout_templates.py
"""
Template-based workout plan generator.

Used whenever the AI provider is missing or fails. Output is a pure function of
the request and the lookup tables the engine was built with.
"""

import string
from types import MappingProxyType
from typing import List, Mapping, NamedTuple, Optional, Sequence, Tuple

from fittrack.models.workout_plan import (
    ExerciseTemplateEntry,
    ScheduleDay,
    WorkoutPlanRequest,
    WorkoutPlanResult,
)

MIN_EXERCISES_PER_DAY = 4
MAX_EXERCISES_PER_DAY = 6


class ExerciseTemplate(NamedTuple):
    name: str
    sets: str
    reps: str
    advanced_reps: str
    notes: str
    rest_time: str


T = ExerciseTemplate

# Each row carries an advanced rep band. Loaded lifts move one band heavier,
# bodyweight and timed work one band longer.
EXERCISES_BY_FOCUS: Mapping[str, Tuple[ExerciseTemplate, ...]] = MappingProxyType({
    "Full Body Circuit": (
        T("Bodyweight Squats", "3", "12-15", "15-20", "Keep chest up, knees behind toes", "30-45 seconds"),
        T("Push-ups", "3", "8-12", "12-15", "Modify on knees if needed", "30-45 seconds"),
        T("Plank Hold", "3", "30-60 seconds", "60-90 seconds", "Keep body straight", "30 seconds"),
        T("Mountain Climbers", "3", "20 total", "30 total", "Quick feet, strong core", "45 seconds"),
        T("Lunges", "2", "10 each leg", "12 each leg", "Step far enough forward", "30 seconds"),
        T("Kettlebell Swings", "3", "12-15", "15-20", "Drive with the hips, not the arms", "45 seconds"),
    ),
    "Cardio & Core": (
        T("Jumping Jacks", "3", "30 seconds", "45 seconds", "Keep pace steady", "30 seconds"),
        T("Burpees", "3", "8-10", "10-12", "Full body movement", "60 seconds"),
        T("Russian Twists", "3", "20 total", "30 total", "Engage core throughout", "45 seconds"),
        T("Dead Bug", "3", "10 each side", "12 each side", "Keep lower back pressed down", "30 seconds"),
        T("High Knees", "3", "30 seconds", "45 seconds", "Drive knees up high", "30 seconds"),
        T("Bicycle Crunches", "3", "20 total", "30 total", "Slow and controlled, elbow to opposite knee", "30 seconds"),
    ),
    "Upper Body Strength": (
        T("Bench Press", "4", "8-10", "6-8", "Control the weight down", "2-3 minutes"),
        T("Bent-over Rows", "4", "8-10", "6-8", "Keep back flat, pull to lower ribs", "2 minutes"),
        T("Overhead Press", "3", "8-10", "6-8", "Keep core tight", "2 minutes"),
        T("Pull-ups/Lat Pulldown", "3", "6-8", "8-10", "Full range of motion", "2 minutes"),
        T("Incline Dumbbell Press", "3", "10-12", "8-10", "Squeeze chest at top", "90 seconds"),
        T("Barbell Curls", "3", "10-12", "8-10", "No swinging", "60 seconds"),
    ),
    "Push (Chest/Shoulders/Triceps)": (
        T("Bench Press", "4", "8-10", "6-8", "Control the weight down", "2-3 minutes"),
        T("Overhead Press", "3", "8-10", "6-8", "Keep core tight", "2 minutes"),
        T("Incline Dumbbell Press", "3", "10-12", "8-10", "Squeeze chest at top", "90 seconds"),
        T("Lateral Raises", "3", "12-15", "10-12", "Light weight, control movement", "60 seconds"),
        T("Tricep Dips", "3", "8-12", "12-15", "Lower slowly", "60 seconds"),
        T("Cable Tricep Pushdowns", "3", "12-15", "10-12", "Keep elbows pinned", "60 seconds"),
    ),
    "Pull (Back/Biceps)": (
        T("Pull-ups/Lat Pulldown", "4", "6-8", "8-10", "Full range of motion", "2-3 minutes"),
        T("Bent-over Rows", "3", "8-10", "6-8", "Keep back straight", "2 minutes"),
        T("Seated Cable Rows", "3", "10-12", "8-10", "Pull elbows back, chest tall", "90 seconds"),
        T("Face Pulls", "3", "12-15", "10-12", "Squeeze shoulder blades", "90 seconds"),
        T("Bicep Curls", "3", "10-12", "8-10", "Control the negative", "60 seconds"),
        T("Hammer Curls", "2", "12-15", "10-12", "Keep elbows stable", "60 seconds"),
    ),
    "Legs & Glutes": (
        T("Squats", "4", "10-12", "8-10", "Full depth, chest up", "2-3 minutes"),
        T("Romanian Deadlifts", "3", "10-12", "8-10", "Hinge at hips", "2 minutes"),
        T("Bulgarian Split Squats", "3", "10 each leg", "8 each leg", "Focus on front leg", "90 seconds"),
        T("Hip Thrusts", "3", "12-15", "10-12", "Squeeze glutes at top", "90 seconds"),
        T("Walking Lunges", "3", "12 each leg", "10 each leg", "Long stride, upright torso", "90 seconds"),
        T("Calf Raises", "3", "15-20", "12-15", "Full range of motion", "60 seconds"),
    ),
    "Lower Body Strength": (
        T("Back Squats", "4", "6-8", "4-6", "Brace before each rep", "3 minutes"),
        T("Deadlifts", "4", "5-6", "3-5", "Bar close to shins, neutral spine", "3 minutes"),
        T("Leg Press", "3", "8-10", "6-8", "Do not lock knees at the top", "2 minutes"),
        T("Walking Lunges", "3", "10 each leg", "8 each leg", "Long stride, upright torso", "90 seconds"),
        T("Leg Curls", "3", "10-12", "8-10", "Slow on the way down", "60 seconds"),
        T("Standing Calf Raises", "3", "12-15", "10-12", "Pause at the top", "60 seconds"),
    ),
    "Core & Stability": (
        T("Plank Hold", "3", "30-45 seconds", "45-60 seconds", "Squeeze glutes, neutral neck", "30 seconds"),
        T("Side Plank", "3", "20-30 seconds each side", "30-45 seconds each side", "Hips stacked and lifted", "30 seconds"),
        T("Bird Dog", "3", "10 each side", "12 each side", "Move slowly, no hip rotation", "30 seconds"),
        T("Pallof Press", "3", "10 each side", "12 each side", "Resist the rotation", "45 seconds"),
        T("Hanging Knee Raises", "3", "10-12", "12-15", "No swinging", "60 seconds"),
        T("Farmer's Carry", "3", "30 meters", "40 meters", "Tall posture, tight grip", "60 seconds"),
    ),
    "Cardio Endurance": (
        T("Steady-State Run or Bike", "1", "20-30 minutes", "30-40 minutes", "Conversational pace", "As needed"),
        T("Rowing Intervals", "4", "250 meters", "500 meters", "Strong leg drive, then pull", "90 seconds"),
        T("Jump Rope", "3", "60 seconds", "90 seconds", "Stay on the balls of your feet", "45 seconds"),
        T("Stair Climber", "1", "10 minutes", "15 minutes", "Do not lean on the rails", "As needed"),
        T("Shuttle Runs", "4", "5 x 20 meters", "8 x 20 meters", "Touch the line each turn", "60 seconds"),
        T("Burpees", "3", "8-10", "10-12", "Steady rhythm", "60 seconds"),
    ),
    "Muscular Endurance": (
        T("Goblet Squats", "3", "15-20", "20-25", "Elbows inside knees", "45 seconds"),
        T("Push-ups", "3", "12-15", "15-20", "Full range, body in one line", "45 seconds"),
        T("Dumbbell Rows", "3", "15 each arm", "20 each arm", "Pull to the hip", "45 seconds"),
        T("Walking Lunges", "3", "12 each leg", "15 each leg", "Long stride, upright torso", "45 seconds"),
        T("Dumbbell Shoulder Press", "3", "15-20", "20-25", "Light weight, constant tension", "45 seconds"),
        T("Plank Hold", "3", "45-60 seconds", "60-90 seconds", "Keep body straight", "30 seconds"),
    ),
    "Mixed Training": (
        T("Kettlebell Swings", "3", "15", "20", "Snap the hips", "60 seconds"),
        T("Thrusters", "3", "10-12", "12-15", "Use leg drive to press", "90 seconds"),
        T("Box Jumps", "3", "8-10", "10-12", "Land softly", "60 seconds"),
        T("Renegade Rows", "3", "8 each arm", "10 each arm", "Keep hips square", "60 seconds"),
        T("Battle Ropes", "3", "30 seconds", "45 seconds", "Fast, even waves", "45 seconds"),
        T("Mountain Climbers", "3", "30 total", "40 total", "Quick feet, strong core", "45 seconds"),
    ),
    "Full Body Strength": (
        T("Goblet Squats", "3", "10-12", "8-10", "Sit between the heels", "90 seconds"),
        T("Dumbbell Bench Press", "3", "10-12", "8-10", "Control the weight down", "90 seconds"),
        T("Dumbbell Rows", "3", "10 each arm", "8 each arm", "Keep back flat", "90 seconds"),
        T("Romanian Deadlifts", "3", "10-12", "8-10", "Hinge at hips", "2 minutes"),
        T("Overhead Press", "3", "8-10", "6-8", "Keep core tight", "2 minutes"),
        T("Plank Hold", "3", "30-45 seconds", "45-60 seconds", "Keep body straight", "30 seconds"),
    ),
    "Cardio & Flexibility": (
        T("Brisk Walk or Easy Cycle", "1", "15-20 minutes", "20-30 minutes", "Comfortable steady pace", "As needed"),
        T("Jumping Jacks", "3", "30 seconds", "45 seconds", "Keep pace steady", "30 seconds"),
        T("World's Greatest Stretch", "2", "5 each side", "8 each side", "Move slowly through each position", "30 seconds"),
        T("Hip Flexor Stretch", "2", "30 seconds each side", "45 seconds each side", "Tuck pelvis, squeeze glute", "15 seconds"),
        T("Cat-Cow", "2", "10", "15", "Breathe with the movement", "15 seconds"),
        T("Hamstring Stretch", "2", "30 seconds each side", "45 seconds each side", "Hinge, do not round the back", "15 seconds"),
    ),
    "Functional Training": (
        T("Farmer's Carry", "3", "30 meters", "40 meters", "Tall posture, tight grip", "60 seconds"),
        T("Step-ups", "3", "10 each leg", "12 each leg", "Drive through the front heel", "60 seconds"),
        T("Medicine Ball Slams", "3", "10-12", "12-15", "Full extension before the slam", "60 seconds"),
        T("Kettlebell Deadlifts", "3", "10-12", "8-10", "Push the floor away", "90 seconds"),
        T("Push-ups", "3", "10-12", "12-15", "Body in one line", "60 seconds"),
        T("Turkish Get-ups", "2", "3 each side", "5 each side", "Eyes on the weight", "90 seconds"),
    ),
})

del T

GOAL_FOCUS_AREAS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "weight loss": ("Full Body Circuit", "Cardio & Core", "Upper Body Strength"),
    "muscle gain": ("Push (Chest/Shoulders/Triceps)", "Pull (Back/Biceps)", "Legs & Glutes"),
    "strength": ("Upper Body Strength", "Lower Body Strength", "Core & Stability"),
    "endurance": ("Cardio Endurance", "Muscular Endurance", "Mixed Training"),
})

DEFAULT_FOCUS_AREAS: Tuple[str, ...] = ("Full Body Strength", "Cardio & Flexibility", "Functional Training")

GOAL_ALIASES: Mapping[str, str] = MappingProxyType({
    "fat loss": "weight loss",
    "build muscle": "muscle gain",
    "get stronger": "strength",
})

GENERAL_TIPS: Tuple[str, ...] = (
    "Always warm up for 5-10 minutes before starting your workout",
    "Focus on proper form over heavy weight",
    "Stay hydrated throughout your workout",
    "Get adequate rest between workout days",
)

GOAL_TIPS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "weight loss": ("Combine with a caloric deficit diet", "Include cardio 3-4 times per week"),
    "muscle gain": ("Eat in a slight caloric surplus", "Prioritize protein intake (0.8-1g per lb bodyweight)"),
    "strength": ("Focus on progressive overload", "Allow 2-3 minutes rest between heavy sets"),
    "endurance": ("Gradually increase workout duration", "Include both steady-state and interval training"),
})

PROGRESSION_NOTES = (
    "Start with lighter weights and focus on proper form. Increase weight by 5-10% when you can "
    "complete all sets with good form. Rest 48-72 hours between training the same muscle groups."
)


def normalize_goal(goal: str) -> str:
    """Lowercase, treat '-' and '_' as spaces, collapse whitespace."""
    cleaned = (goal or "").lower().replace("-", " ").replace("_", " ")
    return " ".join(cleaned.split())


class WorkoutTemplateEngine:
    """Builds a weekly schedule from static focus and exercise tables."""

    def __init__(
        self,
        goal_focus_areas: Mapping[str, Sequence[str]] = GOAL_FOCUS_AREAS,
        exercises_by_focus: Mapping[str, Sequence[ExerciseTemplate]] = EXERCISES_BY_FOCUS,
        goal_tips: Mapping[str, Sequence[str]] = GOAL_TIPS,
        general_tips: Sequence[str] = GENERAL_TIPS,
        default_focus_areas: Sequence[str] = DEFAULT_FOCUS_AREAS,
        goal_aliases: Mapping[str, str] = GOAL_ALIASES,
        progression_notes: str = PROGRESSION_NOTES,
    ):
        self._goal_focus_areas = MappingProxyType(
            {normalize_goal(k): tuple(v) for k, v in goal_focus_areas.items()}
        )
        self._exercises_by_focus = MappingProxyType({k: tuple(v) for k, v in exercises_by_focus.items()})
        self._goal_tips = MappingProxyType({normalize_goal(k): tuple(v) for k, v in goal_tips.items()})
        self._general_tips = tuple(general_tips)
        self._default_focus_areas = tuple(default_focus_areas)
        self._goal_aliases = MappingProxyType(
            {normalize_goal(k): normalize_goal(v) for k, v in goal_aliases.items()}
        )
        self._progression_notes = progression_notes
        self._check_tables()

    def _check_tables(self):
        rotations = list(self._goal_focus_areas.values()) + [self._default_focus_areas]
        for rotation in rotations:
            if not rotation:
                raise ValueError("Focus rotation must not be empty")
            for focus in rotation:
                entries = self._exercises_by_focus.get(focus)
                if entries is None:
                    raise ValueError(f"No exercises defined for focus '{focus}'")
                if not MIN_EXERCISES_PER_DAY <= len(entries) <= MAX_EXERCISES_PER_DAY:
                    raise ValueError(
                        f"Focus '{focus}' has {len(entries)} exercises, expected "
                        f"{MIN_EXERCISES_PER_DAY}-{MAX_EXERCISES_PER_DAY}"
                    )

    def canonical_goal(self, goal: str) -> str:
        key = normalize_goal(goal)
        return self._goal_aliases.get(key, key)

    def focus_areas_for_goal(self, goal: str) -> Tuple[str, ...]:
        # unknown goals get the general rotation instead of an error
        return self._goal_focus_areas.get(self.canonical_goal(goal), self._default_focus_areas)

    def exercises_for_focus(self, focus: str, experience_level: str) -> List[ExerciseTemplateEntry]:
        advanced = experience_level == "advanced"
        return [
            ExerciseTemplateEntry(
                name=row.name,
                sets=row.sets,
                reps=row.advanced_reps if advanced else row.reps,
                notes=row.notes,
                rest_time=row.rest_time,
            )
            for row in self._exercises_by_focus[focus]
        ]

    def tips_for_goal(self, goal: str) -> List[str]:
        return list(self._general_tips) + list(self._goal_tips.get(self.canonical_goal(goal), ()))

    def generate_fallback(self, request: WorkoutPlanRequest) -> WorkoutPlanResult:
        focus_areas = self.focus_areas_for_goal(request.fitness_goal)
        schedule = []
        for day in range(1, request.days_per_week + 1):
            focus = focus_areas[day % len(focus_areas)]
            schedule.append(ScheduleDay(
                day=day,
                name=f"Day {day}: {focus}",
                focus=focus,
                duration=request.session_duration_minutes,
                exercises=self.exercises_for_focus(focus, request.experience_level),
            ))

        goal_label = string.capwords(normalize_goal(request.fitness_goal)) or "General Fitness"
        return WorkoutPlanResult(
            title=f"{request.days_per_week}-Day {goal_label} Plan",
            description=(
                f"A structured {request.days_per_week}-day workout plan designed for {goal_label.lower()} "
                f"with {request.experience_level} level exercises. Each session lasts approximately "
                f"{request.session_duration_minutes} minutes."
            ),
            weekly_schedule=schedule,
            tips=self.tips_for_goal(request.fitness_goal),
            progression_notes=self._progression_notes,
        )


_default_engine: Optional[WorkoutTemplateEngine] = None


def default_engine() -> WorkoutTemplateEngine:
    global _default_engine
    if _default_engine is None:
        _default_engine = WorkoutTemplateEngine()
    return _default_engine
