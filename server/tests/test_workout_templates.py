# server/tests/test_workout_templates.py
import pytest

from fittrack.models.workout_plan import WorkoutPlanRequest
from fittrack.services.workout_templates import (
    DEFAULT_FOCUS_AREAS,
    EXERCISES_BY_FOCUS,
    GENERAL_TIPS,
    GOAL_FOCUS_AREAS,
    ExerciseTemplate,
    WorkoutTemplateEngine,
    normalize_goal,
)

engine = WorkoutTemplateEngine()

GOALS = ["weight loss", "muscle gain", "strength", "endurance", "general fitness"]
LEVELS = ["beginner", "intermediate", "advanced"]


def make_request(**overrides) -> WorkoutPlanRequest:
    payload = {
        "age": 30,
        "sex": "female",
        "height_cm": 165,
        "weight_kg": 60,
        "fitness_goal": "weight loss",
        "experience_level": "beginner",
        "days_per_week": 4,
        "session_duration_minutes": 45,
    }
    payload.update(overrides)
    return WorkoutPlanRequest.model_validate(payload)


class TestScheduleShape:
    """Every generated plan respects the schedule invariants"""

    @pytest.mark.parametrize("goal", GOALS)
    @pytest.mark.parametrize("days", [3, 4, 5, 6])
    @pytest.mark.parametrize("level", LEVELS)
    def test_days_and_exercise_counts(self, goal, days, level):
        plan = engine.generate_fallback(make_request(fitness_goal=goal, days_per_week=days, experience_level=level))

        assert len(plan.weekly_schedule) == days
        for index, day in enumerate(plan.weekly_schedule, start=1):
            assert day.day == index
            assert day.name == f"Day {index}: {day.focus}"
            assert day.duration == 45
            assert 4 <= len(day.exercises) <= 6

    def test_focus_rotation_starts_at_second_area(self):
        plan = engine.generate_fallback(make_request(days_per_week=4))
        areas = GOAL_FOCUS_AREAS["weight loss"]

        assert [d.focus for d in plan.weekly_schedule] == [areas[1], areas[2], areas[0], areas[1]]
        assert plan.weekly_schedule[0].focus == "Cardio & Core"

    def test_every_table_focus_is_complete(self):
        assert len(EXERCISES_BY_FOCUS) == 14
        for focus, rows in EXERCISES_BY_FOCUS.items():
            assert len(rows) == 6, focus


class TestGoals:
    """Goal normalization, aliases and defaults"""

    def test_normalize_goal(self):
        assert normalize_goal("Weight-Loss") == "weight loss"
        assert normalize_goal("  muscle_gain ") == "muscle gain"

    def test_client_slug_matches_spaced_goal(self):
        slug = engine.generate_fallback(make_request(fitness_goal="weight-loss"))
        spaced = engine.generate_fallback(make_request(fitness_goal="Weight Loss"))
        assert slug == spaced

    @pytest.mark.parametrize("alias,goal", [
        ("fat loss", "weight loss"),
        ("build muscle", "muscle gain"),
        ("get stronger", "strength"),
    ])
    def test_aliases(self, alias, goal):
        assert engine.focus_areas_for_goal(alias) == GOAL_FOCUS_AREAS[goal]
        assert engine.tips_for_goal(alias) == engine.tips_for_goal(goal)

    def test_unknown_goal_uses_default_rotation(self):
        plan = engine.generate_fallback(make_request(fitness_goal="yoga retreat"))

        assert {d.focus for d in plan.weekly_schedule} <= set(DEFAULT_FOCUS_AREAS)
        assert plan.tips == list(GENERAL_TIPS)

    def test_goal_tips_appended(self):
        tips = engine.tips_for_goal("muscle gain")
        assert tips[:4] == list(GENERAL_TIPS)
        assert tips[4:] == ["Eat in a slight caloric surplus", "Prioritize protein intake (0.8-1g per lb bodyweight)"]


class TestPlanContent:
    """Titles, descriptions and experience levels"""

    def test_title_and_description(self):
        plan = engine.generate_fallback(make_request(fitness_goal="weight-loss"))

        assert plan.title == "4-Day Weight Loss Plan"
        assert "4-day workout plan designed for weight loss" in plan.description
        assert "beginner level" in plan.description
        assert "45 minutes" in plan.description
        assert plan.progression_notes.startswith("Start with lighter weights")

    def test_advanced_uses_advanced_band(self):
        request = make_request(fitness_goal="muscle gain", experience_level="advanced", days_per_week=3)
        plan = engine.generate_fallback(request)

        for day in plan.weekly_schedule:
            rows = EXERCISES_BY_FOCUS[day.focus]
            assert [e.reps for e in day.exercises] == [r.advanced_reps for r in rows]

    @pytest.mark.parametrize("level", ["beginner", "intermediate"])
    def test_non_advanced_uses_base_band(self, level):
        plan = engine.generate_fallback(make_request(experience_level=level))

        for day in plan.weekly_schedule:
            rows = EXERCISES_BY_FOCUS[day.focus]
            assert [e.reps for e in day.exercises] == [r.reps for r in rows]
            assert [e.rest_time for e in day.exercises] == [r.rest_time for r in rows]

    def test_deterministic(self):
        request = make_request(days_per_week=6, experience_level="advanced")
        assert engine.generate_fallback(request) == engine.generate_fallback(request)


class TestTableInjection:
    """Engines built from caller-supplied tables"""

    rows = tuple(ExerciseTemplate(f"Move {i}", "3", "10", "8", "", "60 seconds") for i in range(4))

    def test_custom_tables(self):
        custom = WorkoutTemplateEngine(
            goal_focus_areas={"Climbing": ("Grip",)},
            exercises_by_focus={"Grip": self.rows, "Anything": self.rows},
            goal_tips={},
            general_tips=("Chalk up",),
            default_focus_areas=("Anything",),
            goal_aliases={},
        )
        plan = custom.generate_fallback(make_request(fitness_goal="climbing", days_per_week=3))

        assert [d.focus for d in plan.weekly_schedule] == ["Grip", "Grip", "Grip"]
        assert plan.tips == ["Chalk up"]
        assert len(plan.weekly_schedule[0].exercises) == 4

    def test_rejects_short_focus_table(self):
        with pytest.raises(ValueError):
            WorkoutTemplateEngine(
                goal_focus_areas={},
                exercises_by_focus={"Tiny": self.rows[:3]},
                default_focus_areas=("Tiny",),
            )

    def test_rejects_missing_focus(self):
        with pytest.raises(ValueError):
            WorkoutTemplateEngine(goal_focus_areas={"x": ("Nope",)})

    def test_default_tables_are_read_only(self):
        with pytest.raises(TypeError):
            EXERCISES_BY_FOCUS["New"] = ()
        with pytest.raises(TypeError):
            GOAL_FOCUS_AREAS["weight loss"] = ()
