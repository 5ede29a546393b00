from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

Experience = Literal["beginner", "intermediate", "advanced"]
SessionDuration = Literal[30, 45, 60, 90]


class WorkoutPlanRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    age: int = Field(gt=0)
    sex: Literal["male", "female"] = Field(validation_alias=AliasChoices("sex", "gender"))
    height_cm: float = Field(gt=0, validation_alias=AliasChoices("height_cm", "height"))
    weight_kg: float = Field(gt=0, validation_alias=AliasChoices("weight_kg", "weight"))
    bmi: Optional[float] = None
    fitness_goal: str = Field(min_length=1, validation_alias=AliasChoices("fitness_goal", "fitnessGoal"))
    experience_level: Experience = Field(validation_alias=AliasChoices("experience_level", "experienceLevel"))
    days_per_week: int = Field(ge=3, le=6, validation_alias=AliasChoices("days_per_week", "daysPerWeek"))
    session_duration_minutes: SessionDuration = Field(
        validation_alias=AliasChoices("session_duration_minutes", "sessionDuration")
    )
    activity_level: str = Field(
        "moderate", validation_alias=AliasChoices("activity_level", "activityLevel")
    )

    @field_validator("sex", "experience_level", "activity_level", mode="before")
    @classmethod
    def _lower(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("session_duration_minutes", mode="before")
    @classmethod
    def _int_duration(cls, v):
        # the planner form posts the select value as a string
        if isinstance(v, str) and v.strip().isdigit():
            return int(v)
        return v


class ExerciseTemplateEntry(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    sets: str
    reps: str
    notes: str = ""
    rest_time: str = Field("", validation_alias=AliasChoices("rest_time", "restTime"))

    @field_validator("sets", "reps", mode="before")
    @classmethod
    def _stringify(cls, v):
        # LLM output sometimes uses bare numbers for sets/reps
        return str(v) if isinstance(v, (int, float)) else v


class ScheduleDay(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    day: int = Field(validation_alias=AliasChoices("day", "day_index", "dayIndex"))
    name: str
    focus: str
    duration: int
    exercises: List[ExerciseTemplateEntry]


class WorkoutPlanResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    description: str
    weekly_schedule: List[ScheduleDay] = Field(
        validation_alias=AliasChoices("weekly_schedule", "weeklySchedule")
    )
    tips: List[str] = Field(default_factory=list)
    progression_notes: str = Field(
        "", validation_alias=AliasChoices("progression_notes", "progressionNotes")
    )


class NutritionAdviceRequest(BaseModel):
    bmi: float = Field(gt=0)
    goal: str
    calories: int = Field(gt=0)


class WorkoutPlanUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None
    plan_data: Optional[Dict[str, Any]] = None


class WorkoutPlanOut(BaseModel):
    id: str
    user_id: str
    title: str
    description: str
    goal: str
    experience_level: str
    days_per_week: int
    session_duration: int
    plan_data: Dict[str, Any]
    source: str
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
