import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

MealType = Literal["breakfast", "lunch", "dinner", "snack"]


# -----------------
# Workout sessions (scheduled plan days)
# -----------------
class WorkoutSessionIn(BaseModel):
    plan_id: Optional[str] = None
    date: datetime.date = Field(default_factory=datetime.date.today)
    day: Optional[int] = None
    name: str
    completed: bool = False
    duration: Optional[int] = Field(None, ge=0)  # minutes
    notes: Optional[str] = None


class WorkoutSessionUpdate(BaseModel):
    completed: Optional[bool] = None
    duration: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


class WorkoutSessionOut(WorkoutSessionIn):
    id: str
    user_id: str
    created_at: Optional[datetime.datetime] = None


# -----------------
# Workout tracker (free-form logged workouts)
# -----------------
class TrackedExercise(BaseModel):
    name: str
    sets: int = Field(ge=0)
    reps: int = Field(ge=0)
    weight: Optional[float] = Field(None, ge=0)  # kg


class TrackerSessionIn(BaseModel):
    date: datetime.date = Field(default_factory=datetime.date.today)
    workout_name: str
    exercises: List[TrackedExercise] = Field(default_factory=list)
    total_duration: Optional[int] = Field(None, ge=0)  # minutes
    notes: Optional[str] = None


class TrackerSessionUpdate(BaseModel):
    date: Optional[datetime.date] = None
    workout_name: Optional[str] = None
    exercises: Optional[List[TrackedExercise]] = None
    total_duration: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


class TrackerSessionOut(TrackerSessionIn):
    id: str
    user_id: str
    created_at: Optional[datetime.datetime] = None


class TrackerStats(BaseModel):
    total_workouts: int
    total_sets: int
    total_reps: int
    total_duration: int


# -----------------
# Weight entries
# -----------------
class WeightEntryIn(BaseModel):
    weight: float = Field(gt=0)  # kg
    date: datetime.date = Field(default_factory=datetime.date.today)
    goal_weight: Optional[float] = Field(None, gt=0)
    notes: Optional[str] = None


class WeightEntryUpdate(BaseModel):
    weight: Optional[float] = Field(None, gt=0)
    date: Optional[datetime.date] = None
    goal_weight: Optional[float] = Field(None, gt=0)
    notes: Optional[str] = None


class WeightEntryOut(WeightEntryIn):
    id: str
    user_id: str
    created_at: Optional[datetime.datetime] = None


# -----------------
# Food entries
# -----------------
class FoodEntryIn(BaseModel):
    date: datetime.date = Field(default_factory=datetime.date.today)
    meal: MealType
    food_name: str
    serving: str = "100g"
    calories: int = Field(ge=0)
    protein: Optional[float] = Field(None, ge=0)
    carbs: Optional[float] = Field(None, ge=0)
    fat: Optional[float] = Field(None, ge=0)


class FoodEntryUpdate(BaseModel):
    meal: Optional[MealType] = None
    food_name: Optional[str] = None
    serving: Optional[str] = None
    calories: Optional[int] = Field(None, ge=0)
    protein: Optional[float] = Field(None, ge=0)
    carbs: Optional[float] = Field(None, ge=0)
    fat: Optional[float] = Field(None, ge=0)


class FoodEntryOut(FoodEntryIn):
    id: str
    user_id: str
    created_at: Optional[datetime.datetime] = None


class FoodNutritionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    food_id: str = Field(alias="foodId", min_length=1)
    measure_uri: str = Field("http://www.edamam.com/ontologies/edamam.owl#Measure_gram", alias="measureUri")
    quantity: float = Field(100, gt=0)
    food_name: Optional[str] = Field(None, alias="foodName")
