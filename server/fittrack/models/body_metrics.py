from typing import Any, Dict, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from fittrack.errors import ValidationError

Sex = Literal["male", "female"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very-active"]


class BodyMetricsInput(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    height_cm: float = Field(gt=0, validation_alias=AliasChoices("height_cm", "height", "heightCm"))
    weight_kg: float = Field(gt=0, validation_alias=AliasChoices("weight_kg", "weight", "weightKg"))
    age_years: int = Field(gt=0, validation_alias=AliasChoices("age_years", "age", "ageYears"))
    sex: Sex = Field(validation_alias=AliasChoices("sex", "gender"))
    # Checked against the multiplier table by the calculator, not here, so an
    # unknown level is reported the same way on every call path.
    activity_level: str = Field(validation_alias=AliasChoices("activity_level", "activityLevel"))

    @field_validator("sex", "activity_level", mode="before")
    @classmethod
    def _lower(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @classmethod
    def from_payload(cls, raw: Dict[str, Any]) -> "BodyMetricsInput":
        """Parse a raw JSON object, raising ValidationError on any bad field."""
        if not isinstance(raw, dict):
            raise ValidationError("Request body must be a JSON object")
        try:
            return cls.model_validate(raw)
        except PydanticValidationError as e:
            errors = e.errors()
            missing = [str(err["loc"][0]) for err in errors if err["type"] == "missing"]
            if missing:
                raise ValidationError(f"Missing required field(s): {', '.join(missing)}")
            first = errors[0]
            field = ".".join(str(p) for p in first["loc"]) or "body"
            raise ValidationError(f"Invalid {field}: {first['msg']}")


class CalorieRecommendations(BaseModel):
    model_config = ConfigDict(frozen=True)

    weight_loss: int
    maintenance: int
    weight_gain: int


class BodyMetricsResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    bmi: float
    category: str
    bmr: int
    tdee: int
    recommendations: CalorieRecommendations
