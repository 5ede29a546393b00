from fastapi import APIRouter, Request

from fittrack.errors import ValidationError
from fittrack.models.body_metrics import BodyMetricsInput, BodyMetricsResult
from fittrack.services import body_metrics

router = APIRouter(prefix="/bmi", tags=["Body Metrics"])


@router.post("/calculate", response_model=BodyMetricsResult)
async def calculate_body_metrics(request: Request):
    """
    BMI, BMR, TDEE and calorie targets.

    The raw body is parsed here so a missing body, bad JSON or a bad field
    all come back as the tagged ValidationError body instead of FastAPI's 422.
    """
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationError("Request body must be valid JSON")
    data = BodyMetricsInput.from_payload(payload)
    return body_metrics.compute(data)
