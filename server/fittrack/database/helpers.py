from datetime import date, datetime, time, timedelta
from typing import Any, Optional, Tuple

from bson import ObjectId
from fastapi import HTTPException


def oid(val: Any) -> ObjectId:
    """Convert string to ObjectId, with proper error handling"""
    if isinstance(val, ObjectId):
        return val
    if not val:
        raise HTTPException(status_code=400, detail="Invalid id")
    try:
        return ObjectId(val)
    except Exception:
        raise HTTPException(status_code=400, detail=f"Invalid id format: {val}")


def serialize_doc(data: Any) -> Any:
    """Convert MongoDB ObjectIds to strings and `_id` to `id`, recursively"""
    if isinstance(data, dict):
        result = {}
        for key, value in data.items():
            out_key = "id" if key == "_id" else key
            result[out_key] = serialize_doc(value)
        return result
    if isinstance(data, list):
        return [serialize_doc(item) for item in data]
    if isinstance(data, ObjectId):
        return str(data)
    return data


def to_datetime(value: Any) -> datetime:
    """Store dates as datetimes; pymongo cannot encode bare `date` objects."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    return datetime.fromisoformat(str(value))


def day_bounds(day: Optional[date]) -> Optional[Tuple[datetime, datetime]]:
    if day is None:
        return None
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def serialize_entry(doc: Any) -> Any:
    """serialize_doc plus the stored midnight `date` turned back into a date"""
    out = serialize_doc(doc)
    if isinstance(out, dict) and isinstance(out.get("date"), datetime):
        out["date"] = out["date"].date()
    return out
