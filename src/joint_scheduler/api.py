"""
API wrapper functions for joint scheduling.
"""

import logging
import uuid
from datetime import datetime, UTC
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_serializer

from .config import SchedulerConfig, SchedulerSettings
from .core import schedule
from .exceptions import InvalidConfigurationError
from .models import SchedulerData, TaggedInterval

logger = logging.getLogger(__name__)


class ScheduleRequest(BaseModel):
    """Request model for joint scheduling."""
    primary: SchedulerData = Field(..., description="Primary user's projects and events")
    secondary: SchedulerData | None = Field(
        None, description="Secondary user's projects and events"
    )
    now: datetime | None = Field(None, description="Override for the current time")


class ScheduleResponse(BaseModel):
    """Response model for joint scheduling."""
    success: bool = Field(..., description="Whether scheduling succeeded")
    intervals: list[TaggedInterval] = Field(default_factory=list)
    total_intervals: int = Field(0, description="Number of scheduled intervals")
    error_code: str | None = Field(None, description="Error code when scheduling failed")
    message: str | None = Field(None, description="Error message when scheduling failed")
    request_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    generated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_serializer("generated_at")
    def serialize_generated_at(self, value: datetime) -> str:
        return value.isoformat()


def _error_response(error_code: str, message: str) -> dict[str, Any]:
    return ScheduleResponse(success=False, error_code=error_code, message=message).model_dump(
        mode="json"
    )


def schedule_api(
    request_data: dict[str, Any], config: SchedulerConfig | None = None
) -> dict[str, Any]:
    """
    API wrapper for joint scheduling.

    Args:
        request_data: Dictionary containing schedule request data
        config: Engine parameters, loaded from SchedulerSettings when omitted

    Returns:
        Dictionary containing schedule response data

    Raises:
        InternalConsistencyError: If an engine invariant is violated
    """
    try:
        request = ScheduleRequest.model_validate(request_data)
    except ValidationError as e:
        logger.warning(f"Rejected schedule request: {e.error_count()} validation errors")
        return _error_response("VALIDATION_ERROR", str(e))

    if config is None:
        config = SchedulerSettings().to_config()

    try:
        intervals = schedule(request.primary, request.secondary, now=request.now, config=config)
    except InvalidConfigurationError as e:
        logger.warning(f"Schedule request has invalid configuration: {e.message}")
        return _error_response(e.error_code, e.message)

    response = ScheduleResponse(
        success=True, intervals=intervals, total_intervals=len(intervals)
    )
    return response.model_dump(mode="json")


def validate_schedule_request(request_data: dict[str, Any]) -> str | None:
    """
    Validate schedule request data.

    Args:
        request_data: Dictionary containing request data

    Returns:
        Error message if validation fails, None if valid
    """
    if "primary" not in request_data:
        return "Missing required field: primary"

    for field in ("primary", "secondary"):
        data = request_data.get(field)
        if data is None and field == "secondary":
            continue
        if not isinstance(data, dict):
            return f"{field.capitalize()} data must be a dictionary"
        for collection in ("projects", "events"):
            if collection in data and not isinstance(data[collection], list):
                return f"{field.capitalize()} {collection} must be a list"

    try:
        ScheduleRequest.model_validate(request_data)
    except ValidationError as e:
        first = e.errors()[0]
        location = " -> ".join(str(loc) for loc in first["loc"])
        return f"Validation error for field '{location}': {first['msg']}"
    return None
