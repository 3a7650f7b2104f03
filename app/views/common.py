"""Common response schemas and the response envelope."""

from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from app.config.identity import CREATOR_NAME, SYSTEM_NAME
from app.services.capability import CapabilityResult


class Envelope(BaseModel):
    """Fixed fields carried by every JSON response."""

    success: bool
    system: str = SYSTEM_NAME
    creator: str = CREATOR_NAME
    timestamp: str
    error: Optional[str] = None

    model_config = ConfigDict(extra="allow")


def envelope(
    payload: Optional[Mapping[str, Any]] = None,
    *,
    success: bool = True,
    error: Optional[str] = None,
    **extra: Any,
) -> dict[str, Any]:
    """Wrap ``payload`` with the success flag, system/creator tags and a timestamp."""

    data: dict[str, Any] = dict(payload or {})
    data.update(extra)
    data["success"] = success
    if error is not None:
        data["error"] = error
    data["system"] = SYSTEM_NAME
    data["creator"] = CREATOR_NAME
    data["timestamp"] = datetime.now(timezone.utc).isoformat()
    return Envelope.model_validate(data).model_dump()


def capability_envelope(result: CapabilityResult, **extra: Any) -> dict[str, Any]:
    """Envelope for endpoints that return a capability result directly."""

    error = None if result.success else (result.error_message or "Service unavailable")
    return envelope(result.payload, success=result.success, error=error, **extra)
