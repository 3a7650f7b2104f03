"""Shared result shape and HTTP plumbing for remote capability clients.

Every client in ``app.services`` performs one outbound call and reports the
outcome as a :class:`CapabilityResult`. Transport errors, timeouts, non-2xx
statuses and malformed bodies are raised internally as
:class:`CapabilityError` and converted at the client boundary, so callers never
see an exception from a capability.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Mapping

import httpx

from app.telemetry import observe_capability_call

logger = logging.getLogger(__name__)


class CapabilityError(RuntimeError):
    """Raised inside a capability client when the remote call cannot be used."""


@dataclass(frozen=True)
class CapabilityResult:
    """Uniform outcome returned by every capability client."""

    success: bool
    payload: Mapping[str, Any] = field(default_factory=dict)
    error_message: str | None = None

    @classmethod
    def ok(cls, **payload: Any) -> "CapabilityResult":
        return cls(success=True, payload=dict(payload))

    @classmethod
    def failed(cls, message: str, **payload: Any) -> "CapabilityResult":
        return cls(success=False, payload=dict(payload), error_message=message)

    def to_dict(self) -> dict[str, Any]:
        """Flatten into the JSON shape the capability endpoints return."""

        data: dict[str, Any] = {"success": self.success, **self.payload}
        if not self.success:
            data["error"] = self.error_message or "Service unavailable"
        return data


class CapabilityClient:
    """Base class for single-call HTTP capability clients."""

    capability: ClassVar[str] = "capability"
    unavailable_message: ClassVar[str] = "Service is currently unavailable"
    disabled_message: ClassVar[str] = "Service not configured"

    def __init__(
        self,
        *,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        return True

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Perform one bounded request and raise ``CapabilityError`` on any failure."""

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise CapabilityError(f"{self.capability} timed out after {self._timeout}s") from exc
        except httpx.HTTPStatusError as exc:
            raise CapabilityError(
                f"{self.capability} returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.RequestError as exc:
            raise CapabilityError(f"{self.capability} request failed: {exc}") from exc

        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        """Decode a JSON body, falling back to the raw text for non-JSON replies."""

        try:
            return response.json()
        except ValueError:
            return response.text

    def _succeeded(self, **payload: Any) -> CapabilityResult:
        observe_capability_call(self.capability, "success")
        return CapabilityResult.ok(**payload)

    def _failed(
        self,
        exc: Exception | None = None,
        *,
        message: str | None = None,
        **payload: Any,
    ) -> CapabilityResult:
        if exc is not None:
            logger.warning("Capability %s failed: %s", self.capability, exc)
        observe_capability_call(self.capability, "failure")
        return CapabilityResult.failed(message or self.unavailable_message, **payload)

    def _disabled(self) -> CapabilityResult:
        logger.debug("Capability %s skipped: not configured", self.capability)
        observe_capability_call(self.capability, "disabled")
        return CapabilityResult.failed(self.disabled_message)


__all__ = ["CapabilityClient", "CapabilityError", "CapabilityResult"]
