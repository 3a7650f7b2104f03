"""Security helpers for shared-secret checks and request signing."""

from __future__ import annotations

import base64
import hashlib
import hmac
from typing import Optional

from pydantic import SecretStr


def verify_shared_secret(provided: Optional[str], expected: SecretStr | None) -> bool:
    """Constant-time comparison of a presented token against the configured secret."""

    if expected is None or not provided:
        return False

    expected_value = expected.get_secret_value()
    if not expected_value:
        return False

    return hmac.compare_digest(
        provided.encode("utf-8"),
        expected_value.encode("utf-8"),
    )


def sign_acrcloud_request(
    *,
    access_key: str,
    secret_key: str,
    timestamp: str,
    http_method: str = "POST",
    http_uri: str = "/v1/identify",
    data_type: str = "audio",
    signature_version: str = "1",
) -> str:
    """Return the base64 HMAC-SHA1 signature ACRCloud expects on identify calls."""

    string_to_sign = "\n".join(
        (http_method, http_uri, access_key, data_type, signature_version, timestamp)
    )
    digest = hmac.new(
        secret_key.encode("utf-8"),
        string_to_sign.encode("utf-8"),
        hashlib.sha1,
    ).digest()
    return base64.b64encode(digest).decode("ascii")


__all__ = ["sign_acrcloud_request", "verify_shared_secret"]
