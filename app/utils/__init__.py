"""Utility helpers for the Bera AI backend."""

from .security import sign_acrcloud_request, verify_shared_secret

__all__ = [
    "sign_acrcloud_request",
    "verify_shared_secret",
]
