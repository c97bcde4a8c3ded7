"""
Exceptions raised by the upstream clients.

Route handlers catch these at the HTTP boundary and map them to the JSON
error bodies each endpoint returns.
"""

from __future__ import annotations

from typing import Optional


class MissingCredentialError(Exception):
    """A required API credential is not configured."""

    def __init__(self, setting: str):
        super().__init__(f"{setting} is not configured")
        self.setting = setting


class UpstreamError(Exception):
    """A third-party API answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
