"""
Client for the Replicate prediction-creation API.

Only the creation call is made; the returned prediction is usually still
"starting" and callers poll Replicate themselves if they need the output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import requests

from relay.errors import MissingCredentialError


@dataclass
class ReplicateClient:
    api_token: Optional[str]
    version: str = "e3d8c079a7424ad2bfa31bb6d56a5eb2"
    api_url: str = "https://api.replicate.com/v1/predictions"
    timeout: Optional[float] = None

    def __post_init__(self):
        self._session = requests.Session()

    def create_prediction(self, image: Any, prompt: Any) -> Any:
        """Returns the upstream JSON body unmodified, whatever its status."""
        if not self.api_token:
            raise MissingCredentialError("REPLICATE_API_TOKEN")

        response = self._session.post(
            self.api_url,
            headers={
                "Authorization": f"Token {self.api_token}",
                "Content-Type": "application/json",
            },
            json={"version": self.version, "input": {"image": image, "prompt": prompt}},
            timeout=self.timeout,
        )
        return response.json()
