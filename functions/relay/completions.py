"""
Client for the OpenAI chat completions API.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from relay.errors import MissingCredentialError, UpstreamError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "Sos una asistente virtual para un emprendimiento. Respondé consultas de "
    "productos, envíos, pagos, talles. Sé clara, amable y breve."
)
EMPTY_REPLY_PLACEHOLDER = "Sin respuesta"


def _extract_error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    return f"HTTP {response.status_code}"


def _first_choice_text(data: Any) -> Optional[str]:
    choices = data.get("choices") if isinstance(data, dict) else None
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None


@dataclass
class OpenAIChatClient:
    """Sends a single user message with the fixed system prompt."""

    api_key: Optional[str]
    model: str = "gpt-4o"
    api_url: str = "https://api.openai.com/v1/chat/completions"
    timeout: Optional[float] = None
    system_prompt: str = SYSTEM_PROMPT

    def __post_init__(self):
        self._session = requests.Session()

    def build_messages(self, message: str) -> list[dict]:
        return [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": message},
        ]

    def reply(self, message: str) -> str:
        """
        Returns the text of the first completion choice.

        Raises:
            MissingCredentialError: If no API key is configured.
            UpstreamError: If the API answers with a non-success status.
            requests.RequestException: On transport failures.
        """
        if not self.api_key:
            raise MissingCredentialError("OPENAI_API_KEY")

        response = self._session.post(
            self.api_url,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            json={"model": self.model, "messages": self.build_messages(message)},
            timeout=self.timeout,
        )
        if not response.ok:
            raise UpstreamError(
                _extract_error_message(response), status_code=response.status_code
            )

        return _first_choice_text(response.json()) or EMPTY_REPLY_PLACEHOLDER
