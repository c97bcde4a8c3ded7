"""
Push notification providers: Firebase Cloud Messaging, OneSignal, and an
in-memory double for testing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

import requests
from firebase_admin import messaging

from relay.errors import MissingCredentialError, UpstreamError
from relay.users import init_firebase_app

logger = logging.getLogger(__name__)

# OneSignal headings/contents are keyed by language; only English is sent.
ONESIGNAL_LOCALE = "en"


@dataclass
class PushNotification:
    title: str
    body: str
    target_token: str


class PushClient(Protocol):
    """Sends a notification to a single device and returns the provider reply."""

    def send(self, notification: PushNotification) -> Any:
        ...


@dataclass
class InMemoryPushClient:
    """Test double that records every notification it is asked to send."""

    response: Any = "in-memory-message-id"
    sent: list[PushNotification] = field(default_factory=list)

    def send(self, notification: PushNotification) -> Any:
        self.sent.append(notification)
        return self.response

    def reset(self) -> None:
        self.sent.clear()


class FcmPushClient:
    """Firebase Cloud Messaging via the firebase_admin SDK."""

    def __init__(self, app=None):
        self._app = app

    def send(self, notification: PushNotification) -> str:
        if self._app is None:
            self._app = init_firebase_app()
        message = messaging.Message(
            notification=messaging.Notification(
                title=notification.title,
                body=notification.body,
            ),
            token=notification.target_token,
        )
        # Returns the message id assigned by FCM.
        return messaging.send(message, app=self._app)


@dataclass
class OneSignalClient:
    """
    OneSignal REST client addressing devices by player id.
    """

    api_key: Optional[str]
    app_id: Optional[str]
    api_url: str = "https://onesignal.com/api/v1/notifications"
    timeout: Optional[float] = None

    def __post_init__(self):
        self._session = requests.Session()

    def build_payload(self, notification: PushNotification) -> dict:
        return {
            "app_id": self.app_id,
            "include_player_ids": [notification.target_token],
            "headings": {ONESIGNAL_LOCALE: notification.title},
            "contents": {ONESIGNAL_LOCALE: notification.body},
        }

    def send(self, notification: PushNotification) -> dict:
        if not self.api_key:
            raise MissingCredentialError("ONESIGNAL_API_KEY")
        if not self.app_id:
            raise MissingCredentialError("ONESIGNAL_APP_ID")

        response = self._session.post(
            self.api_url,
            headers={
                "Authorization": f"Basic {self.api_key}",
                "Content-Type": "application/json",
            },
            json=self.build_payload(notification),
            timeout=self.timeout,
        )
        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError(
                f"OneSignal returned a non-JSON response ({response.status_code})",
                status_code=response.status_code,
            ) from exc

        # Per-recipient failures arrive as an "errors" array; logged as-is.
        logger.info("[OneSignal] Push sent: %s", payload.get("id") or payload.get("errors"))
        return payload
