"""
Read-only access to user documents in Firestore, plus an in-memory test
implementation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Protocol

import firebase_admin
from firebase_admin import credentials, firestore

# Plans whose owners get purchase-confirmation notifications.
PRIVILEGED_PLANS = frozenset({"pro", "experto"})


def init_firebase_app() -> firebase_admin.App:
    """
    Initialize the default Firebase app once, using Application Default
    Credentials (GOOGLE_APPLICATION_CREDENTIALS or the runtime service account).
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        return firebase_admin.initialize_app(credentials.ApplicationDefault())


@dataclass
class UserRecord:
    uid: str
    push_token: Optional[str] = None
    plan: Optional[str] = None

    @classmethod
    def from_document(cls, uid: str, data: dict) -> "UserRecord":
        return cls(uid=uid, push_token=data.get("pushToken"), plan=data.get("plan"))

    @property
    def is_notification_eligible(self) -> bool:
        return bool(self.push_token) and self.plan in PRIVILEGED_PLANS


class UserStore(Protocol):
    """Interface for looking up user records by id."""

    def get_user(self, uid: str) -> Optional[UserRecord]:
        ...


class FirestoreUserStore:
    """User lookups against a Firestore collection keyed by user id."""

    def __init__(self, collection: str = "usuarios", client=None):
        self.collection = collection
        self._client = client

    @property
    def client(self):
        # Credentials are resolved on first lookup, not at server startup.
        if self._client is None:
            self._client = firestore.client(init_firebase_app())
        return self._client

    def get_user(self, uid: str) -> Optional[UserRecord]:
        snapshot = self.client.collection(self.collection).document(uid).get()
        data = snapshot.to_dict() if snapshot.exists else None
        if not data:
            return None
        return UserRecord.from_document(uid, data)


class InMemoryUserStore:
    """Simple in-memory user store for development and tests."""

    def __init__(self):
        self.users: Dict[str, UserRecord] = {}

    def add_user(
        self, uid: str, push_token: Optional[str] = None, plan: Optional[str] = None
    ) -> UserRecord:
        record = UserRecord(uid=uid, push_token=push_token, plan=plan)
        self.users[uid] = record
        return record

    def get_user(self, uid: str) -> Optional[UserRecord]:
        return self.users.get(uid)

    def reset(self) -> None:
        """Clear all stored users (useful in tests)."""
        self.users.clear()
