"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

from relay.completions import OpenAIChatClient
from relay.config import get_settings
from relay.predictions import ReplicateClient
from relay.push import FcmPushClient, InMemoryPushClient, OneSignalClient, PushClient
from relay.users import FirestoreUserStore, InMemoryUserStore, UserStore

_user_store: UserStore | None = None
_fcm_client: PushClient | None = None
_onesignal_client: PushClient | None = None
_chat_client: OpenAIChatClient | None = None
_prediction_client: ReplicateClient | None = None


def get_user_store() -> UserStore:
    """
    Return a singleton user store shared by all requests.
    """
    global _user_store
    if _user_store:
        return _user_store

    settings = get_settings()
    if settings.use_in_memory_backends:
        _user_store = InMemoryUserStore()
    else:
        _user_store = FirestoreUserStore(collection=settings.users_collection)
    return _user_store


def get_fcm_client() -> PushClient:
    global _fcm_client
    if _fcm_client:
        return _fcm_client

    if get_settings().use_in_memory_backends:
        _fcm_client = InMemoryPushClient()
    else:
        _fcm_client = FcmPushClient()
    return _fcm_client


def get_onesignal_client() -> PushClient:
    global _onesignal_client
    if _onesignal_client:
        return _onesignal_client

    settings = get_settings()
    if settings.use_in_memory_backends:
        _onesignal_client = InMemoryPushClient(response={"id": "in-memory"})
    else:
        _onesignal_client = OneSignalClient(
            api_key=settings.onesignal_api_key,
            app_id=settings.onesignal_app_id,
            api_url=settings.onesignal_api_url,
            timeout=settings.upstream_timeout_seconds,
        )
    return _onesignal_client


def get_chat_client() -> OpenAIChatClient:
    global _chat_client
    if _chat_client:
        return _chat_client

    settings = get_settings()
    _chat_client = OpenAIChatClient(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        api_url=settings.openai_api_url,
        timeout=settings.upstream_timeout_seconds,
    )
    return _chat_client


def get_prediction_client() -> ReplicateClient:
    global _prediction_client
    if _prediction_client:
        return _prediction_client

    settings = get_settings()
    _prediction_client = ReplicateClient(
        api_token=settings.replicate_api_token,
        version=settings.replicate_model_version,
        api_url=settings.replicate_api_url,
        timeout=settings.upstream_timeout_seconds,
    )
    return _prediction_client


def warm_up() -> None:
    """Create every client before the first request is served."""
    get_user_store()
    get_fcm_client()
    get_onesignal_client()
    get_chat_client()
    get_prediction_client()


def reset_clients() -> None:
    """Drop all singletons (useful in tests)."""
    global _user_store, _fcm_client, _onesignal_client, _chat_client, _prediction_client
    _user_store = None
    _fcm_client = None
    _onesignal_client = None
    _chat_client = None
    _prediction_client = None
