"""
HTTP routes for the relay API.
"""

from __future__ import annotations

import logging

import requests
from fastapi import APIRouter, BackgroundTasks, Depends
from fastapi.responses import JSONResponse

from relay.completions import OpenAIChatClient
from relay.config import Settings, get_settings
from relay.confirmation import contains_confirmation_phrase
from relay.dependencies import (
    get_chat_client,
    get_fcm_client,
    get_onesignal_client,
    get_prediction_client,
    get_user_store,
)
from relay.errors import MissingCredentialError, UpstreamError
from relay.notifications import notify_purchase_confirmed
from relay.predictions import ReplicateClient
from relay.push import PushClient, PushNotification
from relay.schemas import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    HealthResponse,
    ImageEditRequest,
    NotifyRequest,
    NotifyResponse,
    PredictionResponse,
    PushRequest,
    PushResponse,
)
from relay.users import UserStore

logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_API_KEY_REPLY = "Error: Falta la API key"
UPSTREAM_ERROR_REPLY = "Error OpenAI: "
TRANSPORT_ERROR_REPLY = "Error con el servidor de IA"
MISSING_TOKEN_ERROR = "Falta el token del usuario"
USER_WITHOUT_TOKEN_ERROR = "Este usuario no tiene pushToken"
GENERIC_PROXY_ERROR = "Error interno"


def _chat_error(text: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"respuesta": text})


@router.post("/chat", response_model=ChatResponse, responses={500: {"model": ChatResponse}})
def chat(
    payload: ChatRequest,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_settings),
    chat_client: OpenAIChatClient = Depends(get_chat_client),
    users: UserStore = Depends(get_user_store),
    fcm: PushClient = Depends(get_fcm_client),
):
    """
    Relay a message to the LLM. If the reply confirms a purchase and a uid was
    given, the shop owner is notified after the response is sent.
    """
    if not settings.openai_api_key:
        logger.error("OPENAI_API_KEY is not configured")
        return _chat_error(MISSING_API_KEY_REPLY)

    logger.info("[chat] Sending message to OpenAI: %s", payload.message)
    try:
        reply = chat_client.reply(payload.message)
    except MissingCredentialError:
        logger.error("OPENAI_API_KEY is not configured")
        return _chat_error(MISSING_API_KEY_REPLY)
    except UpstreamError as exc:
        logger.error("OpenAI error (%s): %s", exc.status_code, exc.message)
        return _chat_error(UPSTREAM_ERROR_REPLY + exc.message)
    except (requests.RequestException, ValueError):
        logger.exception("Error contacting OpenAI")
        return _chat_error(TRANSPORT_ERROR_REPLY)

    logger.info("[chat] Reply ready: %s", reply)

    if payload.user_id and contains_confirmation_phrase(reply):
        background_tasks.add_task(
            notify_purchase_confirmed, payload.user_id, users=users, push=fcm
        )

    return ChatResponse(reply=reply)


@router.post(
    "/enviar-push",
    response_model=PushResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def send_push(payload: PushRequest, fcm: PushClient = Depends(get_fcm_client)):
    if not payload.token:
        return JSONResponse(status_code=400, content={"error": MISSING_TOKEN_ERROR})

    notification = PushNotification(
        title=payload.title, body=payload.message, target_token=payload.token
    )
    try:
        response = fcm.send(notification)
    except Exception as exc:
        logger.exception("[FCM] Error sending push")
        return JSONResponse(status_code=500, content={"error": str(exc)})

    logger.info("[FCM] Notification sent: %s", response)
    return PushResponse(success=True, response=response)


@router.post(
    "/notificar",
    response_model=NotifyResponse,
    response_model_exclude_none=True,
    responses={400: {"model": NotifyResponse}, 500: {"model": NotifyResponse}},
)
def notify_user(
    payload: NotifyRequest,
    users: UserStore = Depends(get_user_store),
    onesignal: PushClient = Depends(get_onesignal_client),
):
    """
    Send a notification through OneSignal to the device stored for `uid`.
    """
    try:
        user = users.get_user(payload.uid) if payload.uid else None
        token = user.push_token if user else None
        if not token:
            logger.warning("User %s has no pushToken", payload.uid)
            return JSONResponse(
                status_code=400,
                content={"ok": False, "error": USER_WITHOUT_TOKEN_ERROR},
            )

        onesignal.send(
            PushNotification(title=payload.title, body=payload.body, target_token=token)
        )
    except Exception as exc:
        logger.exception("[OneSignal] Error sending push")
        return JSONResponse(status_code=500, content={"ok": False, "error": str(exc)})

    return NotifyResponse(ok=True)


@router.post(
    "/replicate",
    response_model=PredictionResponse,
    responses={500: {"model": ErrorResponse}},
)
def create_image_edit(
    payload: ImageEditRequest,
    replicate: ReplicateClient = Depends(get_prediction_client),
):
    """
    Start a Replicate prediction and relay the initial prediction object.
    """
    try:
        prediction = replicate.create_prediction(payload.image, payload.prompt)
    except Exception:
        logger.exception("Error from Replicate proxy")
        return JSONResponse(status_code=500, content={"error": GENERIC_PROXY_ERROR})
    return PredictionResponse(prediction=prediction)


@router.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok")
