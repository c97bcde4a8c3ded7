"""
Pydantic schemas for the relay API.

Wire names follow the Spanish field names the web client already sends
(`mensaje`, `uid`, `titulo`, `respuesta`); Python code uses the English
attribute names.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class _AliasedModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ChatRequest(_AliasedModel):
    message: str = Field(..., alias="mensaje")
    user_id: Optional[str] = Field(default=None, alias="uid")


class ChatResponse(_AliasedModel):
    reply: str = Field(..., alias="respuesta")


class PushRequest(_AliasedModel):
    token: Optional[str] = None
    title: Optional[str] = Field(default=None, alias="titulo")
    message: Optional[str] = Field(default=None, alias="mensaje")


class PushResponse(BaseModel):
    success: Literal[True] = True
    response: Any = None


class NotifyRequest(BaseModel):
    title: Optional[str] = None
    body: Optional[str] = None
    uid: Optional[str] = None


class NotifyResponse(BaseModel):
    ok: bool
    error: Optional[str] = None


class ImageEditRequest(BaseModel):
    # Forwarded to Replicate as-is.
    image: Any = None
    prompt: Any = None


class PredictionResponse(BaseModel):
    prediction: Any


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: Literal["ok"]
