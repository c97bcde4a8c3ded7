"""
Detection of purchase-confirmation phrases in assistant replies.
"""

from __future__ import annotations

from typing import Optional

# Lowercase; matched as substrings of the lowercased reply.
CONFIRMATION_PHRASES = (
    "pedido confirmado",
    "te esperamos mañana",
    "compra confirmada",
    "te esperamos",
    "queda registrado",
    "perfecto, anotado",
    "te lo guardamos",
    "te lo reservo",
    "te esperamos pronto",
    "ya está listo tu pedido",
    "queda agendado",
    "gracias por tu compra",
)


def contains_confirmation_phrase(text: Optional[str]) -> bool:
    """Return True if `text` contains any confirmation phrase, ignoring case."""
    if not text:
        return False
    lowered = text.lower()
    return any(phrase in lowered for phrase in CONFIRMATION_PHRASES)
