from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    message: Optional[str] = Field(
        default=None, description="User message for the chatbot."
    )


class ChatResponse(BaseModel):
    reply: str = Field(..., description="Chatbot-generated response.")


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Short, user-facing error summary.")
    details: Optional[str] = Field(
        default=None, description="Diagnostic text from the failing dependency."
    )
