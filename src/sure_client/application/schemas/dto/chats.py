# Copyright (c)
# SPDX-License-Identifier: MIT
"""AI chat DTOs (Application Layer).

Purpose:
    Wire models for ``/api/v1/chats``: chat summaries and details, messages
    (with any tool calls the assistant made), and the retry acknowledgement.

Layer: application/schemas/dto
"""

from __future__ import annotations

from uuid import UUID

from pydantic import Field

from sure_client.application.schemas.dto.base import (
    BaseDTO,
    OptionalWireInstant,
    Paginated,
    Pagination,
    ResponseDTO,
    WireInstant,
)
from sure_client.domain.enums.sure import AiResponseStatus, MessageRole, MessageType
from sure_client.types import JsonValue

__all__ = [
    "ChatDetail",
    "ChatPage",
    "ChatSummary",
    "CreateChatData",
    "CreateMessageData",
    "Message",
    "MessageResponse",
    "RetryResponse",
    "ToolCall",
    "UpdateChatData",
]


class ToolCall(ResponseDTO):
    """A function call the assistant issued while answering."""

    id: UUID
    function_name: str
    function_arguments: JsonValue
    function_result: JsonValue | None = None
    created_at: WireInstant


class Message(ResponseDTO):
    id: UUID
    message_type: MessageType = Field(alias="type")
    role: MessageRole
    content: str
    model: str | None = None
    created_at: WireInstant
    updated_at: WireInstant
    tool_calls: list[ToolCall] | None = None


class MessageResponse(Message):
    """A freshly posted message plus the status of the assistant's reply."""

    chat_id: UUID
    ai_response_status: AiResponseStatus | None = None
    ai_response_message: str | None = None


class _ChatBase(ResponseDTO):
    id: UUID
    title: str
    error: str | None = None
    created_at: WireInstant
    updated_at: WireInstant


class ChatSummary(_ChatBase):
    message_count: int = 0
    last_message_at: OptionalWireInstant = None


class ChatDetail(_ChatBase):
    messages: list[Message] = []
    pagination: Pagination | None = None


class ChatPage(Paginated):
    chats: list[ChatSummary]


class RetryResponse(ResponseDTO):
    message: str
    message_id: UUID


class CreateChatData(BaseDTO):
    """Payload for ``POST /api/v1/chats``; ``message`` seeds the conversation."""

    title: str
    message: str | None = None
    model: str | None = None


class UpdateChatData(BaseDTO):
    title: str


class CreateMessageData(BaseDTO):
    content: str
    model: str | None = None
