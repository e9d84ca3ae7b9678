"""Messaging service: conversations between employers and seekers."""

import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from src.api.transport import ApiClient, parse_or_raise, unwrap_results

logger = logging.getLogger(__name__)

BASE_PATH = "/messaging/conversations/"


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    conversation: int | None = None
    sender_id: int | None = None
    sender_type: str = ""
    message_type: Literal["text", "file", "system"] = "text"
    content: str = ""
    file_url: str | None = None
    file_name: str | None = None
    is_read: bool = False
    created_at: str = ""

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "Message":
        sender = raw.get("sender") or {}
        return cls(
            id=raw["id"],
            conversation=raw.get("conversation"),
            sender_id=sender.get("id") if isinstance(sender, dict) else sender,
            sender_type=(sender.get("user_type") if isinstance(sender, dict) else None) or "",
            message_type=raw.get("message_type") or "text",
            content=raw.get("content") or "",
            file_url=raw.get("file_url"),
            file_name=raw.get("file_name"),
            is_read=bool(raw.get("is_read")),
            created_at=raw.get("created_at") or "",
        )


class Conversation(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    job_title: str | None = None
    last_message_at: str = ""
    last_message_preview: str = ""
    unread_count: int = 0
    is_active: bool = True

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "Conversation":
        job = raw.get("job") or {}
        return cls(
            id=raw["id"],
            job_title=job.get("title") if isinstance(job, dict) else None,
            last_message_at=raw.get("last_message_at") or "",
            last_message_preview=raw.get("last_message_preview") or "",
            unread_count=int(raw.get("unread_count") or 0),
            is_active=bool(raw.get("is_active", True)),
        )


class MessagingService:
    """REST wrapper for the messaging endpoints."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def get_conversations(self) -> list[Conversation]:
        data = await self._api.get(BASE_PATH)
        return parse_or_raise(
            lambda d: [Conversation.from_api(c) for c in unwrap_results(d)], data, "conversation list",
        )

    async def get_conversation(self, conversation_id: int) -> Conversation:
        data = await self._api.get(f"{BASE_PATH}{conversation_id}/")
        return parse_or_raise(Conversation.from_api, data, "conversation")

    async def get_messages(self, conversation_id: int) -> list[Message]:
        data = await self._api.get(f"{BASE_PATH}{conversation_id}/messages/")
        return parse_or_raise(
            lambda d: [Message.from_api(m) for m in unwrap_results(d)], data, "message list",
        )

    async def send_message(
        self,
        conversation_id: int,
        content: str,
        *,
        file_url: str | None = None,
        file_name: str | None = None,
    ) -> Message:
        if not content.strip() and not file_url:
            msg = "message must have content or a file"
            raise ValueError(msg)
        body: dict[str, Any] = {
            "content": content,
            "message_type": "file" if file_url else "text",
        }
        if file_url:
            body["file_url"] = file_url
            body["file_name"] = file_name
        data = await self._api.post(f"{BASE_PATH}{conversation_id}/send_message/", json=body)
        return parse_or_raise(Message.from_api, data, "message")

    async def start_conversation(
        self,
        recipient_id: int,
        initial_message: str,
        job_id: int | None = None,
    ) -> Conversation:
        data = await self._api.post(
            f"{BASE_PATH}start/",
            json={"recipient_id": recipient_id, "job_id": job_id, "initial_message": initial_message},
        )
        return parse_or_raise(Conversation.from_api, data, "conversation")

    async def get_or_create_conversation(
        self,
        employer_id: int,
        job_id: int | None = None,
        application_id: int | None = None,
    ) -> Conversation:
        data = await self._api.post(
            f"{BASE_PATH}get_or_create/",
            json={"employer_id": employer_id, "job_id": job_id, "job_application_id": application_id},
        )
        return parse_or_raise(Conversation.from_api, data, "conversation")

    async def mark_as_read(self, conversation_id: int) -> None:
        await self._api.post(f"{BASE_PATH}{conversation_id}/mark_read/")

    async def get_unread_count(self) -> int:
        data = await self._api.get(f"{BASE_PATH}unread_count/")
        return int(data.get("count") or 0) if isinstance(data, dict) else 0
