"""
Chat proxy orchestrator.

Turns a validated chat request into an upstream completion call and
runs the post-completion sequence: cleanup, moderation, cache write,
memory update, chunk progress, usage log. Serves chat, letter and
body-generation modes from one entry point.

Dependencies: httpx, lettercast.boundary.llm, lettercast.application.adapters, lettercast.core
System role: Request orchestration for POST /api/chat-with-daddy
"""

import json
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, AsyncIterator

import httpx

from lettercast.application.adapters.chunk_progress_store import ChunkProgressStore
from lettercast.application.adapters.memory_store import ConversationMemoryStore
from lettercast.application.adapters.response_cache import ResponseCache, make_cache_key
from lettercast.application.services.audit_service import AuditService
from lettercast.application.services.letter_chunk_service import LetterChunkService
from lettercast.boundary.llm.openai_client import OpenAIChatClient
from lettercast.boundary.llm.sse import DONE_SENTINEL, iter_sse_data
from lettercast.configs.upstream import UpstreamSettings
from lettercast.core.chunk_sequence import find_chunk, next_expected_chunk
from lettercast.core.conversation_memory import build_context, update_memory
from lettercast.core.exceptions import ChunkOrderViolation, UpstreamError, UpstreamNotConfiguredError
from lettercast.core.moderation import contains_denylisted, moderate
from lettercast.core.prompts import (
    DEFAULT_CHUNK_STYLE,
    build_chat_system_prompt,
    build_letter_system_prompt,
    extract_style_hint,
    render_letter_base_prompt,
)
from lettercast.core.text_cleanup import clean_reply
from lettercast.models.chat import ChatMessage, ChatReply, ChatRequest
from lettercast.models.letter import ChunkProgress, LetterChunk
from lettercast.models.memory import ConversationMemory
from lettercast.models.moderation import ContentType
from lettercast.models.streaming import PartialEvent, StreamErrorEvent, TerminalEvent
from lettercast.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


class ChatMode(str, Enum):
    """Operating mode of one request."""

    LETTER = "letter"
    BODY = "body_generation"
    CHAT = "chat"


@dataclass
class PreparedChat:
    """Everything resolved before the upstream call."""

    request: ChatRequest
    mode: ChatMode
    model: str
    stream: bool
    payload: dict[str, Any]
    conversation: list[ChatMessage]
    memory: ConversationMemory | None = None
    progress: ChunkProgress | None = None
    total_chunks: int = 0
    chunk_to_record: int | None = None
    cache_key: str | None = None
    started_at: float = field(default_factory=time.perf_counter)

    @property
    def session_id(self) -> str:
        return self.request.session_id

    @property
    def content_type(self) -> ContentType:
        return ContentType.TILE_BODY if self.mode is ChatMode.BODY else ContentType.CHAT_MESSAGE

    @property
    def operation_type(self) -> str:
        return "content_generation" if self.mode is ChatMode.BODY else "chat"

    def elapsed_ms(self) -> int:
        return int((time.perf_counter() - self.started_at) * 1000)


def _extract_reply(data: dict[str, Any]) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    return content if isinstance(content, str) else ""


def _extract_delta(parsed: dict[str, Any]) -> tuple[str, str | None]:
    choices = parsed.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return "", None
    choice = choices[0]
    delta = choice.get("delta")
    content = delta.get("content") if isinstance(delta, dict) else None
    return (content if isinstance(content, str) else ""), choice.get("finish_reason")


class ChatProxyService:
    """Orchestrates one chat proxy request."""

    def __init__(
        self,
        client: OpenAIChatClient,
        upstream_settings: UpstreamSettings,
        response_cache: ResponseCache,
        memory_store: ConversationMemoryStore,
        progress_store: ChunkProgressStore,
        letter_chunks: LetterChunkService,
        audit: AuditService,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            client: Upstream completion client
            upstream_settings: Model selection
            response_cache: Response cache for non-streaming chat
            memory_store: Per-session conversation memory
            progress_store: Per-session letter reading progress
            letter_chunks: Cached narrative letter loader
            audit: Usage and moderation audit sink
        """
        self.client = client
        self.upstream_settings = upstream_settings
        self.response_cache = response_cache
        self.memory_store = memory_store
        self.progress_store = progress_store
        self.letter_chunks = letter_chunks
        self.audit = audit

    async def prepare(self, request: ChatRequest) -> PreparedChat:
        """
        Resolve mode, enforce chunk order and assemble the upstream payload.

        Args:
            request: Validated chat request

        Returns:
            PreparedChat: Payload and state for complete() or open_stream()

        Raises:
            UpstreamNotConfiguredError: If no upstream API key is set
            ChunkOrderViolation: If a letter chunk is requested out of order
        """
        started_at = time.perf_counter()
        if not self.client.is_configured:
            raise UpstreamNotConfiguredError()

        cached_chunks: list[LetterChunk] = []
        if request.letter_chunks or request.use_custom_system_prompt:
            cached_chunks = await self.letter_chunks.load_chunks()
        collection = request.letter_chunks or cached_chunks

        conversation = [m for m in request.messages if m.role != "system"]
        progress: ChunkProgress | None = None
        total_chunks = 0
        chunk_to_record: int | None = None

        if collection:
            mode = ChatMode.LETTER
            total_chunks = len(cached_chunks) if cached_chunks else len(request.letter_chunks)
            progress = await self.progress_store.load(request.session_id)
            expected = next_expected_chunk(progress, total_chunks)

            requested = request.requested_chunk
            if requested is not None and requested != expected:
                logger.info(
                    "Rejected out-of-order chunk",
                    extra={"session_id": request.session_id, "expected_chunk": expected, "requested_chunk": requested},
                )
                raise ChunkOrderViolation(
                    expected,
                    requested,
                    progress.model_dump(by_alias=True) if progress else None,
                )

            if request.letter_chunks:
                chunk = request.letter_chunks[0]
                chunk_to_record = requested
            else:
                chunk = find_chunk(collection, expected)
                if chunk is None and expected <= len(collection):
                    chunk = collection[expected - 1]
                    logger.warning(
                        "Letter chunk number missing, selecting by position",
                        extra={
                            "session_id": request.session_id,
                            "expected_chunk": expected,
                            "selected_chunk": chunk.chunk_number,
                        },
                    )
                if chunk is not None:
                    chunk_to_record = expected

            style = (chunk.style_hint if chunk else None) or extract_style_hint(request.messages) or DEFAULT_CHUNK_STYLE
            if chunk is not None and not request.letter_chunks:
                conversation.append(ChatMessage(role="user", content=chunk.format_as_prompt(style)))

            base_prompt = request.system_prompt or render_letter_base_prompt(
                request.parent_type, request.child_name, request.child_age
            )
            system_prompt = build_letter_system_prompt(
                base_prompt, style, request.quotes, request.children_quotes
            )
        elif request.wants_body_generation:
            mode = ChatMode.BODY
            system_message = next((m for m in request.messages if m.role == "system"), None)
            system_prompt = system_message.content if system_message else self._chat_prompt(request)
        else:
            mode = ChatMode.CHAT
            system_prompt = self._chat_prompt(request)

        memory = await self.memory_store.load(request.session_id)
        context = build_context(memory, conversation)

        stream = request.stream is not False and mode is not ChatMode.BODY
        model = self.upstream_settings.body_model if mode is ChatMode.BODY else self.upstream_settings.chat_model

        messages = [{"role": "system", "content": system_prompt}]
        messages.extend(m.model_dump() for m in context)
        payload: dict[str, Any] = {"model": model, "messages": messages, "stream": stream}
        if request.temperature is not None:
            payload["temperature"] = request.temperature
        if request.max_tokens is not None:
            payload["max_tokens"] = request.max_tokens

        cache_key = None
        if not stream and mode is not ChatMode.LETTER:
            cache_key = make_cache_key(messages, model)

        logger.info(
            "Prepared chat request",
            extra={
                "session_id": request.session_id,
                "mode": mode.value,
                "model": model,
                "stream": stream,
                "context_messages": len(context),
            },
        )
        return PreparedChat(
            request=request,
            mode=mode,
            model=model,
            stream=stream,
            payload=payload,
            conversation=conversation,
            memory=memory,
            progress=progress,
            total_chunks=total_chunks,
            chunk_to_record=chunk_to_record,
            cache_key=cache_key,
            started_at=started_at,
        )

    @staticmethod
    def _chat_prompt(request: ChatRequest) -> str:
        return build_chat_system_prompt(
            request.parent_type,
            request.child_name,
            request.child_age,
            request.quotes,
            request.children_quotes,
        )

    async def complete(self, prepared: PreparedChat) -> ChatReply:
        """
        Serve a non-streaming request, from cache when possible.

        Args:
            prepared: Output of prepare()

        Returns:
            ChatReply: Final moderated reply and chunk progress

        Raises:
            UpstreamError: If the upstream call fails
        """
        if prepared.cache_key:
            cached = await self.response_cache.get(prepared.cache_key)
            if cached is not None:
                logger.info("Using cached LLM response", extra={"session_id": prepared.session_id})
                reply, progress = await self._finalize(prepared, cached.response, usage=None, from_cache=True)
                return ChatReply(reply=reply, chunk_progress=progress, cached=True, response_time_ms=0)

        try:
            data = await self.client.complete(prepared.payload)
        except UpstreamError as e:
            self._record_failure(prepared, e.body)
            raise

        usage = data.get("usage") if isinstance(data.get("usage"), dict) else None
        reply, progress = await self._finalize(prepared, _extract_reply(data), usage=usage)
        return ChatReply(reply=reply, chunk_progress=progress, response_time_ms=prepared.elapsed_ms())

    async def open_stream(self, prepared: PreparedChat) -> httpx.Response:
        """
        Open the upstream stream; errors surface before any event is sent.

        Raises:
            UpstreamError: If the upstream refuses the request
        """
        try:
            return await self.client.open_stream(prepared.payload)
        except UpstreamError as e:
            self._record_failure(prepared, e.body)
            raise

    async def stream_events(self, prepared: PreparedChat, response: httpx.Response) -> AsyncIterator[str]:
        """
        Transcode the upstream SSE stream into client events.

        Emits one partial event per delta with the cumulative cleaned
        reply and the cleaned text it gained, then runs the
        post-completion sequence once and emits the terminal event.
        Partials stop as soon as a delta or the cleaned reply contains a
        denylisted word. Closing the generator early skips the
        post-completion sequence.

        Args:
            prepared: Output of prepare()
            response: Open upstream response from open_stream()

        Yields:
            str: ``data: <json>\\n\\n`` frames
        """
        child_name = prepared.request.child_name
        buffer = ""
        sent = ""
        usage: dict[str, Any] | None = None
        withheld = False

        try:
            async for data in iter_sse_data(response.aiter_bytes()):
                if data == DONE_SENTINEL:
                    break
                try:
                    parsed = json.loads(data)
                except ValueError:
                    log_with_context(logger, logging.WARNING, "Skipping malformed stream payload", payload=data)
                    continue
                if not isinstance(parsed, dict):
                    log_with_context(logger, logging.WARNING, "Skipping non-object stream payload", payload=data)
                    continue

                if isinstance(parsed.get("usage"), dict):
                    usage = parsed["usage"]
                delta, finish_reason = _extract_delta(parsed)

                if delta:
                    buffer += delta
                    cleaned = clean_reply(buffer, child_name)
                    if not withheld and (contains_denylisted(delta) or contains_denylisted(cleaned)):
                        withheld = True
                        logger.warning("Withholding partial replies", extra={"session_id": prepared.session_id})
                    if not withheld:
                        # Chunk is what the cleaned reply gained; a rewrite sends ''
                        chunk = cleaned[len(sent):] if cleaned.startswith(sent) else ""
                        sent = cleaned
                        yield PartialEvent(chunk=chunk, reply=cleaned).to_sse()

                if finish_reason:
                    break
        except GeneratorExit:
            logger.info("Client disconnected mid-stream", extra={"session_id": prepared.session_id})
            raise
        except httpx.HTTPError as e:
            logger.error(
                "Upstream stream interrupted",
                extra={"session_id": prepared.session_id, "error_type": type(e).__name__, "error_msg": str(e)},
            )
            self._record_failure(prepared, str(e))
            yield StreamErrorEvent(error=f"Upstream stream interrupted: {e}").to_sse()
            return
        finally:
            await response.aclose()

        reply, progress = await self._finalize(prepared, buffer, usage=usage)
        yield TerminalEvent(reply=reply, chunk_progress=progress).to_sse()

    async def _finalize(
        self,
        prepared: PreparedChat,
        raw_reply: str,
        usage: dict[str, Any] | None,
        from_cache: bool = False,
    ) -> tuple[str, dict[str, int] | None]:
        session_id = prepared.session_id
        cleaned = clean_reply(raw_reply, prepared.request.child_name)

        verdict = moderate(cleaned, prepared.content_type)
        if not verdict.approved:
            logger.warning(
                "Content moderation flagged response",
                extra={"session_id": session_id, "reason": verdict.reason, "mode": prepared.mode.value},
            )
            self.audit.record_moderation(verdict, session_id)
        final_reply = verdict.moderated_content

        total_tokens = (usage or {}).get("total_tokens")
        if prepared.cache_key and not from_cache and isinstance(total_tokens, int) and verdict.approved:
            await self.response_cache.set(prepared.cache_key, final_reply, total_tokens)

        if not from_cache:
            self.audit.record_usage(
                model=prepared.model,
                operation_type=prepared.operation_type,
                session_id=session_id,
                response_time_ms=prepared.elapsed_ms(),
                success=True,
                tokens_prompt=(usage or {}).get("prompt_tokens") or 0,
                tokens_completion=(usage or {}).get("completion_tokens") or 0,
            )

        new_messages = list(prepared.conversation)
        if final_reply:
            new_messages.append(ChatMessage(role="assistant", content=final_reply))
        if new_messages:
            await self.memory_store.save(session_id, update_memory(prepared.memory, new_messages))

        if prepared.mode is ChatMode.LETTER and prepared.chunk_to_record is not None:
            saved = await self.progress_store.save(session_id, prepared.chunk_to_record, prepared.total_chunks)
            return final_reply, saved.to_view()
        if prepared.progress is not None:
            return final_reply, prepared.progress.to_view(prepared.total_chunks)
        return final_reply, None

    def _record_failure(self, prepared: PreparedChat, error_message: str) -> None:
        self.audit.record_usage(
            model=prepared.model,
            operation_type=prepared.operation_type,
            session_id=prepared.session_id,
            response_time_ms=prepared.elapsed_ms(),
            success=False,
            error_message=error_message[:1000],
        )
