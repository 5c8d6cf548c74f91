"""
GeminiClient - entry point for all interactions with the Gemini API.

Generation calls record their latest response in a ResponseCorrelator keyed
by a per-call request id, so usage metadata and safety ratings stay
queryable after (and during) the call. Call close()/aclose() to drop that
state.

Usage:
    async with GeminiClient(api_key="...") as client:
        result = await client.generate(model)
        print(result.text, client.usage_metadata(result.id))

        async with aclosing(client.generate_stream(model)) as stream:
            async for chunk in stream:
                print(chunk.text, client.usage_metadata(chunk.id))
"""

import logging
import uuid
from typing import AsyncIterator, Optional, Union
from uuid import UUID

from gemini_client import config, wire
from gemini_client.codec import JsonCodec, PydanticCodec
from gemini_client.content import GenerativeModel, ModelVariant, TaskType, TextTurn
from gemini_client.correlator import ResponseCorrelator
from gemini_client.errors import MalformedResponse
from gemini_client.pipeline import GeneratedContent, stream_generated_content
from gemini_client.schema import (
    BatchEmbedContentsRequest,
    BatchEmbedContentsResponse,
    ContentEmbedding,
    CountTokensRequest,
    CountTokensResponse,
    EmbedContentRequest,
    Model,
    ModelList,
    SafetyRating,
    UsageMetadata,
)
from gemini_client.transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)


class GeminiClient:
    """
    Gemini API client.

    Design decisions:
    - Injected collaborators: codec, transport and correlator can all be
      replaced (tests use isolated instances)
    - No retries: every failure propagates to the caller
    - Async native: generate() is a coroutine, generate_stream() an async
      iterator; wrap with asyncio.create_task / asyncio.wait_for as needed
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        codec: Optional[JsonCodec] = None,
        transport: Optional[Transport] = None,
        correlator: Optional[ResponseCorrelator] = None,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ):
        """
        Args:
            api_key: Gemini API key. Falls back to GEMINI_API_KEY env var.
            codec: JSON codec (default: PydanticCodec)
            transport: HTTP transport (default: HttpxTransport)
            correlator: response store (default: a fresh ResponseCorrelator)
            base_url: API root (default from GEMINI_BASE_URL or the public endpoint)
            timeout_seconds: HTTP timeout for the default transport

        Raises:
            ValueError: If no transport is given and no API key is available
        """
        self._codec = codec or PydanticCodec()
        self._correlator = correlator if correlator is not None else ResponseCorrelator()
        self._base_url = (base_url or config.get_base_url()).rstrip("/")

        if transport is None:
            api_key = api_key or config.get_api_key()
            if not api_key:
                raise ValueError(
                    "Gemini API key required. "
                    "Provide api_key parameter or set GEMINI_API_KEY environment variable."
                )
            if timeout_seconds is None:
                timeout_seconds = config.get_timeout_seconds()
            transport = HttpxTransport(api_key, timeout_seconds=timeout_seconds)
        self._transport = transport

    @property
    def correlator(self) -> ResponseCorrelator:
        return self._correlator

    def _url(self, resource: str, method: Optional[str] = None, query: str = "") -> str:
        url = f"{self._base_url}/{resource}"
        if method:
            url += f":{method}"
        if query:
            url += f"?{query}"
        return url

    def _prepare(self, model: GenerativeModel) -> tuple[UUID, str]:
        """Allocate a request id and serialize the request body."""
        request_id = uuid.uuid4()
        body = self._codec.encode(wire.encode_request(model))
        return request_id, body

    # ─────────────────────────────────────────────────────────────────
    # GENERATION
    # ─────────────────────────────────────────────────────────────────

    async def generate(self, model: GenerativeModel) -> GeneratedContent:
        """
        Generate a complete response.

        Raises:
            TransportFailure: on I/O errors or HTTP error status
            MalformedResponse: if the body has no candidate text
        """
        request_id, body = self._prepare(model)
        logger.info("generateContent %s (request %s)", model.model_name, request_id)

        raw = await self._transport.send_unary(
            "POST", self._url(model.model_name, "generateContent"), body
        )
        response, text = wire.decode(raw, self._codec)
        self._correlator.put(request_id, response)
        return GeneratedContent(id=request_id, text=text)

    def generate_stream(self, model: GenerativeModel) -> AsyncIterator[GeneratedContent]:
        """
        Stream a response as it arrives, one unit per server event.

        Returns immediately; the request is sent when the first unit is
        pulled. The iterator is single-pass. usage_metadata() and
        safety_ratings() reflect the latest event while the stream is open.
        """
        request_id, body = self._prepare(model)
        logger.info("streamGenerateContent %s (request %s)", model.model_name, request_id)

        lines = self._transport.send_streamed(
            self._url(model.model_name, "streamGenerateContent", "alt=sse"), body
        )
        return stream_generated_content(request_id, lines, self._codec, self._correlator)

    # ─────────────────────────────────────────────────────────────────
    # METADATA
    # ─────────────────────────────────────────────────────────────────

    def usage_metadata(self, request_id: UUID) -> Optional[UsageMetadata]:
        """Latest usage metadata for a request, or None if unknown."""
        response = self._correlator.get(request_id)
        if response is None:
            return None
        return response.usage_metadata

    def safety_ratings(self, request_id: UUID) -> list[SafetyRating]:
        """Latest safety ratings of all candidates for a request; empty if unknown."""
        response = self._correlator.get(request_id)
        if response is None or not response.candidates:
            return []
        return [
            rating
            for candidate in response.candidates
            for rating in candidate.safety_ratings
        ]

    # ─────────────────────────────────────────────────────────────────
    # MODELS / TOKENS / EMBEDDINGS
    # ─────────────────────────────────────────────────────────────────

    async def list_models(self) -> list[Model]:
        raw = await self._transport.send_unary("GET", self._url("models"))
        return self._decode(raw, ModelList).models

    async def get_model(self, model: Union[str, ModelVariant]) -> Model:
        """Get model information. String names must start with "models/"."""
        name = model.variant if isinstance(model, ModelVariant) else model
        raw = await self._transport.send_unary("GET", self._url(name))
        return self._decode(raw, Model)

    async def count_tokens(self, model: GenerativeModel) -> int:
        """Run the model's tokenizer over the request contents."""
        request = CountTokensRequest(generate_content_request=wire.encode_request(model))
        raw = await self._transport.send_unary(
            "POST", self._url(model.model_name, "countTokens"), self._codec.encode(request)
        )
        result = self._decode(raw, CountTokensResponse)
        if result.total_tokens is None:
            raise MalformedResponse("No token field in response", raw)
        return result.total_tokens

    async def embed_contents(
        self,
        model: GenerativeModel,
        task_type: Optional[TaskType] = None,
        title: Optional[str] = None,
        output_dimensionality: Optional[int] = None,
    ) -> list[ContentEmbedding]:
        """
        Embed each text turn of the model as one vector.

        Only text turns are accepted. `title` applies to RETRIEVAL_DOCUMENT only.
        """
        for turn in model.contents:
            if not isinstance(turn, TextTurn):
                raise ValueError(f"Only text turns can be embedded, got {turn.kind!r}")

        request = BatchEmbedContentsRequest(requests=[
            EmbedContentRequest(
                model=model.model_name,
                content=content,
                task_type=task_type.value if task_type is not None else None,
                title=title,
                output_dimensionality=output_dimensionality,
            )
            for content in wire.encode_contents(model.contents)
        ])
        raw = await self._transport.send_unary(
            "POST", self._url(model.model_name, "batchEmbedContents"), self._codec.encode(request)
        )
        result = self._decode(raw, BatchEmbedContentsResponse)
        if result.embeddings is None:
            raise MalformedResponse("No embeddings in response", raw)
        return result.embeddings

    def _decode(self, raw: str, shape):
        try:
            return self._codec.decode(raw, shape)
        except ValueError as e:
            raise MalformedResponse("Unexpected body", raw) from e

    # ─────────────────────────────────────────────────────────────────
    # LIFECYCLE
    # ─────────────────────────────────────────────────────────────────

    def close(self) -> None:
        """Clear the stored response metadata."""
        self._correlator.clear()

    async def aclose(self) -> None:
        """Clear stored metadata and close the transport."""
        self.close()
        await self._transport.aclose()

    async def __aenter__(self) -> "GeminiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
