"""
Streaming pipeline - server-sent events to GeneratedContent units.

One output unit per data event, in arrival order. The correlator is updated
before each unit is handed to the consumer, so metadata looked up right
after receiving a unit covers at least that unit.
"""

import logging
from typing import AsyncGenerator, AsyncIterator
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from gemini_client import wire
from gemini_client.codec import JsonCodec
from gemini_client.config import STREAM_LINE_PREFIX_LENGTH
from gemini_client.correlator import ResponseCorrelator
from gemini_client.errors import MalformedResponse

logger = logging.getLogger(__name__)


class GeneratedContent(BaseModel):
    """
    Text produced by one call (or one stream event).

    `id` identifies the logical request; use it with
    GeminiClient.usage_metadata() and GeminiClient.safety_ratings().
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    text: str


def is_data_line(line: str) -> bool:
    """Keep-alives and empty frames are no longer than the event prefix."""
    return len(line) > STREAM_LINE_PREFIX_LENGTH


async def stream_generated_content(
    request_id: UUID,
    lines: AsyncIterator[str],
    codec: JsonCodec,
    correlator: ResponseCorrelator,
) -> AsyncGenerator[GeneratedContent, None]:
    """
    Decode a line stream into GeneratedContent units.

    Single-pass and pull-driven: a line is only read when the consumer asks
    for the next unit. Closing this generator closes `lines`, which releases
    the HTTP response.

    Raises:
        MalformedResponse: on the first event that fails to decode; the
            offending line is attached and no further units are produced.
    """
    events = 0
    try:
        async for line in lines:
            if not is_data_line(line):
                continue
            try:
                response, text = wire.decode(line[STREAM_LINE_PREFIX_LENGTH:], codec)
            except MalformedResponse as e:
                logger.error("Aborting stream %s on event %d", request_id, events + 1)
                raise MalformedResponse("Unexpected line", line) from e

            # each event is a complete snapshot and replaces the previous one
            correlator.put(request_id, response)
            events += 1
            yield GeneratedContent(id=request_id, text=text)
    finally:
        aclose = getattr(lines, "aclose", None)
        if aclose is not None:
            await aclose()
        logger.debug("Stream %s closed after %d events", request_id, events)
