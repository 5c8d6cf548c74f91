"""
Wire mapper - pure translation between the conversation model and the
Gemini wire schema.

Encoding: one WireContent per turn, order preserved. Decoding: the unit of
output is candidates[0].content.parts[0].text; anything short of that is a
MalformedResponse carrying the raw payload.
"""

import logging
from typing import Sequence

from gemini_client.codec import JsonCodec
from gemini_client.content import (
    FunctionCallTurn,
    FunctionResponseTurn,
    GenerativeModel,
    MediaData,
    MediaTurn,
    TextAndMediaTurn,
    TextTurn,
    Turn,
)
from gemini_client.errors import MalformedResponse, UnsupportedTurnKind
from gemini_client.schema import (
    FunctionCall,
    FunctionResponse,
    GenerateContentRequest,
    GenerateContentResponse,
    InlineData,
    Part,
    WireContent,
)

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────
# PART CONSTRUCTORS - each sets exactly one payload field
# ─────────────────────────────────────────────────────────────────────

def text_part(text: str) -> Part:
    return Part(text=text)


def inline_part(media: MediaData) -> Part:
    return Part(inline_data=InlineData(mime_type=media.mime_type, data=media.data))


def function_call_part(name: str, args: dict) -> Part:
    return Part(function_call=FunctionCall(name=name, args=args))


def function_response_part(name: str, response: dict) -> Part:
    return Part(function_response=FunctionResponse(name=name, response=response))


# ─────────────────────────────────────────────────────────────────────
# ENCODING
# ─────────────────────────────────────────────────────────────────────

def encode_turn(turn: Turn) -> WireContent:
    """Map a single turn to its wire content."""
    if isinstance(turn, TextTurn):
        parts = [text_part(turn.text)]
    elif isinstance(turn, MediaTurn):
        parts = [inline_part(turn.media)]
    elif isinstance(turn, TextAndMediaTurn):
        parts = [text_part(turn.text)] + [inline_part(m) for m in turn.media]
    elif isinstance(turn, FunctionCallTurn):
        parts = [function_call_part(turn.name, turn.args)]
    elif isinstance(turn, FunctionResponseTurn):
        parts = [function_response_part(turn.name, turn.response)]
    else:
        raise UnsupportedTurnKind(f"Unexpected content: {turn!r}")

    role = turn.role.value if turn.role is not None else None
    return WireContent(role=role, parts=parts)


def encode_contents(turns: Sequence[Turn]) -> list[WireContent]:
    return [encode_turn(turn) for turn in turns]


def encode_request(model: GenerativeModel) -> GenerateContentRequest:
    """Build the generateContent request body for a model."""
    logger.debug("Encoding %d turns for %s", len(model.contents), model.model_name)
    return GenerateContentRequest(
        model=model.model_name,
        contents=encode_contents(model.contents),
        safety_settings=list(model.safety_settings),
        generation_config=model.generation_config,
        tools=model.tools,
    )


# ─────────────────────────────────────────────────────────────────────
# DECODING
# ─────────────────────────────────────────────────────────────────────

def decode_response(raw: str, codec: JsonCodec) -> GenerateContentResponse:
    """Parse a generateContent body (or one stream event) into a response."""
    try:
        return codec.decode(raw, GenerateContentResponse)
    except ValueError as e:
        raise MalformedResponse("Unexpected body", raw) from e


def output_text(response: GenerateContentResponse, raw: str) -> str:
    """
    Extract the output unit from a decoded response.

    Raises:
        MalformedResponse: no candidates, no parts, or a first part without text
    """
    if not response.candidates:
        raise MalformedResponse("Response has no candidates", raw)
    content = response.candidates[0].content
    if content is None or not content.parts:
        raise MalformedResponse("First candidate has no content parts", raw)
    text = content.parts[0].text
    if text is None:
        raise MalformedResponse("First part has no text", raw)
    return text


def decode(raw: str, codec: JsonCodec) -> tuple[GenerateContentResponse, str]:
    """Decode a body and extract its text in one step."""
    response = decode_response(raw, codec)
    return response, output_text(response, raw)
