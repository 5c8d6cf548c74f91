"""
gemini-client - async client for the Gemini generative-AI API.

Conversation turns map to the wire schema in wire.py; streamed responses run
through pipeline.py; per-request usage and safety metadata are kept by the
ResponseCorrelator owned by GeminiClient.
"""

from .client import GeminiClient
from .codec import JsonCodec, PydanticCodec
from .content import (
    FunctionCallTurn,
    FunctionResponseTurn,
    GenerativeModel,
    MediaData,
    MediaTurn,
    ModelVariant,
    Role,
    TaskType,
    TextAndMediaTurn,
    TextTurn,
    Turn,
    media_turn,
    text_turn,
)
from .correlator import ResponseCorrelator
from .errors import GeminiError, MalformedResponse, TransportFailure, UnsupportedTurnKind
from .pipeline import GeneratedContent
from .schema import (
    FunctionDeclaration,
    GenerationConfig,
    HarmBlockThreshold,
    HarmCategory,
    HarmProbability,
    SafetyRating,
    SafetySetting,
    Schema,
    SchemaType,
    UsageMetadata,
)
from .transport import HttpxTransport, Transport

__all__ = [
    "GeminiClient",
    "JsonCodec",
    "PydanticCodec",
    "FunctionCallTurn",
    "FunctionResponseTurn",
    "GenerativeModel",
    "MediaData",
    "MediaTurn",
    "ModelVariant",
    "Role",
    "TaskType",
    "TextAndMediaTurn",
    "TextTurn",
    "Turn",
    "media_turn",
    "text_turn",
    "ResponseCorrelator",
    "GeminiError",
    "MalformedResponse",
    "TransportFailure",
    "UnsupportedTurnKind",
    "GeneratedContent",
    "FunctionDeclaration",
    "GenerationConfig",
    "HarmBlockThreshold",
    "HarmCategory",
    "HarmProbability",
    "SafetyRating",
    "SafetySetting",
    "Schema",
    "SchemaType",
    "UsageMetadata",
    "HttpxTransport",
    "Transport",
]
