"""
Conversation model - the caller-facing side of a generation request.

A conversation is a list of turns. Each turn is one of a closed set of
kinds (text, media, text+media, function call, function response); the
`kind` literal makes the union discriminated so turns also validate from
plain dicts.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from gemini_client.schema import FunctionDeclaration, GenerationConfig, SafetySetting, Tool


class Role(str, Enum):
    USER = "user"
    MODEL = "model"


class ModelVariant(str, Enum):
    """Well-known model names. `.variant` is the resource name the API expects."""
    GEMINI_2_0_FLASH = "gemini-2.0-flash"
    GEMINI_1_5_PRO = "gemini-1.5-pro"
    GEMINI_1_5_FLASH = "gemini-1.5-flash"
    GEMINI_1_0_PRO = "gemini-1.0-pro"
    TEXT_EMBEDDING_004 = "text-embedding-004"

    @property
    def variant(self) -> str:
        return f"models/{self.value}"


class TaskType(str, Enum):
    """What an embedding will be used for."""
    TASK_TYPE_UNSPECIFIED = "TASK_TYPE_UNSPECIFIED"
    RETRIEVAL_QUERY = "RETRIEVAL_QUERY"
    RETRIEVAL_DOCUMENT = "RETRIEVAL_DOCUMENT"
    SEMANTIC_SIMILARITY = "SEMANTIC_SIMILARITY"
    CLASSIFICATION = "CLASSIFICATION"
    CLUSTERING = "CLUSTERING"
    QUESTION_ANSWERING = "QUESTION_ANSWERING"
    FACT_VERIFICATION = "FACT_VERIFICATION"


# ─────────────────────────────────────────────────────────────────────
# TURNS
# ─────────────────────────────────────────────────────────────────────

class _Turn(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Optional[Role] = None


class MediaData(BaseModel):
    model_config = ConfigDict(frozen=True)

    mime_type: str
    data: str  # base64


class TextTurn(_Turn):
    kind: Literal["text"] = "text"
    text: str


class MediaTurn(_Turn):
    kind: Literal["media"] = "media"
    media: MediaData


class TextAndMediaTurn(_Turn):
    """Text followed by any number of media items, sent as one content."""
    kind: Literal["text_and_media"] = "text_and_media"
    text: str
    media: tuple[MediaData, ...] = ()


class FunctionCallTurn(_Turn):
    kind: Literal["function_call"] = "function_call"
    name: str
    args: dict[str, Any] = Field(default_factory=dict)


class FunctionResponseTurn(_Turn):
    kind: Literal["function_response"] = "function_response"
    name: str
    response: dict[str, Any] = Field(default_factory=dict)


Turn = Annotated[
    Union[TextTurn, MediaTurn, TextAndMediaTurn, FunctionCallTurn, FunctionResponseTurn],
    Field(discriminator="kind"),
]


def text_turn(role: Optional[Role], text: str) -> TextTurn:
    return TextTurn(role=role, text=text)


def media_turn(role: Optional[Role], mime_type: str, data: str) -> MediaTurn:
    return MediaTurn(role=role, media=MediaData(mime_type=mime_type, data=data))


# ─────────────────────────────────────────────────────────────────────
# GENERATIVE MODEL
# ─────────────────────────────────────────────────────────────────────

class GenerativeModel(BaseModel):
    """
    Everything needed for one generation call: model name, conversation,
    safety settings, generation config and optional function declarations.
    """
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_name: str
    contents: list[Turn] = Field(default_factory=list)
    safety_settings: list[SafetySetting] = Field(default_factory=list)
    generation_config: Optional[GenerationConfig] = None
    function_declarations: list[FunctionDeclaration] = Field(default_factory=list)

    @classmethod
    def for_variant(cls, variant: ModelVariant, **kwargs: Any) -> "GenerativeModel":
        return cls(model_name=variant.variant, **kwargs)

    @property
    def tools(self) -> Optional[list[Tool]]:
        if not self.function_declarations:
            return None
        return [Tool(function_declarations=list(self.function_declarations))]
