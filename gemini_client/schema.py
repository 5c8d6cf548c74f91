"""
Wire schema for the Gemini REST API.

Pydantic models mirroring the provider's JSON shapes. Field names are
snake_case in Python and camelCase on the wire (alias generator); unknown
fields in responses are ignored and optional fields default, so a response
from a newer API revision still decodes.
"""

from enum import Enum
from typing import Any, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for every model that crosses the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# ─────────────────────────────────────────────────────────────────────
# SAFETY
# ─────────────────────────────────────────────────────────────────────

class HarmCategory(str, Enum):
    HARM_CATEGORY_HARASSMENT = "HARM_CATEGORY_HARASSMENT"
    HARM_CATEGORY_HATE_SPEECH = "HARM_CATEGORY_HATE_SPEECH"
    HARM_CATEGORY_SEXUALLY_EXPLICIT = "HARM_CATEGORY_SEXUALLY_EXPLICIT"
    HARM_CATEGORY_DANGEROUS_CONTENT = "HARM_CATEGORY_DANGEROUS_CONTENT"
    HARM_CATEGORY_UNSPECIFIED = "HARM_CATEGORY_UNSPECIFIED"
    HARM_CATEGORY_DEROGATORY = "HARM_CATEGORY_DEROGATORY"
    HARM_CATEGORY_TOXICITY = "HARM_CATEGORY_TOXICITY"
    HARM_CATEGORY_VIOLENCE = "HARM_CATEGORY_VIOLENCE"
    HARM_CATEGORY_SEXUAL = "HARM_CATEGORY_SEXUAL"
    HARM_CATEGORY_MEDICAL = "HARM_CATEGORY_MEDICAL"
    HARM_CATEGORY_DANGEROUS = "HARM_CATEGORY_DANGEROUS"


class HarmBlockThreshold(str, Enum):
    HARM_BLOCK_THRESHOLD_UNSPECIFIED = "HARM_BLOCK_THRESHOLD_UNSPECIFIED"
    BLOCK_LOW_AND_ABOVE = "BLOCK_LOW_AND_ABOVE"
    BLOCK_MEDIUM_AND_ABOVE = "BLOCK_MEDIUM_AND_ABOVE"
    BLOCK_ONLY_HIGH = "BLOCK_ONLY_HIGH"
    BLOCK_NONE = "BLOCK_NONE"


class HarmProbability(str, Enum):
    HARM_PROBABILITY_UNSPECIFIED = "HARM_PROBABILITY_UNSPECIFIED"
    NEGLIGIBLE = "NEGLIGIBLE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class SafetySetting(WireModel):
    """Per-request blocking threshold for one harm category."""
    category: HarmCategory
    threshold: HarmBlockThreshold


class TypedSafetyRating(NamedTuple):
    harm_category: HarmCategory
    probability: HarmProbability


class SafetyRating(WireModel):
    """
    Safety rating attached to a response candidate.

    Kept as plain strings so that categories added by the API later
    still decode; use to_typed() when the enum form is wanted.
    """
    category: str
    probability: str

    def to_typed(self) -> TypedSafetyRating:
        """Convert to enum values. Raises ValueError for unknown values."""
        return TypedSafetyRating(HarmCategory(self.category), HarmProbability(self.probability))


# ─────────────────────────────────────────────────────────────────────
# GENERATION CONFIG / RESPONSE SCHEMA / TOOLS
# ─────────────────────────────────────────────────────────────────────

class SchemaType(str, Enum):
    TYPE_UNSPECIFIED = "TYPE_UNSPECIFIED"
    STRING = "STRING"
    NUMBER = "NUMBER"
    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    ARRAY = "ARRAY"
    OBJECT = "OBJECT"


class Schema(WireModel):
    """Subset of OpenAPI schema accepted for response schemas and function parameters."""
    type: SchemaType
    format: Optional[str] = None
    description: Optional[str] = None
    nullable: Optional[bool] = None
    enum_: Optional[list[str]] = Field(default=None, alias="enum")
    max_items: Optional[str] = None
    min_items: Optional[str] = None
    properties: Optional[dict[str, "Schema"]] = None
    required: Optional[list[str]] = None
    items: Optional["Schema"] = None


class GenerationConfig(WireModel):
    stop_sequences: Optional[list[str]] = None
    response_mime_type: Optional[str] = None
    response_schema: Optional[Schema] = None
    max_output_tokens: Optional[int] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None


class FunctionDeclaration(WireModel):
    name: str
    description: Optional[str] = None
    parameters: Optional[Schema] = None


class Tool(WireModel):
    function_declarations: list[FunctionDeclaration]


# ─────────────────────────────────────────────────────────────────────
# CONTENT
# ─────────────────────────────────────────────────────────────────────

class InlineData(WireModel):
    mime_type: str
    data: str  # base64


class FunctionCall(WireModel):
    name: str
    args: dict[str, Any] = Field(default_factory=dict)


class FunctionResponse(WireModel):
    name: str
    response: dict[str, Any] = Field(default_factory=dict)


class Part(WireModel):
    """
    One part of a content. Holds at most one of the payload fields.

    Build parts through the constructors in wire.py, which only ever set a
    single field.
    """
    text: Optional[str] = None
    inline_data: Optional[InlineData] = None
    function_call: Optional[FunctionCall] = None
    function_response: Optional[FunctionResponse] = None


class WireContent(WireModel):
    role: Optional[str] = None
    parts: list[Part] = Field(default_factory=list)


# ─────────────────────────────────────────────────────────────────────
# GENERATE CONTENT
# ─────────────────────────────────────────────────────────────────────

class GenerateContentRequest(WireModel):
    # Required by countTokens, accepted by the other endpoints.
    model: str
    contents: list[WireContent]
    safety_settings: list[SafetySetting] = Field(default_factory=list)
    generation_config: Optional[GenerationConfig] = None
    tools: Optional[list[Tool]] = None


class UsageMetadata(WireModel):
    prompt_token_count: int = 0
    candidates_token_count: int = 0
    total_token_count: int = 0


class Candidate(WireModel):
    content: Optional[WireContent] = None
    finish_reason: Optional[str] = None
    index: int = 0
    safety_ratings: list[SafetyRating] = Field(default_factory=list)


class GenerateContentResponse(WireModel):
    usage_metadata: Optional[UsageMetadata] = None
    candidates: Optional[list[Candidate]] = None


# ─────────────────────────────────────────────────────────────────────
# MODELS / TOKENS / EMBEDDINGS
# ─────────────────────────────────────────────────────────────────────

class Model(WireModel):
    """Model metadata as returned by the models endpoints."""
    name: str
    base_model_id: Optional[str] = None
    version: Optional[str] = None
    display_name: Optional[str] = None
    description: Optional[str] = None
    input_token_limit: Optional[int] = None
    output_token_limit: Optional[int] = None
    supported_generation_methods: list[str] = Field(default_factory=list)
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None


class ModelList(WireModel):
    models: list[Model] = Field(default_factory=list)


class CountTokensRequest(WireModel):
    generate_content_request: GenerateContentRequest


class CountTokensResponse(WireModel):
    total_tokens: Optional[int] = None


class EmbedContentRequest(WireModel):
    model: str
    content: WireContent
    task_type: Optional[str] = None
    title: Optional[str] = None
    output_dimensionality: Optional[int] = None


class BatchEmbedContentsRequest(WireModel):
    requests: list[EmbedContentRequest]


class ContentEmbedding(WireModel):
    values: list[float] = Field(default_factory=list)


class BatchEmbedContentsResponse(WireModel):
    embeddings: Optional[list[ContentEmbedding]] = None
