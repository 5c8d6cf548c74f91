"""Tests for the conversation model and caller-facing schema types."""

import pytest
from pydantic import ValidationError

from gemini_client.content import (
    GenerativeModel,
    MediaData,
    ModelVariant,
    Role,
    TextAndMediaTurn,
    TextTurn,
    media_turn,
    text_turn,
)
from gemini_client.schema import HarmCategory, HarmProbability, SafetyRating


class TestTurns:
    def test_text_turn_helper(self):
        turn = text_turn(Role.USER, "hi")
        assert turn.role == Role.USER
        assert turn.kind == "text"

    def test_media_turn_helper(self):
        turn = media_turn(None, "image/png", "AAAA")
        assert turn.role is None
        assert turn.media == MediaData(mime_type="image/png", data="AAAA")

    def test_role_from_string(self):
        assert TextTurn(role="model", text="x").role == Role.MODEL

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            TextTurn(role="system", text="x")

    def test_turns_are_immutable(self):
        turn = text_turn(Role.USER, "hi")
        with pytest.raises(ValidationError):
            turn.text = "changed"

    def test_media_keeps_insertion_order(self):
        media = [MediaData(mime_type="image/png", data=str(i)) for i in range(5)]
        turn = TextAndMediaTurn(role=Role.USER, text="x", media=media)
        assert [m.data for m in turn.media] == ["0", "1", "2", "3", "4"]

    def test_media_may_be_empty(self):
        assert TextAndMediaTurn(text="x").media == ()


class TestGenerativeModel:
    def test_for_variant(self):
        model = GenerativeModel.for_variant(ModelVariant.GEMINI_1_5_PRO, contents=[text_turn(Role.USER, "x")])
        assert model.model_name == "models/gemini-1.5-pro"

    def test_variant_resource_name(self):
        assert ModelVariant.TEXT_EMBEDDING_004.variant == "models/text-embedding-004"

    def test_no_tools_without_declarations(self):
        assert GenerativeModel(model_name="models/x").tools is None


class TestSafetyRating:
    def test_to_typed(self):
        rating = SafetyRating(category="HARM_CATEGORY_HATE_SPEECH", probability="HIGH")
        typed = rating.to_typed()
        assert typed.harm_category == HarmCategory.HARM_CATEGORY_HATE_SPEECH
        assert typed.probability == HarmProbability.HIGH

    def test_unknown_category_decodes_but_fails_to_type(self):
        rating = SafetyRating.model_validate({"category": "HARM_CATEGORY_CIVIC_INTEGRITY", "probability": "LOW"})
        with pytest.raises(ValueError):
            rating.to_typed()
