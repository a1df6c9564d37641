"""Unit tests for model reply parsing helpers."""

import json

import pytest

from utils.response_parser import (
    extract_json_payload,
    extract_model_text,
    parse_scope_hint,
)


REPLY = {
    "actions": [{"type": "align", "params": {"horizontal": "center", "vertical": "center"}}],
    "message": "Centered everything",
}


class TestExtractJsonPayload:

    def test_json_fence_matches_inner_text(self):
        inner = json.dumps(REPLY, indent=2)
        text = f"Sure! Here are the actions:\n```json\n{inner}\n```\nLet me know."
        assert extract_json_payload(text) == json.loads(inner)

    def test_raw_json_matches_fenced_json(self):
        inner = json.dumps(REPLY)
        assert extract_json_payload(inner) == extract_json_payload(f"```json\n{inner}\n```")

    def test_generic_fence(self):
        text = f"```\n{json.dumps(REPLY)}\n```"
        assert extract_json_payload(text) == REPLY

    def test_json_fence_preferred_over_earlier_generic_fence(self):
        text = f"```\nnot json\n```\n```json\n{json.dumps(REPLY)}\n```"
        assert extract_json_payload(text) == REPLY

    def test_surrounding_whitespace(self):
        assert extract_json_payload(f"\n\n  {json.dumps(REPLY)}  \n") == REPLY

    @pytest.mark.parametrize(
        "text",
        [
            "I can't help with that.",
            "```json\n{\"actions\": [\n```",
            "",
        ],
    )
    def test_invalid_json_raises_value_error(self, text):
        with pytest.raises(ValueError):
            extract_json_payload(text)

    @pytest.mark.parametrize("text", ["[" * 1500, "{\"a\": " * 1500, "```json\n" + "[" * 1500 + "\n```"])
    def test_deep_nesting_raises_value_error(self, text):
        with pytest.raises(ValueError):
            extract_json_payload(text)


class TestExtractModelText:

    def test_gemini_shape(self):
        payload = {"candidates": [{"content": {"parts": [{"text": "hello"}]}}]}
        assert extract_model_text(payload) == "hello"

    def test_gemini_parts_are_joined_and_thoughts_skipped(self):
        payload = {
            "candidates": [{
                "content": {
                    "parts": [
                        {"text": "thinking about layout", "thought": True},
                        {"text": "first"},
                        {"inline_data": {"mime_type": "image/png"}},
                        {"text": "second"},
                    ]
                }
            }]
        }
        assert extract_model_text(payload) == "first\nsecond"

    def test_chat_completion_shape(self):
        payload = {"choices": [{"index": 0, "message": {"role": "assistant", "content": "hi"}}]}
        assert extract_model_text(payload) == "hi"

    def test_chat_completion_content_parts(self):
        payload = {"choices": [{"message": {"content": [{"type": "text", "text": "a"}, {"type": "text", "text": "b"}]}}]}
        assert extract_model_text(payload) == "a\nb"

    def test_completion_choice_text(self):
        assert extract_model_text({"choices": [{"text": "legacy"}]}) == "legacy"

    @pytest.mark.parametrize(
        "payload",
        [
            {"output": "legacy"},
            {"output_text": "legacy"},
            {"output": {"text": "legacy"}},
            {"output": [{"type": "message", "content": [{"type": "output_text", "text": "legacy"}]}]},
            {"text": "legacy"},
            "legacy",
        ],
    )
    def test_legacy_shapes(self, payload):
        assert extract_model_text(payload) == "legacy"

    def test_falls_through_empty_gemini_candidate(self):
        payload = {"candidates": [{"content": {"parts": []}}], "output": "fallback"}
        assert extract_model_text(payload) == "fallback"

    @pytest.mark.parametrize(
        "payload",
        [
            None,
            {},
            {"candidates": []},
            {"candidates": [{"finish_reason": "SAFETY"}]},
            {"choices": [{"message": {"content": None}}]},
            {"output": "   "},
            ["not", "a", "dict"],
            "",
        ],
    )
    def test_no_usable_text(self, payload):
        assert extract_model_text(payload) is None


class TestParseScopeHint:

    def test_no_hint(self):
        assert parse_scope_hint("Center everything") == ({}, "Center everything")

    def test_hint_with_values_and_flags(self):
        hint, command = parse_scope_hint("[target=selection, includeArtboard] Center these")
        assert hint == {"target": "selection", "includeArtboard": "true"}
        assert command == "Center these"

    def test_brackets_later_in_command_are_not_a_hint(self):
        hint, command = parse_scope_hint("Add text [draft]")
        assert hint == {}
        assert command == "Add text [draft]"
