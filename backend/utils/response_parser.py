"""
Helpers for pulling usable data out of generative model replies.

Model replies are free text inside provider-specific envelopes. These
functions find the text, strip markdown fencing and parse the JSON inside,
without ever trusting the shape of what came back.
"""

import json
import re
from typing import Any, Dict, Optional, Tuple

JSON_FENCE_PATTERN = re.compile(r"```json\s*([\s\S]*?)\s*```")
ANY_FENCE_PATTERN = re.compile(r"```\s*([\s\S]*?)\s*```")
SCOPE_HINT_PATTERN = re.compile(r"^\s*\[([^\]]+)\]\s*")


def _first(value: Any) -> Any:
    if isinstance(value, list) and value:
        return value[0]
    return None


def _join_text_parts(parts: Any, skip_thoughts: bool = False) -> Optional[str]:
    """Join the ``text`` of every part in a list of content parts."""
    if not isinstance(parts, list):
        return None

    texts = []
    for part in parts:
        if isinstance(part, str):
            texts.append(part)
            continue
        if not isinstance(part, dict):
            continue
        if skip_thoughts and part.get("thought"):
            continue
        if isinstance(part.get("text"), str):
            texts.append(part["text"])

    joined = "\n".join(text for text in texts if text)
    return joined or None


def _gemini_text(payload: Dict[str, Any]) -> Optional[str]:
    candidate = _first(payload.get("candidates"))
    if not isinstance(candidate, dict):
        return None
    content = candidate.get("content")
    if not isinstance(content, dict):
        return None
    return _join_text_parts(content.get("parts"), skip_thoughts=True)


def _chat_completion_text(payload: Dict[str, Any]) -> Optional[str]:
    choice = _first(payload.get("choices"))
    if not isinstance(choice, dict):
        return None

    message = choice.get("message")
    if isinstance(message, dict):
        content = message.get("content")
        if isinstance(content, str):
            return content
        text = _join_text_parts(content)
        if text:
            return text

    if isinstance(choice.get("text"), str):
        return choice["text"]
    return None


def _legacy_output_text(payload: Dict[str, Any]) -> Optional[str]:
    if isinstance(payload.get("output_text"), str):
        return payload["output_text"]

    output = payload.get("output")
    if isinstance(output, str):
        return output
    if isinstance(output, dict) and isinstance(output.get("text"), str):
        return output["text"]
    if isinstance(output, list):
        # Responses-style: [{"type": "message", "content": [{"text": ...}]}]
        texts = []
        for item in output:
            if isinstance(item, dict):
                text = _join_text_parts(item.get("content"))
                if text:
                    texts.append(text)
        return "\n".join(texts) or None
    return None


def extract_model_text(payload: Any) -> Optional[str]:
    """
    Find the generated text in a provider reply.

    Tries, in order: Gemini ``candidates[0].content.parts``, chat-completion
    ``choices[0].message.content`` / ``choices[0].text``, legacy ``output_text``
    and ``output`` shapes, then a top-level ``text`` field.

    Args:
        payload: Provider reply as a plain dict (or a bare string)

    Returns:
        The first non-blank text found, or None
    """
    if isinstance(payload, str):
        return payload if payload.strip() else None
    if not isinstance(payload, dict):
        return None

    extractors = (_gemini_text, _chat_completion_text, _legacy_output_text)
    for extractor in extractors:
        text = extractor(payload)
        if text and text.strip():
            return text

    text = payload.get("text")
    if isinstance(text, str) and text.strip():
        return text
    return None


def extract_json_payload(text: str) -> Any:
    """
    Parse JSON out of model text, unwrapping a markdown code fence if present.

    A ```json fence wins over a bare ``` fence; with no fence the whole text
    is parsed.

    Raises:
        ValueError: If the (unwrapped) text is not valid JSON or nests too
            deeply to decode
    """
    match = JSON_FENCE_PATTERN.search(text) or ANY_FENCE_PATTERN.search(text)
    json_string = (match.group(1) if match else text).strip()
    try:
        return json.loads(json_string)
    except RecursionError as e:
        raise ValueError(f"JSON nested too deeply to decode: {e}") from e


def parse_scope_hint(command: str) -> Tuple[Dict[str, str], str]:
    """
    Split an optional leading targeting hint off a command.

    ``"[target=selection,includeArtboard] Center these"`` becomes
    ``({"target": "selection", "includeArtboard": "true"}, "Center these")``.
    Commands without a hint come back unchanged with an empty dict.
    """
    match = SCOPE_HINT_PATTERN.match(command)
    if not match:
        return {}, command

    hint: Dict[str, str] = {}
    for pair in match.group(1).split(","):
        key, _, value = pair.partition("=")
        key = key.strip()
        if key:
            hint[key] = value.strip() or "true"

    return hint, command[match.end():]
