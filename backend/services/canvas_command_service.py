import json
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError

from config import Settings
from schemas.command_schemas import AgentResponse, validate_agent_response
from services.llm_service import LLMService
from utils.logger import clip, logger
from utils.response_parser import (
    extract_json_payload,
    extract_model_text,
    parse_scope_hint,
)


# ============================================================================
# System Prompt
# ============================================================================

SYSTEM_PROMPT = """You are an intelligent canvas agent that interprets user commands and returns structured actions to manipulate a design canvas.

Available canvas state:
- objects: array of objects with { id, type, left, top, width, height, scaleX, scaleY }
- selectedObjectIds: ids of the objects the user has selected (may be empty)
- canvasWidth: number
- canvasHeight: number

You must respond with a JSON object containing:
{
  "actions": [
    {
      "type": "move" | "resize" | "align" | "add_text" | "delete" | "group" | "set_fill" | "set_stroke" | "set_opacity" | "set_text_style",
      "objectIds": ["id1", "id2"],
      "params": { }
    }
  ],
  "message": "Brief confirmation of what was done"
}

Action types and params:
- move: { left: number, top: number } (objectIds optional, defaults to the selection)
- resize: { scaleX: number > 0, scaleY: number > 0 }
- align: { horizontal?: "left"|"center"|"right", vertical?: "top"|"center"|"bottom" } (objectIds optional)
- add_text: { text: string, left?: number, top?: number, fontSize?: 8-200 } (no objectIds)
- delete: no params, objectIds required
- group: { spacing: 0-400, default 20 } (for "side by side" etc)
- set_fill: { fill: color string, opacity?: 0-1 }
- set_stroke: { stroke: color string, strokeWidth?: 0-100, strokeOpacity?: 0-1 }
- set_opacity: { opacity: 0-1 }
- set_text_style: { fill?: string, fontSize?: 8-200, fontFamily?: string, fontWeight?: string|number, textAlign?: "left"|"center"|"right"|"justify" }

Examples:
"Center everything" -> align all objects to center
"Move logo to top-left" -> find the object whose name contains "logo", move to (20, 20)
"Make images smaller" -> resize all image objects to 0.8 scale
"Place side by side" -> group selected objects horizontally
"Add heading 'Welcome'" -> add text at top center
"Make the title red" -> set_fill on the title with "#ff0000"
"Fade the background" -> set_opacity on the background to 0.5

Be intelligent about interpreting natural language. If user says "smaller", reduce scale by 20%. If "larger", increase by 20%.
Only use the action types listed above and only reference object ids present in the canvas state."""

FALLBACK_MESSAGE = (
    "I couldn't confidently interpret that. "
    "Try a clearer instruction (e.g., 'center everything')."
)


def safe_fallback() -> AgentResponse:
    """The single degraded reply for any model output we cannot use."""
    return AgentResponse(actions=[], message=FALLBACK_MESSAGE)


class CanvasCommandService:
    """Turns a natural-language command into validated canvas actions."""

    def __init__(self, settings: Settings, llm: LLMService):
        self.settings = settings
        self.llm = llm

    def build_prompts(
        self, command: str, canvas_state: Optional[Dict[str, Any]]
    ) -> Tuple[str, str]:
        """
        Build the system and user prompts for a command.

        Args:
            command: The user's command, optionally prefixed with a
                ``[key=value,...]`` targeting hint
            canvas_state: Snapshot of the canvas sent by the editor

        Returns:
            (system_prompt, user_prompt)
        """
        canvas_state = canvas_state or {}
        hint, command_text = parse_scope_hint(command)

        parts = [f'Command: "{command_text.strip()}"']
        parts.append(f"Targeting hint: {json.dumps(hint)}")

        selected = canvas_state.get("selectedObjectIds")
        if isinstance(selected, list) and selected:
            parts.append(f"Selected object ids: {json.dumps(selected)}")

        parts.append(f"Canvas State: {json.dumps(canvas_state, indent=2, default=str)}")
        parts.append("Respond with JSON only.")

        return SYSTEM_PROMPT, "\n\n".join(parts)

    async def run(
        self, command: str, canvas_state: Optional[Dict[str, Any]] = None
    ) -> AgentResponse:
        """
        Interpret one command against a canvas snapshot.

        Unusable model output (no text, no JSON, or JSON that fails action
        validation) yields safe_fallback(). Provider failures are not caught
        here.

        Raises:
            UpstreamServiceError: If the generation service fails
            LLMNotConfiguredError: If no API key is configured
        """
        system_prompt, user_prompt = self.build_prompts(command, canvas_state)
        payload = await self.llm.generate(system_prompt, user_prompt)

        text = extract_model_text(payload)
        if not text:
            logger.warning(f"No text in model response: {clip(json.dumps(payload, default=str))}")
            return safe_fallback()

        try:
            parsed = extract_json_payload(text)
        except ValueError as e:
            logger.warning(f"Failed to parse model JSON: {e}; text: {clip(text)}")
            return safe_fallback()

        try:
            result = validate_agent_response(parsed)
        except ValidationError as e:
            logger.warning(f"Agent response validation failed: {clip(e.errors())}")
            return safe_fallback()

        logger.info(f"Canvas command produced {len(result.actions)} action(s)")
        return result
