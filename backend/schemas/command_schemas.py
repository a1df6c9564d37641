"""
Pydantic schemas for the canvas command endpoint.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from schemas.action_schemas import Action


class CanvasCommandRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    command: StrictStr = Field(..., description="Natural-language canvas command")
    canvas_state: dict[str, Any] = Field(
        default_factory=dict,
        alias="canvasState",
        description="Snapshot of canvas objects, selection and size",
    )

    @field_validator("command")
    @classmethod
    def command_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Command is required")
        return value

    @field_validator("canvas_state", mode="before")
    @classmethod
    def default_missing_state(cls, value: Any) -> Any:
        return {} if value is None else value


class AgentResponse(BaseModel):
    """
    Envelope returned to the editor.

    Missing ``actions`` or ``message`` fall back to defaults, but a single
    invalid action fails the whole envelope.
    """

    model_config = ConfigDict(strict=True)

    actions: list[Action] = Field(default_factory=list, description="Actions to apply in order")
    message: str = Field(default="", description="Short confirmation for the user")

    def to_payload(self) -> dict:
        """Serialize for the HTTP body with camelCase keys and unset params omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def validate_agent_response(data: Any) -> AgentResponse:
    """
    Validate a parsed model reply against the response envelope.

    Args:
        data: Value obtained by parsing model output as JSON

    Returns:
        The validated AgentResponse

    Raises:
        pydantic.ValidationError: If the envelope or any action in it is invalid
    """
    return AgentResponse.model_validate(data)
