from schemas.action_schemas import (
    ACTION_TYPES,
    Action,
    AddTextAction,
    AlignAction,
    DeleteAction,
    GroupAction,
    MoveAction,
    ResizeAction,
    SetFillAction,
    SetOpacityAction,
    SetStrokeAction,
    SetTextStyleAction,
    action_json_schema,
    validate_action,
)
from schemas.command_schemas import (
    AgentResponse,
    CanvasCommandRequest,
    validate_agent_response,
)

__all__ = [
    # Action schemas
    "ACTION_TYPES",
    "Action",
    "AddTextAction",
    "AlignAction",
    "DeleteAction",
    "GroupAction",
    "MoveAction",
    "ResizeAction",
    "SetFillAction",
    "SetOpacityAction",
    "SetStrokeAction",
    "SetTextStyleAction",
    "action_json_schema",
    "validate_action",
    # Command schemas
    "AgentResponse",
    "CanvasCommandRequest",
    "validate_agent_response",
]
