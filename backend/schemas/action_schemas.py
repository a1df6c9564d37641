"""
Pydantic schemas for canvas actions returned by the command agent.

Every action is a closed shape keyed on its ``type`` discriminant. Validation
is strict: numbers must be numbers and strings must be strings, nothing is
coerced, and a ``type`` outside ACTION_TYPES is rejected before any other
field is looked at. Unknown keys are dropped so they never reach the client.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


HorizontalAlign = Literal["left", "center", "right"]
VerticalAlign = Literal["top", "center", "bottom"]
TextAlign = Literal["left", "center", "right", "justify"]

FontSize = Annotated[float, Field(ge=8, le=200, description="Font size in px")]
Opacity = Annotated[float, Field(ge=0, le=1)]


class CanvasModel(BaseModel):
    """Base for action payloads: camelCase keys only on the wire, strict types."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        strict=True,
        allow_inf_nan=False,
        extra="ignore",
    )


# ============================================================================
# Params
# ============================================================================


class MoveParams(CanvasModel):
    left: float = Field(..., description="Target left coordinate")
    top: float = Field(..., description="Target top coordinate")


class ResizeParams(CanvasModel):
    scale_x: float = Field(..., gt=0, description="Horizontal scale factor")
    scale_y: float = Field(..., gt=0, description="Vertical scale factor")


class AlignParams(CanvasModel):
    horizontal: Optional[HorizontalAlign] = None
    vertical: Optional[VerticalAlign] = None


class AddTextParams(CanvasModel):
    text: str = Field(..., min_length=1, description="Text content to add")
    left: Optional[float] = None
    top: Optional[float] = None
    font_size: Optional[FontSize] = None


class GroupParams(CanvasModel):
    spacing: float = Field(default=20, ge=0, le=400, description="Gap between grouped objects")


class SetFillParams(CanvasModel):
    fill: str = Field(..., description="Fill color, e.g. #ff0000")
    opacity: Optional[Opacity] = None


class SetStrokeParams(CanvasModel):
    stroke: str = Field(..., description="Stroke color")
    stroke_width: Optional[float] = Field(default=None, ge=0, le=100)
    stroke_opacity: Optional[Opacity] = None


class SetOpacityParams(CanvasModel):
    opacity: Opacity


class SetTextStyleParams(CanvasModel):
    fill: Optional[str] = None
    font_size: Optional[FontSize] = None
    font_family: Optional[str] = None
    font_weight: Optional[Union[str, int]] = None
    text_align: Optional[TextAlign] = None


# ============================================================================
# Actions
# ============================================================================


class MoveAction(CanvasModel):
    type: Literal["move"]
    object_ids: Optional[list[str]] = Field(
        default=None, description="Objects to move; omitted means the current selection"
    )
    params: MoveParams


class ResizeAction(CanvasModel):
    type: Literal["resize"]
    object_ids: list[str]
    params: ResizeParams


class AlignAction(CanvasModel):
    type: Literal["align"]
    object_ids: Optional[list[str]] = Field(
        default=None, description="Objects to align; omitted means the current selection"
    )
    params: AlignParams


class AddTextAction(CanvasModel):
    type: Literal["add_text"]
    object_ids: Optional[list[str]] = None
    params: AddTextParams


class DeleteAction(CanvasModel):
    type: Literal["delete"]
    object_ids: list[str]


class GroupAction(CanvasModel):
    type: Literal["group"]
    object_ids: list[str]
    params: GroupParams


class SetFillAction(CanvasModel):
    type: Literal["set_fill"]
    object_ids: list[str]
    params: SetFillParams


class SetStrokeAction(CanvasModel):
    type: Literal["set_stroke"]
    object_ids: list[str]
    params: SetStrokeParams


class SetOpacityAction(CanvasModel):
    type: Literal["set_opacity"]
    object_ids: list[str]
    params: SetOpacityParams


class SetTextStyleAction(CanvasModel):
    type: Literal["set_text_style"]
    object_ids: list[str]
    params: SetTextStyleParams


Action = Annotated[
    Union[
        MoveAction,
        ResizeAction,
        AlignAction,
        AddTextAction,
        DeleteAction,
        GroupAction,
        SetFillAction,
        SetStrokeAction,
        SetOpacityAction,
        SetTextStyleAction,
    ],
    Field(discriminator="type"),
]

ACTION_TYPES: tuple[str, ...] = (
    "move",
    "resize",
    "align",
    "add_text",
    "delete",
    "group",
    "set_fill",
    "set_stroke",
    "set_opacity",
    "set_text_style",
)

_action_adapter: TypeAdapter = TypeAdapter(Action)


def validate_action(data: Any) -> Action:
    """
    Validate a single untrusted action object.

    Args:
        data: Parsed JSON value, usually one element of a model reply's actions list

    Returns:
        The matching typed action model

    Raises:
        pydantic.ValidationError: If the discriminant is unknown or any field
            fails its type or bound
    """
    return _action_adapter.validate_python(data)


def action_json_schema() -> dict:
    """JSON Schema of the action union, camelCase field names."""
    return _action_adapter.json_schema(by_alias=True)
