import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from schemas.action_schemas import ACTION_TYPES, action_json_schema
from schemas.command_schemas import CanvasCommandRequest
from services.canvas_command_service import CanvasCommandService
from services.llm_service import UpstreamServiceError
from utils.router_utils import command_error_response, upstream_error_response

logger = logging.getLogger(__name__)

# Create router instance
router = APIRouter(
    prefix="/canvas-command",
    tags=["canvas-command"],
)


def get_command_service(request: Request) -> CanvasCommandService:
    """Command service built at startup, see main.lifespan."""
    return request.app.state.command_service


@router.post("")
async def run_canvas_command(
    request: Request,
    service: CanvasCommandService = Depends(get_command_service),
) -> JSONResponse:
    """
    Interpret a natural-language command against a canvas snapshot.

    Body: ``{"command": str, "canvasState": {...}}``. Returns
    ``{"actions": [...], "message": str}``. Output the model gets wrong comes
    back as 200 with no actions; provider failures come back as 429, 402 or 502.
    """
    try:
        try:
            body = await request.json()
        except ValueError:
            return command_error_response(
                status.HTTP_400_BAD_REQUEST,
                "Request body must be JSON",
                "Command is required",
            )

        try:
            payload = CanvasCommandRequest.model_validate(body)
        except ValidationError as e:
            logger.info(f"Rejected canvas command request: {e.errors()}")
            fields = {err["loc"][0] for err in e.errors() if err["loc"]}
            error = (
                "canvasState must be an object"
                if fields and "command" not in fields
                else "Command is required"
            )
            return command_error_response(status.HTTP_400_BAD_REQUEST, error, error)

        result = await service.run(payload.command, payload.canvas_state)
        return JSONResponse(status_code=status.HTTP_200_OK, content=result.to_payload())

    except UpstreamServiceError as e:
        return upstream_error_response(e)
    except Exception as e:
        logger.exception(f"Error in /canvas-command: {e}")
        return command_error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            str(e) or "Unknown error occurred",
            "Sorry, I couldn't process that command.",
        )


@router.get("/actions")
async def get_action_info() -> dict:
    """
    Describe the actions the command endpoint can return.

    Returns the action types, example commands and the JSON Schema the
    editor can use to validate actions on its side.
    """
    return {
        "action_types": list(ACTION_TYPES),
        "example_commands": [
            "Center everything",
            "Move logo to top-left",
            "Make images smaller",
            "Place side by side",
            "Add heading 'Welcome'",
            "Make the title red",
        ],
        "schema": action_json_schema(),
    }
