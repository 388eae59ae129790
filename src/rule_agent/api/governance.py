import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from rule_agent.api.dependencies import get_agent_factory, get_notice_board
from rule_agent.api.errors import ERROR_RESPONSES, error_response
from rule_agent.core.errors import AgentExecutionError, FixtureError, GateFailedError, UnknownPresetError
from rule_agent.core.models import FileDescriptor, RouteDescriptor, RuleAgentResult
from rule_agent.engine import create_context
from rule_agent.presentation import render_notice_html
from rule_agent.reporters import Notice, NoticeBoard

logger = structlog.get_logger(__name__)

router = APIRouter()


class EvaluationRequest(BaseModel):
    module: str = Field(min_length=1)
    files: list[FileDescriptor] = Field(default_factory=list)
    routes: list[RouteDescriptor] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    preset: str | None = None
    enforce: bool = False


@router.post("/governance/evaluate", response_model=RuleAgentResult, responses=ERROR_RESPONSES)
async def evaluate(request: EvaluationRequest, build_agent=Depends(get_agent_factory)):
    """
    Evaluate a described change and return the full result.

    With ``enforce`` set, a 'fail' verdict is answered with 422 and the fatal
    issue messages instead of the result body.
    """
    try:
        agent = build_agent(request.preset)
        context = create_context(request.module, request.files, request.routes, request.features)
        if request.enforce:
            return await agent.assert_rules(context)
        return await agent.execute(context)
    except UnknownPresetError as e:
        return error_response(400, "unknown_preset", str(e), module=request.module)
    except GateFailedError as e:
        return error_response(
            422,
            "gate_failed",
            str(e),
            module=e.module,
            details={"messages": e.messages, "result": e.result.model_dump(mode="json")},
        )
    except FixtureError as e:
        logger.error("governance_fixture_error", path=e.path, reason=e.reason)
        return error_response(500, "fixture_error", str(e), module=request.module)
    except AgentExecutionError as e:
        return error_response(504, "execution_timeout", str(e), module=request.module)


@router.get("/governance/notices", response_model=list[Notice])
async def list_notices(board: NoticeBoard = Depends(get_notice_board)):
    return board.active()


@router.get("/governance/notices/{module}", response_class=HTMLResponse)
async def notice_banner(module: str, board: NoticeBoard = Depends(get_notice_board)):
    notice = board.get(module)
    if notice is None:
        return error_response(404, "notice_not_found", f"No active notice for module '{module}'")
    return HTMLResponse(render_notice_html(notice))


@router.delete("/governance/notices/{notice_id}")
async def dismiss_notice(notice_id: str, board: NoticeBoard = Depends(get_notice_board)):
    if not board.dismiss(notice_id):
        return error_response(404, "notice_not_found", f"No active notice with id '{notice_id}'")
    return {"dismissed": notice_id}
