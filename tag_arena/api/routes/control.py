"""Match controls: start, pause/resume/quit/freeze triggers and directional input."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, HTTPException

from tag_arena.api.dependencies import get_engine_manager, require_snapshot
from tag_arena.api.engine_manager import EngineManager
from tag_arena.api.routes.state import serialize_snapshot
from tag_arena.api.schemas import ControlResponse, IntentRequest, MatchStateResponse, StartMatchRequest
from tag_arena.core.models import DirectionalIntent

router = APIRouter()


class ControlAction(str, Enum):
    pause = "pause"
    resume = "resume"
    quit = "quit"
    freeze = "freeze"


_MESSAGES = {
    ControlAction.pause: ("Match paused.", "Match is not running."),
    ControlAction.resume: ("Match resumed.", "Match is not paused."),
    ControlAction.quit: ("Match quit.", "Match already ended."),
    ControlAction.freeze: ("Everyone is frozen.", "Match is not running."),
}


@router.post("/match/start", response_model=MatchStateResponse)
def start_match(
    body: StartMatchRequest,
    manager: EngineManager = Depends(get_engine_manager),
) -> MatchStateResponse:
    snapshot = manager.start_match(body.mode, body.human_role)
    if snapshot is None:
        raise HTTPException(status_code=503, detail="Match failed to start.")
    return serialize_snapshot(snapshot)


@router.post("/control/{action}", response_model=ControlResponse)
def control(
    action: ControlAction,
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    require_snapshot(manager)

    match action:
        case ControlAction.pause:
            ok = manager.pause()
        case ControlAction.resume:
            ok = manager.resume()
        case ControlAction.quit:
            ok = manager.quit()
        case ControlAction.freeze:
            ok = manager.freeze()

    snapshot = manager.get_snapshot()
    frame = snapshot.frame if snapshot else 0
    done, refused = _MESSAGES[action]
    if not ok:
        return ControlResponse(status="noop", message=refused, frame=frame)
    return ControlResponse(status="ok", message=done, frame=frame)


@router.put("/input", response_model=ControlResponse)
def set_input(
    body: IntentRequest,
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    manager.set_intent(DirectionalIntent(up=body.up, down=body.down, left=body.left, right=body.right))
    snapshot = manager.get_snapshot()
    return ControlResponse(status="ok", message="Input updated.", frame=snapshot.frame if snapshot else 0)
