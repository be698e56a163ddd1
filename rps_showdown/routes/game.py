"""
Game flow route handlers.
Exposes the current round and score plus the three player actions.
"""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
import logging

from rps_showdown.errors import InvalidTransition
from rps_showdown.game_utils import Move
from rps_showdown.presentation import build_view, rules_view
from rps_showdown.state_machine import GameStateMachine, get_game

logger = logging.getLogger(__name__)

router = APIRouter()


class SelectMoveRequest(BaseModel):
    move: str


class ResetScoreRequest(BaseModel):
    confirm: bool = False  # The client must have asked the player first


def _conflict(exc: InvalidTransition) -> HTTPException:
    logger.info("Rejected %s during %s", exc.action, exc.phase)
    return HTTPException(status_code=409, detail=str(exc))


@router.get("/state")
async def get_state(game: GameStateMachine = Depends(get_game)):
    """Current phase, round, score and available actions"""
    return build_view(game.snapshot())


@router.get("/rules")
async def get_rules():
    """Which move beats which"""
    return rules_view()


@router.post("/select")
async def select_move(request: SelectMoveRequest, game: GameStateMachine = Depends(get_game)):
    """Pick a move; the computer's move is revealed after the configured delay"""
    try:
        move = Move.parse(request.move)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        game.select_move(move)
    except InvalidTransition as e:
        raise _conflict(e)
    return build_view(game.snapshot())


@router.post("/play_again")
async def play_again(game: GameStateMachine = Depends(get_game)):
    """Clear a resolved round without touching the score"""
    try:
        game.play_again()
    except InvalidTransition as e:
        raise _conflict(e)
    return build_view(game.snapshot())


@router.post("/reset_score")
async def reset_score(request: ResetScoreRequest, game: GameStateMachine = Depends(get_game)):
    """Zero the score. Without ``confirm`` this only returns the unchanged state."""
    if request.confirm:
        game.reset_score()
    return build_view(game.snapshot())
