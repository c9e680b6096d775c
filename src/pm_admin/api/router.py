"""Admin REST API."""
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.pm_common.response import ApiResponse, respond
from src.pm_engine.dependencies import get_engine
from src.pm_engine.engine import ExchangeEngine
from src.pm_gateway.auth.dependencies import get_current_user
from src.pm_gateway.user.models import User

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/invariants")
async def verify_invariants(
    request: Request,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[ExchangeEngine, Depends(get_engine)],
) -> ApiResponse:
    """Per-pool (INV-K/R/L/S) and global conservation (INV-G) checks."""
    violations = engine.verify_invariants()
    return respond(request, {"ok": not violations, "violations": violations})
