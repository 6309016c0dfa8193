from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from zen_service.pipeline.executor import DEFAULT_RULE, ExecutionPipeline

MAX_RULE_LENGTH = 255

router = APIRouter(tags=["rules"])


@router.post("/execute_rule")
async def execute_rule(
    request: Request,
    rule: Optional[str] = Query(
        default=DEFAULT_RULE,
        max_length=MAX_RULE_LENGTH,
        description="Rule file under the rules folder",
    ),
) -> JSONResponse:
    """Evaluate a rule against the raw JSON request body and return its result."""
    pipeline: ExecutionPipeline = request.app.state.pipeline
    body = await request.body()
    result = await pipeline.execute(body, rule)
    return JSONResponse(status_code=200, content=result)
