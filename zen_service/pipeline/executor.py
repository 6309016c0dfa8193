from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional

from zen_service.core.errors import (
    DecodeError,
    EvaluationError,
    EvaluationTimeout,
    ExecutionError,
    ParseError,
)
from zen_service.rules.evaluator import DecisionEvaluator
from zen_service.rules.store import RuleStore

logger = logging.getLogger(__name__)

DEFAULT_RULE = "test_rule.json"


def decode_context(body: bytes) -> Any:
    """Decode a request body into a JSON context document."""
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(str(exc)) from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"{exc.msg} at line {exc.lineno} column {exc.colno}") from exc


class ExecutionPipeline:
    """Decode, resolve and evaluate one rule execution request.

    Resolution and evaluation block on file I/O and the engine, so both run
    in the loop's default executor. ``timeout`` bounds how long a caller
    waits for them; an abandoned worker thread still runs to completion.
    """

    def __init__(
        self,
        store: RuleStore,
        evaluator: DecisionEvaluator,
        timeout: Optional[float] = None,
    ) -> None:
        self.store = store
        self.evaluator = evaluator
        self.timeout = timeout

    async def execute(self, body: bytes, rule: Optional[str] = None) -> Any:
        rule = rule or DEFAULT_RULE
        try:
            context = decode_context(body)
            logger.debug("Executing rule %s with %d byte context", rule, len(body))
            return await self._run(rule, context)
        except ExecutionError as exc:
            logger.warning("Rule %s failed (%s): %s", rule, exc.kind, exc.detail)
            raise

    async def _run(self, rule: str, context: Any) -> Any:
        loop = asyncio.get_running_loop()
        try:
            return await asyncio.wait_for(
                loop.run_in_executor(None, self._evaluate, rule, context),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as exc:
            raise EvaluationTimeout(
                f"Rule {rule!r} did not finish within {self.timeout:g}s"
            ) from exc

    def _evaluate(self, rule: str, context: Any) -> Any:
        artifact = self.store.resolve(rule)
        try:
            return self.evaluator.evaluate(artifact, context).payload
        except ExecutionError:
            raise
        except Exception as exc:
            logger.exception("Evaluator raised an unexpected error for rule %s", rule)
            raise EvaluationError(f"{type(exc).__name__}: {exc}") from exc
