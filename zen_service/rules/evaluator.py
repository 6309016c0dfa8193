from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

import zen
from pydantic import BaseModel

from zen_service.core.errors import EvaluationError

logger = logging.getLogger(__name__)


class EvaluationResult(BaseModel):
    """Output of a single decision evaluation."""

    payload: Any = None
    performance: Optional[str] = None


class DecisionEvaluator(Protocol):
    """Builds decisions from rule file content and evaluates them."""

    def load(self, content: str) -> Any:
        """Return an artifact for ``content``. Raise on an invalid graph."""
        ...

    def evaluate(self, artifact: Any, context: Any) -> EvaluationResult:
        """Evaluate ``artifact`` against ``context``. Raise EvaluationError on failure."""
        ...


# ---------------------------------------------------------------------------
# zen-engine implementation
# ---------------------------------------------------------------------------


class ZenEvaluator:
    """DecisionEvaluator backed by the GoRules zen-engine binding."""

    def __init__(self, engine: Optional[zen.ZenEngine] = None) -> None:
        self._engine = engine or zen.ZenEngine()

    def load(self, content: str) -> zen.ZenDecision:
        return self._engine.create_decision(content)

    def evaluate(self, artifact: zen.ZenDecision, context: Any) -> EvaluationResult:
        try:
            raw = artifact.evaluate(context)
        except Exception as exc:
            logger.warning("Decision evaluation failed: %s: %s", type(exc).__name__, exc)
            raise EvaluationError(f"{type(exc).__name__}: {exc}") from exc

        return EvaluationResult(
            payload=raw.get("result"),
            performance=raw.get("performance"),
        )
