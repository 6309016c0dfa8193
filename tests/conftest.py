"""Pytest fixtures shared by the store, pipeline and API tests."""

import json
import threading
from pathlib import Path
from typing import Any

import pytest

from zen_service.core.config import Settings
from zen_service.core.errors import EvaluationError
from zen_service.rules.evaluator import EvaluationResult


class FakeEvaluator:
    """Stand-in for zen-engine.

    A rule file is JSON with a ``name`` and an optional ``add`` list of context
    keys to sum. Evaluation echoes the context back next to the rule name.
    """

    def __init__(self) -> None:
        self.loads = 0
        self._lock = threading.Lock()

    def load(self, content: str) -> dict:
        graph = json.loads(content)
        if not isinstance(graph, dict) or "name" not in graph:
            raise ValueError("missing rule name")
        with self._lock:
            self.loads += 1
        return graph

    def evaluate(self, artifact: dict, context: Any) -> EvaluationResult:
        if artifact.get("fail"):
            raise EvaluationError("rule asked to fail")
        payload: dict[str, Any] = {"rule": artifact["name"], "context": context}
        if "add" in artifact:
            payload["sum"] = sum(context[key] for key in artifact["add"])
        return EvaluationResult(payload=payload, performance="1ms")


def write_rule(folder: Path, name: str, rule: Any) -> Path:
    path = folder / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(rule if isinstance(rule, str) else json.dumps(rule))
    return path


@pytest.fixture
def rules_dir(tmp_path: Path) -> Path:
    """Rules folder with a default rule, an adder and a broken file."""
    folder = tmp_path / "rules"
    write_rule(folder, "test_rule.json", {"name": "default"})
    write_rule(folder, "adder.json", {"name": "adder", "add": ["a", "b"]})
    write_rule(folder, "nested/deep.json", {"name": "deep"})
    write_rule(folder, "failing.json", {"name": "failing", "fail": True})
    write_rule(folder, "broken.json", "{not json")
    return folder


@pytest.fixture
def evaluator() -> FakeEvaluator:
    return FakeEvaluator()


@pytest.fixture
def settings(rules_dir: Path) -> Settings:
    return Settings(
        _env_file=None,
        server_addr="127.0.0.1:8080",
        rules_folder=str(rules_dir),
    )
