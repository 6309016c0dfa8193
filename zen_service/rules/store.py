"""Filesystem rule store: turns rule references into evaluator artifacts."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any

from zen_service.core.errors import (
    ArtifactInvalid,
    ArtifactNotFound,
    RuleReferenceRejected,
)
from zen_service.rules.evaluator import DecisionEvaluator

logger = logging.getLogger(__name__)


class RuleStore:
    """Resolve rule references to artifacts under a root folder.

    With ``keep_in_memory`` set, each artifact is built once and reused for
    later requests naming the same reference. Two concurrent first requests
    may both load the file; the second store simply overwrites the first.
    """

    def __init__(
        self,
        root: str | Path,
        evaluator: DecisionEvaluator,
        keep_in_memory: bool = True,
    ) -> None:
        self.root = Path(root).resolve()
        self.keep_in_memory = keep_in_memory
        self._evaluator = evaluator
        self._cache: dict[str, Any] = {}
        self._lock = threading.Lock()

    @property
    def cached(self) -> list[str]:
        with self._lock:
            return sorted(self._cache)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def path_for(self, ref: str) -> Path:
        """Return the absolute path of ``ref``, confined to the root."""
        if not ref or Path(ref).is_absolute():
            raise RuleReferenceRejected(f"Rule reference {ref!r} is not a relative path")
        try:
            path = (self.root / ref).resolve()
        except (OSError, ValueError) as exc:
            raise RuleReferenceRejected(f"Rule reference {ref!r} is not a valid path: {exc}") from exc
        if not path.is_relative_to(self.root):
            raise RuleReferenceRejected(f"Rule reference {ref!r} escapes the rules folder")
        return path

    def resolve(self, ref: str) -> Any:
        path = self.path_for(ref)

        if self.keep_in_memory:
            with self._lock:
                artifact = self._cache.get(ref)
            if artifact is not None:
                return artifact

        artifact = self._load(ref, path)

        if self.keep_in_memory:
            with self._lock:
                self._cache[ref] = artifact
        return artifact

    def _load(self, ref: str, path: Path) -> Any:
        try:
            if not path.is_file():
                raise ArtifactNotFound(f"Rule {ref!r} not found in {self.root}")
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ArtifactNotFound(f"Rule {ref!r} could not be read: {exc}") from exc

        try:
            artifact = self._evaluator.load(content)
        except Exception as exc:
            raise ArtifactInvalid(
                f"Rule {ref!r} is not a valid decision graph: {type(exc).__name__}: {exc}"
            ) from exc

        logger.info("Loaded rule %s from %s", ref, path)
        return artifact
