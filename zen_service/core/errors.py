from __future__ import annotations


class ExecutionError(Exception):
    """Base for every failure of a single rule execution request."""

    kind = "execution_error"
    status_code = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    @property
    def message(self) -> str:
        return f"{self.kind}: {self.detail}"


class DecodeError(ExecutionError):
    """Request body is not valid UTF-8."""

    kind = "decode_error"
    status_code = 400


class ParseError(ExecutionError):
    """Decoded body is not valid JSON."""

    kind = "parse_error"
    status_code = 400


class ResolutionError(ExecutionError):
    kind = "resolution_error"
    status_code = 500


class RuleReferenceRejected(ResolutionError):
    """Rule reference points outside the rules folder."""

    kind = "invalid_rule_reference"
    status_code = 400


class ArtifactNotFound(ResolutionError):
    kind = "rule_not_found"
    status_code = 404


class ArtifactInvalid(ResolutionError):
    """Rule file exists but the evaluator cannot build a decision from it."""

    kind = "rule_invalid"
    status_code = 500


class EvaluationError(ExecutionError):
    kind = "evaluation_error"
    status_code = 500


class EvaluationTimeout(ExecutionError):
    kind = "evaluation_timeout"
    status_code = 504
