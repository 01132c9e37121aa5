# errors.py
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class WorkflowGenError(Exception):
    """
    Structured generator error with enough context for:
      - clean CLI output
      - debugging without full tracebacks
    """
    kind: str
    message: str
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        lines = [f"{self.kind}: {self.message}"]
        for k, v in self.details.items():
            lines.append(f"{k}={v}")
        return "\n".join(lines)


class InvalidKeyError(WorkflowGenError):
    """An env variable or action parameter key that cannot be emitted bare."""

    def __init__(self, key: str, mapping: str = "env"):
        super().__init__(
            kind="invalid_key",
            message=f"'{key}' is not a valid environment variable name",
            details={"key": key, "mapping": mapping},
        )

    @property
    def key(self) -> str:
        return self.details["key"]


class SettingsError(WorkflowGenError):
    def __init__(self, message: str, path: str | None = None):
        details = {"path": path} if path else {}
        super().__init__(kind="invalid_settings", message=message, details=details)


class WorkflowDriftError(WorkflowGenError):
    """The workflow file on disk does not match what the settings generate."""

    def __init__(self, path: str, diff: str):
        super().__init__(
            kind="workflow_drift",
            message=f"{path} is out of date",
            details={"path": path, "diff": diff},
        )

    @property
    def diff(self) -> str:
        return self.details["diff"]
