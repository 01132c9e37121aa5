# generator.py
from __future__ import annotations

import difflib
from pathlib import Path

from .compiler import compile_document
from .errors import WorkflowDriftError
from .settings import GeneratorSettings, document_for

WORKFLOWS_DIR = Path(".github") / "workflows"
DEFAULT_WORKFLOW_FILE = "ci.yml"


def workflow_path(base_dir: str | Path = ".", file_name: str = DEFAULT_WORKFLOW_FILE) -> Path:
    return Path(base_dir) / WORKFLOWS_DIR / file_name


def render(settings: GeneratorSettings) -> str:
    """Compile the settings into the workflow file contents."""
    return compile_document(document_for(settings), settings.tool_command)


def generate(settings: GeneratorSettings, base_dir: str | Path = ".") -> Path:
    """
    Write .github/workflows/ci.yml under `base_dir`.

    The document is compiled completely before the file is opened, so an
    invalid model never leaves a half-written workflow behind.
    """
    contents = render(settings)

    path = workflow_path(base_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        f.write(contents)

    return path


def check(settings: GeneratorSettings, base_dir: str | Path = ".") -> Path:
    """Raise WorkflowDriftError unless the file on disk matches `render(settings)`."""
    expected = render(settings)
    path = workflow_path(base_dir)

    actual = path.read_text(encoding="utf-8") if path.exists() else ""
    if actual != expected:
        diff = "".join(
            difflib.unified_diff(
                actual.splitlines(keepends=True),
                expected.splitlines(keepends=True),
                fromfile=f"{path} (on disk)",
                tofile=f"{path} (generated)",
            )
        )
        raise WorkflowDriftError(str(path), diff)

    return path
