# settings.py
from __future__ import annotations

import runpy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .errors import SettingsError
from .model import (
    CHECKOUT,
    SETUP_SCALA,
    Document,
    ToolInvocation,
    UseAction,
    WorkflowJob,
    WorkflowStep,
)

DEFAULT_SETTINGS_FILE = "workflowgen_settings.py"


@dataclass(frozen=True)
class GeneratorSettings:
    """
    Everything the generator needs to build the CI document.

    Passed explicitly to `generated_jobs` / `document_for`; there is no
    global settings state.
    """
    workflow_name: str = "Continuous Integration"
    tool_command: str = "sbt"

    build_preamble: List[WorkflowStep] = field(default_factory=list)
    build: WorkflowStep = field(
        default_factory=lambda: ToolInvocation(["test"], name="Build project")
    )

    publish_preamble: List[WorkflowStep] = field(default_factory=list)
    publish: WorkflowStep = field(
        default_factory=lambda: ToolInvocation(["+publish"], name="Publish project")
    )
    publish_branch_globs: List[str] = field(default_factory=lambda: ["master"])
    publish_cond: Optional[str] = None

    java_versions: List[str] = field(default_factory=lambda: ["adopt@1.8"])
    scala_versions: List[str] = field(default_factory=lambda: ["2.13.1"])
    oses: List[str] = field(default_factory=lambda: ["ubuntu-latest"])
    dependency_patterns: List[str] = field(
        default_factory=lambda: ["**/*.sbt", "project/build.properties"]
    )
    target_branches: List[str] = field(default_factory=lambda: ["*"])

    env: Dict[str, str] = field(
        default_factory=lambda: {"GITHUB_TOKEN": "${{ secrets.GITHUB_TOKEN }}"}
    )
    added_jobs: List[WorkflowJob] = field(default_factory=list)

    # build output directories of every subproject; project/target is always added
    target_directories: List[str] = field(default_factory=lambda: ["target"])


# ---------------------------------------------------------------------
# Job synthesis
# ---------------------------------------------------------------------

def _hashes(patterns: List[str]) -> str:
    return "-".join(f"${{{{ hashFiles('{glob}') }}}}" for glob in patterns)


def _cache_step(name: str, path: str, kind: str, hashes: str) -> UseAction:
    return UseAction(
        "actions",
        "cache",
        1,
        name=name,
        params={
            "path": path,
            "key": f"${{{{ runner.os }}}}-{kind}-cache-{hashes}",
        },
    )


def preamble_steps(settings: GeneratorSettings) -> List[WorkflowStep]:
    """Checkout, Java/Scala setup and the three dependency caches."""
    hashes = _hashes(settings.dependency_patterns)
    return [
        CHECKOUT,
        SETUP_SCALA,
        _cache_step("Cache ivy2", "~/.ivy2/cache", "sbt-ivy", hashes),
        _cache_step("Cache coursier", "~/.cache/coursier/v1", "sbt-coursier", hashes),
        _cache_step("Cache sbt", "~/.sbt", "sbt", hashes),
    ]


def _targets(settings: GeneratorSettings) -> List[str]:
    return list(settings.target_directories) + ["project/target"]


def upload_steps(settings: GeneratorSettings) -> List[WorkflowStep]:
    return [
        UseAction(
            "actions",
            "upload-artifact",
            1,
            name=f"Upload target directory '{target}'",
            params={
                "name": f"target-${{{{ runner.os }}}}-{target}",
                "path": target,
            },
        )
        for target in _targets(settings)
    ]


def download_steps(settings: GeneratorSettings) -> List[WorkflowStep]:
    return [
        UseAction(
            "actions",
            "download-artifact",
            1,
            name=f"Download target directory '{target}'",
            params={"name": f"target-${{{{ runner.os }}}}-{target}"},
        )
        for target in _targets(settings)
    ]


def publish_condition(settings: GeneratorSettings) -> str:
    branches = " && ".join(f"contains(github.ref, {g})" for g in settings.publish_branch_globs)
    cond = f"github.event_name != 'pull_request' && {branches}"
    if settings.publish_cond is not None:
        cond += f" && ({settings.publish_cond})"
    return cond


def generated_jobs(settings: GeneratorSettings) -> List[WorkflowJob]:
    """
    The `build` job, the `publish` job (only when publish branch globs are
    set) and any user-added jobs, in that order.
    """
    preamble = preamble_steps(settings)

    jobs = [
        WorkflowJob(
            "build",
            "Build and Test",
            preamble
            + list(settings.build_preamble)
            + [settings.build]
            + upload_steps(settings),
            oses=list(settings.oses),
            scalas=list(settings.scala_versions),
            javas=list(settings.java_versions),
        )
    ]

    if settings.publish_branch_globs:
        jobs.append(
            WorkflowJob(
                "publish",
                "Publish Artifacts",
                preamble
                + download_steps(settings)
                + list(settings.publish_preamble)
                + [settings.publish],
                oses=["ubuntu-latest"],
                scalas=list(settings.scala_versions[:1]),
                javas=list(settings.java_versions),
                cond=publish_condition(settings),
                needs=["build"],
            )
        )

    jobs.extend(settings.added_jobs)
    return jobs


def document_for(settings: GeneratorSettings) -> Document:
    return Document(
        name=settings.workflow_name,
        branches=list(settings.target_branches),
        env=dict(settings.env),
        jobs=generated_jobs(settings),
    )


# ---------------------------------------------------------------------
# Settings files
# ---------------------------------------------------------------------

def load_settings(path: str | Path | None = None) -> GeneratorSettings:
    """
    Load settings from a python file.

    The file must define either:
      - settings() -> GeneratorSettings
      - SETTINGS = GeneratorSettings(...)

    With no path, the defaults are returned.
    """
    if path is None:
        return GeneratorSettings()

    settings_path = Path(path).expanduser().resolve()
    if not settings_path.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")
    if settings_path.suffix != ".py":
        raise SettingsError(
            f"Settings must be a .py file, got: {settings_path.name}",
            path=str(settings_path),
        )

    module_name = f"workflowgen_settings_{settings_path.stem}"
    globals_dict = runpy.run_path(str(settings_path), run_name=module_name)

    settings = None
    if "settings" in globals_dict and callable(globals_dict["settings"]):
        settings = globals_dict["settings"]()
    elif "SETTINGS" in globals_dict:
        settings = globals_dict["SETTINGS"]

    if not isinstance(settings, GeneratorSettings):
        raise SettingsError(
            "Settings file must return/define GeneratorSettings. "
            "Define settings() -> GeneratorSettings or SETTINGS = GeneratorSettings(...).",
            path=str(settings_path),
        )

    return settings
