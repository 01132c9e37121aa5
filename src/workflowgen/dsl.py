# src/workflowgen/dsl.py
from __future__ import annotations

from typing import Dict, List, Optional

from .model import Run, ToolInvocation, UseAction, WorkflowJob, WorkflowStep


# ---------------------------------------------------------------------
# Step helpers
# ---------------------------------------------------------------------

def sh(
    *commands: str,
    name: str | None = None,
    cond: str | None = None,
    env: Optional[Dict[str, str]] = None,
) -> Run:
    """Create a shell step. Several commands end up in one `run:` block."""
    if not commands:
        raise ValueError("sh() needs at least one command")
    return Run(list(commands), name=name, cond=cond, env=env or {})


def sbt(
    *commands: str,
    name: str | None = None,
    cond: str | None = None,
    env: Optional[Dict[str, str]] = None,
) -> ToolInvocation:
    """Create a build tool step, e.g. sbt("clean", "test", name="Build")."""
    if not commands:
        raise ValueError("sbt() needs at least one command")
    return ToolInvocation(list(commands), name=name, cond=cond, env=env or {})


def use(
    owner: str,
    repo: str,
    version: int,
    *,
    params: Optional[Dict[str, str]] = None,
    name: str | None = None,
    cond: str | None = None,
    env: Optional[Dict[str, str]] = None,
) -> UseAction:
    """Create a step invoking `owner/repo@v<version>`."""
    return UseAction(owner, repo, version, params=params or {}, name=name, cond=cond, env=env or {})


# ---------------------------------------------------------------------
# Functional Job helper
# ---------------------------------------------------------------------

def job(
    id: str,
    name: str,
    *steps: WorkflowStep,  # allow: job("x", "X", sh(...), sbt(...))
    steps_list: Optional[List[WorkflowStep]] = None,
    oses: Optional[List[str]] = None,
    scalas: Optional[List[str]] = None,
    javas: Optional[List[str]] = None,
    env: Optional[Dict[str, str]] = None,
    cond: str | None = None,
    needs: Optional[List[str]] = None,
) -> WorkflowJob:
    steps_final: List[WorkflowStep] = []
    if steps_list:
        steps_final.extend(steps_list)
    steps_final.extend(steps)

    if not steps_final:
        raise ValueError(f"job({id!r}) must have at least one step")

    return WorkflowJob(
        id=id,
        name=name,
        steps=steps_final,
        oses=oses or ["ubuntu-latest"],
        scalas=scalas or ["2.13.1"],
        javas=javas or ["adopt@1.8"],
        env=env or {},
        cond=cond,
        needs=needs or [],
    )


# ---------------------------------------------------------------------
# Builder API
# ---------------------------------------------------------------------

class JobBuilder:
    def __init__(self, id: str, name: str | None = None):
        self.id = id
        self.name = name or id
        self._steps: list[WorkflowStep] = []
        self._needs: list[str] = []
        self._oses: list[str] = []
        self._scalas: list[str] = []
        self._javas: list[str] = []
        self._env: dict[str, str] = {}
        self._cond: str | None = None

    def depends_on(self, *job_ids: str):
        self._needs.extend(job_ids)
        return self

    def on(self, *oses: str):
        self._oses.extend(oses)
        return self

    def with_scala(self, *versions: str):
        self._scalas.extend(versions)
        return self

    def with_java(self, *versions: str):
        self._javas.extend(versions)
        return self

    def with_env(self, **env):
        # force values to str, the compiler only emits strings
        self._env.update({k: str(v) for k, v in env.items()})
        return self

    def when(self, cond: str):
        self._cond = cond
        return self

    def step(self, step: WorkflowStep):
        self._steps.append(step)
        return self

    def run(self, *commands: str, name: str | None = None):
        return self.step(sh(*commands, name=name))

    def sbt(self, *commands: str, name: str | None = None):
        return self.step(sbt(*commands, name=name))

    def build(self) -> WorkflowJob:
        if not self._steps:
            raise ValueError(f"Job '{self.id}' has no steps")

        return job(
            self.id,
            self.name,
            steps_list=self._steps,
            oses=self._oses,
            scalas=self._scalas,
            javas=self._javas,
            env=self._env,
            cond=self._cond,
            needs=self._needs,
        )


def build(id: str, name: str | None = None) -> JobBuilder:
    """Convenience: build('lint', 'Lint').run('scalafmt --test').build()"""
    return JobBuilder(id, name)
