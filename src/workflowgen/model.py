# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union


@dataclass(frozen=True)
class Run:
    """A step that runs shell commands."""
    commands: List[str]
    name: Optional[str] = None
    cond: Optional[str] = None
    env: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolInvocation:
    """
    A step that runs build tool (sbt) commands against the matrix-selected
    Scala version, all in one tool invocation.
    """
    commands: List[str]
    name: Optional[str] = None
    cond: Optional[str] = None
    env: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class UseAction:
    """A step that invokes a versioned action: `uses: owner/repo@v<version>`."""
    owner: str
    repo: str
    version: int
    params: Dict[str, str] = field(default_factory=dict)
    name: Optional[str] = None
    cond: Optional[str] = None
    env: Dict[str, str] = field(default_factory=dict)


# Closed set of step kinds. The compiler matches every member explicitly.
WorkflowStep = Union[Run, ToolInvocation, UseAction]

CHECKOUT = UseAction(
    "actions",
    "checkout",
    2,
    name="Checkout current branch (fast)",
)

SETUP_SCALA = UseAction(
    "olafurpg",
    "setup-scala",
    5,
    name="Setup Java and Scala",
    params={"java-version": "${{ matrix.java }}"},
)


@dataclass(frozen=True)
class WorkflowJob:
    """
    A CI job executed across the os x scala x java matrix.

    `oses` must not be empty. Any entry containing "windows" makes every step
    declare `shell: bash`.
    """
    id: str
    name: str
    steps: List[WorkflowStep]
    oses: List[str] = field(default_factory=lambda: ["ubuntu-latest"])
    scalas: List[str] = field(default_factory=lambda: ["2.13.1"])
    javas: List[str] = field(default_factory=lambda: ["adopt@1.8"])
    env: Dict[str, str] = field(default_factory=dict)
    cond: Optional[str] = None
    needs: List[str] = field(default_factory=list)

    @property
    def declares_shell(self) -> bool:
        return any("windows" in os_name for os_name in self.oses)


@dataclass(frozen=True)
class Document:
    """The whole workflow file: name, trigger branches, global env and jobs."""
    name: str
    branches: List[str]
    env: Dict[str, str] = field(default_factory=dict)
    jobs: List[WorkflowJob] = field(default_factory=list)
