# compiler.py
from __future__ import annotations

from typing import List, Mapping, Sequence

from .model import Document, Run, ToolInvocation, UseAction, WorkflowJob, WorkflowStep
from .render import as_sequence_item, compile_env, compile_list, indent, wrap

# ---------------------------------------------------------------------
# Document -> YAML text
# ---------------------------------------------------------------------
# Every function here is a pure transform. Nothing is printed or written;
# the generator module owns the output file.
# ---------------------------------------------------------------------

SCALA_MATRIX_TOKEN = "++${{ matrix.scala }}"


def _quote_tool_command(command: str) -> str:
    # multi-word tool commands must stay one argument to the tool
    if " " in command:
        return f"'{command}'"
    return command


def _step_body(step: WorkflowStep, tool_command: str) -> str:
    if isinstance(step, Run):
        return "run: " + wrap("\n".join(step.commands))

    if isinstance(step, ToolInvocation):
        safe_commands = [_quote_tool_command(c) for c in step.commands]
        return "run: " + wrap(f"{tool_command} {SCALA_MATRIX_TOKEN} " + "\n".join(safe_commands))

    if isinstance(step, UseAction):
        rendered = f"uses: {step.owner}/{step.repo}@v{step.version}"
        params = compile_env(step.params, header="with")
        if params:
            rendered += "\n" + params
        return rendered

    raise TypeError(f"Unknown workflow step type: {type(step).__name__}")


def compile_step(step: WorkflowStep, tool_command: str, declare_shell: bool = False) -> str:
    """
    Render one step as a YAML sequence item.

    The preamble (name, if, shell, env) comes first, one line per part,
    followed directly by the `run:`/`uses:` body.
    """
    lines: List[str] = []
    if step.name is not None:
        lines.append("name: " + wrap(step.name))
    if step.cond is not None:
        lines.append("if: " + wrap(step.cond))
    if declare_shell:
        lines.append("shell: bash")

    env = compile_env(step.env)
    if env:
        lines.append(env)

    lines.append(_step_body(step, tool_command))
    return as_sequence_item("\n".join(lines))


def compile_job(job: WorkflowJob, tool_command: str) -> str:
    """Render one job as `<id>:` followed by its indented body."""
    lines = [f"name: {wrap(job.name)}"]

    if job.needs:
        lines.append(f"needs: [{', '.join(job.needs)}]")
    if job.cond is not None:
        lines.append(f"if: {wrap(job.cond)}")

    lines.extend([
        "strategy:",
        "  matrix:",
        f"    os: [{', '.join(job.oses)}]",
        f"    scala: [{', '.join(job.scalas)}]",
        f"    java: [{', '.join(job.javas)}]",
        "runs-on: ${{ matrix.os }}",
    ])

    env = compile_env(job.env)
    if env:
        lines.append(env)

    declare_shell = job.declares_shell
    steps = [compile_step(s, tool_command, declare_shell=declare_shell) for s in job.steps]
    lines.append("steps:")
    lines.append(indent("\n\n".join(steps), 1))

    return f"{job.id}:\n" + indent("\n".join(lines), 1)


def _compile_trigger(kind: str, branches: Sequence[str]) -> str:
    return f"  {kind}:\n" + indent(compile_list(branches), 2)


def compile_workflow(
    name: str,
    branches: Sequence[str],
    env: Mapping[str, str],
    jobs: Sequence[WorkflowJob],
    tool_command: str,
) -> str:
    """
    Compile a complete workflow document.

    Raises InvalidKeyError if any env or `with:` key is not identifier-safe;
    nothing is returned in that case.
    """
    rendered_env = compile_env(env)
    if rendered_env:
        rendered_env += "\n\n"

    rendered_jobs = "\n\n".join(compile_job(j, tool_command) for j in jobs)

    return (
        f"name: {wrap(name)}\n"
        "\n"
        "on:\n"
        f"{_compile_trigger('pull_request', branches)}\n"
        f"{_compile_trigger('push', branches)}\n"
        "\n"
        f"{rendered_env}jobs:\n"
        f"{indent(rendered_jobs, 1)}\n"
    )


def compile_document(document: Document, tool_command: str) -> str:
    return compile_workflow(
        document.name,
        document.branches,
        document.env,
        document.jobs,
        tool_command,
    )
