# workflowgen_settings.py
# Settings for generating this repository's own CI workflow.
from __future__ import annotations

from workflowgen import GeneratorSettings, job, sh, sbt


def settings():
    return GeneratorSettings(
        scala_versions=["2.12.10", "2.13.1"],
        oses=["ubuntu-latest", "windows-latest"],
        build_preamble=[
            sbt("scalafmtCheckAll", "scalafmtSbtCheck", name="Check formatting"),
        ],
        build=sbt("test", "mimaReportBinaryIssues", name="Build project"),
        publish_branch_globs=["master", "v*"],
        added_jobs=[
            job(
                "docs",
                "Build docs",
                sh("sbt makeSite", name="Build site"),
                sh(
                    "git config user.name ci",
                    "git config user.email ci@example.com",
                    name="Configure git",
                    cond="github.event_name == 'push'",
                ),
                needs=["build"],
            ),
        ],
    )
