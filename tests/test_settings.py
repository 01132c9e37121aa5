import pytest

from workflowgen.errors import SettingsError
from workflowgen.generator import render
from workflowgen.model import CHECKOUT, SETUP_SCALA, Run, ToolInvocation, WorkflowJob
from workflowgen.settings import (
    GeneratorSettings,
    document_for,
    download_steps,
    generated_jobs,
    load_settings,
    preamble_steps,
    publish_condition,
    upload_steps,
)


def test_default_jobs():
    jobs = generated_jobs(GeneratorSettings())

    assert [j.id for j in jobs] == ["build", "publish"]
    assert jobs[0].name == "Build and Test"
    assert jobs[1].name == "Publish Artifacts"


def test_publish_job_is_dropped_without_branch_globs():
    jobs = generated_jobs(GeneratorSettings(publish_branch_globs=[]))
    assert [j.id for j in jobs] == ["build"]


def test_preamble_caches_use_dependency_hashes():
    steps = preamble_steps(GeneratorSettings())

    assert steps[0] == CHECKOUT
    assert steps[1] == SETUP_SCALA
    assert [s.name for s in steps[2:]] == ["Cache ivy2", "Cache coursier", "Cache sbt"]

    hashes = "${{ hashFiles('**/*.sbt') }}-${{ hashFiles('project/build.properties') }}"
    assert steps[2].params == {
        "path": "~/.ivy2/cache",
        "key": "${{ runner.os }}-sbt-ivy-cache-" + hashes,
    }
    assert steps[3].params["key"] == "${{ runner.os }}-sbt-coursier-cache-" + hashes
    assert steps[4].params["key"] == "${{ runner.os }}-sbt-cache-" + hashes


def test_upload_and_download_steps_cover_project_target():
    settings = GeneratorSettings(target_directories=["core/target", "target"])

    uploads = upload_steps(settings)
    assert [s.params["path"] for s in uploads] == ["core/target", "target", "project/target"]
    assert uploads[0].name == "Upload target directory 'core/target'"
    assert uploads[0].repo == "upload-artifact"
    assert uploads[0].params["name"] == "target-${{ runner.os }}-core/target"

    downloads = download_steps(settings)
    assert [s.params for s in downloads][-1] == {"name": "target-${{ runner.os }}-project/target"}
    assert all(s.repo == "download-artifact" for s in downloads)


def test_build_job_layout():
    extra = Run(["./setup.sh"], name="Setup")
    settings = GeneratorSettings(
        build_preamble=[extra],
        scala_versions=["2.12.10", "2.13.1"],
        oses=["ubuntu-latest", "windows-latest"],
    )
    build = generated_jobs(settings)[0]

    assert build.steps[5] == extra
    assert build.steps[6] == ToolInvocation(["test"], name="Build project")
    assert build.steps[7].repo == "upload-artifact"
    assert build.scalas == ["2.12.10", "2.13.1"]
    assert build.oses == ["ubuntu-latest", "windows-latest"]
    assert build.declares_shell


def test_publish_job_layout():
    settings = GeneratorSettings(scala_versions=["2.12.10", "2.13.1"])
    publish = generated_jobs(settings)[1]

    assert publish.needs == ["build"]
    assert publish.oses == ["ubuntu-latest"]
    assert publish.scalas == ["2.12.10"]
    assert publish.steps[5].repo == "download-artifact"
    assert publish.steps[-1] == ToolInvocation(["+publish"], name="Publish project")


def test_publish_condition():
    assert publish_condition(GeneratorSettings()) == (
        "github.event_name != 'pull_request' && contains(github.ref, master)"
    )

    settings = GeneratorSettings(publish_branch_globs=["master", "v*"], publish_cond="success()")
    assert publish_condition(settings) == (
        "github.event_name != 'pull_request' && contains(github.ref, master)"
        " && contains(github.ref, v*) && (success())"
    )


def test_added_jobs_come_last():
    docs = WorkflowJob("docs", "Docs", [Run(["make"])])
    jobs = generated_jobs(GeneratorSettings(added_jobs=[docs]))
    assert jobs[-1] is docs


def test_document_for_defaults():
    document = document_for(GeneratorSettings())

    assert document.name == "Continuous Integration"
    assert document.branches == ["*"]
    assert document.env == {"GITHUB_TOKEN": "${{ secrets.GITHUB_TOKEN }}"}


def test_default_settings_render():
    rendered = render(GeneratorSettings())

    assert rendered.startswith("name: Continuous Integration\n\non:\n")
    assert "  publish:\n    name: Publish Artifacts\n    needs: [build]\n" in rendered
    assert "      - name: Build project\n        run: sbt ++${{ matrix.scala }} test\n" in rendered


# ============================================================================
# Settings files
# ============================================================================

def test_load_settings_without_path_returns_defaults():
    assert load_settings(None) == GeneratorSettings()


def test_load_settings_from_constant(tmp_path):
    path = tmp_path / "ci_settings.py"
    path.write_text(
        "from workflowgen.settings import GeneratorSettings\n"
        "SETTINGS = GeneratorSettings(tool_command='./sbt')\n"
    )

    assert load_settings(path).tool_command == "./sbt"


def test_load_settings_from_function(tmp_path):
    path = tmp_path / "ci_settings.py"
    path.write_text(
        "from workflowgen.settings import GeneratorSettings\n"
        "def settings():\n"
        "    return GeneratorSettings(target_branches=['main'])\n"
    )

    assert load_settings(str(path)).target_branches == ["main"]


def test_load_settings_requires_settings(tmp_path):
    path = tmp_path / "ci_settings.py"
    path.write_text("JOBS = []\n")

    with pytest.raises(SettingsError) as exc_info:
        load_settings(path)
    assert exc_info.value.kind == "invalid_settings"


def test_load_settings_requires_python_file(tmp_path):
    path = tmp_path / "ci_settings.yml"
    path.write_text("name: ci\n")

    with pytest.raises(SettingsError):
        load_settings(path)


def test_load_settings_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "nope.py")
