from unittest.mock import patch

import pytest
from click.testing import CliRunner

from taskguard.cli import cli, discover_targets_file
from taskguard.errors import TargetDefinitionError

runner = CliRunner()


@pytest.fixture(autouse=True)
def empty_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TASKGUARD_FILE", raising=False)
    monkeypatch.delenv("ENV", raising=False)
    monkeypatch.delenv("SERVICE", raising=False)
    return tmp_path


def test_help_lists_targets_by_category():
    result = runner.invoke(cli, ["help"])
    assert result.exit_code == 0
    out = result.output
    assert out.index("Development") < out.index("AWS") < out.index("Terraform")
    assert "terraform-plan" in out
    assert "Plan infrastructure (SERVICE=xxx ENV=xxx)" in out


def test_no_target_means_help():
    result = runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage: taskguard <target>" in result.output


def test_unknown_target_exit_code():
    result = runner.invoke(cli, ["terraform-plam"])
    assert result.exit_code == 2
    assert "Unknown target" in result.output
    assert "terraform-plan" in result.output


def test_missing_guarded_variable_exit_code():
    result = runner.invoke(cli, ["terraform-plan", "SERVICE=foo"])
    assert result.exit_code == 3
    assert "ENV" in result.output


def test_unresolved_placeholder_exit_code():
    result = runner.invoke(cli, ["aws-bucket-create", "ENV=dev"], env={"AWS_REGION": None})
    assert result.exit_code == 4
    assert "AWS_REGION" in result.output


def test_bad_assignment_is_usage_error():
    result = runner.invoke(cli, ["terraform-plan", "ENV"])
    assert result.exit_code == 2
    assert "KEY=VALUE" in result.output


def test_dry_run_prints_rendered_plan():
    result = runner.invoke(cli, ["--dry-run", "terraform-plan", "SERVICE=foo", "ENV=staging"])
    assert result.exit_code == 0
    assert "cd foo/terraform && terraform init" in result.output
    assert "-var-file=tfvars/staging.tfvars" in result.output


def test_step_failure_exit_code_from_targets_file(empty_cwd):
    (empty_cwd / "taskguard_targets.py").write_text(
        "from taskguard.dsl import sh, target\n"
        "TARGETS = [target('boom', sh('exit 7'), sh('echo never'))]\n"
    )
    result = runner.invoke(cli, ["boom"])
    assert result.exit_code == 7
    assert "Step failed" in result.output


def test_targets_file_option_and_success(empty_cwd):
    path = empty_cwd / "elsewhere.py"
    path.write_text(
        "from taskguard.dsl import sh, target\n"
        "TARGETS = [target('ok', sh('test \"$GREETING\" = hi'), guard=['GREETING'])]\n"
    )
    result = runner.invoke(cli, ["--file", str(path), "ok", "GREETING=hi"])
    assert result.exit_code == 0
    assert "[ok] done" in result.output


def test_multiple_targets_files_is_an_error(empty_cwd):
    (empty_cwd / "a_targets.py").write_text("TARGETS = []\n")
    (empty_cwd / "b_targets.py").write_text("TARGETS = []\n")
    with pytest.raises(TargetDefinitionError):
        discover_targets_file(None)
    result = runner.invoke(cli, ["help"])
    assert result.exit_code == 5


def test_repo_targets_file_loads():
    from pathlib import Path

    from taskguard.registry import Registry
    from taskguard.runner import load_targets

    repo_file = Path(__file__).resolve().parents[2] / "taskguard_targets.py"
    registry = Registry(load_targets(repo_file))
    assert [t.name for t in registry.plan("ci")] == ["lint", "format-check", "ci"]


def test_interrupt_exits_130():
    with patch("taskguard.cli.dispatch", side_effect=KeyboardInterrupt):
        result = runner.invoke(cli, ["terraform-plan", "SERVICE=foo", "ENV=dev"])
    assert result.exit_code == 130
    assert "Interrupted by user" in result.output
