import json
from typing import List

import pytest
from click.testing import CliRunner

from gfpub import bootstrap
from gfpub.cli import main
from gfpub.config import DEFAULT_FLAGS
from gfpub.subprocess_utils import CommandError, RunResult


@pytest.fixture
def workdir(tmp_path, monkeypatch: pytest.MonkeyPatch):
    for name in ("Y", "X", "node_modules"):
        (tmp_path / name).mkdir()
    (tmp_path / "package.json").write_text("{}", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_get_local_folders_lists_only_directories(workdir) -> None:
    choices = bootstrap.get_local_folders()

    assert [c.value for c in choices] == ["X", "Y", "node_modules"]
    assert all(c.title == c.value for c in choices)


def test_decline_exits_zero_without_file(workdir) -> None:
    result = CliRunner().invoke(main, [], input="n\n")

    assert result.exit_code == 0
    assert not (workdir / "gfpub.json").exists()


def test_accept_with_defaults_writes_file_and_forces_rerun(workdir) -> None:
    # 선택지 순서: 1) X 2) Y 3) node_modules
    result = CliRunner().invoke(main, [], input="y\ny\n1\n")

    assert result.exit_code == 1
    data = json.loads((workdir / "gfpub.json").read_text(encoding="utf-8"))
    assert data["functionFolders"] == ["X"]
    assert data["flags"] == DEFAULT_FLAGS


def test_without_defaults_and_empty_selection(workdir) -> None:
    result = CliRunner().invoke(main, [], input="y\nn\n\n")

    assert result.exit_code == 1
    data = json.loads((workdir / "gfpub.json").read_text(encoding="utf-8"))
    assert data == {"functionFolders": [], "flags": []}


def test_invalid_selection_prompts_again(workdir) -> None:
    result = CliRunner().invoke(main, [], input="y\ny\n9\n2, 1\n")

    assert result.exit_code == 1
    assert "1 ~ 3" in result.output
    data = json.loads((workdir / "gfpub.json").read_text(encoding="utf-8"))
    assert data["functionFolders"] == ["Y", "X"]


def test_bootstrap_never_deploys(workdir, monkeypatch: pytest.MonkeyPatch) -> None:
    called: List[str] = []
    monkeypatch.setattr("gfpub.cli.deploy_all", lambda cfg: called.append("deploy"))

    CliRunner().invoke(main, [], input="y\ny\n1\n")

    assert called == []


def test_opens_editor_in_vscode_terminal(workdir, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TERM_PROGRAM", "vscode")
    calls: List[list[str]] = []

    def fake_run(cmd, **_kwargs) -> RunResult:  # noqa: ANN001
        calls.append(list(cmd))
        return RunResult(returncode=0, stdout="", stderr="")

    monkeypatch.setattr(bootstrap, "run_command", fake_run)

    result = CliRunner().invoke(main, [], input="y\ny\n1\n")

    assert result.exit_code == 0
    assert calls == [["code", str(workdir.resolve() / "gfpub.json")]]


def test_editor_launch_failure_exits_one(workdir, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TERM_PROGRAM", "vscode")

    def failing_run(cmd, **_kwargs) -> RunResult:  # noqa: ANN001
        raise CommandError("필요한 명령을 찾을 수 없습니다: code", cmd=cmd)

    monkeypatch.setattr(bootstrap, "run_command", failing_run)

    result = CliRunner().invoke(main, [], input="y\ny\n1\n")

    assert result.exit_code == 1
    assert (workdir / "gfpub.json").exists()


def test_write_failure_exits_one(workdir, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(bootstrap, "save_config_file", lambda path, cfg: False)
    monkeypatch.setenv("TERM_PROGRAM", "vscode")
    calls: List[str] = []
    monkeypatch.setattr(bootstrap, "run_command", lambda cmd, **kw: calls.append("editor"))

    result = CliRunner().invoke(main, [], input="y\ny\n1\n")

    assert result.exit_code == 1
    assert calls == []


def test_non_ascii_digit_selection_prompts_again(workdir) -> None:
    result = CliRunner().invoke(main, [], input="y\ny\n²\n1\n")

    assert result.exit_code == 1
    data = json.loads((workdir / "gfpub.json").read_text(encoding="utf-8"))
    assert data["functionFolders"] == ["X"]


def test_editor_command_with_arguments(workdir, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TERM_PROGRAM", "vscode")
    monkeypatch.setenv("GFPUB_EDITOR", "code --wait")
    calls: List[list[str]] = []

    def fake_run(cmd, **_kwargs) -> RunResult:  # noqa: ANN001
        calls.append(list(cmd))
        return RunResult(returncode=0, stdout="", stderr="")

    monkeypatch.setattr(bootstrap, "run_command", fake_run)

    result = CliRunner().invoke(main, [], input="y\ny\n1\n")

    assert result.exit_code == 0
    assert calls == [["code", "--wait", str(workdir.resolve() / "gfpub.json")]]
