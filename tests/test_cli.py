# tests/test_cli.py
import pytest
from typer.testing import CliRunner

from on_the_gpu.cli import app

from conftest import PY

runner = CliRunner()


@pytest.fixture
def python_wrappers(monkeypatch):
    monkeypatch.setenv("ON_THE_GPU_VULKAN_WRAPPER", PY)
    monkeypatch.setenv("ON_THE_GPU_GL_WRAPPER", PY)


def test_relays_child_exit_code(python_wrappers, recorder):
    result = runner.invoke(app, ["-q", *recorder.command(3)])
    assert result.exit_code == 3


def test_options_stop_at_first_positional(python_wrappers, recorder):
    result = runner.invoke(app, ["--primus", "-q", *recorder.command(0, "--bar", "-q")])
    assert result.exit_code == 0
    assert recorder.result()["argv"] == ["--bar", "-q"]


def test_double_dash_separator(python_wrappers, recorder):
    result = runner.invoke(app, ["--gl", "--", *recorder.command(0, "--gl")])
    assert result.exit_code == 0
    assert recorder.result()["argv"] == ["--gl"]


def test_log_option_appends_line(python_wrappers, recorder, tmp_path):
    log_path = tmp_path / "runs.log"
    result = runner.invoke(app, ["--log", str(log_path), "--cwd", str(tmp_path), *recorder.command(1)])
    assert result.exit_code == 1
    (line,) = log_path.read_text(encoding="utf-8").splitlines()
    assert f"cwd={tmp_path} cmd={PY} {recorder.path}" in line


def test_log_path_from_env(python_wrappers, recorder, tmp_path, monkeypatch):
    log_path = tmp_path / "env.log"
    monkeypatch.setenv("ON_THE_GPU_LOG", str(log_path))
    runner.invoke(app, recorder.command(0))
    assert len(log_path.read_text(encoding="utf-8").splitlines()) == 1


def test_last_run_breadcrumb(python_wrappers, recorder, tmp_path):
    crumb = tmp_path / "last-run.log"
    result = runner.invoke(app, ["--last-run", str(crumb), *recorder.command(0)])
    assert result.exit_code == 0
    text = crumb.read_text(encoding="utf-8")
    assert text.startswith("Our arguments:\n")
    assert f"  cmd[0] = {str(recorder.path)!r}" in text
    assert text.endswith("Done.\n")


def test_empty_command_is_config_error():
    result = runner.invoke(app, [])
    assert result.exit_code == 2


def test_unknown_gpu_is_config_error():
    result = runner.invoke(app, ["--gpu", "metal", "glxgears"])
    assert result.exit_code == 2


def test_conflicting_strategy_flags(python_wrappers):
    result = runner.invoke(app, ["--gl", "--gpu", "vulkan", "glxgears"])
    assert result.exit_code == 2


def test_missing_wrapper_exits_127(monkeypatch):
    monkeypatch.setenv("ON_THE_GPU_VULKAN_WRAPPER", "on-the-gpu-no-such-wrapper")
    result = runner.invoke(app, ["glxgears"])
    assert result.exit_code == 127
