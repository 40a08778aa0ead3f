import subprocess as real_subprocess
from types import SimpleNamespace

from tests.helpers.webpilot_imports import dependencies


def test_check_tool_returns_false_when_missing(monkeypatch):
    monkeypatch.setattr(dependencies.shutil, "which", lambda _: None)

    assert dependencies.check_tool(["playwright"]) is False


def test_check_module():
    assert dependencies.check_module("json") is True
    assert dependencies.check_module("definitely_not_installed_module") is False


def test_verify_dependencies_handles_success(monkeypatch):
    commands = []

    monkeypatch.setattr(dependencies.shutil, "which", lambda _: "/usr/bin/fake")
    monkeypatch.setattr(dependencies, "check_module", lambda _module: True)

    def fake_run(command, capture_output, text, check):
        commands.append(command)
        return real_subprocess.CompletedProcess(command, 0)

    namespace = SimpleNamespace(
        run=fake_run,
        CalledProcessError=real_subprocess.CalledProcessError,
    )
    monkeypatch.setattr(dependencies, "subprocess", namespace)

    results = dependencies.verify_dependencies()

    assert all(results.values())
    assert "beautifulsoup4" in results
    assert commands == [["playwright", "--version"]]


def test_verify_dependencies_handles_failure(monkeypatch):
    monkeypatch.setattr(dependencies.shutil, "which", lambda _: "/usr/bin/fake")

    def fake_run(command, capture_output, text, check):
        raise real_subprocess.CalledProcessError(returncode=1, cmd=command)

    namespace = SimpleNamespace(
        run=fake_run,
        CalledProcessError=real_subprocess.CalledProcessError,
    )
    monkeypatch.setattr(dependencies, "subprocess", namespace)

    results = dependencies.verify_dependencies()

    assert results["playwright"] is False


def test_check_tool_false_on_nonzero_exit_or_os_error(monkeypatch):
    monkeypatch.setattr(dependencies.shutil, "which", lambda _: "/usr/bin/fake")
    outcomes = [real_subprocess.CompletedProcess(["playwright"], 2), PermissionError("not executable")]

    def fake_run(command, capture_output, text, check):
        outcome = outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    namespace = SimpleNamespace(
        run=fake_run,
        CalledProcessError=real_subprocess.CalledProcessError,
    )
    monkeypatch.setattr(dependencies, "subprocess", namespace)

    assert dependencies.check_tool(["playwright", "--version"]) is False
    assert dependencies.check_tool(["playwright", "--version"]) is False
