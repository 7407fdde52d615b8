"""
Unit tests for ProcessRunner and its child-process entry point.
"""

import asyncio
import io
import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

import relay
from relay.core.exceptions import SubprocessFailure
from relay.services.runner import fork
from relay.services.runner import process_runner as runner_module
from relay.services.runner.process_runner import CHILD_BOOTSTRAP, CHILD_MODULE, ProcessRunner

TOOL_MODULE = """
import json
import sys

def init(config_path, extra):
    with open("received.json", "w") as f:
        json.dump({"config_path": config_path, "extra": extra}, f)

async def init_async(config_path, extra):
    init(config_path, extra)

def fails(*args):
    raise RuntimeError("tool crashed")

def exits(*args):
    sys.exit(3)

def says_no(*args):
    return False
"""


def fake_process(returncode: int) -> MagicMock:
    process = MagicMock()
    process.returncode = returncode
    process.communicate = AsyncMock(return_value=(None, None))
    return process


class TestProcessRunner:
    pytestmark = [pytest.mark.asyncio]

    async def test_spawns_child_module_with_payload_on_stdin(self, monkeypatch, tmp_path):
        process = fake_process(0)
        spawn = AsyncMock(return_value=process)
        monkeypatch.setattr(runner_module.asyncio, "create_subprocess_exec", spawn)

        event = await ProcessRunner(python="/usr/bin/python3").run(
            tmp_path, "tool.launcher", "init", ["/abs/conf.js", {"elementExplorer": False}]
        )

        assert event.success is True
        args, kwargs = spawn.call_args
        assert args == ("/usr/bin/python3", "-c", CHILD_BOOTSTRAP)
        assert kwargs["cwd"] == str(tmp_path)
        assert kwargs["stdin"] is asyncio.subprocess.PIPE

        (stdin,), _ = process.communicate.call_args
        assert json.loads(stdin) == {
            "root": str(tmp_path),
            "module": "tool.launcher",
            "invocation": "init",
            "args": ["/abs/conf.js", {"elementExplorer": False}],
        }

    async def test_nonzero_exit_is_a_failed_event(self, monkeypatch, tmp_path):
        monkeypatch.setattr(
            runner_module.asyncio, "create_subprocess_exec", AsyncMock(return_value=fake_process(3))
        )

        event = await ProcessRunner().run(tmp_path, "tool.launcher", "init")

        assert event.success is False
        assert isinstance(event.error, SubprocessFailure)
        assert event.error.process_exit_code == 3
        assert event.error.context["command"] == "tool.launcher:init"

    async def test_spawn_error_is_a_failed_event(self, monkeypatch, tmp_path):
        monkeypatch.setattr(
            runner_module.asyncio,
            "create_subprocess_exec",
            AsyncMock(side_effect=FileNotFoundError("no python")),
        )

        event = await ProcessRunner().run(tmp_path, "tool.launcher", "init")

        assert event.success is False
        assert isinstance(event.error, SubprocessFailure)
        assert isinstance(event.error.__cause__, FileNotFoundError)


class TestForkEntryPoint:
    @pytest.fixture
    def project(self, tmp_path, monkeypatch):
        (tmp_path / "fake_e2e_tool.py").write_text(TOOL_MODULE)
        monkeypatch.chdir(tmp_path)
        yield tmp_path
        sys.modules.pop("fake_e2e_tool", None)

    def payload(self, root, invocation, module="fake_e2e_tool"):
        return {
            "root": str(root),
            "module": module,
            "invocation": invocation,
            "args": ["/abs/conf.js", {"baseUrl": "http://localhost:4300"}],
        }

    def test_calls_invocation_with_args(self, project):
        assert fork.run_payload(self.payload(project, "init")) == 0

        received = json.loads((project / "received.json").read_text())
        assert received == {
            "config_path": "/abs/conf.js",
            "extra": {"baseUrl": "http://localhost:4300"},
        }

    def test_coroutine_invocation_is_awaited(self, project):
        assert fork.run_payload(self.payload(project, "init_async")) == 0
        assert (project / "received.json").exists()

    def test_module_can_be_a_file_path(self, project):
        payload = self.payload(project, "init", module="fake_e2e_tool.py")

        assert fork.run_payload(payload) == 0

    def test_false_result_is_a_failure(self, project):
        assert fork.run_payload(self.payload(project, "says_no")) == 1

    def test_main_reports_sys_exit_code(self, project, monkeypatch):
        monkeypatch.setattr(sys, "stdin", io.StringIO(json.dumps(self.payload(project, "exits"))))

        assert fork.main() == 3

    def test_main_reports_exceptions_as_exit_1(self, project, monkeypatch, capsys):
        monkeypatch.setattr(sys, "stdin", io.StringIO(json.dumps(self.payload(project, "fails"))))

        assert fork.main() == 1
        assert "tool crashed" in capsys.readouterr().err

    def test_main_rejects_invalid_payload(self, monkeypatch):
        monkeypatch.setattr(sys, "stdin", io.StringIO("not json"))

        assert fork.main() == 2


class TestChildInterpreter:
    def test_bootstrap_drops_the_project_root_before_importing_relay(self):
        assert CHILD_BOOTSTRAP.index("del sys.path[0]") < CHILD_BOOTSTRAP.index(CHILD_MODULE)

    @pytest.mark.asyncio
    async def test_project_packages_do_not_shadow_relay(self, tmp_path, monkeypatch):
        shadow = tmp_path / "relay"
        shadow.mkdir()
        (shadow / "__init__.py").write_text('raise ImportError("shadowed relay")\n')
        (tmp_path / "fake_e2e_tool.py").write_text(TOOL_MODULE)
        monkeypatch.setenv("PYTHONPATH", str(Path(relay.__file__).resolve().parent.parent))

        event = await ProcessRunner().run(
            tmp_path, "fake_e2e_tool", "init", ["/abs/conf.js", {"elementExplorer": False}]
        )

        assert event.success is True, event.error
        received = json.loads((tmp_path / "received.json").read_text())
        assert received["extra"] == {"elementExplorer": False}
