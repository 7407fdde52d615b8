"""
Fixtures shared by the unit tests: workspaces and stub builders.
"""

from pathlib import Path
from typing import Any

import pytest

from relay.architect.architect import Architect
from relay.architect.workspace import Workspace
from relay.builders.dev_server import DevServerOptions, DevServerResult
from relay.core.container import get_container
from relay.core.interfaces.builder import BuildEvent, BuilderDescription, IBuilder
from relay.core.models.workspace import WorkspaceDefinition


def make_workspace(root: Path, projects: dict[str, Any]) -> Workspace:
    return Workspace(root=root, definition=WorkspaceDefinition.model_validate({"projects": projects}))


@pytest.fixture
def app_workspace(tmp_path: Path) -> Workspace:
    """
    Workspace with one project 'app':
    - serve: relay:dev-server on port 4200 with a 'production' configuration
    - e2e: relay:e2e pointing at app:serve:production
    """
    return make_workspace(
        tmp_path,
        {
            "app": {
                "root": "app",
                "targets": {
                    "serve": {
                        "builder": "relay:dev-server",
                        "options": {"command": ["serve", "--port", "{port}"], "port": 4200},
                        "configurations": {"production": {"ssl": False}},
                    },
                    "e2e": {
                        "builder": "relay:e2e",
                        "options": {
                            "protractor_config": "e2e/protractor.conf.js",
                            "dev_server_target": "app:serve:production",
                        },
                    },
                },
            }
        },
    )


@pytest.fixture
def stub_dev_server():
    """
    Register a stub `relay:dev-server` builder.

    The returned class replays `events` and records the configurations it
    was run with in `calls`. The default event reports port 4300.
    """

    class StubDevServer(IBuilder):
        events: list[BuildEvent] = [
            BuildEvent(success=True, result=DevServerResult(host="0.0.0.0", port=4300))
        ]
        calls: list = []

        async def run(self, config):
            type(self).calls.append(config)
            for event in type(self).events:
                yield event

    get_container().register_builder(
        BuilderDescription(
            name="relay:dev-server",
            options_model=DevServerOptions,
            builder_class=StubDevServer,
        )
    )
    return StubDevServer


@pytest.fixture
def architect(app_workspace: Workspace) -> Architect:
    return Architect(app_workspace)
