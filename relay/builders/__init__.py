"""
Built-in builders.

Workspace targets refer to these by name in their `builder` field.
"""

from ..core.container import ServiceContainer
from ..core.interfaces.builder import BuilderDescription
from .dev_server import DevServerBuilder, DevServerOptions, DevServerResult
from .e2e import E2EBuilder, E2EOptions

BUILTIN_BUILDERS = [
    BuilderDescription(
        name="relay:dev-server",
        options_model=DevServerOptions,
        builder_class=DevServerBuilder,
        description="Start a development server and report when it accepts connections",
    ),
    BuilderDescription(
        name="relay:e2e",
        options_model=E2EOptions,
        builder_class=E2EBuilder,
        description="Run end-to-end tests against a dev server or a base URL",
    ),
]


def register_builtin_builders(container: ServiceContainer) -> None:
    """Register every built-in builder with the container."""
    for description in BUILTIN_BUILDERS:
        container.register_builder(description)


__all__ = [
    "BUILTIN_BUILDERS",
    "DevServerBuilder",
    "DevServerOptions",
    "DevServerResult",
    "E2EBuilder",
    "E2EOptions",
    "register_builtin_builders",
]
