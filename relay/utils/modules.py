"""
Import modules that live in a project rather than in relay's environment.
"""

import importlib
import importlib.util
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from types import ModuleType


@contextmanager
def prepended_sys_path(path: str | Path) -> Iterator[None]:
    """Temporarily put path first on sys.path."""
    entry = str(path)
    sys.path.insert(0, entry)
    try:
        yield
    finally:
        try:
            sys.path.remove(entry)
        except ValueError:
            pass


def load_module_from_path(path: Path, name: str | None = None) -> ModuleType:
    """
    Load a module from a .py file.

    Raises:
        ImportError: If the file cannot be loaded as a module
    """
    module_name = name or path.stem
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load module from {path}", path=str(path))
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    return module


def require_project_module(project_root: str | Path, locator: str) -> ModuleType:
    """
    Import a module as seen from project_root.

    `locator` is either a dotted module name, searched with project_root
    first on sys.path, or a path to a .py file relative to project_root.

    Raises:
        ImportError: If the module cannot be found
        Exception: Whatever the module itself raises while executing
    """
    root = Path(project_root)
    if locator.endswith(".py") or "/" in locator or "\\" in locator:
        path = Path(locator)
        if not path.is_absolute():
            path = root / path
        if not path.is_file():
            raise ImportError(f"No module file at {path}", path=str(path))
        return load_module_from_path(path)

    with prepended_sys_path(root):
        importlib.invalidate_caches()
        return importlib.import_module(locator)
