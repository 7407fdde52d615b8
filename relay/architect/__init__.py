"""
Workspace loading and target resolution.
"""

from .architect import Architect
from .workspace import Workspace, discover_workspace, find_workspace_file, load_workspace

__all__ = [
    "Architect",
    "Workspace",
    "discover_workspace",
    "find_workspace_file",
    "load_workspace",
]
