"""Sequential task pipeline and option merging."""

from .config_merger import ConfigMerger
from .task_pipeline import TaskPipeline

__all__ = ["ConfigMerger", "TaskPipeline"]
