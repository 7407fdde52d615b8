"""
Interface definitions for relay's services and builders.
"""

from .builder import (
    BuildEvent,
    BuilderConfiguration,
    BuilderContext,
    BuilderDescription,
    IBuilder,
    TargetSpecifier,
)
from .logger import ILogger
from .pipeline import ComputedFields, PipelineResult, StageContext, StageSpec, SubServiceResult
from .presenter import IPresenter

__all__ = [
    "BuildEvent",
    "BuilderConfiguration",
    "BuilderContext",
    "BuilderDescription",
    "ComputedFields",
    "IBuilder",
    "ILogger",
    "IPresenter",
    "PipelineResult",
    "StageContext",
    "StageSpec",
    "SubServiceResult",
    "TargetSpecifier",
]
