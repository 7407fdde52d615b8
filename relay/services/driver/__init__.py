from .updater import DriverUpdater, ProjectModuleStrategy, ResolutionStrategy

__all__ = ["DriverUpdater", "ProjectModuleStrategy", "ResolutionStrategy"]
