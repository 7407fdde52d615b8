from .sub_service import SubServiceLauncher

__all__ = ["SubServiceLauncher"]
