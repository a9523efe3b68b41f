from .config import RenderConfig
from .worker import PathWorker

__all__ = ["RenderConfig", "PathWorker"]
