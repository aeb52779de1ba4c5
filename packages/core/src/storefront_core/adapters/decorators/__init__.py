from .timeout_collection import TimeoutCollection

__all__ = ["TimeoutCollection"]
