from .replicate import ReplicateProvider

__all__ = ["ReplicateProvider"]
