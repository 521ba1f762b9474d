from .repository import HashRepository

__all__ = ["HashRepository"]
