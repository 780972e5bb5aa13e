from .repository import IRepository

__all__ = [
    "IRepository",
]
