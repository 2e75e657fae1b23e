from .entries import EntriesRepository
from . import models

__all__ = ["EntriesRepository", "models"]
