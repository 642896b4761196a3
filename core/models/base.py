"""Declarative base shared by every model; defined next to the engine in core.db."""

from core.db import Base

__all__ = ["Base"]
