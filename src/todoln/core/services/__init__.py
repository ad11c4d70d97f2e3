"""
Service layer for todoln.

Services wrap the core task store and file into one call per command so
that every interface shares the same load, operate and save behaviour.
"""

from .tasks import TaskService

__all__ = ["TaskService"]
