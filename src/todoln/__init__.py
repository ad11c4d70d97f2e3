"""
Todoln - a minimal command-line task list.

Keeps an ordered list of short tasks in a JSON Lines file and exposes
add/insert/modify/done/sort/remove/clear/reset/backup/restore commands.
"""

__version__ = "1.2.0"

# Re-export core models for convenience
from todoln.core.config.models import TodolnConfig
from todoln.core.tasks.models import Task, TaskFilter

__all__ = ["TodolnConfig", "Task", "TaskFilter", "__version__"]
