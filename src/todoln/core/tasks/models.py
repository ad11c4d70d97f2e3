"""
Task data models.

A task is nothing more than a description and a done flag. Its identity is
its 1-based position in the list, which changes under insert, remove and
sort.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator


class TaskFilter(str, Enum):
    """Which tasks a read-only listing shows."""

    ALL = "all"
    TODO = "todo"
    DONE = "done"

    @classmethod
    def parse(cls, value: "str | TaskFilter") -> "TaskFilter":
        """
        Parse a filter name case-insensitively.

        Raises:
            ValueError: If the value is not one of all, todo, done
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(f.value for f in cls)
            raise ValueError(f"Invalid display type '{value}' (expected one of: {valid})") from None

    def matches(self, task: "Task") -> bool:
        """Return True if the task belongs in this view."""
        if self is TaskFilter.TODO:
            return not task.done
        if self is TaskFilter.DONE:
            return task.done
        return True


class Task(BaseModel):
    """
    A single entry in the task list.

    Example:
        >>> task = Task(description="  buy milk ")
        >>> task.description
        'buy milk'
        >>> task.done
        False
    """

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    description: StrictStr = Field(..., description="What needs doing")
    done: StrictBool = Field(default=False, description="Whether the task is complete")

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str) -> str:
        """Trim surrounding whitespace and reject blank descriptions."""
        v = v.strip()
        if not v:
            raise ValueError("description cannot be empty")
        return v

    def mark_done(self) -> None:
        """Mark this task as complete."""
        self.done = True

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match against the description."""
        return term.casefold() in self.description.casefold()
