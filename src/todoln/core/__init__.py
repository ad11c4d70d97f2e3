"""Core task list logic, independent of the command-line interface."""
