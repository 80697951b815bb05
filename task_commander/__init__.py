"""task-commander: search and filter personal tasks from the command line."""

__version__ = "0.1.0"
