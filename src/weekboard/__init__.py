"""weekboard: a weekly task list that clears itself every Sunday at midnight."""

__version__ = "0.1.0"
