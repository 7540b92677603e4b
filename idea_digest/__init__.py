"""Weekly and monthly idea digest notifications for team channels."""

__version__ = "0.1.0"
