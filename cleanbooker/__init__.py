"""CleanBooker - booking and customer management for cleaning businesses."""

__version__ = "1.0.0"
