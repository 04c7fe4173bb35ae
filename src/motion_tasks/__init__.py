"""Create, view and edit Motion tasks from simple forms."""

__version__ = "0.1.0"
