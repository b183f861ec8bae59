"""Editor-side collaborators: views, the document registry and cancellation."""

from .editor import Editor
from .task import CancelQuery, TaskController, TaskHandle
from .view import View

__all__ = [
    "CancelQuery",
    "Editor",
    "TaskController",
    "TaskHandle",
    "View",
]
