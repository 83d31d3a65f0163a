"""
To-Do List App Module

Provides To-Do list functionality for PiDesk including:
- TaskStore: In-memory ordered task list
- ToDoScreen: E-ink display screen
- Flask Blueprint: REST API routes
"""

from .store import TaskRecord, TaskStore
from .screen import ToDoScreen
from .routes import todo_bp, init_routes

__all__ = ['TaskRecord', 'TaskStore', 'ToDoScreen', 'todo_bp', 'init_routes']
