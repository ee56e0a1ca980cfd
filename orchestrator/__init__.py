"""
Orchestrator Package

This package coordinates the portal's views and background work.

Components:
- Controller: View state machine (orchestrator.controller)
- build_controller: Wires settings and providers into a Controller (orchestrator.bootstrap)
- TaskManager: Tracks and runs background tasks such as the post-submit redirect

Only TaskManager is imported here; the view controllers depend on it, and the
Controller depends on the view controllers.
"""

from .task_manager import TaskManager

__all__ = ['TaskManager']
