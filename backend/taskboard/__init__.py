"""Taskboard: projects with an ordered kanban task list and transferable members."""
