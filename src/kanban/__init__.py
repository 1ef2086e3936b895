"""Kanban board backend."""
