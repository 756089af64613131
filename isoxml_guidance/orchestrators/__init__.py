"""Rendering orchestration.

Coordinates the per-pattern activities across guidance groups and whole
task-data documents.
"""
