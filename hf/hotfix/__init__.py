"""Hotfix workflow: branch, tracking issue, notification."""
