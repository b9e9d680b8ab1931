"""Cut hotfix branches, tracking issues and chat notifications from release tags."""

__version__ = "0.1.0"
