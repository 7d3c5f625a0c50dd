"""vslocal - cd, mv and rm that stay inside the current workspace."""

__version__ = "0.1.0"
