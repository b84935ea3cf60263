class InvalidTaskError(ValueError):
    """Raised when a task payload is well-formed but not acceptable (e.g. a task made its own parent)."""
