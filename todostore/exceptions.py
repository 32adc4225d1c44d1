"""Custom exceptions for todostore."""

class TodoStoreError(Exception):
    """Base exception for todostore."""
    pass

class ValidationError(TodoStoreError):
    """Input validation failed."""

    def __init__(self, message: str, code: str = "invalid_input"):
        super().__init__(message)
        self.message = message
        self.code = code

class NotFoundError(TodoStoreError):
    """No task exists under the requested (owner, taskId)."""

    def __init__(self, owner: str, task_id: str):
        super().__init__(
            f"Task with owner '{owner}' and taskId '{task_id}' not found"
        )
        self.owner = owner
        self.task_id = task_id

class StoreUnavailable(TodoStoreError):
    """Backing store call failed or timed out."""
    pass
