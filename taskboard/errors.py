"""
Domain errors raised by the store and rendered by the API as {"error": ...}
"""


class TaskboardError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskboardError):
    """A required field is missing or the request is malformed"""
    status_code = 400


class ConflictError(TaskboardError):
    """The operation would break referential integrity"""
    status_code = 400


class StoreError(TaskboardError):
    """The underlying query failed"""
    status_code = 500


class NotFoundError(StoreError):
    status_code = 404
