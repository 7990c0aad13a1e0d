class TaskServiceError(Exception):
    """Base error carrying the HTTP status and the message shown to clients"""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(TaskServiceError):
    status_code = 400
    default_message = "Missing required fields: UserID from token"


class ValidationError(TaskServiceError):
    status_code = 400
    default_message = "Invalid request"


class NotFound(TaskServiceError):
    status_code = 404
    default_message = "Task not found"


class InternalFault(TaskServiceError):
    status_code = 500
