"""
Error taxonomy shared by services and routers.

Every error carries a machine-readable ``kind`` and the HTTP status it maps to.
The handlers in ``task_api.main`` turn them into JSON responses.
"""


class TaskManagerError(Exception):
    kind = "Error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidFilter(TaskManagerError):
    kind = "InvalidFilter"
    status_code = 400


class ValidationFailed(TaskManagerError):
    kind = "ValidationFailed"
    status_code = 400


class NotFound(TaskManagerError):
    kind = "NotFound"
    status_code = 404


class Forbidden(TaskManagerError):
    kind = "Forbidden"
    status_code = 403


class Unauthorized(TaskManagerError):
    kind = "Unauthorized"
    status_code = 401


# Used when rendering plain HTTPExceptions raised by FastAPI itself
KIND_BY_STATUS = {
    400: ValidationFailed.kind,
    401: Unauthorized.kind,
    403: Forbidden.kind,
    404: NotFound.kind,
}
