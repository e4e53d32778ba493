from task_api.exceptions import Forbidden, NotFound
from task_api.models.tasks import Task


def assert_ownership(task: Task | None, requester_id: int) -> Task:
    """Return ``task`` if ``requester_id`` owns it; raise otherwise."""
    if task is None:
        raise NotFound("Task not found")
    if task.user_id != requester_id:
        raise Forbidden("You are not allowed to access this task")
    return task
