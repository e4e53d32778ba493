import logging

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from task_api.models.enums import TaskStatus
from task_api.models.tasks import Task
from task_api.schemas.task import TaskCreate, TaskReplace, TaskUpdate
from task_api.services.field_mapper import map_body_fields, map_filter_key
from task_api.services.ownership import assert_ownership
from task_api.services.query_builder import TaskQuery

logger = logging.getLogger(__name__)


def _where_clauses(query: TaskQuery) -> list:
    clauses = [Task.user_id == query.owner_id]
    if query.task_type is not None:
        clauses.append(getattr(Task, map_filter_key("type")) == query.task_type.value)
    if query.status is not None:
        clauses.append(getattr(Task, map_filter_key("status")) == query.status.value)
    if query.exclude_status is not None:
        clauses.append(getattr(Task, map_filter_key("status")) != query.exclude_status.value)
    return clauses


async def find_tasks(db: AsyncSession, query: TaskQuery) -> list[Task]:
    stmt = select(Task).filter(*_where_clauses(query))
    if query.sort is None:
        stmt = stmt.order_by(Task.task_id)
    else:
        column = getattr(Task, query.sort.field)
        if query.sort.descending:
            stmt = stmt.order_by(column.desc().nulls_last(), Task.task_id.desc())
        else:
            # Tasks without a deadline lead ascending sorts on every backend
            stmt = stmt.order_by(column.asc().nulls_first(), Task.task_id.asc())
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_task_by_id(db: AsyncSession, task_id: int) -> Task | None:
    return await db.get(Task, task_id)


async def get_owned_task(db: AsyncSession, task_id: int, requester_id: int) -> Task:
    task = await get_task_by_id(db, task_id)
    return assert_ownership(task, requester_id)


async def create_task(db: AsyncSession, task_data: TaskCreate, current_user_id: int) -> Task:
    new_task = Task(
        user_id=current_user_id,
        task_title=task_data.title,
        task_description=task_data.description,
        task_status=TaskStatus.PENDING.value,
        task_type=task_data.type.value,
        task_deadline=task_data.deadline,
    )
    db.add(new_task)
    await db.flush()
    logger.info("Created task %s for user %s", new_task.task_id, current_user_id)
    return new_task


def _apply_fields(task: Task, data: dict) -> None:
    for column, value in map_body_fields(data).items():
        # Enum members are stored by value
        setattr(task, column, getattr(value, "value", value))


async def replace_task(db: AsyncSession, task_id: int, requester_id: int, task_data: TaskReplace) -> Task:
    task = await get_owned_task(db, task_id, requester_id)
    _apply_fields(task, task_data.model_dump())
    await db.flush()
    return task


async def update_task(db: AsyncSession, task_id: int, requester_id: int, update_data: TaskUpdate) -> Task:
    task = await get_owned_task(db, task_id, requester_id)
    _apply_fields(task, update_data.model_dump(exclude_unset=True))
    await db.flush()
    return task


async def delete_task(db: AsyncSession, task_id: int, requester_id: int) -> Task:
    task = await get_owned_task(db, task_id, requester_id)
    await db.delete(task)
    await db.flush()
    logger.info("Deleted task %s for user %s", task_id, requester_id)
    return task


async def delete_tasks(db: AsyncSession, query: TaskQuery) -> int:
    """Delete every task matching ``query`` in a single statement."""
    result = await db.execute(
        delete(Task).where(*_where_clauses(query)).execution_options(synchronize_session=False)
    )
    logger.info("Bulk deleted %s tasks for user %s", result.rowcount, query.owner_id)
    return result.rowcount
