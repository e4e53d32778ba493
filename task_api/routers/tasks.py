from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from task_api.dependencies import get_db, get_current_user
from task_api.exceptions import NotFound
from task_api.models.user import User as UserModel
from task_api.schemas.task import (
    BulkDeleteResult,
    DashboardSummary,
    Task as TaskSchema,
    TaskCreate,
    TaskReplace,
    TaskUpdate,
)
from task_api.services import tasks as task_service
from task_api.services.dashboard import summarize
from task_api.services.query_builder import (
    build_bulk_delete_query,
    build_dashboard_query,
    build_list_query,
)

router = APIRouter(prefix="/tasks", tags=["tasks"])

@router.get("/", response_model=list[TaskSchema])
async def list_tasks(
    task_type: str | None = Query(None, alias="type"),
    task_status: str | None = Query(None, alias="status"),
    sort: str | None = None,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    query = build_list_query(current_user.user_id, task_type=task_type, status=task_status, sort=sort)
    return await task_service.find_tasks(db, query)

@router.post("/", response_model=TaskSchema, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreate,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    task = await task_service.create_task(db, task_data, current_user.user_id)
    await db.commit()
    await db.refresh(task)
    return task

@router.delete("/", response_model=BulkDeleteResult)
async def delete_all_tasks(
    task_type: str | None = Query(None, alias="type"),
    task_status: str | None = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    query = build_bulk_delete_query(current_user.user_id, task_type=task_type, status=task_status)
    deleted = await task_service.delete_tasks(db, query)
    await db.commit()
    if deleted == 0:
        raise NotFound("No tasks to delete")
    return {"message": f"Deleted {deleted} tasks", "deleted_count": deleted}

@router.get("/dashboard/{dashboard_type}", response_model=DashboardSummary)
async def dashboard(
    dashboard_type: str,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    query = build_dashboard_query(current_user.user_id, dashboard_type)
    tasks = await task_service.find_tasks(db, query)
    summary = summarize(tasks, datetime.now(timezone.utc))
    return DashboardSummary.model_validate(summary, from_attributes=True)

@router.get("/{task_id}", response_model=TaskSchema)
async def get_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    return await task_service.get_owned_task(db, task_id, current_user.user_id)

@router.put("/{task_id}", response_model=TaskSchema)
async def replace_task(
    task_id: int,
    task_data: TaskReplace,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    task = await task_service.replace_task(db, task_id, current_user.user_id, task_data)
    await db.commit()
    await db.refresh(task)
    return task

@router.patch("/{task_id}", response_model=TaskSchema)
async def update_task(
    task_id: int,
    update_data: TaskUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    task = await task_service.update_task(db, task_id, current_user.user_id, update_data)
    await db.commit()
    await db.refresh(task)
    return task

@router.delete("/{task_id}", response_model=TaskSchema)
async def delete_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    task = await task_service.delete_task(db, task_id, current_user.user_id)
    await db.commit()
    return task
