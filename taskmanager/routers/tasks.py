import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskmanager.database import get_db
from taskmanager.models.task import Task
from taskmanager.schemas.task import TaskIn, TaskOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])

# SQLite INTEGER is a signed 64-bit value
_MIN_ID, _MAX_ID = -(2 ** 63), 2 ** 63 - 1


def parse_task_id(task_id: str) -> int:
    """Path parameter dependency: decimal integer with an optional sign, else 400."""
    digits = task_id[1:] if task_id[:1] in ("+", "-") else task_id
    if not (digits.isascii() and digits.isdigit()):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid task ID")
    value = int(task_id)
    if not _MIN_ID <= value <= _MAX_ID:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid task ID")
    return value


def _storage_failure(db: Session, message: str, exc: SQLAlchemyError) -> HTTPException:
    db.rollback()
    logger.error("%s: %s", message, exc, exc_info=exc)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=TaskOut, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_task(task: TaskIn, db: Session = Depends(get_db)):
    new = Task(
        title=task.title,
        description=task.description,
        due_date=task.due_date,
        status=task.status,
    )
    try:
        db.add(new)
        db.commit()
        db.refresh(new)
    except SQLAlchemyError as e:
        raise _storage_failure(db, "Failed to create task", e)

    logger.info("Created task id=%s", new.id)
    return new


@router.get("/{task_id}", response_model=TaskOut)
def get_task(task_id: int = Depends(parse_task_id), db: Session = Depends(get_db)):
    try:
        task = db.get(Task, task_id)
    except SQLAlchemyError as e:
        # read failures are reported the same way as a missing row
        logger.warning("Failed to read task id=%s: %s", task_id, e)
        db.rollback()
        task = None
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.put("/{task_id}", response_model=TaskOut)
def update_task(task: TaskIn, task_id: int = Depends(parse_task_id), db: Session = Depends(get_db)):
    """Overwrite every mutable field of the task.

    There is no existence check: updating an unknown id changes nothing and
    still answers 200 with the submitted values.
    """
    try:
        result = db.execute(
            update(Task)
            .where(Task.id == task_id)
            .values(
                title=task.title,
                description=task.description,
                due_date=task.due_date,
                status=task.status,
            )
        )
        db.commit()
    except SQLAlchemyError as e:
        raise _storage_failure(db, "Failed to update task", e)

    logger.info("Updated task id=%s rows=%s", task_id, result.rowcount)
    return TaskOut(id=task_id, **task.model_dump())


@router.delete("/{task_id}")
def delete_task(task_id: int = Depends(parse_task_id), db: Session = Depends(get_db)):
    try:
        result = db.execute(delete(Task).where(Task.id == task_id))
        db.commit()
    except SQLAlchemyError as e:
        raise _storage_failure(db, "Failed to delete task", e)

    logger.info("Deleted task id=%s rows=%s", task_id, result.rowcount)
    return {"message": "Task deleted successfully"}


@router.get("", response_model=List[TaskOut])
@router.get("/", response_model=List[TaskOut], include_in_schema=False)
def list_tasks(db: Session = Depends(get_db)):
    try:
        return db.query(Task).order_by(Task.id).all()
    except SQLAlchemyError as e:
        raise _storage_failure(db, "Failed to list tasks", e)
