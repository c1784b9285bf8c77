"""
Citizen issue reporting endpoints.

Mounted behind the authenticate and maintenance gates. Citizens work with
their own reports; staff and admins see every report and move its status.
"""
import logging
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from core.api.deps import CurrentUser, form_or_json, get_current_user
from core.api.errors import ConflictError, ForbiddenError, NotFoundError
from core.db import models, schemas
from core.db.database import get_db
from core.db.repositories import issues as issue_repo
from core.utils.roles import is_admin, is_operator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["issues"])

_EDITABLE_FIELDS = ("title", "description", "category", "location")


def _load_visible_issue(db: Session, issue_id: uuid.UUID, user: CurrentUser) -> models.Issue:
    issue = issue_repo.get_issue(db, issue_id=issue_id)
    # Hide other citizens' reports rather than revealing they exist
    if issue is None or (issue.reporter_id != user.id and not is_operator(user.role)):
        raise NotFoundError("Issue not found")
    return issue


@router.post("", response_model=schemas.Issue, status_code=status.HTTP_201_CREATED)
def create_issue(
    payload: schemas.IssueCreate = Depends(form_or_json(schemas.IssueCreate)),
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    issue = issue_repo.create_issue(db, reporter_id=user.id, payload=payload)
    logger.info("issue_created: issue_id=%s reporter_id=%s", issue.id, user.id)
    return issue


@router.get("", response_model=List[schemas.Issue])
def list_issues(
    status: Optional[schemas.IssueStatus] = None,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    reporter_id = None if is_operator(user.role) else user.id
    return issue_repo.list_issues(db, reporter_id=reporter_id, status=status.value if status else None)


@router.get("/{issue_id}", response_model=schemas.Issue)
def get_issue(
    issue_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    return _load_visible_issue(db, issue_id, user)


@router.patch("/{issue_id}", response_model=schemas.Issue)
def update_issue(
    issue_id: uuid.UUID,
    payload: schemas.IssueUpdate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    issue = _load_visible_issue(db, issue_id, user)
    changes = payload.model_dump(exclude_unset=True)

    if "status" in changes:
        if not is_operator(user.role):
            raise ForbiddenError("Only staff can change an issue's status")
        if changes["status"] is None:
            changes.pop("status")

    if any(f in changes for f in _EDITABLE_FIELDS):
        if issue.reporter_id != user.id and not is_admin(user.role):
            raise ForbiddenError("Only the reporter can edit this issue")
        if issue.status != schemas.IssueStatus.open.value and not is_admin(user.role):
            raise ConflictError("Only open issues can be edited")
        for f in ("title", "description", "category"):
            if f in changes and changes[f] is None:
                changes.pop(f)

    return issue_repo.update_issue(db, issue=issue, changes=changes)


@router.delete("/{issue_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_issue(
    issue_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    issue = _load_visible_issue(db, issue_id, user)
    if not is_admin(user.role):
        if issue.reporter_id != user.id:
            raise ForbiddenError("Only the reporter can delete this issue")
        if issue.status != schemas.IssueStatus.open.value:
            raise ConflictError("Only open issues can be deleted")
    issue_repo.delete_issue(db, issue=issue)
    logger.info("issue_deleted: issue_id=%s by=%s", issue_id, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
