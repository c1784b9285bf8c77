"""
Repositories for citizen-reported issues.
"""
from __future__ import annotations

import uuid
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from core.db import models, schemas


def create_issue(db: Session, *, reporter_id: uuid.UUID, payload: schemas.IssueCreate) -> models.Issue:
    issue = models.Issue(
        reporter_id=reporter_id,
        title=payload.title.strip(),
        description=payload.description.strip(),
        category=payload.category.value,
        location=payload.location,
        status=schemas.IssueStatus.open.value,
    )
    db.add(issue)
    db.commit()
    db.refresh(issue)
    return issue


def get_issue(db: Session, *, issue_id: uuid.UUID) -> Optional[models.Issue]:
    return db.get(models.Issue, issue_id)


def list_issues(
    db: Session,
    *,
    reporter_id: Optional[uuid.UUID] = None,
    status: Optional[str] = None,
) -> List[models.Issue]:
    q = db.query(models.Issue)
    if reporter_id is not None:
        q = q.filter(models.Issue.reporter_id == reporter_id)
    if status is not None:
        q = q.filter(models.Issue.status == status)
    return q.order_by(models.Issue.created_at.desc()).all()


def update_issue(db: Session, *, issue: models.Issue, changes: Dict[str, object]) -> models.Issue:
    changed = False
    for field, value in changes.items():
        if hasattr(value, "value"):
            value = value.value
        if getattr(issue, field) != value:
            setattr(issue, field, value)
            changed = True
    if changed:
        db.commit()
        db.refresh(issue)
    return issue


def delete_issue(db: Session, *, issue: models.Issue) -> None:
    db.delete(issue)
    db.commit()


def count_by_status(db: Session) -> Dict[str, int]:
    rows = db.query(models.Issue.status, func.count(models.Issue.id)).group_by(models.Issue.status).all()
    return {status: count for status, count in rows}
