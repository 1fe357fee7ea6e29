"""GM notification log routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from questboard.dependencies import get_db
from questboard.errors.exceptions import NotFoundError
from questboard.repositories.notification_repo import NotificationRepository

router = APIRouter(tags=["Notifications"])


@router.get("/notifications")
async def list_notifications(
    unread_only: bool = False,
    limit: int = 50,
    db: AsyncSession = Depends(get_db),
) -> list[dict]:
    rows = await NotificationRepository(db).list_recent(unread_only=unread_only, limit=limit)
    return [
        {
            "notification_id": row.notification_id,
            "job_id": row.job_id,
            "title": row.title,
            "body": row.body,
            "read": row.read,
            "created_at": row.created_at.isoformat() if row.created_at else None,
        }
        for row in rows
    ]


@router.post("/notifications/{notification_id}/read")
async def mark_notification_read(
    notification_id: str,
    db: AsyncSession = Depends(get_db),
) -> dict:
    if not await NotificationRepository(db).mark_read(notification_id):
        raise NotFoundError("Notification", notification_id)
    await db.commit()
    return {"notification_id": notification_id, "read": True}
