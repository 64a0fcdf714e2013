import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect, status
from fastapi import HTTPException
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from config.database import get_db, SessionLocal
from middlewares.auth_middleware import auth_middleware, resolve_token
from api.notifications.notifications_schema import (
    NotificationCreate,
    NotificationList,
    NotificationRead,
    MarkAllReadResponse,
)
from api.notifications.notifications_controller import (
    fetch_notifications,
    send_notification,
    mark_notification_read,
    mark_all_notifications_read,
)
from api.notifications.notification_hub import notification_hub

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["Notifications"])

WS_UNAUTHORIZED = 4401


@router.get(
    "",
    response_model=NotificationList,
    summary="Newest notifications for the authenticated account"
)
def get_user_notifications(
    limit: Optional[int] = Query(None, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return fetch_notifications(db, current_user, limit=limit)


@router.post("", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
def create_notification(
    data: NotificationCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return send_notification(db, data, current_user)


@router.put("/read-all", response_model=MarkAllReadResponse)
def read_all(
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return mark_all_notifications_read(db, current_user)


@router.put("/{notification_id}/read", response_model=NotificationRead)
def read_one(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return mark_notification_read(db, notification_id, current_user)


def _authenticate_socket(token: Optional[str]) -> dict:
    db = SessionLocal()
    try:
        return resolve_token(token, db)
    finally:
        db.close()


@router.websocket("/ws")
async def notifications_socket(websocket: WebSocket, token: Optional[str] = Query(None)):
    """
    Live feed of new notifications for the token's account. Sends a
    {"event": "subscribed"} frame once the subscription is in place.
    """
    try:
        user = await run_in_threadpool(_authenticate_socket, token)
    except HTTPException as exc:
        await websocket.close(code=WS_UNAUTHORIZED, reason=str(exc.detail))
        return

    await websocket.accept()
    subscription = notification_hub.subscribe(user["id"])

    async def watch_disconnect():
        try:
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    break
        except (WebSocketDisconnect, RuntimeError):
            pass
        finally:
            subscription.cancel()

    watcher = asyncio.create_task(watch_disconnect())
    try:
        await websocket.send_json({"event": "subscribed", "user_id": user["id"]})
        async for record in subscription:
            await websocket.send_json({
                "event": "notification",
                "notification": record.model_dump(mode="json"),
            })
    except WebSocketDisconnect:
        logger.debug("notification socket for %s disconnected", user["id"])
    finally:
        subscription.cancel()
        watcher.cancel()
