# -*- coding: utf-8 -*-
"""Auth / users: DB storage helpers."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from ..db import transaction
from ..db_models import Event, RequestStatus, User, UserConnection

logger = logging.getLogger(__name__)


def get_user_by_sub(db: Session, auth0_sub: str) -> Optional[User]:
    return db.scalar(select(User).where(User.auth0_sub == auth0_sub))


def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
    return db.get(User, user_id)


def sync_user(
    db: Session,
    *,
    auth0_sub: str,
    first_name: str,
    last_name: str = "",
    email: Optional[str] = None,
) -> Tuple[User, bool]:
    """Create the local user for a verified subject, or refresh the existing one.

    Returns (user, created).
    """
    email_norm = email.lower().strip() if email else None
    with transaction(db):
        user = get_user_by_sub(db, auth0_sub)
        if user:
            changed = False
            for field, value in (("first_name", first_name), ("last_name", last_name), ("email", email_norm)):
                if value and getattr(user, field) != value:
                    setattr(user, field, value)
                    changed = True
            if changed:
                logger.info("User profile refreshed: %s", user.id)
            return user, False

        user = User(auth0_sub=auth0_sub, first_name=first_name, last_name=last_name or "", email=email_norm)
        db.add(user)
    logger.info("User created: %s sub=%s", user.id, auth0_sub)
    return user, True


def list_directory(db: Session, *, current_user_id: str) -> List[Dict[str, Any]]:
    """Every other user with the caller's connection to them and their public plan count."""
    users = db.scalars(
        select(User).where(User.id != current_user_id).order_by(User.first_name, User.last_name)
    ).all()

    connections = db.scalars(
        select(UserConnection).where(
            or_(
                UserConnection.initiating_user == current_user_id,
                UserConnection.receiving_user == current_user_id,
            )
        )
    ).all()
    by_user: Dict[str, Dict[str, Any]] = {}
    for conn in connections:
        if conn.initiating_user == current_user_id:
            by_user[conn.receiving_user] = {"connection_id": conn.id, "status": conn.status, "type": "INITIATED"}
        else:
            by_user[conn.initiating_user] = {"connection_id": conn.id, "status": conn.status, "type": "RECEIVED"}

    counts = dict(
        db.execute(
            select(Event.event_user_id, func.count(Event.id))
            .where(Event.private.is_(False))
            .group_by(Event.event_user_id)
        ).all()
    )

    items: List[Dict[str, Any]] = []
    for user in users:
        connection = by_user.get(user.id)
        # They turned down our request; keep them out of the directory.
        if connection and connection["type"] == "INITIATED" and connection["status"] == RequestStatus.denied.value:
            continue
        items.append(
            {
                "id": user.id,
                "first_name": user.first_name,
                "last_name": user.last_name,
                "connection": connection,
                "shared_plans_count": int(counts.get(user.id, 0)),
            }
        )
    return items
