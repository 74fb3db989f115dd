# -*- coding: utf-8 -*-
"""User connections: DB storage helpers."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from sqlalchemy import and_, or_, select, update
from sqlalchemy.orm import Session

from ..db import transaction, utc_now
from ..db_models import RequestStatus, User, UserConnection

logger = logging.getLogger(__name__)


def find_connection(db: Session, user_a: str, user_b: str) -> Optional[UserConnection]:
    """The connection row between two users, whichever of them initiated it."""
    return db.scalar(
        select(UserConnection).where(
            or_(
                and_(UserConnection.initiating_user == user_a, UserConnection.receiving_user == user_b),
                and_(UserConnection.initiating_user == user_b, UserConnection.receiving_user == user_a),
            )
        )
    )


def are_connected(db: Session, user_a: str, user_b: str) -> bool:
    conn = find_connection(db, user_a, user_b)
    return conn is not None and conn.status == RequestStatus.accepted.value


def list_connections(db: Session, *, user_id: str) -> List[Dict[str, Any]]:
    rows = db.scalars(
        select(UserConnection)
        .where(or_(UserConnection.initiating_user == user_id, UserConnection.receiving_user == user_id))
        .order_by(UserConnection.updated_at.desc())
    ).all()
    items: List[Dict[str, Any]] = []
    for conn in rows:
        initiated = conn.initiating_user == user_id
        items.append(
            {
                "id": conn.id,
                "initiating_user": conn.initiating_user,
                "receiving_user": conn.receiving_user,
                "status": conn.status,
                "created_at": conn.created_at,
                "updated_at": conn.updated_at,
                "type": "INITIATED" if initiated else "RECEIVED",
                "other_user": conn.receiver if initiated else conn.initiator,
            }
        )
    return items


def create_connection(db: Session, *, user_id: str, receiving_user: str) -> UserConnection:
    if receiving_user == user_id:
        raise HTTPException(status_code=400, detail="Cannot send a connection request to yourself")
    if not db.get(User, receiving_user):
        raise HTTPException(status_code=404, detail="User not found")
    if find_connection(db, user_id, receiving_user):
        raise HTTPException(status_code=400, detail="Connection request already exists")

    with transaction(db):
        conn = UserConnection(initiating_user=user_id, receiving_user=receiving_user)
        db.add(conn)
    logger.info("Connection requested: %s %s -> %s", conn.id, user_id, receiving_user)
    return conn


def respond_to_connection(db: Session, *, user_id: str, connection_id: str, status: str) -> UserConnection:
    """Move a PENDING request to ACCEPTED/DENIED. Only the receiver may respond."""
    conn = db.get(UserConnection, connection_id)
    if not conn:
        raise HTTPException(status_code=404, detail="Connection not found")
    if conn.receiving_user != user_id:
        raise HTTPException(status_code=403, detail="Only the receiving user can respond to this request")

    with transaction(db):
        result = db.execute(
            update(UserConnection)
            .where(UserConnection.id == connection_id, UserConnection.status == RequestStatus.pending.value)
            .values(status=status, updated_at=utc_now())
        )
        won = result.rowcount == 1
    db.refresh(conn)

    if not won:
        if conn.status != status:
            raise HTTPException(status_code=409, detail=f"Connection already {conn.status.lower()}")
        return conn
    logger.info("Connection %s: %s by user %s", status.lower(), connection_id, user_id)
    return conn
