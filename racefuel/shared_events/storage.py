# -*- coding: utf-8 -*-
"""Shared events: DB storage helpers.

Accepting an offer gives the receiver an independent deep copy of the event:
a new Event plus its food instances, goals and triathlon segments, all written
in the same transaction as the status change.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from fastapi import HTTPException
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from ..connections.storage import are_connected
from ..db import transaction, utc_now
from ..db_models import Event, RequestStatus, SharedEvent, User
from ..events.storage import (
    accepted_partner_ids,
    copy_event_goals,
    copy_food_instances,
    copy_name,
    copy_triathlon_attributes,
    get_owned_event,
)

logger = logging.getLogger(__name__)

SHARED_SUFFIX = " (shared)"


def list_pending_for_receiver(db: Session, *, user_id: str) -> List[SharedEvent]:
    stmt = (
        select(SharedEvent)
        .where(SharedEvent.receiver_id == user_id, SharedEvent.status == RequestStatus.pending.value)
        .order_by(SharedEvent.created_at.desc())
    )
    return list(db.scalars(stmt).all())


def list_connected_users(db: Session, *, user_id: str) -> List[User]:
    partners = accepted_partner_ids(db, user_id=user_id)
    if not partners:
        return []
    return list(db.scalars(select(User).where(User.id.in_(partners)).order_by(User.first_name, User.last_name)).all())


def create_shared_event(db: Session, *, user_id: str, event_id: str, receiver_id: str) -> SharedEvent:
    event = get_owned_event(db, user_id=user_id, event_id=event_id)
    if receiver_id == user_id:
        raise HTTPException(status_code=400, detail="Cannot share an event with yourself")
    if not db.get(User, receiver_id):
        raise HTTPException(status_code=404, detail="User not found")
    if not are_connected(db, user_id, receiver_id):
        raise HTTPException(status_code=403, detail="You can only share events with connected users")

    pending = db.scalar(
        select(SharedEvent).where(
            SharedEvent.event_id == event.id,
            SharedEvent.receiver_id == receiver_id,
            SharedEvent.status == RequestStatus.pending.value,
        )
    )
    if pending:
        raise HTTPException(status_code=400, detail="Event already shared with this user")

    with transaction(db):
        share = SharedEvent(event_id=event.id, sender_id=user_id, receiver_id=receiver_id)
        db.add(share)
    logger.info("Event shared: %s event=%s %s -> %s", share.id, event.id, user_id, receiver_id)
    return share


def copy_event_for_receiver(db: Session, *, source: Event, receiver_id: str) -> Event:
    """Deep-copy `source` into a new public event owned by `receiver_id` (caller commits)."""
    copy = Event(
        event_user_id=receiver_id,
        name=copy_name(source.name, SHARED_SUFFIX),
        event_type=source.event_type,
        expected_duration=source.expected_duration,
        private=False,
    )
    db.add(copy)
    db.flush()
    instances = copy_food_instances(db, source_event_id=source.id, target_event_id=copy.id)
    goals = copy_event_goals(db, source_event_id=source.id, target_event_id=copy.id, target_user_id=receiver_id)
    copy_triathlon_attributes(db, source=source, target_event_id=copy.id)
    logger.info("Event copied for receiver %s: %s -> %s instances=%s goals=%s",
                receiver_id, source.id, copy.id, instances, goals)
    return copy


def respond_to_shared_event(
    db: Session, *, user_id: str, shared_event_id: str, status: str
) -> Tuple[SharedEvent, Optional[Event]]:
    """Accept or deny an offer. Returns (shared_event, copied_event or None).

    The PENDING -> decided transition is a compare-and-set, so of two racing
    decisions exactly one applies. Repeating the decision already taken is a
    no-op; asking for the other one is a 409.
    """
    share = db.get(SharedEvent, shared_event_id)
    if not share:
        raise HTTPException(status_code=404, detail="Shared event not found")
    if share.receiver_id != user_id:
        raise HTTPException(status_code=403, detail="Only the receiver can respond to this shared event")

    copied: Optional[Event] = None
    with transaction(db):
        result = db.execute(
            update(SharedEvent)
            .where(SharedEvent.id == shared_event_id, SharedEvent.status == RequestStatus.pending.value)
            .values(status=status, updated_at=utc_now())
        )
        claimed = result.rowcount == 1
        if claimed and status == RequestStatus.accepted.value:
            copied = copy_event_for_receiver(db, source=share.event, receiver_id=user_id)
            share.copied_event_id = copied.id
    db.refresh(share)

    if not claimed:
        if share.status != status:
            raise HTTPException(status_code=409, detail=f"Shared event already {share.status.lower()}")
        return share, share.copied_event

    if copied is not None:
        db.refresh(copied)
    logger.info("Shared event %s: %s by user %s", status.lower(), shared_event_id, user_id)
    return share, copied
