# -*- coding: utf-8 -*-
"""User connections: API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth.security import get_current_user
from ..db import get_db
from ..db_models import User
from .models import (
    ConnectionCreateRequest,
    ConnectionListResponse,
    ConnectionOut,
    ConnectionResponse,
    ConnectionStatusRequest,
    ConnectionWithUserOut,
)
from .storage import create_connection, list_connections, respond_to_connection

router = APIRouter(prefix="/api/user-connections", tags=["Connections"])


@router.get("", response_model=ConnectionListResponse, summary="The caller's connections")
def list_connections_api(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    items = [ConnectionWithUserOut.model_validate(i) for i in list_connections(db, user_id=user.id)]
    return ConnectionListResponse(connections=items, count=len(items))


@router.post("", response_model=ConnectionResponse, status_code=201, summary="Send a connection request")
def create_connection_api(
    request: ConnectionCreateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    conn = create_connection(db, user_id=user.id, receiving_user=request.receiving_user)
    return ConnectionResponse(connection=ConnectionOut.model_validate(conn), message="Connection request sent")


@router.put("/{connection_id}", response_model=ConnectionResponse, summary="Accept or deny a connection request")
def respond_to_connection_api(
    connection_id: str,
    request: ConnectionStatusRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    conn = respond_to_connection(db, user_id=user.id, connection_id=connection_id, status=request.status)
    return ConnectionResponse(
        connection=ConnectionOut.model_validate(conn),
        message=f"Connection {conn.status.lower()}",
    )
