"""
Connection Routes

POST /connections - Connect with another account
GET /connections - The caller's connections
GET /connections/status/{account_id} - Whether the caller is connected with an account
DELETE /connections/{account_id} - Remove a connection
"""

from fastapi import APIRouter, Depends

from placement_hub.core.auth import Identity, get_current_user
from placement_hub.services.connection_service import ConnectionService
from placement_hub.schemas.schemas import (
    AccountListResponse, APIResponse, ConnectionCreate, ConnectionResponse, ConnectionStatusResponse
)

router = APIRouter(prefix="/connections", tags=["Connections"])


@router.post("", response_model=ConnectionResponse, status_code=201)
async def connect(data: ConnectionCreate, user: Identity = Depends(get_current_user)):
    connection = ConnectionService().connect(user, data.user_id)
    return ConnectionResponse(message="Connected", **connection)


@router.get("", response_model=AccountListResponse)
async def list_connections(user: Identity = Depends(get_current_user)):
    return AccountListResponse(users=ConnectionService().list_for(user))


@router.get("/status/{account_id}", response_model=ConnectionStatusResponse)
async def connection_status(account_id: str, user: Identity = Depends(get_current_user)):
    return ConnectionStatusResponse(connected=ConnectionService().is_connected(user.id, account_id))


@router.delete("/{account_id}", response_model=APIResponse)
async def disconnect(account_id: str, user: Identity = Depends(get_current_user)):
    ConnectionService().disconnect(user, account_id)
    return APIResponse(message="Connection removed")
