"""API token issuance & revocation."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cleo.api.v1.deps import get_db
from cleo.schemas.common import StatusResponse
from cleo.schemas.token import APITokenResponse, TokenDelete
from cleo.schemas.user import UserCredentials
from cleo.services.tokens import issue_token, revoke_token

router = APIRouter(prefix="/token", tags=["tokens"])


@router.post("/create", response_model=APITokenResponse)
async def create_token(
    body: UserCredentials,
    db: AsyncSession = Depends(get_db),
) -> APITokenResponse:
    token = await issue_token(db, body.username, body.password)
    await db.commit()
    return APITokenResponse.model_validate(token)


@router.post("/delete", response_model=StatusResponse)
async def delete_token(
    body: TokenDelete,
    db: AsyncSession = Depends(get_db),
) -> StatusResponse:
    await revoke_token(db, body.token, body.username, body.password)
    await db.commit()
    return StatusResponse()
