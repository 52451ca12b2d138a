"""
File upload, listing, deletion & serving.

Uploads land in the instance's ``file_dir`` under their basename and are
served back by file id at ``/files/serve/{file_id}``.
"""

from __future__ import annotations

import logging
import os

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cleo.api.v1.deps import get_current_user, get_db
from cleo.core.exceptions import NotFoundError
from cleo.models.content import UserFile
from cleo.models.user import User
from cleo.repositories.content import FileRepository
from cleo.repositories.instance import InstanceRepository
from cleo.schemas.common import StatusResponse
from cleo.schemas.content import FileDelete, FileList, FileRead
from cleo.services.guard import acting_user, require_owner
from cleo.services.storage import FileStorage, get_storage

router = APIRouter(prefix="/files", tags=["files"])
logger = logging.getLogger(__name__)


def _to_read(record: UserFile) -> FileRead:
    return FileRead(
        file_id=record.file_id,
        user_id=record.user_id,
        file_name=os.path.basename(record.file_path),
        file_url=record.file_url,
    )


@router.post("/create", response_model=FileRead)
async def upload_file(
    file: UploadFile = File(...),
    name: str = Form(...),
    api_token: str = Form(...),
    db: AsyncSession = Depends(get_db),
    storage: FileStorage = Depends(get_storage),
) -> FileRead:
    user = await acting_user(db, api_token)
    info = await InstanceRepository(db).get()
    path = storage.target_path(info.file_dir, name)
    await storage.save(file, path)
    try:
        record = await FileRepository(db).create(
            user_id=user.user_id,
            file_path=str(path),
            hostname=info.hostname,
        )
        await db.commit()
    except SQLAlchemyError:
        await storage.remove(path)
        raise
    logger.info("%s uploaded %s", user.username, path.name)
    return _to_read(record)


@router.post("/delete", response_model=StatusResponse)
async def delete_file(
    body: FileDelete,
    db: AsyncSession = Depends(get_db),
    storage: FileStorage = Depends(get_storage),
) -> StatusResponse:
    """Delete the record, then the stored bytes."""
    user = await acting_user(db, body.api_token)
    files = FileRepository(db)
    record = await files.get_by_id(body.file_id)
    require_owner(user, record.user_id, "file")
    await files.delete_owned(record.file_id, owner_id=user.user_id)
    await db.commit()
    await storage.remove(record.file_path)
    return StatusResponse()


@router.post("/all", response_model=FileList)
async def list_files(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> FileList:
    records = await FileRepository(db).list_by_owner(user.user_id)
    return FileList(files=[_to_read(r) for r in records])


@router.get("/serve/{filename}")
async def serve_file(
    filename: str,
    db: AsyncSession = Depends(get_db),
) -> FileResponse:
    record = await FileRepository(db).get_by_id(filename)
    if not os.path.isfile(record.file_path):
        raise NotFoundError("File not found.")
    return FileResponse(record.file_path, filename=os.path.basename(record.file_path))
