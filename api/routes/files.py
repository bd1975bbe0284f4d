"""
File Routes

Upload a file (appends a leaf, changes the root) and download one by index.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Query, UploadFile
from fastapi.responses import Response

from api.deps import get_config, get_store
from api.errors import MissingFileError, UploadTooLargeError
from api.models.responses import UploadResponse
from core.config.runtime import RuntimeConfig
from core.crypto.hashing import to_hex
from core.store import BlobStore


logger = logging.getLogger(__name__)

router = APIRouter(tags=["files"])


@router.post("/upload", response_model=UploadResponse)
def upload_file(
    file: UploadFile | None = File(default=None, description="File contents"),
    filename: str | None = Query(default=None, description="Opaque name for the file"),
    store: BlobStore = Depends(get_store),
    config: RuntimeConfig = Depends(get_config),
) -> UploadResponse:
    """
    Store an uploaded file.

    The file is appended as the next leaf and the tree is rebuilt. Runs
    in the worker threadpool since the rebuild is O(n) and synchronous. The
    returned root is informational only; verifiers must pin a root they
    computed or captured at a moment they trust.
    """
    if file is None:
        raise MissingFileError("No file uploaded (expected multipart field 'file')")

    limit = config.server.max_upload_bytes
    data = file.file.read(limit + 1)
    if len(data) > limit:
        raise UploadTooLargeError(len(data), limit)

    name = filename or file.filename
    index, root = store.append_and_root(data, name=name)

    logger.info(f"Upload {name!r} stored at index {index}")
    return UploadResponse(
        file_index=index,
        filename=name,
        size=len(data),
        root=to_hex(root),
    )


@router.get("/download/{index}")
async def download_file(index: int, store: BlobStore = Depends(get_store)) -> Response:
    """
    Return the raw bytes stored at index.

    Responds 404 outside [0, file_count).
    """
    data = store.get_blob(index)
    return Response(
        content=data,
        media_type="application/octet-stream",
        headers={"X-File-Index": str(index)},
    )
