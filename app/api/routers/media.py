from fastapi import APIRouter, Depends, File, Query, Response, UploadFile, status

from app.api.deps import get_storage, unwrap
from app.domain.schemas import FileListOut, MessageOut
from app.services.media_service import MediaService
from app.storage.blobs import MediaKind
from app.storage.clients import StorageGateway

router = APIRouter(prefix="/media", tags=["media"])


def get_service(storage: StorageGateway = Depends(get_storage)) -> MediaService:
    return MediaService(storage.blobs)


@router.get("/", response_model=FileListOut)
def list_media(
    kind: MediaKind | None = Query(default=None),
    svc: MediaService = Depends(get_service),
):
    return FileListOut(files=svc.list_urls(kind))


@router.post("/{kind}", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def upload_media(
    kind: MediaKind,
    file: UploadFile = File(...),
    svc: MediaService = Depends(get_service),
):
    result = svc.upload(kind, file.filename or "", file.file.read(), file.content_type)
    url = unwrap(result)
    return MessageOut(success=True, message=url)


@router.get("/download")
def download_media(url: str = Query(...), svc: MediaService = Depends(get_service)):
    data = unwrap(svc.download(url))
    return Response(content=data, media_type="application/octet-stream")


@router.delete("/", response_model=MessageOut)
def delete_media(url: str = Query(...), svc: MediaService = Depends(get_service)):
    result = svc.delete(url)
    unwrap(result)
    return MessageOut(success=True, message=result.message)
