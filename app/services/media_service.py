# app/services/media_service.py
from typing import IO

from app.domain.errors import ValidationError
from app.services.results import ServiceResult, service_boundary
from app.storage.blobs import BlobStore, MediaKind
from app.utils.logging import get_logger

logger = get_logger(__name__)


class MediaService:
    def __init__(self, blobs: BlobStore):
        self.blobs = blobs

    @service_boundary("Error uploading file")
    def upload(
        self,
        kind: MediaKind,
        file_name: str,
        data: bytes | IO[bytes],
        content_type: str | None = None,
    ) -> ServiceResult[str]:
        if not file_name:
            raise ValidationError("Please select a file to upload.")
        if isinstance(data, (bytes, bytearray)) and not data:
            raise ValidationError("Please select a file to upload.")

        url = self.blobs.put(kind, file_name, data, content_type)
        return ServiceResult.ok(f"{kind.name.title()} uploaded successfully!", url)

    def upload_image(self, file_name: str, data: bytes | IO[bytes], content_type: str = "image/jpeg"):
        return self.upload(MediaKind.IMAGE, file_name, data, content_type)

    def upload_video(self, file_name: str, data: bytes | IO[bytes], content_type: str = "video/mp4"):
        return self.upload(MediaKind.VIDEO, file_name, data, content_type)

    def upload_document(self, file_name: str, data: bytes | IO[bytes], content_type: str):
        return self.upload(MediaKind.DOCUMENT, file_name, data, content_type)

    @service_boundary("Error downloading file")
    def download(self, url: str) -> ServiceResult[bytes]:
        return ServiceResult.ok("File downloaded", self.blobs.get(url))

    def list_urls(self, kind: MediaKind | None = None) -> list[str]:
        return self.blobs.list(kind)

    @service_boundary("Error deleting file")
    def delete(self, url: str) -> ServiceResult[None]:
        self.blobs.delete(url)
        return ServiceResult.ok("File deleted successfully!")
