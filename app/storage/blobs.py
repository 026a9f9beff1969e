# app/storage/blobs.py
import uuid
from enum import Enum
from typing import IO
from urllib.parse import unquote, urlparse

from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import BlobServiceClient, ContentSettings, PublicAccess

from app.domain.errors import NotFound, ValidationError
from app.utils.settings import MEDIA_CONTAINER
from app.utils.logging import get_logger

logger = get_logger(__name__)


class MediaKind(str, Enum):
    IMAGE = "images"
    VIDEO = "videos"
    DOCUMENT = "documents"


DEFAULT_CONTENT_TYPES = {
    MediaKind.IMAGE: "image/jpeg",
    MediaKind.VIDEO: "video/mp4",
    MediaKind.DOCUMENT: "application/octet-stream",
}


class BlobStore:
    """Media files in one container, grouped by folder prefix per kind."""

    def __init__(self, service: BlobServiceClient, container_name: str = MEDIA_CONTAINER):
        self.container_name = container_name
        self.container = service.get_container_client(container_name)

    def ensure_container(self) -> None:
        try:
            self.container.create_container(public_access=PublicAccess.BLOB)
        except ResourceExistsError:
            pass

    def put(
        self,
        kind: MediaKind,
        file_name: str,
        data: bytes | IO[bytes],
        content_type: str | None = None,
    ) -> str:
        self.ensure_container()

        blob_name = f"{kind.value}/{uuid.uuid4()}_{file_name}"
        blob = self.container.get_blob_client(blob_name)
        blob.upload_blob(
            data,
            content_settings=ContentSettings(
                content_type=content_type or DEFAULT_CONTENT_TYPES[kind]
            ),
        )

        logger.info(f"Uploaded blob {blob_name}")
        return blob.url

    def blob_name_from_url(self, url: str) -> str:
        #url: https://<konto>/<kontener>/<folder>/<nazwa>, azurite dodaje jeszcze nazwe konta
        parts = unquote(urlparse(url).path).lstrip("/").split("/")
        if self.container_name not in parts:
            raise ValidationError(f"Blob url does not point into '{self.container_name}'")
        name = "/".join(parts[parts.index(self.container_name) + 1:])
        if not name:
            raise ValidationError("Blob url has no blob name")
        return name

    def get(self, url: str) -> bytes:
        name = self.blob_name_from_url(url)
        try:
            return self.container.download_blob(name).readall()
        except ResourceNotFoundError:
            raise NotFound("File not found")

    def list(self, kind: MediaKind | None = None) -> list[str]:
        prefix = f"{kind.value}/" if kind else None
        try:
            return [
                self.container.get_blob_client(item.name).url
                for item in self.container.list_blobs(name_starts_with=prefix)
            ]
        except ResourceNotFoundError:
            return []

    def delete(self, url: str) -> None:
        name = self.blob_name_from_url(url)
        try:
            self.container.delete_blob(name)
        except ResourceNotFoundError:
            logger.info(f"Blob {name} already gone")
            return
        logger.info(f"Deleted blob {name}")
