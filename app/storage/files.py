# app/storage/files.py
from typing import Any, IO

from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError
from azure.storage.fileshare import ShareDirectoryClient, ShareFileClient, ShareServiceClient

from app.domain.errors import NotFound
from app.utils.settings import CONTRACT_DIRECTORY, CONTRACT_SHARE
from app.utils.logging import get_logger

logger = get_logger(__name__)


class FileShareStore:
    """
    Files in one share. Paths are returned as "<share>/<directory>/<file>".

    Upload creates the share and directory first, each as its own call: a
    failure in between leaves an empty share or directory behind.
    """

    def __init__(
        self,
        service: ShareServiceClient,
        share_name: str = CONTRACT_SHARE,
        default_directory: str = CONTRACT_DIRECTORY,
    ):
        self.share_name = share_name
        self.default_directory = default_directory
        self.share = service.get_share_client(share_name)

    def ensure_share(self) -> None:
        try:
            self.share.create_share()
        except ResourceExistsError:
            pass

    def ensure_directory(self, directory: str) -> ShareDirectoryClient:
        client = self.share.get_directory_client(directory)
        try:
            client.create_directory()
        except ResourceExistsError:
            pass
        return client

    def split_path(self, path: str) -> tuple[str, str]:
        parts = [p for p in path.split("/") if p]
        if parts and parts[0] == self.share_name:
            parts = parts[1:]
        if not parts:
            raise NotFound("File not found")
        if len(parts) == 1:
            return self.default_directory, parts[0]
        return "/".join(parts[:-1]), parts[-1]

    def _file(self, path: str) -> ShareFileClient:
        directory, name = self.split_path(path)
        return self.share.get_directory_client(directory).get_file_client(name)

    def put(self, directory: str, file_name: str, data: bytes | IO[bytes]) -> str:
        self.ensure_share()
        dir_client = self.ensure_directory(directory)
        dir_client.get_file_client(file_name).upload_file(data)

        path = f"{self.share_name}/{directory}/{file_name}"
        logger.info(f"Uploaded file {path}")
        return path

    def get(self, path: str) -> bytes:
        try:
            return self._file(path).download_file().readall()
        except ResourceNotFoundError:
            raise NotFound("File not found")

    def list(self, directory: str | None = None) -> list[str]:
        client = self.share.get_directory_client(directory or self.default_directory)
        try:
            return [
                item["name"]
                for item in client.list_directories_and_files()
                if not item["is_directory"]
            ]
        except ResourceNotFoundError:
            return []

    def delete(self, path: str) -> None:
        try:
            self._file(path).delete_file()
        except ResourceNotFoundError:
            logger.info(f"File {path} already gone")
            return
        logger.info(f"Deleted file {path}")

    def properties(self, path: str) -> dict[str, Any]:
        try:
            props = self._file(path).get_file_properties()
        except ResourceNotFoundError:
            raise NotFound("File not found")
        return {
            "name": props.name,
            "size": props.size,
            "last_modified": props.last_modified,
            "content_type": props.content_settings.content_type if props.content_settings else None,
        }

    def create_directory(self, directory: str) -> None:
        self.ensure_share()
        self.ensure_directory(directory)
