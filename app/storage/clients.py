# app/storage/clients.py
from dataclasses import dataclass

from azure.data.tables import TableServiceClient
from azure.storage.blob import BlobServiceClient
from azure.storage.fileshare import ShareServiceClient
from azure.storage.queue import QueueServiceClient

from app.storage.blobs import BlobStore
from app.storage.files import FileShareStore
from app.storage.queues import QueueStore
from app.storage.tables import CustomerProfileTable, ProductTable


@dataclass
class StorageGateway:
    """Gateways over one storage account, built once and passed around explicitly."""

    products: ProductTable
    profiles: CustomerProfileTable
    blobs: BlobStore
    queues: QueueStore
    files: FileShareStore

    @classmethod
    def from_connection_string(cls, connection_string: str) -> "StorageGateway":
        tables = TableServiceClient.from_connection_string(connection_string)
        return cls(
            products=ProductTable(tables),
            profiles=CustomerProfileTable(tables),
            blobs=BlobStore(BlobServiceClient.from_connection_string(connection_string)),
            queues=QueueStore(QueueServiceClient.from_connection_string(connection_string)),
            files=FileShareStore(ShareServiceClient.from_connection_string(connection_string)),
        )
