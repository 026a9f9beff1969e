from unittest.mock import MagicMock

import pytest
from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError

from app.domain.errors import NotFound, ValidationError
from app.storage.blobs import BlobStore, MediaKind
from app.storage.files import FileShareStore
from app.storage.queues import QueueStore


@pytest.fixture
def blobs():
    return BlobStore(MagicMock())


def test_blob_put_uses_kind_folder_and_unique_name(blobs):
    blob_client = blobs.container.get_blob_client.return_value
    blob_client.url = "https://acc.blob.core.windows.net/multimedia/images/x_cat.jpg"

    url = blobs.put(MediaKind.IMAGE, "cat.jpg", b"data")

    name = blobs.container.get_blob_client.call_args.args[0]
    assert name.startswith("images/")
    assert name.endswith("_cat.jpg")
    settings = blob_client.upload_blob.call_args.kwargs["content_settings"]
    assert settings.content_type == "image/jpeg"
    assert url == blob_client.url


def test_blob_put_tolerates_existing_container(blobs):
    blobs.container.create_container.side_effect = ResourceExistsError("exists")

    blobs.put(MediaKind.DOCUMENT, "a.pdf", b"data", "application/pdf")

    settings = blobs.container.get_blob_client.return_value.upload_blob.call_args.kwargs[
        "content_settings"
    ]
    assert settings.content_type == "application/pdf"


@pytest.mark.parametrize(
    "url,name",
    [
        ("https://acc.blob.core.windows.net/multimedia/images/1_cat.jpg", "images/1_cat.jpg"),
        ("http://127.0.0.1:10000/devstoreaccount1/multimedia/videos/2_a.mp4", "videos/2_a.mp4"),
        ("https://acc.blob.core.windows.net/multimedia/documents/3_umowa%20nowa.pdf",
         "documents/3_umowa nowa.pdf"),
    ],
)
def test_blob_name_keeps_folder(blobs, url, name):
    assert blobs.blob_name_from_url(url) == name


def test_blob_url_outside_container_is_rejected(blobs):
    with pytest.raises(ValidationError):
        blobs.blob_name_from_url("https://acc.blob.core.windows.net/other/images/1_cat.jpg")


def test_blob_get_missing(blobs):
    blobs.container.download_blob.side_effect = ResourceNotFoundError("missing")

    with pytest.raises(NotFound):
        blobs.get("https://acc.blob.core.windows.net/multimedia/images/1_cat.jpg")


def test_blob_delete_missing_is_silent(blobs):
    blobs.container.delete_blob.side_effect = ResourceNotFoundError("missing")

    blobs.delete("https://acc.blob.core.windows.net/multimedia/images/1_cat.jpg")

    blobs.container.delete_blob.assert_called_once_with("images/1_cat.jpg")


def test_blob_list_by_kind(blobs):
    item = MagicMock()
    item.name = "videos/1_a.mp4"
    blobs.container.list_blobs.return_value = [item]

    urls = blobs.list(MediaKind.VIDEO)

    blobs.container.list_blobs.assert_called_once_with(name_starts_with="videos/")
    assert len(urls) == 1


@pytest.fixture
def queues():
    return QueueStore(MagicMock())


def test_receive_deletes_message_immediately(queues):
    client = queues.service.get_queue_client.return_value
    message = MagicMock(id="m1", content='{"orderId": "1"}')
    client.receive_message.return_value = message

    assert queues.receive_one("order-processing") == '{"orderId": "1"}'
    client.delete_message.assert_called_once_with(message)


def test_receive_from_empty_queue(queues):
    client = queues.service.get_queue_client.return_value
    client.receive_message.return_value = None

    assert queues.receive_one("order-processing") is None
    client.delete_message.assert_not_called()


def test_receive_from_missing_queue(queues):
    client = queues.service.get_queue_client.return_value
    client.receive_message.side_effect = ResourceNotFoundError("no queue")

    assert queues.receive_one("order-processing") is None


def test_peek_does_not_consume_and_is_capped(queues):
    client = queues.service.get_queue_client.return_value
    client.peek_messages.return_value = [MagicMock(content="a"), MagicMock(content="b")]

    assert queues.peek("order-processing", 100) == ["a", "b"]
    client.peek_messages.assert_called_once_with(max_messages=32)
    client.delete_message.assert_not_called()


def test_send_creates_queue_once_exists(queues):
    client = queues.service.get_queue_client.return_value
    client.create_queue.side_effect = ResourceExistsError("exists")

    queues.send("inventory-updates", "payload")

    client.send_message.assert_called_once_with("payload")


@pytest.fixture
def files():
    return FileShareStore(MagicMock())


def test_file_put_returns_share_path(files):
    path = files.put("customer-contracts", "AB12CD34_umowa.pdf", b"pdf")

    assert path == "contracts/customer-contracts/AB12CD34_umowa.pdf"
    files.share.create_share.assert_called_once()
    directory = files.share.get_directory_client.return_value
    directory.create_directory.assert_called_once()
    directory.get_file_client.assert_called_with("AB12CD34_umowa.pdf")


def test_file_put_tolerates_existing_share_and_directory(files):
    files.share.create_share.side_effect = ResourceExistsError("exists")
    files.share.get_directory_client.return_value.create_directory.side_effect = (
        ResourceExistsError("exists")
    )

    assert files.put("customer-contracts", "x.pdf", b"pdf").endswith("/x.pdf")


@pytest.mark.parametrize(
    "path,expected",
    [
        ("contracts/customer-contracts/a.pdf", ("customer-contracts", "a.pdf")),
        ("customer-contracts/a.pdf", ("customer-contracts", "a.pdf")),
        ("a.pdf", ("customer-contracts", "a.pdf")),
    ],
)
def test_split_path(files, path, expected):
    assert files.split_path(path) == expected


def test_file_list_skips_directories(files):
    files.share.get_directory_client.return_value.list_directories_and_files.return_value = [
        {"name": "a.pdf", "is_directory": False},
        {"name": "archiwum", "is_directory": True},
    ]

    assert files.list() == ["a.pdf"]


def test_file_get_missing(files):
    file_client = files.share.get_directory_client.return_value.get_file_client.return_value
    file_client.download_file.side_effect = ResourceNotFoundError("missing")

    with pytest.raises(NotFound):
        files.get("contracts/customer-contracts/a.pdf")
