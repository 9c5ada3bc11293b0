"""Integration tests for plugin wiring of the configured providers."""
from fastapi.testclient import TestClient
from scitrera_app_framework import Variables

from memoport_server.services.instance_settings import get_instance_settings_service
from memoport_server.services.memo import get_memo_service, DefaultMemoService
from memoport_server.services.reconciler import get_import_reconciler, DefaultImportReconciler
from memoport_server.services.reference_importer import get_reference_importer, NoneReferenceImporter
from memoport_server.services.snapshot import get_snapshot_builder, DefaultSnapshotBuilder
from memoport_server.services.storage import get_storage_backend
from memoport_server.services.storage.sqlite import SQLiteStorageBackend
from memoport_server.services.transfer import get_transfer_service, DefaultTransferService


def test_configured_providers(test_client: TestClient, v: Variables) -> None:
    """Providers follow the test configuration (sqlite storage, no reference import)."""
    assert isinstance(get_storage_backend(v), SQLiteStorageBackend)
    assert isinstance(get_reference_importer(v), NoneReferenceImporter)
    assert isinstance(get_import_reconciler(v), DefaultImportReconciler)
    assert isinstance(get_snapshot_builder(v), DefaultSnapshotBuilder)
    assert isinstance(get_memo_service(v), DefaultMemoService)
    assert isinstance(get_transfer_service(v), DefaultTransferService)


def test_services_share_storage(test_client: TestClient, v: Variables) -> None:
    storage = get_storage_backend(v)
    assert get_import_reconciler(v).storage is storage
    assert get_snapshot_builder(v).storage is storage
    assert get_instance_settings_service(v).storage is storage


def test_configured_content_limit(test_client: TestClient, v: Variables, content_limit: int) -> None:
    settings = get_instance_settings_service(v)
    assert settings.default_content_length_limit == content_limit
