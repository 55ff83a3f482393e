"""Tests for core/storage/gcs.py against a mocked GCS HTTP API."""

import base64
import json
from unittest.mock import patch

import httpx
import jwt
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from core.storage import GCSStorage, StorageError, reset_storage
from core.storage import gcs
from core.storage.gcs import decode_service_account


@pytest.fixture(scope="module")
def private_key():
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode()
    return key, pem


@pytest.fixture
def encoded_key(private_key):
    info = {
        "type": "service_account",
        "client_email": "uploader@demo-project.iam.gserviceaccount.com",
        "private_key_id": "key-1",
        "private_key": private_key[1],
        "token_uri": "https://oauth2.googleapis.com/token",
    }
    return base64.b64encode(json.dumps(info).encode()).decode()


class FakeGCS:
    """Records requests and answers like the token endpoint and JSON API."""

    def __init__(self, upload_status=200, delete_status=204):
        self.requests = []
        self.upload_status = upload_status
        self.delete_status = delete_status
        self.token_calls = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "oauth2.googleapis.com":
            self.token_calls += 1
            return httpx.Response(200, json={"access_token": "ya29.token", "expires_in": 3600})
        if request.method == "POST":
            return httpx.Response(self.upload_status, json={"name": request.url.params.get("name")})
        if request.method == "DELETE":
            return httpx.Response(self.delete_status)
        return httpx.Response(400)


def make_storage(encoded_key, fake):
    client = httpx.Client(transport=httpx.MockTransport(fake))
    return GCSStorage(
        project_id="demo-project",
        service_account_key=encoded_key,
        bucket_name="resume-bucket",
        client=client,
    )


class TestConfiguration:

    def test_unconfigured_upload_returns_none(self):
        storage = GCSStorage(project_id="", service_account_key="", bucket_name="")
        assert storage.configured is False
        assert storage.upload_pdf(b"%PDF-1.4", "x.pdf") is None
        assert storage.delete_pdf("x.pdf") is False

    def test_malformed_key_disables_storage(self):
        storage = GCSStorage(project_id="demo", service_account_key="not base64 json!", bucket_name="b")
        assert storage.configured is False

    def test_decode_service_account_rejects_garbage(self):
        with pytest.raises(ValueError):
            decode_service_account(base64.b64encode(b"{nope").decode())

    def test_missing_bucket_is_unconfigured(self, encoded_key):
        storage = GCSStorage(project_id="demo-project", service_account_key=encoded_key, bucket_name="")
        assert storage.configured is False


class TestUpload:

    def test_upload_returns_public_url(self, encoded_key):
        fake = FakeGCS()
        storage = make_storage(encoded_key, fake)

        url = storage.upload_pdf(b"%PDF-1.4 data", "abc-1700000000000.pdf")

        assert url == "https://storage.googleapis.com/resume-bucket/resumes/abc-1700000000000.pdf"
        upload = fake.requests[-1]
        assert upload.url.params["name"] == "resumes/abc-1700000000000.pdf"
        assert upload.url.params["predefinedAcl"] == "publicRead"
        assert upload.headers["Content-Type"] == "application/pdf"
        assert upload.headers["Authorization"] == "Bearer ya29.token"
        assert upload.content == b"%PDF-1.4 data"

    def test_assertion_signed_with_service_key(self, encoded_key, private_key):
        fake = FakeGCS()
        storage = make_storage(encoded_key, fake)
        storage.upload_pdf(b"%PDF", "a.pdf")

        form = dict(pair.split("=", 1) for pair in fake.requests[0].content.decode().split("&"))
        claims = jwt.decode(
            form["assertion"],
            private_key[0].public_key(),
            algorithms=["RS256"],
            audience="https://oauth2.googleapis.com/token",
        )
        assert claims["iss"] == "uploader@demo-project.iam.gserviceaccount.com"
        assert "devstorage" in claims["scope"]

    def test_token_cached_between_uploads(self, encoded_key):
        fake = FakeGCS()
        storage = make_storage(encoded_key, fake)
        storage.upload_pdf(b"%PDF", "a.pdf")
        storage.upload_pdf(b"%PDF", "b.pdf")
        assert fake.token_calls == 1

    def test_rejected_upload_raises(self, encoded_key):
        storage = make_storage(encoded_key, FakeGCS(upload_status=403))
        with pytest.raises(StorageError):
            storage.upload_pdf(b"%PDF", "a.pdf")

    def test_network_failure_raises(self, encoded_key):
        def broken(request):
            raise httpx.ConnectError("down", request=request)

        storage = make_storage(encoded_key, broken)
        with pytest.raises(StorageError):
            storage.upload_pdf(b"%PDF", "a.pdf")


class TestDelete:

    def test_delete(self, encoded_key):
        fake = FakeGCS()
        storage = make_storage(encoded_key, fake)
        assert storage.delete_pdf("a.pdf") is True
        assert fake.requests[-1].url.raw_path.endswith(b"/o/resumes%2Fa.pdf")

    def test_delete_missing_object(self, encoded_key):
        storage = make_storage(encoded_key, FakeGCS(delete_status=404))
        assert storage.delete_pdf("a.pdf") is False


class TestSharedClient:

    def test_reset_closes_http_client(self, encoded_key):
        storage = make_storage(encoded_key, FakeGCS())
        client = storage.client
        with patch("core.storage.gcs._storage", storage):
            reset_storage()
            assert gcs._storage is None
        assert client.is_closed

    def test_close_without_client_is_noop(self):
        storage = GCSStorage(project_id="", service_account_key="", bucket_name="")
        storage.close()
        assert storage._client is None
