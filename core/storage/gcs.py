#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Google Cloud Storage uploader for exported PDFs.

Talks to the GCS JSON API over httpx. Credentials are a service-account JSON
key (base64 encoded in GCP_SERVICE_ACCOUNT_KEY); an OAuth access token is
obtained by exchanging a self-signed RS256 JWT assertion at the key's token
URI and cached until shortly before it expires.

Objects live under `resumes/` and are made publicly readable.
"""

import base64
import binascii
import json
import logging
import time
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx
import jwt

from config.settings import settings

logger = logging.getLogger(__name__)

STORAGE_SCOPE = "https://www.googleapis.com/auth/devstorage.read_write"
DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"
UPLOAD_URL = "https://storage.googleapis.com/upload/storage/v1/b/{bucket}/o"
OBJECT_URL = "https://storage.googleapis.com/storage/v1/b/{bucket}/o/{name}"
PUBLIC_URL = "https://storage.googleapis.com/{bucket}/{name}"
OBJECT_PREFIX = "resumes/"
TOKEN_LIFETIME = 3600


class StorageError(Exception):
    """Upload or delete rejected by the storage service."""


def decode_service_account(encoded: str) -> Dict[str, Any]:
    """base64 JSON key -> dict. Raises ValueError on malformed input."""
    try:
        return json.loads(base64.b64decode(encoded).decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValueError(f"Invalid service account key: {e}") from e


class GCSStorage:
    """
    Usage:
        storage = GCSStorage()
        if storage.configured:
            url = storage.upload_pdf(pdf_bytes, "abc-1700000000000.pdf")
    """

    def __init__(
        self,
        project_id: Optional[str] = None,
        service_account_key: Optional[str] = None,
        bucket_name: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.project_id = project_id if project_id is not None else settings.gcp_project_id
        self.bucket_name = bucket_name if bucket_name is not None else settings.gcp_bucket_name
        self.timeout = timeout or settings.storage_timeout_seconds
        self._client = client
        self._token: Optional[str] = None
        self._token_expiry = 0.0
        self.credentials: Optional[Dict[str, Any]] = None

        key = service_account_key if service_account_key is not None else settings.gcp_service_account_key
        if self.project_id and key:
            try:
                self.credentials = decode_service_account(key)
            except ValueError as e:
                logger.error(f"Failed to initialize Google Cloud Storage: {e}")
        else:
            logger.warning("GCP credentials not configured. File upload will be disabled.")

    @property
    def configured(self) -> bool:
        return bool(self.credentials and self.bucket_name)

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout)
        return self._client

    def close(self):
        """Close the HTTP client if one was opened."""
        if self._client is not None:
            self._client.close()
            self._client = None

    # ==================== AUTH ====================

    def _assertion(self) -> str:
        now = int(time.time())
        claims = {
            "iss": self.credentials["client_email"],
            "scope": STORAGE_SCOPE,
            "aud": self.credentials.get("token_uri", DEFAULT_TOKEN_URI),
            "iat": now,
            "exp": now + TOKEN_LIFETIME,
        }
        headers = {"kid": self.credentials["private_key_id"]} if self.credentials.get("private_key_id") else None
        return jwt.encode(claims, self.credentials["private_key"], algorithm="RS256", headers=headers)

    def access_token(self) -> str:
        """Cached OAuth token; refreshed a minute before expiry."""
        if self._token and time.time() < self._token_expiry - 60:
            return self._token

        token_uri = self.credentials.get("token_uri", DEFAULT_TOKEN_URI)
        try:
            response = self.client.post(token_uri, data={
                "grant_type": "urn:ietf:params:oauth:grant-type:jwt-bearer",
                "assertion": self._assertion(),
            })
        except httpx.HTTPError as e:
            raise StorageError(f"Token request failed: {e}") from e
        if response.status_code != 200:
            raise StorageError(f"Token request rejected ({response.status_code}): {response.text[:200]}")

        payload = response.json()
        self._token = payload["access_token"]
        self._token_expiry = time.time() + int(payload.get("expires_in", TOKEN_LIFETIME))
        return self._token

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token()}"}

    # ==================== OBJECTS ====================

    def public_url(self, filename: str) -> str:
        return PUBLIC_URL.format(bucket=self.bucket_name, name=f"{OBJECT_PREFIX}{filename}")

    def upload_pdf(self, data: bytes, filename: str) -> Optional[str]:
        """
        Upload a PDF as `resumes/{filename}`.

        Returns:
            Public URL, or None when storage is not configured

        Raises:
            StorageError: if the upload is rejected or the request fails
        """
        if not self.configured:
            logger.warning("Storage not configured")
            return None

        name = f"{OBJECT_PREFIX}{filename}"
        try:
            response = self.client.post(
                UPLOAD_URL.format(bucket=self.bucket_name),
                params={"uploadType": "media", "name": name, "predefinedAcl": "publicRead"},
                content=data,
                headers={**self._headers(), "Content-Type": "application/pdf"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Failed to upload to GCS: {e}")
            raise StorageError(f"Upload failed: {e}") from e

        if response.status_code not in (200, 201):
            logger.error(f"Failed to upload to GCS: {response.status_code} {response.text[:200]}")
            raise StorageError(f"Upload rejected ({response.status_code})")

        url = self.public_url(filename)
        logger.info(f"Uploaded {name} ({len(data)} bytes)")
        return url

    def delete_pdf(self, filename: str) -> bool:
        """Delete `resumes/{filename}`; False when unconfigured or already gone."""
        if not self.configured:
            return False

        name = f"{OBJECT_PREFIX}{filename}"
        try:
            response = self.client.delete(
                OBJECT_URL.format(bucket=self.bucket_name, name=quote(name, safe="")),
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            logger.error(f"Failed to delete from GCS: {e}")
            raise StorageError(f"Delete failed: {e}") from e

        if response.status_code == 404:
            logger.warning(f"{name} not found in bucket")
            return False
        if response.status_code not in (200, 204):
            logger.error(f"Failed to delete from GCS: {response.status_code}")
            raise StorageError(f"Delete rejected ({response.status_code})")
        logger.info(f"Deleted {name}")
        return True


# ==================== SINGLETON ====================

_storage: Optional[GCSStorage] = None


def get_storage() -> GCSStorage:
    """Get the shared storage client."""
    global _storage
    if _storage is None:
        _storage = GCSStorage()
    return _storage


def reset_storage():
    """Close and drop the shared client (tests, settings reload)."""
    global _storage
    if _storage is not None:
        _storage.close()
    _storage = None
