"""
Object storage for exported PDFs (Google Cloud Storage).

Usage:
    from core.storage import get_storage

    url = get_storage().upload_pdf(pdf_bytes, filename)   # None if unconfigured
"""

from .gcs import GCSStorage, StorageError, get_storage, reset_storage

__all__ = ["GCSStorage", "StorageError", "get_storage", "reset_storage"]
