"""
Backblaze B2 client over the native ``b2api/v2`` HTTP API.

The account authorization (token, API URL, download URL) is cached by
``B2AuthorizationCache``. It is refreshed when missing, when older than
``ttl`` seconds, or when an API call answers 401, after which that call is
repeated exactly once.
"""
import hashlib
import threading
import time
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from recruitment.core.config import settings
from recruitment.core.errors import StorageError
from recruitment.core.logger_setup import setup_logger

logger = setup_logger(__name__)

# B2 account tokens are valid for 24 hours
DEFAULT_AUTH_TTL_SECONDS = 23 * 60 * 60
REQUEST_TIMEOUT_SECONDS = 30


class B2Authorization:
    def __init__(self, token: str, api_url: str, download_url: str, expires_at: float):
        self.token = token
        self.api_url = api_url
        self.download_url = download_url
        self.expires_at = expires_at


class UploadedFile:
    def __init__(self, file_id: str, file_name: str, url: str):
        self.file_id = file_id
        self.file_name = file_name
        self.url = url


class B2AuthorizationCache:
    """Holds the current account authorization for one client."""

    def __init__(self, authorize, ttl: float = DEFAULT_AUTH_TTL_SECONDS, clock=time.monotonic):
        self._authorize = authorize
        self._ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._current: Optional[B2Authorization] = None

    @property
    def is_authenticated(self) -> bool:
        current = self._current
        return current is not None and self._clock() < current.expires_at

    def get(self) -> B2Authorization:
        with self._lock:
            if not self.is_authenticated:
                self._current = self._fetch()
            return self._current

    def refresh(self, stale: Optional[B2Authorization] = None) -> B2Authorization:
        """Force re-authorization unless another caller already replaced ``stale``."""
        with self._lock:
            if stale is None or self._current is stale:
                self._current = self._fetch()
            return self._current

    def invalidate(self) -> None:
        with self._lock:
            self._current = None

    def _fetch(self) -> B2Authorization:
        data = self._authorize()
        return B2Authorization(
            token=data["authorizationToken"],
            api_url=data["apiUrl"],
            download_url=data["downloadUrl"],
            expires_at=self._clock() + self._ttl,
        )


class B2StorageClient:
    def __init__(
        self,
        key_id: str,
        application_key: str,
        bucket_id: str,
        bucket_name: str,
        api_base: str = "https://api.backblazeb2.com",
        session: Optional[requests.Session] = None,
        auth_ttl: float = DEFAULT_AUTH_TTL_SECONDS,
        clock=time.monotonic,
    ):
        self.key_id = key_id
        self.application_key = application_key
        self.bucket_id = bucket_id
        self.bucket_name = bucket_name
        self.api_base = api_base.rstrip("/")
        self.session = session or requests.Session()
        self.auth_cache = B2AuthorizationCache(self._authorize_account, ttl=auth_ttl, clock=clock)

    def _authorize_account(self) -> Dict[str, Any]:
        logger.info("Authorizing with Backblaze B2")
        try:
            response = self.session.get(
                f"{self.api_base}/b2api/v2/b2_authorize_account",
                auth=(self.key_id, self.application_key),
                timeout=REQUEST_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            logger.error(f"Error authorizing with Backblaze B2: {str(e)}")
            raise StorageError(f"Authorization request failed: {str(e)}") from e

        if response.status_code != 200:
            logger.error(f"Backblaze B2 authorization failed. Status code: {response.status_code}")
            raise StorageError(f"Authorization failed with status {response.status_code}")
        return response.json()

    def _call_api(self, operation: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST to an account-level API operation, re-authorizing once on 401."""
        auth = self.auth_cache.get()
        response = self._post_api(auth, operation, payload)

        if response.status_code == 401:
            logger.warning(f"B2 rejected cached authorization on {operation}; re-authorizing")
            auth = self.auth_cache.refresh(stale=auth)
            response = self._post_api(auth, operation, payload)

        if response.status_code != 200:
            logger.error(f"B2 {operation} failed. Status code: {response.status_code}, body: {response.text}")
            raise StorageError(f"{operation} failed with status {response.status_code}")
        return response.json()

    def _post_api(self, auth: B2Authorization, operation: str, payload: Dict[str, Any]) -> requests.Response:
        try:
            return self.session.post(
                f"{auth.api_url}/b2api/v2/{operation}",
                json=payload,
                headers={"Authorization": auth.token},
                timeout=REQUEST_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            logger.error(f"Network error calling B2 {operation}: {str(e)}")
            raise StorageError(f"{operation} request failed: {str(e)}") from e

    def public_url(self, file_name: str, download_url: Optional[str] = None) -> str:
        base = download_url or self.auth_cache.get().download_url
        return f"{base}/file/{self.bucket_name}/{file_name}"

    def upload_file(self, data: bytes, file_name: str, content_type: str) -> UploadedFile:
        upload_target = self._call_api("b2_get_upload_url", {"bucketId": self.bucket_id})

        headers = {
            "Authorization": upload_target["authorizationToken"],
            "X-Bz-File-Name": quote(file_name, safe="/"),
            "Content-Type": content_type,
            "Content-Length": str(len(data)),
            "X-Bz-Content-Sha1": hashlib.sha1(data).hexdigest(),
        }
        try:
            response = self.session.post(
                upload_target["uploadUrl"],
                data=data,
                headers=headers,
                timeout=REQUEST_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            logger.error(f"Network error uploading {file_name}: {str(e)}")
            raise StorageError(f"Upload request failed: {str(e)}") from e

        if response.status_code != 200:
            logger.error(f"Failed to upload {file_name}. Status code: {response.status_code}")
            raise StorageError(f"Upload failed with status {response.status_code}")

        body = response.json()
        logger.info(f"Successfully uploaded {file_name} ({len(data)} bytes)")
        return UploadedFile(
            file_id=body.get("fileId"),
            file_name=body.get("fileName", file_name),
            url=self.public_url(file_name),
        )

    def delete_file(self, file_name: str, file_id: str) -> None:
        self._call_api("b2_delete_file_version", {"fileName": file_name, "fileId": file_id})
        logger.info(f"Deleted {file_name} ({file_id})")

    def get_file_info(self, file_id: str) -> Dict[str, Any]:
        return self._call_api("b2_get_file_info", {"fileId": file_id})


_storage_client: Optional[B2StorageClient] = None


def get_storage_client() -> B2StorageClient:
    """Process-wide client; its authorization cache lives as long as the client."""
    global _storage_client
    if _storage_client is None:
        _storage_client = B2StorageClient(
            key_id=settings.B2_APPLICATION_KEY_ID,
            application_key=settings.B2_APPLICATION_KEY,
            bucket_id=settings.B2_BUCKET_ID,
            bucket_name=settings.B2_BUCKET_NAME,
            api_base=settings.B2_API_BASE,
        )
    return _storage_client
