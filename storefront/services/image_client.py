# storefront/services/image_client.py
import requests

from storefront.utils.retry import http_retry
from storefront.utils.settings import IMAGEKIT_UPLOAD_URL, IMAGEKIT_PRIVATE_KEY
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ImageClient:
    """
    Upload zdjec produktow do zewnetrznego image store (ImageKit).
    Zwraca publiczny url.
    """

    def __init__(self, upload_url: str | None = None, private_key: str | None = None, timeout: int = 10):
        self.upload_url = upload_url or IMAGEKIT_UPLOAD_URL
        self.private_key = private_key if private_key is not None else IMAGEKIT_PRIVATE_KEY
        self.timeout = timeout

    @http_retry()
    def upload(self, content: bytes, file_name: str) -> str:
        logger.info(f"ImageClient POST {self.upload_url} ({file_name}, {len(content)} bytes)")

        #imagekit: basic auth, private key jako login, puste haslo
        resp = requests.post(
            self.upload_url,
            auth=(self.private_key, ""),
            files={"file": (file_name, content)},
            data={"fileName": file_name},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp.json()["url"]
