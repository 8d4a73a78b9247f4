"""
Pinata IPFS存储实现
下载远程图片后重新上传到Pinata，并单独上传NFT元数据
"""

from datetime import datetime
from typing import Any, Dict, Optional

import httpx

from ainft.core.config import settings
from ainft.core.log_utils import get_logger
from ainft.core.log_messages import log_messages
from ainft.core.storage.base_storage import BasePinningStorage, PinResult
from ainft.core.storage.exceptions import ConfigurationError, DownloadError, UploadError

logger = get_logger(__name__)


class PinataStorage(BasePinningStorage):
    """Pinata固定服务"""

    FILE_ENDPOINT = "/pinning/pinFileToIPFS"
    JSON_ENDPOINT = "/pinning/pinJSONToIPFS"

    def __init__(
        self,
        api_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        api_base: Optional[str] = None,
        gateway_base: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key if api_key is not None else settings.PINATA_API_KEY
        self._secret_key = secret_key if secret_key is not None else settings.PINATA_SECRET_KEY
        if not self._api_key or not self._secret_key:
            raise ConfigurationError("Pinata API keys not configured")

        self._api_base = (api_base or settings.pinata_api_base).rstrip("/")
        self._gateway_base = (gateway_base or settings.pinata_gateway_base).rstrip("/")
        self._transport = transport

    @property
    def _auth_headers(self) -> Dict[str, str]:
        return {
            "pinata_api_key": self._api_key,
            "pinata_secret_api_key": self._secret_key,
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=settings.pinata_timeout, transport=self._transport)

    def gateway_url(self, ipfs_hash: str) -> str:
        return f"{self._gateway_base}/{ipfs_hash}"

    @staticmethod
    def _error_message(error: Exception) -> str:
        """优先使用Pinata返回的错误信息"""
        if isinstance(error, httpx.HTTPStatusError):
            try:
                body = error.response.json()
            except ValueError:
                return error.response.text or str(error)
            if isinstance(body, dict):
                nested = body.get("error")
                if isinstance(nested, dict):
                    return nested.get("reason") or nested.get("details") or str(nested)
                return body.get("message") or nested or str(error)
        return str(error)

    async def pin_file(self, data: bytes, upload_name: str, mime_type: str) -> PinResult:
        files = {"file": (upload_name, data, mime_type)}
        async with self._client() as client:
            response = await client.post(
                f"{self._api_base}{self.FILE_ENDPOINT}",
                headers=self._auth_headers,
                files=files
            )
            response.raise_for_status()
            body = response.json()
        return self._to_result(body)

    async def pin_json(self, document: Dict[str, Any]) -> PinResult:
        async with self._client() as client:
            response = await client.post(
                f"{self._api_base}{self.JSON_ENDPOINT}",
                headers=self._auth_headers,
                json=document
            )
            response.raise_for_status()
            body = response.json()
        return self._to_result(body)

    def _to_result(self, body: Dict[str, Any]) -> PinResult:
        ipfs_hash = body["IpfsHash"]
        return PinResult(
            ipfs_hash=ipfs_hash,
            url=self.gateway_url(ipfs_hash),
            size=body.get("PinSize"),
            pinned_at=datetime.now()
        )

    async def download(self, url: str) -> bytes:
        """下载远程二进制内容"""
        try:
            async with self._client() as client:
                response = await client.get(url, follow_redirects=True)
                response.raise_for_status()
                return response.content
        except httpx.HTTPError as e:
            raise DownloadError(f"Failed to download image: {e}", details={"url": url}) from e

    async def upload_image(self, image_url: str) -> str:
        """
        下载远程图片并固定到IPFS

        Args:
            image_url: 远程图片URL

        Returns:
            str: IPFS网关URL
        """
        logger.info(log_messages.PIN_IMAGE_START, image_url=image_url)
        try:
            data = await self.download(image_url)
            result = await self.pin_file(
                data,
                settings.pinata_image_filename,
                settings.pinata_image_content_type
            )
        except DownloadError as e:
            logger.error(log_messages.PIN_FAILED, exception=e, stage="download")
            raise UploadError(f"Failed to upload to Pinata: {e.message}", details={"image_url": image_url}) from e
        except (httpx.HTTPError, KeyError, ValueError) as e:
            logger.error(log_messages.PIN_FAILED, exception=e, stage="image")
            raise UploadError(
                f"Failed to upload to Pinata: {self._error_message(e)}",
                details={"image_url": image_url}
            ) from e

        logger.info(log_messages.PIN_IMAGE_SUCCESS, ipfs_url=result.url, size=len(data))
        return result.url

    async def upload_metadata(self, metadata: Dict[str, Any]) -> str:
        """
        固定NFT元数据JSON文档

        Args:
            metadata: 元数据文档，原样上传

        Returns:
            str: IPFS网关URL
        """
        logger.info(log_messages.PIN_METADATA_START, metadata_name=metadata.get("name"))
        try:
            result = await self.pin_json(metadata)
        except (httpx.HTTPError, KeyError, ValueError) as e:
            logger.error(log_messages.PIN_FAILED, exception=e, stage="metadata")
            raise UploadError(f"Failed to upload metadata: {self._error_message(e)}") from e

        logger.info(log_messages.PIN_METADATA_SUCCESS, ipfs_url=result.url)
        return result.url

    async def fetch_json(self, url: str) -> Dict[str, Any]:
        """读取已固定的JSON文档"""
        return await fetch_json_document(url, transport=self._transport)


async def fetch_json_document(
    url: str,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    """通过网关读取JSON文档，不需要Pinata密钥"""
    try:
        async with httpx.AsyncClient(timeout=timeout or settings.pinata_timeout, transport=transport) as client:
            response = await client.get(url, follow_redirects=True)
            response.raise_for_status()
            return response.json()
    except (httpx.HTTPError, ValueError) as e:
        raise DownloadError(f"Failed to fetch document: {e}", details={"url": url}) from e
