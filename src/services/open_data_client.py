"""
Асинхронный HTTP-клиент для открытых API (DataSF, NextBus, Mapbox)
"""
import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp

from src.config import settings
from src.utils.error_handler import MalformedUpstreamResponseError, UpstreamUnavailableError

logger = logging.getLogger(__name__)


class OpenDataClient:
    """Один GET на вызов, без повторов: при ошибке работает fallback на кэш"""

    def __init__(self, timeout_seconds: Optional[float] = None, user_agent: Optional[str] = None):
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds or settings.upstream_timeout_seconds)
        self.headers = {"User-Agent": user_agent or settings.user_agent, "Accept": "application/json"}

    async def fetch_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET url и разобрать JSON

        Raises:
            UpstreamUnavailableError: сеть/таймаут или статус не 2xx
            MalformedUpstreamResponseError: тело не JSON
        """
        try:
            async with aiohttp.ClientSession(timeout=self.timeout, headers=self.headers) as session:
                async with session.get(url, params=_stringify(params)) as response:
                    if response.status >= 400:
                        body = await response.text()
                        logger.warning(f"⚠️ {url} ответил {response.status}: {body[:200]}")
                        raise UpstreamUnavailableError(
                            f"Upstream error: {response.status} {response.reason}",
                            upstream_status=response.status,
                        )
                    try:
                        return await response.json(content_type=None)
                    except ValueError as e:
                        raise MalformedUpstreamResponseError(f"Invalid JSON from {url}: {e}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise UpstreamUnavailableError(f"Upstream unreachable: {type(e).__name__}: {e}")


def _stringify(params: Optional[Dict[str, Any]]) -> Optional[Dict[str, str]]:
    # aiohttp принимает в query только str/int/float
    if params is None:
        return None
    return {key: str(value) for key, value in params.items()}
