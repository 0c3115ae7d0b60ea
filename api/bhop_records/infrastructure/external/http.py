"""
Cliente HTTP compartido por los collectors de feeds.
"""
import httpx
from loguru import logger

from bhop_records.core.config import Settings
from bhop_records.infrastructure.external.errors import FeedTransportError


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """
    Crea el httpx.AsyncClient que comparten los collectors.

    El caller es dueño del cliente y debe cerrarlo (aclose) al terminar.
    """
    return httpx.AsyncClient(
        timeout=settings.HTTP_TIMEOUT_S,
        follow_redirects=True,
        headers={"User-Agent": settings.HTTP_USER_AGENT},
    )


async def get_or_raise(client: httpx.AsyncClient, url: str, feed_name: str) -> httpx.Response:
    """
    GET que traduce errores de red y status no 2xx a FeedTransportError.
    """
    try:
        response = await client.get(url)
    except httpx.HTTPError as e:
        raise FeedTransportError(f"{feed_name}: error de red en {url}: {e}") from e

    if not response.is_success:
        logger.debug(f"{feed_name}: {url} respondio {response.status_code}")
        raise FeedTransportError(
            f"{feed_name}: {url} respondio {response.status_code}"
        )
    return response
