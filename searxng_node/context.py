import asyncio
import aiohttp
from typing import Any, Dict, List, Mapping, Optional, Protocol
from searxng_node.config import settings
from searxng_node.description import parameter_default
from searxng_node.models import SearxngCredentials
import logging

logger = logging.getLogger(__name__)

class SearxngError(Exception):
    """Base exception for SearXNG request errors"""
    pass

class SearxngTimeoutError(SearxngError):
    """Raised when the search request times out"""
    pass

class SearxngAPIError(SearxngError):
    """Raised when the API answers with a non-success status"""
    pass

_MISSING = object()

class ExecutionContext(Protocol):
    """Services the workflow host hands to a node for one execution pass"""

    def get_input_data(self) -> List[Any]:
        ...

    async def get_credentials(self, name: str) -> Optional[SearxngCredentials]:
        ...

    def get_parameter(self, name: str, index: int, default: Any = _MISSING) -> Any:
        ...

    def continue_on_fail(self) -> bool:
        ...

    async def http_get(self, url: str, query: Mapping[str, Any], headers: Mapping[str, str]) -> Any:
        ...

class LocalExecutionContext:
    """Standalone host context backed by aiohttp and static parameter values"""

    def __init__(
        self,
        items: List[Any],
        parameters: Optional[Dict[str, Any]] = None,
        credentials: Optional[SearxngCredentials] = None,
        continue_on_fail: bool = False,
        timeout: Optional[int] = None,
    ):
        self.items = items
        self.parameters = parameters or {}
        self.credentials = credentials
        self._continue_on_fail = continue_on_fail
        self.timeout = timeout or settings.request_timeout

    def get_input_data(self) -> List[Any]:
        return self.items

    async def get_credentials(self, name: str) -> Optional[SearxngCredentials]:
        if self.credentials is not None:
            return self.credentials
        if not settings.searxng_api_url:
            return None
        logger.debug(f"Using {name} credentials from settings")
        return SearxngCredentials(
            api_url=settings.searxng_api_url,
            api_key=settings.searxng_api_key
        )

    def get_parameter(self, name: str, index: int, default: Any = _MISSING) -> Any:
        if name in self.parameters:
            return self.parameters[name]
        if default is not _MISSING:
            return default
        return parameter_default(name)

    def continue_on_fail(self) -> bool:
        return self._continue_on_fail

    async def http_get(self, url: str, query: Mapping[str, Any], headers: Mapping[str, str]) -> Any:
        """
        Perform a GET request and decode the body

        Args:
            url: Absolute request URL
            query: Query-string parameters
            headers: Request headers

        Returns:
            Decoded JSON payload, or the body text for the html and rss formats

        Raises:
            SearxngError: For transport failures, non-success statuses and
                JSON responses that cannot be decoded
        """
        params = {key: str(value) for key, value in query.items()}
        expects_json = params.get("format", "json") == "json"

        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(
                    url,
                    params=params,
                    headers=dict(headers),
                    timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:

                    if response.status == 429:
                        raise SearxngAPIError("API rate limit exceeded")

                    if response.status != 200:
                        error_text = await response.text()
                        raise SearxngAPIError(f"API error {response.status}: {error_text}")

                    if not expects_json:
                        return await response.text()

                    try:
                        return await response.json()
                    except (aiohttp.ContentTypeError, ValueError) as e:
                        raise SearxngError(f"Invalid JSON response: {str(e)}")

        except asyncio.TimeoutError:
            raise SearxngTimeoutError(f"Request timed out after {self.timeout} seconds")
        except aiohttp.ClientError as e:
            raise SearxngError(f"Network error: {str(e)}")

