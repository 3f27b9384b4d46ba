"""
Abstract base class for liquidity pool providers.
Defines the interface that every provider adapter must implement.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Type
import httpx

from shared_models.pool_data import Pool, PoolProvider
from .payloads import ProviderPayload
from ..core.logging_config import create_logger

logger = create_logger(__name__)

DEFAULT_TIMEOUT_SECS = 10.0
DEFAULT_USER_AGENT = "Solana-Pool-Reader/1.0"


class ProviderError(Exception):
    """Base exception for provider errors."""

    kind = "provider"

    def __init__(self, message: str, provider: str):
        self.message = message
        self.provider = provider
        super().__init__(self.message)


class TransportError(ProviderError):
    """Raised when the provider cannot be reached (DNS, connection, timeout)."""

    kind = "transport"


class HttpStatusError(ProviderError):
    """Raised when the provider answers with a non-2xx status."""

    kind = "http_status"

    def __init__(self, message: str, provider: str, status_code: int):
        super().__init__(message, provider)
        self.status_code = status_code


class DecodeError(ProviderError):
    """Raised when the provider body is not well-formed JSON."""

    kind = "decode"


class BasePoolProvider(ABC):
    """Abstract base class for liquidity pool providers."""

    provider: PoolProvider

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECS,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.name = self.provider.value
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.user_agent = user_agent
        self.client: Optional[httpx.AsyncClient] = None
        self._transport = transport

    async def __aenter__(self):
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.disconnect()

    async def connect(self) -> None:
        """Initialize HTTP client connection."""
        if self.client is None:
            limits = httpx.Limits(max_keepalive_connections=10, max_connections=20)

            self.client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                limits=limits,
                headers=self._get_default_headers(),
                follow_redirects=True,
                transport=self._transport
            )

            logger.debug("Connected to provider", extra={"provider": self.name})

    async def disconnect(self) -> None:
        """Close HTTP client connection."""
        if self.client:
            await self.client.aclose()
            self.client = None
            logger.debug("Disconnected from provider", extra={"provider": self.name})

    def _get_default_headers(self) -> Dict[str, str]:
        """Get default HTTP headers for requests."""
        return {
            'User-Agent': self.user_agent,
            'Accept': 'application/json'
        }

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Issue a single GET request and decode the JSON body.

        Args:
            path: Path appended to the provider base URL
            params: Query parameters

        Returns:
            Decoded JSON value

        Raises:
            TransportError: If the provider cannot be reached or times out
            HttpStatusError: If the provider answers with a non-2xx status
            DecodeError: If the body is not valid JSON
        """
        if not self.client:
            await self.connect()

        url = f"{self.base_url}{path}"

        logger.debug("Making request to provider", extra={
            "provider": self.name,
            "url": url,
            "params": params
        })

        try:
            response = await self.client.get(url, params=params)
        except httpx.TimeoutException as e:
            raise TransportError(
                f"Request timeout for {self.name}: {e!r}",
                self.name
            )
        except httpx.HTTPError as e:
            raise TransportError(
                f"Transport error for {self.name}: {e!r}",
                self.name
            )

        if not response.is_success:
            raise HttpStatusError(
                f"{self.name} responded with HTTP {response.status_code}",
                self.name,
                response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError(
                f"Invalid JSON response from {self.name}: {str(e)}",
                self.name
            )

        logger.debug("Received response from provider", extra={
            "provider": self.name,
            "status_code": response.status_code,
            "response_size": len(response.content)
        })
        return data

    def _to_pools(self, record_model: Type[ProviderPayload], records: Iterable[Any]) -> List[Pool]:
        """Map raw provider records onto Pool objects through the given schema."""
        pools = []
        for raw in records:
            record = record_model.from_json(raw)
            pools.append(self._create_pool(record))
        return pools

    def _create_pool(self, record: ProviderPayload) -> Pool:
        """Create a normalized Pool from a parsed provider record."""
        return Pool(pool_id=record.pool_id, tvl=record.tvl, price=record.price)

    @abstractmethod
    async def fetch_pools(self, token_mint_a: str, token_mint_b: str) -> List[Pool]:
        """
        Fetch every pool the provider lists for the token pair.

        Args:
            token_mint_a: First token mint
            token_mint_b: Second token mint

        Returns:
            List of Pool objects, empty when the provider has no pool for the pair

        Raises:
            ProviderError: If the request or decoding fails
        """
        pass

    def _log_pools(self, pools: List[Pool], token_mint_a: str, token_mint_b: str) -> None:
        if pools:
            logger.info("Retrieved pools from provider", extra={
                "provider": self.name,
                "count": len(pools)
            })
        else:
            logger.info("No pools found at provider", extra={
                "provider": self.name,
                "token_mint_a": token_mint_a,
                "token_mint_b": token_mint_b
            })
