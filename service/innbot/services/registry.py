"""
DaData registry client.

Looks up a single company (party) by INN using the findById/party
endpoint. One HTTP request per identifier; there is no batch endpoint.

Every failure mode is raised as a RegistryError subclass so callers
can catch one type at the single-identifier level.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx
from pydantic import BaseModel, ValidationError

from ..config import DADATA_PARTY_URL

logger = logging.getLogger(__name__)


class RegistryError(RuntimeError):
    """Base error for registry lookups."""


class RegistryStatusError(RegistryError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RegistryNetworkError(RegistryError):
    """Raised on connection failures and HTTP-level timeouts."""


class RegistryPayloadError(RegistryError):
    """Raised when the response body is not the expected JSON shape."""


# Wire models: only the fields the bot reads

class PartyName(BaseModel):
    full_with_opf: Optional[str] = None


class PartyAddress(BaseModel):
    value: Optional[str] = None


class PartyData(BaseModel):
    name: Optional[PartyName] = None
    address: Optional[PartyAddress] = None


class PartySuggestion(BaseModel):
    data: PartyData


class PartyResponse(BaseModel):
    suggestions: list[PartySuggestion]


@dataclass(frozen=True)
class CompanyInfo:
    """Company fields as returned by the registry (either may be missing)."""
    name: Optional[str]
    address: Optional[str]


def parse_party_response(payload: object) -> Optional[CompanyInfo]:
    """
    Extract company info from a findById/party response.

    Returns None when the registry has no match (empty suggestions).
    Raises RegistryPayloadError if the payload shape is unexpected.
    """
    try:
        parsed = PartyResponse.model_validate(payload)
    except ValidationError as e:
        raise RegistryPayloadError(f"Unexpected registry response: {e.error_count()} validation error(s)") from e

    if not parsed.suggestions:
        return None

    data = parsed.suggestions[0].data
    return CompanyInfo(
        name=data.name.full_with_opf if data.name else None,
        address=data.address.value if data.address else None,
    )


class RegistryClient:
    """
    Async client for the DaData party registry.

    Pass http_client to share a connection pool (or a mock transport in
    tests); otherwise the client owns one and closes it in aclose().
    """

    def __init__(
        self,
        api_token: str,
        url: str = DADATA_PARTY_URL,
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_token = api_token
        self.url = url
        self._owns_client = http_client is None
        self.client = http_client or httpx.AsyncClient(timeout=timeout)

    async def find_party(self, inn: str) -> Optional[CompanyInfo]:
        """
        Call POST findById/party for one INN.

        Returns:
            CompanyInfo for the first suggestion, or None if not found
        """
        try:
            response = await self.client.post(
                self.url,
                json={"query": inn},
                headers={
                    "Authorization": f"Token {self.api_token}",
                    "Accept": "application/json",
                },
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise RegistryStatusError(f"Registry responded with status {status}", status_code=status) from e
        except httpx.HTTPError as e:
            raise RegistryNetworkError(f"Registry request failed: {e.__class__.__name__}: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise RegistryPayloadError("Registry response is not valid JSON") from e

        logger.debug(f"Registry answered for INN {inn}")
        return parse_party_response(payload)

    async def aclose(self):
        """Close HTTP client."""
        if self._owns_client:
            await self.client.aclose()
