"""Fetch a single card from Scryfall by exact name.

The engine never sees a partial card: a lookup either returns CardFacts or
raises, and the caller shows a notice instead of a document.
"""

import logging

import httpx

from explainmycard.config import settings
from explainmycard.models.card import CardFacts
from explainmycard.models.failure import FailureKind, KnownError

logger = logging.getLogger(__name__)


class CardNotFoundError(KnownError):
    """Raised when no card has the requested exact name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message="Card not found.",
            detail=f"No card named '{name}'",
            suggestion="Check the spelling and use the card's full name.",
            status_code=404,
        )


class CardLookupError(KnownError):
    """Raised when the card service cannot be reached or answers with an error."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message="The card service is unavailable right now.",
            detail=f"Lookup for '{name}' failed: {reason}",
            suggestion="Try again in a moment.",
            status_code=502,
        )


async def fetch_card_payload(name: str, client: httpx.AsyncClient | None = None) -> dict:
    """Fetch the raw Scryfall card object for an exact name.

    Args:
        name: Exact card name; surrounding whitespace is ignored
        client: Optional client for connection reuse

    Returns:
        The card JSON object

    Raises:
        CardNotFoundError: If the name is blank or no card matches
        CardLookupError: If the request fails for any other reason
    """
    card_name = name.strip()
    if not card_name:
        raise CardNotFoundError(name)

    url = f"{settings.scryfall_api_url}/cards/named"
    params = {"exact": card_name}
    headers = {"User-Agent": settings.user_agent, "Accept": "application/json"}

    logger.info("Looking up card %r", card_name)
    try:
        if client is not None:
            response = await client.get(url, params=params, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=settings.lookup_timeout) as own_client:
                response = await own_client.get(url, params=params, headers=headers)
        if response.status_code == 404:
            raise CardNotFoundError(card_name)
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPStatusError as e:
        raise CardLookupError(card_name, f"HTTP {e.response.status_code}") from e
    except httpx.RequestError as e:
        raise CardLookupError(card_name, str(e) or type(e).__name__) from e
    except ValueError as e:
        raise CardLookupError(card_name, "invalid JSON") from e

    if not isinstance(payload, dict) or not payload.get("name"):
        raise CardLookupError(card_name, "unexpected response shape")
    return payload


async def fetch_card_by_exact_name(
    name: str,
    client: httpx.AsyncClient | None = None,
) -> CardFacts:
    """Look up a card and convert it to CardFacts."""
    payload = await fetch_card_payload(name, client=client)
    return CardFacts.from_scryfall(payload)
