"""
Batch INN lookup engine.

Resolves a list of raw identifiers into one outcome per identifier:

    Found        - registry returned a company
    NotFound     - registry has no match
    InvalidInput - not a digit string, no request is made
    QueryError   - request failed (status, transport, payload, timeout)

Failures are turned into QueryError values at the single-identifier level,
so one bad INN never aborts the rest of the batch. Valid identifiers are
queried concurrently, bounded by a semaphore and a per-call timeout, and
every call is awaited before resolve() returns.
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Optional, Protocol, Union

from .registry import CompanyInfo, RegistryError

logger = logging.getLogger(__name__)

NO_NAME_LABEL = "no name ({identifier})"
NO_ADDRESS_LABEL = "address not found"

_DIGITS = re.compile(r"[0-9]+")


# =============================================================================
# VALIDATION
# =============================================================================

@dataclass(frozen=True)
class Valid:
    identifier: str


@dataclass(frozen=True)
class Invalid:
    raw: str


def validate_identifier(raw: str) -> Union[Valid, Invalid]:
    """An INN is valid if, once trimmed, it is a non-empty run of 0-9 digits."""
    normalized = raw.strip()
    if _DIGITS.fullmatch(normalized):
        return Valid(normalized)
    return Invalid(raw)


# =============================================================================
# OUTCOMES
# =============================================================================

@dataclass(frozen=True)
class Found:
    identifier: str
    name: str
    address: str

    @property
    def display_name(self) -> str:
        return self.name


@dataclass(frozen=True)
class NotFound:
    identifier: str

    @property
    def display_name(self) -> str:
        return f"Company with INN {self.identifier} not found"

    @property
    def address(self) -> str:
        return ""


@dataclass(frozen=True)
class InvalidInput:
    identifier: str

    @property
    def display_name(self) -> str:
        return f"Invalid INN: {self.identifier}"

    @property
    def address(self) -> str:
        return ""


@dataclass(frozen=True)
class QueryError:
    identifier: str
    message: str

    @property
    def display_name(self) -> str:
        return f"Error while querying INN {self.identifier}"

    @property
    def address(self) -> str:
        # Shown in the detail column after the dash
        return self.message


LookupOutcome = Union[Found, NotFound, InvalidInput, QueryError]


class PartyLookup(Protocol):
    async def find_party(self, inn: str) -> Optional[CompanyInfo]: ...


# =============================================================================
# ENGINE
# =============================================================================

class LookupEngine:
    """Resolves batches of INNs against a registry client."""

    def __init__(self, registry: PartyLookup, timeout: float = 10.0, max_concurrency: int = 5):
        self.registry = registry
        self.timeout = timeout
        self.max_concurrency = max_concurrency

    async def resolve(self, identifiers: list[str]) -> list[LookupOutcome]:
        """
        Resolve every identifier into exactly one outcome.

        Args:
            identifiers: Raw user-supplied tokens, in order

        Returns:
            Outcomes in the same order and of the same length as identifiers
        """
        if not identifiers:
            return []

        logger.info(f"Resolving batch of {len(identifiers)} INN(s)")

        # Limits concurrent registry calls within this batch
        semaphore = asyncio.Semaphore(self.max_concurrency)

        return list(await asyncio.gather(
            *(self._resolve_one(raw, semaphore) for raw in identifiers)
        ))

    async def _resolve_one(self, raw: str, semaphore: asyncio.Semaphore) -> LookupOutcome:
        checked = validate_identifier(raw)
        if isinstance(checked, Invalid):
            return InvalidInput(checked.raw)

        inn = checked.identifier
        try:
            async with semaphore:
                company = await asyncio.wait_for(self.registry.find_party(inn), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Registry lookup for INN {inn} timed out after {self.timeout}s")
            return QueryError(inn, f"request timed out after {self.timeout:g}s")
        except RegistryError as e:
            logger.warning(f"Registry lookup for INN {inn} failed: {e}")
            return QueryError(inn, str(e))

        if company is None:
            return NotFound(inn)

        return Found(
            identifier=inn,
            name=company.name if company.name is not None else NO_NAME_LABEL.format(identifier=inn),
            address=company.address if company.address is not None else NO_ADDRESS_LABEL,
        )


# =============================================================================
# FORMATTING
# =============================================================================

def sort_outcomes(outcomes: list[LookupOutcome]) -> list[LookupOutcome]:
    """Order outcomes by display name (stable for equal names)."""
    return sorted(outcomes, key=lambda outcome: outcome.display_name)


def format_outcome_line(outcome: LookupOutcome) -> str:
    if outcome.address:
        return f"{outcome.display_name} — {outcome.address}"
    return outcome.display_name


def format_outcomes(outcomes: list[LookupOutcome]) -> str:
    """
    Render outcomes as one message body.

    Lines are sorted by display name. A single outcome is shown bare;
    two or more are numbered "1) ", "2) ", ...
    """
    ordered = sort_outcomes(outcomes)
    lines = [format_outcome_line(outcome) for outcome in ordered]

    if len(lines) > 1:
        lines = [f"{n}) {line}" for n, line in enumerate(lines, start=1)]

    return "\n".join(lines)
