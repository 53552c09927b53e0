"""
Shared fixtures: an in-memory registry and a wired dispatcher.
"""

import asyncio

import pytest

from innbot.services.lookup import LookupEngine
from innbot.services.registry import CompanyInfo
from innbot.telegram_bot.context import SessionStore
from innbot.telegram_bot.dispatcher import Dispatcher


class FakeRegistry:
    """
    Registry stand-in keyed by INN.

    Values: CompanyInfo (found), None (not found), an exception instance
    (raised), or "hang" (sleeps past any reasonable timeout).
    Unknown INNs are not found.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls: list[str] = []

    async def find_party(self, inn: str):
        self.calls.append(inn)
        result = self.responses.get(inn)
        if result == "hang":
            await asyncio.sleep(60)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def alpha():
    return CompanyInfo(name='JSC "Alpha"', address="Moscow, Tverskaya 1")


@pytest.fixture
def beta():
    return CompanyInfo(name='LLC "Beta"', address="Kazan, Baumana 5")


@pytest.fixture
def registry(alpha, beta):
    return FakeRegistry({
        "7707083893": alpha,
        "1655000000": beta,
    })


@pytest.fixture
def engine(registry):
    return LookupEngine(registry, timeout=1.0, max_concurrency=3)


@pytest.fixture
def sessions():
    return SessionStore()


@pytest.fixture
def developer_info():
    return "Developer: test"


@pytest.fixture
def dispatcher(engine, sessions, developer_info):
    return Dispatcher(engine=engine, sessions=sessions, developer_info=developer_info)


@pytest.fixture
def make_registry():
    """Build a FakeRegistry from an INN -> response mapping."""
    return FakeRegistry
