"""
Shared fixtures: an in-process fake redis and indexes built on it.
"""

import sys
from pathlib import Path

import fakeredis
import pytest
import pytest_asyncio

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from textindex.indices import PhoneticIndex, PrefixIndex
from textindex.store import RedisSortedSetStore


@pytest.fixture
def fake_server():
    return fakeredis.FakeServer()


@pytest_asyncio.fixture
async def redis_client(fake_server):
    client = fakeredis.FakeAsyncRedis(server=fake_server, decode_responses=True)
    yield client
    await client.flushall()
    await client.aclose()


@pytest_asyncio.fixture
async def store(redis_client):
    return RedisSortedSetStore(redis_client)


@pytest_asyncio.fixture
async def phonetic_index(store):
    return PhoneticIndex("UserSearch", store)


@pytest_asyncio.fixture
async def prefix_index(store):
    return PrefixIndex("UserSearch", store)
