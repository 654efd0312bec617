"""
Tests for configuration, the index factory, SearchCollection and the CLI.
Run with: pytest tests/test_collection.py -v
"""

import fakeredis
import pytest
from omegaconf import OmegaConf

from textindex.cli import TextIndexCLI
from textindex.collection import SearchCollection, create_index
from textindex.config import load_config
from textindex.exceptions import ConfigurationError
from textindex.indices import PhoneticIndex, PrefixIndex
from textindex.store import RedisSortedSetStore


class TestConfig:
    """Test Hydra composition of the packaged config."""

    def test_defaults(self):
        cfg = load_config()
        assert cfg.index.name == 'search'
        assert cfg.index.mode == 'phonetic'
        assert cfg.preprocessing.lowercase is True
        assert cfg.cache.ttl == 300
        assert cfg.logging.level == 'INFO'

    def test_overrides(self):
        cfg = load_config(["index.mode=prefix", "index.name=users", "cache.ttl=0"])
        assert cfg.index.mode == 'prefix'
        assert cfg.index.name == 'users'
        assert cfg.cache.ttl == 0

    def test_redis_url_from_environment(self, monkeypatch):
        monkeypatch.setenv('REDIS_URL', 'redis://cache.internal:6380/2')
        cfg = load_config()
        assert cfg.redis.url == 'redis://cache.internal:6380/2'


class TestCreateIndex:
    """Test building indexes from config."""

    def setup_method(self):
        self.store = RedisSortedSetStore(fakeredis.FakeAsyncRedis(decode_responses=True))

    def test_phonetic_by_default(self):
        index = create_index(load_config(), self.store)
        assert isinstance(index, PhoneticIndex)
        assert index.name == 'search'
        assert index.store is self.store

    def test_prefix_with_cache_ttl(self):
        cfg = load_config(["index.mode=prefix", "cache.ttl=42", "preprocessing.lowercase=false"])
        index = create_index(cfg, self.store)
        assert isinstance(index, PrefixIndex)
        assert index.cache.ttl == 42
        assert index.analyzer.lowercase is False

    def test_unknown_mode(self):
        with pytest.raises(ConfigurationError):
            create_index(load_config(["index.mode=soundex"]), self.store)

    def test_missing_name(self):
        cfg = OmegaConf.create({'index': {'name': '', 'mode': 'phonetic'}})
        with pytest.raises(ConfigurationError):
            create_index(cfg, self.store)

    def test_name_with_separator(self):
        cfg = OmegaConf.create({'index': {'name': 'users:archive', 'mode': 'prefix'}})
        with pytest.raises(ConfigurationError):
            create_index(cfg, self.store)

    def test_store_created_from_redis_url(self):
        index = create_index(load_config(["redis.url=redis://localhost:6399/0"]))
        assert isinstance(index.store, RedisSortedSetStore)


@pytest.mark.asyncio
class TestSearchCollection:
    """Test the forwarding wrapper end to end."""

    async def test_phonetic_collection(self, store):
        collection = SearchCollection.from_config(load_config(["index.name=UserSearch"]), store)

        await collection.set(1, "hello")
        await collection.set(2, "what's up")
        await collection.set(3, "foo bar")

        result = await collection.search("foo bar", {'type': 'and', 'between': {'from': 0, 'to': -1}})
        assert [int(x) for x in result] == [3]

        assert await collection.delete(3) is True
        assert await collection.search("foo bar") == []

    async def test_prefix_collection(self, store):
        collection = SearchCollection(PrefixIndex('UserSearch', store))

        await collection.set(1, "Foo")
        await collection.set(2, "Foo Bar")
        await collection.set(3, "Foo Bar Baz")

        assert await collection.search("Bar") == ['2', '3']

    async def test_drop_removes_only_own_keys(self, store, redis_client):
        users = SearchCollection(PhoneticIndex('users', store))
        other = SearchCollection(PrefixIndex('users2', store))
        await users.set(1, "foo bar")
        await other.set(1, "foo")

        removed = await users.index.drop()

        assert removed > 0
        assert await redis_client.keys('users:*') == []
        assert await redis_client.keys('users2:*') != []

    async def test_nested_name_cannot_share_key_space(self, store):
        with pytest.raises(ValueError):
            PhoneticIndex('users:archive', store)


class TestCLI:
    """Test CLI commands against a fake redis server."""

    def setup_method(self):
        self.server = fakeredis.FakeServer()

    def _patch_store(self, monkeypatch):
        server = self.server

        def from_config(config, store=None):
            client = fakeredis.FakeAsyncRedis(server=server, decode_responses=True)
            return SearchCollection(create_index(config, RedisSortedSetStore(client)))

        monkeypatch.setattr(SearchCollection, 'from_config', staticmethod(from_config))

    def test_set_search_delete(self, monkeypatch):
        self._patch_store(monkeypatch)
        cli = TextIndexCLI(index_name='cli')

        assert cli.set(1, "hello world") is True
        assert cli.set(2, "hello there") is True
        assert sorted(cli.search("hello")) == ['1', '2']
        assert cli.search("hello world") == ['1']
        assert len(cli.search("world there", combinator='or', start=0, stop=0)) == 1
        assert cli.delete(1) is True
        assert cli.search("world") == []

    def test_prefix_mode_and_maintenance(self, monkeypatch):
        self._patch_store(monkeypatch)
        cli = TextIndexCLI(index_name='cli', mode='prefix', overrides='cache.ttl=0')

        cli.set(1, "cat")
        assert sorted(cli.terms(1)) == ['c', 'ca', 'cat']
        assert cli.search("ca") == ['1']
        cli.set(2, "cat car")
        assert cli.search("ca car") == ['2']
        assert cli.invalidate_cache() == 1
        assert cli.drop() > 0
        assert cli.search("ca") == []

    def test_show_config(self, capsys):
        TextIndexCLI(mode='prefix', overrides=['cache.ttl=5']).show_config()
        out = capsys.readouterr().out
        assert 'mode: prefix' in out
        assert 'ttl: 5' in out
