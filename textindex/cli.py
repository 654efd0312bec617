#!/usr/bin/env python
"""
Command line interface for textindex.
Uses Fire for CLI and Hydra for configuration management.

Examples:
    textindex set 1 "hello world"
    textindex search "helo" --combinator=or
    textindex --mode=prefix --index_name=users search "ca"
"""

import asyncio
import logging

import fire
from dotenv import load_dotenv
from omegaconf import OmegaConf
from redis.exceptions import RedisError

from textindex.collection import SearchCollection
from textindex.config import load_config, setup_logging
from textindex.exceptions import TextIndexError
from textindex.query import SearchOptions, Window

# Load .env variables (REDIS_URL and friends)
load_dotenv()


class TextIndexCLI:
    """CLI for a textindex collection."""

    def __init__(self, index_name: str = None, mode: str = None, overrides=None,
                 config_name: str = "config"):
        """
        Initialize CLI with configuration.

        Args:
            index_name: Overrides index.name
            mode: Overrides index.mode (phonetic or prefix)
            overrides: Extra Hydra overrides, a list or comma separated string
            config_name: Name of the config file to compose
        """
        self.index_name = index_name
        self.mode = mode
        self.overrides = overrides
        self.config_name = config_name
        self.config = None
        self.logger = None

    def _build_overrides(self):
        overrides = []
        if self.index_name:
            overrides.append(f"index.name={self.index_name}")
        if self.mode:
            overrides.append(f"index.mode={self.mode}")
        if isinstance(self.overrides, str):
            overrides.extend(o.strip() for o in self.overrides.split(',') if o.strip())
        elif self.overrides:
            overrides.extend(str(o) for o in self.overrides)
        return overrides

    def _init_config(self):
        """Initialize Hydra configuration and logging."""
        if self.config is not None:
            return
        self.config = load_config(self._build_overrides(), config_name=self.config_name)
        setup_logging(self.config)
        self.logger = logging.getLogger(__name__)

    def _run(self, operation):
        """Run operation(index) against a freshly connected collection."""
        self._init_config()

        async def runner():
            collection = SearchCollection.from_config(self.config)
            try:
                return await operation(collection.index)
            finally:
                await collection.close()

        try:
            return asyncio.run(runner())
        except (RedisError, TextIndexError) as e:
            self.logger.error(f"Operation failed: {e}")
            raise SystemExit(1)

    def set(self, doc_id, text: str):
        """
        Index a document.

        Args:
            doc_id: Document identifier
            text: Document text
        """
        return self._run(lambda index: index.set(doc_id, text))

    def delete(self, doc_id):
        """Remove a document from the index."""
        return self._run(lambda index: index.delete(doc_id))

    def search(self, text: str, combinator: str = "and", start: int = 0, stop: int = -1):
        """
        Search the index.

        Args:
            text: Query text
            combinator: and/intersect or or/union
            start: First rank to return
            stop: Last rank to return (-1 for all)

        Returns:
            Ranked document ids
        """
        options = SearchOptions(combinator=combinator, window=Window(start, stop))
        results = self._run(lambda index: index.search(text, options))
        self.logger.info(f"Query {text!r} matched {len(results)} documents")
        return results

    def terms(self, doc_id):
        """List the tokens a document is indexed under."""
        return self._run(lambda index: index.terms(doc_id))

    def invalidate_cache(self):
        """Drop cached typeahead combinations."""
        return self._run(lambda index: index.invalidate_cache())

    def drop(self):
        """Delete every key of the index."""
        return self._run(lambda index: index.drop())

    def show_config(self):
        """Print the composed configuration."""
        self._init_config()
        print(OmegaConf.to_yaml(self.config))


def main():
    """Main entry point."""
    fire.Fire(TextIndexCLI)


if __name__ == "__main__":
    main()
