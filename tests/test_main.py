"""Tests for the CLI entry point helpers."""

import json
import logging
import sys
from argparse import Namespace

import pytest

from postsync.__main__ import JSONFormatter, build_store, cmd_status, setup_logging
from postsync.config import Config, RemoteConfig
from postsync.errors import RemoteError
from postsync.store import SyncStore


class TestJSONFormatter:
    """Tests for structured log output."""

    def test_format(self):
        """Test a record renders as one JSON object."""
        record = logging.LogRecord(
            "postsync.store", logging.INFO, __file__, 1, "Loaded %d posts", (3,), None
        )

        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["component"] == "postsync.store"
        assert data["message"] == "Loaded 3 posts"
        assert "exception" not in data

    def test_format_exception(self):
        """Test exception info is included."""
        try:
            raise ValueError("bad")
        except ValueError:
            record = logging.LogRecord(
                "postsync", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )

        data = json.loads(JSONFormatter().format(record))

        assert "ValueError: bad" in data["exception"]


class TestBuildStore:
    """Tests for wiring the store from config."""

    def test_build_store(self):
        """Test the remote collection follows the config."""
        config = Config(
            remote=RemoteConfig(
                base_url="https://db.example/", collection="articles", timeout=4.0
            )
        )

        store = build_store(config)

        assert isinstance(store, SyncStore)
        assert store.remote.base_url == "https://db.example"
        assert store.remote.collection_path == "/articles.json"
        assert store.remote.timeout == 4.0


class TestStatusCommand:
    """Tests for the status command."""

    @pytest.mark.asyncio
    async def test_status_reachable(self, monkeypatch, seeded_store, capsys):
        """Test status reports the post count as JSON."""
        monkeypatch.setattr("postsync.__main__.build_store", lambda config: seeded_store)

        code = await cmd_status(Namespace(config=None, json=True))

        data = json.loads(capsys.readouterr().out)
        assert code == 0
        assert data["remote"]["reachable"] is True
        assert data["posts"] == {"count": 2, "ids": [1, 2]}

    @pytest.mark.asyncio
    async def test_status_unreachable(self, monkeypatch, store, remote, capsys):
        """Test status exits non-zero when the remote is down."""
        remote.fail = RemoteError("Connection refused")
        monkeypatch.setattr("postsync.__main__.build_store", lambda config: store)

        code = await cmd_status(Namespace(config=None, json=False))

        out = capsys.readouterr().out
        assert code == 1
        assert "Not reachable" in out
        assert "Connection refused" in out


class TestSetupLogging:
    """Tests for root logger configuration."""

    @pytest.fixture
    def basic_config(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        return calls

    def test_level_by_name(self, basic_config):
        """Test level names map to logging levels."""
        setup_logging("debug")

        assert basic_config[0]["level"] == logging.DEBUG
        handler = basic_config[0]["handlers"][0]
        assert not isinstance(handler.formatter, JSONFormatter)

    def test_unknown_level_defaults_to_info(self, basic_config):
        """Test an unknown level name falls back to INFO."""
        setup_logging("chatty")

        assert basic_config[0]["level"] == logging.INFO

    def test_json_output(self, basic_config):
        """Test JSON output installs the JSON formatter."""
        setup_logging("warning", json_output=True)

        assert basic_config[0]["level"] == logging.WARNING
        assert isinstance(basic_config[0]["handlers"][0].formatter, JSONFormatter)
