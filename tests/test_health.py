"""Tests for health check and mode tools."""

from __future__ import annotations

import pytest

from mcp_w3c_specs.mcp import ping, t_mode, validate

from conftest import SPECS


@pytest.mark.health
class TestHealthChecks:
    """Test health check functionality."""

    def test_ping_returns_pong(self):
        """Test that ping returns 'pong'."""
        assert ping() == "pong", "ping() should return 'pong'"

    @pytest.mark.asyncio
    async def test_validate_loaded_dataset(self, server_cache):
        result = await validate()
        assert result["valid"] is True, result["message"]
        assert result["message"] == "All collections loaded"
        assert result["collections"]["specifications"]["count"] == len(SPECS)

    @pytest.mark.asyncio
    async def test_validate_reports_degraded(self, make_cache, monkeypatch):
        from mcp_w3c_specs import mcp as server

        monkeypatch.setattr(server, "CACHE", make_cache(specs=SPECS))
        result = await validate()
        assert result["valid"] is False
        assert "Degraded collections" in result["message"]
        assert result["collections"]["css"]["state"] == "degraded"

    @pytest.mark.asyncio
    async def test_validate_reports_load_failure(self, make_cache, monkeypatch):
        from mcp_w3c_specs import mcp as server

        monkeypatch.setattr(server, "CACHE", make_cache())
        result = await validate()
        assert result["valid"] is False
        assert "DatasetLoadError" in result["message"]


@pytest.mark.health
class TestMode:
    """w3c_mode reports configuration and cache state."""

    @pytest.mark.asyncio
    async def test_mode_keys(self, server_cache):
        await server_cache.preload_all()
        result = t_mode()
        assert result["data_dir"] == str(server_cache.data_dir)
        assert result["data_dir_exists"] is True
        assert result["on_load_failure"] == "degrade"
        assert result["cache_epoch"] == 0
        assert result["collections"]["webidl"]["state"] == "loaded"

    def test_mode_before_load(self, server_cache):
        result = t_mode()
        assert all(entry["state"] == "not_loaded" for entry in result["collections"].values())
