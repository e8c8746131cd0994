"""Runtime configuration read from the environment."""
from __future__ import annotations

import os
import pathlib
from typing import Literal, Optional

from pydantic import BaseModel, Field

PKG_DIR = pathlib.Path(__file__).resolve().parent
DEFAULT_DATA_DIR = PKG_DIR / "data"

LoadFailurePolicy = Literal["degrade", "fail"]


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() == "true"


class ServerConfig(BaseModel):
    """Settings shared by the dataset cache and the MCP server."""

    data_dir: pathlib.Path = Field(
        default=DEFAULT_DATA_DIR, description="Root of the bundled dataset"
    )
    on_load_failure: LoadFailurePolicy = Field(
        default="degrade",
        description="What to do when WebIDL, CSS or element data cannot be loaded",
    )
    debug: bool = False
    log_performance: bool = False

    @classmethod
    def from_env(cls, data_dir: Optional[pathlib.Path] = None) -> "ServerConfig":
        """
        Build a config from ``W3C_MCP_*`` environment variables.

        W3C_MCP_DATA_DIR         dataset root (defaults to the bundled data)
        W3C_MCP_ON_LOAD_FAILURE  "degrade" (default) or "fail"
        W3C_MCP_DEBUG            "true" enables debug logging
        W3C_MCP_PERF             "true" enables timing logs
        """
        debug = _env_flag("W3C_MCP_DEBUG")
        root = data_dir or pathlib.Path(os.getenv("W3C_MCP_DATA_DIR", DEFAULT_DATA_DIR))
        return cls(
            data_dir=root.resolve(),
            on_load_failure=os.getenv("W3C_MCP_ON_LOAD_FAILURE", "degrade").strip().lower(),
            debug=debug,
            log_performance=debug or _env_flag("W3C_MCP_PERF"),
        )
