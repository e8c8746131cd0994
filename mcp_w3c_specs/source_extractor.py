"""
Build the bundled dataset from a local checkout of w3c/webref.

The ``curated`` branch of webref carries one index of specifications plus
per-spec extracts (WebIDL, CSS definitions, element lists). This module
clones or updates that checkout and rewrites the parts the server reads into
the bundled layout under ``mcp_w3c_specs/data``.
"""

from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional

import git
from pydantic import BaseModel, Field

from .config import DEFAULT_DATA_DIR, PKG_DIR
from .constants import CSS_FILE, ELEMENTS_DIR, IDL_DIR, SPECS_FILE
from .logger import logger

# ============================================================================
# Configuration
# ============================================================================


class WebrefConfig(BaseModel):
    """Where webref lives and where its extracts sit inside the checkout."""

    name: str = "webref"
    repo_url: str = Field(
        default="https://github.com/w3c/webref.git", description="GitHub repository URL"
    )
    branch: str = Field(default="curated", description="Git branch to clone")
    index_path: Path = Field(default=Path("ed/index.json"), description="Specification index")
    idl_path: Path = Field(default=Path("ed/idl"), description="Directory of .idl extracts")
    css_path: Path = Field(default=Path("ed/css"), description="Directory of per-spec CSS extracts")
    elements_path: Path = Field(
        default=Path("ed/elements"), description="Directory of per-spec element extracts"
    )


WEBREF_CONFIG = WebrefConfig()
CHECKOUT_DIR = PKG_DIR.parent / "webref_raw"


class BundleStats(BaseModel):
    """Counts written by :func:`build_bundle`."""

    specifications: int = 0
    idl_files: int = 0
    css_definitions: int = 0
    element_specs: int = 0


# ============================================================================
# Repository Management
# ============================================================================


def clone_or_update_repo(config: WebrefConfig, target_dir: Path) -> Path:
    """
    Clone or pull the webref checkout.

    Raises:
        git.GitCommandError: If git operations fail
    """
    repo_path = target_dir / config.name

    try:
        if repo_path.exists() and (repo_path / ".git").exists():
            logger.info("Updating existing repository: %s", config.name)
            repo = git.Repo(repo_path)
            repo.remotes.origin.pull(config.branch)
            logger.info("Repository updated: %s", config.name)
        else:
            logger.info("Cloning repository: %s (%s)", config.repo_url, config.branch)
            repo_path.parent.mkdir(parents=True, exist_ok=True)
            git.Repo.clone_from(config.repo_url, repo_path, branch=config.branch, depth=1)
            logger.info("Repository cloned: %s", config.name)
        return repo_path
    except git.GitCommandError as e:
        logger.error("Git operation failed for %s: %s", config.name, e)
        raise


# ============================================================================
# Extraction
# ============================================================================


def _read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def extract_specs(repo_path: Path, config: WebrefConfig = WEBREF_CONFIG) -> List[Dict[str, Any]]:
    """Specification records from the webref index (``{"results": [...]}``)."""
    raw = _read_json(repo_path / config.index_path)
    records = raw["results"] if isinstance(raw, dict) else raw
    logger.info("Extracted %d specification records", len(records))
    return records


def extract_idl(repo_path: Path, config: WebrefConfig = WEBREF_CONFIG) -> Dict[str, str]:
    """Raw IDL text keyed by file stem (the spec or series shortname)."""
    idl: Dict[str, str] = {}
    for path in sorted((repo_path / config.idl_path).glob("*.idl")):
        idl[path.stem] = path.read_text(encoding="utf-8")
    logger.info("Extracted %d WebIDL files", len(idl))
    return idl


def _css_entry(item: Dict[str, Any]) -> Dict[str, Any]:
    keep = {
        key: item[key]
        for key in (
            "name",
            "href",
            "initial",
            "inherited",
            "appliesTo",
            "percentages",
            "computedValue",
            "animationType",
            "type",
        )
        if key in item
    }
    syntax = item.get("syntax", item.get("value"))
    if syntax is not None:
        keep["syntax"] = syntax
    return keep


def extract_css(repo_path: Path, config: WebrefConfig = WEBREF_CONFIG) -> Dict[str, List[Dict[str, Any]]]:
    """
    Merge the per-spec CSS extracts into five flat lists.

    webref lists value definitions under ``values`` with a ``type`` of
    ``function`` or ``type``; they are split into ``functions`` and
    ``types`` here. Property definitions that only extend another spec's
    property (``newValues``) are skipped.
    """
    out: Dict[str, List[Dict[str, Any]]] = {
        "properties": [],
        "functions": [],
        "types": [],
        "selectors": [],
        "atrules": [],
    }
    for path in sorted((repo_path / config.css_path).glob("*.json")):
        try:
            data = _read_json(path)
        except (OSError, ValueError) as e:
            logger.warning("Skipping unreadable CSS extract %s: %s", path.name, e)
            continue
        for prop in data.get("properties", []):
            if "newValues" in prop:
                continue
            out["properties"].append(_css_entry(prop))
        for value in data.get("values", []):
            bucket = "functions" if value.get("type") == "function" else "types"
            out[bucket].append(_css_entry(value))
        out["selectors"].extend(_css_entry(s) for s in data.get("selectors", []))
        out["atrules"].extend(_css_entry(a) for a in data.get("atrules", []))
    logger.info("Extracted %d CSS definitions", sum(len(v) for v in out.values()))
    return out


def extract_elements(repo_path: Path, config: WebrefConfig = WEBREF_CONFIG) -> Dict[str, Dict[str, Any]]:
    elements: Dict[str, Dict[str, Any]] = {}
    for path in sorted((repo_path / config.elements_path).glob("*.json")):
        try:
            data = _read_json(path)
        except (OSError, ValueError) as e:
            logger.warning("Skipping unreadable elements extract %s: %s", path.name, e)
            continue
        spec = data.get("spec")
        # ElementSpecData requires spec.title and spec.url
        if not isinstance(spec, dict) or not spec.get("title") or not spec.get("url"):
            logger.warning("Skipping elements extract %s: missing spec title or url", path.name)
            continue
        elements[path.stem] = {
            "spec": {"title": spec["title"], "url": spec["url"]},
            "elements": [
                {key: e[key] for key in ("name", "href", "interface") if key in e}
                for e in data.get("elements", [])
            ],
        }
    logger.info("Extracted element lists for %d specs", len(elements))
    return elements


def _write_json(path: Path, data: Any) -> None:
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def build_bundle(
    repo_path: Path,
    data_dir: Path = DEFAULT_DATA_DIR,
    config: WebrefConfig = WEBREF_CONFIG,
) -> BundleStats:
    """Rewrite ``data_dir`` from the checkout at ``repo_path``."""
    specs = extract_specs(repo_path, config)
    idl = extract_idl(repo_path, config)
    css = extract_css(repo_path, config)
    elements = extract_elements(repo_path, config)

    data_dir.mkdir(parents=True, exist_ok=True)
    _write_json(data_dir / SPECS_FILE, specs)
    _write_json(data_dir / CSS_FILE, css)

    idl_dir = data_dir / IDL_DIR
    if idl_dir.exists():
        shutil.rmtree(idl_dir)
    idl_dir.mkdir()
    for shortname, text in idl.items():
        (idl_dir / f"{shortname}.idl").write_text(text, encoding="utf-8")

    elements_dir = data_dir / ELEMENTS_DIR
    if elements_dir.exists():
        shutil.rmtree(elements_dir)
    elements_dir.mkdir()
    for shortname, payload in elements.items():
        _write_json(elements_dir / f"{shortname}.json", payload)

    return BundleStats(
        specifications=len(specs),
        idl_files=len(idl),
        css_definitions=sum(len(v) for v in css.values()),
        element_specs=len(elements),
    )


def main(
    checkout_dir: Path = CHECKOUT_DIR,
    data_dir: Path = DEFAULT_DATA_DIR,
    config: WebrefConfig = WEBREF_CONFIG,
) -> Optional[BundleStats]:
    """Clone or update webref and rebuild the bundle. Returns None on failure."""
    try:
        repo_path = clone_or_update_repo(config, checkout_dir)
        stats = build_bundle(repo_path, data_dir, config)
    except (git.GitCommandError, OSError, ValueError, KeyError) as e:
        logger.error("Data sync failed: %s", e)
        return None
    logger.info("Bundle written to %s: %s", data_dir, stats.model_dump())
    return stats
