"""
Dataset cache for the bundled web-standards data.

Each collection is loaded at most once per cache epoch. The first caller
schedules the load as a task; every concurrent or later caller awaits that
same task through ``asyncio.shield``. The data is read once and all callers
observe the same settled value; a cancelled caller leaves the load running.
``invalidate()`` starts a new epoch; loads still running from an older epoch
no longer touch the cache state.
"""

from __future__ import annotations

import asyncio
import json
import pathlib
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

from .config import ServerConfig
from .constants import CSS_FILE, ELEMENTS_DIR, IDL_DIR, SPECS_FILE
from .errors import DatasetLoadError
from .logger import PerformanceTimer, logger
from .models import CSSData, ElementSpecData, ElementsData, SpecRecord, WebIDLData

T = TypeVar("T")

SPECS = "specifications"
WEBIDL = "webidl"
CSS = "css"
ELEMENTS = "elements"
COLLECTIONS = (SPECS, WEBIDL, CSS, ELEMENTS)

_SPECS_ADAPTER = TypeAdapter(List[SpecRecord])
_ELEMENT_SPEC_ADAPTER = TypeAdapter(ElementSpecData)


# ---- file readers (run in a worker thread) ----
def _read_json(path: pathlib.Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def read_specifications(data_dir: pathlib.Path) -> List[SpecRecord]:
    raw = _read_json(data_dir / SPECS_FILE)
    # webref's index.json wraps the list in {"results": [...]}
    if isinstance(raw, dict) and "results" in raw:
        raw = raw["results"]
    return _SPECS_ADAPTER.validate_python(raw)


def read_webidl(data_dir: pathlib.Path) -> WebIDLData:
    idl_dir = data_dir / IDL_DIR
    if not idl_dir.is_dir():
        raise FileNotFoundError(idl_dir)
    out: WebIDLData = {}
    for path in sorted(idl_dir.glob("*.idl")):
        try:
            out[path.stem] = path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("Skipping unreadable IDL file %s: %s", path.name, e)
    return out


def read_css(data_dir: pathlib.Path) -> CSSData:
    return CSSData.model_validate(_read_json(data_dir / CSS_FILE))


def read_elements(data_dir: pathlib.Path) -> ElementsData:
    elements_dir = data_dir / ELEMENTS_DIR
    if not elements_dir.is_dir():
        raise FileNotFoundError(elements_dir)
    return {
        path.stem: _ELEMENT_SPEC_ADAPTER.validate_python(_read_json(path))
        for path in sorted(elements_dir.glob("*.json"))
    }


class DatasetCache:
    """Memoized, read-only access to the four bundled collections."""

    def __init__(self, config: Optional[ServerConfig] = None) -> None:
        self.config = config or ServerConfig.from_env()
        self.epoch = 0
        self._tasks: Dict[str, asyncio.Task] = {}
        self._degraded: Dict[str, str] = {}
        self._spec_index: Dict[str, SpecRecord] = {}
        self._series_index: Dict[str, SpecRecord] = {}

    @property
    def data_dir(self) -> pathlib.Path:
        return self.config.data_dir

    # ---- public loaders ----
    async def load_specifications(self) -> List[SpecRecord]:
        return await self._shared(SPECS, self._load_specifications)

    async def load_webidl(self) -> WebIDLData:
        return await self._shared(WEBIDL, lambda epoch: self._load_optional(WEBIDL, epoch, read_webidl, dict))

    async def load_css(self) -> CSSData:
        return await self._shared(CSS, lambda epoch: self._load_optional(CSS, epoch, read_css, CSSData))

    async def load_elements(self) -> ElementsData:
        return await self._shared(
            ELEMENTS, lambda epoch: self._load_optional(ELEMENTS, epoch, read_elements, dict)
        )

    def task(self, collection: str) -> "Optional[asyncio.Task[Any]]":
        """The load task of the current epoch, or ``None`` if none is scheduled."""
        return self._tasks.get(collection)

    async def preload_all(self) -> None:
        """Load every collection concurrently; called once before serving requests."""
        with PerformanceTimer("preload"):
            await asyncio.gather(
                self.load_specifications(),
                self.load_webidl(),
                self.load_css(),
                self.load_elements(),
            )
        specs = await self.load_specifications()
        logger.info(
            "Dataset ready: %d specifications, %d WebIDL files, %d CSS definitions, %d element specs",
            len(specs),
            len(await self.load_webidl()),
            (await self.load_css()).size(),
            len(await self.load_elements()),
        )

    def invalidate(self) -> None:
        """Forget everything; the next access reloads from disk."""
        self._tasks.clear()
        self._degraded.clear()
        self._spec_index = {}
        self._series_index = {}
        self.epoch += 1
        logger.debug("Dataset cache invalidated (epoch %d)", self.epoch)

    # ---- indices ----
    async def spec_index(self) -> Dict[str, SpecRecord]:
        await self.load_specifications()
        return self._spec_index

    async def series_index(self) -> Dict[str, SpecRecord]:
        await self.load_specifications()
        return self._series_index

    # ---- status ----
    def is_degraded(self, collection: str) -> bool:
        return collection in self._degraded

    def status(self) -> Dict[str, Dict[str, Any]]:
        out: Dict[str, Dict[str, Any]] = {}
        for name in COLLECTIONS:
            task = self._tasks.get(name)
            if task is None:
                state = "not_loaded"
            elif not task.done():
                state = "pending"
            elif name in self._degraded:
                state = "degraded"
            else:
                state = "loaded"
            entry: Dict[str, Any] = {"state": state, "count": 0}
            if state in {"loaded", "degraded"}:
                value = task.result()  # type: ignore[union-attr]
                entry["count"] = value.size() if isinstance(value, CSSData) else len(value)
            if name in self._degraded:
                entry["reason"] = self._degraded[name]
            out[name] = entry
        return out

    # ---- internals ----
    async def _shared(self, name: str, factory: Callable[[int], Awaitable[T]]) -> T:
        # cancelling one caller must not cancel the load the others are waiting on
        return await asyncio.shield(self._get(name, factory))

    def _get(self, name: str, factory: Callable[[int], Awaitable[T]]) -> "asyncio.Task[T]":
        task = self._tasks.get(name)
        if task is None:
            task = asyncio.get_running_loop().create_task(
                self._run(name, self.epoch, factory), name=f"load-{name}"
            )
            self._tasks[name] = task
        return task

    async def _run(self, name: str, epoch: int, factory: Callable[[int], Awaitable[T]]) -> T:
        try:
            return await factory(epoch)
        except BaseException:
            # a failed load is never memoized; the next caller retries
            if epoch == self.epoch and name in self._tasks:
                del self._tasks[name]
            raise

    async def _load_specifications(self, epoch: int) -> List[SpecRecord]:
        try:
            with PerformanceTimer("load:specifications"):
                specs = await asyncio.to_thread(read_specifications, self.data_dir)
        except (OSError, ValueError, ValidationError) as e:
            logger.error("Failed to load specifications from %s: %s", self.data_dir, e)
            raise DatasetLoadError(SPECS, e) from e
        if epoch == self.epoch:
            self._build_indices(specs)
        else:
            logger.debug("Discarding specifications loaded for stale epoch %d", epoch)
        return specs

    def _build_indices(self, specs: List[SpecRecord]) -> None:
        by_name: Dict[str, SpecRecord] = {}
        for spec in specs:
            if spec.shortname in by_name:
                logger.warning("Duplicate shortname %r in specifications; keeping the first", spec.shortname)
                continue
            by_name[spec.shortname] = spec

        by_series: Dict[str, SpecRecord] = {}
        for spec in specs:
            series = spec.series
            if series is None:
                continue
            current = by_series.get(series.shortname)
            if current is None:
                by_series[series.shortname] = spec
            elif (
                series.current_specification == spec.shortname
                and current.shortname != series.current_specification
            ):
                by_series[series.shortname] = spec

        self._spec_index = by_name
        self._series_index = by_series

    async def _load_optional(
        self,
        name: str,
        epoch: int,
        reader: Callable[[pathlib.Path], T],
        empty: Callable[[], T],
    ) -> T:
        try:
            with PerformanceTimer(f"load:{name}"):
                return await asyncio.to_thread(reader, self.data_dir)
        except (OSError, ValueError, ValidationError) as e:
            if self.config.on_load_failure == "fail":
                logger.error("Failed to load %s data: %s", name, e)
                raise DatasetLoadError(name, e) from e
            logger.error("Failed to load %s data, serving an empty collection: %s", name, e)
            if epoch == self.epoch:
                self._degraded[name] = str(e)
            return empty()
