"""Loader for runtime resources (program table, proxy list).

This module lives in `core/` because:
- it centralizes *which* data files the engine needs, independent of the CLI
- adapters receive already-parsed values and never deal with paths.

No data files ship with the repo; the built-in program table is used when
none is configured.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

from core.config import AppSettings, get_user_config_dir
from core.domain.models import ProgramsFile
from core.domain.programs import ProgramRegistry

logger = logging.getLogger(__name__)

PROGRAMS_FILENAME = "programs.json"
PROXIES_FILENAME = "proxies.txt"


def _project_root() -> Path:
    # core/resources_loader.py -> core -> src -> <project_root>
    return Path(__file__).resolve().parents[2]


def _data_dir() -> Path:
    """Runtime data directory.

    Rules:
    - If AIRDROP_CHECKER_DATA_DIR is set, it is used as is.
    - In "frozen" mode (PyInstaller), use a writable per-user path.
    - In development, use <project_root>/data.
    """

    override = (os.environ.get("AIRDROP_CHECKER_DATA_DIR") or "").strip()
    if override:
        return Path(override)

    if getattr(sys, "frozen", False):
        return get_user_config_dir() / "data"

    return _project_root() / "data"


def get_default_resource_path(filename: str) -> Path | None:
    """Look for a resource file in the usual places.

    Order:
    1) <data dir>/<filename>
    2) <user config dir>/data/<filename>
    3) ./<filename> (cwd)
    """

    candidates = [
        _data_dir() / filename,
        get_user_config_dir() / "data" / filename,
        Path.cwd() / filename,
    ]
    for p in candidates:
        if p.exists() and p.is_file():
            return p
    return None


def load_programs_file(path: Path) -> ProgramsFile:
    raw = path.read_text(encoding="utf-8")
    data = json.loads(raw)
    if isinstance(data, list):
        data = {"programs": data}
    return ProgramsFile.model_validate(data)


def load_program_registry(settings: AppSettings) -> ProgramRegistry:
    """Build the read-only program registry.

    An explicitly configured `programs_path` must exist. Otherwise a
    `programs.json` found in the default locations wins over the built-in table.
    """

    path = settings.programs_path
    if path is not None and not path.exists():
        raise FileNotFoundError(f"Programs file not found: {path}")
    if path is None:
        path = get_default_resource_path(PROGRAMS_FILENAME)

    if path is None:
        logger.debug("Using built-in program table")
        return ProgramRegistry.default()

    logger.debug("Loading programs from %s", path)
    return ProgramRegistry(load_programs_file(path).programs)


def read_proxy_lines(path: Path) -> list[str]:
    """Read one proxy per line, skipping blanks and `#` comments."""

    out: list[str] = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        out.append(line)
    return out


def load_proxy_strings(settings: AppSettings) -> list[str]:
    """Inline proxies first, then the ones from `proxies_path` (or proxies.txt)."""

    proxies = list(settings.proxies)
    path = settings.proxies_path
    if path is not None and not path.exists():
        raise FileNotFoundError(f"Proxy list not found: {path}")
    if path is None:
        path = get_default_resource_path(PROXIES_FILENAME)
    if path is not None:
        proxies.extend(read_proxy_lines(path))
    return proxies
