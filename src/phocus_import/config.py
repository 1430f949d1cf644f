"""
Importer Configuration

Resolves where the host application keeps its raw files, preview cache and
catalog store, and captures the result once per run in an ImporterConfig.

Resolution order for the container root:
  1) PHOCUS_CONTAINER_ROOT environment variable
  2) [paths] container_root in the TOML config file
  3) discovery under ~/Library/Containers by bundle ID

The TOML file is PHOCUS_IMPORT_CONFIG, else ./phocus-import.toml, else none:

    [paths]
    container_root = "/Users/me/Library/Containers/<uuid>"
    containers_dir = "~/Library/Containers"
    bundle_id = "com.hasselblad.mobile2"

    [logging]
    level = "DEBUG"
    log_dir = "~/Library/Logs/phocus-import"
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomli
from loguru import logger

from .catalog.store import SCHEMA_VERSION
from .errors import ContainerNotFoundError

BUNDLE_ID = "com.hasselblad.mobile2"

RAW_SUBDIR = "Data/Documents/Images"
PREVIEW_SUBDIR = "Data/Library/PreviewCache"
STORE_SUBPATH = "Data/Library/RealmDB/Album.realm"
PREFERENCES_SUBDIR = "Data/Library/Preferences"

CONFIG_ENV = "PHOCUS_IMPORT_CONFIG"
CONTAINER_ROOT_ENV = "PHOCUS_CONTAINER_ROOT"
CONFIG_FILENAME = "phocus-import.toml"


@dataclass(frozen=True)
class ImporterConfig:
    """
    Resolved locations and settings for one run.

    Attributes:
        container_root: Host application's sandbox container
        raw_dir: Where patched raw copies are placed
        preview_dir: Where placeholder JPEGs are placed
        store_path: Catalog store file
        schema_version: Store schema version the host expects
        bundle_id: Host application bundle identifier
        log_level: Console log level
        log_dir: Optional directory for a rotating log file
    """
    container_root: Path
    raw_dir: Path
    preview_dir: Path
    store_path: Path
    schema_version: int = SCHEMA_VERSION
    bundle_id: str = BUNDLE_ID
    log_level: str = "INFO"
    log_dir: Optional[Path] = None

    @classmethod
    def for_container(cls, container_root: Path, **kwargs: Any) -> "ImporterConfig":
        """Derive all paths from the standard layout under a container root"""
        root = Path(container_root).expanduser()
        return cls(
            container_root=root,
            raw_dir=root / RAW_SUBDIR,
            preview_dir=root / PREVIEW_SUBDIR,
            store_path=root / STORE_SUBPATH,
            **kwargs,
        )

    def ensure_dirs(self) -> None:
        """Create the raw and preview directories if needed"""
        self.raw_dir.mkdir(parents=True, exist_ok=True)
        self.preview_dir.mkdir(parents=True, exist_ok=True)


def default_containers_dir() -> Path:
    return Path.home() / "Library" / "Containers"


def find_container_root(bundle_id: str = BUNDLE_ID, containers_dir: Optional[Path] = None) -> Path:
    """
    Locate the host application's container.

    A container matches when its Preferences directory holds a file whose
    name contains the bundle ID. Among several matches, the one that already
    has a catalog store wins; otherwise the first match is used.

    Args:
        bundle_id: Host application bundle identifier
        containers_dir: Directory holding per-app containers

    Returns:
        Path to the container root

    Raises:
        ContainerNotFoundError: If no container matches
    """
    containers_dir = Path(containers_dir) if containers_dir else default_containers_dir()
    if not containers_dir.is_dir():
        raise ContainerNotFoundError(f"Containers directory not found: {containers_dir}")

    candidates: List[Path] = []
    for container in sorted(containers_dir.iterdir()):
        if container.name.startswith("."):
            continue
        prefs = container / PREFERENCES_SUBDIR
        if not prefs.is_dir():
            continue
        if any(bundle_id in item.name for item in prefs.iterdir()):
            candidates.append(container)

    if not candidates:
        raise ContainerNotFoundError(
            f"No container under {containers_dir} has preferences for {bundle_id}; "
            "launch the application once first"
        )

    for container in candidates:
        if (container / STORE_SUBPATH).is_file():
            return container

    if len(candidates) > 1:
        logger.warning(
            "Several containers match {} but none has a catalog store; using {}",
            bundle_id,
            candidates[0],
        )
        for container in candidates:
            logger.warning("   - {}", container)
    return candidates[0]


def _find_config_path() -> Optional[Path]:
    env_path = os.getenv(CONFIG_ENV)
    if env_path:
        p = Path(env_path).expanduser()
        if p.is_file():
            return p
        logger.warning("{} points to a missing file: {}", CONFIG_ENV, p)
        return None

    p = Path.cwd() / CONFIG_FILENAME
    if p.is_file():
        return p
    return None


def _load_toml(path: Optional[Path]) -> Dict[str, Any]:
    if path is None:
        return {}
    with path.open("rb") as f:
        return tomli.load(f)


def load_config(config_path: Optional[Path] = None) -> ImporterConfig:
    """
    Resolve the configuration for this run.

    Args:
        config_path: Explicit TOML file; defaults to the usual lookup

    Returns:
        ImporterConfig with all paths resolved

    Raises:
        ContainerNotFoundError: If no container root is configured and
            discovery finds none
        tomli.TOMLDecodeError: If the config file is malformed
    """
    cfg = _load_toml(config_path or _find_config_path())
    paths = cfg.get("paths", {})
    logging_cfg = cfg.get("logging", {})

    bundle_id = str(paths.get("bundle_id", BUNDLE_ID))

    root = os.getenv(CONTAINER_ROOT_ENV) or paths.get("container_root")
    if root:
        container_root = Path(root).expanduser()
    else:
        containers_dir = paths.get("containers_dir")
        container_root = find_container_root(
            bundle_id,
            Path(containers_dir).expanduser() if containers_dir else None,
        )

    log_dir = logging_cfg.get("log_dir")
    return ImporterConfig.for_container(
        container_root,
        bundle_id=bundle_id,
        log_level=str(logging_cfg.get("level", "INFO")),
        log_dir=Path(log_dir).expanduser() if log_dir else None,
    )
