"""Configuration management with XDG paths, atomic writes, and output conventions.

This module handles all persistent state of actiondoc:

* **Data directory** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.actiondoc/logs/`` on macOS and Windows. Holds crash logs. See
  :func:`get_data_dir`.
* **Project config** -- ``./actiondoc.json`` or ``./actiondoc.yaml`` in the
  working directory, deserialised into a :class:`~actiondoc.models.ProjectConfig`
  (swagger options and the meta registry). See :func:`load_project_config`.
* **Output directory** -- ``./target/actiondoc/`` for Maven projects (a
  ``pom.xml`` is present), ``./build/actiondoc/`` otherwise. See
  :func:`get_output_dir`.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) so a crash never leaves a half-written
``swagger.json`` behind.
"""

from __future__ import annotations

import json
import logging
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from actiondoc.exceptions import ConfigurationError
from actiondoc.models import ProjectConfig

logger = logging.getLogger(__name__)

_APP_NAME = "actiondoc"
_PROJECT_CONFIG_FILENAMES = ("actiondoc.json", "actiondoc.yaml", "actiondoc.yml")

SWAGGER_FILENAME = "swagger.json"
ANALYZED_META_FILENAME = "analyzed-actiondoc.json"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/actiondoc/`` (default ``~/.local/share/actiondoc/``).
    On macOS/Windows: ``~/.actiondoc/logs/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_DATA_HOME", (".local", "share"))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is cleaned up.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close in finally
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Project-local config ---


def find_project_config() -> Optional[Path]:
    """Return the first project config file found in the working directory."""
    for filename in _PROJECT_CONFIG_FILENAMES:
        path = Path.cwd() / filename
        if path.is_file():
            return path
    return None


def load_project_config(path: Optional[Path] = None) -> ProjectConfig:
    """Load the project configuration.

    Args:
        path: Explicit config file. When ``None`` the working directory is
            searched for ``actiondoc.json``, ``actiondoc.yaml`` and
            ``actiondoc.yml``.

    Returns:
        The validated :class:`~actiondoc.models.ProjectConfig`. If no file
        exists, a default instance is returned.

    Raises:
        ConfigurationError: If the file is missing (explicit *path* only),
            unparsable, or fails Pydantic validation.
    """
    if path is None:
        path = find_project_config()
        if path is None:
            return ProjectConfig()
    elif not path.is_file():
        raise ConfigurationError(f"Project config not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() in (".yaml", ".yml"):
            data: Any = yaml.safe_load(text) or {}
        else:
            data = json.loads(text)
        config = ProjectConfig.model_validate(data)
    except (OSError, json.JSONDecodeError, yaml.YAMLError, ValidationError) as exc:
        raise ConfigurationError(f"Invalid project config at {path}: {exc}") from exc
    logger.debug("Loaded project config from %s", path)
    return config


# --- Output ---


def get_output_dir(config: Optional[ProjectConfig] = None) -> Path:
    """Return the directory generated documents are written to.

    ``output_dir`` in the project config wins; otherwise the build tool is
    guessed from the working directory.
    """
    if config is not None and config.output_dir:
        return Path(config.output_dir)
    if (Path.cwd() / "pom.xml").is_file():
        return Path("target") / _APP_NAME
    return Path("build") / _APP_NAME


def save_swagger_json(content: str, output_dir: Path) -> Path:
    """Atomically write serialized swagger to ``<output_dir>/swagger.json``."""
    path = output_dir / SWAGGER_FILENAME
    _atomic_write(path, content)
    return path


def save_analyzed_meta(content: str, output_dir: Path) -> Path:
    """Atomically write analyzed metadata to ``<output_dir>/analyzed-actiondoc.json``."""
    path = output_dir / ANALYZED_META_FILENAME
    _atomic_write(path, content)
    return path
