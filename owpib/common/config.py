# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Configuration loader for owpib."""

import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import configparser

DEFAULT_CONFIG_PATH = "owpib.ini"
DEFAULT_REGISTRY = "ghcr.io"
DEFAULT_ENGINE_COMMAND = "docker buildx build"


def _default_jobs() -> int:
    return os.cpu_count() or 1


@dataclass
class RegistryConfig:
    """Container registry configuration."""
    url: str = DEFAULT_REGISTRY


@dataclass
class BuildConfig:
    """Build tuning configuration."""
    jobs: int = field(default_factory=_default_jobs)
    rootfs_size: Optional[int] = None


@dataclass
class PathsConfig:
    """Build context locations."""
    custom_feed_dir: str = "custom-feed"
    patches_dir: str = "patches"
    files_dir: Optional[str] = None
    output_dir: str = "build-output"


@dataclass
class EngineConfig:
    """Container engine configuration."""
    command: List[str] = field(default_factory=lambda: shlex.split(DEFAULT_ENGINE_COMMAND))


@dataclass
class OwpibConfig:
    """owpib configuration."""
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    build: BuildConfig = field(default_factory=BuildConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    engine: EngineConfig = field(default_factory=EngineConfig)


def _positive_int(parser: configparser.ConfigParser, section: str, option: str) -> Optional[int]:
    """Read an optional positive integer option."""
    raw = parser.get(section, option, fallback="").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"[{section}] {option} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise ValueError(f"[{section}] {option} must be positive, got {value}")
    return value


def _optional_str(parser: configparser.ConfigParser, section: str, option: str) -> Optional[str]:
    raw = parser.get(section, option, fallback="").strip()
    return raw or None


def load_config(config_path: Optional[str] = None) -> OwpibConfig:
    """Load owpib configuration from INI file.

    Args:
        config_path: Path to configuration file. If None, uses OWPIB_CONFIG_PATH
                    environment variable or default path.

    Returns:
        OwpibConfig instance.

    Raises:
        FileNotFoundError: If config file not found.
        ValueError: If config is invalid.
    """
    if config_path is None:
        config_path = os.getenv("OWPIB_CONFIG_PATH", DEFAULT_CONFIG_PATH)

    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    parser = configparser.ConfigParser(inline_comment_prefixes=(";",))
    try:
        parser.read(config_file, encoding="utf-8")
    except configparser.Error as exc:
        raise ValueError(f"Invalid configuration file {config_file}: {exc}") from exc

    defaults = OwpibConfig()

    registry = RegistryConfig(
        url=parser.get("registry", "url", fallback=defaults.registry.url).strip().rstrip("/"),
    )
    if not registry.url:
        raise ValueError("[registry] url cannot be empty")

    jobs = _positive_int(parser, "build", "jobs")
    build = BuildConfig(
        jobs=jobs if jobs is not None else defaults.build.jobs,
        rootfs_size=_positive_int(parser, "build", "rootfs_size"),
    )

    paths = PathsConfig(
        custom_feed_dir=parser.get(
            "paths", "custom_feed_dir", fallback=defaults.paths.custom_feed_dir
        ),
        patches_dir=parser.get("paths", "patches_dir", fallback=defaults.paths.patches_dir),
        files_dir=_optional_str(parser, "paths", "files_dir"),
        output_dir=parser.get("paths", "output_dir", fallback=defaults.paths.output_dir),
    )

    command = shlex.split(parser.get("engine", "command", fallback=DEFAULT_ENGINE_COMMAND))
    if not command:
        raise ValueError("[engine] command cannot be empty")

    return OwpibConfig(
        registry=registry,
        build=build,
        paths=paths,
        engine=EngineConfig(command=command),
    )
