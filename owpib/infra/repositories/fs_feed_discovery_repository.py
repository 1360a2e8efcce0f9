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

"""Filesystem implementation of FeedDiscoveryRepository."""

import logging
import os
from pathlib import Path
from typing import List, NoReturn, Tuple

from owpib.core.pipeline.entities import DiscoverySnapshot, PatchSet
from owpib.core.pipeline.exceptions import DiscoveryError
from owpib.core.pipeline.repositories import FeedDiscoveryRepository
from owpib.core.pipeline.value_objects import FEED_CATEGORIES, CustomFeedEntry, PatchFile

logger = logging.getLogger(__name__)


def _raise_walk_error(exc: OSError) -> NoReturn:
    raise exc


class FilesystemFeedDiscoveryRepository(FeedDiscoveryRepository):
    """Discovers the custom feed and patches below the build context.

    Only reads the directories. A missing root means "nothing to add"; a
    root that exists but cannot be read is an error, because treating it as
    empty would silently drop packages or patches.
    """

    def __init__(self, custom_feed_root: Path, patches_root: Path) -> None:
        """Initialize repository with the two roots.

        Args:
            custom_feed_root: Directory whose subdirectories are custom packages.
            patches_root: Directory holding one subdirectory per feed category.
        """
        self._custom_feed_root = Path(custom_feed_root)
        self._patches_root = Path(patches_root)

    def discover(self) -> DiscoverySnapshot:
        """Enumerate custom feed entries and patch files.

        Returns:
            DiscoverySnapshot with entries sorted by name and patches in
            application order.

        Raises:
            DiscoveryError: If a root exists but cannot be enumerated.
        """
        snapshot = DiscoverySnapshot(
            custom_feed=self._discover_custom_feed(),
            patches=self._discover_patches(),
        )
        logger.info(
            "Discovered %d custom feed entries in %s and %d patches in %s",
            len(snapshot.custom_feed),
            self._custom_feed_root,
            len(snapshot.patches),
            self._patches_root,
        )
        return snapshot

    def _check_root(self, root: Path) -> bool:
        """Return True when the root exists and is a directory."""
        if not root.exists():
            logger.debug("Skipping missing directory %s", root)
            return False
        if not root.is_dir():
            raise DiscoveryError(f"Not a directory: {root}")
        return True

    def _discover_custom_feed(self) -> Tuple[CustomFeedEntry, ...]:
        root = self._custom_feed_root
        if not self._check_root(root):
            return ()

        try:
            names = sorted(
                entry.name
                for entry in root.iterdir()
                if entry.is_dir() and not entry.name.startswith(".")
            )
        except OSError as exc:
            raise DiscoveryError(f"Failed to read custom feed {root}: {exc}") from exc

        try:
            return tuple(CustomFeedEntry(name) for name in names)
        except ValueError as exc:
            raise DiscoveryError(f"Invalid custom feed entry in {root}: {exc}") from exc

    def _discover_patches(self) -> PatchSet:
        root = self._patches_root
        if not self._check_root(root):
            return PatchSet()

        patches: List[PatchFile] = []
        for category in FEED_CATEGORIES:
            category_dir = root / category
            if not self._check_root(category_dir):
                continue
            try:
                for dirpath, dirnames, filenames in os.walk(
                    category_dir, onerror=_raise_walk_error
                ):
                    dirnames.sort()
                    for filename in sorted(filenames):
                        if not filename.endswith(PatchFile.SUFFIX):
                            continue
                        relative = (Path(dirpath) / filename).relative_to(root)
                        patches.append(PatchFile(relative.as_posix()))
            except OSError as exc:
                raise DiscoveryError(f"Failed to read patches in {category_dir}: {exc}") from exc
            except ValueError as exc:
                raise DiscoveryError(f"Invalid patch in {category_dir}: {exc}") from exc

        return PatchSet.from_files(patches)
