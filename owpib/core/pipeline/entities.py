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

"""Domain entities for the Pipeline module."""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple

from owpib.core.pipeline.value_objects import (
    FEED_CATEGORIES,
    CustomFeedEntry,
    PackageToken,
    PatchFile,
)

DEFAULT_PACKAGES: Tuple[str, ...] = ("luci", "luci-ssl")


class PackageList:
    """Ordered, append-only list of package install and removal tokens.

    The list is seeded with :data:`DEFAULT_PACKAGES` and is never
    deduplicated or reordered. An install and a removal of the same package
    may both be present; the ImageBuilder decides which one wins.
    """

    def __init__(self, tokens: Optional[Iterable[PackageToken]] = None) -> None:
        """Initialize the list with the defaults or the given tokens."""
        if tokens is None:
            tokens = [PackageToken(name) for name in DEFAULT_PACKAGES]
        self._tokens: List[PackageToken] = list(tokens)

    def install(self, name: str) -> None:
        """Append an install token."""
        self._tokens.append(PackageToken(name))

    def remove(self, name: str) -> None:
        """Append a removal token; earlier entries are left untouched."""
        self._tokens.append(PackageToken(name, removal=True))

    def extend_from_discovery(self, names: Iterable[str]) -> None:
        """Append install tokens for package names found on disk."""
        for name in names:
            self.install(name)

    def copy(self) -> "PackageList":
        """Return an independent list with the same tokens."""
        return PackageList(self._tokens)

    @property
    def tokens(self) -> Tuple[PackageToken, ...]:
        """Snapshot of the tokens in accumulation order."""
        return tuple(self._tokens)

    def render(self) -> str:
        """Space separated token list as passed to ``make image``."""
        return " ".join(str(token) for token in self._tokens)

    def __iter__(self) -> Iterator[PackageToken]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackageList):
            return NotImplemented
        return self._tokens == other._tokens

    def __repr__(self) -> str:
        return f"PackageList({self.render()!r})"


@dataclass(frozen=True)
class PatchSet:
    """Patch files in application order.

    Patches are ordered by feed category (see :data:`FEED_CATEGORIES`) and
    lexicographically by relative path within a category. Later patches may
    depend on earlier ones, so this order is preserved in the pipeline.
    """

    patches: Tuple[PatchFile, ...] = ()

    @classmethod
    def from_files(cls, patches: Iterable[PatchFile]) -> "PatchSet":
        """Build a patch set in application order from any input order."""
        ordered = sorted(
            patches,
            key=lambda patch: (FEED_CATEGORIES.index(patch.category), patch.relative_path),
        )
        return cls(tuple(ordered))

    def __iter__(self) -> Iterator[PatchFile]:
        return iter(self.patches)

    def __len__(self) -> int:
        return len(self.patches)

    def __bool__(self) -> bool:
        return bool(self.patches)


@dataclass(frozen=True)
class DiscoverySnapshot:
    """Result of enumerating the custom feed and patches roots.

    Attributes:
        custom_feed: Top-level custom feed directories, sorted by name.
        patches: Patch files in application order.
    """

    custom_feed: Tuple[CustomFeedEntry, ...] = ()
    patches: PatchSet = field(default_factory=PatchSet)

    @property
    def has_custom_feed(self) -> bool:
        """Whether a custom feed needs to be linked into the SDK."""
        return bool(self.custom_feed)

    @property
    def has_patches(self) -> bool:
        """Whether upstream feeds need to be patched."""
        return bool(self.patches)

    def package_stems(self) -> Tuple[str, ...]:
        """Packages the SDK stage compiles, first occurrence wins.

        Custom feed entries come first, followed by the stems of the patch
        files in application order.
        """
        stems: List[str] = []
        for name in [str(entry) for entry in self.custom_feed] + [
            patch.package_stem for patch in self.patches
        ]:
            if name not in stems:
                stems.append(name)
        return tuple(stems)


@dataclass(frozen=True)
class RuntimeConfig:  # pylint: disable=too-many-instance-attributes
    """Immutable runtime settings computed once per invocation.

    Attributes:
        registry: Registry hosting the ``openwrt/sdk`` and
            ``openwrt/imagebuilder`` images.
        tag: Image tag, ``<target>-<subtarget>-<release>``.
        jobs: Compile job concurrency embedded in the pipeline.
        dry_run: Print the pipeline instead of building it.
        rootfs_size: Root filesystem partition size in MB, if requested.
        custom_feed_dir: Custom feed root, relative to the build context.
        patches_dir: Patches root, relative to the build context.
        files_dir: Custom files overlay, relative to the build context.
        output_dir: Directory receiving one subdirectory per build.
    """

    registry: str
    tag: str
    jobs: int
    dry_run: bool = False
    rootfs_size: Optional[int] = None
    custom_feed_dir: str = "custom-feed"
    patches_dir: str = "patches"
    files_dir: Optional[str] = None
    output_dir: str = "build-output"

    def __post_init__(self) -> None:
        """Validate runtime settings."""
        if self.jobs < 1:
            raise ValueError(f"Jobs must be a positive integer, got {self.jobs}")
        if self.rootfs_size is not None and self.rootfs_size < 1:
            raise ValueError(
                f"Rootfs size must be a positive number of MB, got {self.rootfs_size}"
            )

    def image_ref(self, kind: str) -> str:
        """Reference of an upstream OpenWrt image (``sdk`` or ``imagebuilder``)."""
        return f"{self.registry}/openwrt/{kind}:{self.tag}"


@dataclass(frozen=True)
class StageBlock:
    """One stage of the pipeline document.

    Attributes:
        name: Stage name used in ``FROM ... AS <name>``.
        directives: Ordered Dockerfile directives, header first.
    """

    name: str
    directives: Tuple[str, ...]

    def render(self) -> str:
        """Return the stage text."""
        return "\n".join(self.directives)


@dataclass(frozen=True)
class PipelineDocument:
    """Composed multi-stage pipeline, consumed once by the executor."""

    stages: Tuple[StageBlock, ...]

    @property
    def stage_names(self) -> Tuple[str, ...]:
        """Names of the stages in document order."""
        return tuple(stage.name for stage in self.stages)

    def render(self) -> str:
        """Return the Dockerfile text."""
        return "\n\n".join(stage.render() for stage in self.stages) + "\n"
