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

"""Value objects for the Pipeline domain.

All value objects are immutable and defined by their values, not identity.
"""

import re
from dataclasses import dataclass, replace
from pathlib import PurePosixPath
from typing import ClassVar, Tuple

IDENTIFIER_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9._+-]*$"

# Patch categories in application order.
FEED_CATEGORIES: Tuple[str, ...] = ("base", "luci", "packages", "routing", "telephony")

REMOVAL_MARKER = "-"


def _validate_identifier(label: str, value: str) -> None:
    if not value or not value.strip():
        raise ValueError(f"{label} cannot be empty")
    if not re.match(IDENTIFIER_PATTERN, value):
        raise ValueError(
            f"Invalid {label.lower()}: {value}. "
            f"Must start with an alphanumeric character and contain only "
            f"alphanumeric characters, dots, plus signs, underscores, and hyphens."
        )


@dataclass(frozen=True)
class BuildRequest:
    """Identifies the upstream build environment to use.

    Attributes:
        target: OpenWrt target (e.g. x86, ath79).
        subtarget: OpenWrt subtarget (e.g. 64, generic).
        profile: Device profile within the target/subtarget pair.
        release: Release identifier used in the image tag.

    Raises:
        ValueError: If any field is not a valid identifier.
    """

    target: str
    subtarget: str
    profile: str
    release: str = "main"

    DEFAULT_RELEASE: ClassVar[str] = "main"

    def __post_init__(self) -> None:
        """Validate request fields."""
        _validate_identifier("Target", self.target)
        _validate_identifier("Subtarget", self.subtarget)
        _validate_identifier("Profile", self.profile)
        _validate_identifier("Release", self.release)

    @property
    def tag(self) -> str:
        """Container image tag shared by the SDK and ImageBuilder images."""
        return f"{self.target}-{self.subtarget}-{self.release}"

    def __str__(self) -> str:
        """Return string representation."""
        return f"{self.target}/{self.subtarget}/{self.profile}@{self.release}"


@dataclass(frozen=True)
class StageToggles:
    """Which producer stages are part of the pipeline.

    At least one of the two stages must stay enabled.

    Raises:
        ValueError: If both stages are disabled.
    """

    sdk_enabled: bool = True
    imagebuilder_enabled: bool = True

    def __post_init__(self) -> None:
        """Validate that at least one stage is enabled."""
        if not self.sdk_enabled and not self.imagebuilder_enabled:
            raise ValueError("At least one of the SDK and ImageBuilder stages must be enabled")

    def without_sdk(self) -> "StageToggles":
        """Return toggles with the SDK stage disabled."""
        return replace(self, sdk_enabled=False)

    def without_imagebuilder(self) -> "StageToggles":
        """Return toggles with the ImageBuilder stage disabled."""
        return replace(self, imagebuilder_enabled=False)


@dataclass(frozen=True)
class PackageToken:
    """One entry of the package list, either an install or a removal.

    Attributes:
        name: Package name without the removal marker.
        removal: True when the package is to be excluded from the image.
    """

    name: str
    removal: bool = False

    def __post_init__(self) -> None:
        """Validate package name."""
        _validate_identifier("Package name", self.name)

    def __str__(self) -> str:
        """Return the token as understood by the ImageBuilder."""
        if self.removal:
            return f"{REMOVAL_MARKER}{self.name}"
        return self.name


@dataclass(frozen=True)
class CustomFeedEntry:
    """Top-level directory of the custom feed, compiled as one package."""

    name: str

    def __post_init__(self) -> None:
        """Validate entry name."""
        _validate_identifier("Custom feed entry", self.name)

    def __str__(self) -> str:
        """Return string representation."""
        return self.name


@dataclass(frozen=True)
class PatchFile:
    """A patch file below the patches root.

    Attributes:
        relative_path: POSIX path relative to the patches root, starting
            with the feed category (e.g. ``packages/net/netbird_fix.patch``).

    Raises:
        ValueError: If the path is not inside a known feed category, or a path
            segment or the package stem is not a shell-safe identifier.
    """

    relative_path: str

    SUFFIX: ClassVar[str] = ".patch"

    def __post_init__(self) -> None:
        """Validate patch location and name."""
        parts = PurePosixPath(self.relative_path).parts
        if len(parts) < 2:
            raise ValueError(f"Patch must live inside a feed category: {self.relative_path}")
        if parts[0] not in FEED_CATEGORIES:
            raise ValueError(
                f"Unknown feed category for patch {self.relative_path}. "
                f"Supported: {', '.join(FEED_CATEGORIES)}"
            )
        if ".." in parts:
            raise ValueError(f"Patch path must not leave the patches root: {self.relative_path}")
        # Segments are rendered unquoted into shell commands. A valid file name
        # starts with an alphanumeric character, so the package stem is never empty.
        for part in parts:
            _validate_identifier("Patch path segment", part)

    @property
    def category(self) -> str:
        """Feed category the patch belongs to."""
        return PurePosixPath(self.relative_path).parts[0]

    @property
    def feed_dir(self) -> str:
        """Directory below ``feeds/`` the patch is applied in."""
        return str(PurePosixPath(self.relative_path).parent)

    @property
    def package_stem(self) -> str:
        """Package name the patch targets: file name text before the first underscore."""
        name = PurePosixPath(self.relative_path).name
        if name.endswith(self.SUFFIX):
            name = name[: -len(self.SUFFIX)]
        return name.split("_", 1)[0]

    def __str__(self) -> str:
        """Return string representation."""
        return self.relative_path


@dataclass(frozen=True)
class ShellStep:
    """A shell command embedded in a RUN directive.

    Attributes:
        command: Shell command text.
        best_effort: When True a failing command does not fail the build;
            the failure is discarded where the step is rendered.
    """

    command: str
    best_effort: bool = False

    def render(self) -> str:
        """Return the command as it appears in the pipeline document."""
        if self.best_effort:
            return f"({self.command} || true)"
        return self.command
