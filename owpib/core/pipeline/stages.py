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

"""Stage builders for the SDK, ImageBuilder and export stages.

Each builder renders one :class:`StageBlock` from immutable inputs, or
returns ``None`` when its stage is disabled. Paths below refer to the
layout of the upstream ``openwrt/sdk`` and ``openwrt/imagebuilder``
container images, whose working directory is ``/builder``.
"""

import logging
import re
from typing import List, Optional, Tuple

from owpib.core.pipeline.entities import (
    DiscoverySnapshot,
    PackageList,
    PatchSet,
    RuntimeConfig,
    StageBlock,
)
from owpib.core.pipeline.sections import present, render_if, run_directive
from owpib.core.pipeline.value_objects import BuildRequest, ShellStep, StageToggles

logger = logging.getLogger(__name__)

SDK_STAGE = "sdk"
IMAGEBUILDER_STAGE = "imagebuilder"
EXPORT_STAGE = "export"

BUILDER_HOME = "/builder"
BUILDER_OWNER = "buildbot:buildbot"
CUSTOM_FEED_NAME = "custom"
CUSTOM_FEED_PATH = f"{BUILDER_HOME}/custom-feed"
PATCHES_PATH = f"{BUILDER_HOME}/patches"
SDK_PACKAGES_OUTPUT = f"{BUILDER_HOME}/bin/packages/"
SDK_PACKAGES_IMPORT = f"{BUILDER_HOME}/sdk-packages"
FILES_PATH = f"{BUILDER_HOME}/files"
BIN_PATH = f"{BUILDER_HOME}/bin/"

# Canonical upstream feed locations and the mirrors used instead.
FEED_URL_REWRITES: Tuple[Tuple[str, str], ...] = (
    ("https://git.openwrt.org/feed/", "https://github.com/openwrt/"),
    ("https://git.openwrt.org/project/", "https://github.com/openwrt/"),
    ("https://git.openwrt.org/openwrt/", "https://github.com/openwrt/"),
)

# Custom feed packages written against the LuCI tree use a relative include.
LUCI_INCLUDE_REWRITE = ("../../luci.mk", "$(TOPDIR)/feeds/luci/luci.mk")

TRANSIENT_PATHS: Tuple[str, ...] = ("tmp/", "build_dir/target-*/", "staging_dir/target-*/")

# Shared by derive_package_name() and the shell derivation in the image stage.
PACKAGE_EXTENSION_PATTERN = r"\.(ipk|apk)$"
VERSION_SUFFIX_PATTERN = r"[-_][0-9].*$"


def derive_package_name(filename: str) -> str:
    """Installable package name of a binary package file.

    The extension is dropped, then everything from the first hyphen or
    underscore that is directly followed by a digit. Names without a version
    suffix are returned unchanged.

    >>> derive_package_name("some-package_1.2.3_arch.ipk")
    'some-package'
    """
    name = re.sub(PACKAGE_EXTENSION_PATTERN, "", filename)
    return re.sub(VERSION_SUFFIX_PATTERN, "", name, count=1)


def _sed_escape(text: str) -> str:
    return re.sub(r"([.#&\\])", r"\\\1", text)


class SdkStageBuilder:
    """Renders the SDK stage compiling custom and patched packages."""

    def build(
        self,
        request: BuildRequest,
        config: RuntimeConfig,
        packages: PackageList,
        discovery: DiscoverySnapshot,
        enabled: bool = True,
    ) -> Optional[StageBlock]:
        """Render the SDK stage.

        Custom feed entry names are appended to ``packages`` so the image
        stage installs them.

        Args:
            request: Build request.
            config: Runtime configuration.
            packages: Package list, extended in place.
            discovery: Custom feed and patch discovery results.
            enabled: Whether the SDK stage is part of the pipeline.

        Returns:
            The SDK stage, or None when disabled.
        """
        if not enabled:
            return None

        patch_custom_feed = discovery.has_custom_feed
        patch_upstream = discovery.has_patches
        if patch_custom_feed:
            packages.extend_from_discovery(str(entry) for entry in discovery.custom_feed)

        logger.info(
            "Rendering SDK stage for %s: %d custom feed entries, %d patches",
            request,
            len(discovery.custom_feed),
            len(discovery.patches),
        )

        directives = present([
            f"FROM {config.image_ref('sdk')} AS {SDK_STAGE}",
            render_if(
                patch_custom_feed,
                lambda: f"COPY --chown={BUILDER_OWNER} {config.custom_feed_dir} {CUSTOM_FEED_PATH}",
            ),
            render_if(
                patch_upstream,
                lambda: f"COPY --chown={BUILDER_OWNER} {config.patches_dir} {PATCHES_PATH}",
            ),
            "RUN ./setup.sh",
            self._feed_configuration(patch_custom_feed),
            run_directive(["./scripts/feeds update -a"]),
            render_if(patch_custom_feed, self._custom_feed_update),
            render_if(patch_upstream, lambda: self._patch_directives(discovery.patches)),
            self._compile_directive(config, discovery),
        ])
        return StageBlock(name=SDK_STAGE, directives=directives)

    def _feed_configuration(self, patch_custom_feed: bool) -> str:
        rewrites = " ".join(
            f"-e 's#{_sed_escape(source)}#{target}#'" for source, target in FEED_URL_REWRITES
        )
        steps = present([
            render_if(
                patch_custom_feed,
                f"sed -i '1i src-link {CUSTOM_FEED_NAME} {CUSTOM_FEED_PATH}' feeds.conf.default",
            ),
            f"sed -i {rewrites} feeds.conf.default",
        ])
        return run_directive(steps)

    def _custom_feed_update(self) -> str:
        source, target = LUCI_INCLUDE_REWRITE
        # Failure is discarded: packages without the include are fine as-is.
        include_rewrite = ShellStep(
            f"sed -i 's#{_sed_escape(source)}#{target}#' {CUSTOM_FEED_PATH}/*/Makefile",
            best_effort=True,
        )
        return run_directive([f"./scripts/feeds update {CUSTOM_FEED_NAME}", include_rewrite])

    def _patch_directives(self, patches: PatchSet) -> str:
        return "\n".join(
            run_directive([f"patch -d feeds/{patch.feed_dir} -p1 -i {PATCHES_PATH}/{patch}"])
            for patch in patches
        )

    def _compile_directive(self, config: RuntimeConfig, discovery: DiscoverySnapshot) -> str:
        steps: List[str] = ["make defconfig"]
        for stem in discovery.package_stems():
            steps.append(f"./scripts/feeds install {stem}")
            steps.append(f"make package/{stem}/compile -j{config.jobs}")
        steps.append("rm -rf " + " ".join(TRANSIENT_PATHS))
        return run_directive(steps)


class ImageStageBuilder:
    """Renders the ImageBuilder stage assembling the firmware image."""

    def build(
        self,
        request: BuildRequest,
        config: RuntimeConfig,
        packages: PackageList,
        sdk_enabled: bool,
        enabled: bool = True,
    ) -> Optional[StageBlock]:
        """Render the ImageBuilder stage.

        Args:
            request: Build request.
            config: Runtime configuration.
            packages: Resolved package list.
            sdk_enabled: Whether the SDK stage produces packages to import.
            enabled: Whether the ImageBuilder stage is part of the pipeline.

        Returns:
            The ImageBuilder stage, or None when disabled.
        """
        if not enabled:
            return None

        logger.info(
            "Rendering ImageBuilder stage for %s with %d package tokens",
            request,
            len(packages),
        )

        directives = present([
            f"FROM {config.image_ref('imagebuilder')} AS {IMAGEBUILDER_STAGE}",
            render_if(
                sdk_enabled,
                f"COPY --from={SDK_STAGE} --chown={BUILDER_OWNER} "
                f"{SDK_PACKAGES_OUTPUT} {SDK_PACKAGES_IMPORT}/",
            ),
            render_if(
                config.files_dir is not None,
                lambda: f"COPY --chown={BUILDER_OWNER} {config.files_dir} {FILES_PATH}/",
            ),
            self._environment(request, config, packages),
            self._image_directive(config, sdk_enabled),
        ])
        return StageBlock(name=IMAGEBUILDER_STAGE, directives=directives)

    def _environment(
        self, request: BuildRequest, config: RuntimeConfig, packages: PackageList
    ) -> str:
        bindings = present([
            f'OWPIB_PACKAGES="{packages.render()}"',
            f'OWPIB_PROFILE="{request.profile}"',
            render_if(
                config.rootfs_size is not None,
                lambda: f'OWPIB_ROOTFS_SIZE="{config.rootfs_size}"',
            ),
            f'OWPIB_JOBS="{config.jobs}"',
        ])
        return "ENV " + " \\\n    ".join(bindings)

    def _image_directive(self, config: RuntimeConfig, sdk_enabled: bool) -> str:
        derive = (
            f"sed -E 's/{PACKAGE_EXTENSION_PATTERN}//; s/{VERSION_SUFFIX_PATTERN}//'"
        )
        make_image = " ".join(present([
            "make image",
            f"FILES={FILES_PATH}",
            'PROFILE="$OWPIB_PROFILE"',
            'PACKAGES="$PACKAGES"',
            render_if(config.rootfs_size is not None, 'ROOTFS_PARTSIZE="$OWPIB_ROOTFS_SIZE"'),
            '-j"$OWPIB_JOBS"',
        ]))
        steps = present([
            f"mkdir -p {FILES_PATH}",
            'PACKAGES="$OWPIB_PACKAGES"',
            render_if(
                sdk_enabled,
                f"for ipk in $(find {SDK_PACKAGES_IMPORT} -type f -name '*.[ia]pk' | sort); do "
                f'ln -sfr "$ipk" packages/ '
                f'&& PACKAGES="$PACKAGES $(basename "$ipk" | {derive})"; '
                "done",
            ),
            make_image,
        ])
        return run_directive(steps)


class ExportStageBuilder:
    """Renders the export stage collecting binaries from producer stages."""

    def build(self, toggles: StageToggles) -> StageBlock:
        """Render the export stage.

        Args:
            toggles: Enabled producer stages; each enabled stage is copied.

        Returns:
            The export stage.
        """
        directives = present([
            f"FROM scratch AS {EXPORT_STAGE}",
            render_if(toggles.sdk_enabled, f"COPY --from={SDK_STAGE} {BIN_PATH} /"),
            render_if(
                toggles.imagebuilder_enabled,
                f"COPY --from={IMAGEBUILDER_STAGE} {BIN_PATH} /",
            ),
        ])
        return StageBlock(name=EXPORT_STAGE, directives=directives)
