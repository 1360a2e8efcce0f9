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

"""Shared pytest fixtures for owpib unit tests."""

# pylint: disable=redefined-outer-name

import logging

import pytest

from owpib.core.pipeline.entities import (
    DiscoverySnapshot,
    PackageList,
    PatchSet,
    RuntimeConfig,
)
from owpib.core.pipeline.value_objects import (
    BuildRequest,
    CustomFeedEntry,
    PatchFile,
    StageToggles,
)


@pytest.fixture
def build_request():
    """x86/64 generic build on the main release."""
    return BuildRequest(target="x86", subtarget="64", profile="generic", release="main")


@pytest.fixture
def runtime_config(build_request):
    """Runtime configuration pointing at a test registry."""
    return RuntimeConfig(registry="registry", tag=build_request.tag, jobs=4)


@pytest.fixture
def toggles():
    """Both producer stages enabled."""
    return StageToggles()


@pytest.fixture
def packages():
    """Default package list."""
    return PackageList()


@pytest.fixture
def empty_discovery():
    """No custom feed and no patches."""
    return DiscoverySnapshot()


@pytest.fixture
def full_discovery():
    """Two custom feed packages and patches in two categories."""
    return DiscoverySnapshot(
        custom_feed=(CustomFeedEntry("luci-app-foo"), CustomFeedEntry("mypkg")),
        patches=PatchSet.from_files([
            PatchFile("packages/net/netbird_fix-build.patch"),
            PatchFile("base/busybox_config.patch"),
        ]),
    )


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo configure_logging() calls made by a test."""
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
