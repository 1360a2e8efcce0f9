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

"""Unit tests for PipelineComposer."""

# pylint: disable=redefined-outer-name

import pytest

from owpib.core.pipeline.entities import PackageList, RuntimeConfig
from owpib.core.pipeline.services import PipelineComposer
from owpib.core.pipeline.stages import ExportStageBuilder, ImageStageBuilder, SdkStageBuilder
from owpib.core.pipeline.value_objects import StageToggles


@pytest.fixture
def composer():
    """Composer wired with the real stage builders."""
    return PipelineComposer(
        sdk_builder=SdkStageBuilder(),
        image_builder=ImageStageBuilder(),
        export_builder=ExportStageBuilder(),
    )


class TestPipelineComposer:
    """Tests for PipelineComposer."""

    def test_three_from_headers(self, composer, build_request, runtime_config, toggles,
                                packages, empty_discovery):
        """Both stages yield SDK, ImageBuilder and export headers."""
        text = composer.compose(
            build_request, runtime_config, toggles, packages, empty_discovery
        ).render()
        headers = [line for line in text.splitlines() if line.startswith("FROM ")]
        assert headers == [
            "FROM registry/openwrt/sdk:x86-64-main AS sdk",
            "FROM registry/openwrt/imagebuilder:x86-64-main AS imagebuilder",
            "FROM scratch AS export",
        ]

    def test_stage_order(self, composer, build_request, runtime_config, toggles,
                         packages, empty_discovery):
        """Stages appear as sdk, imagebuilder, export."""
        document = composer.compose(
            build_request, runtime_config, toggles, packages, empty_discovery
        )
        assert document.stage_names == ("sdk", "imagebuilder", "export")

    def test_disabled_sdk_leaves_no_trace(self, composer, build_request, runtime_config,
                                          packages, full_discovery):
        """Without the SDK stage nothing refers to it."""
        text = composer.compose(
            build_request, runtime_config, StageToggles(sdk_enabled=False), packages,
            full_discovery,
        ).render()
        assert "sdk" not in text
        assert "custom-feed" not in text
        assert "luci-app-foo" not in text

    def test_disabled_imagebuilder(self, composer, build_request, runtime_config,
                                   packages, empty_discovery):
        """Without the ImageBuilder stage only SDK and export remain."""
        document = composer.compose(
            build_request, runtime_config, StageToggles(imagebuilder_enabled=False), packages,
            empty_discovery,
        )
        assert document.stage_names == ("sdk", "export")
        assert "imagebuilder" not in document.render()

    def test_idempotent(self, composer, build_request, runtime_config, toggles,
                        packages, full_discovery):
        """Composing twice yields byte-identical documents."""
        first = composer.compose(
            build_request, runtime_config, toggles, packages, full_discovery
        ).render()
        second = composer.compose(
            build_request, runtime_config, toggles, packages, full_discovery
        ).render()
        assert first == second

    def test_caller_packages_untouched(self, composer, build_request, runtime_config, toggles,
                                       full_discovery):
        """Custom feed names go to a private copy of the package list."""
        packages = PackageList()
        composer.compose(build_request, runtime_config, toggles, packages, full_discovery)
        assert packages == PackageList()

    def test_custom_feed_names_reach_image_stage(self, composer, build_request, runtime_config,
                                                 toggles, full_discovery):
        """Package list order is defaults, command line, then custom feed names."""
        packages = PackageList()
        packages.install("tcpdump")
        packages.remove("dnsmasq")
        text = composer.compose(
            build_request, runtime_config, toggles, packages, full_discovery
        ).render()
        assert 'OWPIB_PACKAGES="luci luci-ssl tcpdump -dnsmasq luci-app-foo mypkg"' in text

    def test_jobs_embedded(self, composer, build_request, toggles, packages, full_discovery):
        """The configured job count appears verbatim."""
        config = RuntimeConfig(registry="registry", tag=build_request.tag, jobs=16)
        text = composer.compose(build_request, config, toggles, packages, full_discovery).render()
        assert "make package/mypkg/compile -j16" in text
        assert 'OWPIB_JOBS="16"' in text
