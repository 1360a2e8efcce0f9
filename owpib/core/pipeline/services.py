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

"""Domain services for the Pipeline module."""

import logging

from owpib.core.pipeline.entities import (
    DiscoverySnapshot,
    PackageList,
    PipelineDocument,
    RuntimeConfig,
)
from owpib.core.pipeline.stages import (
    ExportStageBuilder,
    ImageStageBuilder,
    SdkStageBuilder,
)
from owpib.core.pipeline.value_objects import BuildRequest, StageToggles

logger = logging.getLogger(__name__)


class PipelineComposer:
    """Service composing the SDK, ImageBuilder and export stages."""

    def __init__(
        self,
        sdk_builder: SdkStageBuilder,
        image_builder: ImageStageBuilder,
        export_builder: ExportStageBuilder,
    ) -> None:
        """Initialize composer with its stage builders."""
        self._sdk_builder = sdk_builder
        self._image_builder = image_builder
        self._export_builder = export_builder

    def compose(  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        request: BuildRequest,
        config: RuntimeConfig,
        toggles: StageToggles,
        packages: PackageList,
        discovery: DiscoverySnapshot,
    ) -> PipelineDocument:
        """Compose the pipeline document.

        The caller's package list is not modified; discovered custom feed
        packages are appended to a private copy, so composing the same
        inputs twice yields identical documents.

        Args:
            request: Build request.
            config: Runtime configuration.
            toggles: Enabled producer stages.
            packages: Package list from the command line.
            discovery: Custom feed and patch discovery results.

        Returns:
            PipelineDocument with the enabled stages followed by the export stage.
        """
        resolved = packages.copy()
        sdk_stage = self._sdk_builder.build(
            request, config, resolved, discovery, enabled=toggles.sdk_enabled
        )
        image_stage = self._image_builder.build(
            request,
            config,
            resolved,
            sdk_enabled=toggles.sdk_enabled,
            enabled=toggles.imagebuilder_enabled,
        )
        export_stage = self._export_builder.build(toggles)

        document = PipelineDocument(
            stages=tuple(
                stage for stage in (sdk_stage, image_stage, export_stage) if stage is not None
            )
        )
        logger.info(
            "Composed pipeline for %s with stages: %s",
            request,
            ", ".join(document.stage_names),
        )
        return document
