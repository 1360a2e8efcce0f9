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

"""BuildPipeline use case implementation."""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from owpib.common.config import OwpibConfig
from owpib.common.logging_utils import log_secure_info
from owpib.core.pipeline.entities import PackageList, RuntimeConfig
from owpib.core.pipeline.exceptions import (
    ConflictingStageToggles,
    EngineError,
    InvalidArgument,
)
from owpib.core.pipeline.repositories import Clock, ContainerEngine, FeedDiscoveryRepository
from owpib.core.pipeline.services import PipelineComposer
from owpib.core.pipeline.value_objects import BuildRequest, StageToggles
from owpib.orchestrator.pipeline.commands import BuildPipelineCommand
from owpib.orchestrator.pipeline.dtos import (
    STATUS_PRINTED,
    STATUS_SUCCEEDED,
    BuildPipelineResponse,
)

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


class BuildPipelineUseCase:
    """Use case for synthesizing the pipeline and handing it to the engine.

    This use case orchestrates one invocation with the following guarantees:
    - Runtime configuration is computed once and passed to every component
    - Discovery happens before rendering; rendering never touches the disk
    - Dry runs print the document and never start the engine
    - The engine runs at most once and its exit status is propagated as-is

    Attributes:
        config: Loaded owpib configuration.
        discovery_repo: Custom feed and patches discovery.
        composer: Pipeline composer.
        engine: Container engine port.
        clock: Clock used for output directory timestamps.
    """

    def __init__(  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        config: OwpibConfig,
        discovery_repo: FeedDiscoveryRepository,
        composer: PipelineComposer,
        engine: ContainerEngine,
        clock: Clock,
        context_dir: Path = Path("."),
        output: Optional[TextIO] = None,
    ) -> None:
        """Initialize use case with configuration and collaborators.

        Args:
            config: Loaded owpib configuration.
            discovery_repo: Custom feed and patches discovery implementation.
            composer: Pipeline composer.
            engine: Container engine implementation.
            clock: Clock implementation.
            context_dir: Build context handed to the engine.
            output: Stream receiving dry-run documents. Defaults to stdout.
        """
        self._config = config
        self._discovery_repo = discovery_repo
        self._composer = composer
        self._engine = engine
        self._clock = clock
        self._context_dir = context_dir
        self._output = output

    def execute(self, command: BuildPipelineCommand) -> BuildPipelineResponse:
        """Compose the pipeline and print or build it.

        Args:
            command: BuildPipeline command from the command line.

        Returns:
            BuildPipelineResponse DTO.

        Raises:
            InvalidArgument: If the build request is invalid.
            ConflictingStageToggles: If both stages are disabled.
            DiscoveryError: If the custom feed or patches cannot be read.
            EngineError: If the container build fails.
        """
        request = self._validate_request(command)
        toggles = self._validate_toggles(command)
        runtime_config = self._build_runtime_config(request, command)
        packages = PackageList(command.package_tokens)

        discovery = self._discovery_repo.discover()
        document = self._composer.compose(request, runtime_config, toggles, packages, discovery)
        text = document.render()

        if runtime_config.dry_run:
            self._print_document(text)
            return self._to_response(STATUS_PRINTED, runtime_config, document.stage_names, text)

        output_dir = self._output_dir(request, runtime_config)
        exit_code = self._run_engine(text, output_dir)
        return self._to_response(
            STATUS_SUCCEEDED,
            runtime_config,
            document.stage_names,
            text,
            output_dir=str(output_dir),
            exit_code=exit_code,
        )

    def _validate_request(self, command: BuildPipelineCommand) -> BuildRequest:
        """Validate and create BuildRequest value object."""
        try:
            return BuildRequest(
                target=command.target,
                subtarget=command.subtarget,
                profile=command.profile,
                release=command.release,
            )
        except ValueError as exc:
            raise InvalidArgument(str(exc)) from exc

    def _validate_toggles(self, command: BuildPipelineCommand) -> StageToggles:
        """Validate and create StageToggles value object."""
        try:
            return StageToggles(
                sdk_enabled=command.sdk_enabled,
                imagebuilder_enabled=command.imagebuilder_enabled,
            )
        except ValueError as exc:
            raise ConflictingStageToggles(str(exc)) from exc

    def _build_runtime_config(
        self, request: BuildRequest, command: BuildPipelineCommand
    ) -> RuntimeConfig:
        """Create the RuntimeConfig shared by all components."""
        return RuntimeConfig(
            registry=self._config.registry.url,
            tag=request.tag,
            jobs=self._config.build.jobs,
            dry_run=command.dry_run,
            rootfs_size=self._config.build.rootfs_size,
            custom_feed_dir=self._config.paths.custom_feed_dir,
            patches_dir=self._config.paths.patches_dir,
            files_dir=self._config.paths.files_dir,
            output_dir=self._config.paths.output_dir,
        )

    def _print_document(self, text: str) -> None:
        """Write the document to the dry-run stream."""
        stream = self._output if self._output is not None else sys.stdout
        stream.write(text)
        stream.flush()

    def _output_dir(self, request: BuildRequest, config: RuntimeConfig) -> Path:
        """Directory for this build's artifacts."""
        timestamp = self._clock.now().strftime(TIMESTAMP_FORMAT)
        return Path(config.output_dir) / (
            f"openwrt-{request.target}-{request.subtarget}-{request.profile}-{timestamp}"
        )

    def _run_engine(self, text: str, output_dir: Path) -> int:
        """Hand the document to the engine once; failures are not retried."""
        log_secure_info("info", "Building pipeline into", str(output_dir))
        exit_code = self._engine.build(text, output_dir, self._context_dir)
        if exit_code != 0:
            raise EngineError(
                f"Container build failed with exit code {exit_code}",
                exit_code=exit_code,
            )
        logger.info("Firmware artifacts written to %s", output_dir)
        return exit_code

    def _to_response(  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        status: str,
        config: RuntimeConfig,
        stage_names,
        text: str,
        output_dir: Optional[str] = None,
        exit_code: int = 0,
    ) -> BuildPipelineResponse:
        """Map to response DTO."""
        return BuildPipelineResponse(
            status=status,
            tag=config.tag,
            stages=list(stage_names),
            document=text,
            output_dir=output_dir,
            exit_code=exit_code,
        )
