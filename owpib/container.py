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

"""Dependency Injector container for the owpib command line."""
# pylint: disable=c-extension-no-member

import logging
import os
from pathlib import Path

from dependency_injector import containers, providers

from owpib.common.config import OwpibConfig, load_config
from owpib.core.pipeline.services import PipelineComposer
from owpib.core.pipeline.stages import (
    ExportStageBuilder,
    ImageStageBuilder,
    SdkStageBuilder,
)
from owpib.infra.clock import SystemClock
from owpib.infra.engine.buildx_executor import BuildxExecutorAdapter
from owpib.infra.repositories import FilesystemFeedDiscoveryRepository
from owpib.orchestrator.pipeline.use_cases import BuildPipelineUseCase

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "OWPIB_CONFIG_PATH"


def _load_owpib_config() -> OwpibConfig:
    """Load configuration, using defaults when no config file is present.

    An explicitly configured path that does not exist is an error; a missing
    ``owpib.ini`` in the working directory is not.

    Raises:
        FileNotFoundError: If OWPIB_CONFIG_PATH names a missing file.
        ValueError: If the config file is invalid.
    """
    try:
        return load_config()
    except FileNotFoundError:
        if os.getenv(CONFIG_PATH_ENV):
            raise
        logger.debug("No configuration file found, using defaults")
        return OwpibConfig()


def _create_discovery_repository(
    config: OwpibConfig, context_dir: Path
) -> FilesystemFeedDiscoveryRepository:
    """Factory function resolving discovery roots against the build context."""
    return FilesystemFeedDiscoveryRepository(
        custom_feed_root=context_dir / config.paths.custom_feed_dir,
        patches_root=context_dir / config.paths.patches_dir,
    )


def _create_engine(config: OwpibConfig) -> BuildxExecutorAdapter:
    """Factory function creating the engine adapter from configuration."""
    return BuildxExecutorAdapter(command=config.engine.command)


class Container(containers.DeclarativeContainer):  # pylint: disable=R0903
    """Application container.

    Providers are resolved lazily, so configuration errors surface when the
    use case is first requested rather than at import time.
    """

    context_dir = providers.Object(Path("."))

    config = providers.Singleton(_load_owpib_config)

    clock = providers.Singleton(SystemClock)

    discovery_repo = providers.Factory(
        _create_discovery_repository,
        config=config,
        context_dir=context_dir,
    )

    engine = providers.Factory(
        _create_engine,
        config=config,
    )

    sdk_stage_builder = providers.Singleton(SdkStageBuilder)
    image_stage_builder = providers.Singleton(ImageStageBuilder)
    export_stage_builder = providers.Singleton(ExportStageBuilder)

    composer = providers.Singleton(
        PipelineComposer,
        sdk_builder=sdk_stage_builder,
        image_builder=image_stage_builder,
        export_builder=export_stage_builder,
    )

    build_pipeline_use_case = providers.Factory(
        BuildPipelineUseCase,
        config=config,
        discovery_repo=discovery_repo,
        composer=composer,
        engine=engine,
        clock=clock,
        context_dir=context_dir,
    )


# Singleton container instance shared by the command line entry point
container = Container()

__all__ = ["Container", "container"]
