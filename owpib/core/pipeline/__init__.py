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

"""Pipeline domain module.

This module contains the domain logic synthesizing the multi-stage
OpenWrt build pipeline.
"""

from owpib.core.pipeline.entities import (
    DEFAULT_PACKAGES,
    DiscoverySnapshot,
    PackageList,
    PatchSet,
    PipelineDocument,
    RuntimeConfig,
    StageBlock,
)
from owpib.core.pipeline.exceptions import (
    ConflictingStageToggles,
    DiscoveryError,
    EngineError,
    InvalidArgument,
    MalformedOption,
    MissingArguments,
    MissingPackageArgument,
    PipelineDomainError,
    UnexpectedArgument,
    UnknownOption,
    UsageError,
)
from owpib.core.pipeline.services import PipelineComposer
from owpib.core.pipeline.stages import (
    ExportStageBuilder,
    ImageStageBuilder,
    SdkStageBuilder,
    derive_package_name,
)
from owpib.core.pipeline.value_objects import (
    BuildRequest,
    CustomFeedEntry,
    PackageToken,
    PatchFile,
    ShellStep,
    StageToggles,
)

__all__ = [
    "DEFAULT_PACKAGES",
    "DiscoverySnapshot",
    "PackageList",
    "PatchSet",
    "PipelineDocument",
    "RuntimeConfig",
    "StageBlock",
    "ConflictingStageToggles",
    "DiscoveryError",
    "EngineError",
    "InvalidArgument",
    "MalformedOption",
    "MissingArguments",
    "MissingPackageArgument",
    "PipelineDomainError",
    "UnexpectedArgument",
    "UnknownOption",
    "UsageError",
    "PipelineComposer",
    "ExportStageBuilder",
    "ImageStageBuilder",
    "SdkStageBuilder",
    "derive_package_name",
    "BuildRequest",
    "CustomFeedEntry",
    "PackageToken",
    "PatchFile",
    "ShellStep",
    "StageToggles",
]
