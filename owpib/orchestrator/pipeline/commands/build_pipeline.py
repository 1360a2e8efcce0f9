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

"""BuildPipeline command DTO."""

from dataclasses import dataclass
from typing import Tuple

from owpib.core.pipeline.value_objects import PackageToken


@dataclass(frozen=True)
class BuildPipelineCommand:  # pylint: disable=too-many-instance-attributes
    """Command to synthesize and run the build pipeline.

    Immutable command object produced by the command line parser.

    Attributes:
        target: OpenWrt target.
        subtarget: OpenWrt subtarget.
        profile: Device profile.
        release: Release identifier.
        package_tokens: Full package list, defaults included, in
            command line order.
        sdk_enabled: Whether the SDK stage runs.
        imagebuilder_enabled: Whether the ImageBuilder stage runs.
        dry_run: Print the pipeline document instead of building.
    """

    target: str
    subtarget: str
    profile: str
    release: str
    package_tokens: Tuple[PackageToken, ...]
    sdk_enabled: bool = True
    imagebuilder_enabled: bool = True
    dry_run: bool = False
