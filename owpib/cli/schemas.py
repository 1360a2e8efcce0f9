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

"""Pydantic schemas for command line arguments."""

import re
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from owpib.core.pipeline.entities import DEFAULT_PACKAGES
from owpib.core.pipeline.value_objects import (
    IDENTIFIER_PATTERN,
    REMOVAL_MARKER,
    PackageToken,
)
from owpib.orchestrator.pipeline.commands import BuildPipelineCommand


class PipelineArguments(BaseModel):
    """Validated command line for one pipeline invocation."""

    model_config = ConfigDict(frozen=True)

    target: str = Field(
        ...,
        description="OpenWrt target (e.g. x86, ath79)",
        pattern=IDENTIFIER_PATTERN,
        max_length=64,
    )
    subtarget: str = Field(
        ...,
        description="OpenWrt subtarget (e.g. 64, generic)",
        pattern=IDENTIFIER_PATTERN,
        max_length=64,
    )
    profile: str = Field(
        ...,
        description="Device profile within the target/subtarget pair",
        pattern=IDENTIFIER_PATTERN,
        max_length=128,
    )
    release: str = Field(
        "main",
        description="Release identifier used in the image tag",
        pattern=IDENTIFIER_PATTERN,
        max_length=64,
    )
    packages: List[str] = Field(
        default_factory=lambda: list(DEFAULT_PACKAGES),
        description="Package tokens in command line order, removals prefixed with '-'",
    )
    sdk_enabled: bool = Field(True, description="Run the SDK stage")
    imagebuilder_enabled: bool = Field(True, description="Run the ImageBuilder stage")
    dry_run: bool = Field(False, description="Print the pipeline instead of building it")

    @field_validator("packages")
    @classmethod
    def validate_packages(cls, v: List[str]) -> List[str]:
        """Validate each package token."""
        for token in v:
            name = token[len(REMOVAL_MARKER):] if token.startswith(REMOVAL_MARKER) else token
            if not re.match(IDENTIFIER_PATTERN, name):
                raise ValueError(f"Invalid package name: {token}")
        return v

    @model_validator(mode="after")
    def validate_stage_toggles(self) -> "PipelineArguments":
        """Validate that at least one stage stays enabled."""
        if not self.sdk_enabled and not self.imagebuilder_enabled:
            raise ValueError("At least one of the SDK and ImageBuilder stages must be enabled")
        return self

    def to_command(self) -> BuildPipelineCommand:
        """Map to the BuildPipeline command."""
        tokens = tuple(
            PackageToken(token[len(REMOVAL_MARKER):], removal=True)
            if token.startswith(REMOVAL_MARKER)
            else PackageToken(token)
            for token in self.packages
        )
        return BuildPipelineCommand(
            target=self.target,
            subtarget=self.subtarget,
            profile=self.profile,
            release=self.release,
            package_tokens=tokens,
            sdk_enabled=self.sdk_enabled,
            imagebuilder_enabled=self.imagebuilder_enabled,
            dry_run=self.dry_run,
        )
