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

"""Repository interfaces for the Pipeline module."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path

from owpib.core.pipeline.entities import DiscoverySnapshot


class FeedDiscoveryRepository(ABC):
    """Repository enumerating the custom feed and patches roots."""

    @abstractmethod
    def discover(self) -> DiscoverySnapshot:
        """Enumerate custom feed entries and patch files.

        Returns:
            Immutable snapshot of what was found. Missing roots yield
            empty collections.

        Raises:
            DiscoveryError: If a root exists but cannot be enumerated.
        """
        ...


class ContainerEngine(ABC):
    """Port for the external container engine."""

    @abstractmethod
    def build(self, document: str, output_dir: Path, context_dir: Path) -> int:
        """Run a build from a pipeline document.

        Args:
            document: Pipeline document supplied on standard input.
            output_dir: Destination for the exported artifacts.
            context_dir: Build context directory.

        Returns:
            Exit status reported by the engine.

        Raises:
            EngineError: If the engine cannot be started.
        """
        ...


class Clock(ABC):  # pylint: disable=R0903
    """Source of the current time."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current local time."""
        ...
