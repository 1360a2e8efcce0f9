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

"""BuildPipeline response DTO."""

from dataclasses import dataclass
from typing import List, Optional

STATUS_PRINTED = "printed"
STATUS_SUCCEEDED = "succeeded"


@dataclass(frozen=True)
class BuildPipelineResponse:
    """Response DTO for a pipeline invocation.

    Attributes:
        status: ``printed`` for dry runs, ``succeeded`` for finished builds.
        tag: Image tag of the upstream SDK and ImageBuilder images.
        stages: Stage names in document order.
        document: Rendered pipeline document.
        output_dir: Directory receiving the artifacts, None for dry runs.
        exit_code: Exit status of the invocation.
    """

    status: str
    tag: str
    stages: List[str]
    document: str
    output_dir: Optional[str] = None
    exit_code: int = 0
