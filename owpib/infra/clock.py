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

"""Infrastructure layer for obtaining the current time."""

from datetime import datetime

from owpib.core.pipeline.repositories import Clock


class SystemClock(Clock):  # pylint: disable=R0903
    """Clock backed by the host's local time."""

    def now(self) -> datetime:
        """Return the current local time.

        Returns:
            datetime: Naive local time, as used in output directory names.
        """
        return datetime.now()
