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

"""Pipeline domain exceptions."""


class PipelineDomainError(Exception):
    """Base exception for pipeline domain errors."""

    exit_code: int = 1

    def __init__(self, message: str):
        """Initialize domain error.

        Args:
            message: Error message.
        """
        super().__init__(message)
        self.message = message


class UsageError(PipelineDomainError):
    """Raised when the command line cannot be turned into a build request."""


class MissingArguments(UsageError):
    """Raised when fewer than three positional arguments are given."""


class UnexpectedArgument(UsageError):
    """Raised when a plain token appears where an option is expected."""


class MalformedOption(UsageError):
    """Raised when an option token is not a well-formed long option."""


class UnknownOption(UsageError):
    """Raised when a well-formed long option is not recognized."""


class MissingPackageArgument(UsageError):
    """Raised when --install or --remove is not followed by a package."""


class ConflictingStageToggles(UsageError):
    """Raised when both the SDK and the ImageBuilder stage are disabled."""


class InvalidArgument(UsageError):
    """Raised when an argument value is not an acceptable identifier."""


class DiscoveryError(PipelineDomainError):
    """Raised when a custom feed or patches root cannot be enumerated."""


class EngineError(PipelineDomainError):
    """Raised when the container engine reports a failed build."""

    def __init__(self, message: str, exit_code: int):
        """Initialize engine error.

        Args:
            message: Error message.
            exit_code: Exit status reported by the container engine.
        """
        super().__init__(message)
        self.exit_code = exit_code
