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

"""owpib command line entry point."""

import logging
import sys
from typing import Optional, Sequence

from owpib.cli.parser import USAGE, PipelineArgumentParser
from owpib.common.logging_utils import configure_logging, log_secure_info
from owpib.container import container
from owpib.core.pipeline.exceptions import (
    EngineError,
    MissingArguments,
    PipelineDomainError,
    UsageError,
)
from owpib.orchestrator.pipeline.dtos import STATUS_PRINTED

logger = logging.getLogger(__name__)

USAGE_EXIT_CODE = 1
FAILURE_EXIT_CODE = 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run owpib and return the process exit status.

    Args:
        argv: Arguments without the program name. Defaults to sys.argv[1:].

    Returns:
        0 on success or help, 1 on usage and configuration errors, the
        engine's own exit status when the container build fails.
    """
    configure_logging()
    if argv is None:
        argv = sys.argv[1:]

    try:
        result = PipelineArgumentParser().parse(argv)
    except MissingArguments as exc:
        print(f"owpib: {exc.message}", file=sys.stderr)
        print(USAGE, file=sys.stderr, end="")
        return USAGE_EXIT_CODE
    except UsageError as exc:
        print(f"owpib: {exc.message}", file=sys.stderr)
        return USAGE_EXIT_CODE

    if result.help_requested:
        print(USAGE, end="")
        return 0

    command = result.arguments.to_command()

    try:
        use_case = container.build_pipeline_use_case()
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return FAILURE_EXIT_CODE

    try:
        response = use_case.execute(command)
    except EngineError as exc:
        logger.error("%s", exc.message)
        return exc.exit_code
    except UsageError as exc:
        print(f"owpib: {exc.message}", file=sys.stderr)
        return USAGE_EXIT_CODE
    except PipelineDomainError as exc:
        logger.error("%s", exc.message)
        return FAILURE_EXIT_CODE

    if response.status != STATUS_PRINTED:
        log_secure_info("info", "Build finished for", response.tag)
    return response.exit_code


if __name__ == "__main__":
    sys.exit(main())
