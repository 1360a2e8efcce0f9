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

"""Infrastructure adapter for running pipeline documents via docker buildx."""

import logging
import subprocess
from pathlib import Path
from typing import List, Sequence

from owpib.common.logging_utils import log_secure_info
from owpib.core.pipeline.exceptions import EngineError
from owpib.core.pipeline.repositories import ContainerEngine

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND_EXIT_CODE = 127
SIGNAL_EXIT_CODE_BASE = 128


class BuildxExecutorAdapter(ContainerEngine):
    """Infrastructure adapter for ``docker buildx build``.

    The pipeline document is streamed on standard input (``-f -``) and the
    export stage is written to a local output directory. Build output is
    not captured; it goes straight to the terminal in plain progress mode.
    """

    def __init__(self, command: Sequence[str] = ("docker", "buildx", "build")) -> None:
        """Initialize buildx executor adapter.

        Args:
            command: Engine command preceding the build arguments.
        """
        self._command = list(command)

    def build_command(self, output_dir: Path, context_dir: Path) -> List[str]:
        """Return the full engine command line."""
        return self._command + [
            "--progress=plain",
            "--output",
            f"type=local,dest={output_dir}",
            "-f",
            "-",
            str(context_dir),
        ]

    def build(self, document: str, output_dir: Path, context_dir: Path) -> int:
        """Run the build and return the engine exit status.

        Args:
            document: Pipeline document supplied on standard input.
            output_dir: Destination for the exported artifacts.
            context_dir: Build context directory.

        Returns:
            Exit status reported by the engine, or 128+N when the engine
            was killed by signal N.

        Raises:
            EngineError: If the engine executable cannot be started.
        """
        cmd = self.build_command(output_dir, context_dir)
        log_secure_info("info", "Executing container build", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                input=document,
                text=True,
                check=False,
                shell=False,
            )
        except FileNotFoundError as exc:
            raise EngineError(
                f"Container engine not found: {self._command[0]}",
                exit_code=COMMAND_NOT_FOUND_EXIT_CODE,
            ) from exc
        except OSError as exc:
            raise EngineError(
                f"Failed to start container engine: {exc}",
                exit_code=COMMAND_NOT_FOUND_EXIT_CODE,
            ) from exc

        exit_code = result.returncode
        if exit_code < 0:
            # Killed by signal N; report it the way a shell does.
            logger.warning("Container build terminated by signal %d", -exit_code)
            exit_code = SIGNAL_EXIT_CODE_BASE - exit_code
        logger.info("Container build exited with status %d", exit_code)
        return exit_code
