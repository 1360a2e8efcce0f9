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

"""Command line parsing for owpib.

The grammar is ``TARGET SUBTARGET PROFILE [RELEASE] [OPTIONS...]`` where
``--install`` and ``--remove`` consume every following token up to the next
option. argparse cannot express that greedy consumption together with the
distinct error classes below, so tokens are walked by hand.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from pydantic import ValidationError

from owpib.cli.schemas import PipelineArguments
from owpib.core.pipeline.entities import PackageList
from owpib.core.pipeline.exceptions import (
    ConflictingStageToggles,
    InvalidArgument,
    MalformedOption,
    MissingArguments,
    MissingPackageArgument,
    UnexpectedArgument,
    UnknownOption,
)
from owpib.core.pipeline.value_objects import BuildRequest

OPTION_MARKER = "--"

HELP_OPTION = "--help"
NO_SDK_OPTION = "--no-sdk"
NO_IMAGEBUILDER_OPTION = "--no-imagebuilder"
INSTALL_OPTION = "--install"
REMOVE_OPTION = "--remove"
DRY_RUN_OPTION = "--dry-run"

RECOGNIZED_OPTIONS = (
    HELP_OPTION,
    NO_SDK_OPTION,
    NO_IMAGEBUILDER_OPTION,
    INSTALL_OPTION,
    REMOVE_OPTION,
    DRY_RUN_OPTION,
)

LONG_OPTION_PATTERN = r"^--[A-Za-z0-9][A-Za-z0-9-]*$"

MIN_POSITIONALS = 3
MAX_POSITIONALS = 4

USAGE = """\
Usage: owpib TARGET SUBTARGET PROFILE [RELEASE] [OPTIONS...]

Build an OpenWrt firmware image through a multi-stage container pipeline.

Arguments:
  TARGET              OpenWrt target, e.g. x86
  SUBTARGET           OpenWrt subtarget, e.g. 64
  PROFILE             device profile, e.g. generic
  RELEASE             release used in the image tag (default: main)

Options:
  --help              show this help and exit
  --no-sdk            skip the SDK stage (no custom or patched packages)
  --no-imagebuilder   skip the ImageBuilder stage (packages only)
  --install PKG...    add packages to the image
  --remove PKG...     remove packages from the image
  --dry-run           print the pipeline instead of building it
"""


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing the command line.

    Attributes:
        help_requested: True when --help was given; nothing else is parsed.
        arguments: Validated arguments, None when help was requested.
    """

    help_requested: bool
    arguments: Optional[PipelineArguments] = None


def _is_option_like(token: str) -> bool:
    return token.startswith("-")


class PipelineArgumentParser:
    """Parser turning raw tokens into validated pipeline arguments."""

    def parse(self, argv: Sequence[str]) -> ParseResult:
        """Parse the command line.

        Args:
            argv: Arguments without the program name.

        Returns:
            ParseResult with the validated arguments or the help request.

        Raises:
            MissingArguments: If fewer than three positional arguments are given.
            UnexpectedArgument: If a plain token appears where an option is expected.
            MalformedOption: If an option is not a well-formed long option.
            UnknownOption: If a long option is not recognized.
            MissingPackageArgument: If --install or --remove has no package.
            ConflictingStageToggles: If both stages are disabled.
            InvalidArgument: If a value is not an acceptable identifier.
        """
        tokens = list(argv)
        if HELP_OPTION in tokens:
            return ParseResult(help_requested=True)

        positionals = self._take_positionals(tokens)
        if len(positionals) < MIN_POSITIONALS:
            raise MissingArguments(
                f"Expected TARGET SUBTARGET PROFILE, got {len(positionals)} positional "
                f"argument(s)"
            )
        release = positionals[3] if len(positionals) == MAX_POSITIONALS else (
            BuildRequest.DEFAULT_RELEASE
        )

        packages = PackageList()
        sdk_enabled = True
        imagebuilder_enabled = True
        dry_run = False

        index = len(positionals)
        while index < len(tokens):
            option = self._classify(tokens[index])
            index += 1

            if option in (INSTALL_OPTION, REMOVE_OPTION):
                names = self._take_values(tokens, index)
                if not names:
                    raise MissingPackageArgument(f"{option} requires at least one package name")
                index += len(names)
                self._accumulate(packages, option, names)
            elif option == NO_SDK_OPTION:
                if not imagebuilder_enabled:
                    raise ConflictingStageToggles(
                        f"{NO_SDK_OPTION} cannot be combined with {NO_IMAGEBUILDER_OPTION}"
                    )
                sdk_enabled = False
            elif option == NO_IMAGEBUILDER_OPTION:
                if not sdk_enabled:
                    raise ConflictingStageToggles(
                        f"{NO_IMAGEBUILDER_OPTION} cannot be combined with {NO_SDK_OPTION}"
                    )
                imagebuilder_enabled = False
            elif option == DRY_RUN_OPTION:
                dry_run = True

        try:
            arguments = PipelineArguments(
                target=positionals[0],
                subtarget=positionals[1],
                profile=positionals[2],
                release=release,
                packages=[str(token) for token in packages],
                sdk_enabled=sdk_enabled,
                imagebuilder_enabled=imagebuilder_enabled,
                dry_run=dry_run,
            )
        except ValidationError as exc:
            raise InvalidArgument(self._describe(exc)) from exc
        return ParseResult(help_requested=False, arguments=arguments)

    def _take_positionals(self, tokens: List[str]) -> List[str]:
        """Leading plain tokens, at most four."""
        positionals: List[str] = []
        for token in tokens[:MAX_POSITIONALS]:
            if _is_option_like(token):
                break
            positionals.append(token)
        return positionals

    def _take_values(self, tokens: List[str], start: int) -> List[str]:
        """Plain tokens from ``start`` up to the next option."""
        values: List[str] = []
        for token in tokens[start:]:
            if _is_option_like(token):
                break
            values.append(token)
        return values

    def _classify(self, token: str) -> str:
        """Return the recognized option a token names."""
        if not _is_option_like(token):
            raise UnexpectedArgument(f"Unexpected argument: {token}")
        if not re.match(LONG_OPTION_PATTERN, token):
            raise MalformedOption(f"Malformed option: {token} (options start with {OPTION_MARKER})")
        if token not in RECOGNIZED_OPTIONS:
            raise UnknownOption(f"Unknown option: {token}")
        return token

    def _accumulate(self, packages: PackageList, option: str, names: List[str]) -> None:
        try:
            for name in names:
                if option == INSTALL_OPTION:
                    packages.install(name)
                else:
                    packages.remove(name)
        except ValueError as exc:
            raise InvalidArgument(str(exc)) from exc

    def _describe(self, exc: ValidationError) -> str:
        """First validation error as a one-line message."""
        error = exc.errors()[0]
        location = ".".join(str(part) for part in error.get("loc", ()))
        if location:
            return f"Invalid {location}: {error.get('msg', 'invalid value')}"
        return str(error.get("msg", "invalid value"))
