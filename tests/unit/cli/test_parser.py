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

"""Unit tests for the command line parser."""

# pylint: disable=redefined-outer-name

import pytest

from owpib.cli.parser import PipelineArgumentParser
from owpib.core.pipeline.exceptions import (
    ConflictingStageToggles,
    InvalidArgument,
    MalformedOption,
    MissingArguments,
    MissingPackageArgument,
    UnexpectedArgument,
    UnknownOption,
    UsageError,
)


@pytest.fixture
def parser():
    """Fresh parser."""
    return PipelineArgumentParser()


def _parse(parser, line):
    return parser.parse(line.split()).arguments


class TestPositionals:
    """Tests for positional argument handling."""

    def test_three_positionals(self, parser):
        """Target, subtarget and profile with the default release and packages."""
        arguments = _parse(parser, "x86 64 generic")
        assert (arguments.target, arguments.subtarget, arguments.profile) == (
            "x86", "64", "generic"
        )
        assert arguments.release == "main"
        assert arguments.packages == ["luci", "luci-ssl"]
        assert arguments.sdk_enabled and arguments.imagebuilder_enabled
        assert not arguments.dry_run

    def test_release(self, parser):
        """A fourth plain token is the release."""
        assert _parse(parser, "x86 64 generic 23.05.3").release == "23.05.3"

    def test_option_in_fourth_position(self, parser):
        """A fourth token starting with -- is an option, not the release."""
        arguments = _parse(parser, "x86 64 generic --dry-run")
        assert arguments.release == "main"
        assert arguments.dry_run

    @pytest.mark.parametrize("line", ["", "x86", "x86 64", "x86 64 --dry-run generic"])
    def test_missing_arguments(self, parser, line):
        """Fewer than three leading positionals is a usage error."""
        with pytest.raises(MissingArguments):
            parser.parse(line.split())

    def test_fifth_plain_token(self, parser):
        """A plain token after the release is unexpected."""
        with pytest.raises(UnexpectedArgument, match="extra"):
            parser.parse("x86 64 generic main extra".split())

    def test_invalid_target(self, parser):
        """Positionals must be shell-safe identifiers."""
        with pytest.raises(InvalidArgument, match="target"):
            parser.parse(["x86;reboot", "64", "generic"])


class TestHelp:
    """Tests for --help."""

    def test_help_alone(self, parser):
        """--help alone is a help request."""
        result = parser.parse(["--help"])
        assert result.help_requested
        assert result.arguments is None

    def test_help_wins_over_everything(self, parser):
        """--help is honoured even with otherwise invalid input."""
        assert parser.parse(["x86", "--bogus", "-x", "--help", "--install"]).help_requested


class TestOptions:
    """Tests for option classification."""

    @pytest.mark.parametrize("token", ["-x", "--", "-dry-run", "--Bad_Option"])
    def test_malformed(self, parser, token):
        """Tokens that are not well-formed long options are malformed."""
        with pytest.raises(MalformedOption):
            parser.parse(["x86", "64", "generic", token])

    def test_unknown(self, parser):
        """Well-formed but unrecognized options are unknown."""
        with pytest.raises(UnknownOption, match="--verbose"):
            parser.parse(["x86", "64", "generic", "--verbose"])

    def test_errors_are_usage_errors(self, parser):
        """All parser errors share the UsageError base."""
        with pytest.raises(UsageError):
            parser.parse(["x86", "64", "generic", "--verbose"])


class TestPackages:
    """Tests for --install and --remove."""

    def test_install_consumes_until_next_option(self, parser):
        """--install takes every plain token up to the next option."""
        arguments = _parse(parser, "x86 64 generic --install tcpdump htop --dry-run")
        assert arguments.packages == ["luci", "luci-ssl", "tcpdump", "htop"]
        assert arguments.dry_run

    def test_command_line_order(self, parser):
        """Installs and removals keep command line order."""
        arguments = _parse(
            parser, "x86 64 generic --remove dnsmasq --install dnsmasq-full --remove luci-ssl"
        )
        assert arguments.packages == ["luci", "luci-ssl", "-dnsmasq", "dnsmasq-full", "-luci-ssl"]
        assert len(arguments.packages) == 2 + 3

    def test_repeated_install(self, parser):
        """Repeated options keep appending."""
        arguments = _parse(parser, "x86 64 generic --install a --install b")
        assert arguments.packages == ["luci", "luci-ssl", "a", "b"]

    @pytest.mark.parametrize("line", [
        "x86 64 generic --install",
        "x86 64 generic --remove --dry-run",
    ])
    def test_missing_package(self, parser, line):
        """--install and --remove need at least one package."""
        with pytest.raises(MissingPackageArgument):
            parser.parse(line.split())

    def test_invalid_package(self, parser):
        """Package names must be shell-safe identifiers."""
        with pytest.raises(InvalidArgument):
            parser.parse(["x86", "64", "generic", "--install", "pkg;rm"])


class TestStageToggles:
    """Tests for --no-sdk and --no-imagebuilder."""

    def test_no_sdk(self, parser):
        """--no-sdk disables the SDK stage only."""
        arguments = _parse(parser, "x86 64 generic --no-sdk")
        assert not arguments.sdk_enabled
        assert arguments.imagebuilder_enabled

    def test_no_imagebuilder(self, parser):
        """--no-imagebuilder disables the ImageBuilder stage only."""
        arguments = _parse(parser, "x86 64 generic --no-imagebuilder")
        assert arguments.sdk_enabled
        assert not arguments.imagebuilder_enabled

    @pytest.mark.parametrize("flags", [
        ["--no-sdk", "--no-imagebuilder"],
        ["--no-imagebuilder", "--no-sdk"],
    ])
    def test_both_disabled(self, parser, flags):
        """Disabling both stages fails regardless of order."""
        with pytest.raises(ConflictingStageToggles):
            parser.parse(["x86", "64", "generic"] + flags)

    def test_repeated_toggle_allowed(self, parser):
        """Repeating the same toggle is harmless."""
        assert not _parse(parser, "x86 64 generic --no-sdk --no-sdk").sdk_enabled


class TestToCommand:
    """Tests for mapping arguments to the command."""

    def test_command(self, parser):
        """Arguments map to a BuildPipelineCommand with package tokens."""
        command = _parse(parser, "x86 64 generic 23.05 --remove luci-ssl --dry-run").to_command()
        assert command.release == "23.05"
        assert command.dry_run
        assert [str(token) for token in command.package_tokens] == ["luci", "luci-ssl", "-luci-ssl"]
        assert command.package_tokens[-1].removal
