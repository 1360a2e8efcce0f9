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

"""Unit tests for FilesystemFeedDiscoveryRepository."""

import os
import sys

import pytest

from owpib.core.pipeline.exceptions import DiscoveryError
from owpib.infra.repositories import FilesystemFeedDiscoveryRepository


def _touch(path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("--- a\n+++ b\n", encoding="utf-8")


class TestFilesystemFeedDiscoveryRepository:
    """Tests for FilesystemFeedDiscoveryRepository."""

    def test_missing_roots(self, tmp_path):
        """Missing roots yield an empty snapshot."""
        repo = FilesystemFeedDiscoveryRepository(tmp_path / "custom-feed", tmp_path / "patches")
        snapshot = repo.discover()
        assert snapshot.custom_feed == ()
        assert not snapshot.patches

    def test_custom_feed_entries_sorted(self, tmp_path):
        """Top-level directories are entries, sorted by name."""
        root = tmp_path / "custom-feed"
        (root / "zeta" / "files").mkdir(parents=True)
        (root / "alpha").mkdir()
        (root / "README.md").write_text("docs", encoding="utf-8")
        (root / ".git").mkdir()

        snapshot = FilesystemFeedDiscoveryRepository(root, tmp_path / "patches").discover()
        assert [str(entry) for entry in snapshot.custom_feed] == ["alpha", "zeta"]

    def test_patches_in_application_order(self, tmp_path):
        """Patches are found recursively and ordered by category then path."""
        root = tmp_path / "patches"
        _touch(root / "routing" / "b.patch")
        _touch(root / "base" / "a.patch")
        _touch(root / "luci" / "c.patch")
        _touch(root / "packages" / "net" / "netbird_fix.patch")
        _touch(root / "packages" / "net" / "notes.txt")

        snapshot = FilesystemFeedDiscoveryRepository(tmp_path / "custom-feed", root).discover()
        assert [str(patch) for patch in snapshot.patches] == [
            "base/a.patch",
            "luci/c.patch",
            "packages/net/netbird_fix.patch",
            "routing/b.patch",
        ]

    def test_unknown_category_ignored(self, tmp_path):
        """Directories outside the five categories are not scanned."""
        root = tmp_path / "patches"
        _touch(root / "kernel" / "x.patch")
        snapshot = FilesystemFeedDiscoveryRepository(tmp_path / "custom-feed", root).discover()
        assert not snapshot.patches

    def test_root_is_file_raises(self, tmp_path):
        """A root that is not a directory is an error."""
        root = tmp_path / "custom-feed"
        root.write_text("not a directory", encoding="utf-8")
        with pytest.raises(DiscoveryError, match="Not a directory"):
            FilesystemFeedDiscoveryRepository(root, tmp_path / "patches").discover()

    def test_invalid_entry_name_raises(self, tmp_path):
        """Entry names that are not shell-safe identifiers are an error."""
        root = tmp_path / "custom-feed"
        (root / "bad name").mkdir(parents=True)
        with pytest.raises(DiscoveryError, match="Invalid custom feed entry"):
            FilesystemFeedDiscoveryRepository(root, tmp_path / "patches").discover()

    @pytest.mark.parametrize("filename", ["my fix.patch", "_lead.patch", "x$(reboot).patch"])
    def test_shell_unsafe_patch_name_raises(self, tmp_path, filename):
        """Patch names that would break the generated shell commands are an error."""
        root = tmp_path / "patches"
        _touch(root / "base" / "ok.patch")
        _touch(root / "base" / filename)
        with pytest.raises(DiscoveryError, match="Invalid patch"):
            FilesystemFeedDiscoveryRepository(tmp_path / "custom-feed", root).discover()

    @pytest.mark.skipif(
        sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="permission bits are not enforced",
    )
    def test_unreadable_category_raises(self, tmp_path):
        """A category directory that cannot be listed is an error."""
        root = tmp_path / "patches"
        category = root / "base"
        _touch(category / "a.patch")
        category.chmod(0)
        try:
            with pytest.raises(DiscoveryError, match="Failed to read patches"):
                FilesystemFeedDiscoveryRepository(tmp_path / "custom-feed", root).discover()
        finally:
            category.chmod(0o755)
