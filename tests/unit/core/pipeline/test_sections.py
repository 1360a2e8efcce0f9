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

"""Unit tests for conditional section rendering."""

from owpib.core.pipeline.sections import present, render_if, run_directive
from owpib.core.pipeline.value_objects import ShellStep


class TestRenderIf:
    """Tests for render_if."""

    def test_false_condition_renders_nothing(self):
        """A false condition yields None."""
        assert render_if(False, "COPY a b") is None

    def test_true_condition_renders_text(self):
        """A true condition yields the text."""
        assert render_if(True, "COPY a b") == "COPY a b"

    def test_producer_called_only_when_true(self):
        """Text producers are evaluated lazily."""
        calls = []

        def producer():
            calls.append(1)
            return "RUN x"

        assert render_if(False, producer) is None
        assert not calls
        assert render_if(True, producer) == "RUN x"
        assert calls == [1]

    def test_pass_through_content(self):
        """Without text the content is passed through."""
        assert render_if(True, content="body") == "body"

    def test_empty_content_does_not_error(self):
        """Empty content is a valid result."""
        assert render_if(True) == ""


class TestPresent:
    """Tests for present."""

    def test_filters_missing_fragments(self):
        """None and empty fragments leave no trace."""
        assert present(["a", None, "", "b"]) == ("a", "b")


class TestRunDirective:
    """Tests for run_directive."""

    def test_single_step(self):
        """A single step becomes a one-line RUN."""
        assert run_directive(["./setup.sh"]) == "RUN ./setup.sh"

    def test_steps_are_chained(self):
        """Steps are chained with && on continuation lines."""
        assert run_directive(["a", ShellStep("b", best_effort=True)]) == (
            "RUN a \\\n    && (b || true)"
        )
