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

"""Conditional rendering of pipeline sections.

Every optional part of the pipeline is produced with :func:`render_if` and
collected with :func:`present`, so a disabled stage or copy leaves nothing
behind in the document.
"""

from typing import Callable, Iterable, Optional, Sequence, Tuple, Union

from owpib.core.pipeline.value_objects import ShellStep

TextProducer = Union[str, Callable[[], str], None]

RUN_SEPARATOR = " \\\n    && "


def render_if(condition: bool, text: TextProducer = None, content: str = "") -> Optional[str]:
    """Return a section when ``condition`` holds, otherwise ``None``.

    Args:
        condition: Whether the section is part of the document.
        text: Section text, or a callable producing it. The callable is only
            invoked when the condition holds.
        content: Pass-through content used when no text is supplied.

    Returns:
        The section text, or None when the condition is false.
    """
    if not condition:
        return None
    if text is None:
        return content
    if callable(text):
        return text()
    return text


def present(fragments: Iterable[Optional[str]]) -> Tuple[str, ...]:
    """Keep the fragments that were rendered, in order."""
    return tuple(fragment for fragment in fragments if fragment)


def run_directive(steps: Sequence[Union[ShellStep, str]]) -> str:
    """Join shell steps into a single RUN directive."""
    commands = [step.render() if isinstance(step, ShellStep) else step for step in steps]
    return "RUN " + RUN_SEPARATOR.join(commands)
