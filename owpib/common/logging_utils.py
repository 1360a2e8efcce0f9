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

"""Secure logging utilities for owpib.

Log records go to standard error; standard output is reserved for the
pipeline document printed in dry-run mode. Credentials embedded in registry
URLs or engine arguments are redacted before a message reaches a handler.
"""

import logging
import os
import re
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_LEVEL = "INFO"

# ---------------------------------------------------------------------------
# Sensitive-data redaction patterns
# ---------------------------------------------------------------------------
_SENSITIVE_PATTERNS = [
    # user:password@host in URLs
    (re.compile(r"(?i)\b([a-z][a-z0-9+.-]*://)[^\s/@:]+:[^\s/@]+@"), r"\1<REDACTED>@"),
    # password= or passwd= or secret= or token= values
    (re.compile(
        r"(?i)((?:password|passwd|secret|api_key|apikey|token|auth_token)"
        r"\s*[=:]\s*)[^\s,;\"']+"
    ), r"\1<REDACTED>"),
]


def _sanitize_message(message: str) -> str:
    """Redact sensitive data from a log message."""
    for pattern, replacement in _SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for the command line tool.

    Args:
        level: Log level name. Defaults to OWPIB_LOG_LEVEL or INFO.
    """
    level_name = (level or os.getenv("OWPIB_LOG_LEVEL", DEFAULT_LOG_LEVEL)).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def log_secure_info(level: str, message: str, detail: Optional[str] = None) -> None:
    """Log information securely.

    Sensitive data is redacted from the final message, including the
    optional detail (typically a command line or image reference).

    Args:
        level: Log level ('info', 'warning', 'error', 'debug', 'critical')
        message: Log message
        detail: Optional detail appended after the message
    """
    logger = logging.getLogger(__name__)

    if detail:
        log_message = f"{message}: {detail}"
    else:
        log_message = message

    log_func = getattr(logger, level, logger.info)
    log_func(_sanitize_message(log_message))
