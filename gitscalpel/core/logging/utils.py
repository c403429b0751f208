# -----------------------------------------------------------------------------
# gitscalpel - Dual Licensed Software
# Copyright (c) 2025 Adem Can
#
# This file is part of gitscalpel.
#
# gitscalpel is available under a dual-license:
#   1. AGPLv3 (Affero General Public License v3)
#      - See LICENSE.txt and LICENSE-AGPL.txt
#      - Online: https://www.gnu.org/licenses/agpl-3.0.html
#
#   2. Commercial License
#      - For proprietary or revenue-generating use,
#        including SaaS, embedding in closed-source software,
#        or avoiding AGPL obligations.
#      - See LICENSE.txt and COMMERCIAL-LICENSE.txt
#      - Contact: ademfcan@gmail.com
#
# By using this file, you agree to the terms of one of the two licenses above.
# -----------------------------------------------------------------------------


import contextlib
from time import perf_counter

from loguru import logger


@contextlib.contextmanager
def time_block(block_name: str):
    """Log how long the wrapped block took, at debug level."""
    logger.debug(f"{block_name}: start")
    started = perf_counter()
    try:
        yield
    finally:
        elapsed_ms = int((perf_counter() - started) * 1000)
        logger.debug(f"{block_name}: done in {elapsed_ms} ms")


def log_hunks(process_step: str, identified) -> None:
    files = {item.hunk.display_file for item in identified}
    logger.debug(
        "{process_step}: hunks={count} files={files}",
        process_step=process_step,
        count=len(identified),
        files=len(files),
    )
