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


import sys
from dataclasses import dataclass

from colorama import Fore, Style


@dataclass(frozen=True)
class Theme:
    name: str
    styles: dict[str, str]
    reset: str

    def apply(self, key: str, text: str) -> str:
        prefix = self.styles.get(key, "")
        if not prefix:
            return text
        return f"{prefix}{text}{self.reset}"


CLASSIC = Theme(
    name="classic",
    reset=Style.RESET_ALL,
    styles={
        "hunk_id": Fore.YELLOW + Style.BRIGHT,
        "file": Fore.CYAN,
        "stats": Fore.WHITE + Style.DIM,
        "muted": Fore.WHITE + Style.DIM,
        "blame": Fore.MAGENTA,
        "diff_hunk": Fore.BLUE,
        "diff_removed": Fore.RED,
        "diff_added": Fore.GREEN,
        "diff_context": "",
    },
)

PLAIN = Theme(name="plain", reset="", styles={})


def select_theme(color: str, stream=None) -> Theme:
    """Pick the theme for a ``color`` setting of auto, always or never."""
    if color == "always":
        return CLASSIC
    if color == "never":
        return PLAIN
    stream = stream if stream is not None else sys.stdout
    isatty = getattr(stream, "isatty", None)
    return CLASSIC if isatty is not None and isatty() else PLAIN
