"""Word-list check for labels that would read as insults in a caption.

The built-in list is only a seed of the worst slurs and insults. Deployments
are expected to supply a full list through ``BLOCKLIST_FILE`` (one term per
line); it is merged with the built-in terms at startup.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"[a-z']+")

# Seed list; deployments extend it with a blocklist file (one term per line).
DEFAULT_BLOCKLIST: frozenset[str] = frozenset({
    "idiot",
    "moron",
    "imbecile",
    "cretin",
    "retard",
    "retarded",
    "midget",
    "dwarf",
    "cripple",
    "lunatic",
    "psycho",
    "freak",
    "fatso",
    "savage",
    "slave",
    "gypsy",
    "tranny",
    "whore",
    "slut",
    "bitch",
    "bastard",
    "junkie",
    "nazi",
})


class WordListCheck:
    """Flags a label if the whole label or any word in it is blocklisted.

    Callable so it can stand in anywhere a ``Callable[[str], bool]`` check is
    expected. Returns True for labels that should be avoided.
    """

    def __init__(self, terms: Iterable[str] = DEFAULT_BLOCKLIST) -> None:
        self._terms = frozenset(t.strip().lower() for t in terms if t.strip())

    def __call__(self, label: str) -> bool:
        lowered = label.lower().strip()
        if lowered in self._terms:
            return True
        return any(word in self._terms for word in _WORD_RE.findall(lowered))

    def __len__(self) -> int:
        return len(self._terms)

    @classmethod
    def with_file(cls, path: str | Path | None) -> WordListCheck:
        """Default list plus the terms in ``path`` if given."""
        if not path:
            return cls()
        extra = Path(path).read_text(encoding="utf-8").splitlines()
        check = cls([*DEFAULT_BLOCKLIST, *extra])
        logger.info("Loaded %d blocklist terms (%s)", len(check), path)
        return check
