from __future__ import annotations

import logging
import re
from typing import Mapping

from confstack.keys import normalize
from confstack.store import ConfigStore

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\$\{(.+?)\}")


def substitute(value: str, lookup: Mapping[str, str]) -> str:
    """
    Replace every `${name}` token found in `lookup` (normalized keys).

    Replacement text is inserted verbatim and never re-scanned. Unknown tokens are kept.
    """

    def _replace(match: re.Match[str]) -> str:
        resolved = lookup.get(normalize(match.group(1)))
        return match.group(0) if resolved is None else resolved

    return PLACEHOLDER_PATTERN.sub(_replace, value)


class PlaceholderEngine:
    def resolve_all(self, store: ConfigStore) -> int:
        """Resolve placeholders in every store value against one snapshot. Returns the number of values changed."""
        snapshot = store.snapshot()
        changed = 0
        for normalized_key, value in snapshot.items():
            if "${" not in value:
                continue
            resolved = substitute(value, snapshot)
            if resolved != value:
                store.replace_value(normalized_key, resolved)
                changed += 1
        logger.debug("placeholders.resolved changed=%d total=%d", changed, len(snapshot))
        return changed
