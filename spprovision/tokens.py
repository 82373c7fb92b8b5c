"""
Token replacement for field schema XML.

Lookup fields must reference the target list by its GUID, which is unknown
until the list has been provisioned. Field definitions therefore carry
``{listid:List Title}`` tokens that are resolved against the lists created
earlier in the same run.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"\{([a-z]*):([ÆØÅæøåA-Za-z0-9 _\-]*)\}")


@dataclass(frozen=True)
class ProvisionedList:
    """Identifier and title of a list seen during provisioning."""

    title: str
    id: str


class TokenReplacer:
    """Resolves ``{type:value}`` tokens against provisioned lists."""

    def __init__(self) -> None:
        self._lists: list[ProvisionedList] = []

    @property
    def lists(self) -> tuple[ProvisionedList, ...]:
        return tuple(self._lists)

    def remember(self, provisioned: ProvisionedList) -> None:
        self._lists.append(provisioned)

    def replace(self, text: str) -> str:
        """Return ``text`` with every resolvable token substituted."""
        return TOKEN_PATTERN.sub(self._resolve, text)

    def _resolve(self, match: re.Match) -> str:
        token_type, value = match.group(1), match.group(2)
        if token_type == "listid":
            candidates = [lst for lst in self._lists if lst.title == value]
            # Ambiguous titles stay unresolved
            if len(candidates) == 1:
                return candidates[0].id
            logger.warning(
                f"Could not resolve token {match.group(0)}: "
                f"{len(candidates)} list(s) titled '{value}'"
            )
        return match.group(0)
