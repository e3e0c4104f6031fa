# feedbuilder/feed/conditions.py
"""
Update-condition derivation.

For each catalog entry the builder emits an ordered list of conditions
the update client evaluates to decide whether to fetch the file.

The existence condition always comes first with type="or", so a missing
file always qualifies. The comparisons follow in a fixed order (version,
size, date, hash), each enabled by its own flag. Their `type` attribute
depends on whether an earlier comparison was already emitted:

    condition   first comparison   after a comparison
    version     or                 or
    size        not                or-not
    date        (no type)          or
    checksum    not                or-not

The combination must be reproduced exactly; the client reads it as a
boolean chain.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from feedbuilder.config.schema import ComparisonPolicy
from feedbuilder.feed.catalog import FileCatalogEntry, compute_content_hash
from feedbuilder.logging import get_logger
from feedbuilder.logging.tags import CONDITIONS

logger = get_logger(__name__)

EXISTS = "FileExistsCondition"
VERSION = "FileVersionCondition"
SIZE = "FileSizeCondition"
DATE = "FileDateCondition"
CHECKSUM = "FileChecksumCondition"

CHECKSUM_TYPE = "sha256"


@dataclass(frozen=True)
class Condition:
    """One condition element: its tag and attributes in output order."""

    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)

    @property
    def type(self) -> Optional[str]:
        return self.attributes.get("type")


def has_comparisons(conditions: Sequence[Condition]) -> bool:
    """True when anything beyond the existence condition was emitted."""
    return any(c.tag != EXISTS for c in conditions)


class ConditionBuilder:
    """
    Builds the condition list for an entry under a fixed policy.

    Usage:
        builder = ConditionBuilder(settings.policy)
        conditions = builder.build(entry)
    """

    def __init__(self, policy: ComparisonPolicy) -> None:
        self._policy = policy

    @property
    def policy(self) -> ComparisonPolicy:
        return self._policy

    def build(self, entry: FileCatalogEntry) -> List[Condition]:
        policy = self._policy
        conditions = [Condition(EXISTS, {"type": "or"})]
        has_prior = False

        if policy.compare_version and entry.file_version:
            conditions.append(
                Condition(
                    VERSION,
                    {"type": "or", "what": "below", "version": entry.file_version},
                )
            )
            has_prior = True

        if policy.compare_size:
            conditions.append(
                Condition(
                    SIZE,
                    {
                        "type": "or-not" if has_prior else "not",
                        "what": "is",
                        "size": str(entry.size_bytes),
                    },
                )
            )
            has_prior = True

        if policy.compare_date:
            attributes = {"type": "or"} if has_prior else {}
            attributes["what"] = "older"
            attributes["timestamp"] = str(entry.last_modified)
            conditions.append(Condition(DATE, attributes))
            has_prior = True

        if policy.compare_hash:
            # entries scanned without hashing are hashed here
            checksum = entry.content_hash or compute_content_hash(entry.absolute_path)
            conditions.append(
                Condition(
                    CHECKSUM,
                    {
                        "type": "or-not" if has_prior else "not",
                        "checksumType": CHECKSUM_TYPE,
                        "checksum": checksum,
                    },
                )
            )

        logger.debug(
            f"{CONDITIONS} {entry.relative_path}: "
            + ", ".join(f"{c.tag}({c.type or '-'})" for c in conditions)
        )
        return conditions
