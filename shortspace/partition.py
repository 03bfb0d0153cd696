"""Partition label derivation.

Every record lives in a space (partition) named after the year it was
created. Years map to labels with bijective base-26 over ``a``-``z``
counted from an epoch year: 2023 is ``a``, 2048 is ``z``, 2049 is ``aa``.
"""

import re
import string
from datetime import datetime, timezone
from typing import Optional

from .errors import InvalidInputError, PartitionLabelError

DEFAULT_EPOCH_YEAR = 2023

LABEL_ALPHABET = string.ascii_lowercase

# Labels name files on disk, so keep them to a safe character set
_PATH_LABEL_RE = re.compile(r"[A-Za-z0-9_-]{1,32}")


def label_for_year(year: int, epoch_year: int = DEFAULT_EPOCH_YEAR) -> str:
    """Return the partition label for a calendar year.

    Args:
        year: Calendar year
        epoch_year: Year that maps to ``a``

    Returns:
        Non-empty lowercase label

    Raises:
        PartitionLabelError: If the year is before the epoch year
    """
    offset = year - epoch_year
    if offset < 0:
        raise PartitionLabelError(
            f"Year {year} is before the partition epoch {epoch_year}"
        )

    base = len(LABEL_ALPHABET)
    n = offset + 1
    chars = []
    while n > 0:
        n, remainder = divmod(n - 1, base)
        chars.append(LABEL_ALPHABET[remainder])

    return "".join(reversed(chars))


def year_for_label(label: str, epoch_year: int = DEFAULT_EPOCH_YEAR) -> int:
    """Return the calendar year a derived label stands for.

    Raises:
        PartitionLabelError: If the label is not a derived year label
    """
    if not label or any(c not in LABEL_ALPHABET for c in label):
        raise PartitionLabelError(f"'{label}' is not a year label")

    base = len(LABEL_ALPHABET)
    n = 0
    for char in label:
        n = n * base + LABEL_ALPHABET.index(char) + 1

    return epoch_year + n - 1


def label_for_now(
    now: Optional[datetime] = None,
    epoch_year: int = DEFAULT_EPOCH_YEAR,
) -> str:
    """Label of the space new records go into (current UTC year)."""
    now = now or datetime.now(timezone.utc)
    return label_for_year(now.year, epoch_year)


def label_for_path(label: str) -> str:
    """Pass a label taken from a request path through unchanged.

    Raises:
        InvalidInputError: If the label cannot safely address a store
    """
    if not isinstance(label, str) or not _PATH_LABEL_RE.fullmatch(label):
        raise InvalidInputError(f"Invalid space label: '{label}'")
    return label
