"""Random short name allocation.

Names are small random integers (1-999) so relocated paths look like
``/412/87/35.js``. After MAX_SHORT_ATTEMPTS collisions the allocator
switches to ``<random>_<attempt>``; the attempt counter keeps growing
while the exclusion set is finite, so the loop always terminates even
when more than 999 names are taken.
"""

from __future__ import annotations

import random
from collections.abc import Collection

from adcloak.shared.constants import NameAllocation


def _format_extension(extension: str) -> str:
    extension = extension.lstrip(".")
    return f".{extension}" if extension else ""


def allocate_unique_name(
    exclusion: Collection[str],
    extension: str = "",
    *,
    rng: random.Random | None = None,
) -> str:
    """Return a random name that is not a member of ``exclusion``.

    The function is stateless; callers keep the exclusion set up to date.

    Args:
        exclusion: Names already in use (with extension where relevant).
        extension: Optional extension appended to the name, with or
            without the leading dot.
        rng: Random source, injectable for deterministic tests.

    Returns:
        A name such as ``"417"``, ``"417.js"`` or, after many
        collisions, ``"417_104.js"``.
    """
    rng = rng or random.Random()
    suffix = _format_extension(extension)
    taken = exclusion if isinstance(exclusion, (set, frozenset)) else set(exclusion)

    attempt = 0
    while True:
        attempt += 1
        number = rng.randint(NameAllocation.RANDOM_MIN, NameAllocation.RANDOM_MAX)
        if attempt < NameAllocation.MAX_SHORT_ATTEMPTS:
            candidate = f"{number}{suffix}"
        else:
            candidate = f"{number}_{attempt}{suffix}"
        if candidate not in taken:
            return candidate
