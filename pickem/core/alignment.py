"""
Line up a user's picks with the games of a week

Picks come back from storage in whatever order the query produced. Results
tables and graders walk games and picks side by side, so picks are reordered
to follow the games.
"""

import logging

from .errors import PickIntegrityError

logger = logging.getLogger(__name__)


def align_to(reference, items, reference_key, item_key):
    """Reorder ``items`` so position i matches the identity of ``reference[i]``.

    Args:
        reference: sequence defining the order
        items: sequence to reorder, one item per reference element
        reference_key: callable returning the identity of a reference element
        item_key: callable returning the identity an item belongs to

    Returns:
        list: items in reference order

    Raises:
        PickIntegrityError: if identities are duplicated, missing, or extra
    """
    by_key = {}
    for item in items:
        key = item_key(item)
        if key in by_key:
            raise PickIntegrityError(f"Duplicate entry for identity {key!r}")
        by_key[key] = item

    aligned = []
    seen = set()
    for ref in reference:
        key = reference_key(ref)
        if key in seen:
            raise PickIntegrityError(f"Identity {key!r} listed twice in reference")
        seen.add(key)
        try:
            aligned.append(by_key.pop(key))
        except KeyError:
            raise PickIntegrityError(f"No entry found for identity {key!r}") from None

    if by_key:
        raise PickIntegrityError(
            f"Entries reference unknown identities: {sorted(by_key, key=repr)}"
        )

    return aligned


def align_picks(games, picks):
    """Return ``picks`` ordered so that ``picks[i].game_id == games[i].id``"""
    aligned = align_to(
        games, picks, reference_key=lambda g: g.id, item_key=lambda p: p.game_id
    )
    logger.debug(f"Aligned {len(aligned)} picks to week games")
    return aligned
