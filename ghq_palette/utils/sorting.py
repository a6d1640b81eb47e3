"""Preferred-first ordering."""

import locale
import unicodedata
from typing import Iterable, List, Sequence, Tuple


def _base_letters(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def locale_sort_key(item: str) -> Tuple[str, str, str]:
    """Locale-aware, case-insensitive key.

    Accents only break ties between otherwise equal letters, so "éclair"
    sorts among the e's even when the active collation is plain C; the raw
    string is the final tie-break.
    """
    folded = item.casefold()
    return locale.strxfrm(_base_letters(folded)), locale.strxfrm(folded), item


def sort_with_preferred(items: Iterable[str], preferred: Sequence[str] = ()) -> List[str]:
    """Order ``items`` with preferred ones first.

    Preferred items that are present come first, in the order given by
    ``preferred``; preferred names missing from ``items`` are never invented.
    Everything else follows in locale-aware alphabetical order.

    Example:
        >>> sort_with_preferred(["a", "b", "c"], ["b", "a"])
        ['b', 'a', 'c']
    """
    available = list(dict.fromkeys(items))
    present = set(available)

    top = [p for p in dict.fromkeys(preferred) if p in present]
    preferred_set = set(top)
    rest = sorted((i for i in available if i not in preferred_set), key=locale_sort_key)
    return top + rest
