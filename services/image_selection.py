"""Choosing the hero photo for the cover and information pages.

Uploads carry no role beyond their category, so the best exterior shot is
guessed from the filename. The guess is an ordered list of predicates; the
first candidate matching the earliest predicate wins, otherwise the first
available image is used.
"""

import os
from typing import Callable, Iterable, Sequence

ImagePredicate = Callable[[str], bool]


def filename_contains(*needles: str) -> ImagePredicate:
    """Predicate: the file's basename contains every needle, case-insensitively."""
    lowered = [n.lower() for n in needles]

    def _matches(path: str) -> bool:
        name = os.path.basename(path).lower()
        return all(n in name for n in lowered)

    return _matches


DEFAULT_HERO_PREDICATES: tuple[ImagePredicate, ...] = (filename_contains("exterior", "front"),)


class ImageSelector:
    def __init__(self, predicates: Sequence[ImagePredicate] = DEFAULT_HERO_PREDICATES):
        self.predicates = tuple(predicates)

    def pick(self, candidates: Iterable[str | None]) -> str | None:
        available = [c for c in candidates if c]
        for predicate in self.predicates:
            for path in available:
                if predicate(path):
                    return path
        return available[0] if available else None

    def pick_with_rest(self, candidates: Sequence[str | None],
                       limit: int) -> tuple[str | None, list[str]]:
        """Hero plus up to `limit` other images, in their original order."""
        hero = self.pick(candidates)
        rest = [c for c in candidates if c and c != hero]
        return hero, rest[:limit]


def hero_candidates(images: dict) -> list[str]:
    """Cover photos first, then the gallery."""
    images = images or {}
    return list(images.get("cover") or []) + list(images.get("property") or [])
