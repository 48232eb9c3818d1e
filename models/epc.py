"""Energy Performance Certificate bands and score lookups."""

from dataclasses import dataclass

from models.currency import parse_int

DEFAULT_CURRENT_SCORE = 84
DEFAULT_POTENTIAL_SCORE = 72


@dataclass(frozen=True)
class EpcBand:
    grade: str
    min_score: int
    max_score: int
    color: tuple[int, int, int]
    label: str

    def contains(self, score: int) -> bool:
        return self.min_score <= score <= self.max_score


# Ordered best to worst; the chart draws them top to bottom in this order.
EPC_BANDS = (
    EpcBand("A", 92, 100, (0, 132, 80), "92+"),
    EpcBand("B", 81, 91, (34, 197, 94), "81-91"),
    EpcBand("C", 69, 80, (132, 204, 22), "69-80"),
    EpcBand("D", 55, 68, (234, 179, 8), "55-68"),
    EpcBand("E", 39, 54, (245, 158, 11), "39-54"),
    EpcBand("F", 21, 38, (239, 68, 68), "21-38"),
    EpcBand("G", 1, 20, (220, 38, 38), "1-20"),
)


def band_index(score: int) -> int:
    """Row of the band containing `score`; out-of-range scores fall to the lowest band."""
    for i, band in enumerate(EPC_BANDS):
        if band.contains(score):
            return i
    return len(EPC_BANDS) - 1


def band_for(score: int) -> EpcBand:
    return EPC_BANDS[band_index(score)]


def grade_for(score: int) -> str:
    return band_for(score).grade


def epc_scores(data: dict) -> tuple[int, int]:
    """Current and potential scores from form data, with the report defaults."""
    data = data or {}
    current = parse_int(data.get("current_rating") or data.get("epc_rating"), DEFAULT_CURRENT_SCORE)
    potential = parse_int(data.get("potential_rating"), DEFAULT_POTENTIAL_SCORE)
    return current, potential
