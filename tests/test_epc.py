import pytest

from models.epc import (
    DEFAULT_CURRENT_SCORE, DEFAULT_POTENTIAL_SCORE, EPC_BANDS, band_for, band_index, epc_scores, grade_for,
)


@pytest.mark.parametrize("score, grade", [
    (100, "A"), (92, "A"), (91, "B"), (84, "B"), (81, "B"), (80, "C"), (69, "C"),
    (68, "D"), (55, "D"), (54, "E"), (39, "E"), (38, "F"), (21, "F"), (20, "G"), (1, "G"),
])
def test_grade_for(score, grade):
    assert grade_for(score) == grade


@pytest.mark.parametrize("score", [101, 0, -5, 1000])
def test_out_of_range_scores_fall_to_lowest_band(score):
    assert grade_for(score) == "G"
    assert band_index(score) == len(EPC_BANDS) - 1


def test_bands_partition_one_to_hundred():
    covered = sorted(s for band in EPC_BANDS for s in range(band.min_score, band.max_score + 1))
    assert covered == list(range(1, 101))


def test_band_for_returns_color_and_label():
    band = band_for(84)
    assert band.grade == "B"
    assert band.label == "81-91"
    assert band.color == (34, 197, 94)


def test_epc_scores_defaults():
    assert epc_scores({}) == (DEFAULT_CURRENT_SCORE, DEFAULT_POTENTIAL_SCORE) == (84, 72)
    assert epc_scores({"current_rating": "n/a", "potential_rating": ""}) == (84, 72)


def test_epc_scores_parsing():
    assert epc_scores({"current_rating": "65", "potential_rating": "78.9"}) == (65, 78)
    assert epc_scores({"epc_rating": "40"}) == (40, 72)
    assert epc_scores({"current_rating": "55", "epc_rating": "40"}) == (55, 72)
