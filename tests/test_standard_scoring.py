import pytest

from app.contract_parser import parse_contract
from app.schemas import Doubling, Vulnerability
from app.standard_scoring import calculate_standard_score, undertrick_penalty

NONE_VUL = Vulnerability()
BOTH_VUL = Vulnerability(ns=True, ew=True)


def score(text: str, result: int = 0, vul: Vulnerability = NONE_VUL) -> tuple[int, int]:
    res = calculate_standard_score(parse_contract(text, result, vul))
    return res.ns_points, res.ew_points


def test_major_game_not_vulnerable():
    assert score("4♥ N") == (420, 0)


def test_major_game_vulnerable():
    assert score("4♥ N", 0, Vulnerability(ns=True)) == (620, 0)


def test_notrump_down_one_credits_defenders():
    assert score("3NT E", -1) == (50, 0)


def test_small_slam_vulnerable():
    assert score("6♠ S", 0, Vulnerability(ns=True)) == (1430, 0)


def test_grand_slam_notrump_vulnerable():
    assert score("7NT N", 0, BOTH_VUL) == (2220, 0)


def test_part_score_minor():
    assert score("1♣ N") == (70, 0)


def test_notrump_game_with_overtrick():
    assert score("3NT N", 1) == (430, 0)


def test_minor_overtricks_score_twenty():
    assert score("2♦ W", 2) == (0, 130)


def test_doubled_into_game():
    result = calculate_standard_score(parse_contract("2♥ SX", 0, NONE_VUL))
    assert (result.ns_points, result.ew_points) == (470, 0)
    assert [item.name for item in result.breakdown] == ["trick score", "game bonus", "insult bonus"]


def test_redoubled_overtrick_vulnerable():
    # 160 trick score + 500 game + 100 insult + 400 overtrick
    assert score("1NT WXX", 1, BOTH_VUL) == (0, 1160)


def test_doubled_overtricks_not_vulnerable():
    # 60 + 50 part score + 50 insult + 2 * 100
    assert score("1♠ NX", 2) == (360, 0)


@pytest.mark.parametrize(
    "doubling,vulnerable,undertricks,expected",
    [
        (Doubling.none, False, 1, 50),
        (Doubling.none, False, 3, 150),
        (Doubling.none, True, 2, 200),
        (Doubling.doubled, False, 1, 100),
        (Doubling.doubled, False, 2, 300),
        (Doubling.doubled, False, 3, 600),
        (Doubling.doubled, False, 4, 900),
        (Doubling.doubled, True, 1, 200),
        (Doubling.doubled, True, 3, 800),
        (Doubling.redoubled, False, 1, 200),
        (Doubling.redoubled, False, 2, 600),
        (Doubling.redoubled, False, 4, 1800),
        (Doubling.redoubled, True, 1, 400),
        (Doubling.redoubled, True, 2, 1000),
    ],
)
def test_undertrick_penalty_table(doubling, vulnerable, undertricks, expected):
    assert undertrick_penalty(doubling, vulnerable, undertricks) == expected


def test_defeated_doubled_north_credits_east_west():
    assert score("4♠ NX", -3) == (0, 600)
    assert score("4♠ NX", -3, BOTH_VUL) == (0, 800)


def test_defeated_breakdown():
    result = calculate_standard_score(parse_contract("3♣ W", -2, BOTH_VUL))
    assert (result.ns_points, result.ew_points) == (200, 0)
    assert [item.model_dump() for item in result.breakdown] == [{"name": "undertricks x2", "points": 200}]
    assert isinstance(result.breakdown[0].points, int)
    assert result.raw_score is None


ONE_SIDE_CASES = [
    (text, result)
    for text in ["1♣ N", "2♦ SX", "3♥ E", "4♠ WXX", "3NT N", "6NT E", "7♣ S"]
    for result in [-3, -1, 0, 1]
    if int(text[0]) + 6 + result <= 13
]


@pytest.mark.parametrize("text,result", ONE_SIDE_CASES)
def test_exactly_one_side_scores(text, result):
    fact = parse_contract(text, result, BOTH_VUL)
    res = calculate_standard_score(fact)
    assert (res.ns_points == 0) != (res.ew_points == 0)
    assert res.ns_points >= 0 and res.ew_points >= 0


@pytest.mark.parametrize("strain", ["♣", "♦", "♥", "♠", "NT"])
@pytest.mark.parametrize("doubling", ["", "X", "XX"])
def test_overtricks_strictly_increase_score(strain, doubling):
    for level in range(1, 7):
        text = f"{level}{strain} N{doubling}"
        scores = [score(text, over)[0] for over in range(0, 7 - level + 1)]
        assert scores == sorted(set(scores))


@pytest.mark.parametrize("text", ["1♣ N", "2♥ NX", "4♠ NXX", "3NT N", "6♦ N", "7NT NX"])
@pytest.mark.parametrize("result", [-4, -2, -1, 0])
def test_vulnerable_never_scores_less(text, result):
    vul = calculate_standard_score(parse_contract(text, result, Vulnerability(ns=True)))
    non_vul = calculate_standard_score(parse_contract(text, result, NONE_VUL))
    assert max(vul.ns_points, vul.ew_points) >= max(non_vul.ns_points, non_vul.ew_points)
