from __future__ import annotations

import math

from loguru import logger

from app.contract_parser import is_game_contract
from app.schemas import (
    ContractFact,
    Defeated,
    HandAnalysisInput,
    Made,
    ScoreBreakdownItem,
    ScoreResult,
    Strain,
)
from app.standard_scoring import calculate_standard_score


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _expected_hcp(fact: ContractFact) -> float:
    if fact.level <= 2:
        return 21
    if fact.level == 3 and fact.strain == Strain.notrump:
        return 25
    if fact.level == 4 and fact.strain.is_major:
        return 24
    if fact.level == 5 and fact.strain.is_minor:
        return 27
    if fact.level == 6:
        return 30
    if fact.level == 7:
        return 32
    return 21 + fact.level * 1.5


def _hand_expected_tricks(hand: HandAnalysisInput) -> int:
    return min(13, 6 + hand.total_hcp // 3 + hand.distribution_points // 4)


def _raw_score(fact: ContractFact) -> int:
    standard = calculate_standard_score(fact)
    declarer_side = standard.ns_points if fact.declarer_is_north_south else standard.ew_points
    defender_side = standard.ew_points if fact.declarer_is_north_south else standard.ns_points
    return abs(declarer_side if fact.contract_made else defender_side)


def _score_made(
    fact: ContractFact, outcome: Made, hand: HandAnalysisInput, raw_score: int
) -> tuple[int, int, list[ScoreBreakdownItem]]:
    breakdown: list[ScoreBreakdownItem] = []

    points = raw_score / 20
    breakdown.append(ScoreBreakdownItem(name="base", points=points))

    declarer_hcp_pct = hand.total_hcp / 40 * 100
    expected_hcp = _expected_hcp(fact)
    hcp_adjustment = (hand.total_hcp - expected_hcp) * 0.75
    if hand.total_hcp > expected_hcp:
        points -= hcp_adjustment
        breakdown.append(ScoreBreakdownItem(name="hcp above expectation", points=-hcp_adjustment))
    elif hand.total_hcp < expected_hcp:
        points += abs(hcp_adjustment)
        breakdown.append(ScoreBreakdownItem(name="hcp below expectation", points=abs(hcp_adjustment)))

    contract_expected_tricks = fact.required_tricks
    distribution_points = hand.distribution_points
    hand_expected_tricks = _hand_expected_tricks(hand)

    variance = fact.actual_tricks - contract_expected_tricks
    if variance > 0:
        points += variance * 1.5
        breakdown.append(ScoreBreakdownItem(name="overtrick performance", points=variance * 1.5))
    if hand_expected_tricks > contract_expected_tricks:
        potential_variance = fact.actual_tricks - hand_expected_tricks
        if potential_variance < 0:
            points -= abs(potential_variance) * 0.75
            breakdown.append(
                ScoreBreakdownItem(name="below hand potential", points=-abs(potential_variance) * 0.75)
            )

    contract_bonus = 0
    if is_game_contract(fact):
        contract_bonus += 2
    if fact.level == 6:
        contract_bonus += 4
    elif fact.level == 7:
        contract_bonus += 6
    if fact.strain == Strain.notrump:
        contract_bonus += 1
    if outcome.overtricks >= 4:
        contract_bonus += 1
        if outcome.overtricks >= 7:
            contract_bonus += 2
    if contract_bonus:
        points += contract_bonus
        breakdown.append(ScoreBreakdownItem(name="contract type", points=contract_bonus))

    if fact.strain != Strain.notrump:
        if distribution_points >= 7:
            distribution_penalty = 3
        elif distribution_points >= 5:
            distribution_penalty = 2
        elif distribution_points >= 3:
            distribution_penalty = 1
        else:
            distribution_penalty = 0
        if distribution_penalty:
            points -= distribution_penalty
            breakdown.append(ScoreBreakdownItem(name="distribution", points=-distribution_penalty))

    defender_reward = 0.0
    if hand_expected_tricks > contract_expected_tricks and fact.actual_tricks < hand_expected_tricks:
        defender_reward = (hand_expected_tricks - fact.actual_tricks) * 2
        if declarer_hcp_pct > 50:
            defender_reward += min(3, abs(declarer_hcp_pct - 50) / 10)
        breakdown.append(ScoreBreakdownItem(name="defender reward", points=defender_reward))

    return max(1, _round_half_up(points)), _round_half_up(defender_reward), breakdown


def _score_defeated(
    fact: ContractFact, outcome: Defeated, hand: HandAnalysisInput, raw_score: int
) -> tuple[int, int, list[ScoreBreakdownItem]]:
    breakdown: list[ScoreBreakdownItem] = []

    base_penalty = raw_score / 10
    breakdown.append(ScoreBreakdownItem(name="base penalty", points=base_penalty))

    level_penalty = 0
    if is_game_contract(fact):
        level_penalty += 3
    if fact.level == 6:
        level_penalty += 5
    elif fact.level == 7:
        level_penalty += 7
    if level_penalty:
        breakdown.append(ScoreBreakdownItem(name="level penalty", points=level_penalty))

    declarer_hcp_pct = hand.total_hcp / 40 * 100
    performance_bonus = 0.0
    if declarer_hcp_pct > 60:
        performance_bonus += (declarer_hcp_pct - 50) / 5
    if outcome.undertricks >= 2:
        performance_bonus += 2
        if outcome.undertricks >= 3:
            performance_bonus += 3
    if performance_bonus:
        breakdown.append(ScoreBreakdownItem(name="defender performance", points=performance_bonus))

    consolation = 0.0
    if declarer_hcp_pct < 40:
        consolation = (50 - declarer_hcp_pct) / 10
        breakdown.append(ScoreBreakdownItem(name="declarer consolation", points=consolation))

    defender_points = max(3, _round_half_up(base_penalty + level_penalty + performance_bonus))
    return _round_half_up(consolation), defender_points, breakdown


def calculate_bonus_score(fact: ContractFact, hand: HandAnalysisInput) -> ScoreResult:
    """Bonus Bridge score: the Party score rescaled and adjusted for hand strength.

    Both sides may score on the same deal. The declaring side is credited with
    its adjusted score (made) or a consolation (defeated); the defending side
    with a reward for holding the declarer below the hand's potential (made) or
    with the penalty (defeated).
    """
    raw_score = _raw_score(fact)
    outcome = fact.outcome
    if isinstance(outcome, Made):
        declarer_points, defender_points, breakdown = _score_made(fact, outcome, hand, raw_score)
    else:
        declarer_points, defender_points, breakdown = _score_defeated(fact, outcome, hand, raw_score)

    if fact.declarer_is_north_south:
        ns_points, ew_points = declarer_points, defender_points
    else:
        ns_points, ew_points = defender_points, declarer_points

    logger.debug("Bonus score {}: ns={} ew={} raw={}", fact.contract_text, ns_points, ew_points, raw_score)
    return ScoreResult(ns_points=ns_points, ew_points=ew_points, raw_score=raw_score, breakdown=breakdown)
