from __future__ import annotations

from loguru import logger

from app.schemas import ContractFact, Defeated, Doubling, Made, ScoreBreakdownItem, ScoreResult

DOUBLING_MULTIPLIER = {Doubling.none: 1, Doubling.doubled: 2, Doubling.redoubled: 4}
INSULT_BONUS = {Doubling.none: 0, Doubling.doubled: 50, Doubling.redoubled: 100}


def _trick_score(fact: ContractFact) -> int:
    if fact.strain.is_minor:
        base = fact.level * 20
    elif fact.strain.is_major:
        base = fact.level * 30
    else:
        base = 40 + (fact.level - 1) * 30
    return base * DOUBLING_MULTIPLIER[fact.doubling]


def _overtrick_points(fact: ContractFact, overtricks: int) -> int:
    if overtricks <= 0:
        return 0
    vul = fact.declarer_vulnerable
    if fact.doubling == Doubling.doubled:
        return overtricks * (200 if vul else 100)
    if fact.doubling == Doubling.redoubled:
        return overtricks * (400 if vul else 200)
    return overtricks * (20 if fact.strain.is_minor else 30)


def _made_breakdown(fact: ContractFact, outcome: Made) -> list[ScoreBreakdownItem]:
    vul = fact.declarer_vulnerable
    trick_score = _trick_score(fact)
    items = [ScoreBreakdownItem(name="trick score", points=trick_score)]
    if trick_score >= 100:
        items.append(ScoreBreakdownItem(name="game bonus", points=500 if vul else 300))
    else:
        items.append(ScoreBreakdownItem(name="part-score bonus", points=50))

    if fact.level == 6:
        items.append(ScoreBreakdownItem(name="small slam bonus", points=750 if vul else 500))
    elif fact.level == 7:
        items.append(ScoreBreakdownItem(name="grand slam bonus", points=1500 if vul else 1000))

    insult = INSULT_BONUS[fact.doubling]
    if insult:
        items.append(ScoreBreakdownItem(name="insult bonus", points=insult))

    overtricks = _overtrick_points(fact, outcome.overtricks)
    if overtricks:
        items.append(ScoreBreakdownItem(name="overtricks", points=overtricks))
    return items


def undertrick_penalty(doubling: Doubling, vulnerable: bool, undertricks: int) -> int:
    if doubling == Doubling.none:
        return undertricks * (100 if vulnerable else 50)

    if vulnerable:
        penalty = 200 + (undertricks - 1) * 300
    else:
        penalty = 100
        if undertricks > 1:
            penalty += 200
        if undertricks > 2:
            penalty += (undertricks - 2) * 300
    return penalty * (2 if doubling == Doubling.redoubled else 1)


def _split(fact: ContractFact, declarer_points: int, defender_points: int) -> tuple[int, int]:
    if fact.declarer_is_north_south:
        return declarer_points, defender_points
    return defender_points, declarer_points


def calculate_standard_score(fact: ContractFact) -> ScoreResult:
    """Duplicate-bridge score for one deal, credited to the side that earns it."""
    outcome = fact.outcome
    if isinstance(outcome, Defeated):
        penalty = undertrick_penalty(fact.doubling, fact.declarer_vulnerable, outcome.undertricks)
        breakdown = [ScoreBreakdownItem(name=f"undertricks x{outcome.undertricks}", points=penalty)]
        ns_points, ew_points = _split(fact, 0, penalty)
    else:
        breakdown = _made_breakdown(fact, outcome)
        total = int(sum(item.points for item in breakdown))
        ns_points, ew_points = _split(fact, total, 0)

    logger.debug("Standard score {}: ns={} ew={}", fact.contract_text, ns_points, ew_points)
    return ScoreResult(ns_points=ns_points, ew_points=ew_points, breakdown=breakdown)
