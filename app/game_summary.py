from __future__ import annotations

from collections.abc import Iterable

from app.contract_parser import is_game_contract
from app.schemas import GameStats, GameSummary, HCPAnalysis, ModeTotals, ScoredDeal


def _winner(ns: int, ew: int) -> str:
    if ns > ew:
        return "North-South"
    if ew > ns:
        return "East-West"
    return "Tie"


def _totals(pairs: Iterable[tuple[int, int]]) -> ModeTotals:
    ns = ew = 0
    for ns_points, ew_points in pairs:
        ns += ns_points
        ew += ew_points
    return ModeTotals(ns=ns, ew=ew, winner=_winner(ns, ew))


def _game_stats(deals: list[ScoredDeal]) -> GameStats:
    stats = GameStats(total_deals=len(deals))
    for deal in deals:
        fact = deal.fact
        if fact.declarer_is_north_south:
            stats.ns_deals += 1
            stats.ns_made += int(fact.contract_made)
        else:
            stats.ew_deals += 1
            stats.ew_made += int(fact.contract_made)

        if fact.level >= 6:
            stats.slams += 1
        elif is_game_contract(fact):
            stats.games += 1
        else:
            stats.part_scores += 1
    return stats


def _hcp_analysis(deals: list[ScoredDeal]) -> HCPAnalysis:
    # Deals scored without a hand analysis (or with 0 HCP) carry no HCP data.
    with_hcp = [d for d in deals if d.hand_analysis is not None and d.hand_analysis.total_hcp]
    if not with_hcp:
        return HCPAnalysis()

    declarer_hcp = [d.hand_analysis.total_hcp for d in with_hcp]
    made_hcp = [d.hand_analysis.total_hcp for d in with_hcp if d.fact.contract_made]
    return HCPAnalysis(
        avg_declarer=round(sum(declarer_hcp) / len(declarer_hcp), 1),
        avg_defender=round(sum(40 - h for h in declarer_hcp) / len(declarer_hcp), 1),
        avg_success=round(sum(made_hcp) / len(made_hcp), 1) if made_hcp else 0,
    )


def summarize_game(deals: list[ScoredDeal]) -> GameSummary:
    """Running totals, winners and contract statistics for a finished game.

    Deals without a bonus score contribute nothing to the Bonus totals.
    """
    party = _totals((d.standard.ns_points, d.standard.ew_points) for d in deals)
    bonus = _totals((d.bonus.ns_points, d.bonus.ew_points) for d in deals if d.bonus is not None)
    return GameSummary(party=party, bonus=bonus, stats=_game_stats(deals), hcp=_hcp_analysis(deals))
