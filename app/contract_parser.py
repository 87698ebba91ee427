from __future__ import annotations

import re
from collections.abc import Mapping

from loguru import logger

from app.schemas import ContractFact, Doubling, Seat, Strain, Vulnerability

CONTRACT_RE = re.compile(r"^([1-7])(♣|♦|♥|♠|NT)\s+([NESW])(X{0,2})$")

# Position in the 16-board cycle -> (ns, ew)
VULNERABILITY_CYCLE: dict[int, tuple[bool, bool]] = {
    **{i: (False, False) for i in (0, 7, 10, 13)},
    **{i: (True, False) for i in (1, 4, 11, 14)},
    **{i: (False, True) for i in (2, 5, 8, 15)},
    **{i: (True, True) for i in (3, 6, 9, 12)},
}
DEALER_ORDER = (Seat.north, Seat.east, Seat.south, Seat.west)


def _coerce_vulnerability(vulnerability: Vulnerability | Mapping | None) -> Vulnerability:
    if vulnerability is None:
        return Vulnerability()
    if isinstance(vulnerability, Vulnerability):
        return vulnerability
    return Vulnerability(ns=bool(vulnerability.get("ns", False)), ew=bool(vulnerability.get("ew", False)))


def parse_contract(
    contract_text: str | None,
    signed_result: int | None,
    vulnerability: Vulnerability | Mapping | None = None,
) -> ContractFact | None:
    """Contract text like "4♥ N" or "3NT EX" -> ContractFact, or None if malformed."""
    if not contract_text:
        return None
    match = CONTRACT_RE.fullmatch(contract_text)
    if not match:
        logger.debug("Rejected contract text: {!r}", contract_text)
        return None

    level = int(match.group(1))
    declarer_seat = Seat(match.group(3))
    vul = _coerce_vulnerability(vulnerability)
    declarer_is_north_south = declarer_seat.is_north_south
    result = signed_result or 0
    required_tricks = level + 6

    return ContractFact(
        level=level,
        strain=Strain(match.group(2)),
        declarer_seat=declarer_seat,
        doubling=Doubling(match.group(4)),
        declarer_is_north_south=declarer_is_north_south,
        declarer_vulnerable=vul.ns if declarer_is_north_south else vul.ew,
        required_tricks=required_tricks,
        signed_result=result,
        actual_tricks=required_tricks + result,
        contract_made=result >= 0,
    )


def is_game_contract(fact: ContractFact | None) -> bool:
    if fact is None:
        return False
    return (
        (fact.level == 3 and fact.strain == Strain.notrump)
        or (fact.level == 4 and fact.strain.is_major)
        or (fact.level == 5 and fact.strain.is_minor)
        or fact.level >= 6
    )


def determine_vulnerability(deal_number: int | None) -> Vulnerability:
    if not deal_number:
        return Vulnerability()
    ns, ew = VULNERABILITY_CYCLE[(deal_number - 1) % 16]
    return Vulnerability(ns=ns, ew=ew)


def determine_dealer(deal_number: int) -> Seat:
    return DEALER_ORDER[(deal_number - 1) % 4]


def vulnerability_description(vulnerability: Vulnerability | Mapping | None) -> str:
    vul = _coerce_vulnerability(vulnerability)
    if vul.ns and vul.ew:
        return "All Vulnerable"
    if vul.ns:
        return "NS Vulnerable"
    if vul.ew:
        return "EW Vulnerable"
    return "None Vulnerable"
