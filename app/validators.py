from fastapi import HTTPException

from app.contract_parser import determine_vulnerability, parse_contract
from app.schemas import ContractFact, DealEntry, ScoreRequest, Vulnerability

MAX_TRICKS = 13


def resolve_vulnerability(req: ScoreRequest | DealEntry) -> Vulnerability:
    if req.vulnerability is not None:
        return req.vulnerability
    return determine_vulnerability(req.deal_number)


def validate_contract(contract: str, result: int, vulnerability: Vulnerability) -> ContractFact:
    fact = parse_contract(contract, result, vulnerability)
    if fact is None:
        raise HTTPException(
            status_code=422,
            detail=f"Invalid contract: {contract!r} (expected e.g. '4♥ N', '3NT EX', '6♠ SXX')",
        )
    if not 0 <= fact.actual_tricks <= MAX_TRICKS:
        raise HTTPException(
            status_code=422,
            detail=f"Result {result:+d} gives {fact.actual_tricks} tricks for {fact.contract_text}; must be 0-{MAX_TRICKS}",
        )
    return fact


def validate_score_request(req: ScoreRequest | DealEntry) -> ContractFact:
    return validate_contract(req.contract, req.result, resolve_vulnerability(req))
