import pytest
from fastapi import HTTPException

from app.schemas import DealEntry, ScoreRequest, Vulnerability
from app.validators import resolve_vulnerability, validate_contract


def test_resolve_vulnerability_prefers_explicit_value():
    req = ScoreRequest(contract="4♥ N", vulnerability={"ns": False, "ew": True}, deal_number=2)
    assert resolve_vulnerability(req) == Vulnerability(ns=False, ew=True)


def test_resolve_vulnerability_from_deal_number():
    assert resolve_vulnerability(DealEntry(contract="4♥ N", deal_number=4)) == Vulnerability(ns=True, ew=True)
    assert resolve_vulnerability(DealEntry(contract="4♥ N")) == Vulnerability()


def test_validate_contract_uses_declaring_side_vulnerability():
    fact = validate_contract("4♠ E", 0, Vulnerability(ew=True))
    assert fact.declarer_vulnerable is True


def test_validate_contract_rejects_impossible_result():
    with pytest.raises(HTTPException) as exc_info:
        validate_contract("1♣ N", -8, Vulnerability())
    assert exc_info.value.status_code == 422
