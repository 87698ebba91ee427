from __future__ import annotations

from uuid import UUID

from fastapi import FastAPI, HTTPException
from loguru import logger

from app.bonus_scoring import calculate_bonus_score
from app.config import settings
from app.contract_parser import determine_dealer, determine_vulnerability, vulnerability_description
from app.game_summary import summarize_game
from app.logger import setup_logger
from app.repository import ScoreRecordStore, StoredRecord
from app.schemas import (
    DealEntry,
    DealInfoResponse,
    GameSummaryRequest,
    GameSummaryResponse,
    ResultGetResponse,
    ScoredDeal,
    ScoreRequest,
    ScoreResponse,
)
from app.standard_scoring import calculate_standard_score
from app.validators import validate_score_request

setup_logger()
app = FastAPI(title="Bridge Score API", version="0.1.0")
repo = ScoreRecordStore(ttl_hours=settings.result_ttl_hours)

NO_HAND_ANALYSIS_WARNING = "hand_analysis was not provided; Bonus Bridge score skipped."


@app.get("/")
def root() -> dict[str, str]:
    return {
        "message": "Bridge Score API",
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/v1/deals/{deal_number}", response_model=DealInfoResponse)
def deal_info(deal_number: int) -> DealInfoResponse:
    if deal_number < 1:
        raise HTTPException(status_code=422, detail="deal_number must be 1 or greater")
    vulnerability = determine_vulnerability(deal_number)
    return DealInfoResponse(
        deal_number=deal_number,
        dealer=determine_dealer(deal_number),
        vulnerability=vulnerability,
        vulnerability_description=vulnerability_description(vulnerability),
    )


def _score_deal(req: ScoreRequest | DealEntry, deal_number: int) -> tuple[ScoredDeal, list[str]]:
    fact = validate_score_request(req)
    standard = calculate_standard_score(fact)
    bonus = calculate_bonus_score(fact, req.hand_analysis) if req.hand_analysis else None
    warnings = [] if bonus else [NO_HAND_ANALYSIS_WARNING]
    logger.info(
        "Deal {} {} {:+d}: party ns={} ew={}, bonus={}",
        deal_number,
        fact.contract_text,
        fact.signed_result,
        standard.ns_points,
        standard.ew_points,
        f"ns={bonus.ns_points} ew={bonus.ew_points}" if bonus else "-",
    )
    deal = ScoredDeal(
        deal_number=deal_number,
        fact=fact,
        standard=standard,
        bonus=bonus,
        hand_analysis=req.hand_analysis,
    )
    return deal, warnings


def _deal_from_record(record: StoredRecord, fallback_number: int) -> ScoredDeal:
    data = record.data
    return ScoredDeal(
        deal_number=data.get("deal_number") or fallback_number,
        fact=data["contract"],
        standard=data["standard"],
        bonus=data.get("bonus"),
        hand_analysis=data.get("hand_analysis"),
    )


@app.post("/api/v1/score", response_model=ScoreResponse)
def score(req: ScoreRequest) -> ScoreResponse:
    deal, warnings = _score_deal(req, req.deal_number or 0)
    record = repo.add(
        "score",
        {
            "deal_number": req.deal_number,
            "request": req.model_dump(mode="json"),
            "contract": deal.fact.model_dump(mode="json"),
            "standard": deal.standard.model_dump(mode="json"),
            "bonus": deal.bonus.model_dump(mode="json") if deal.bonus else None,
            "hand_analysis": req.hand_analysis.model_dump(mode="json") if req.hand_analysis else None,
            "warnings": warnings,
        },
    )
    return ScoreResponse(
        score_id=record.id,
        status="ok",
        contract=deal.fact,
        standard=deal.standard,
        bonus=deal.bonus,
        warnings=warnings,
    )


@app.post("/api/v1/games/summary", response_model=GameSummaryResponse)
def game_summary(req: GameSummaryRequest) -> GameSummaryResponse:
    records, missing = repo.get_many(req.score_ids, "score")
    if missing:
        raise HTTPException(
            status_code=404,
            detail=f"score records not found or expired: {', '.join(str(m) for m in missing)}",
        )

    deals = [_deal_from_record(record, idx) for idx, record in enumerate(records, start=1)]
    for entry in req.deals:
        position = len(deals) + 1
        deal, _ = _score_deal(entry, entry.deal_number or position)
        deals.append(deal)

    summary = summarize_game(deals)
    record = repo.add(
        "game_summary",
        {
            "score_ids": [str(score_id) for score_id in req.score_ids],
            "deals": [deal.model_dump(mode="json") for deal in deals],
            "summary": summary.model_dump(mode="json"),
        },
    )
    return GameSummaryResponse(summary_id=record.id, status="ok", deals=deals, summary=summary)


@app.get("/api/v1/results/{item_id}", response_model=ResultGetResponse)
def get_result(item_id: UUID) -> ResultGetResponse:
    record = repo.get(item_id)
    if not record:
        raise HTTPException(status_code=404, detail="record not found or expired")
    return ResultGetResponse(
        id=record.id,
        type=record.type,
        created_at=record.created_at,
        expires_at=record.expires_at,
        data=record.data,
    )
