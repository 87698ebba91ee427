from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, conint


class Strain(str, Enum):
    clubs = "♣"
    diamonds = "♦"
    hearts = "♥"
    spades = "♠"
    notrump = "NT"

    @property
    def is_minor(self) -> bool:
        return self in {Strain.clubs, Strain.diamonds}

    @property
    def is_major(self) -> bool:
        return self in {Strain.hearts, Strain.spades}


class Seat(str, Enum):
    north = "N"
    east = "E"
    south = "S"
    west = "W"

    @property
    def is_north_south(self) -> bool:
        return self in {Seat.north, Seat.south}


class Doubling(str, Enum):
    none = ""
    doubled = "X"
    redoubled = "XX"


class Vulnerability(BaseModel):
    ns: bool = False
    ew: bool = False


class Made(BaseModel):
    overtricks: conint(ge=0)

    model_config = ConfigDict(frozen=True)


class Defeated(BaseModel):
    undertricks: conint(ge=1)

    model_config = ConfigDict(frozen=True)


ContractOutcome = Union[Made, Defeated]


class ContractFact(BaseModel):
    level: conint(ge=1, le=7)
    strain: Strain
    declarer_seat: Seat
    doubling: Doubling
    declarer_is_north_south: bool
    declarer_vulnerable: bool
    required_tricks: int
    signed_result: int
    actual_tricks: int
    contract_made: bool

    model_config = ConfigDict(frozen=True)

    @property
    def outcome(self) -> ContractOutcome:
        if self.contract_made:
            return Made(overtricks=self.signed_result)
        return Defeated(undertricks=-self.signed_result)

    @property
    def contract_text(self) -> str:
        return f"{self.level}{self.strain.value} {self.declarer_seat.value}{self.doubling.value}"


class HandAnalysisInput(BaseModel):
    total_hcp: conint(ge=0, le=40)
    singletons: conint(ge=0) = 0
    voids: conint(ge=0) = 0
    long_suits_6_plus: conint(ge=0) = 0

    @property
    def distribution_points(self) -> int:
        return self.voids * 3 + self.singletons * 2 + self.long_suits_6_plus


class ScoreBreakdownItem(BaseModel):
    name: str
    points: int | float


class ScoreResult(BaseModel):
    ns_points: int
    ew_points: int
    raw_score: int | None = None
    breakdown: list[ScoreBreakdownItem] = Field(default_factory=list)


class DealInfoResponse(BaseModel):
    deal_number: int
    dealer: Seat
    vulnerability: Vulnerability
    vulnerability_description: str


class ScoreRequest(BaseModel):
    contract: str
    result: int = 0
    vulnerability: Vulnerability | None = None
    deal_number: conint(ge=1) | None = None
    hand_analysis: HandAnalysisInput | None = None


class ScoreResponse(BaseModel):
    score_id: UUID
    status: Literal["ok"]
    contract: ContractFact
    standard: ScoreResult
    bonus: ScoreResult | None = None
    warnings: list[str] = Field(default_factory=list)


class DealEntry(BaseModel):
    deal_number: conint(ge=1) | None = None
    contract: str
    result: int = 0
    vulnerability: Vulnerability | None = None
    hand_analysis: HandAnalysisInput | None = None


class GameSummaryRequest(BaseModel):
    score_ids: list[UUID] = Field(default_factory=list)
    deals: list[DealEntry] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class ScoredDeal(BaseModel):
    deal_number: int
    fact: ContractFact
    standard: ScoreResult
    bonus: ScoreResult | None = None
    hand_analysis: HandAnalysisInput | None = None


class ModeTotals(BaseModel):
    ns: int = 0
    ew: int = 0
    winner: Literal["North-South", "East-West", "Tie"] = "Tie"


class GameStats(BaseModel):
    total_deals: int = 0
    ns_deals: int = 0
    ew_deals: int = 0
    ns_made: int = 0
    ew_made: int = 0
    slams: int = 0
    games: int = 0
    part_scores: int = 0


class HCPAnalysis(BaseModel):
    avg_declarer: float = 0
    avg_defender: float = 0
    avg_success: float = 0


class GameSummary(BaseModel):
    party: ModeTotals
    bonus: ModeTotals
    stats: GameStats
    hcp: HCPAnalysis


class GameSummaryResponse(BaseModel):
    summary_id: UUID
    status: Literal["ok"]
    deals: list[ScoredDeal]
    summary: GameSummary


class ResultGetResponse(BaseModel):
    id: UUID
    type: Literal["score", "game_summary"]
    created_at: datetime
    expires_at: datetime
    data: dict
