from pydantic import BaseModel


class MatchParty(BaseModel):
    id: int
    firstName: str


class MatchSummary(BaseModel):
    matchId: int | None
    city: str | None
    searchType: str | None
    a: MatchParty
    b: MatchParty
