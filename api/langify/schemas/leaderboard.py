"""
Leaderboard schemas.
"""
from pydantic import BaseModel
from typing import List, Optional


class LeaderboardEntryResponse(BaseModel):
    rank: int
    user_id: int
    name: str
    avatar_url: Optional[str] = None
    points: int

    class Config:
        from_attributes = True


class LeaderboardResponse(BaseModel):
    period: str
    entries: List[LeaderboardEntryResponse]


class MyRankResponse(BaseModel):
    """The user's place; entry is None when they have no points in the period."""
    period: str
    user_id: int
    entry: Optional[LeaderboardEntryResponse] = None
