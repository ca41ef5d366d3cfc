"""
Pydantic models for fixtures, results and the served dataset.

Records are validated here and then dumped to plain camelCase dicts, which
is the shape carried through the rest of the pipeline.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Game(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: datetime
    grade: str = 'Unknown Grade'
    home_team: str = Field(alias='homeTeam')
    away_team: str = Field(alias='awayTeam')
    source: str

    @field_validator('home_team', 'away_team')
    @classmethod
    def team_nonempty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('team must be non-empty')
        return v.strip()

    @field_validator('grade')
    @classmethod
    def grade_default(cls, v: str) -> str:
        return v.strip() if v and v.strip() else 'Unknown Grade'

    @field_validator('date')
    @classmethod
    def drop_microseconds(cls, v: datetime) -> datetime:
        return v.replace(microsecond=0)


class Fixture(_Game):
    """Upcoming, not-yet-played game."""

    venue: str = 'TBC'

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode='json', by_alias=True)


class Result(_Game):
    """Completed game, confirmed (FT) or inferred from a score."""

    score_home: int | None = Field(default=None, alias='scoreHome')
    score_away: int | None = Field(default=None, alias='scoreAway')
    status: Literal['FT', 'Result'] = 'Result'
    match_url: str | None = Field(default=None, alias='matchUrl')

    def to_json(self) -> dict[str, Any]:
        data = self.model_dump(mode='json', by_alias=True)
        if data.get('matchUrl') is None:
            data.pop('matchUrl', None)
        return data


class Dataset(BaseModel):
    """Aggregate returned to callers."""

    updated: str
    club: str
    season: int
    upcoming: list[dict[str, Any]] = Field(default_factory=list)
    results: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator('season')
    @classmethod
    def season_sane(cls, v: int) -> int:
        if v < 1900 or v > 2100:
            raise ValueError(f'season {v} out of range')
        return v
