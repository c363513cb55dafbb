"""Player model consumed by the rotation builder and stats cards."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Player(BaseModel):
    """Player as stored by the admin collaborator.

    Only identity, naming and the ``is_active``/``is_weekend_warrior`` flags
    drive scheduling; the stat line rides along for the display card.
    """

    id: int
    first_name: str
    last_name: str
    team_name: str | None = None
    jersey_number: str | None = None
    photo_path: str | None = None
    graduation_year: int | None = None
    is_active: bool = True
    is_weekend_warrior: bool = False
    stats_start_date: date | None = None
    stats_end_date: date | None = None

    games_played: int = Field(default=0, ge=0)
    plate_appearances: int = Field(default=0, ge=0)
    at_bats: int = Field(default=0, ge=0)
    hits: int = Field(default=0, ge=0)
    doubles: int = Field(default=0, ge=0)
    triples: int = Field(default=0, ge=0)
    home_runs: int = Field(default=0, ge=0)
    rbis: int = Field(default=0, ge=0)
    runs: int = Field(default=0, ge=0)
    walks: int = Field(default=0, ge=0)
    strikeouts: int = Field(default=0, ge=0)
    strikeouts_looking: int = Field(default=0, ge=0)
    hit_by_pitch: int = Field(default=0, ge=0)
    sacrifice_hits: int = Field(default=0, ge=0)
    sacrifice_flies: int = Field(default=0, ge=0)
    reached_on_error: int = Field(default=0, ge=0)
    fielders_choice: int = Field(default=0, ge=0)
    stolen_bases: int = Field(default=0, ge=0)
    caught_stealing: int = Field(default=0, ge=0)

    batting_average: float | None = None
    on_base_percentage: float | None = None
    slugging_percentage: float | None = None
    on_base_plus_slugging: float | None = None
    stolen_base_percentage: float | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
