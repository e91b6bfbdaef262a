from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    FLAT = "flat"


class HistoricalRecord(str, Enum):
    WIN = "win"
    LOSS = "loss"


class Recommendation(str, Enum):
    UNDER = "under"
    OVER = "over"
    NONE = "none"


class ClassificationInput(BaseModel):
    """Validated market movement for one match."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    initial_handicap: float = Field(alias="initialHandicap")
    current_handicap: float = Field(alias="currentHandicap")
    initial_water: float = Field(alias="initialWater")
    current_water: float = Field(alias="currentWater")
    historical_record: HistoricalRecord = Field(alias="historicalRecord")


class Analysis(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    handicap_change: float = Field(alias="handicapChange")
    water_change: float = Field(alias="waterChange")
    handicap_up: bool = Field(alias="handicapUp")
    water_up: bool = Field(alias="waterUp")
    handicap_down: bool = Field(alias="handicapDown")
    water_down: bool = Field(alias="waterDown")
    historical_record: HistoricalRecord = Field(alias="historicalRecord")


class ClassificationResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    recommendation: Recommendation
    details: str
    analysis: Analysis
