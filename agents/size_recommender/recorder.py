"""
Best-effort persistence of computed recommendations.

The HTTP handler hands every computed recommendation to a
RecommendationRecorder. Recording never affects the response: callers
catch and log whatever a recorder raises.

Backends:
    log   - write the record to the service log (default)
    json  - append to a JSON list file, readable by the dashboard
    sql   - insert into the `recommendations` table via SQLAlchemy
"""

import os
import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from threading import Lock
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import create_engine, Column, Integer, String, Float, DateTime, Text
from sqlalchemy.orm import declarative_base, sessionmaker

from . import config
from .exceptions import ConfigurationError

logger = logging.getLogger("SizeRecommender.recorder")


def utc_now_iso() -> str:
    """ISO-8601 UTC timestamp with milliseconds and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


class RecommendationRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    match_name: str = Field(alias="matchName")
    handicap_type: str = Field(default="size", alias="handicapType")
    initial_handicap: float = Field(alias="initialHandicap")
    current_handicap: float = Field(alias="currentHandicap")
    initial_water: float = Field(alias="initialWater")
    current_water: float = Field(alias="currentWater")
    historical_record: str = Field(alias="historicalRecord")
    recommendation: str
    details: str
    timestamp: str
    client_info: str = Field(alias="clientInfo")


class RecommendationRecorder(ABC):
    """Sink for computed recommendations."""

    @abstractmethod
    def record(self, entry: RecommendationRecord) -> None:
        ...


class LogRecorder(RecommendationRecorder):
    def record(self, entry: RecommendationRecord) -> None:
        payload = entry.model_dump(by_alias=True)
        payload["loggedAt"] = utc_now_iso()
        logger.info(f"Recommendation record: {json.dumps(payload, ensure_ascii=False)}")


class JsonFileRecorder(RecommendationRecorder):
    """Appends records to a JSON list on disk, keeping the newest max_records."""

    def __init__(self, path: str, max_records: int = 1000):
        self.path = path
        self.max_records = max_records
        self.file_lock = Lock()

    def record(self, entry: RecommendationRecord) -> None:
        payload = entry.model_dump(by_alias=True)
        payload["loggedAt"] = utc_now_iso()

        # load, append and dump as one step; background tasks run in a threadpool
        with self.file_lock:
            records = []
            if os.path.exists(self.path):
                with open(self.path, "r") as f:
                    records = json.load(f)

            records.append(payload)
            records = records[-self.max_records:]

            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)


# --- Database Setup ---
Base = declarative_base()


class RecommendationRow(Base):
    __tablename__ = "recommendations"

    id = Column(Integer, primary_key=True, index=True)
    match_name = Column(String, nullable=False)
    handicap_type = Column(String, nullable=False)
    initial_handicap = Column(Float, nullable=False)
    current_handicap = Column(Float, nullable=False)
    initial_water = Column(Float, nullable=False)
    current_water = Column(Float, nullable=False)
    historical_record = Column(String, nullable=False)
    recommendation = Column(String, nullable=False)
    details = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False)
    client_info = Column(Text)


class SqlRecorder(RecommendationRecorder):
    """
    Writes records to the `recommendations` table.

    The engine is created on the first record() call, so constructing the
    recorder never touches the database. Each call uses its own session.
    """

    def __init__(self, database_url: str):
        self.database_url = database_url
        self._engine = None
        self._session_factory = None

    def _sessions(self):
        if self._session_factory is None:
            self._engine = create_engine(self.database_url, pool_pre_ping=True)
            Base.metadata.create_all(bind=self._engine)
            self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self._engine)
        return self._session_factory

    def record(self, entry: RecommendationRecord) -> None:
        row = RecommendationRow(
            match_name=entry.match_name,
            handicap_type=entry.handicap_type,
            initial_handicap=entry.initial_handicap,
            current_handicap=entry.current_handicap,
            initial_water=entry.initial_water,
            current_water=entry.current_water,
            historical_record=entry.historical_record,
            recommendation=entry.recommendation,
            details=entry.details,
            created_at=parse_timestamp(entry.timestamp),
            client_info=entry.client_info,
        )
        db = self._sessions()()
        try:
            db.add(row)
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def dispose(self):
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None


def build_recorder(
    backend: Optional[str] = None,
    records_file: Optional[str] = None,
    database_url: Optional[str] = None,
) -> RecommendationRecorder:
    backend = (backend or config.RECORDER_BACKEND).strip().lower()
    if backend == "log":
        return LogRecorder()
    if backend == "json":
        return JsonFileRecorder(records_file or config.RECORDS_FILE, max_records=config.RECORDS_LIMIT)
    if backend == "sql":
        url = database_url or config.DATABASE_URL
        if not url:
            logger.warning("RECORDER_BACKEND=sql but DATABASE_URL is not set, falling back to log recorder")
            return LogRecorder()
        return SqlRecorder(url)
    raise ConfigurationError("RECORDER_BACKEND", f"unknown backend '{backend}' (expected log, json or sql)")
