"""
Shared test fixtures.

Provides:
- An in-memory SQLite store (one per test)
- Fake LLM clients for the narrative gateway
- A ChartService and an API client wired to them
- A `filled_record` factory for charts that pass save validation
"""
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tcmchart.chart.kinds import ChartType
from tcmchart.chart.schema import ClinicInfo, new_record
from tcmchart.chart.updates import set_field
from tcmchart.db import Base
from tcmchart.llm import LLMClient
from tcmchart.narrative import NarrativeGateway
from tcmchart.services import ChartService
from tcmchart.store import RecordStore


class FakeLLMClient(LLMClient):
    """Returns a canned reply, or raises `error` when given one."""

    def __init__(self, reply: str = "Generated narrative.", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: List[List[Dict[str, str]]] = []

    def chat(self, messages, temperature=None, model=None) -> str:
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.reply


def _memory_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


# ============================================================================
# Storage
# ============================================================================

@pytest.fixture
def session_factory():
    import tcmchart.models  # noqa: F401  registers StoredValue on Base

    engine = _memory_engine()
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    return RecordStore(session_factory)


@pytest.fixture
def broken_store():
    """
    Store whose database has no tables, so every read and write fails.
    """
    engine = _memory_engine()
    yield RecordStore(sessionmaker(bind=engine))
    engine.dispose()


# ============================================================================
# Narratives
# ============================================================================

@pytest.fixture
def llm():
    return FakeLLMClient()


@pytest.fixture
def failing_llm():
    return FakeLLMClient(error=RuntimeError("connection refused"))


@pytest.fixture
def gateway(llm):
    return NarrativeGateway(llm)


# ============================================================================
# Service and API
# ============================================================================

@pytest.fixture
def service(store, gateway):
    return ChartService(store=store, gateway=gateway)


@pytest.fixture
def api_client(service):
    from tcmchart.api.routes import get_chart_service
    from tcmchart.main import app

    app.dependency_overrides[get_chart_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


# ============================================================================
# Records
# ============================================================================

@pytest.fixture
def clinic():
    return ClinicInfo(
        clinic_name="Harmony Acupuncture",
        clinic_logo="",
        therapist_name="Dr. Lin",
        therapist_lic_no="AC-1234",
    )


@pytest.fixture
def filled_record(clinic):
    """
    Factory for a chart with every required field filled in.
    """

    def make(
        file_no: str = "A-001",
        chart_type: ChartType = ChartType.NEW,
        sex: str = "F",
        age: int = 42,
        date: str = "2024-03-01",
    ):
        record = new_record(chart_type, clinic)
        record = set_field(record, "fileNo", file_no)
        record = set_field(record, "sex", sex)
        record = set_field(record, "age", age)
        return set_field(record, "date", date)

    return make
