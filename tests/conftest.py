"""Shared test fixtures for all test modules."""

import io
import json
from typing import Any

import pytest

from meterexport.core.clock import MockClock
from meterexport.core.encoding.bulk import INDEX_ACTION, BulkDocumentWriter


@pytest.fixture
def clock() -> MockClock:
    """Provide a mock clock starting at the epoch."""
    return MockClock()


@pytest.fixture
def sink() -> io.StringIO:
    """Provide an in-memory text sink."""
    return io.StringIO()


@pytest.fixture
def writer() -> BulkDocumentWriter:
    """Provide a writer with the default identity naming convention."""
    return BulkDocumentWriter()


@pytest.fixture
def parse_documents():
    """Factory fixture that splits a bulk payload into parsed documents.

    Asserts that every document is preceded by the index action line and
    returns the documents in order.
    """

    def _parse(payload: str) -> list[dict[str, Any]]:
        lines = payload.splitlines(keepends=True)
        assert len(lines) % 2 == 0
        documents = []
        for action, body in zip(lines[::2], lines[1::2], strict=True):
            assert action == INDEX_ACTION
            documents.append(json.loads(body))
        return documents

    return _parse
