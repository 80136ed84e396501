"""
Global fixtures for all unit tests.

Provides:
- Environment isolation so a developer's .env never points tests at a real
  pdf-service
- Validated sample resumes shared across renderer tests
"""

import os

import pytest

from fixtures.sample_resumes import (
    FULL_RESUME,
    GROUPED_ROLES_RESUME,
    MINIMAL_RESUME,
    build_resume,
)

# Set test environment BEFORE any imports to prevent Config from loading real values
os.environ["ENVIRONMENT"] = "development"
os.environ["PDF_SERVICE_URL"] = "http://pdf-service.test:8001"


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Keep tests away from real services and noisy debug logging."""
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("PDF_SERVICE_URL", "http://pdf-service.test:8001")


@pytest.fixture
def full_resume():
    return build_resume(FULL_RESUME)


@pytest.fixture
def grouped_resume():
    return build_resume(GROUPED_ROLES_RESUME)


@pytest.fixture
def minimal_resume():
    return build_resume(MINIMAL_RESUME)
