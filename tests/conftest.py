"""
Shared fixtures: resume documents and isolated databases.
"""

import os

# Set test environment before any app module reads settings
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-unit-tests-0123456789")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("SECURITY_MODE", "development")

import pytest

from core.resume.schemas import Document


FULL_DOCUMENT = {
    "layout": "classic",
    "contact": {
        "fullName": "Jane Doe",
        "title": "Senior Backend Engineer",
        "phone": "+1 555 0100",
        "email": "jane@example.com",
        "location": "Berlin, Germany",
        "linkedin": "https://linkedin.com/in/janedoe",
        "github": "https://github.com/janedoe",
        "portfolio": "https://janedoe.dev",
    },
    "summary": "Backend engineer with ten years of experience building payment systems.",
    "skills": {
        "languages": ["Python", "Go", "SQL"],
        "frameworks": ["FastAPI", "Django"],
        "databases": ["PostgreSQL"],
        "tools": [],
        "dataScience": ["pandas"],
    },
    "experience": [
        {
            "title": "Staff Engineer",
            "company": "Acme Payments",
            "location": "Berlin",
            "startDate": "2019-03",
            "endDate": "",
            "achievements": [
                "Cut settlement latency by 40%",
                "Led the migration to event sourcing",
            ],
            "technologies": ["Python", "Kafka"],
        },
        {
            "title": "Backend Engineer",
            "company": "Globex",
            "startDate": "2015-01",
            "endDate": "2019-02",
            "achievements": ["Built the billing API"],
        },
    ],
    "projects": [
        {
            "name": "ledgerkit",
            "description": "Double-entry ledger library.",
            "role": "Maintainer",
            "technologies": ["Python"],
            "link": "https://github.com/janedoe/ledgerkit",
        }
    ],
    "education": [
        {"degree": "BSc Computer Science", "institution": "TU Berlin", "year": "2014"}
    ],
    "certifications": [
        {
            "name": "AWS Solutions Architect",
            "authority": "Amazon",
            "date": "2021",
            "credentialId": "ABC-123",
            "link": "https://aws.example.com/verify/ABC-123",
        }
    ],
}

HEADER_ONLY_DOCUMENT = {
    "contact": {"fullName": "John Smith", "email": "john@example.com"},
}


@pytest.fixture
def full_payload():
    import copy
    return copy.deepcopy(FULL_DOCUMENT)


@pytest.fixture
def full_document(full_payload):
    return Document.model_validate(full_payload)


@pytest.fixture
def header_only_document():
    return Document.model_validate(HEADER_ONLY_DOCUMENT)


@pytest.fixture
def long_document(full_payload):
    """Enough experience entries to overflow one A4 page."""
    entry = full_payload["experience"][0]
    full_payload["experience"] = [
        dict(entry, title=f"Engineer {i}", achievements=[
            "Delivered a long running project with many moving parts and stakeholders " * 2
        ] * 4)
        for i in range(14)
    ]
    return Document.model_validate(full_payload)


# ==================== API fixtures ====================


@pytest.fixture
def auth_service(tmp_path):
    from core.auth.database import UserDatabase
    from core.auth.service import AuthService

    db = UserDatabase(tmp_path / "users.db")
    yield AuthService(db=db)
    db.close()


@pytest.fixture
def app_client(auth_service):
    """TestClient with the auth service pointed at a temporary database."""
    from fastapi.testclient import TestClient

    from api.main import app
    from core.auth import get_auth_service

    app.dependency_overrides[get_auth_service] = lambda: auth_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(auth_service):
    """Bearer header for a freshly registered user."""
    from core.auth.models import UserCreate

    _, tokens = auth_service.register_user(
        UserCreate(email="owner@example.com", password="correct-horse-battery", name="Owner")
    )
    return {"Authorization": f"Bearer {tokens.access_token}"}
