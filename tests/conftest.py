"""Shared test fixtures."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from elevate_cv.clients.llm_client import LLMClient, LLMResponse
from elevate_cv.clients.search_client import SearchClient
from elevate_cv.config import AppConfig
from elevate_cv.models.draft import GeneratedDraft
from elevate_cv.pipeline.career_agent import CareerAgent


def llm_text(text: str) -> LLMResponse:
    return LLMResponse(text=text, input_tokens=100, output_tokens=50)


@pytest.fixture
def sample_goal() -> str:
    return "Lead Product Designer at Airbnb"


@pytest.fixture
def sample_cv_text() -> str:
    return """Jane Doe
jane@example.com | Berlin

Experience:
- Acme Corp (2020 - present) - Backend Engineer
  - Built REST APIs in Python/Django serving 2M requests a day
  - Cut p95 latency by 40% with Redis caching

Skills: Python, Django, PostgreSQL, Redis, Docker
"""


@pytest.fixture
def sample_jd_text() -> str:
    return """Senior Platform Engineer

Requirements:
- 5+ years building backend services
- Kubernetes and Terraform in production
- Event streaming with Kafka
- Observability with Prometheus and Grafana
"""


@pytest.fixture
def draft_payload() -> dict:
    return {
        "mode": "generate",
        "suggested_skills": [
            "Design Systems", "Figma", "User Research", "Prototyping",
            "Accessibility", "Interaction Design", "Stakeholder Management", "A/B Testing",
        ],
        "suggested_sections": [
            {"title": "Professional Summary", "content": "Product designer with [X] years..."},
            {"title": "Experience", "content": "[Company] - Senior Designer\n- Led redesign of [product]"},
            {"title": "Projects", "content": "Design system for [team]"},
            {"title": "Education", "content": "[Degree], [University]"},
        ],
        "theme": "creative",
        "niche_summary": "Lead Product Designer",
        "canva_cta": True,
    }


@pytest.fixture
def draft_json(draft_payload) -> str:
    return json.dumps(draft_payload)


@pytest.fixture
def sample_draft(draft_payload) -> GeneratedDraft:
    return GeneratedDraft.model_validate(draft_payload)


def make_gap_payload(gap_count: int = 4, courses_per_gap: int = 3) -> dict:
    skills = ["Kubernetes", "Terraform", "Kafka", "Prometheus", "Grafana", "Go"]
    return {
        "mode": "check",
        "skill_gaps": [
            {
                "skill": skills[g],
                "courses": [
                    {
                        "course_name": f"{skills[g]} Course {c + 1}",
                        "platform": ["Coursera", "edX", "Udemy"][c % 3],
                        "url": f"https://courses.example.com/{skills[g].lower()}/{c + 1}",
                    }
                    for c in range(courses_per_gap)
                ],
            }
            for g in range(gap_count)
        ],
    }


@pytest.fixture
def gap_payload() -> dict:
    return make_gap_payload()


@pytest.fixture
def gap_json(gap_payload) -> str:
    return json.dumps(gap_payload)


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(return_value=llm_text("{}"))
    return client


@pytest.fixture
def mock_search_client() -> SearchClient:
    """Create a mock search client."""
    client = AsyncMock(spec=SearchClient)
    client.search = AsyncMock(
        return_value=[
            {
                "title": "Kubernetes for Developers",
                "url": "https://www.coursera.org/learn/kubernetes",
                "content": "Learn to deploy apps on Kubernetes",
            },
            {
                "title": "Terraform Fundamentals",
                "url": "https://www.edx.org/terraform",
                "content": "Infrastructure as code",
            },
        ]
    )
    return client


@pytest.fixture
def agent(mock_llm_client, app_config) -> CareerAgent:
    return CareerAgent(mock_llm_client, app_config)
