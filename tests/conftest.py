"""Shared fixtures: sample resumes, temporary storage and a scripted LLM provider."""

import json
import time

import pytest

from hireme.contexts.analysis.client import AnalysisClient
from hireme.contexts.editing.resume_data_structure import (
    Education,
    Experience,
    PersonalInfo,
    ResumeData,
    Skill,
    SkillLevel,
)
from hireme.contexts.editing.storage import JsonFileStorage
from hireme.contexts.editing.store import ResumeStore
from hireme.utils.llm import LLMResponse


class FakeProvider:
    """
    Stand-in for an LLM provider.

    Each reply is either a string (returned as the response content) or an
    exception (raised from generate). Calls are recorded for inspection.
    """

    def __init__(self, *replies, delay: float = 0.0, name: str = "fake/model"):
        self.replies = list(replies)
        self.delay = delay
        self.name = name
        self.calls = []

    def generate(self, system_prompt, user_prompt, response_schema=None):
        self.calls.append((system_prompt, user_prompt, response_schema))
        if self.delay:
            time.sleep(self.delay)
        reply = self.replies.pop(0) if self.replies else ""
        if isinstance(reply, Exception):
            raise reply
        return LLMResponse(content=reply, model=self.name, input_tokens=0, output_tokens=0)


def make_client(provider: FakeProvider, timeout_s: float = 5.0) -> AnalysisClient:
    """AnalysisClient whose every model resolves to provider."""
    return AnalysisClient(
        provider_name="gemini",
        timeout_s=timeout_s,
        provider_factory=lambda provider_name, model: provider,
    )


ANALYSIS_REPLY = json.dumps(
    {
        "score": 82,
        "atsCompatibility": "High",
        "keywordMatches": ["Python", "AWS"],
        "missingKeywords": ["Kubernetes"],
        "suggestions": "Mention container orchestration experience.",
    }
)


@pytest.fixture
def sample_resume():
    """A filled-in resume with one of each list item."""
    return ResumeData(
        personal_info=PersonalInfo(
            full_name="Jane Doe",
            email="jane@example.com",
            phone="555-0100",
            location="Berlin",
            linkedin="linkedin.com/in/janedoe",
            portfolio="",
            summary="Backend engineer focused on data platforms.",
        ),
        experience=(
            Experience(
                id="1",
                role="Engineer",
                company="Acme",
                start_date="2020",
                end_date="2022",
                current=False,
                description="Built ingestion pipelines.",
            ),
        ),
        education=(Education(id="2", degree="BSc Computer Science", school="TU Berlin", year="2019"),),
        skills=(Skill(id="3", name="Python", level=SkillLevel.EXPERT),),
        target_job_description="Senior Python engineer with AWS experience.",
    )


@pytest.fixture
def storage(tmp_path):
    return JsonFileStorage(tmp_path / "local_storage.json")


@pytest.fixture
def store(storage):
    return ResumeStore(storage)
