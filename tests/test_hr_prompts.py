from __future__ import annotations

import pytest

from backend.app.services.hr_prompts import (
    ONBOARDING_STEPS,
    analytics_report_messages,
    interview_followup_messages,
    interview_opening_messages,
    is_recommended,
    onboarding_progress,
    onboarding_step_messages,
    resume_screening_messages,
    vacancy_messages,
)


def test_every_builder_produces_valid_gateway_messages() -> None:
    batches = [
        resume_screening_messages({"name": "Anna"}),
        interview_opening_messages(),
        interview_followup_messages([{"role": "assistant", "content": "Q1"}], "A1"),
        onboarding_step_messages(0),
        vacancy_messages({"job_title": "Dev"}),
        analytics_report_messages({"total_employees": 8}),
    ]
    for messages in batches:
        assert messages
        for m in messages:
            assert m["role"] in {"system", "user", "assistant"}
            assert m["content"].strip()


def test_resume_prompt_includes_experience_and_flags() -> None:
    candidate = {
        "name": "Anna",
        "work_experience": [{"company_name": "ACME", "position": "Dev", "duration": "2y", "duties": "APIs"}],
        "ready_to_travel": True,
        "has_driver_license": False,
    }
    prompt = resume_screening_messages(candidate)[1]["content"]

    assert "1. ACME" in prompt
    assert "Position: Dev" in prompt
    assert "Ready to Travel: Yes" in prompt
    assert "Has Driver's License: No" in prompt
    assert "Additional Comments:\nNone provided" in prompt


@pytest.mark.parametrize(
    "reply, expected",
    [
        ("RECOMMENDED\nStrong Python background.", True),
        ("NOT RECOMMENDED\nNo relevant experience.", False),
        ("Hard to say.", False),
    ],
)
def test_is_recommended(reply, expected) -> None:
    assert is_recommended(reply) is expected


def test_interview_followup_resends_full_transcript() -> None:
    history = [
        {"role": "assistant", "content": "Tell me about your experience."},
        {"role": "user", "content": "Five years of Python."},
        {"role": "assistant", "content": "What are your core skills?"},
    ]
    messages = interview_followup_messages(history, "  APIs and SQL  ")

    assert messages[0]["role"] == "system"
    assert messages[1:4] == history
    assert messages[-1] == {"role": "user", "content": "APIs and SQL"}


def test_onboarding_step_messages_carry_context_and_history() -> None:
    history = [{"role": "user", "content": "step 0"}, {"role": "assistant", "content": "welcome!"}]
    messages = onboarding_step_messages(1, history)

    assert "Current step: safety" in messages[0]["content"]
    assert messages[1:3] == history
    assert messages[-1]["content"] == ONBOARDING_STEPS[1].prompt


def test_onboarding_unknown_step() -> None:
    with pytest.raises(IndexError):
        onboarding_step_messages(len(ONBOARDING_STEPS))


def test_onboarding_progress() -> None:
    assert onboarding_progress(0) == 0.25
    assert onboarding_progress(3) == 1.0


def test_vacancy_prompt_omits_empty_fields() -> None:
    prompt = vacancy_messages({"job_title": "Data Engineer", "technical_skills": "Spark", "location": ""})[1]["content"]

    assert "Job title: Data Engineer" in prompt
    assert "- Technical: Spark" in prompt
    assert "Location" not in prompt
    assert "Desired skills" not in prompt


def test_vacancy_system_prompt_demands_numbered_sections() -> None:
    system = vacancy_messages({"job_title": "Dev"})[0]["content"]
    for marker in ("1)", "2)", "3)", "4)"):
        assert marker in system


def test_analytics_report_lists_metrics() -> None:
    user = analytics_report_messages({"total_employees": 8, "turnover_rate": 25})[1]["content"]
    assert "Total employees: 8" in user
    assert "Turnover rate: 25%" in user
