from domain.models import ApplicationStatus, Experience, GenerateQuestionsParams, InterviewType
from domain.prompts import (
    RESUME_PARSER_PROMPT,
    build_assistant_system_prompt,
    build_feedback_request,
    build_questions_prompt,
    build_resume_request,
)
from test.fixtures import make_application, make_profile


def test_system_prompt_without_context_has_only_preamble_and_instructions() -> None:
    prompt = build_assistant_system_prompt(profile=None, applications=[])
    assert prompt.startswith("You are a personalized career assistant.\n\nINSTRUCTIONS:")
    assert "USER PROFILE" not in prompt
    assert "ACTIVE JOB APPLICATIONS" not in prompt


def test_system_prompt_profile_section() -> None:
    profile = make_profile(
        name="Jane",
        skills=["Python", "SQL"],
        experience=[
            Experience(company=f"Co{i}", role="Engineer", duration=f"{i} years") for i in range(1, 5)
        ],
    )
    prompt = build_assistant_system_prompt(profile=profile, applications=[])

    assert "USER PROFILE:\n- Name: Jane\n- Skills: Python, SQL\n- Experience:" in prompt
    assert "  • Engineer at Co1 (1 years)" in prompt
    assert "Co3" in prompt
    assert "Co4" not in prompt


def test_system_prompt_skips_profile_without_name_or_skills() -> None:
    profile = make_profile(email="jane@example.com")
    assert "USER PROFILE" not in build_assistant_system_prompt(profile=profile, applications=[])


def test_system_prompt_lists_at_most_ten_applications() -> None:
    apps = [
        make_application(id=str(i), company=f"Company {i}", status=ApplicationStatus.APPLIED)
        for i in range(12)
    ]
    prompt = build_assistant_system_prompt(profile=None, applications=apps)
    assert "ACTIVE JOB APPLICATIONS:\n- Company 0: Engineer (Applied)" in prompt
    assert "Company 9:" in prompt
    assert "Company 10:" not in prompt


def test_resume_prompt_asks_for_json() -> None:
    assert "return ONLY valid JSON" in RESUME_PARSER_PROMPT
    assert build_resume_request("text") == "Parse this resume:\n\ntext"


def test_feedback_request_layout() -> None:
    assert build_feedback_request("Why?", "Because.") == "Question: Why?\n\nAnswer: Because."


def test_questions_prompt_per_type() -> None:
    behavioral = build_questions_prompt(GenerateQuestionsParams(type=InterviewType.BEHAVIORAL))
    technical = build_questions_prompt(
        GenerateQuestionsParams(type=InterviewType.TECHNICAL, skills=("Go", "SQL"), question_count=3)
    )
    company = build_questions_prompt(
        GenerateQuestionsParams(
            type=InterviewType.COMPANY_SPECIFIC, company="Globex", position="SRE"
        )
    )

    assert "Generate 5 behavioral interview questions" in behavioral
    assert "STAR" in behavioral
    assert "Generate 3 technical interview questions focused on these skills: Go, SQL." in technical
    assert "at Globex for the position of SRE" in company
    for prompt in (behavioral, technical, company):
        assert prompt.endswith('Example: ["Question 1?", "Question 2?"]')
