"""Prompts for single-shot AI tasks: resume parsing, question generation and feedback."""

from __future__ import annotations

from domain.models import GenerateQuestionsParams, InterviewType

RESUME_PARSER_PROMPT = """You are a resume parser. Extract information from the resume text and return ONLY valid JSON with this exact structure:
{
  "name": "Full name or null if not found",
  "email": "Email address or null if not found",
  "phone": "Phone number or null if not found",
  "summary": "Professional summary or objective or null if not found",
  "skills": ["skill1", "skill2"],
  "education": [{"school": "School name", "degree": "Degree name", "year": "Year or date range"}],
  "experience": [{"company": "Company name", "role": "Job title", "duration": "Date range", "description": "Brief description of responsibilities"}]
}

Rules:
- Return ONLY the JSON object, no markdown, no explanation
- Use null for fields you cannot find
- Use empty arrays [] if no items found for skills, education, or experience
- Keep descriptions concise (max 100 words each)
- Extract ALL skills mentioned anywhere in the resume"""

FEEDBACK_PROMPT = """You are an interview coach providing feedback on interview answers. Analyze the answer and provide:
1. What was done well
2. Areas for improvement
3. A suggested better answer structure

Keep feedback concise (under 200 words) and constructive."""

QUESTIONS_OUTPUT_RULE = (
    "\n\nReturn ONLY a JSON array of strings with the questions, no explanation. "
    'Example: ["Question 1?", "Question 2?"]'
)

GENERATE_QUESTIONS_REQUEST = "Generate the interview questions."


def build_resume_request(resume_text: str) -> str:
    return f"Parse this resume:\n\n{resume_text}"


def build_feedback_request(question: str, answer: str) -> str:
    return f"Question: {question}\n\nAnswer: {answer}"


def build_questions_prompt(params: GenerateQuestionsParams) -> str:
    """System prompt asking for ``params.question_count`` questions of the given type."""
    count = params.question_count
    interview_type = InterviewType(params.type)

    if interview_type is InterviewType.BEHAVIORAL:
        prompt = (
            f"You are an interview coach. Generate {count} behavioral interview "
            "questions using the STAR method format. Focus on common workplace "
            "scenarios like teamwork, conflict resolution, leadership, and "
            "problem-solving."
        )
    elif interview_type is InterviewType.TECHNICAL:
        focus = (
            f" focused on these skills: {', '.join(params.skills)}"
            if params.skills
            else ""
        )
        prompt = (
            f"You are a technical interviewer. Generate {count} technical interview "
            f"questions{focus}. Include a mix of conceptual and problem-solving "
            "questions."
        )
    else:
        prompt = (
            "You are an interview coach helping someone prepare for an interview "
            f"at {params.company or 'the company'} for the position of "
            f"{params.position or 'the role'}. Generate "
            f"{count} interview questions that are likely to be asked at this "
            "company for this role. Include a mix of behavioral and role-specific "
            "questions."
        )

    return prompt + QUESTIONS_OUTPUT_RULE
