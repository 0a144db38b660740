from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence


Message = Dict[str, str]


def _msg(role: str, content: str) -> Message:
    return {"role": role, "content": content}


def _clean(v: Any) -> str:
    return str(v if v is not None else "").strip()


# -----------------------------
# Resume screening
# -----------------------------
RESUME_SCREENING_SYSTEM = (
    "You are an experienced HR specialist doing first-pass screening of candidates for a vacancy. "
    "The input is a detailed candidate questionnaire: 1. Keywords related to the vacancy. "
    "2. Education (institution, specialization, graduation year). 3. Work experience (companies, positions, "
    "duties, duration). 4. Skills (technical, soft, management). 5. Language proficiency. 6. Cover letter "
    "(if any). 7. Extra requirements: readiness to travel, driver's license, remote work. 8. Expected salary. "
    "9. Recruiter comments. Your task: 1) On the first line state clearly: \"RECOMMENDED\" or "
    "\"NOT RECOMMENDED\" based on how well the candidate fits the position. 2) Right after that give a detailed "
    "justification: key strengths and possible concerns, taking every item above into account. 3) If needed, "
    "list what should be clarified at the next interview stage. Format the answer as several readable "
    "paragraphs useful to a recruiter."
)

LANGUAGE_LEVELS = ["Beginner", "Elementary", "Intermediate", "Upper Intermediate", "Advanced", "Native"]


def _yes_no(flag: Any) -> str:
    return "Yes" if flag else "No"


def resume_screening_prompt(candidate: Dict[str, Any]) -> str:
    education = candidate.get("education") or {}
    languages = candidate.get("languages") or {}

    experience_blocks = []
    for i, exp in enumerate(candidate.get("work_experience") or [], start=1):
        experience_blocks.append(
            f"{i}. {_clean(exp.get('company_name'))}\n"
            f"   Position: {_clean(exp.get('position'))}\n"
            f"   Duration: {_clean(exp.get('duration'))}\n"
            f"   Duties: {_clean(exp.get('duties'))}"
        )
    experience = "\n".join(experience_blocks) or "None provided"

    return f"""Candidate Profile:
Name: {_clean(candidate.get('name'))}
Email: {_clean(candidate.get('email'))}
Keywords: {_clean(candidate.get('keywords'))}

Education:
- University: {_clean(education.get('university'))}
- Specialization: {_clean(education.get('specialization'))}
- Graduation Year: {_clean(education.get('graduation_year'))}

Work Experience:
{experience}

Skills:
- Technical: {_clean(candidate.get('technical_skills'))}
- Soft Skills: {_clean(candidate.get('soft_skills'))}
- Management: {_clean(candidate.get('management_skills'))}

Languages:
- English: {_clean(languages.get('english'))}
- Other Languages: {_clean(languages.get('other'))}

Additional Information:
- Ready to Travel: {_yes_no(candidate.get('ready_to_travel'))}
- Has Driver's License: {_yes_no(candidate.get('has_driver_license'))}
- Open to Remote Work: {_yes_no(candidate.get('remote_work'))}
- Expected Salary: {_clean(candidate.get('expected_salary'))}

Cover Letter:
{_clean(candidate.get('cover_letter'))}

Additional Comments:
{_clean(candidate.get('additional_comments')) or 'None provided'}"""


def resume_screening_messages(candidate: Dict[str, Any]) -> List[Message]:
    return [
        _msg("system", RESUME_SCREENING_SYSTEM),
        _msg("user", resume_screening_prompt(candidate)),
    ]


def is_recommended(reply: str) -> bool:
    text = (reply or "").lower()
    return "recommended" in text and "not recommended" not in text


# -----------------------------
# Interview chat
# -----------------------------
INTERVIEW_OPENING_SYSTEM = (
    "You are an HR specialist conducting a job interview. Ask the first question about the candidate's "
    "previous work experience. Be professional and friendly."
)

INTERVIEW_FOLLOWUP_SYSTEM = """You are an HR specialist conducting a job interview. After each candidate answer:
1. Give a short comment on the answer (1-2 sentences)
2. If it was an answer about work experience, ask the next question about core skills
3. If it was an answer about skills, ask why the candidate wants to work at the company
4. If it was the last answer, thank the candidate for the interview and close the conversation
Be professional and friendly."""


def interview_opening_messages() -> List[Message]:
    return [_msg("system", INTERVIEW_OPENING_SYSTEM)]


def interview_followup_messages(history: Sequence[Message], answer: str) -> List[Message]:
    """Full transcript every turn: system script, prior turns, new answer."""
    turns = [_msg(m["role"], m["content"]) for m in history if m.get("role") in ("user", "assistant")]
    return [_msg("system", INTERVIEW_FOLLOWUP_SYSTEM), *turns, _msg("user", answer.strip())]


# -----------------------------
# Onboarding
# -----------------------------
@dataclass(frozen=True)
class OnboardingStep:
    title: str
    context: str
    prompt: str


ONBOARDING_STEPS: List[OnboardingStep] = [
    OnboardingStep(
        title="Welcome to the company",
        context="welcome",
        prompt=(
            "STEP: welcome\nROLE: HR assistant holds the first meeting with a new employee\n"
            "TASK: Introduce the company values\nPREVIOUS_STEPS: none\nNEXT_STEP: workplace safety\n\n"
            "INSTRUCTIONS:\n1. Greet the new employee\n2. Present the three core company values:\n"
            "- Mutual respect (freedom to speak your mind)\n- Growth (professional development)\n"
            "- Innovation (new ideas are encouraged)\n3. Point to portal X for details\n"
            "4. Give the HR contact (hr@X)\n5. Ask two questions about values and expectations"
        ),
    ),
    OnboardingStep(
        title="Workplace safety",
        context="safety",
        prompt=(
            "STEP: safety\nROLE: HR assistant runs the safety briefing\n"
            "TASK: Explain the workplace safety rules\nPREVIOUS_STEPS: company values\nNEXT_STEP: corporate email\n\n"
            "INSTRUCTIONS:\n1. Greet briefly\n2. Explain the three key safety rules:\n"
            "- Read the safety manual (portal Y)\n- Use protective equipment\n"
            "- Emergency procedure (service Z, number 123)\n"
            "3. Ask questions about why the measures matter and what to do when something breaks"
        ),
    ),
    OnboardingStep(
        title="Corporate email",
        context="email",
        prompt=(
            "STEP: email\nROLE: HR assistant explains the mailbox setup\n"
            "TASK: Explain how to activate the corporate email\nPREVIOUS_STEPS: workplace safety\n"
            "NEXT_STEP: system access\n\n"
            "INSTRUCTIONS:\n1. Greet briefly\n2. Explain mailbox activation:\n"
            "- Send a request to it-support@X with your ID\n- Wait for instructions\n- Security rules\n"
            "3. Ask questions about security and communication channels"
        ),
    ),
    OnboardingStep(
        title="System access",
        context="systems",
        prompt=(
            "STEP: systems\nROLE: HR assistant explains the internal systems\n"
            "TASK: Describe access to corporate systems\nPREVIOUS_STEPS: corporate email\n"
            "NEXT_STEP: onboarding complete\n\n"
            "INSTRUCTIONS:\n1. Greet briefly\n2. Present three systems:\n- CRM Y (clients)\n"
            "- Portal Z (documentation)\n- System W (tasks)\n3. Explain access via portal-access@X\n"
            "4. Remind to change the temporary password\n5. Ask questions about why the systems matter and how to keep them secure"
        ),
    ),
]


def onboarding_system_prompt(context: str) -> str:
    return f"""You are an HR assistant onboarding a new employee. Current step: {context}.

RULES:
1. Stick strictly to the context of the current step
2. Do not repeat information from previous steps
3. Use a friendly, informal tone
4. One or two emoji per message
5. Clear structure: greeting -> information -> questions

FORBIDDEN:
- Mixing topics from different steps
- Repeating what was already covered
- Formal language
- Overusing emoji"""


def onboarding_step_messages(step_index: int, history: Sequence[Message] = ()) -> List[Message]:
    if not 0 <= step_index < len(ONBOARDING_STEPS):
        raise IndexError(f"Unknown onboarding step: {step_index}")
    step = ONBOARDING_STEPS[step_index]
    turns = [_msg(m["role"], m["content"]) for m in history]
    return [_msg("system", onboarding_system_prompt(step.context)), *turns, _msg("user", step.prompt)]


def onboarding_progress(step_index: int) -> float:
    """Share of steps reached, 0..1 (step 0 counts as started)."""
    total = len(ONBOARDING_STEPS)
    return min(max(step_index + 1, 0), total) / total


# -----------------------------
# Vacancy generation
# -----------------------------
JOB_TYPES = ["Full-time", "Part-time", "Remote"]
POSITION_LEVELS = ["Junior", "Middle", "Senior", "Lead"]

VACANCY_SYSTEM = """You are an experienced HR specialist writing a job description from form data.
You may receive the following fields:
- Job title
- Employment type (full-time, part-time, remote)
- Position level (Junior, Middle, Senior, Lead)
- Skill categories (technical, soft, languages), possibly with proficiency levels
- Desired (optional) skills
- Short vacancy description (2-3 sentences)
- Salary information
- Location and any additional information

WHEN WRITING THE TEXT:
1. Keep the strict answer structure:
   1) Short vacancy description (1-2 paragraphs)
   2) List of required skills (one per line, starting with "- ")
   3) Salary information (1 line)
   4) Recommended interview questions (3-4 questions, one per line, starting with "- ")
2. If some information is missing (e.g. position level or desired skills), simply do not mention it.
3. If employment type and position level are given, reflect them in the description.
4. If skill proficiency is given you may highlight it, but do not change the answer structure.
5. Most importantly, do not break the existing integration: the four parts must keep the format where sections start with "1)", "2)", "3)", "4)".

Your answer must look like:

1) <Short description: 1-2 paragraphs>

2) <Skills, one per line, prefixed with "- ">

3) <Salary information on one line>

4) <3-4 questions, one per line, prefixed with "- ">

If something was not provided, just leave it out."""

VACANCY_FIELDS = [
    ("job_title", "Job title"),
    ("job_type", "Employment type"),
    ("position_level", "Position level"),
    ("short_description", "Short description"),
    ("location", "Location"),
    ("salary_range", "Salary range"),
]


def vacancy_prompt(form: Dict[str, Any]) -> str:
    lines = [f"{label}: {_clean(form.get(key))}" for key, label in VACANCY_FIELDS if _clean(form.get(key))]

    skills = [
        (label, _clean(form.get(key)))
        for key, label in (
            ("technical_skills", "Technical"),
            ("soft_skills", "Soft skills"),
            ("language_skills", "Languages"),
        )
    ]
    skills = [(label, value) for label, value in skills if value]
    if skills:
        lines.append("")
        lines.append("Required skills:")
        lines.extend(f"- {label}: {value}" for label, value in skills)

    desired = _clean(form.get("desired_skills"))
    if desired:
        lines.append("")
        lines.append(f"Desired skills: {desired}")

    return "\n".join(lines)


def vacancy_messages(form: Dict[str, Any]) -> List[Message]:
    return [_msg("system", VACANCY_SYSTEM), _msg("user", vacancy_prompt(form))]


# -----------------------------
# Analytics report
# -----------------------------
ANALYTICS_SYSTEM = (
    "You are a professional HR analyst. You receive the company's HR metrics: total headcount, active "
    "employees, staff turnover rate (percent) and average training hours per employee. You need to: "
    "1) Give a thorough but clear analysis of each metric: why it may look like this, what it affects, "
    "potential risks or advantages. 2) Suggest at least 2-3 concrete recommendations to improve or sustain the "
    "current numbers, phrased so they can be applied in practice (employee surveys, training program review, "
    "working conditions, motivation programs, etc.). 3) Structure the text into several logical blocks or "
    "short subheadings; lists are welcome. 4) Be detailed enough for an HR specialist to understand the "
    "numbers and how to actually improve the situation."
)


def analytics_report_messages(metrics: Dict[str, Any], note: Optional[str] = None) -> List[Message]:
    user = (
        "Analyze the following HR metrics:\n"
        f"- Total employees: {metrics.get('total_employees', 0)}\n"
        f"- Active employees: {metrics.get('active_employees', 0)}\n"
        f"- Turnover rate: {metrics.get('turnover_rate', 0)}%\n"
        f"- Average training hours: {metrics.get('avg_training_hours', 0)}\n\n"
        "Give a short analysis of the situation and 2-3 concrete recommendations for improving the metrics."
    )
    if note:
        user += f"\n\nAdditional context: {note.strip()}"
    return [_msg("system", ANALYTICS_SYSTEM), _msg("user", user)]
