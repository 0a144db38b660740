from __future__ import annotations

import html
import os
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
import requests
import streamlit as st

from backend.app.services.hr_prompts import (
    JOB_TYPES,
    LANGUAGE_LEVELS,
    ONBOARDING_STEPS,
    POSITION_LEVELS,
    analytics_report_messages,
    interview_followup_messages,
    interview_opening_messages,
    is_recommended,
    onboarding_progress,
    onboarding_step_messages,
    resume_screening_messages,
    vacancy_messages,
)
from backend.app.services.vacancy_parser import strip_bullet

# =============================================================================
# HR Assist - Streamlit front end
# =============================================================================
API_BASE = os.getenv("HR_ASSIST_API_BASE_URL", "http://localhost:8000").rstrip("/")

APP_BRAND = "HR Assist"
FLASH_ERROR_KEY = "flash_error"

PAGE_HOME = "Home"
PAGE_SCREENING = "Resume screening"
PAGE_INTERVIEW = "Interview bot"
PAGE_VACANCY = "Vacancy bot"
PAGE_ONBOARDING = "Onboarding"
PAGE_ANALYTICS = "Analytics"

FEATURES = [
    (PAGE_SCREENING, "Automatic analysis and shortlisting of candidate resumes"),
    (PAGE_INTERVIEW, "An assistant that runs first-round interviews"),
    (PAGE_VACANCY, "Generate vacancy descriptions with skills, salary and interview questions"),
    (PAGE_ONBOARDING, "Step-by-step introduction for new employees"),
    (PAGE_ANALYTICS, "HR metrics with an AI-written report"),
]


# ==============================
# API helpers (MUST BE TOP-LEVEL)
# ==============================

def api_url(path: str) -> str:
    p = (path or "").strip()
    if not p.startswith("/"):
        p = "/" + p
    return API_BASE + p


class ApiResponse:
    def __init__(self, ok: bool, data=None, status: int | None = None, error: str | None = None):
        self.ok = ok
        self.data = data
        self.status = status
        self.error = error


def _error_text(r: requests.Response) -> str:
    try:
        body = r.json()
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
    except ValueError:
        pass
    return r.text or f"HTTP {r.status_code}"


def api_get(path: str, timeout: int = 30) -> ApiResponse:
    try:
        r = requests.get(api_url(path), timeout=timeout)
    except requests.RequestException as e:
        return ApiResponse(False, None, None, f"Backend unreachable: {e}")
    if r.ok:
        return ApiResponse(True, r.json() if r.content else None, r.status_code)
    return ApiResponse(False, None, r.status_code, _error_text(r))


def api_post(path: str, payload: dict | None = None, timeout: int = 90) -> ApiResponse:
    try:
        r = requests.post(api_url(path), json=(payload or {}), timeout=timeout)
    except requests.RequestException as e:
        return ApiResponse(False, None, None, f"Backend unreachable: {e}")
    if r.ok:
        return ApiResponse(True, r.json() if r.content else None, r.status_code)
    return ApiResponse(False, None, r.status_code, _error_text(r))


def model_reply(messages: List[Dict[str, str]]) -> Tuple[Optional[str], Optional[str]]:
    """One gateway call. Returns (reply, None) or (None, error text)."""
    res = api_post("/api/openai", {"messages": messages})
    if not res.ok:
        return None, res.error or "Request failed."
    content = ((res.data or {}).get("response") or {}).get("content")
    if not content:
        return None, "Invalid response format"
    return content, None


def ask_model(messages: List[Dict[str, str]], flash: bool = False) -> Optional[str]:
    """
    Returns the reply text, or None after reporting the error; the user
    resubmits, the page never retries on its own.

    flash=True keeps the error in session state so it survives an
    immediate st.rerun().
    """
    reply, error = model_reply(messages)
    if error:
        if flash:
            st.session_state[FLASH_ERROR_KEY] = error
        else:
            st.error(error)
    return reply


def show_flash_error() -> None:
    error = st.session_state.pop(FLASH_ERROR_KEY, None)
    if error:
        st.error(error)


# =============================================================================
# UI helpers
# =============================================================================

def card(title: str, subtitle: str = "") -> None:
    st.markdown(f"### {html.escape(title)}")
    if subtitle:
        st.caption(subtitle)


def bullets(items: List[str]) -> None:
    for it in items:
        st.markdown(f"- {strip_bullet(it)}")


# =============================================================================
# Pages
# =============================================================================

def render_home_page() -> None:
    card(APP_BRAND, "AI helpers for everyday HR processes")
    cols = st.columns(len(FEATURES))
    for col, (page, description) in zip(cols, FEATURES):
        with col:
            st.markdown(f"**{page}**")
            st.caption(description)
            if st.button("Open", key=f"home_{page}", use_container_width=True):
                st.session_state["page"] = page
                st.rerun()


def render_screening_page() -> None:
    card(PAGE_SCREENING, "Fill in the candidate questionnaire and get a recommendation.")

    if "work_experience_rows" not in st.session_state:
        st.session_state["work_experience_rows"] = 1

    c1, c2 = st.columns(2)
    with c1:
        if st.button("Add work experience"):
            st.session_state["work_experience_rows"] += 1
    with c2:
        if st.button("Remove last", disabled=st.session_state["work_experience_rows"] <= 1):
            st.session_state["work_experience_rows"] -= 1

    with st.form("screening_form"):
        name = st.text_input("Full name")
        email = st.text_input("Email")
        keywords = st.text_input("Keywords")

        st.markdown("**Education**")
        university = st.text_input("University")
        specialization = st.text_input("Specialization")
        graduation_year = st.text_input("Graduation year")

        st.markdown("**Work experience**")
        experience: List[Dict[str, str]] = []
        for i in range(st.session_state["work_experience_rows"]):
            e1, e2 = st.columns(2)
            with e1:
                company = st.text_input("Company", key=f"exp_company_{i}")
                position = st.text_input("Position", key=f"exp_position_{i}")
            with e2:
                duration = st.text_input("Duration", key=f"exp_duration_{i}")
                duties = st.text_area("Duties", key=f"exp_duties_{i}", height=80)
            experience.append({"company_name": company, "position": position, "duration": duration, "duties": duties})

        st.markdown("**Skills**")
        technical = st.text_area("Technical skills", height=70)
        soft = st.text_area("Soft skills", height=70)
        management = st.text_area("Management skills", height=70)

        st.markdown("**Languages**")
        english = st.selectbox("English", LANGUAGE_LEVELS, index=2)
        other_languages = st.text_input("Other languages")

        cover_letter = st.text_area("Cover letter", height=120)
        resume_file = st.file_uploader("Resume file (PDF/Word)", type=["pdf", "doc", "docx"])
        f1, f2, f3 = st.columns(3)
        with f1:
            ready_to_travel = st.checkbox("Ready to travel")
        with f2:
            has_license = st.checkbox("Driver's license")
        with f3:
            remote = st.checkbox("Open to remote work")
        expected_salary = st.text_input("Expected salary")
        comments = st.text_area("Recruiter comments", height=80)

        submitted = st.form_submit_button("Analyze resume", use_container_width=True)

    if not submitted:
        return
    if not name.strip() or not email.strip():
        st.warning("Name and email are required.")
        return

    candidate = {
        "name": name,
        "email": email,
        "keywords": keywords,
        "education": {"university": university, "specialization": specialization, "graduation_year": graduation_year},
        "work_experience": experience,
        "technical_skills": technical,
        "soft_skills": soft,
        "management_skills": management,
        "languages": {"english": english, "other": other_languages},
        "cover_letter": cover_letter,
        "ready_to_travel": ready_to_travel,
        "has_driver_license": has_license,
        "remote_work": remote,
        "expected_salary": expected_salary,
        "additional_comments": comments,
    }
    if resume_file is not None:
        candidate["additional_comments"] = f"{comments}\nAttached resume file: {resume_file.name}".strip()

    with st.spinner("Analyzing candidate..."):
        reply = ask_model(resume_screening_messages(candidate))
    if reply is None:
        return

    if is_recommended(reply):
        st.success("Recommended")
    else:
        st.error("Not recommended")
    st.markdown(reply)


def render_interview_page() -> None:
    card(PAGE_INTERVIEW, "A first-round interview. Answer the questions in the chat.")
    show_flash_error()

    history: List[Dict[str, str]] = st.session_state.setdefault("interview_history", [])

    if not history:
        with st.spinner("Preparing the first question..."):
            reply = ask_model(interview_opening_messages())
        if reply is None:
            st.info("Sorry, the interview could not start. Please refresh the page.")
            return
        history.append({"role": "assistant", "content": reply})

    for m in history:
        with st.chat_message(m["role"]):
            st.markdown(m["content"])

    answer = st.chat_input("Your answer")
    if answer and answer.strip():
        with st.chat_message("user"):
            st.markdown(answer)
        with st.spinner("..."):
            reply = ask_model(interview_followup_messages(history, answer), flash=True)
        history.append({"role": "user", "content": answer.strip()})
        history.append({"role": "assistant", "content": reply or "Sorry, something went wrong. Let's try again."})
        st.rerun()

    if st.button("Restart interview"):
        st.session_state["interview_history"] = []
        st.rerun()


def render_vacancy_page() -> None:
    card(PAGE_VACANCY, "Describe the role; the assistant drafts the vacancy.")

    with st.form("vacancy_form"):
        c1, c2 = st.columns(2)
        with c1:
            job_title = st.text_input("Job title")
            job_type = st.selectbox("Employment type", JOB_TYPES)
            location = st.text_input("Location")
        with c2:
            position_level = st.selectbox("Position level", POSITION_LEVELS)
            salary_range = st.text_input("Salary range")
        short_description = st.text_area("Short description", height=90)
        technical_skills = st.text_area("Technical skills", height=70)
        soft_skills = st.text_area("Soft skills", height=70)
        language_skills = st.text_input("Languages")
        desired_skills = st.text_area("Desired skills", height=70)
        submitted = st.form_submit_button("Generate vacancy", use_container_width=True)

    if not submitted:
        return
    if not job_title.strip():
        st.warning("Job title is required.")
        return

    form = {
        "job_title": job_title,
        "job_type": job_type,
        "position_level": position_level,
        "short_description": short_description,
        "location": location,
        "salary_range": salary_range,
        "technical_skills": technical_skills,
        "soft_skills": soft_skills,
        "language_skills": language_skills,
        "desired_skills": desired_skills,
    }
    with st.spinner("Generating vacancy..."):
        reply = ask_model(vacancy_messages(form))
    if reply is None:
        return

    parsed = api_post("/api/vacancy/parse", {"reply": reply})
    if not parsed.ok:
        st.error(parsed.error)
        return
    vacancy: Dict[str, Any] = (parsed.data or {}).get("vacancy") or {}

    st.markdown("#### Description")
    st.write(vacancy.get("description") or "Not provided")
    st.markdown("#### Required skills")
    if vacancy.get("skills"):
        bullets(vacancy["skills"])
    else:
        st.caption("Not provided")
    st.markdown("#### Salary")
    st.write(vacancy.get("salary") or "Not provided")
    st.markdown("#### Interview questions")
    if vacancy.get("questions"):
        bullets(vacancy["questions"])
    else:
        st.caption("Not provided")


def _fetch_onboarding_step(step_index: int) -> None:
    history: List[Dict[str, str]] = st.session_state["onboarding_history"]
    with st.spinner("Loading step..."):
        reply = ask_model(onboarding_step_messages(step_index, history), flash=True)
    if reply is None:
        st.session_state["onboarding_messages"].append(
            {"step": step_index, "content": "Sorry, something went wrong. Please refresh the page."}
        )
        return
    history.append({"role": "user", "content": ONBOARDING_STEPS[step_index].prompt})
    history.append({"role": "assistant", "content": reply})
    st.session_state["onboarding_messages"].append({"step": step_index, "content": reply})


def render_onboarding_page() -> None:
    card(PAGE_ONBOARDING, "Welcome aboard! Go through the steps one by one.")

    if "onboarding_step" not in st.session_state:
        st.session_state["onboarding_step"] = 0
        st.session_state["onboarding_history"] = []
        st.session_state["onboarding_messages"] = []
        _fetch_onboarding_step(0)
    show_flash_error()

    step = st.session_state["onboarding_step"]
    st.progress(onboarding_progress(step), text=f"Step {step + 1} of {len(ONBOARDING_STEPS)}")

    for m in st.session_state["onboarding_messages"]:
        st.markdown(f"**{ONBOARDING_STEPS[m['step']].title}**")
        st.markdown(m["content"])

    if step < len(ONBOARDING_STEPS) - 1:
        if st.button("Next step", use_container_width=True):
            st.session_state["onboarding_step"] = step + 1
            _fetch_onboarding_step(step + 1)
            st.rerun()
    else:
        st.success("Onboarding complete!")


def render_analytics_page() -> None:
    card(PAGE_ANALYTICS, "HR metrics on the demo employee dataset.")

    res = api_get("/data/metrics")
    if not res.ok:
        st.error(res.error)
        return
    metrics: Dict[str, Any] = res.data.get("metrics") or {}

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total employees", metrics.get("total_employees", 0))
    c2.metric("Active employees", metrics.get("active_employees", 0))
    c3.metric("Turnover", f"{metrics.get('turnover_rate', 0)}%")
    c4.metric("Avg. training", f"{metrics.get('avg_training_hours', 0)}h")

    by_position = pd.DataFrame(res.data.get("by_position") or [], columns=["position", "count"])
    if not by_position.empty:
        st.bar_chart(by_position.set_index("position")["count"])

    with st.expander("Show test data"):
        emp = api_get("/data/employees")
        if emp.ok:
            st.dataframe(pd.DataFrame(emp.data.get("employees") or []), use_container_width=True, hide_index=True)
        else:
            st.error(emp.error)

    if st.button("Generate report", use_container_width=True):
        with st.spinner("Generating report..."):
            reply = ask_model(analytics_report_messages(metrics))
        st.session_state["analytics_report"] = reply or "An error occurred while generating the report."

    if st.session_state.get("analytics_report"):
        st.markdown("#### AI analysis")
        st.markdown(st.session_state["analytics_report"])


PAGES = {
    PAGE_HOME: render_home_page,
    PAGE_SCREENING: render_screening_page,
    PAGE_INTERVIEW: render_interview_page,
    PAGE_VACANCY: render_vacancy_page,
    PAGE_ONBOARDING: render_onboarding_page,
    PAGE_ANALYTICS: render_analytics_page,
}


def main() -> None:
    st.set_page_config(page_title=APP_BRAND, layout="wide")

    if "page" not in st.session_state:
        st.session_state["page"] = PAGE_HOME

    names = list(PAGES)
    with st.sidebar:
        st.title(APP_BRAND)
        choice = st.radio("Navigate", names, index=names.index(st.session_state["page"]))
        st.caption(f"Backend: `{API_BASE}`")
    st.session_state["page"] = choice

    PAGES[choice]()


if __name__ == "__main__":
    main()
