"""Streamlit Web UI for ElevateCV.

Two modes:
  A) Builder: career goal → AI-drafted CV, editable inline, refine per section, print
  B) Gap Check: CV (pasted or uploaded PDF/TXT) + job description → skill gaps with courses
"""

from __future__ import annotations

import asyncio
import os

import nest_asyncio
import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv

load_dotenv()
nest_asyncio.apply()

# Streamlit Cloud: sync st.secrets → os.environ so backend clients can read them
for key in ("ANTHROPIC_API_KEY", "TAVILY_API_KEY"):
    if key not in os.environ:
        try:
            os.environ[key] = st.secrets[key]
        except Exception:
            pass

from elevate_cv.clients.llm_client import LLMClient
from elevate_cv.clients.search_client import SearchClient
from elevate_cv.config import load_config, optional_search_key, require_api_key
from elevate_cv.errors import ConfigError
from elevate_cv.models.request import AgentMode
from elevate_cv.pipeline.career_agent import CareerAgent
from elevate_cv.pipeline.session import CareerSession
from elevate_cv.templates.renderer import (
    render_document_html,
    render_document_markdown,
    render_gap_report_markdown,
)
from elevate_cv.templates.themes import THEMES

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="ElevateCV",
    page_icon=":sparkles:",
    layout="wide",
)

CONFIG = load_config()

# Missing credentials are fatal at startup, not at the first request.
try:
    API_KEY = require_api_key()
except ConfigError as e:
    st.error(str(e))
    st.stop()


def _new_session() -> CareerSession:
    llm = LLMClient(api_key=API_KEY, timeout=CONFIG.llm.timeout)
    search = SearchClient() if optional_search_key() else None
    return CareerSession(agent=CareerAgent(llm, CONFIG, search=search))


if "session" not in st.session_state:
    st.session_state.session = _new_session()

session: CareerSession = st.session_state.session

MODE_LABELS = {AgentMode.GENERATE: "Builder", AgentMode.CHECK: "Gap Check"}

# ---------------------------------------------------------------------------
# Header + mode switch
# ---------------------------------------------------------------------------

st.caption("ELITE CAREER STRATEGIST")
st.title("ElevateCV")

chosen = st.radio(
    "Mode",
    list(MODE_LABELS),
    format_func=MODE_LABELS.get,
    index=list(MODE_LABELS).index(session.mode),
    horizontal=True,
    label_visibility="collapsed",
)
if chosen != session.mode:
    session.switch_mode(chosen)
    st.rerun()


# ---------------------------------------------------------------------------
# Input form
# ---------------------------------------------------------------------------


def _input_form() -> None:
    if session.mode is AgentMode.GENERATE:
        session.goal = st.text_input(
            "Career Goal / Target Position",
            value=session.goal,
            placeholder="e.g. Lead Designer at Airbnb",
            max_chars=300,
        )
        can_run = bool(session.goal.strip())
        label = "Generate CV Architecture"
    else:
        left, right = st.columns(2)
        with left:
            upload = st.file_uploader(
                "Upload CV (PDF or TXT)",
                type=["pdf", "txt"],
                help=f"{CONFIG.task.max_upload_mb}MB max",
            )
            if upload is not None and st.session_state.get("last_upload") != upload.file_id:
                st.session_state.last_upload = upload.file_id
                if upload.size > CONFIG.task.max_upload_mb * 1024 * 1024:
                    session.notice = f"File exceeds {CONFIG.task.max_upload_mb}MB."
                else:
                    with st.spinner("Extracting text..."):
                        session.load_cv_file(upload.getvalue(), upload.name, upload.type)
                    st.session_state.cv_text_area = session.cv_text
            if session.notice:
                st.warning(session.notice)
            if "cv_text_area" not in st.session_state:
                st.session_state.cv_text_area = session.cv_text
            session.cv_text = st.text_area(
                "Your Current CV",
                key="cv_text_area",
                height=240,
                placeholder="Paste CV content or upload PDF...",
            )
        with right:
            session.job_description = st.text_area(
                "Job Description",
                value=session.job_description,
                height=320,
                placeholder="Paste the target job requirements...",
            )
        can_run = bool(session.cv_text.strip() and session.job_description.strip())
        label = "Begin Analysis"

    if st.button(label, type="primary", disabled=not can_run or session.state.is_loading):
        with st.spinner("Thinking..."):
            asyncio.run(session.submit())
        _reset_editor_widgets()
        st.rerun()

    if session.state.error:
        st.error(session.state.error)


def _reset_editor_widgets() -> None:
    for key in list(st.session_state.keys()):
        if isinstance(key, str) and key.startswith("cv_"):
            if key != "cv_text_area":
                del st.session_state[key]


# ---------------------------------------------------------------------------
# Builder result
# ---------------------------------------------------------------------------


def _seed(key: str, value: str) -> None:
    if key not in st.session_state:
        st.session_state[key] = value


def _on_name_change() -> None:
    session.set_name(st.session_state.cv_name)
    st.session_state.cv_name = session.document.user_name


def _on_section_change(title: str, key: str) -> None:
    session.edit_section(title, st.session_state[key])


def _builder_result() -> None:
    doc = session.document
    draft = session.state.result
    if doc is None or draft is None:
        return

    top = st.container(border=True)
    with top:
        st.subheader("Blueprint Ready")
        st.caption('Edit any field. Use "Refine" to polish a section with AI.')
        cols = st.columns([3, 1, 1, 1])
        with cols[0]:
            theme = st.selectbox(
                "Theme",
                list(THEMES),
                format_func=lambda t: t.value.title(),
                index=list(THEMES).index(doc.selected_theme),
            )
            if theme != doc.selected_theme:
                session.set_theme(theme)
        with cols[1]:
            st.download_button(
                "Download MD",
                data=render_document_markdown(doc).encode("utf-8"),
                file_name="cv.md",
                mime="text/markdown",
            )
        with cols[2]:
            st.download_button(
                "Download HTML",
                data=render_document_html(doc, print_mode=False).encode("utf-8"),
                file_name="cv.html",
                mime="text/html",
            )
        with cols[3]:
            print_now = st.button("Print as PDF")
        if draft.canva_cta:
            st.info("This role benefits from a visual layout. Consider polishing the design in a layout tool.")

    if print_now:
        components.html(render_document_html(doc, auto_print=True), height=0)

    _seed("cv_name", doc.user_name)
    _seed("cv_email", doc.contact_fields["email"])
    _seed("cv_phone", doc.contact_fields["phone"])
    _seed("cv_location", doc.user_location)

    st.text_input("Name", key="cv_name", on_change=_on_name_change)
    st.markdown(f"**{doc.headline}**")

    c1, c2, c3 = st.columns(3)
    with c1:
        st.text_input(
            "Email", key="cv_email",
            on_change=lambda: session.set_contact("email", st.session_state.cv_email),
        )
    with c2:
        st.text_input(
            "Phone", key="cv_phone",
            on_change=lambda: session.set_contact("phone", st.session_state.cv_phone),
        )
    with c3:
        st.text_input(
            "Location", key="cv_location",
            on_change=lambda: session.set_location(st.session_state.cv_location),
        )

    main, side = st.columns([2, 1])
    with main:
        for i, title in enumerate(list(doc.sections)):
            key = f"cv_section_{i}"
            head, button = st.columns([4, 1])
            head.markdown(f"#### {title}")
            if button.button("Refine", key=f"cv_refine_{i}", disabled=doc.is_refining(title) or not session.goal):
                with st.spinner(f"Refining {title}..."):
                    refined = asyncio.run(session.refine_section(title))
                if refined is None:
                    st.toast(f"Could not refine {title}.")
                st.session_state[key] = doc.sections[title]
            _seed(key, doc.sections[title])
            st.text_area(
                title, key=key, label_visibility="collapsed",
                on_change=_on_section_change, args=(title, key),
            )
    with side:
        st.markdown("#### Skills")
        st.markdown(" ".join(f"`{skill}`" for skill in doc.skills))


# ---------------------------------------------------------------------------
# Gap report result
# ---------------------------------------------------------------------------


def _gap_result() -> None:
    view = session.report_view
    if view is None:
        return
    report = view.report

    st.subheader("Gap Remediation Plan")
    st.caption("STRATEGIC LEARNING ROADMAP")
    for idx, gap in enumerate(report.skill_gaps):
        with st.container(border=True):
            head, toggle = st.columns([5, 1])
            head.markdown(f"### {idx + 1}. {gap.skill}")
            if toggle.button("Close" if view.is_expanded(idx) else "Courses", key=f"gap_toggle_{idx}"):
                session.toggle_gap(idx)
                st.rerun()
            courses = view.visible_courses(idx)
            for col, course in zip(st.columns(max(len(courses), 1)), courses):
                with col:
                    st.caption(course.platform.upper())
                    st.markdown(f"**{course.course_name}**")
                    st.link_button("Enroll", course.url)

    if report.grounding_sources:
        with st.expander("Sources"):
            for source in report.grounding_sources:
                st.markdown(f"- [{source.title}]({source.uri})")

    st.download_button(
        "Download report",
        data=render_gap_report_markdown(report).encode("utf-8"),
        file_name="gap_report.md",
        mime="text/markdown",
    )


_input_form()

if session.state.result is not None:
    st.divider()
    if session.mode is AgentMode.GENERATE:
        _builder_result()
    else:
        _gap_result()
