"""
UI layer
Purpose: Streamlit-only glue. Renders widgets, collects the request, and delegates
all work to the controller. Keeps UI concerns (layout/state widgets) separate from
business logic so logic can be unit tested without Streamlit.
"""

import streamlit as st
from typing import Optional

from interview_qgen.config import configure_logging, load_settings
from interview_qgen.controller import QuestionGenerationController
from interview_qgen.models import GenerationRequest, InterviewStage
from interview_qgen.services.jd_analyzer import extract_pdf_text
from interview_qgen.services.llm_openai import OpenAILLMClient
from interview_qgen.services.pricing import PRICE_TABLE


# ---------------------------
# Page config
# ---------------------------
st.set_page_config(
    page_title="Interview Question Generator",
    page_icon="🎯",
    layout="wide",
    initial_sidebar_state="expanded",
)

CONFIG = load_settings()
configure_logging(CONFIG.log_level)

# ---------------------------
# UI constants
# ---------------------------
STAGES = [s.value for s in InterviewStage]
MODELS = list(PRICE_TABLE.keys())

# ---------------------------
# Session state init
# ---------------------------
st_session = st.session_state
st_session.setdefault("controller", None)
st_session.setdefault("controller_key", None)
st_session.setdefault("model", CONFIG.model if CONFIG.model in MODELS else MODELS[0])
st_session.setdefault("questions", [])
st_session.setdefault("last_meta", {})
st_session.setdefault("tokens_in", 0)
st_session.setdefault("tokens_out", 0)
st_session.setdefault("jd_upload_key", 0)


# ---------------------------
# Helpers
# ---------------------------
def get_controller(api_key: Optional[str]) -> QuestionGenerationController:
    """Return a controller for this key, rebuilding it only when the key changes."""
    key = (api_key or "").strip() or None
    if st_session.controller is not None and st_session.controller_key == key:
        st_session.controller.model = st_session.model
        return st_session.controller

    llm = None
    if key:
        try:
            llm = OpenAILLMClient(api_key=key, timeout=CONFIG.timeout_seconds)
        except RuntimeError as e:
            st.toast(f"OpenAI init failed, using templates only: {e}")
    st_session.controller = QuestionGenerationController(
        llm, model=st_session.model, pool_multiplier=CONFIG.pool_multiplier
    )
    st_session.controller_key = key
    return st_session.controller


def reset_session():
    """Wipe generated output and counters; keep key and model choice."""
    st_session.questions = []
    st_session.last_meta = {}
    st_session.tokens_in = 0
    st_session.tokens_out = 0
    st_session.jd_upload_key += 1
    if st_session.controller:
        st_session.controller.reset()


def render_questions(questions: list[str], meta: dict) -> None:
    """Numbered list; a short result is reported, never padded."""
    if not questions:
        st.info("No questions were generated for this input.")
        return
    for i, q in enumerate(questions, start=1):
        st.markdown(f"**Q{i}.** {q}")
    shortfall = int(meta.get("shortfall", 0) or 0)
    if shortfall:
        st.warning(
            f"Only {len(questions)} of {meta.get('requested')} questions could be made "
            "unique for this input. Add skills or a longer job description for more."
        )


# ---------------------------
# SIDEBAR: settings
# ---------------------------
with st.sidebar:
    st.markdown("# Settings")

    st.markdown("## OpenAI API key (optional)")
    user_api_key = st.text_input(
        "Enter your API key",
        type="password",
        value=CONFIG.openai_api_key or "",
        help="Without a key, questions are synthesized from templates only.",
    )
    st_session.model = st.selectbox(
        "Model",
        MODELS,
        index=MODELS.index(st_session.model),
    )
    st.divider()
    st.caption(
        f"Tokens in/out: {st_session.tokens_in} / {st_session.tokens_out}"
    )
    st.button("Reset session", type="primary", on_click=reset_session)


# ---------------------------
# MAIN: request form
# ---------------------------
st.title("Interview Question Generator")

jd_mode = st.radio("Job description", ["Paste text", "Upload PDF"], horizontal=True)
jd_text = ""
if jd_mode == "Paste text":
    jd_text = st.text_area(
        "Paste JD text",
        placeholder="Paste the full job description here...",
        height=220,
    )
else:
    uploaded_pdf = st.file_uploader(
        "Upload PDF", key=f"jd_uploader_{st_session.jd_upload_key}", type=["pdf"]
    )
    if uploaded_pdf:
        jd_text = extract_pdf_text(uploaded_pdf)
        if not jd_text:
            st.toast("No selectable text found in the PDF.")

c1, c2 = st.columns([2, 1])
stage = c1.selectbox("Interview stage", STAGES)
count = c2.number_input("Number of questions", min_value=1, max_value=20, value=5)

skills_text = st.text_input("Skills (comma separated, optional)")
prior_text = st.text_area(
    "Already asked questions (one per line, optional)", height=120
)

if st.button("Generate questions", type="primary"):
    controller = get_controller(user_api_key)
    request = GenerationRequest.create(
        job_description=jd_text,
        stage=stage,
        target_count=count,
        skills=skills_text,
        prior_questions=prior_text,
    )
    with st.spinner("Generating..."):
        questions, meta = controller.generate(request)
    st_session.questions = questions
    st_session.last_meta = meta
    st_session.tokens_in = controller.tokens_in
    st_session.tokens_out = controller.tokens_out

if st_session.questions or st_session.last_meta:
    st.divider()
    render_questions(st_session.questions, st_session.last_meta)
    meta = st_session.last_meta
    if meta:
        source = meta.get("source", "")
        label = {
            "model": "model",
            "mixed": "model + templates",
            "synthesized": "templates",
        }.get(source, source)
        cost = float(meta.get("cost_usd", 0.0) or 0.0)
        st.caption(
            f"Source: {label} · tokens {meta.get('tokens_in', 0)}/{meta.get('tokens_out', 0)}"
            + (" (estimated)" if meta.get("estimated") else "")
            + (f" · ~${cost:.4f}" if cost else "")
        )
        for note in meta.get("notes", []):
            st.caption(note)
