"""
Friendly Feud Answer Key - Streamlit Web App
============================================
Run:      streamlit run answer_key_app.py
Requires: streamlit, pydantic
Secret:   QUESTIONS_PATH = "path/to/questions.json"   (optional)
"""

import html
import logging
from pathlib import Path

import streamlit as st

from answer_key import DEFAULT_SOURCE, AnswerKey, Error, Loading, Ready, Uninitialized

logger = logging.getLogger("answer-key")
logging.basicConfig(level=logging.INFO)

# ─────────────────────────────────────────────────────────────────────────────
# PAGE CONFIG
# ─────────────────────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="Friendly Feud Answer Key",
    page_icon="🏆",
    layout="centered",
)

APP_DIR = Path(__file__).resolve().parent


def get_source():
    """Question file from secrets, or the bundled questions.json."""
    try:
        configured = st.secrets["QUESTIONS_PATH"]
    except Exception:
        logger.debug("QUESTIONS_PATH not set, using %s", DEFAULT_SOURCE)
        return DEFAULT_SOURCE
    path = Path(configured)
    return path if path.is_absolute() else APP_DIR / path

# ─────────────────────────────────────────────────────────────────────────────
# SESSION STATE
# ─────────────────────────────────────────────────────────────────────────────
def init_session():
    if "answer_key" not in st.session_state:
        st.session_state.answer_key = AnswerKey()


def option_label(question):
    return f"{question.id.upper()}: {len(question.answers)} answers - {question.question}"

# ─────────────────────────────────────────────────────────────────────────────
# CSS
# ─────────────────────────────────────────────────────────────────────────────
CSS = """
<style>
.stApp { background: linear-gradient(180deg, #4f46e5 0%, #3730a3 100%); color: #ffffff; }
h1 { color: #facc15 !important; text-align: center; letter-spacing: 0.08em; }
.answer-row {
    display: flex; align-items: center; justify-content: space-between;
    padding: 10px 14px; margin-bottom: 8px;
    background: rgba(51, 65, 85, 0.5); border: 1px solid #475569; border-radius: 8px;
}
.answer-rank {
    display: inline-flex; align-items: center; justify-content: center;
    width: 30px; height: 30px; margin-right: 14px; border-radius: 50%;
    background: #facc15; color: #0f172a; font-weight: 700;
}
.question-title { color: #ffffff; margin-bottom: 12px; }
.answer-text { font-size: 1.1rem; }
.answer-points, .total-points { color: #facc15; font-weight: 700; font-size: 1.25rem; }
.total-row {
    display: flex; justify-content: space-between;
    margin-top: 16px; padding-top: 12px; border-top: 1px solid #475569; font-weight: 700;
}
</style>
"""

# ─────────────────────────────────────────────────────────────────────────────
# SCREEN - LOADING / ERROR
# ─────────────────────────────────────────────────────────────────────────────
def screen_loading(key):
    with st.spinner("Loading questions..."):
        return key.complete_load(get_source())


def screen_error(state):
    if state.reason == "empty":
        st.warning(f"📭 {state.message}")
    else:
        st.error(f"⚠️ Could not load questions. {state.message}")

# ─────────────────────────────────────────────────────────────────────────────
# SCREEN - ANSWER KEY
# ─────────────────────────────────────────────────────────────────────────────
def render_selector(key):
    term = st.text_input("Search", placeholder="Search questions...",
                         label_visibility="collapsed")
    key.set_filter(term)

    current  = key.current_question()
    visible  = key.visible_questions()
    ids      = [q.id for q in visible]
    by_id    = {q.id: q for q in visible}
    index    = ids.index(current.id) if key.is_current_visible() else None

    choice = st.selectbox(
        "Question",
        ids,
        index=index,
        format_func=lambda qid: option_label(by_id[qid]),
        placeholder="No matching questions" if not ids else "Pick a question",
        label_visibility="collapsed",
    )
    if choice is not None and choice != current.id:
        key.select(choice)
    elif index is None:
        st.caption(f"{current.id.upper()} is hidden by the current search.")


def render_question(key):
    q     = key.current_question()
    total = key.current_total()

    st.markdown(
        f'<h3 class="question-title">{q.id.upper()}: {html.escape(q.question)}</h3>',
        unsafe_allow_html=True,
    )

    rows = []
    for i, answer in enumerate(q.answers, 1):
        rows.append(
            '<div class="answer-row"><div>'
            f'<span class="answer-rank">{i}</span>'
            f'<span class="answer-text">{html.escape(answer.text)}</span></div>'
            f'<span class="answer-points">{answer.points}</span></div>'
        )
    rows.append(
        '<div class="total-row"><span>Total Points:</span>'
        f'<span class="total-points">{total}</span></div>'
    )
    st.markdown("".join(rows), unsafe_allow_html=True)


def screen_answer_key(key):
    render_selector(key)
    st.divider()
    render_question(key)

# ─────────────────────────────────────────────────────────────────────────────
# MAIN
# ─────────────────────────────────────────────────────────────────────────────
def main():
    init_session()
    st.markdown(CSS, unsafe_allow_html=True)
    st.title("FRIENDLY FEUD ANSWER KEY")

    key = st.session_state.answer_key
    if isinstance(key.state, Uninitialized):
        key.begin_load()

    s = key.state
    if isinstance(s, Loading):
        s = screen_loading(key)

    if   isinstance(s, Ready): screen_answer_key(key)
    elif isinstance(s, Error): screen_error(s)
    else:
        st.error(f"Unknown state: {s}")


if __name__ == "__main__":
    main()
