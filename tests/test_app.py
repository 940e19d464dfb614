import json
from pathlib import Path

from streamlit.testing.v1 import AppTest

APP = Path(__file__).resolve().parent.parent / "answer_key_app.py"

TWO = [
    {
        "question": "Name a pet",
        "answers": [
            {"answerText": "Dog", "points": 40},
            {"answerText": "Cat", "points": 35},
        ],
    },
    {
        "question": "Name something yellow",
        "answers": [
            {"answerText": "Banana", "points": 50},
            {"answerText": "Sun", "points": 30},
        ],
    },
]


def run_app(source=None):
    at = AppTest.from_file(str(APP))
    if source is not None:
        at.secrets["QUESTIONS_PATH"] = str(source)
    return at.run()


def markdown_text(at):
    return "\n".join(m.value for m in at.markdown)


def test_renders_first_question_with_total(tmp_path):
    p = tmp_path / "q.json"
    p.write_text(json.dumps(TWO), encoding="utf-8")
    at = run_app(p)

    assert not at.exception
    assert at.title[0].value == "FRIENDLY FEUD ANSWER KEY"
    assert at.selectbox[0].options == [
        "Q1: 2 answers - Name a pet",
        "Q2: 2 answers - Name something yellow",
    ]
    text = markdown_text(at)
    assert "Q1: Name a pet" in text
    assert "Dog" in text and "Cat" in text
    assert "Total Points:" in text and ">75<" in text


def test_selecting_a_question_shows_it(tmp_path):
    p = tmp_path / "q.json"
    p.write_text(json.dumps(TWO), encoding="utf-8")
    at = run_app(p)

    at.selectbox[0].select_index(1).run()

    assert not at.exception
    text = markdown_text(at)
    assert "Q2: Name something yellow" in text
    assert ">80<" in text


def test_search_narrows_options_but_keeps_selection(tmp_path):
    p = tmp_path / "q.json"
    p.write_text(json.dumps(TWO), encoding="utf-8")
    at = run_app(p)

    at.text_input[0].input("YELLOW").run()

    assert not at.exception
    assert at.selectbox[0].options == ["Q2: 2 answers - Name something yellow"]
    assert at.selectbox[0].value is None
    assert "Q1: Name a pet" in markdown_text(at)
    assert "Q1 is hidden" in at.caption[0].value


def test_missing_file_shows_error(tmp_path):
    at = run_app(tmp_path / "missing.json")

    assert not at.exception
    assert len(at.error) == 1
    assert "Could not load questions" in at.error[0].value
    assert len(at.selectbox) == 0


def test_empty_file_shows_warning(tmp_path):
    p = tmp_path / "q.json"
    p.write_text("[]", encoding="utf-8")
    at = run_app(p)

    assert not at.exception
    assert len(at.error) == 0
    assert "No questions found" in at.warning[0].value


def test_bundled_questions_render():
    at = run_app()

    assert not at.exception
    assert at.selectbox[0].options[0].startswith("Q1: ")


def test_non_utf8_file_shows_error(tmp_path):
    p = tmp_path / "q.json"
    p.write_bytes(b'[{"question": "\xff\xfe bad", "answers": []}]')
    at = run_app(p)

    assert not at.exception
    assert "not valid UTF-8" in at.error[0].value


def test_prompt_is_shown_literally(tmp_path):
    p = tmp_path / "q.json"
    p.write_text(
        json.dumps([{"question": "Salt & *pepper* #1", "answers": [{"answerText": "Fries", "points": 9}]}]),
        encoding="utf-8",
    )
    at = run_app(p)

    assert not at.exception
    assert '<h3 class="question-title">Q1: Salt &amp; *pepper* #1</h3>' in markdown_text(at)
