"""
Friendly Feud Answer Key - data model, loader and selection state
=================================================================
No Streamlit in here: answer_key_app.py renders whatever this module holds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

logger = logging.getLogger("answer-key")

DEFAULT_SOURCE = Path(__file__).resolve().with_name("questions.json")

# ─────────────────────────────────────────────────────────────────────────────
# MODEL
# ─────────────────────────────────────────────────────────────────────────────
class AnswerRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    points: int = Field(ge=0)


class QuestionRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    question: str
    answers: Tuple[AnswerRecord, ...] = ()


# Shape of the static JSON document, before ids are assigned.
class _SourceAnswer(BaseModel):
    answerText: str
    points: int = Field(ge=0, strict=True)


class _SourceQuestion(BaseModel):
    question: str
    answers: List[_SourceAnswer]


_SOURCE_ADAPTER = TypeAdapter(List[_SourceQuestion])


def total_points(record: QuestionRecord) -> int:
    return sum(a.points for a in record.answers)

# ─────────────────────────────────────────────────────────────────────────────
# LOADER
# ─────────────────────────────────────────────────────────────────────────────
class LoadError(Exception):
    """The question resource could not be read or does not have the expected shape."""

    def __init__(self, message: str, source: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.source = source


def parse_questions(raw: Union[str, bytes], source=None) -> List[QuestionRecord]:
    """
    Parse the raw JSON text into QuestionRecords.
    Ids follow list position ("q1", "q2", ...). One bad record fails the whole load.
    """
    try:
        items = _SOURCE_ADAPTER.validate_json(raw)
    except ValidationError as exc:
        first = exc.errors()[0]
        where = ".".join(str(p) for p in first["loc"]) or "document"
        raise LoadError(
            f"Malformed question data at {where}: {first['msg']} "
            f"({exc.error_count()} problem(s) in total)",
            source,
        ) from exc

    return [
        QuestionRecord(
            id=f"q{i}",
            question=item.question,
            answers=tuple(AnswerRecord(text=a.answerText, points=a.points) for a in item.answers),
        )
        for i, item in enumerate(items, 1)
    ]


def load_questions(source: Union[str, Path] = DEFAULT_SOURCE) -> List[QuestionRecord]:
    path = Path(source)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise LoadError(f"Could not read {path}: {exc.strerror or exc}", source) from exc
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise LoadError(f"{path} is not valid UTF-8: {exc.reason} at byte {exc.start}", source) from exc
    return parse_questions(text, source)

# ─────────────────────────────────────────────────────────────────────────────
# STORE
# ─────────────────────────────────────────────────────────────────────────────
class QuestionStore:
    def __init__(self, questions: Iterable[QuestionRecord] = ()):
        self._questions = tuple(questions)

    @property
    def questions(self) -> Tuple[QuestionRecord, ...]:
        return self._questions

    def __len__(self):
        return len(self._questions)

    def find_by_id(self, qid: str) -> Optional[QuestionRecord]:
        return next((q for q in self._questions if q.id == qid), None)

    def filter(self, term: Optional[str]) -> List[QuestionRecord]:
        """Questions whose prompt or id contains `term`, ignoring case. Answers are not searched."""
        needle = (term or "").casefold()
        if not needle:
            return list(self._questions)
        return [
            q for q in self._questions
            if needle in q.question.casefold() or needle in q.id.casefold()
        ]

# ─────────────────────────────────────────────────────────────────────────────
# SELECTION STATE
# ─────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Uninitialized:
    pass


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Ready:
    current_id: str


@dataclass(frozen=True)
class Error:
    reason: Literal["failed", "empty"]
    message: str


State = Union[Uninitialized, Loading, Ready, Error]


class AnswerKey:
    """One viewer's answer key: the loaded store, the selection state and the search term."""

    def __init__(self):
        self.store = QuestionStore()
        self.state: State = Uninitialized()
        self.filter_term = ""

    def begin_load(self) -> State:
        if not isinstance(self.state, Uninitialized):
            logger.warning("Ignoring load request while %s", type(self.state).__name__)
            return self.state
        self.state = Loading()
        return self.state

    def complete_load(self, source: Union[str, Path] = DEFAULT_SOURCE) -> State:
        if not isinstance(self.state, Loading):
            logger.warning("complete_load called while %s", type(self.state).__name__)
            return self.state

        logger.info("Loading questions from %s", source)
        try:
            questions = load_questions(source)
        except LoadError as exc:
            logger.error("Error loading questions: %s", exc, exc_info=exc.__cause__ or exc)
            self.state = Error("failed", str(exc))
            return self.state

        self.store = QuestionStore(questions)
        if not questions:
            logger.warning("Question source %s is empty", source)
            self.state = Error("empty", f"No questions found in {Path(source).name}")
        else:
            logger.info("Loaded %d questions", len(questions))
            self.state = Ready(questions[0].id)
        return self.state

    def load(self, source: Union[str, Path] = DEFAULT_SOURCE) -> State:
        if isinstance(self.begin_load(), Loading):
            return self.complete_load(source)
        return self.state

    def select(self, qid: str) -> State:
        if isinstance(self.state, Ready) and self.store.find_by_id(qid) is not None:
            self.state = Ready(qid)
        return self.state

    def set_filter(self, term: Optional[str]):
        self.filter_term = term or ""

    def visible_questions(self) -> List[QuestionRecord]:
        return self.store.filter(self.filter_term)

    def current_question(self) -> Optional[QuestionRecord]:
        if not isinstance(self.state, Ready):
            return None
        return self.store.find_by_id(self.state.current_id)

    def current_total(self) -> Optional[int]:
        q = self.current_question()
        return total_points(q) if q is not None else None

    def is_current_visible(self) -> bool:
        q = self.current_question()
        return q is not None and any(v.id == q.id for v in self.visible_questions())
