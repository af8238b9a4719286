"""
Signal dataclasses for candidate rating.
Each signal is a piece of evidence extracted from free text.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EducationSignal:
    """Signal for the highest education level found."""
    level: str  # Display label, e.g. "Bachelors Degree"
    score: int  # 0-10 points


@dataclass(frozen=True)
class InstitutionSignal:
    """Signal for the institution a candidate studied at."""
    name: str
    is_prestigious: bool = False


@dataclass(frozen=True)
class QuestionAnswer:
    """One question/answer pair from an application form."""
    question: str = ""
    answer: str = ""

    @classmethod
    def from_payload(cls, item) -> "QuestionAnswer":
        """
        Build a pair from either the BambooHR shape
        ``{"question": {"label": ...}, "answer": {"label": ...}}`` or flat strings.
        """
        if isinstance(item, QuestionAnswer):
            return item
        if not isinstance(item, dict):
            return cls()
        return cls(
            question=_label(item.get("question")),
            answer=_label(item.get("answer")),
        )


def _label(value) -> str:
    if isinstance(value, dict):
        value = value.get("label")
    if value is None:
        return ""
    return str(value)
