from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

class AnswerResult(_CamelModel):
    direct_speech: str
    question: str  # reported-speech prompt
    user_answer: str | None = None
    correct_answer: str
    is_correct: bool

class Submission(_CamelModel):
    student_name: str
    timestamp: datetime | None = None  # epoch ms or ISO-8601
    time_spent: int  # seconds
    score: float  # 0-100
    correct_answers: int
    total_questions: int
    answers: list[AnswerResult] = []
