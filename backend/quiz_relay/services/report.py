import html
from datetime import datetime, timezone, tzinfo
from enum import Enum

from quiz_relay.schemas.submission import Submission

SEPARATOR = "────────────────────"
NOT_ANSWERED = "Not answered"

class Tier(Enum):
    EXCELLENT = ("🏆", "Excellent!", "Outstanding understanding of reported speech.")
    VERY_GOOD = ("👍", "Very Good!", "Strong grasp with minor areas for improvement.")
    GOOD = ("📚", "Good!", "Solid foundation, some practice needed.")
    FAIR = ("💡", "Fair.", "Basic understanding, needs more practice.")
    NEEDS_IMPROVEMENT = ("🔍", "Needs Improvement.", "Review reported speech rules and practice more.")

    def __init__(self, emoji: str, label: str, remark: str):
        self.emoji = emoji
        self.label = label
        self.remark = remark

    def render(self) -> str:
        return f"{self.emoji} <b>{self.label}</b> {self.remark}"

# lower bounds, checked top-down
_TIER_BOUNDS = (
    (90, Tier.EXCELLENT),
    (75, Tier.VERY_GOOD),
    (60, Tier.GOOD),
    (50, Tier.FAIR),
)

def performance_tier(score: float) -> Tier:
    for bound, tier in _TIER_BOUNDS:
        if score >= bound:
            return tier
    return Tier.NEEDS_IMPROVEMENT

def format_duration(seconds: int) -> str:
    minutes, secs = divmod(max(int(seconds), 0), 60)
    return f"{minutes}:{secs:02d}"

def format_score(score: float) -> str:
    if float(score).is_integer():
        return str(int(score))
    return str(score)

def format_timestamp(ts: datetime | None, tz: tzinfo = timezone.utc) -> str:
    # en-US style: 1/15/2024, 10:30:00 AM
    if ts is None:
        return "N/A"
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    local = ts.astimezone(tz)
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{local.month}/{local.day}/{local.year}, {hour}:{local.minute:02d}:{local.second:02d} {meridiem}"

def _esc(value: str | None) -> str:
    # messages go out with parse_mode=HTML
    return html.escape(value or "", quote=False)

def build_private_report(submission: Submission, tz: tzinfo = timezone.utc) -> str:
    lines = [
        "📊 <b>DETAILED TEST REPORT - Reported Speech</b>",
        "",
        f"👤 <b>Student:</b> {_esc(submission.student_name)}",
        f"⏱️ <b>Time Spent:</b> {format_duration(submission.time_spent)}",
        f"📅 <b>Date:</b> {format_timestamp(submission.timestamp, tz)}",
        "",
        f"🎯 <b>Score:</b> {format_score(submission.score)}% "
        f"({submission.correct_answers}/{submission.total_questions})",
        "",
        "<b>QUESTION DETAILS:</b>",
        SEPARATOR,
    ]

    for index, result in enumerate(submission.answers, start=1):
        status = "✅" if result.is_correct else "❌"
        answer = _esc(result.user_answer) if result.user_answer else NOT_ANSWERED
        lines += [
            "",
            f"<b>Q{index}:</b> {status}",
            f"<i>Direct:</i> {_esc(result.direct_speech)}",
            f"<i>Reported:</i> {_esc(result.question)}",
            f"<b>Student's Answer:</b> {answer}",
            f"<b>Correct Answer:</b> {_esc(result.correct_answer)}",
            SEPARATOR,
        ]

    lines += [
        "",
        "<b>PERFORMANCE ANALYSIS:</b>",
        performance_tier(submission.score).render(),
    ]
    return "\n".join(lines) + "\n"

def build_group_report(submission: Submission) -> str:
    lines = [
        "📚 <b>Test Completed - Reported Speech</b>",
        "",
        f"👤 <b>Student:</b> {_esc(submission.student_name)}",
        f"🎯 <b>Score:</b> {submission.correct_answers}/{submission.total_questions}",
        f"⏱️ <b>Time:</b> {format_duration(submission.time_spent)}",
        f"📊 <b>Percentage:</b> {format_score(submission.score)}%",
    ]
    return "\n".join(lines)
