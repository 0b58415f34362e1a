"""Keyword-count scoring of a finished interview."""
import math
from typing import List, Sequence

from ..application.interview_session import Exchange, FeedbackResult
from ..core.roles import Role
from .sequencer import mentions_any, word_count

MIN_SCORE = 1
MAX_SCORE = 10
BASELINE_SCORE = 5
MAX_STRENGTHS = 3
DETAILED_ANSWER_WORDS = 50
BRIEF_ANSWER_WORDS = 15
PRACTICE_QUESTION_TARGET = 5

DETAILED_RESPONSES = "Provides detailed responses"
USES_EXAMPLES = "Uses specific examples to support answers"
TEAMWORK = "Demonstrates teamwork and collaboration"
GROWTH_MINDSET = "Shows growth mindset and adaptability"

MORE_DETAIL = "Provide more detailed answers with specific examples"
PRACTICE_MORE = "Practice answering more questions to build confidence"
KEEP_PRACTICING = "Continue practicing with different scenarios"

EXAMPLE_MARKERS = ("example", "instance", "time when", "situation")
TEAMWORK_MARKERS = ("team", "collaborate", "together")
GROWTH_MARKERS = ("learned", "improved", "developed")


def clamp(score: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, score))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _add_strength(strengths: List[str], strength: str) -> None:
    if strength not in strengths and len(strengths) < MAX_STRENGTHS:
        strengths.append(strength)


def _skill_level(overall: int) -> str:
    if overall >= 7:
        return "strong"
    if overall >= 5:
        return "solid"
    return "developing"


def _communication_comment(score: int) -> str:
    if score >= 7:
        return "You communicate clearly and provide comprehensive answers."
    if score >= 5:
        return "Your communication is adequate but could be more detailed."
    return "Focus on providing more structured and detailed responses."


def _technical_comment(score: int) -> str:
    if score >= 7:
        return "You demonstrate strong relevant knowledge with concrete examples."
    if score >= 5:
        return "You show basic understanding but could provide more specific examples."
    return "Work on incorporating more specific examples and demonstrating deeper knowledge."


def build_narrative(role: Role, exchange_count: int, overall: int, communication: int, technical: int) -> str:
    return "\n\n".join([
        f"Interview Performance Summary for {role.name}:",
        f"You answered {exchange_count} questions during this mock interview. "
        f"Your responses demonstrate {_skill_level(overall)} interview skills.",
        f"Communication ({communication}/10): {_communication_comment(communication)}",
        f"Technical Knowledge ({technical}/10): {_technical_comment(technical)}",
        f"Key Areas Assessed: {', '.join(role.focus_areas)}",
        "Keep practicing to refine your interview skills!",
    ])


def analyze(role: Role, exchanges: Sequence[Exchange]) -> FeedbackResult:
    """Score a session's exchanges, given in sequence order.

    Communication and technical scores start at 5 and move by one point per
    qualifying answer, clamped to [1, 10]. Strengths keep the first three
    reasons found; improvements are deduplicated.
    """
    communication = BASELINE_SCORE
    technical = BASELINE_SCORE
    strengths: List[str] = []
    improvements: List[str] = []

    for exchange in exchanges:
        answer = exchange.response
        words = word_count(answer)

        if words > DETAILED_ANSWER_WORDS:
            communication = clamp(communication + 1)
            # repeated per detailed answer, only the cap applies
            if len(strengths) < MAX_STRENGTHS:
                strengths.append(DETAILED_RESPONSES)
        elif words < BRIEF_ANSWER_WORDS:
            communication = clamp(communication - 1)
            if MORE_DETAIL not in improvements:
                improvements.append(MORE_DETAIL)

        if mentions_any(answer, EXAMPLE_MARKERS):
            technical = clamp(technical + 1)
            _add_strength(strengths, USES_EXAMPLES)

        if mentions_any(answer, TEAMWORK_MARKERS):
            _add_strength(strengths, TEAMWORK)

        if mentions_any(answer, GROWTH_MARKERS):
            _add_strength(strengths, GROWTH_MINDSET)

    if len(exchanges) < PRACTICE_QUESTION_TARGET:
        improvements.append(PRACTICE_MORE)

    if not improvements:
        improvements.append(KEEP_PRACTICING)

    overall = clamp(round_half_up((communication + technical) / 2))

    return FeedbackResult(
        overall_score=overall,
        communication_score=communication,
        technical_score=technical,
        strengths=tuple(strengths),
        areas_for_improvement=tuple(improvements),
        detailed_feedback=build_narrative(role, len(exchanges), overall, communication, technical),
    )
