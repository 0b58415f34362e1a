"""Rule-based choice of the next interview question."""
from typing import Sequence

from ..core.roles import Role

ELABORATION_PROBE = "Can you elaborate more on that? I'd like to hear more details."
EXAMPLE_PROBE = "That's interesting. Can you give me a specific example of when this happened?"
CLOSING_REMARK = (
    "Thank you for your responses. Is there anything else you'd like to add "
    "about your qualifications for this role?"
)

EXAMPLE_MARKERS = ("example", "time when", "instance")
OPEN_PROMPTS = ("Tell me about", "Describe")

SHORT_ANSWER_WORDS = 20
ELABORATION_TURN_LIMIT = 3
EXAMPLE_TURN_LIMIT = 4


def word_count(text: str) -> int:
    return len(text.split())


def mentions_any(text: str, markers: Sequence[str]) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in markers)


def next_question(role: Role, previous_question: str, previous_answer: str, turn_index: int) -> str:
    """Pick the question for ``turn_index`` given the last question/answer pair.

    Rules are checked in order and the first match wins:

    1. turn 0 always opens with the first seed question;
    2. a short answer early on gets the elaboration probe;
    3. an open "Tell me about"/"Describe" question answered without an
       example gets the example probe;
    4. otherwise the seed bank, then the fallback bank, then the closing
       remark for every turn past both banks.
    """
    if turn_index == 0:
        return role.seed_questions[0]

    if word_count(previous_answer) < SHORT_ANSWER_WORDS and turn_index < ELABORATION_TURN_LIMIT:
        return ELABORATION_PROBE

    if (
        not mentions_any(previous_answer, EXAMPLE_MARKERS)
        and turn_index < EXAMPLE_TURN_LIMIT
        and any(prompt in previous_question for prompt in OPEN_PROMPTS)
    ):
        return EXAMPLE_PROBE

    if turn_index < len(role.seed_questions):
        return role.seed_questions[turn_index]

    fallback_index = turn_index - len(role.seed_questions)
    if fallback_index < len(role.fallback_questions):
        return role.fallback_questions[fallback_index]

    return CLOSING_REMARK
