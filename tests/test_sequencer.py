# tests/test_sequencer.py
import pytest
from mock_interview.managers.sequencer import (
    CLOSING_REMARK,
    ELABORATION_PROBE,
    EXAMPLE_PROBE,
    next_question,
    word_count,
)

LONG_PLAIN = (
    "I have ten years of experience shipping products across three companies "
    "and leading teams of engineers through launches, migrations and large "
    "platform rewrites with many stakeholders"
)
LONG_WITH_EXAMPLE = (
    "For example at my last company we rebuilt the billing pipeline from scratch "
    "and I owned the data migration plus the rollout plan across four regions"
)

def test_word_count_uses_whitespace_tokens():
    assert word_count("") == 0
    assert word_count("  one\ttwo\nthree  ") == 3

def test_turn_zero_is_first_seed_question(catalog):
    for role in catalog.list():
        assert next_question(role, "anything", "whatever", 0) == role.seed_questions[0]
        assert next_question(role, "", "", 0) == role.seed_questions[0]

def test_short_answer_early_gets_elaboration_probe(engineer):
    assert next_question(engineer, "How do you approach code reviews?", "I worked on it", 1) == ELABORATION_PROBE
    assert ELABORATION_PROBE == "Can you elaborate more on that? I'd like to hear more details."

def test_short_answer_probe_ignores_content(engineer):
    answer = "For example our team did it"
    assert next_question(engineer, "Describe it", answer, 2) == ELABORATION_PROBE

def test_open_question_without_example_gets_example_probe(engineer):
    assert word_count(LONG_PLAIN) >= 20
    assert next_question(engineer, "Tell me about yourself", LONG_PLAIN, 1) == EXAMPLE_PROBE
    assert next_question(engineer, "Describe your last project", LONG_PLAIN, 3) == EXAMPLE_PROBE

def test_open_question_match_is_case_sensitive(engineer):
    assert next_question(engineer, "tell me about yourself", LONG_PLAIN, 1) == engineer.seed_questions[1]

def test_example_in_answer_skips_probe(engineer):
    assert next_question(engineer, "Tell me about yourself", LONG_WITH_EXAMPLE, 1) == engineer.seed_questions[1]

def test_example_probe_stops_at_turn_four(engineer):
    assert next_question(engineer, "Tell me about yourself", LONG_PLAIN, 4) == engineer.seed_questions[4]

def test_short_answers_after_turn_three_advance(engineer):
    assert next_question(engineer, "How?", "Not sure", 3) == engineer.seed_questions[3]

def test_fallback_bank_after_seed_questions(engineer):
    seeds = len(engineer.seed_questions)
    for offset, question in enumerate(engineer.fallback_questions):
        assert next_question(engineer, "How?", LONG_PLAIN, seeds + offset) == question

def test_closing_remark_after_both_banks(catalog):
    for role in catalog.list():
        exhausted = len(role.seed_questions) + len(role.fallback_questions)
        for turn in (exhausted, exhausted + 1, exhausted + 50):
            assert next_question(role, "How?", LONG_PLAIN, turn) == CLOSING_REMARK
