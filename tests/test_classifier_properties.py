"""
Classifier invariants: substring matching, single counting per rule,
reason ordering, and the three-part HIGH gate.
"""
import pytest
from pydantic import ValidationError

from lead_qualifier.core.classifier import classify
from lead_qualifier.core.models import Label
from lead_qualifier.core.signals import parse_signal_config


def _config(threshold: int = 3):
    """Small table where gating and weighting can be varied independently."""
    return parse_signal_config({
        "version": "test",
        "decision": {"net_score_threshold": threshold},
        "high_signals": [
            {"key": "deadline", "points": 1, "reason": "Deadline"},
            {"key": "shiny", "points": 1, "reason": "Shiny"},
            {"key": "glossy", "points": 1, "reason": "Glossy"},
            {"key": "lavish", "points": 1, "reason": "Lavish"},
        ],
        "low_signals": [
            {"key": "meh", "points": 1, "reason": "Meh"},
        ],
        "intent_signals": ["deadline"],
        "hard_negatives": ["spamword"],
    })


@pytest.mark.parametrize("message", ["ASAP", "Asap", "i need this asap!!"])
def test_matching_is_case_insensitive(message):
    result = classify(message)
    assert "Urgent timeline (+3)" in result.reasons.high


def test_matching_is_substring_not_word_boundary():
    result = classify("we keep a standby crew")
    assert result.reasons.high == ("Deadline mentioned (+1)",)
    assert result.has_intent_signal is True


def test_repeated_phrase_counts_once():
    once = classify("asap")
    many = classify("asap asap asap")
    assert many.scores.high_score == once.scores.high_score == 3
    assert many.reasons.high == once.reasons.high


@pytest.mark.parametrize("message", [None, "", "   ", "\n\t "])
def test_empty_input_is_low_with_zero_scores(message):
    result = classify(message)

    assert result.label == Label.LOW
    assert (result.scores.high_score, result.scores.low_score, result.scores.net_score) == (0, 0, 0)
    assert result.reasons.high == ()
    assert result.reasons.low == ()


def test_binary_looking_input_is_handled():
    result = classify("\x00\xff\x7f" * 1000)
    assert result.label == Label.LOW
    assert result.scores.net_score == 0


def test_reasons_follow_declaration_order_not_message_order():
    result = classify("budget and a quote, then a call, asap")
    assert result.reasons.high == (
        "Urgent timeline (+3)",
        "Requesting a quote (+2)",
        "Budget mentioned (+2)",
        "Wants to discuss next steps (+1)",
    )


def test_reason_format():
    result = classify("asap but not sure")
    assert result.reasons.high == ("Urgent timeline (+3)",)
    assert result.reasons.low == ("Uncertain intent (-3)",)


@pytest.mark.parametrize("message", [
    "",
    "asap",
    "just curious, whenever, someday",
    "proposal quote budget scope contract retainer but free and cheap",
    "hookups asap proposal",
])
def test_net_score_is_high_minus_low(message):
    scores = classify(message).scores
    assert scores.net_score == scores.high_score - scores.low_score


def test_hard_negative_dominates_any_score():
    message = (
        "free dating app: asap, next month, starting within budget, proposal, quote, "
        "scope, requirements, deliverables, contract, retainer, call, meeting"
    )
    result = classify(message)
    assert result.scores.net_score >= 3 + 20
    assert result.has_intent_signal is True
    assert result.label == Label.LOW


def test_missing_intent_dominates_score():
    result = classify("shiny glossy lavish shiny glossy lavish", _config())
    assert result.scores.net_score == 3
    assert result.has_intent_signal is False
    assert result.label == Label.LOW


def test_premium_alone_does_not_open_the_gate():
    result = classify("premium premium PREMIUM")
    assert result.scores.high_score == 2
    assert result.has_intent_signal is False
    assert result.label == Label.LOW


# (message, has_intent, has_hard_negative, net_score) under _config(threshold=3)
GATE_GRID = [
    ("deadline shiny glossy", True, False, 3),
    ("deadline shiny glossy lavish", True, False, 4),
    ("deadline shiny", True, False, 2),
    ("deadline shiny glossy spamword", True, True, 3),
    ("deadline shiny glossy lavish spamword", True, True, 4),
    ("deadline spamword", True, True, 1),
    ("shiny glossy lavish", False, False, 3),
    ("shiny glossy", False, False, 2),
    ("shiny glossy lavish spamword", False, True, 3),
    ("shiny spamword", False, True, 1),
    ("deadline shiny glossy lavish meh", True, False, 3),
    ("deadline shiny glossy meh", True, False, 2),
]


@pytest.mark.parametrize("message, intent, hard_negative, net", GATE_GRID)
def test_label_is_high_iff_all_gates_hold(message, intent, hard_negative, net):
    result = classify(message, _config())

    assert result.has_intent_signal is intent
    assert result.has_hard_negative is hard_negative
    assert result.scores.net_score == net

    expected_high = intent and not hard_negative and net >= 3
    assert (result.label == Label.HIGH) is expected_high


def test_threshold_is_configurable():
    message = "deadline shiny"
    assert classify(message, _config(threshold=3)).label == Label.LOW
    assert classify(message, _config(threshold=2)).label == Label.HIGH


def test_result_is_immutable():
    result = classify("asap")
    with pytest.raises(ValidationError):
        result.label = Label.LOW
