from typing import Optional
from .models import ClassificationResult, Label, Reasons, Scores, SignalConfig, SignalRule
from .signals import load_signal_config


def _matched(rules: tuple[SignalRule, ...], text: str) -> list[SignalRule]:
    # Declaration order, one hit per rule no matter how often the phrase repeats.
    return [rule for rule in rules if rule.key in text]


def classify(message: Optional[str], config: Optional[SignalConfig] = None) -> ClassificationResult:
    """
    Label a free-text lead message HIGH or LOW.

    Matching is case-insensitive substring search over the whole message,
    with no tokenization or trimming ("by" matches inside "standby").
    HIGH requires all of:
    - no hard-negative phrase,
    - at least one intent phrase,
    - net score (high - low) >= the configured threshold.

    Pure and total: any input, including None or "", yields a result.
    """
    if config is None:
        config = load_signal_config()

    text = (message or "").lower()

    matched_high = _matched(config.high_signals, text)
    matched_low = _matched(config.low_signals, text)

    high_score = sum(rule.points for rule in matched_high)
    low_score = sum(rule.points for rule in matched_low)
    net_score = high_score - low_score

    has_intent_signal = any(phrase in text for phrase in config.intent_signals)
    has_hard_negative = any(phrase in text for phrase in config.hard_negatives)

    is_high = (
        not has_hard_negative
        and has_intent_signal
        and net_score >= config.net_score_threshold
    )

    return ClassificationResult(
        label=Label.HIGH if is_high else Label.LOW,
        scores=Scores(high_score=high_score, low_score=low_score, net_score=net_score),
        reasons=Reasons(
            high=tuple(f"{rule.reason} (+{rule.points})" for rule in matched_high),
            low=tuple(f"{rule.reason} (-{rule.points})" for rule in matched_low),
        ),
        has_intent_signal=has_intent_signal,
        has_hard_negative=has_hard_negative,
    )
