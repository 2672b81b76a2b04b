from lead_qualifier.core.models import Label, LeadRecord, Reasons, Scores, StepResult, StepStatus
from lead_qualifier.core.notification import format_lead_notification, summarize

SKIPPED = StepResult(status=StepStatus.SKIPPED)


def _record(label=Label.LOW, message="hello", reasons=None, **contacts) -> LeadRecord:
    return LeadRecord(
        lead_id="lead_abc",
        created_at="2026-01-01T00:00:00Z",
        label=label,
        scores=Scores(high_score=4, low_score=7, net_score=-3),
        reasons=reasons or Reasons(),
        message=message,
        **contacts,
    )


def test_summary_truncates_at_140_with_marker():
    assert summarize("x" * 140) == "x" * 140
    assert summarize("x" * 141) == "x" * 140 + "…"


def test_layout():
    text = format_lead_notification(
        _record(
            reasons=Reasons(high=("Urgent timeline (+3)",), low=("No urgency (-2)", "No timeline (-2)")),
            email="jane@example.com",
        ),
        SKIPPED,
        SKIPPED,
    )
    assert text.splitlines()[:9] == [
        "🔴 *LEAD: LOW*",
        "*Score:* -3 (high 4 / low 7)",
        "*Auto-response:* not_sent",
        "*Notion:* skipped",
        "*Reasons:* No urgency (-2), No timeline (-2)",
        "*Email:* jane@example.com",
        "*Phone:* N/A",
        "*WhatsApp:* N/A",
        "*Summary:* hello",
    ]
    assert text.endswith("\n\n*Full message:*\nhello")


def test_reasons_follow_label_and_fall_back_to_no_match():
    reasons = Reasons(high=("Urgent timeline (+3)",), low=())
    high_text = format_lead_notification(_record(label=Label.HIGH, reasons=reasons), SKIPPED, SKIPPED)
    low_text = format_lead_notification(_record(label=Label.LOW, reasons=reasons), SKIPPED, SKIPPED)

    assert "🟢 *LEAD: HIGH*" in high_text
    assert "*Reasons:* Urgent timeline (+3)" in high_text
    assert "*Reasons:* No keyword match" in low_text


def test_full_message_kept_when_summary_truncated():
    message = "a" * 200
    text = format_lead_notification(_record(message=message), SKIPPED, SKIPPED)
    assert f"*Summary:* {'a' * 140}…" in text
    assert text.endswith(message)


def test_step_statuses():
    text = format_lead_notification(
        _record(label=Label.HIGH),
        StepResult(status=StepStatus.FAILED, error="timed out"),
        StepResult(status=StepStatus.OK, detail="page-1"),
    )
    assert "*Auto-response:* failed (timed out)" in text
    assert "*Notion:* ok (page-1)" in text
