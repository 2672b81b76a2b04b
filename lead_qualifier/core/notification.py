from .models import Label, LeadRecord, StepResult, StepStatus

SUMMARY_LIMIT = 140
NOT_PROVIDED = "N/A"
NO_MATCH = "No keyword match"

# Auto-response status wording shown in the channel.
_EMAIL_STATUS_TEXT = {
    StepStatus.OK: "sent",
    StepStatus.SKIPPED: "not_sent",
    StepStatus.FAILED: "failed",
}


def summarize(message: str, limit: int = SUMMARY_LIMIT) -> str:
    return message[:limit] + ("…" if len(message) > limit else "")


def _email_status(result: StepResult) -> str:
    text = _EMAIL_STATUS_TEXT[result.status]
    return f"{text} ({result.error})" if result.error else text


def _notion_status(result: StepResult) -> str:
    text = result.status.value
    if result.status == StepStatus.OK and result.detail:
        return f"{text} ({result.detail})"
    return text


def format_lead_notification(record: LeadRecord, auto_response: StepResult, notion: StepResult) -> str:
    """Render the Slack mrkdwn message for one classified lead."""
    marker = "🟢" if record.label == Label.HIGH else "🔴"
    scores = record.scores
    reasons = ", ".join(record.reasons.for_label(record.label)) or NO_MATCH

    return (
        f"{marker} *LEAD: {record.label.value}*\n"
        f"*Score:* {scores.net_score} (high {scores.high_score} / low {scores.low_score})\n"
        f"*Auto-response:* {_email_status(auto_response)}\n"
        f"*Notion:* {_notion_status(notion)}\n"
        f"*Reasons:* {reasons}\n"
        f"*Email:* {record.email or NOT_PROVIDED}\n"
        f"*Phone:* {record.phone or NOT_PROVIDED}\n"
        f"*WhatsApp:* {record.whatsapp or NOT_PROVIDED}\n"
        f"*Summary:* {summarize(record.message)}\n\n"
        f"*Full message:*\n{record.message}"
    )
