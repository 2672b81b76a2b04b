import logging
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI, HTTPException
from fastapi.staticfiles import StaticFiles
from .core.config import PUBLIC_DIR, Settings, get_settings
from .core.intake import LeadValidationError, clean_submission, is_honeypot
from .core.models import LeadResponse, LeadSubmission, StepStatus
from .core.pipeline import LeadPipeline
from .core.signals import load_signal_config
from .integrations.errors import CollaboratorError, NotificationError
from .integrations.mailer import AutoResponder
from .integrations.notion import NotionLeadStore
from .integrations.slack import SlackNotifier
from .store.lead_log import LeadLog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    # Broken rule tables abort startup.
    config = load_signal_config()
    logger.info(
        "Signal config %s loaded: %d high / %d low rules",
        config.version, len(config.high_signals), len(config.low_signals),
    )
    for group in settings.missing():
        logger.warning("Collaborator not configured: %s", group)
    yield


app = FastAPI(title="Lead Qualifier", lifespan=lifespan)


def get_slack(settings: Settings = Depends(get_settings)) -> SlackNotifier:
    return SlackNotifier(settings.slack_bot_token, settings.slack_channel_id)


def get_notion(settings: Settings = Depends(get_settings)) -> NotionLeadStore:
    return NotionLeadStore(settings.notion_token, settings.notion_database_id)


def get_pipeline(
    settings: Settings = Depends(get_settings),
    slack: SlackNotifier = Depends(get_slack),
    notion: NotionLeadStore = Depends(get_notion),
) -> LeadPipeline:
    responder = AutoResponder(
        settings.smtp_host,
        settings.smtp_port,
        settings.smtp_user,
        settings.smtp_pass,
        settings.smtp_from,
    )
    return LeadPipeline(LeadLog(), notion, responder, slack)


@app.get("/health")
async def health():
    return {"ok": True}


@app.get("/test-slack")
async def test_slack(slack: SlackNotifier = Depends(get_slack)):
    """Post a connectivity message to the lead channel."""
    try:
        ts = await slack.post_message("✅ LeadQualifierBot is connected. Test message successful.")
    except NotificationError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    return {"ok": True, "ts": ts}


@app.get("/debug-notion-db")
async def debug_notion_db(notion: NotionLeadStore = Depends(get_notion)):
    """Confirm the configured Notion database id points at the intended database."""
    try:
        info = await notion.describe_database()
    except CollaboratorError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    return {"ok": True, **info}


@app.post("/lead", response_model=LeadResponse, response_model_exclude_none=True)
async def submit_lead(
    req: LeadSubmission,
    pipeline: LeadPipeline = Depends(get_pipeline),
) -> LeadResponse:
    """
    Receive a web-form inquiry.

    - honeypot filled: accepted and ignored (no classification or side effects)
    - missing message or contact: 400
    - notification not delivered: 500 (the lead is still in the log)
    """
    if is_honeypot(req):
        return LeadResponse(ok=True, ignored=True)

    try:
        lead = clean_submission(req)
    except LeadValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    try:
        outcome = await pipeline.process(lead)
    except NotificationError as e:
        logger.error("Lead notification failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Notification delivery failed: {e}") from e

    return LeadResponse(
        ok=True,
        label=outcome.record.label,
        lead_id=outcome.record.lead_id,
        email_status=outcome.auto_response.status,
        notion_status=outcome.notion.status,
        notion_page_id=outcome.notion.detail if outcome.notion.status == StepStatus.OK else None,
    )


# Mounted last so the API routes above take precedence over "/".
app.mount("/", StaticFiles(directory=PUBLIC_DIR, html=True, check_dir=False), name="public")
