"""
Lead intake pipeline.

One pure classification step followed by individually fallible side-effect
steps. Each optional step folds its own failure into a StepResult; only the
notification step may abort the request.

Stages:
1. Classify (pure)
2. Persist to the append-only lead log (log-and-continue)
3. Secondary database page (HIGH only) } concurrent, independent
4. Auto-response email (HIGH only)     }
5. Notify (failure raises NotificationError)
"""
import asyncio
import logging
from typing import Optional
from .classifier import classify
from .intake import get_iso_timestamp, is_likely_email, new_lead_id
from .models import (
    CleanLead, ClassificationResult, Label, LeadOutcome, LeadRecord,
    SignalConfig, StepResult, StepStatus,
)
from .notification import format_lead_notification

logger = logging.getLogger(__name__)


class LeadPipeline:
    def __init__(self, lead_log, notion, responder, notifier, signal_config: Optional[SignalConfig] = None):
        self.lead_log = lead_log
        self.notion = notion
        self.responder = responder
        self.notifier = notifier
        self.signal_config = signal_config

    def build_record(self, lead: CleanLead, result: ClassificationResult) -> LeadRecord:
        return LeadRecord(
            lead_id=new_lead_id(),
            created_at=get_iso_timestamp(),
            label=result.label,
            scores=result.scores,
            reasons=result.reasons,
            email=lead.email,
            phone=lead.phone,
            whatsapp=lead.whatsapp,
            company_website=None,
            message=lead.message,
        )

    async def persist(self, record: LeadRecord) -> StepResult:
        try:
            await asyncio.to_thread(self.lead_log.append, record)
        except OSError as e:
            logger.error("PIPELINE: failed to append %s to lead log: %s", record.lead_id, e)
            return StepResult(status=StepStatus.FAILED, error=str(e))
        return StepResult(status=StepStatus.OK)

    async def write_notion(self, record: LeadRecord) -> StepResult:
        if record.label != Label.HIGH:
            return StepResult(status=StepStatus.SKIPPED)
        try:
            return await self.notion.create_lead_page(record)
        except Exception as e:
            logger.error("PIPELINE: Notion write failed for %s: %s", record.lead_id, e)
            return StepResult(status=StepStatus.FAILED, error=str(e) or e.__class__.__name__)

    async def auto_respond(self, record: LeadRecord) -> StepResult:
        if record.label != Label.HIGH or not is_likely_email(record.email):
            return StepResult(status=StepStatus.SKIPPED)
        try:
            await self.responder.send(record.email)
        except Exception as e:
            return StepResult(status=StepStatus.FAILED, error=str(e) or "unknown email error")
        return StepResult(status=StepStatus.OK, detail=record.email)

    async def process(self, lead: CleanLead) -> LeadOutcome:
        """
        Run every stage for one validated lead.

        Raises:
            NotificationError: the channel post failed. The record has
                already been persisted at that point.
        """
        result = classify(lead.message, self.signal_config)
        record = self.build_record(lead, result)
        logger.info(
            "PIPELINE: %s classified %s (net %d)",
            record.lead_id, record.label.value, record.scores.net_score,
        )

        persist = await self.persist(record)
        notion, auto_response = await asyncio.gather(
            self.write_notion(record),
            self.auto_respond(record),
        )

        text = format_lead_notification(record, auto_response, notion)
        await self.notifier.post_message(text)

        return LeadOutcome(
            record=record,
            persist=persist,
            notion=notion,
            auto_response=auto_response,
            notification_text=text,
        )
