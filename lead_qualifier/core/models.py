from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Optional
from enum import Enum


class Label(str, Enum):
    HIGH = "HIGH"
    LOW = "LOW"


class StepStatus(str, Enum):
    OK = "ok"
    SKIPPED = "skipped"
    FAILED = "failed"


class SignalRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1, description="Lower-case phrase searched for in the message")
    points: int = Field(..., gt=0)
    reason: str = Field(..., min_length=1, description="Human-readable label for the match")

    @field_validator("key")
    @classmethod
    def key_is_lowercase(cls, v: str) -> str:
        # Messages are lower-cased before matching; an upper-case key could never match.
        if v != v.lower():
            raise ValueError(f"signal key must be lower-case: {v!r}")
        return v


class SignalConfig(BaseModel):
    """Immutable rule tables consumed by the classifier."""
    model_config = ConfigDict(frozen=True)

    version: str
    high_signals: tuple[SignalRule, ...]
    low_signals: tuple[SignalRule, ...]
    intent_signals: frozenset[str]
    hard_negatives: frozenset[str]
    net_score_threshold: int = 3

    @property
    def high_keys(self) -> frozenset[str]:
        return frozenset(rule.key for rule in self.high_signals)


class Scores(BaseModel):
    model_config = ConfigDict(frozen=True)

    high_score: int = Field(0, ge=0)
    low_score: int = Field(0, ge=0)
    net_score: int = 0


class Reasons(BaseModel):
    model_config = ConfigDict(frozen=True)

    high: tuple[str, ...] = ()
    low: tuple[str, ...] = ()

    def for_label(self, label: Label) -> tuple[str, ...]:
        return self.high if label == Label.HIGH else self.low


class ClassificationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: Label
    scores: Scores
    reasons: Reasons
    has_intent_signal: bool = False
    has_hard_negative: bool = False


class LeadSubmission(BaseModel):
    """Raw form payload. Field presence rules are enforced by clean_submission()."""
    email: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    message: Optional[str] = None
    # Honeypot: hidden on the form, real visitors leave it empty.
    company_website: Optional[str] = None

    @field_validator("email", "phone", "whatsapp", "message", "company_website", mode="before")
    @classmethod
    def coerce_to_text(cls, v: Any) -> Optional[str]:
        """Accept numbers and other scalars the way a loosely-typed form sends them."""
        if v is None:
            return None
        return v if isinstance(v, str) else str(v)


class CleanLead(BaseModel):
    """Trimmed submission: optional contact fields are None unless non-empty."""
    model_config = ConfigDict(frozen=True)

    message: str
    email: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None


class LeadRecord(BaseModel):
    lead_id: str
    created_at: str
    label: Label
    scores: Scores
    reasons: Reasons
    email: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    company_website: Optional[str] = None
    message: str


class StepResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: StepStatus
    detail: Optional[str] = None
    error: Optional[str] = None


class LeadOutcome(BaseModel):
    record: LeadRecord
    persist: StepResult
    notion: StepResult
    auto_response: StepResult
    notification_text: str


class LeadResponse(BaseModel):
    ok: bool
    ignored: Optional[bool] = None
    label: Optional[Label] = None
    lead_id: Optional[str] = None
    email_status: Optional[StepStatus] = None
    notion_status: Optional[StepStatus] = None
    notion_page_id: Optional[str] = None
