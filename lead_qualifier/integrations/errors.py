class CollaboratorError(RuntimeError):
    """A downstream service (Slack, Notion, SMTP) rejected or failed a call."""


class NotificationError(CollaboratorError):
    """The lead notification could not be confirmed delivered."""
