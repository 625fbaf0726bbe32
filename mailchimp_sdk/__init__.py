"""
Mailchimp SDK - Two-layer client for the Mailchimp Marketing API v3.

Layers:
- core: Raw types, builders and HTTP client
- sdk: High-level MailchimpClient with nice ergonomics
"""

from mailchimp_sdk.core import (
    APIError,
    CampaignDefaults,
    Contact,
    ListBuilder,
    MailchimpError,
    MailingList,
    Member,
    MemberBuilder,
    Operation,
    Tag,
    TagBuilder,
    ValidationError,
    Webhook,
    WebhookBuilder,
    WebhookEvents,
    WebhookSources,
)
from mailchimp_sdk.sdk import MailchimpClient

__version__ = "0.1.0"
__all__ = [
    "APIError",
    "CampaignDefaults",
    "Contact",
    "ListBuilder",
    "MailchimpClient",
    "MailchimpError",
    "MailingList",
    "Member",
    "MemberBuilder",
    "Operation",
    "Tag",
    "TagBuilder",
    "ValidationError",
    "Webhook",
    "WebhookBuilder",
    "WebhookEvents",
    "WebhookSources",
]
