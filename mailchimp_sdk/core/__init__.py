"""
Core layer - Raw types, builders and HTTP client.

This layer provides:
- Typed dataclasses matching the Mailchimp Marketing API resources
- Immutable builders with required-field validation
- Low-level HTTP client with auth and error handling
"""

from mailchimp_sdk.core.builders import ListBuilder, MemberBuilder, TagBuilder, WebhookBuilder
from mailchimp_sdk.core.client import (
    APIClient,
    APIError,
    BatchSizeError,
    ConfigurationError,
    DecodeError,
    EncodingError,
    HealthCheckError,
    MailchimpError,
    Provider,
    TransportError,
    ValidationError,
    authorization,
)
from mailchimp_sdk.core.types import (
    BatchStatus,
    CampaignDefaults,
    Contact,
    ErrorResponse,
    MailingList,
    Member,
    Operation,
    Tag,
    Webhook,
    WebhookEvents,
    WebhookSources,
    member_hash,
)

__all__ = [
    "APIClient",
    "APIError",
    "BatchSizeError",
    "BatchStatus",
    "CampaignDefaults",
    "ConfigurationError",
    "Contact",
    "DecodeError",
    "EncodingError",
    "ErrorResponse",
    "HealthCheckError",
    "ListBuilder",
    "MailchimpError",
    "MailingList",
    "Member",
    "MemberBuilder",
    "Operation",
    "Provider",
    "Tag",
    "TagBuilder",
    "TransportError",
    "ValidationError",
    "Webhook",
    "WebhookBuilder",
    "WebhookEvents",
    "WebhookSources",
    "authorization",
    "member_hash",
]
