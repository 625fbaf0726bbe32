"""
Core types mirroring the Mailchimp Marketing API v3 resources.

These dataclasses provide type safety and IDE support for API requests
and responses.
"""

import hashlib
import json
from dataclasses import dataclass, field
from typing import Any, ClassVar

# Member statuses
STATUS_SUBSCRIBED = "subscribed"
STATUS_UNSUBSCRIBED = "unsubscribed"
STATUS_PENDING = "pending"
STATUS_CLEANED = "cleaned"

MEMBER_STATUSES = (STATUS_SUBSCRIBED, STATUS_UNSUBSCRIBED, STATUS_PENDING, STATUS_CLEANED)

# Tag statuses
TAG_STATUS_ACTIVE = "active"
TAG_STATUS_INACTIVE = "inactive"

# Webhook events and sources
EVENT_SUBSCRIBE = "subscribe"
EVENT_UNSUBSCRIBE = "unsubscribe"
EVENT_PROFILE = "profile"
EVENT_CLEANED = "cleaned"
EVENT_UPEMAIL = "upemail"
EVENT_CAMPAIGN = "campaign"

SOURCE_USER = "user"
SOURCE_ADMIN = "admin"
SOURCE_API = "api"


def member_hash(email: str) -> str:
    """
    Return the subscriber hash Mailchimp uses to address a list member.

    The address is lower-cased before hashing so that differently cased
    spellings resolve to the same member.
    """
    return hashlib.md5(email.lower().encode("utf-8")).hexdigest()


def _drop_empty(data: dict[str, Any]) -> dict[str, Any]:
    """Remove unset values: None, empty strings and empty nested dicts."""
    return {key: value for key, value in data.items() if value is not None and value != "" and value != {}}


# =============================================================================
# List Types
# =============================================================================


@dataclass
class Contact:
    """Postal contact information shown in list footers."""

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("address1", "city", "state", "zip", "country", "company")

    address1: str = ""
    address2: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = ""
    company: str = ""
    phone: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Contact":
        """Create from API response dict."""
        return cls(
            address1=data.get("address1") or "",
            address2=data.get("address2") or "",
            city=data.get("city") or "",
            state=data.get("state") or "",
            zip=data.get("zip") or "",
            country=data.get("country") or "",
            company=data.get("company") or "",
            phone=data.get("phone") or "",
        )

    def to_dict(self, partial: bool = False) -> dict[str, Any]:
        """Convert to dict for API request; ``partial`` drops empty fields."""
        result = {
            "address1": self.address1,
            "address2": self.address2,
            "city": self.city,
            "state": self.state,
            "zip": self.zip,
            "country": self.country,
            "company": self.company,
            "phone": self.phone,
        }
        return _drop_empty(result) if partial else result


@dataclass
class CampaignDefaults:
    """Default values for campaigns sent to a list."""

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("from_name", "from_email", "subject", "language")

    from_name: str = ""
    from_email: str = ""
    subject: str = ""
    language: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CampaignDefaults":
        """Create from API response dict."""
        return cls(
            from_name=data.get("from_name") or "",
            from_email=data.get("from_email") or "",
            subject=data.get("subject") or "",
            language=data.get("language") or "",
        )

    def to_dict(self, partial: bool = False) -> dict[str, Any]:
        """Convert to dict for API request; ``partial`` drops empty fields."""
        result = {
            "from_name": self.from_name,
            "from_email": self.from_email,
            "subject": self.subject,
            "language": self.language,
        }
        return _drop_empty(result) if partial else result


@dataclass
class MailingList:
    """A Mailchimp list (audience)."""

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("name", "permission_reminder")

    id: str = ""
    web_id: int = 0
    name: str = ""
    contact: Contact = field(default_factory=Contact)
    permission_reminder: str = ""
    campaign_defaults: CampaignDefaults = field(default_factory=CampaignDefaults)
    # None means "not set": omitted from partial updates, sent as false otherwise
    email_type_option: bool | None = None
    use_archive_bar: bool | None = None
    notify_on_subscribe: str = ""
    notify_on_unsubscribe: str = ""
    double_optin: bool | None = None
    marketing_permissions: bool | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MailingList":
        """Create from API response dict."""
        return cls(
            id=data.get("id") or "",
            web_id=data.get("web_id") or 0,
            name=data.get("name") or "",
            contact=Contact.from_dict(data.get("contact") or {}),
            permission_reminder=data.get("permission_reminder") or "",
            campaign_defaults=CampaignDefaults.from_dict(data.get("campaign_defaults") or {}),
            email_type_option=bool(data.get("email_type_option")),
            use_archive_bar=bool(data.get("use_archive_bar")),
            notify_on_subscribe=data.get("notify_on_subscribe") or "",
            notify_on_unsubscribe=data.get("notify_on_unsubscribe") or "",
            double_optin=bool(data.get("double_optin")),
            marketing_permissions=bool(data.get("marketing_permissions")),
        )

    def to_dict(self, partial: bool = False) -> dict[str, Any]:
        """
        Convert to dict for API request (server-assigned ids are omitted).

        With ``partial`` only the fields that were set are included, so a
        PATCH leaves every other field of the list untouched.
        """
        flags = {
            "email_type_option": self.email_type_option,
            "use_archive_bar": self.use_archive_bar,
            "double_optin": self.double_optin,
            "marketing_permissions": self.marketing_permissions,
        }
        result = {
            "name": self.name,
            "contact": self.contact.to_dict(partial),
            "permission_reminder": self.permission_reminder,
            "campaign_defaults": self.campaign_defaults.to_dict(partial),
            "notify_on_subscribe": self.notify_on_subscribe,
            "notify_on_unsubscribe": self.notify_on_unsubscribe,
        }
        if partial:
            result.update(flags)
            return _drop_empty(result)
        result.update({name: bool(value) for name, value in flags.items()})
        return result


# =============================================================================
# Member Types
# =============================================================================


@dataclass
class Member:
    """A subscriber within a list."""

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("email_address",)

    email_address: str = ""
    email_type: str = ""
    status: str = ""
    merge_fields: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request."""
        result: dict[str, Any] = {"email_address": self.email_address}
        if self.email_type:
            result["email_type"] = self.email_type
        if self.status:
            result["status"] = self.status
        if self.merge_fields:
            result["merge_fields"] = dict(self.merge_fields)
        return result

    def to_batch_dict(self) -> dict[str, Any]:
        """Reduced shape used by the bulk subscribe endpoint."""
        return {
            "email_address": self.email_address,
            "status": self.status,
            "merge_fields": dict(self.merge_fields),
        }


# =============================================================================
# Tag Types
# =============================================================================


@dataclass
class Tag:
    """A label attached to a member."""

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("name", "status")

    name: str = ""
    status: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Tag":
        """Create from API response dict."""
        return cls(
            name=data.get("name") or "",
            status=data.get("status") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request."""
        return {"name": self.name, "status": self.status}


# =============================================================================
# Webhook Types
# =============================================================================


@dataclass
class WebhookEvents:
    """Which list events a webhook fires on."""

    subscribe: bool = False
    unsubscribe: bool = False
    profile: bool = False
    cleaned: bool = False
    upemail: bool = False
    campaign: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WebhookEvents":
        """Create from API response dict."""
        return cls(
            subscribe=bool(data.get(EVENT_SUBSCRIBE, False)),
            unsubscribe=bool(data.get(EVENT_UNSUBSCRIBE, False)),
            profile=bool(data.get(EVENT_PROFILE, False)),
            cleaned=bool(data.get(EVENT_CLEANED, False)),
            upemail=bool(data.get(EVENT_UPEMAIL, False)),
            campaign=bool(data.get(EVENT_CAMPAIGN, False)),
        )

    def to_dict(self) -> dict[str, bool]:
        """Convert to dict for API request."""
        return {
            EVENT_SUBSCRIBE: self.subscribe,
            EVENT_UNSUBSCRIBE: self.unsubscribe,
            EVENT_PROFILE: self.profile,
            EVENT_CLEANED: self.cleaned,
            EVENT_UPEMAIL: self.upemail,
            EVENT_CAMPAIGN: self.campaign,
        }


@dataclass
class WebhookSources:
    """Which kinds of change trigger a webhook."""

    user: bool = False
    admin: bool = False
    api: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WebhookSources":
        """Create from API response dict."""
        return cls(
            user=bool(data.get(SOURCE_USER, False)),
            admin=bool(data.get(SOURCE_ADMIN, False)),
            api=bool(data.get(SOURCE_API, False)),
        )

    def to_dict(self) -> dict[str, bool]:
        """Convert to dict for API request."""
        return {SOURCE_USER: self.user, SOURCE_ADMIN: self.admin, SOURCE_API: self.api}


@dataclass
class Webhook:
    """A push-notification subscription on a list."""

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("url", "list_id")

    id: str = ""
    url: str = ""
    events: WebhookEvents = field(default_factory=WebhookEvents)
    sources: WebhookSources = field(default_factory=WebhookSources)
    list_id: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Webhook":
        """Create from API response dict."""
        return cls(
            id=data.get("id") or "",
            url=data.get("url") or "",
            events=WebhookEvents.from_dict(data.get("events") or {}),
            sources=WebhookSources.from_dict(data.get("sources") or {}),
            list_id=data.get("list_id") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request (the list id travels in the path)."""
        return {
            "url": self.url,
            "events": self.events.to_dict(),
            "sources": self.sources.to_dict(),
        }


# =============================================================================
# Batch Types
# =============================================================================


@dataclass
class Operation:
    """One request executed server-side as part of a batch."""

    method: str
    path: str
    body: str = ""

    @classmethod
    def request(cls, method: str, path: str, body: Any = None) -> "Operation":
        """Build an operation, serializing ``body`` to a JSON string."""
        return cls(method=method.upper(), path=path, body="" if body is None else json.dumps(body))

    @classmethod
    def update_tags(cls, list_id: str, email: str, tags: list[Tag], syncing: bool = False) -> "Operation":
        """Build the operation that replaces a member's tags."""
        return cls.request(
            "POST",
            f"/lists/{list_id}/members/{member_hash(email)}/tags",
            {"tags": [tag.to_dict() for tag in tags], "is_syncing": syncing},
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request."""
        return {"method": self.method, "path": self.path, "body": self.body}


@dataclass
class BatchStatus:
    """Acknowledgement returned when a batch is submitted."""

    id: str
    status: str = ""
    total_operations: int = 0
    finished_operations: int = 0
    errored_operations: int = 0
    submitted_at: str | None = None
    completed_at: str | None = None
    response_body_url: str | None = None

    @property
    def is_finished(self) -> bool:
        """Check if Mailchimp has processed every operation."""
        return self.status == "finished"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BatchStatus":
        """Create from API response dict."""
        return cls(
            id=data.get("id") or "",
            status=data.get("status") or "",
            total_operations=data.get("total_operations", 0),
            finished_operations=data.get("finished_operations", 0),
            errored_operations=data.get("errored_operations", 0),
            submitted_at=data.get("submitted_at") or None,
            completed_at=data.get("completed_at") or None,
            response_body_url=data.get("response_body_url") or None,
        )


# =============================================================================
# Error Types
# =============================================================================


@dataclass
class ErrorResponse:
    """Problem-details body returned with non-2xx responses."""

    type: str = ""
    title: str = ""
    status: int = 0
    detail: str = ""
    instance: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ErrorResponse":
        """Create from API response dict."""
        return cls(
            type=data.get("type") or "",
            title=data.get("title") or "",
            status=data.get("status") or 0,
            detail=data.get("detail") or "",
            instance=data.get("instance") or "",
        )
