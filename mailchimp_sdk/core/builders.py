"""
Fluent builders for request records.

Every setter returns a new builder; a builder is never mutated, so a
partially configured builder can be shared and extended safely:

    base = MemberBuilder().status_subscribed()
    alice = base.email_address("alice@example.com").build()
    bob = base.email_address("bob@example.com").build()
"""

from dataclasses import replace
from typing import Any

from mailchimp_sdk.core.client import ValidationError
from mailchimp_sdk.core.types import (
    STATUS_CLEANED,
    STATUS_PENDING,
    STATUS_SUBSCRIBED,
    STATUS_UNSUBSCRIBED,
    TAG_STATUS_ACTIVE,
    TAG_STATUS_INACTIVE,
    CampaignDefaults,
    Contact,
    MailingList,
    Member,
    Tag,
    Webhook,
    WebhookEvents,
    WebhookSources,
)
from mailchimp_sdk.core.validator import validate_list, validate_member, validate_tag, validate_webhook

# =============================================================================
# List Builder
# =============================================================================


class ListBuilder:
    """Builder for MailingList."""

    def __init__(self, obj: MailingList | None = None):
        self._obj = obj if obj is not None else MailingList()

    def _with(self, **changes: Any) -> "ListBuilder":
        return ListBuilder(replace(self._obj, **changes))

    def name(self, name: str) -> "ListBuilder":
        return self._with(name=name)

    def permission_reminder(self, permission_reminder: str) -> "ListBuilder":
        return self._with(permission_reminder=permission_reminder)

    def email_type_option(self, email_type_option: bool) -> "ListBuilder":
        return self._with(email_type_option=email_type_option)

    def use_archive_bar(self, use_archive_bar: bool) -> "ListBuilder":
        return self._with(use_archive_bar=use_archive_bar)

    def notify_on_subscribe(self, email: str) -> "ListBuilder":
        return self._with(notify_on_subscribe=email)

    def notify_on_unsubscribe(self, email: str) -> "ListBuilder":
        return self._with(notify_on_unsubscribe=email)

    def double_optin(self, double_optin: bool) -> "ListBuilder":
        return self._with(double_optin=double_optin)

    def marketing_permissions(self, marketing_permissions: bool) -> "ListBuilder":
        return self._with(marketing_permissions=marketing_permissions)

    def contact(self, contact: Contact) -> "ListBuilder":
        return self._with(contact=replace(contact))

    def campaign_defaults(self, campaign_defaults: CampaignDefaults) -> "ListBuilder":
        return self._with(campaign_defaults=replace(campaign_defaults))

    def build(self) -> MailingList:
        """
        Validate and return the list.

        Raises:
            ValidationError: Naming every missing required field, including
                those of the nested contact and campaign defaults

        """
        invalid, valid = validate_list(self._obj)
        if not valid:
            raise ValidationError(f"could not build list due to invalid parameters {invalid}", invalid)
        return replace(self._obj)


# =============================================================================
# Member Builder
# =============================================================================


class MemberBuilder:
    """Builder for Member."""

    def __init__(self, obj: Member | None = None):
        self._obj = obj if obj is not None else Member()

    def _with(self, **changes: Any) -> "MemberBuilder":
        return MemberBuilder(replace(self._obj, **changes))

    def email_address(self, email_address: str) -> "MemberBuilder":
        return self._with(email_address=email_address)

    def email_type(self, email_type: str) -> "MemberBuilder":
        return self._with(email_type=email_type)

    def status_subscribed(self) -> "MemberBuilder":
        return self._with(status=STATUS_SUBSCRIBED)

    def status_unsubscribed(self) -> "MemberBuilder":
        return self._with(status=STATUS_UNSUBSCRIBED)

    def status_pending(self) -> "MemberBuilder":
        return self._with(status=STATUS_PENDING)

    def status_cleaned(self) -> "MemberBuilder":
        return self._with(status=STATUS_CLEANED)

    def merge_field(self, name: str, value: str) -> "MemberBuilder":
        return self._with(merge_fields={**self._obj.merge_fields, name: value})

    def build(self) -> Member:
        """Validate and return the member."""
        invalid, valid = validate_member(self._obj)
        if not valid:
            raise ValidationError(f"could not build member due to invalid parameters {invalid}", invalid)
        return replace(self._obj, merge_fields=dict(self._obj.merge_fields))


# =============================================================================
# Tag Builder
# =============================================================================


class TagBuilder:
    """Builder for Tag."""

    def __init__(self, obj: Tag | None = None):
        self._obj = obj if obj is not None else Tag()

    def _with(self, **changes: Any) -> "TagBuilder":
        return TagBuilder(replace(self._obj, **changes))

    def name(self, name: str) -> "TagBuilder":
        return self._with(name=name)

    def status_active(self) -> "TagBuilder":
        return self._with(status=TAG_STATUS_ACTIVE)

    def status_inactive(self) -> "TagBuilder":
        return self._with(status=TAG_STATUS_INACTIVE)

    def build(self) -> Tag:
        """Validate and return the tag."""
        invalid, valid = validate_tag(self._obj)
        if not valid:
            raise ValidationError(f"could not build tag due to invalid parameters {invalid}", invalid)
        return replace(self._obj)


# =============================================================================
# Webhook Builder
# =============================================================================


class WebhookBuilder:
    """Builder for Webhook."""

    def __init__(self, obj: Webhook | None = None):
        self._obj = obj if obj is not None else Webhook()

    def _with(self, **changes: Any) -> "WebhookBuilder":
        return WebhookBuilder(replace(self._obj, **changes))

    def url(self, url: str) -> "WebhookBuilder":
        return self._with(url=url)

    def events(self, events: WebhookEvents) -> "WebhookBuilder":
        return self._with(events=replace(events))

    def sources(self, sources: WebhookSources) -> "WebhookBuilder":
        return self._with(sources=replace(sources))

    def list_id(self, list_id: str) -> "WebhookBuilder":
        return self._with(list_id=list_id)

    def build(self) -> Webhook:
        """Validate and return the webhook."""
        invalid, valid = validate_webhook(self._obj)
        if not valid:
            raise ValidationError(f"could not build webhook due to invalid parameters {invalid}", invalid)
        return replace(self._obj)
