"""Required-field checks for request records."""

from typing import Any

from mailchimp_sdk.core.types import CampaignDefaults, Contact, MailingList, Member, Tag, Webhook


def is_set(value: Any) -> bool:
    """Only strings can be unset; every other value counts as set."""
    if isinstance(value, str):
        return value != ""
    return True


def validate(record: Any, required: tuple[str, ...]) -> tuple[list[str], bool]:
    """
    Check ``required`` attributes of ``record``.

    Returns:
        The names of every unset required field, and whether there were none

    """
    invalid = [name for name in required if not is_set(getattr(record, name))]
    return invalid, not invalid


def _nested(prefix: str, invalid: list[str]) -> list[str]:
    return [f"{prefix}.{name}" for name in invalid]


def validate_contact(contact: Contact) -> tuple[list[str], bool]:
    return validate(contact, Contact.REQUIRED_FIELDS)


def validate_campaign_defaults(defaults: CampaignDefaults) -> tuple[list[str], bool]:
    return validate(defaults, CampaignDefaults.REQUIRED_FIELDS)


def validate_list(mailing_list: MailingList) -> tuple[list[str], bool]:
    """Validate a list and, independently, its contact and campaign defaults."""
    invalid, _ = validate(mailing_list, MailingList.REQUIRED_FIELDS)
    contact_invalid, _ = validate_contact(mailing_list.contact)
    defaults_invalid, _ = validate_campaign_defaults(mailing_list.campaign_defaults)
    invalid += _nested("contact", contact_invalid)
    invalid += _nested("campaign_defaults", defaults_invalid)
    return invalid, not invalid


def validate_member(member: Member) -> tuple[list[str], bool]:
    return validate(member, Member.REQUIRED_FIELDS)


def validate_tag(tag: Tag) -> tuple[list[str], bool]:
    return validate(tag, Tag.REQUIRED_FIELDS)


def validate_webhook(webhook: Webhook) -> tuple[list[str], bool]:
    return validate(webhook, Webhook.REQUIRED_FIELDS)
