"""
Mailchimp SDK - High-level client with nice ergonomics.

This layer provides a clean, typed interface for list, member, tag,
webhook and batch operations. Built on top of the core APIClient.
"""

import builtins
import json
from collections.abc import Callable
from dataclasses import replace
from typing import Any, TypeVar

from mailchimp_sdk.core.client import (
    APIClient,
    BatchSizeError,
    DecodeError,
    HealthCheckError,
    Provider,
)
from mailchimp_sdk.core.types import (
    TAG_STATUS_ACTIVE,
    BatchStatus,
    MailingList,
    Member,
    Operation,
    Tag,
    Webhook,
    member_hash,
)

PING_HEALTH_STATUS = "Everything's Chimpy!"
MAX_BATCH_MEMBERS = 500

T = TypeVar("T")


def _decode(body: bytes) -> dict[str, Any]:
    """Decode a successful JSON response into a dict."""
    try:
        data = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DecodeError(f"Invalid JSON response: {e}") from e
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def _decode_items(body: bytes, key: str) -> builtins.list[dict[str, Any]]:
    """Decode a collection response and return the items under ``key``."""
    items = _decode(body).get(key)
    if not isinstance(items, builtins.list):
        raise DecodeError(f"Response is missing the '{key}' collection")
    for item in items:
        if not isinstance(item, dict):
            raise DecodeError(f"Expected objects in '{key}', got {type(item).__name__}")
    return items


def _parse(parser: Callable[[dict[str, Any]], T], data: dict[str, Any]) -> T:
    """Build a record from decoded JSON, reporting malformed shapes as DecodeError."""
    try:
        return parser(data)
    except (AttributeError, TypeError, ValueError) as e:
        raise DecodeError(f"Unexpected response shape: {e}") from e


def _parse_one(parser: Callable[[dict[str, Any]], T], body: bytes) -> T:
    return _parse(parser, _decode(body))


def _parse_items(parser: Callable[[dict[str, Any]], T], body: bytes, key: str) -> builtins.list[T]:
    return [_parse(parser, item) for item in _decode_items(body, key)]


def _member_path(list_id: str, email: str) -> str:
    return f"/lists/{list_id}/members/{member_hash(email)}"


class MailchimpClient:
    """
    High-level Mailchimp API client with typed methods and nice ergonomics.

    Example:
        client = MailchimpClient(api_key="xxxx-us6")
        client.ping()

        mailing_list = client.lists.create(
            ListBuilder().name("Newsletter").permission_reminder("...")
            .contact(contact).campaign_defaults(defaults).build()
        )
        client.members.batch(mailing_list.id, members)
        client.tags.update(mailing_list.id, "alice@example.com", [tag])

    """

    def __init__(
        self,
        api_key: str | None = None,
        region: str | None = None,
        provider: Provider | None = None,
    ):
        """
        Initialize the Mailchimp client.

        Args:
            api_key: Mailchimp API key (or MAILCHIMP_API_KEY env var)
            region: Data-center code (or MAILCHIMP_REGION env var, or the
                suffix of the API key)
            provider: Transport to use instead of the HTTP APIClient

        """
        self._client: Provider = provider if provider is not None else APIClient(api_key=api_key, region=region)

        # Sub-clients for different resources
        self.lists = ListOperations(self._client)
        self.members = MemberOperations(self._client)
        self.tags = TagOperations(self._client)
        self.webhooks = WebhookOperations(self._client)
        self.batches = BatchOperations(self._client)

    def ping(self) -> bool:
        """
        Check connectivity and credentials.

        Returns:
            True when the API reports it is healthy

        Raises:
            HealthCheckError: If the API answers with any other health status

        """
        data = _decode(self._client.get("/ping"))
        health_status = data.get("health_status")
        if health_status != PING_HEALTH_STATUS:
            raise HealthCheckError(
                "unexpected pong response from Mailchimp API",
                details={"health_status": health_status},
            )
        return True


# =============================================================================
# List Operations
# =============================================================================


class ListOperations:
    """Operations for managing lists (audiences)."""

    def __init__(self, client: Provider):
        self._client = client

    def create(self, mailing_list: MailingList) -> MailingList:
        """
        Create a new list.

        Args:
            mailing_list: The list to create, usually from ListBuilder

        Returns:
            The created list with server-assigned id and web_id

        """
        result = self._client.post("/lists", mailing_list.to_dict())
        return _parse_one(MailingList.from_dict, result)

    def list(self) -> builtins.list[MailingList]:
        """
        List the lists of the account.

        Returns:
            The lists in the first page of results

        """
        result = self._client.get("/lists")
        return _parse_items(MailingList.from_dict, result, "lists")

    def get(self, list_id: str) -> MailingList:
        """
        Get a list by ID.

        Args:
            list_id: The list ID

        Returns:
            List details

        """
        result = self._client.get(f"/lists/{list_id}")
        return _parse_one(MailingList.from_dict, result)

    def update(self, list_id: str, mailing_list: MailingList) -> MailingList:
        """
        Update the settings of a list.

        Args:
            list_id: The list ID
            mailing_list: The fields to change; unset fields are left as they are

        Returns:
            The updated list

        """
        result = self._client.patch(f"/lists/{list_id}", mailing_list.to_dict(partial=True))
        return _parse_one(MailingList.from_dict, result)

    def delete(self, list_id: str) -> bool:
        """
        Delete a list.

        Args:
            list_id: The list ID

        Returns:
            True on success

        """
        self._client.delete(f"/lists/{list_id}")
        return True


# =============================================================================
# Member Operations
# =============================================================================


class MemberOperations:
    """Operations for managing list members."""

    def __init__(self, client: Provider):
        self._client = client

    def batch(self, list_id: str, members: builtins.list[Member], update_existing: bool = False) -> bool:
        """
        Subscribe up to 500 members to a list in one request.

        Args:
            list_id: The list ID
            members: Members to add
            update_existing: Whether existing members should be updated

        Returns:
            True on success

        Raises:
            BatchSizeError: If more than 500 members are given; no request is made

        """
        if len(members) > MAX_BATCH_MEMBERS:
            raise BatchSizeError(
                f"batch operation only allows for a maximum of {MAX_BATCH_MEMBERS} members",
            )
        payload = {
            "members": [member.to_batch_dict() for member in members],
            "update_existing": update_existing,
        }
        self._client.post(f"/lists/{list_id}", payload)
        return True

    def batch_with_update(self, list_id: str, members: builtins.list[Member]) -> bool:
        """Subscribe up to 500 members, updating those that already exist."""
        return self.batch(list_id, members, update_existing=True)

    def update(self, list_id: str, email: str, member: Member) -> bool:
        """
        Update a member, e.g. to change their email address or status.

        Args:
            list_id: The list ID
            email: The member's current email address
            member: The new member fields

        Returns:
            True on success

        """
        self._client.patch(_member_path(list_id, email), member.to_dict())
        return True

    def archive(self, list_id: str, email: str) -> bool:
        """
        Archive a member of a list.

        Args:
            list_id: The list ID
            email: The member's email address

        Returns:
            True on success

        """
        self._client.delete(_member_path(list_id, email))
        return True


# =============================================================================
# Tag Operations
# =============================================================================


class TagOperations:
    """Operations for managing member tags."""

    def __init__(self, client: Provider):
        self._client = client

    def list(self, list_id: str, email: str) -> builtins.list[Tag]:
        """
        List the tags attached to a member.

        Args:
            list_id: The list ID
            email: The member's email address

        Returns:
            The member's tags, all reported as active

        """
        result = self._client.get(f"{_member_path(list_id, email)}/tags")
        # Mailchimp only returns tags that are attached, i.e. active
        return [replace(tag, status=TAG_STATUS_ACTIVE) for tag in _parse_items(Tag.from_dict, result, "tags")]

    def update(self, list_id: str, email: str, tags: builtins.list[Tag], syncing: bool = False) -> bool:
        """
        Add or remove tags on a member.

        Args:
            list_id: The list ID
            email: The member's email address
            tags: Tags to set; inactive tags are removed
            syncing: When True, automations tied to the tags are NOT triggered

        Returns:
            True on success

        """
        payload = {"tags": [tag.to_dict() for tag in tags], "is_syncing": syncing}
        self._client.post(f"{_member_path(list_id, email)}/tags", payload)
        return True

    def update_sync(self, list_id: str, email: str, tags: builtins.list[Tag]) -> bool:
        """Update member tags without triggering automations."""
        return self.update(list_id, email, tags, syncing=True)


# =============================================================================
# Webhook Operations
# =============================================================================


class WebhookOperations:
    """Operations for managing list webhooks."""

    def __init__(self, client: Provider):
        self._client = client

    def create(self, webhook: Webhook) -> Webhook:
        """
        Create a webhook on the list given by ``webhook.list_id``.

        Args:
            webhook: The webhook to create, usually from WebhookBuilder

        Returns:
            The created webhook with its server-assigned id

        """
        result = self._client.post(f"/lists/{webhook.list_id}/webhooks", webhook.to_dict())
        return _parse_one(Webhook.from_dict, result)

    def list(self, list_id: str) -> builtins.list[Webhook]:
        """
        List the webhooks of a list.

        Args:
            list_id: The list ID

        Returns:
            The list's webhooks

        """
        result = self._client.get(f"/lists/{list_id}/webhooks")
        return _parse_items(Webhook.from_dict, result, "webhooks")

    def get(self, list_id: str, webhook_id: str) -> Webhook:
        """Get a webhook by ID."""
        result = self._client.get(f"/lists/{list_id}/webhooks/{webhook_id}")
        return _parse_one(Webhook.from_dict, result)

    def delete(self, list_id: str, webhook_id: str) -> bool:
        """Delete a webhook. Returns True on success."""
        self._client.delete(f"/lists/{list_id}/webhooks/{webhook_id}")
        return True


# =============================================================================
# Batch Operations
# =============================================================================


class BatchOperations:
    """Submit several requests to be run server-side in one call."""

    def __init__(self, client: Provider):
        self._client = client

    def submit(self, operations: builtins.list[Operation]) -> BatchStatus:
        """
        Submit a batch of operations.

        Args:
            operations: The requests to run, e.g. from Operation.update_tags

        Returns:
            BatchStatus acknowledging the submitted batch

        """
        payload = {"operations": [operation.to_dict() for operation in operations]}
        result = self._client.post("/batches", payload)
        return _parse_one(BatchStatus.from_dict, result)
