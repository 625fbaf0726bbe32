"""Tests for the high-level MailchimpClient and its operation groups."""

import json

import pytest

from mailchimp_sdk.core.client import (
    APIError,
    BatchSizeError,
    DecodeError,
    HealthCheckError,
    TransportError,
)
from mailchimp_sdk.core.types import (
    CampaignDefaults,
    Contact,
    MailingList,
    Member,
    Operation,
    Tag,
    Webhook,
    WebhookEvents,
    WebhookSources,
    member_hash,
)

LIST_ID = "57afe96172"
EMAIL = "Test@Test.com"
HASH = member_hash("test@test.com")


def _json(data) -> bytes:
    return json.dumps(data).encode("utf-8")


# =============================================================================
# Ping
# =============================================================================


def test_ping_success(client, provider):
    provider.responses["GET"] = _json({"health_status": "Everything's Chimpy!"})
    assert client.ping() is True
    assert provider.calls == [("GET", "/ping", None)]


def test_ping_unexpected_health_status(client, provider):
    provider.responses["GET"] = _json({"health_status": "Everything's fine"})
    with pytest.raises(HealthCheckError):
        client.ping()


def test_ping_missing_health_field(client, provider):
    provider.responses["GET"] = _json({"status": "Everything's Chimpy!"})
    with pytest.raises(HealthCheckError):
        client.ping()


def test_ping_undecodable_body(client, provider):
    provider.responses["GET"] = b"not json"
    with pytest.raises(DecodeError):
        client.ping()


def test_ping_propagates_transport_error(client, provider):
    error = TransportError("Connection error: refused")
    provider.responses["GET"] = error
    with pytest.raises(TransportError) as exc_info:
        client.ping()
    assert exc_info.value is error


# =============================================================================
# Lists
# =============================================================================


def _list() -> MailingList:
    return MailingList(
        name="Newsletter",
        permission_reminder="You signed up on our site",
        contact=Contact(
            address1="1 Main St", city="Atlanta", state="GA", zip="30301", country="US", company="Acme"
        ),
        campaign_defaults=CampaignDefaults(
            from_name="Acme", from_email="news@acme.test", subject="News", language="en"
        ),
        double_optin=True,
    )


def test_create_list_posts_payload_and_decodes(client, provider):
    provider.responses["POST"] = _json({"id": LIST_ID, "web_id": 1234, "name": "Newsletter"})

    created = client.lists.create(_list())

    method, path, body = provider.calls[0]
    assert (method, path) == ("POST", "/lists")
    assert body["name"] == "Newsletter"
    assert body["contact"]["city"] == "Atlanta"
    assert body["campaign_defaults"]["language"] == "en"
    assert body["double_optin"] is True
    assert "id" not in body
    assert created.id == LIST_ID
    assert created.web_id == 1234


def test_fetch_lists(client, provider):
    provider.responses["GET"] = _json({"lists": [{"id": "a", "name": "One"}, {"id": "b", "name": "Two"}]})

    lists = client.lists.list()

    assert [item.id for item in lists] == ["a", "b"]
    assert provider.calls[0][1] == "/lists"


def test_fetch_lists_missing_collection(client, provider):
    provider.responses["GET"] = _json({"total_items": 0})
    with pytest.raises(DecodeError):
        client.lists.list()


@pytest.mark.parametrize(
    "payload",
    [
        {"lists": [1]},
        {"lists": ["abc"]},
        {"lists": [{"id": "a", "contact": "x"}]},
        {"lists": [{"id": "a", "campaign_defaults": [1, 2]}]},
    ],
)
def test_fetch_lists_malformed_items(client, provider, payload):
    provider.responses["GET"] = _json(payload)
    with pytest.raises(DecodeError):
        client.lists.list()


def test_fetch_list_malformed_nested_contact(client, provider):
    provider.responses["GET"] = _json({"id": LIST_ID, "contact": "x"})
    with pytest.raises(DecodeError):
        client.lists.get(LIST_ID)


def test_fetch_list(client, provider):
    provider.responses["GET"] = _json({"id": LIST_ID, "name": "Newsletter", "contact": {"city": "Atlanta"}})

    fetched = client.lists.get(LIST_ID)

    assert provider.calls[0][1] == f"/lists/{LIST_ID}"
    assert fetched.contact.city == "Atlanta"


def test_update_list_patches(client, provider):
    provider.responses["PATCH"] = _json({"id": LIST_ID, "name": "Renamed"})

    updated = client.lists.update(LIST_ID, MailingList(name="Renamed"))

    method, path, body = provider.calls[0]
    assert (method, path) == ("PATCH", f"/lists/{LIST_ID}")
    assert body == {"name": "Renamed"}
    assert updated.name == "Renamed"


def test_update_list_sends_explicit_false_flags_and_nested_changes(client, provider):
    provider.responses["PATCH"] = _json({"id": LIST_ID})

    client.lists.update(
        LIST_ID,
        MailingList(campaign_defaults=CampaignDefaults(subject="Weekly"), double_optin=False),
    )

    assert provider.calls[0][2] == {"campaign_defaults": {"subject": "Weekly"}, "double_optin": False}


def test_update_list_decode_failure(client, provider):
    provider.responses["PATCH"] = b"[1, 2]"
    with pytest.raises(DecodeError):
        client.lists.update(LIST_ID, MailingList(name="Renamed"))


def test_delete_list(client, provider):
    assert client.lists.delete(LIST_ID) is True
    assert provider.calls == [("DELETE", f"/lists/{LIST_ID}", None)]


def test_delete_list_propagates_api_error(client, provider):
    provider.responses["DELETE"] = APIError("request was not successful 'Not Found', status: 404", status=404)
    with pytest.raises(APIError) as exc_info:
        client.lists.delete("missing")
    assert exc_info.value.status == 404


# =============================================================================
# Members
# =============================================================================


def _members(count: int) -> list[Member]:
    return [Member(email_address=f"user{i}@test.com", status="subscribed") for i in range(count)]


def test_batch_over_limit_makes_no_request(client, provider):
    with pytest.raises(BatchSizeError):
        client.members.batch(LIST_ID, _members(501))
    assert provider.calls == []


def test_batch_with_update_over_limit_makes_no_request(client, provider):
    with pytest.raises(BatchSizeError):
        client.members.batch_with_update(LIST_ID, _members(501))
    assert provider.calls == []


def test_batch_at_limit_makes_one_request(client, provider):
    assert client.members.batch(LIST_ID, _members(500)) is True
    assert len(provider.calls_for("POST")) == 1
    assert len(provider.calls) == 1


def test_batch_payload_shape(client, provider):
    members = [
        Member(email_address="a@test.com", email_type="html", status="subscribed", merge_fields={"FNAME": "Ann"}),
        Member(email_address="b@test.com", status="pending"),
    ]

    client.members.batch(LIST_ID, members)

    method, path, body = provider.calls[0]
    assert (method, path) == ("POST", f"/lists/{LIST_ID}")
    assert body == {
        "members": [
            {"email_address": "a@test.com", "status": "subscribed", "merge_fields": {"FNAME": "Ann"}},
            {"email_address": "b@test.com", "status": "pending", "merge_fields": {}},
        ],
        "update_existing": False,
    }


def test_batch_with_update_sets_flag(client, provider):
    client.members.batch_with_update(LIST_ID, _members(2))
    assert provider.calls[0][2]["update_existing"] is True


def test_update_member_uses_lowercased_hash(client, provider):
    member = Member(email_address="new@test.com", status="unsubscribed")

    assert client.members.update(LIST_ID, EMAIL, member) is True

    method, path, body = provider.calls[0]
    assert (method, path) == ("PATCH", f"/lists/{LIST_ID}/members/{HASH}")
    assert body == {"email_address": "new@test.com", "status": "unsubscribed"}


def test_archive_member(client, provider):
    client.members.archive(LIST_ID, EMAIL)
    assert provider.calls == [("DELETE", f"/lists/{LIST_ID}/members/{HASH}", None)]


# =============================================================================
# Tags
# =============================================================================


def test_fetch_member_tags_marks_active(client, provider):
    provider.responses["GET"] = _json(
        {"tags": [{"id": 1, "name": "vip", "date_added": "2024-01-01T00:00:00+00:00"}], "total_items": 1}
    )

    tags = client.tags.list(LIST_ID, EMAIL)

    assert provider.calls[0][1] == f"/lists/{LIST_ID}/members/{HASH}/tags"
    assert tags == [Tag(name="vip", status="active")]


@pytest.mark.parametrize("payload", [{"tags": ["vip"]}, {"tags": [None]}, {"tags": "vip"}])
def test_fetch_member_tags_malformed_items(client, provider, payload):
    provider.responses["GET"] = _json(payload)
    with pytest.raises(DecodeError):
        client.tags.list(LIST_ID, EMAIL)


def test_update_member_tags_triggers_automations(client, provider):
    client.tags.update(LIST_ID, EMAIL, [Tag(name="vip", status="active")])

    method, path, body = provider.calls[0]
    assert (method, path) == ("POST", f"/lists/{LIST_ID}/members/{HASH}/tags")
    assert body == {"tags": [{"name": "vip", "status": "active"}], "is_syncing": False}


def test_update_member_tags_sync_suppresses_automations(client, provider):
    client.tags.update_sync(LIST_ID, EMAIL, [Tag(name="vip", status="inactive")])

    method, path, body = provider.calls[0]
    assert path == f"/lists/{LIST_ID}/members/{HASH}/tags"
    assert body["is_syncing"] is True


def test_update_member_tags_explicit_flag(client, provider):
    client.tags.update(LIST_ID, EMAIL, [], syncing=True)
    assert provider.calls[0][2] == {"tags": [], "is_syncing": True}


# =============================================================================
# Webhooks
# =============================================================================


def test_create_webhook(client, provider):
    provider.responses["POST"] = _json(
        {"id": "wh1", "url": "https://example.test/hook", "list_id": LIST_ID, "events": {"subscribe": True}}
    )
    webhook = Webhook(
        url="https://example.test/hook",
        list_id=LIST_ID,
        events=WebhookEvents(subscribe=True, upemail=True),
        sources=WebhookSources(api=True),
    )

    created = client.webhooks.create(webhook)

    method, path, body = provider.calls[0]
    assert (method, path) == ("POST", f"/lists/{LIST_ID}/webhooks")
    assert body["url"] == "https://example.test/hook"
    assert body["events"]["upemail"] is True
    assert body["sources"] == {"user": False, "admin": False, "api": True}
    assert "list_id" not in body
    assert created.id == "wh1"
    assert created.events.subscribe is True


def test_fetch_webhooks(client, provider):
    provider.responses["GET"] = _json({"webhooks": [{"id": "wh1"}, {"id": "wh2"}], "list_id": LIST_ID})

    webhooks = client.webhooks.list(LIST_ID)

    assert provider.calls[0][1] == f"/lists/{LIST_ID}/webhooks"
    assert [w.id for w in webhooks] == ["wh1", "wh2"]


@pytest.mark.parametrize(
    "payload",
    [
        {"webhooks": [42]},
        {"webhooks": [{"id": "wh1", "events": "all"}]},
        {"webhooks": [{"id": "wh1", "sources": ["api"]}]},
    ],
)
def test_fetch_webhooks_malformed_items(client, provider, payload):
    provider.responses["GET"] = _json(payload)
    with pytest.raises(DecodeError):
        client.webhooks.list(LIST_ID)


def test_fetch_webhook(client, provider):
    provider.responses["GET"] = _json({"id": "wh1", "sources": {"admin": True}})

    webhook = client.webhooks.get(LIST_ID, "wh1")

    assert provider.calls[0][1] == f"/lists/{LIST_ID}/webhooks/wh1"
    assert webhook.sources.admin is True


def test_delete_webhook(client, provider):
    assert client.webhooks.delete(LIST_ID, "wh1") is True
    assert provider.calls == [("DELETE", f"/lists/{LIST_ID}/webhooks/wh1", None)]


# =============================================================================
# Batches
# =============================================================================


def test_submit_batch_operations(client, provider):
    provider.responses["POST"] = _json({"id": "batch1", "status": "pending", "total_operations": 2})
    operations = [
        Operation.update_tags(LIST_ID, EMAIL, [Tag(name="vip", status="active")]),
        Operation.request("delete", f"/lists/{LIST_ID}/webhooks/wh1"),
    ]

    status = client.batches.submit(operations)

    method, path, body = provider.calls[0]
    assert (method, path) == ("POST", "/batches")
    assert body["operations"][0]["path"] == f"/lists/{LIST_ID}/members/{HASH}/tags"
    assert json.loads(body["operations"][0]["body"]) == {
        "tags": [{"name": "vip", "status": "active"}],
        "is_syncing": False,
    }
    assert body["operations"][1] == {"method": "DELETE", "path": f"/lists/{LIST_ID}/webhooks/wh1", "body": ""}
    assert status.id == "batch1"
    assert status.total_operations == 2
    assert not status.is_finished
