import json
from dataclasses import replace

import pytest

from webhook_notifier.config import Config, ConfigurationError
from webhook_notifier.services.notifications import AuthorizationMethod, NotificationTarget, WebhookNotifier
from webhook_notifier.services.notifications.factory import (
    create_notifiers_from_config,
    load_targets,
    target_from_section,
)

from conftest import FakeSession


def empty_config(**overrides) -> Config:
    base = Config(notifiers_file=None, webhook_url=None)
    return replace(base, **overrides)


def write_notifiers(tmp_path, payload) -> str:
    path = tmp_path / "notifiers.json"
    path.write_text(json.dumps(payload))
    return str(path)


def test_section_defaults():
    target = target_from_section({"Url": "http://h/hook"})
    assert target == NotificationTarget(url="http://h/hook")
    assert target.method == "POST"
    assert target.authentication is AuthorizationMethod.NONE
    assert target.field == "image"
    assert target.send_image is True
    assert target.send_types is False


def test_section_keys_are_case_insensitive():
    target = target_from_section(
        {
            "url": "http://h/hook",
            "METHOD": "PUT",
            "authentication": "bearer",
            "Token": "abc",
            "field": "file",
            "SendImage": False,
            "sendTypes": "true",
        }
    )
    assert target.method == "PUT"
    assert target.authentication is AuthorizationMethod.BEARER
    assert target.token == "abc"
    assert target.field == "file"
    assert target.send_image is False
    assert target.send_types is True


def test_method_token_is_kept_verbatim():
    # Validation of the verb happens when a notification is sent
    assert target_from_section({"Url": "http://h", "Method": "TRACE"}).method == "TRACE"


def test_section_without_url_is_rejected():
    with pytest.raises(ConfigurationError):
        target_from_section({"Method": "POST"})


def test_unknown_authentication_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        target_from_section({"Url": "http://h", "Authentication": "Digest"})


def test_load_targets_from_file(tmp_path):
    path = write_notifiers(
        tmp_path,
        {
            "Notifiers": [
                {"Type": "Webhook", "Url": "http://a", "Authentication": "Basic", "Username": "u", "Password": "p"},
                {"Type": "webhook", "Url": "http://b", "Method": "GET"},
            ]
        },
    )
    targets = load_targets(path)
    assert [t.url for t in targets] == ["http://a", "http://b"]
    assert targets[0].authentication is AuthorizationMethod.BASIC
    assert targets[1].method == "GET"


def test_load_targets_rejects_other_notifier_types(tmp_path):
    path = write_notifiers(tmp_path, {"Notifiers": [{"Type": "Pushover", "Url": "http://a"}]})
    with pytest.raises(ConfigurationError, match="Pushover"):
        load_targets(path)


def test_load_targets_reports_unreadable_file(tmp_path):
    bad = tmp_path / "broken.json"
    bad.write_text("{not json")
    with pytest.raises(ConfigurationError):
        load_targets(str(bad))
    with pytest.raises(ConfigurationError):
        load_targets(str(tmp_path / "missing.json"))


def test_create_notifiers_combines_file_and_env(tmp_path):
    path = write_notifiers(tmp_path, {"Notifiers": [{"Url": "http://file"}]})
    cfg = empty_config(
        notifiers_file=path,
        webhook_url="http://env",
        webhook_method="PATCH",
        webhook_auth="Bearer",
        webhook_token="tok",
        http_timeout=3.0,
    )
    session = FakeSession()

    notifiers = create_notifiers_from_config(cfg, session=session)

    assert all(isinstance(n, WebhookNotifier) for n in notifiers)
    assert [n.target.url for n in notifiers] == ["http://file", "http://env"]
    env_target = notifiers[1].target
    assert env_target.method == "PATCH"
    assert env_target.authentication is AuthorizationMethod.BEARER
    assert env_target.token == "tok"


def test_create_notifiers_without_configuration():
    assert create_notifiers_from_config(empty_config(), session=FakeSession()) == []


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("WEBHOOK_URL", "http://env")
    monkeypatch.setenv("WEBHOOK_SEND_IMAGE", "no")
    monkeypatch.setenv("WEBHOOK_SEND_TYPES", "1")
    monkeypatch.setenv("HTTP_TIMEOUT", "2.5")

    cfg = Config.from_env()

    assert cfg.webhook_url == "http://env"
    assert cfg.webhook_send_image is False
    assert cfg.webhook_send_types is True
    assert cfg.http_timeout == 2.5


def test_config_rejects_non_numeric_timeout(monkeypatch):
    monkeypatch.setenv("HTTP_TIMEOUT", "soon")
    with pytest.raises(ConfigurationError):
        Config.from_env()
