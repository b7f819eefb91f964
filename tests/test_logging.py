from core.logging import add_correlation_id, correlation_id_var, redact_credentials


def test_redact_credentials_masks_tokens_and_session_ids():
    event = redact_credentials(
        None,
        "info",
        {"event": "connection_created", "access_token": "tok", "sid": "abc", "platform": "ESPN"},
    )
    assert event["access_token"] == "[redacted]"
    assert event["sid"] == "[redacted]"
    assert event["platform"] == "ESPN"


def test_redact_credentials_leaves_missing_tokens_alone():
    event = redact_credentials(None, "info", {"event": "x", "refresh_token": None})
    assert event["refresh_token"] is None


def test_add_correlation_id_only_when_set():
    assert "correlation_id" not in add_correlation_id(None, "info", {"event": "x"})

    token = correlation_id_var.set("req-1")
    try:
        assert add_correlation_id(None, "info", {"event": "x"})["correlation_id"] == "req-1"
    finally:
        correlation_id_var.reset(token)
