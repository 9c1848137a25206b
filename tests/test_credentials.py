"""Tests for credential extraction."""

from __future__ import annotations

from types import SimpleNamespace

from pythia_auth.credentials import CredentialRequest, Credentials, extract_credentials, lookup


class TestLookup:
    def test_flat_field(self):
        assert lookup({"username": "alice"}, "username") == "alice"

    def test_missing_field(self):
        assert lookup({"other": "x"}, "username") is None

    def test_none_source(self):
        assert lookup(None, "username") is None

    def test_nested_field(self):
        source = {"user": {"name": "alice"}}
        assert lookup(source, "user[name]") == "alice"

    def test_deeply_nested_field(self):
        source = {"a": {"b": {"c": "deep"}}}
        assert lookup(source, "a[b][c]") == "deep"

    def test_chain_ending_on_mapping_returns_none(self):
        source = {"user": {"name": "alice"}}
        assert lookup(source, "user") is None

    def test_scalar_reached_early_is_returned(self):
        # A non-mapping value ends the walk even if keys remain.
        assert lookup({"user": "alice"}, "user[name]") == "alice"

    def test_missing_nested_key(self):
        assert lookup({"user": {}}, "user[name]") is None

    def test_flat_bracketed_key(self):
        assert lookup({"user[name]": "alice"}, "user[name]") == "alice"

    def test_flat_bracketed_key_wins_over_nested(self):
        source = {"user[name]": "flat", "user": {"name": "nested"}}
        assert lookup(source, "user[name]") == "flat"

    def test_flat_bracketed_key_missing_falls_back_to_nested(self):
        source = {"user[other]": "x", "user": {"name": "nested"}}
        assert lookup(source, "user[name]") == "nested"


class TestExtractCredentials:
    def test_reads_from_body(self):
        req = CredentialRequest(body={"username": "alice", "password": "x"})
        assert extract_credentials(req, "username", "password") == Credentials("alice", "x")

    def test_reads_from_query(self):
        req = CredentialRequest(query={"username": "alice", "password": "x"})
        assert extract_credentials(req, "username", "password") == Credentials("alice", "x")

    def test_body_wins_over_query(self):
        req = CredentialRequest(
            body={"username": "from-body", "password": "body-pw"},
            query={"username": "from-query", "password": "query-pw"},
        )
        creds = extract_credentials(req, "username", "password")
        assert creds == Credentials("from-body", "body-pw")

    def test_fields_may_come_from_different_sources(self):
        req = CredentialRequest(body={"username": "alice"}, query={"password": "x"})
        assert extract_credentials(req, "username", "password") == Credentials("alice", "x")

    def test_empty_body_value_falls_back_to_query(self):
        req = CredentialRequest(body={"username": ""}, query={"username": "alice", "password": "x"})
        assert extract_credentials(req, "username", "password") == Credentials("alice", "x")

    def test_missing_password_returns_none(self):
        req = CredentialRequest(body={"username": "alice"})
        assert extract_credentials(req, "username", "password") is None

    def test_missing_username_returns_none(self):
        req = CredentialRequest(query={"password": "x"})
        assert extract_credentials(req, "username", "password") is None

    def test_empty_sources_return_none(self):
        assert extract_credentials(CredentialRequest(), "username", "password") is None

    def test_mapping_request(self):
        req = {"body": {"username": "alice", "password": "x"}, "query": {}}
        assert extract_credentials(req, "username", "password") == Credentials("alice", "x")

    def test_request_without_query_attribute(self):
        req = SimpleNamespace(body={"username": "alice", "password": "x"})
        assert extract_credentials(req, "username", "password") == Credentials("alice", "x")

    def test_custom_field_names(self):
        req = CredentialRequest(body={"email": "a@b.c", "passwd": "x"})
        assert extract_credentials(req, "email", "passwd") == Credentials("a@b.c", "x")

    def test_flat_bracketed_fields(self):
        req = CredentialRequest(body={"user[name]": "alice", "user[pass]": "x"})
        assert extract_credentials(req, "user[name]", "user[pass]") == Credentials("alice", "x")

    def test_non_string_identifier_is_missing(self):
        req = CredentialRequest(body={"username": 123, "password": "x"})
        assert extract_credentials(req, "username", "password") is None

    def test_list_secret_is_missing(self):
        req = CredentialRequest(body={"username": "alice", "password": ["x"]})
        assert extract_credentials(req, "username", "password") is None

    def test_non_string_body_value_falls_back_to_query(self):
        req = CredentialRequest(body={"username": 123}, query={"username": "alice", "password": "x"})
        assert extract_credentials(req, "username", "password") == Credentials("alice", "x")
