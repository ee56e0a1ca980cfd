"""
Unit Tests for the Session and Credentials Agents

Tests role classification, session transitions and auth error messages.
"""

from unittest.mock import AsyncMock

import pytest

from agents.credentials_agent import CredentialsAgent, describe_auth_error
from agents.session_agent import SessionAgent, classify_role, classify_session
from constants import Messages
from models.user_models import AuthUser, Role, SessionStatus
from providers.base import AuthError
from providers.local_identity import LocalIdentityProvider
from ui.components.auth_forms import AuthFormController

LANDLORD = "landlord@nearyone.com"

# -----------------------------------------------------------------------------
# Session classification
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("email", ["landlord@nearyone.com", "Landlord@NearyOne.com", "  landlord@nearyone.com "])
def test_landlord_match_ignores_case_and_whitespace(email):
    assert classify_role(AuthUser(uid="u", email=email), LANDLORD) == Role.LANDLORD

def test_other_emails_are_tenants():
    assert classify_role(AuthUser(uid="u", email="tenant@example.com"), LANDLORD) == Role.TENANT

def test_classify_session():
    assert classify_session(None, LANDLORD).status == SessionStatus.SIGNED_OUT
    state = classify_session(AuthUser(uid="u", email="tenant@example.com"), LANDLORD)
    assert state.status == SessionStatus.TENANT
    assert state.is_signed_in

async def test_session_agent_reports_each_transition(identity):
    agent = SessionAgent(identity, landlord_email=LANDLORD)
    statuses = []

    async def on_change(state):
        statuses.append(state.status)

    await agent.start(on_change)
    await identity.create_account("tenant@example.com", "secret123")
    await identity.sign_out()
    await identity.create_account(LANDLORD, "secret123")
    agent.stop()
    await identity.sign_out()

    assert statuses == [
        SessionStatus.SIGNED_OUT,
        SessionStatus.TENANT,
        SessionStatus.SIGNED_OUT,
        SessionStatus.LANDLORD,
    ]
    assert agent.current.status == SessionStatus.LANDLORD

# -----------------------------------------------------------------------------
# Credentials
# -----------------------------------------------------------------------------

async def test_sign_up_password_mismatch_skips_provider(identity):
    agent = CredentialsAgent(identity)
    identity.create_account = AsyncMock()

    result = await agent.create_account("tenant@example.com", "secret123", "secret124")

    assert not result.ok
    assert result.message == Messages.PASSWORD_MISMATCH
    identity.create_account.assert_not_awaited()

async def test_auth_failures_become_messages(identity):
    agent = CredentialsAgent(identity)

    weak = await agent.create_account("tenant@example.com", "123")
    unknown = await agent.sign_in("nobody@example.com", "secret123")
    reset = await agent.send_password_reset("nobody@example.com")

    assert (weak.ok, weak.message) == (False, Messages.WEAK_PASSWORD)
    assert (unknown.ok, unknown.message) == (False, Messages.INVALID_CREDENTIALS)
    assert (reset.ok, reset.message) == (False, Messages.USER_NOT_FOUND)

async def test_successful_operations(identity):
    agent = CredentialsAgent(identity)

    created = await agent.create_account("tenant@example.com", "secret123", "secret123")
    reset = await agent.send_password_reset("tenant@example.com")
    signed_out = await agent.sign_out()

    assert created.ok and created.user.email == "tenant@example.com"
    assert reset.ok and reset.message == Messages.RESET_EMAIL_SENT
    assert signed_out.ok
    assert identity.current_user is None

def test_unknown_auth_error_message():
    assert describe_auth_error(AuthError("network down")) == Messages.AUTH_FAILED.format("network down")

# -----------------------------------------------------------------------------
# Auth form
# -----------------------------------------------------------------------------

async def test_auth_form_keeps_inputs_after_failure(identity):
    form = AuthFormController(CredentialsAgent(identity))
    form.email = "tenant@example.com"
    form.password = "wrong"

    result = await form.sign_in()

    assert not result.ok
    assert form.message == Messages.INVALID_CREDENTIALS
    assert form.email == "tenant@example.com"
    assert form.password == "wrong"
    assert not form.busy

async def test_auth_form_sign_up_clears_passwords(identity):
    form = AuthFormController(CredentialsAgent(identity))
    form.email = "tenant@example.com"
    form.password = "secret123"
    form.confirm_password = "secret123"

    result = await form.sign_up()

    assert result.ok
    assert form.password == ""
    assert form.confirm_password == ""

async def test_auth_form_federated_failure():
    form = AuthFormController(CredentialsAgent(LocalIdentityProvider()))

    result = await form.sign_in_federated()

    assert not result.ok
    assert form.message == Messages.FEDERATED_FAILED
