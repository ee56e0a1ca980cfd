"""
Agents Package

Agents wrap the identity provider for the rest of the portal.

Components:
- SessionAgent: Classifies auth state changes into signed out / landlord / tenant
- CredentialsAgent: Sign-up, sign-in, password reset and sign-out with inline messages
"""

from .credentials_agent import AuthResult, CredentialsAgent
from .session_agent import SessionAgent, classify_role, classify_session

__all__ = ['AuthResult', 'CredentialsAgent', 'SessionAgent', 'classify_role', 'classify_session']
