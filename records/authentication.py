"""
Token authentication for the records API.

Kept in its own module, apart from any view definitions, so that the
REST framework can import the authentication classes during start-up
without circular imports.
"""
from __future__ import annotations

from rest_framework import authentication


class TokenAuthentication(authentication.TokenAuthentication):
    """DRF token authentication using the ``Token`` keyword.

    Exists to provide a stable import path for the settings and to allow
    later customisation.
    """

    keyword = 'Token'
