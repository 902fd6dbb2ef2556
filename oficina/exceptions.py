# -*- coding: utf-8 -*-
"""
Domain errors raised by Oficina services.

Services raise before touching any state, so a failed action leaves the
application exactly as it was.
"""


class OficinaError(Exception):
    """Base error for all domain failures"""
    status_code = 400

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidInputError(OficinaError):
    """Missing required field, non-positive amount, quantity above balance"""
    status_code = 422


class AuthError(OficinaError):
    """Wrong credentials at login or at stage re-authentication"""
    status_code = 401


class InvalidTransitionError(OficinaError):
    """Workflow move that the state machine does not allow"""
    status_code = 409


class NotFoundError(OficinaError):
    """Referenced record does not exist"""
    status_code = 404
