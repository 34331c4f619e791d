"""
Passkey comparison for the /auth route.
"""

from typing import Optional

from shared.logging import get_logger
from shared.metrics import MetricsCollector

from .models import AuthOutcome

AUTH_SUCCESS_MESSAGE = "Authentication successful"
AUTH_FAILURE_MESSAGE = "Invalid passkey"


def compare_passkey(submitted: str, configured: str) -> AuthOutcome:
    """Return the outcome of an exact, case-sensitive passkey comparison."""
    if submitted == configured:
        return AuthOutcome(success=True, message=AUTH_SUCCESS_MESSAGE)
    return AuthOutcome(success=False, message=AUTH_FAILURE_MESSAGE)


class CredentialChecker:
    """Checks submitted passkeys against the configured value.

    The comparison is a plain equality check; it does not attempt to hide
    timing differences between matching and non-matching passkeys.
    """

    def __init__(self, configured_passkey: str, metrics: Optional[MetricsCollector] = None):
        self._configured_passkey = configured_passkey
        self.metrics = metrics
        self.logger = get_logger("gateway.credentials")

    def check(self, submitted: str) -> AuthOutcome:
        outcome = compare_passkey(submitted, self._configured_passkey)

        # Audit trail
        if outcome.success:
            self.logger.info("Login attempt succeeded", passkey=submitted, result="success")
        else:
            self.logger.warning("Login attempt failed, incorrect passkey", passkey=submitted, result="failure")

        if self.metrics:
            self.metrics.record_auth_attempt(outcome.success)
        return outcome
