"""
Rule-based secret detection used by the default security check.

Each rule is a regular expression for a well-known credential format.
A detector reports at most one message per rule and file, with the
matched value masked so reports never echo the secret itself.
"""

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SecretRule:
    """
    A single secret-detection rule.

    Attributes:
        rule_id: Stable identifier used in messages and in disabled_rules
        description: Human-readable name of what the rule finds
        pattern: Regular expression; group 1, when present, is the secret value
    """

    rule_id: str
    description: str
    pattern: str


DEFAULT_RULES: tuple[SecretRule, ...] = (
    SecretRule(
        "private-key",
        "private key",
        r"-----BEGIN (?:[A-Z0-9]+ )*PRIVATE KEY(?: BLOCK)?-----",
    ),
    SecretRule(
        "aws-access-key-id",
        "AWS access key ID",
        r"\b((?:AKIA|ASIA|AGPA|AIDA|AROA|ANPA|ANVA|AIPA)[0-9A-Z]{16})\b",
    ),
    SecretRule(
        "aws-secret-access-key",
        "AWS secret access key",
        r"(?i)aws_?secret_?access_?key[\"']?\s*[:=]\s*[\"']?([A-Za-z0-9/+=]{40})\b",
    ),
    SecretRule(
        "github-token",
        "GitHub token",
        r"\b((?:ghp|gho|ghu|ghs|ghr)_[A-Za-z0-9]{36,255}|github_pat_[A-Za-z0-9_]{22,255})\b",
    ),
    SecretRule(
        "slack-token",
        "Slack token",
        r"\b(xox[abposr]-[0-9A-Za-z-]{10,})\b",
    ),
    SecretRule(
        "slack-webhook",
        "Slack incoming webhook URL",
        r"(https://hooks\.slack\.com/services/T[A-Z0-9]+/B[A-Z0-9]+/[A-Za-z0-9]+)",
    ),
    SecretRule(
        "google-api-key",
        "Google API key",
        r"\b(AIza[0-9A-Za-z_\-]{35})",
    ),
    SecretRule(
        "stripe-secret-key",
        "Stripe secret key",
        r"\b((?:sk|rk)_live_[0-9A-Za-z]{24,})\b",
    ),
    SecretRule(
        "npm-token",
        "npm access token",
        r"\b(npm_[A-Za-z0-9]{36})\b",
    ),
    SecretRule(
        "sendgrid-api-key",
        "SendGrid API key",
        r"\b(SG\.[A-Za-z0-9_\-]{22}\.[A-Za-z0-9_\-]{43})",
    ),
    SecretRule(
        "basic-auth-url",
        "credentials embedded in a URL",
        r"\b[a-z][a-z0-9+.\-]*://[^\s:/@\"']+:([^\s:/@\"']+)@[^\s/\"']+",
    ),
    SecretRule(
        "generic-secret-assignment",
        "hard-coded password or secret",
        r"(?i)\b(?:password|passwd|pwd|secret|api_?key|access_?token|auth_?token)\b[\"']?"
        r"\s*[:=]\s*[\"']([^\"'\s]{8,})[\"']",
    ),
)


def mask_secret(value: str, visible: int = 4) -> str:
    """Keep the first characters of value and star out the rest."""
    if len(value) <= visible:
        return "*" * len(value)
    return value[:visible] + "*" * (len(value) - visible)


class SecretDetector:
    """Applies a set of SecretRules to file content."""

    def __init__(
        self,
        rules: Sequence[SecretRule] = DEFAULT_RULES,
        disabled_rules: Iterable[str] = (),
    ):
        """
        Initialize the detector.

        Args:
            rules: Rules to apply, in reporting order
            disabled_rules: Rule ids to skip
        """
        disabled = set(disabled_rules)
        known_ids = {rule.rule_id for rule in rules}
        for rule_id in sorted(disabled - known_ids):
            logger.warning(f"Ignoring unknown rule id in disabled_rules: {rule_id}")

        self._compiled = [
            (rule, re.compile(rule.pattern)) for rule in rules if rule.rule_id not in disabled
        ]

    @property
    def rule_ids(self) -> list[str]:
        return [rule.rule_id for rule, _ in self._compiled]

    def check(self, content: str) -> list[str]:
        """
        Check content against every enabled rule.

        Args:
            content: File text

        Returns:
            One message per rule that matched, in rule order; empty if clean
        """
        messages: list[str] = []
        for rule, regex in self._compiled:
            match = regex.search(content)
            if match is None:
                continue
            value = match.group(1) if regex.groups else match.group(0)
            messages.append(f"[{rule.rule_id}] found {rule.description}: {mask_secret(value)}")
        return messages
