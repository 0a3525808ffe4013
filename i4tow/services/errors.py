"""
Error taxonomy and classification.

Failures are matched against ordered rule lists; the first rule whose
predicate accepts the error decides the kind and the message shown to the user.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence, Union

import httpx


class ErrorKind(Enum):
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    NETWORK = "network"
    REMOTE = "remote"
    SECRET = "secret"  # non-fatal


INVALID_TOKEN_MESSAGE = "Invalid GitHub token. Check your token and try again."
NETWORK_MESSAGE = "Network error. Check your internet connection."
NO_PHOTOS_MESSAGE = "No photos found in directory"


class GitHubAPIError(RuntimeError):
    """Raised by the API client for any response with status >= 400."""

    def __init__(self, status_code: int, payload: Any, method: str = "", endpoint: str = ""):
        self.status_code = status_code
        self.payload = payload
        self.method = method
        self.endpoint = endpoint
        super().__init__(f"API error {status_code} on {method} {endpoint}: {self.message}")

    @property
    def message(self) -> str:
        if isinstance(self.payload, dict):
            return str(self.payload.get("message") or "")
        if isinstance(self.payload, str):
            return self.payload
        return ""

    @property
    def error_messages(self) -> List[str]:
        """The `errors[].message` entries GitHub attaches to 422 responses."""
        if not isinstance(self.payload, dict):
            return []
        messages = []
        for item in self.payload.get("errors") or []:
            if isinstance(item, dict) and item.get("message"):
                messages.append(str(item["message"]))
        return messages


@dataclass(frozen=True)
class ClassifiedError:
    kind: ErrorKind
    message: str


MessageSource = Union[str, Callable[[BaseException, str], str]]


@dataclass(frozen=True)
class ErrorRule:
    """Predicate over a raised error plus the message it maps to."""
    kind: ErrorKind
    matches: Callable[[BaseException], bool]
    message: MessageSource

    def render(self, error: BaseException, account: str = "") -> str:
        if callable(self.message):
            return self.message(error, account)
        return self.message


def error_text(error: BaseException) -> str:
    """str(error) plus git's stderr when GitPython captured it."""
    text = str(error)
    stderr = getattr(error, "stderr", None)
    if stderr and str(stderr) not in text:
        text = f"{text}\n{stderr}"
    return text


def _api_status(error: BaseException) -> Optional[int]:
    return error.status_code if isinstance(error, GitHubAPIError) else None


def _api_message(error: BaseException) -> str:
    return error.message if isinstance(error, GitHubAPIError) else ""


def _text_contains(*needles: str) -> Callable[[BaseException], bool]:
    def predicate(error: BaseException) -> bool:
        text = error_text(error)
        return any(needle in text for needle in needles)
    return predicate


def is_already_exists(error: BaseException) -> bool:
    """GitHub answers 422 with 'name already exists on this account'."""
    if not isinstance(error, GitHubAPIError):
        return False
    return any("already exists" in message for message in error.error_messages)


API_ERROR_RULES: List[ErrorRule] = [
    ErrorRule(
        ErrorKind.NETWORK,
        lambda e: isinstance(e, httpx.TransportError),
        NETWORK_MESSAGE,
    ),
    ErrorRule(
        ErrorKind.AUTHENTICATION,
        lambda e: _api_status(e) == 401 or _api_message(e) == "Bad credentials",
        INVALID_TOKEN_MESSAGE,
    ),
    ErrorRule(
        ErrorKind.AUTHORIZATION,
        lambda e: _api_status(e) == 404 or _api_message(e) == "Not Found",
        lambda e, account: (
            f'Cannot create repo under "{account}". '
            "Ensure token has access to this account/org."
        ),
    ),
    ErrorRule(
        ErrorKind.REMOTE,
        lambda e: True,
        lambda e, account: _api_message(e) or "Failed to create repository",
    ),
]


FAILURE_RULES: List[ErrorRule] = [
    ErrorRule(
        ErrorKind.NETWORK,
        lambda e: isinstance(e, httpx.TransportError),
        NETWORK_MESSAGE,
    ),
    ErrorRule(
        ErrorKind.AUTHENTICATION,
        _text_contains("Authentication failed"),
        "GitHub authentication failed. Check your token.",
    ),
    ErrorRule(
        ErrorKind.AUTHORIZATION,
        _text_contains("Permission denied", "The requested URL returned error: 403"),
        'Permission denied. Ensure token has "repo" scope.',
    ),
    ErrorRule(
        ErrorKind.NOT_FOUND,
        _text_contains("Repository not found"),
        "Repository not found. It may still be creating, try again in a moment.",
    ),
    ErrorRule(
        ErrorKind.REMOTE,
        lambda e: True,
        lambda e, account: error_text(e),
    ),
]


def classify(
    error: BaseException, rules: Sequence[ErrorRule], account: str = ""
) -> ClassifiedError:
    for rule in rules:
        if rule.matches(error):
            return ClassifiedError(rule.kind, rule.render(error, account))
    return ClassifiedError(ErrorKind.REMOTE, error_text(error))


def classify_api_error(error: BaseException, account: str = "") -> ClassifiedError:
    """Classify a failed repository-creation call."""
    return classify(error, API_ERROR_RULES, account)


def classify_failure(error: BaseException) -> ClassifiedError:
    """Classify an error escaping a publish step. Unknown text passes through."""
    return classify(error, FAILURE_RULES)
