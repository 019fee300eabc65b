"""App-version gating policy.

``VersionGate.decide`` is a pure function of the request and the
immutable ``GateConfig``. It runs on every API request, so it never
raises: unexpected failures fall back to letting the request through,
while a confirmed outdated version is always rejected.
"""
from __future__ import annotations

import fnmatch
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable, Protocol, runtime_checkable

from src.shared.constants import (
    ANDROID_APP_STORE_URL,
    DEFAULT_EXEMPT_PATHS,
    DEFAULT_TRANSITION_MAX_VERSION,
    IOS_APP_STORE_URL,
    UNKNOWN_VERSION,
)
from src.shared.models.app_version import AppStoreUrls, UpdateRequiredResponse
from src.version_gate.versioning import (
    VersionIdentifier,
    is_transition_minimum,
    is_version_supported,
    parse_version,
)

if TYPE_CHECKING:
    from src.shared.config import VersionGateConfig

logger = logging.getLogger(__name__)

_WILDCARD_CHARS = frozenset("*?[")


class RejectReason(str, Enum):
    """Why a request was turned away."""
    MISSING_HEADER = "missing_header"
    OUTDATED_VERSION = "outdated_version"


class AllowReason(str, Enum):
    """Why a request was let through."""
    EXEMPT_PATH = "exempt_path"
    TRANSITION_PERIOD = "transition_period"
    SUPPORTED = "supported"
    GATE_ERROR = "gate_error"


class Outcome(str, Enum):
    ALLOW = "allow"
    REJECT = "reject"


def _normalize_path(path: str) -> str:
    if len(path) > 1 and path.endswith("/"):
        return path.rstrip("/") or "/"
    return path


@dataclass(frozen=True)
class PathMatcher:
    """Matches request paths against one configured pattern.

    Plain patterns match exactly; patterns containing shell-style
    wildcards go through ``fnmatch.fnmatchcase``.
    """
    pattern: str

    @property
    def is_wildcard(self) -> bool:
        return any(ch in _WILDCARD_CHARS for ch in self.pattern)

    def matches(self, path: str) -> bool:
        path = _normalize_path(path)
        pattern = _normalize_path(self.pattern)
        if self.is_wildcard:
            return fnmatch.fnmatchcase(path, pattern)
        return path == pattern


@dataclass(frozen=True)
class GateConfig:
    """Immutable gate settings shared by all requests."""
    minimum_version: VersionIdentifier
    exempt_paths: tuple[PathMatcher, ...] = ()
    transition_max_version: VersionIdentifier = field(
        default_factory=lambda: parse_version(DEFAULT_TRANSITION_MAX_VERSION)
    )
    app_store_urls: AppStoreUrls = field(
        default_factory=lambda: AppStoreUrls(
            ios=IOS_APP_STORE_URL, android=ANDROID_APP_STORE_URL
        )
    )

    @classmethod
    def build(
        cls,
        minimum_version: str,
        exempt_paths: Iterable[str] | None = None,
        transition_max_version: str = DEFAULT_TRANSITION_MAX_VERSION,
        ios_url: str = IOS_APP_STORE_URL,
        android_url: str = ANDROID_APP_STORE_URL,
    ) -> GateConfig:
        """Build a config from plain strings.

        ``exempt_paths`` defaults to the standard list; pass an empty
        iterable to gate every path.
        """
        if exempt_paths is None:
            exempt_paths = DEFAULT_EXEMPT_PATHS
        return cls(
            minimum_version=parse_version(minimum_version),
            exempt_paths=tuple(PathMatcher(p) for p in exempt_paths),
            transition_max_version=parse_version(transition_max_version),
            app_store_urls=AppStoreUrls(ios=ios_url, android=android_url),
        )

    @classmethod
    def from_settings(cls, settings: VersionGateConfig) -> GateConfig:
        """Build the gate config from environment-backed settings."""
        return cls.build(
            minimum_version=settings.minimum_app_version,
            exempt_paths=settings.exempt_paths,
            transition_max_version=settings.transition_max_version,
            ios_url=settings.ios_app_store_url,
            android_url=settings.android_app_store_url,
        )

    def is_exempt(self, path: str) -> bool:
        return any(matcher.matches(path) for matcher in self.exempt_paths)


@dataclass(frozen=True)
class RequestContext:
    """The parts of an inbound request the gate looks at."""
    method: str
    path: str
    client_version: str | None = None

    @property
    def has_version(self) -> bool:
        return bool(self.client_version and self.client_version.strip())


@dataclass(frozen=True)
class Decision:
    """Outcome of gating one request."""
    allowed: bool
    reason: RejectReason | None = None
    allow_reason: AllowReason | None = None
    client_version: str | None = None

    @classmethod
    def allow(cls, reason: AllowReason, client_version: str | None = None) -> Decision:
        return cls(allowed=True, allow_reason=reason, client_version=client_version)

    @classmethod
    def reject(cls, reason: RejectReason, client_version: str | None = None) -> Decision:
        return cls(allowed=False, reason=reason, client_version=client_version)


@dataclass(frozen=True)
class GateEvent:
    """Structured record of a gate decision, handed to observers."""
    outcome: Outcome
    reason: str
    method: str
    path: str
    current_version: str
    minimum_version: str

    def as_log_fields(self) -> dict[str, str]:
        return {
            "gate_outcome": self.outcome.value,
            "gate_reason": self.reason,
            "method": self.method,
            "path": self.path,
            "current_version": self.current_version,
            "minimum_version": self.minimum_version,
        }


@runtime_checkable
class GateObserver(Protocol):
    """Receives gate events for monitoring."""

    def record(self, event: GateEvent) -> None:
        """Handle one gate event.

        Args:
            event: The decision that was just made.
        """
        ...


class LoggingGateObserver:
    """Writes gate events to the standard logging module."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def record(self, event: GateEvent) -> None:
        fields = event.as_log_fields()
        if event.outcome is Outcome.REJECT:
            self._log.warning(
                "Blocked request from old app version: %s %s version=%s minimum=%s",
                event.method, event.path, event.current_version,
                event.minimum_version,
                extra=fields,
            )
        elif event.reason == AllowReason.TRANSITION_PERIOD.value:
            self._log.warning(
                "API request without app version header: %s %s",
                event.method, event.path,
                extra=fields,
            )
        else:
            self._log.debug(
                "Request allowed (%s): %s %s", event.reason, event.method,
                event.path,
                extra=fields,
            )


class VersionGate:
    """Decides whether a request may proceed based on the client app version."""

    def __init__(
        self,
        config: GateConfig,
        observer: GateObserver | None = None,
    ) -> None:
        self._config = config
        self._observer = observer if observer is not None else LoggingGateObserver()

    @property
    def config(self) -> GateConfig:
        return self._config

    def decide(self, request: RequestContext) -> Decision:
        """Apply the gating policy to one request. Never raises."""
        try:
            decision = self._evaluate(request)
        except Exception:
            logger.exception(
                "Version gate failed; allowing request: %s %s",
                request.method, request.path,
            )
            return Decision.allow(AllowReason.GATE_ERROR, request.client_version)

        self._notify(request, decision)
        return decision

    def _evaluate(self, request: RequestContext) -> Decision:
        config = self._config
        if config.is_exempt(request.path):
            return Decision.allow(AllowReason.EXEMPT_PATH, request.client_version)

        if not request.has_version:
            if is_transition_minimum(config.minimum_version, config.transition_max_version):
                return Decision.allow(AllowReason.TRANSITION_PERIOD)
            return Decision.reject(RejectReason.MISSING_HEADER)

        client_version = request.client_version.strip()
        if not is_version_supported(client_version, config.minimum_version):
            return Decision.reject(RejectReason.OUTDATED_VERSION, client_version)
        return Decision.allow(AllowReason.SUPPORTED, client_version)

    def _notify(self, request: RequestContext, decision: Decision) -> None:
        if decision.allowed:
            outcome, reason = Outcome.ALLOW, decision.allow_reason.value
        else:
            outcome, reason = Outcome.REJECT, decision.reason.value
        event = GateEvent(
            outcome=outcome,
            reason=reason,
            method=request.method,
            path=request.path,
            current_version=decision.client_version or UNKNOWN_VERSION,
            minimum_version=self._config.minimum_version.raw,
        )
        try:
            self._observer.record(event)
        except Exception:
            logger.exception("Gate observer failed for %s %s", request.method, request.path)

    def rejection_response(self, decision: Decision) -> UpdateRequiredResponse:
        """Build the client-facing 426 body for a rejected request."""
        minimum = self._config.minimum_version.raw
        return UpdateRequiredResponse(
            message=f"App update required. Please update to version {minimum} or later.",
            minimum_version=minimum,
            current_version=decision.client_version or UNKNOWN_VERSION,
            app_store_urls=self._config.app_store_urls,
        )

    def rejection_body(self, decision: Decision) -> dict[str, Any]:
        return self.rejection_response(decision).to_payload()
