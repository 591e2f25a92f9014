"""Error taxonomy for the scoring engine.

Only AuthorizationError and PersistenceError ever reach the HTTP layer;
UpstreamDependencyError is always recovered where it is raised.
"""


class RiskEngineError(Exception):
    """Base class for engine errors."""


class AuthorizationError(RiskEngineError):
    """Missing or invalid caller identity."""


class UpstreamDependencyError(RiskEngineError):
    """Weight storage or narrative service unavailable."""


class PersistenceError(RiskEngineError):
    """A write to the audit store failed."""
