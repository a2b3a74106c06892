"""Domain errors.

Everything that can go wrong is detected at the configuration boundary,
before the tick loop starts.  Once a run begins it cannot fail.
"""

from __future__ import annotations

from pydantic import ValidationError


class InvalidConfiguration(ValueError):
    """Raised when a simulation input cannot produce a meaningful run."""

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "InvalidConfiguration":
        """One-line message listing every failing field (``loc: msg; ...``)."""
        parts = []
        for err in exc.errors():
            loc = ".".join(str(p) for p in err["loc"]) or "config"
            parts.append(f"{loc}: {err['msg']}")
        return cls("; ".join(parts))
