"""User-facing copy builders for failures and confirmations."""

from __future__ import annotations

from paper_shelf.errors import FetchError


def _ensure_sentence(text: str) -> str:
    """Return text with terminal sentence punctuation."""
    cleaned = text.strip()
    if not cleaned:
        return ""
    if cleaned.endswith((".", "!", "?")):
        return cleaned
    return f"{cleaned}."


def build_next_step_hint(next_step: str) -> str:
    """Build a canonical next-step guidance line."""
    return f"Next step: {_ensure_sentence(next_step)}"


def build_actionable_error(
    action: str,
    *,
    next_step: str,
    why: str | None = None,
) -> str:
    """Build a 2-3 line actionable error message."""
    lines = [f"Could not {action.strip()}."]
    if why:
        lines.append(f"Why: {_ensure_sentence(why)}")
    lines.append(build_next_step_hint(next_step))
    return "\n".join(lines)


def build_search_failure_message(exc: FetchError) -> str:
    """Turn a catalog FetchError into the single message shown to the user."""
    status_code = exc.status_code
    if status_code == 429:
        return build_actionable_error(
            "search arXiv",
            why="arXiv API rate limit reached (HTTP 429)",
            next_step="wait a few seconds and retry",
        )
    if status_code is not None and status_code >= 500:
        return build_actionable_error(
            "search arXiv",
            why=f"arXiv API is unavailable right now (HTTP {status_code})",
            next_step="retry in a minute",
        )
    if status_code is not None:
        return build_actionable_error(
            "search arXiv",
            why=f"arXiv API rejected the request (HTTP {status_code})",
            next_step="refine the query and retry",
        )
    return build_actionable_error(
        "search arXiv",
        why=str(exc) or "a network or I/O error occurred",
        next_step="check connectivity and retry; your library is still available offline",
    )


__all__ = [
    "build_actionable_error",
    "build_next_step_hint",
    "build_search_failure_message",
]
