from __future__ import annotations

import traceback


def _format_cause(cause: BaseException) -> str:
    """
    Render an exception cause without library internals.

    Drops traceback frames that live under site-packages so the user
    only sees frames from their own files.

    Args:
        cause: Exception that triggered the error

    Returns:
        Formatted cause block
    """
    frames = [
        frame
        for frame in traceback.extract_tb(cause.__traceback__)
        if "site-packages" not in frame.filename
    ]
    lines = [f"Caused by: {type(cause).__name__}: {cause}"]
    if frames:
        lines.append("".join(traceback.format_list(frames)).rstrip())
    return "\n".join(lines)


class DatasetLoadError(Exception):
    """
    Raised when the customer dataset cannot be read.

    Covers missing files, unreadable CSV content and rows that do not carry
    enough positional fields. Always fatal for a run.

    Attributes:
        message: Short description of what failed
        cause: Underlying exception, if any
        hint: Suggested fix shown to the user
    """

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        hint: str | None = None,
    ) -> None:
        self.message = message
        self.cause = cause
        self.hint = hint
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message]
        if self.cause is not None:
            parts.append(_format_cause(self.cause))
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        return "\n\n".join(parts)


class ConfigError(Exception):
    """
    Raised when churngraph.yaml is invalid or a profile cannot be resolved.

    Attributes:
        message: Description of the configuration problem
        hint: Suggested fix shown to the user
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        self.message = message
        self.hint = hint
        super().__init__(message)

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\n\nHint: {self.hint}"
        return self.message
