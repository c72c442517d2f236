"""Errors that should end a command without being reported again."""

from __future__ import annotations

__all__ = ["SilentError", "silence_error", "is_silent"]


class SilentError(Exception):
    """Wraps an error that has already been reported in more detail."""

    def __init__(self, err: BaseException) -> None:
        super().__init__(str(err))
        self.err = err
        self.__cause__ = err

    def __str__(self) -> str:
        return str(self.err)


def silence_error(err: BaseException) -> SilentError:
    """Wrap ``err`` so that it is not reported again."""
    return SilentError(err)


def is_silent(err: BaseException | None) -> bool:
    """Return True if ``err`` or an error it was caused by is silent."""
    seen = set()
    while err is not None and id(err) not in seen:
        if isinstance(err, SilentError):
            return True
        seen.add(id(err))
        err = err.__cause__
    return False