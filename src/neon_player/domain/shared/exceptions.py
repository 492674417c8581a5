"""Base exception classes for domain-level errors."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class LoadError(DomainError):
    """Raised when a playlist source is unreachable or malformed."""

    def __init__(self, source: str | None, reason: str, message: str | None = None) -> None:
        msg = message or f"Could not load playlist from '{source or 'default'}': {reason}"
        super().__init__(msg, code="LOAD_ERROR")
        self.source = source
        self.reason = reason


class PlaybackRejectedError(DomainError):
    """Raised when an output device refuses an asynchronous play request."""

    def __init__(self, reason: str, message: str | None = None) -> None:
        msg = message or f"Playback rejected: {reason}"
        super().__init__(msg, code="PLAYBACK_REJECTED")
        self.reason = reason


class InvalidCommandSyntaxError(DomainError):
    """Raised when a chat command receives a malformed argument."""

    def __init__(self, command: str, argument: str | None, message: str | None = None) -> None:
        msg = message or f"Invalid argument for {command}: {argument!r}"
        super().__init__(msg, code="INVALID_COMMAND_SYNTAX")
        self.command = command
        self.argument = argument


class UnknownCommandError(DomainError):
    """Raised when a slash-token does not name a known chat command."""

    def __init__(self, command: str, message: str | None = None) -> None:
        msg = message or f"Unknown command: {command}"
        super().__init__(msg, code="UNKNOWN_COMMAND")
        self.command = command


class InvalidOperationError(DomainError):
    """Raised when an operation is invalid in the current state."""

    def __init__(self, operation: str, current_state: str, message: str | None = None) -> None:
        msg = message or f"Cannot perform '{operation}' in state '{current_state}'"
        super().__init__(msg, code="INVALID_OPERATION")
        self.operation = operation
        self.current_state = current_state
