"""
Custom exception hierarchy for relay.

Every failure that can stop a pipeline is a typed exception. Fatal
configuration and tool-resolution errors carry a human-readable hint that
the CLI prints instead of a traceback.
"""

from __future__ import annotations


class RelayException(Exception):
    """
    Base exception for all relay errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (targets, paths, etc.)
        hint: Remediation hint shown to the user (what to run or pass)
        exit_code: Suggested exit code for CLI (default: 1)
        recoverable: Whether retry/recovery may be possible
    """

    exit_code: int = 1
    recoverable: bool = True

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        hint: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        self.hint = hint
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class RelayConfigError(RelayException):
    """Base class for configuration-related errors."""

    recoverable: bool = False


class ConfigFileError(RelayConfigError):
    """
    Error reading or parsing a configuration or workspace file.

    Raised for TOML parsing errors, permission errors, etc.
    """

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        context: dict | None = None,
        hint: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, hint=hint, cause=cause)


class WorkspaceNotFoundError(ConfigFileError):
    """No workspace file was found walking up from the working directory."""


class ConfigurationConflict(RelayConfigError, ValueError):
    """
    Two mutually exclusive options were both set.

    Raised before any pipeline stage runs, so nothing has been spawned
    when a caller sees it.
    """

    def __init__(
        self,
        message: str,
        *,
        options: tuple[str, ...] = (),
        context: dict | None = None,
        hint: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if options:
            ctx["options"] = list(options)
        super().__init__(message, context=ctx, hint=hint, cause=cause)
        self.options = options


class InvalidServiceConfig(RelayConfigError, ValueError):
    """
    A target reference could not be resolved or its options failed validation.
    """

    def __init__(
        self,
        message: str,
        *,
        target: str | None = None,
        validation_errors: list[str] | None = None,
        context: dict | None = None,
        hint: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if target:
            ctx["target"] = target
        if validation_errors:
            ctx["validation_errors"] = validation_errors
        super().__init__(message, context=ctx, hint=hint, cause=cause)
        self.target = target
        self.validation_errors = validation_errors or []


# =============================================================================
# Execution Errors
# =============================================================================


class RelayExecutionError(RelayException):
    """Base class for execution-related errors."""

    pass


class ServiceStartFailure(RelayExecutionError):
    """
    A launched service reported failure before becoming ready.

    No base URL is computed when this is raised.
    """

    def __init__(
        self,
        message: str,
        *,
        target: str | None = None,
        context: dict | None = None,
        hint: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if target:
            ctx["target"] = target
        super().__init__(message, context=ctx, hint=hint, cause=cause)
        self.target = target


class ToolNotFound(RelayExecutionError):
    """
    An auxiliary tool could not be resolved at any candidate location.
    """

    recoverable: bool = False

    def __init__(
        self,
        message: str,
        *,
        candidates: list[str] | None = None,
        context: dict | None = None,
        hint: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if candidates:
            ctx["candidates"] = candidates
        super().__init__(message, context=ctx, hint=hint, cause=cause)
        self.candidates = candidates or []


class DriverUpdateFailure(RelayExecutionError):
    """
    The driver manager was found but its update command raised.
    """

    def __init__(
        self,
        message: str,
        *,
        module: str | None = None,
        context: dict | None = None,
        hint: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if module:
            ctx["module"] = module
        super().__init__(message, context=ctx, hint=hint, cause=cause)
        self.module = module


class SubprocessFailure(RelayExecutionError):
    """
    An isolated subprocess exited unsuccessfully or could not be spawned.

    Attached to a failed BuildEvent rather than raised.
    """

    def __init__(
        self,
        message: str,
        *,
        exit_code: int | None = None,
        command: str | None = None,
        context: dict | None = None,
        hint: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if exit_code is not None:
            ctx["exit_code"] = exit_code
        if command:
            ctx["command"] = command
        super().__init__(message, context=ctx, hint=hint, cause=cause)
        self.process_exit_code = exit_code


class StageFailure(RelayExecutionError):
    """
    A pipeline stage failed; wraps the stage's own error.

    Attributes:
        stage_index: Zero-based position of the failed stage
        stage_name: Name of the failed stage
        cause: The underlying error reported by the stage
    """

    def __init__(
        self,
        stage_index: int,
        stage_name: str,
        cause: Exception,
    ) -> None:
        super().__init__(
            f"Stage {stage_index} ({stage_name}) failed: {cause}",
            hint=getattr(cause, "hint", None),
            cause=cause,
        )
        self.stage_index = stage_index
        self.stage_name = stage_name
        self.cause = cause
        self.exit_code = getattr(cause, "exit_code", 1)
