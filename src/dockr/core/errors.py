#!/usr/bin/env python3
"""
Unified error handling for dockr.

Defines the error taxonomy raised by the console, executors and
orchestrators, the context attached to each error, and a Rich based
handler that renders errors for the CLI.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.panel import Panel


class ErrorCategory(Enum):
    """Categories of dockr errors."""

    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    CONNECTION = "connection"
    RUNTIME = "runtime"
    OUTPUT = "output"
    BUILD = "build"
    TRANSFER = "transfer"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Where an error happened."""

    operation: str
    phase: Optional[str] = None
    component: Optional[str] = None
    target: Optional[str] = None
    image_name: Optional[str] = None
    file_path: Optional[str] = None
    additional_info: Optional[Dict[str, Any]] = None


def create_error_context(
    operation: str,
    phase: Optional[str] = None,
    component: Optional[str] = None,
    target: Optional[str] = None,
    image_name: Optional[str] = None,
    file_path: Optional[str] = None,
    additional_info: Optional[Dict[str, Any]] = None,
) -> ErrorContext:
    """Convenience constructor for ErrorContext."""
    return ErrorContext(
        operation=operation,
        phase=phase,
        component=component,
        target=target,
        image_name=image_name,
        file_path=file_path,
        additional_info=additional_info,
    )


class DockrError(Exception):
    """Base class for all dockr errors.

    Attributes:
        message (str): Human readable message.
        category (ErrorCategory): Error category.
        context (ErrorContext): Where the error happened, if known.
        cause (Exception): Underlying exception, if any.
        recoverable (bool): Whether retrying with different input may succeed.
        suggestions (list): Hints shown to the user.
    """

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None,
        recoverable: bool = False,
        suggestions: Optional[List[str]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.context = context
        self.cause = cause
        self.recoverable = recoverable
        self.suggestions = suggestions or []


class ValidationError(DockrError):
    """Invalid user input."""

    def __init__(self, message: str, **kwargs) -> None:
        super().__init__(message, ErrorCategory.VALIDATION, recoverable=True, **kwargs)


class ConfigurationError(DockrError):
    """Invalid or unreadable configuration."""

    def __init__(self, message: str, **kwargs) -> None:
        super().__init__(
            message, ErrorCategory.CONFIGURATION, recoverable=True, **kwargs
        )


class ConnectionError(DockrError):
    """The container runtime or the remote host could not be reached."""

    def __init__(self, message: str, **kwargs) -> None:
        super().__init__(message, ErrorCategory.CONNECTION, recoverable=True, **kwargs)


class RuntimeError(DockrError):
    """The container runtime reported an error (missing image, bad identifier)."""

    def __init__(self, message: str, **kwargs) -> None:
        super().__init__(message, ErrorCategory.RUNTIME, recoverable=False, **kwargs)


class NameResolutionError(DockrError):
    """The runtime returned empty or unusable output where a value was expected."""

    def __init__(self, message: str, **kwargs) -> None:
        super().__init__(message, ErrorCategory.OUTPUT, recoverable=False, **kwargs)


class BuildError(DockrError):
    """Image build failed."""

    def __init__(self, message: str, **kwargs) -> None:
        super().__init__(message, ErrorCategory.BUILD, recoverable=False, **kwargs)


class TransferError(DockrError):
    """Copying files to a remote host failed."""

    def __init__(self, message: str, **kwargs) -> None:
        super().__init__(message, ErrorCategory.TRANSFER, recoverable=True, **kwargs)


class TimeoutError(DockrError):
    """An external command did not finish within its timeout."""

    def __init__(self, message: str, **kwargs) -> None:
        super().__init__(message, ErrorCategory.TIMEOUT, recoverable=True, **kwargs)


_CATEGORY_STYLE = {
    ErrorCategory.VALIDATION: ("⚠️", "Validation Error", "yellow"),
    ErrorCategory.CONFIGURATION: ("⚙️", "Configuration Error", "yellow"),
    ErrorCategory.CONNECTION: ("🔌", "Connection Error", "red"),
    ErrorCategory.RUNTIME: ("🐳", "Runtime Error", "red"),
    ErrorCategory.OUTPUT: ("🔍", "Output Error", "red"),
    ErrorCategory.BUILD: ("🔨", "Build Error", "red"),
    ErrorCategory.TRANSFER: ("📦", "Transfer Error", "red"),
    ErrorCategory.TIMEOUT: ("⏱️", "Timeout Error", "yellow"),
}


class ErrorHandler:
    """Render errors on a Rich console and log them."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console or Console()
        self.verbose = verbose
        self.logger = logging.getLogger(__name__)

    def handle_error(
        self,
        error: Exception,
        context: Optional[ErrorContext] = None,
        show_traceback: Optional[bool] = None,
    ) -> None:
        """Display an error panel.

        Args:
            error: The exception to display.
            context: Context to show when the error carries none.
            show_traceback: Print the traceback; defaults to verbose mode.
        """
        if isinstance(error, DockrError):
            emoji, title, style = _CATEGORY_STYLE[error.category]
            context = error.context or context
            suggestions = error.suggestions
        else:
            emoji, title, style = "💥", type(error).__name__, "red"
            suggestions = []

        lines = [f"[bold]{error}[/bold]"]
        if context is not None:
            for field, value in vars(context).items():
                if value:
                    lines.append(f"[dim]{field}:[/dim] {value}")
        if isinstance(error, DockrError) and error.cause is not None:
            lines.append(f"[dim]cause:[/dim] {error.cause}")
        if suggestions:
            lines.append("")
            lines.append("💡 [cyan]Suggestions:[/cyan]")
            lines.extend(f"  • {suggestion}" for suggestion in suggestions)

        self.logger.debug("%s: %s", title, error)
        self.console.print(
            Panel("\n".join(lines), title=f"{emoji} {title}", border_style=style)
        )

        if show_traceback is None:
            show_traceback = self.verbose
        if show_traceback:
            self.console.print_exception()


_error_handler: Optional[ErrorHandler] = None


def set_error_handler(handler: Optional[ErrorHandler]) -> None:
    global _error_handler
    _error_handler = handler


def get_error_handler() -> Optional[ErrorHandler]:
    return _error_handler


def handle_error(
    error: Exception,
    context: Optional[ErrorContext] = None,
    show_traceback: Optional[bool] = None,
) -> None:
    """Handle an error with the global handler, or log it when none is set."""
    if _error_handler is None:
        logging.error("%s", error)
        return
    _error_handler.handle_error(error, context=context, show_traceback=show_traceback)
