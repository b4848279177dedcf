# Clispec CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals used by clispec.

Signals inherit from `FlowSignal`, a subclass of `BaseException`, so they
bypass standard `except Exception` blocks. They are not errors.

Signals:
- HelpSignal: The user asked for help; nothing was validated or consumed.
"""


class FlowSignal(BaseException):
    """Base class for all flow control signals in clispec."""


class HelpSignal(FlowSignal):
    """Raised when help output was requested on the command line."""

    def __init__(self, message: str = "Help signal received."):
        super().__init__(message)
