# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals used internally by the Arbor CLI framework.

These signals are raised from command run behaviors to stop execution of a plan
early without being treated as a failure.

All signals inherit from `FlowSignal`, which is a subclass of `BaseException`
to ensure they bypass standard `except Exception` blocks.

Signals:
- QuitSignal: Stop running the remaining commands of the current plan.
"""


class FlowSignal(BaseException):
    """Base class for all flow control signals in Arbor.

    These are not errors. They're used to end a run early from inside a
    command's run behavior.
    """


class QuitSignal(FlowSignal):
    """Raised to stop the executor after the current command."""

    def __init__(self, message: str = "Quit signal received."):
        super().__init__(message)
