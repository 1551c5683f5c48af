"""Exception types raised by the Doxygen graph pipeline.

Only structural problems are raised. Recoverable problems such as dangling
cross-references are recorded as diagnostics (see ``shared.result``).
"""

from typing import Optional


class DoxygenGraphError(Exception):
    """Base exception for all pipeline errors."""


class SchemaViolation(DoxygenGraphError):
    """Input no longer matches the Doxygen XML schema the builders expect.

    Raised immediately at the point of detection and never caught inside the
    pipeline: continuing would produce structurally wrong documentation.
    """

    def __init__(
        self,
        message: str,
        element_name: Optional[str] = None,
        key: Optional[str] = None,
        builder: Optional[str] = None,
    ) -> None:
        details = []
        if element_name:
            details.append(f"element <{element_name}>")
        if key:
            details.append(f"key '{key}'")
        if builder:
            details.append(f"builder {builder}")
        full_message = f"{message} ({', '.join(details)})" if details else message
        super().__init__(full_message)
        self.element_name = element_name
        self.key = key
        self.builder = builder


class PipelinePhaseError(DoxygenGraphError):
    """A resolution service was used before the phase that populates it."""

    def __init__(self, message: str, required_phase: str, current_phase: str) -> None:
        super().__init__(f"{message} (requires {required_phase}, at {current_phase})")
        self.required_phase = required_phase
        self.current_phase = current_phase


class InputError(DoxygenGraphError):
    """An input file is missing, unreadable or not well-formed XML."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(f"{message}: {path}" if path else message)
        self.path = path
