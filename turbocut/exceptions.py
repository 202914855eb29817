"""
turbocut.exceptions - Custom exception classes.

All TurboCut-specific exceptions inherit from TurboCutError.
"""


class TurboCutError(Exception):
    """Base exception for all TurboCut errors."""

    pass


class ConfigError(TurboCutError):
    """Configuration loading or validation error."""

    pass


class ValidationError(TurboCutError):
    """Data validation error."""

    pass


class ClipError(ValidationError):
    """Malformed clip list."""

    pass


class TimecodeError(TurboCutError):
    """Invalid frame count or unparseable timecode."""

    pass


class ProbeError(TurboCutError):
    """Media metadata probe failed."""

    pass


class ExportError(TurboCutError):
    """Timeline export error."""

    pass


class DependencyError(TurboCutError):
    """Required dependency missing or misconfigured."""

    def __init__(self, dependency: str, message: str, install_hint: str | None = None):
        self.dependency = dependency
        self.message = message
        self.install_hint = install_hint
        super().__init__(f"{dependency}: {message}")
