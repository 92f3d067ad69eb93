"""Custom exceptions for prreport."""


class PRReportError(Exception):
    """Base exception for all prreport errors."""


class ConfigurationError(PRReportError):
    """Programming or configuration errors, e.g. an unknown section key.

    These should abort the calling job rather than be retried.
    """


class ValidationError(PRReportError):
    """Invalid input handed to a section renderer."""


class GitHubError(PRReportError):
    """A call to the GitHub API failed."""

    def __init__(self, message: str, command: list[str] | None = None, stderr: str = ""):
        self.command = command or []
        self.stderr = stderr
        detail = f": {stderr}" if stderr else ""
        super().__init__(f"{message}{detail}")
