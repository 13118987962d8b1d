"""Custom exception classes for the application."""

class BaseReportCardException(Exception):
    """Base exception for all application-specific errors."""
    pass

class InputError(BaseReportCardException):
    """Malformed command-line input, reported before any remote call."""
    pass

class MissingCredentialError(InputError):
    """No GitHub access token was supplied by flag or environment."""
    pass

class GradeQueryError(BaseReportCardException):
    """The remote grade query endpoint failed or returned an unusable record."""
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

class RenderError(BaseReportCardException):
    """Error while producing the report card document."""
    pass

class FontUnavailableError(RenderError):
    """None of the configured font candidates could be located."""
    pass

class LayoutFailureError(RenderError):
    """The PDF layout engine failed or the content does not fit the page."""
    pass

class LocalArtifactError(RenderError):
    """The rendered PDF could not be written to local storage."""
    pass

class PublishError(BaseReportCardException):
    """Error publishing the document to the remote repository."""
    def __init__(self, message: str, status_code: int | None = None, service: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.service = service

    def __str__(self) -> str:
        base = super().__str__()
        details = []
        if self.service:
            details.append(f"Service: {self.service}")
        if self.status_code:
            details.append(f"Status Code: {self.status_code}")
        if details:
            return f"{base} ({', '.join(details)})"
        return base

class TransportError(PublishError):
    """Network, timeout or authentication failure talking to the remote store."""
    pass

class NotFoundError(PublishError):
    """Repository, branch or path does not exist."""
    pass

class BranchNotFoundError(NotFoundError):
    """The target branch does not exist in the repository."""
    pass

class ForbiddenError(PublishError):
    """The credential lacks permission for the requested operation."""
    pass

class StaleUpdateError(PublishError):
    """Overwrite attempted without the current revision token, or with a stale one."""
    pass
