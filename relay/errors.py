from typing import List, Optional


class RelayError(Exception):
    """Base class for errors raised while relaying a deployment."""
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        return {'error': self.message}


class ValidationError(RelayError):
    status_code = 400

    def __init__(self, missing: List[str], message: str = None):
        self.missing = list(missing)
        super().__init__(message or f"Missing {' or '.join(self.missing)}")


class NetlifyAPIError(RelayError):
    """Non-2xx answer or transport failure talking to Netlify.

    ``status_code`` is the upstream HTTP status, or None when no response
    was received at all.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body=None):
        self.upstream_status = status_code
        self.body = body
        super().__init__(message)

    @property
    def is_name_collision(self) -> bool:
        return self.upstream_status == 422


class UpstreamProvisionError(RelayError):
    def __init__(self, message: str, site_name: str = None):
        self.site_name = site_name
        super().__init__(message)


class ProvisionExhaustedError(UpstreamProvisionError):
    def __init__(self, attempts: List[str]):
        self.attempts = list(attempts)
        super().__init__(
            f"Could not find a free site name after {len(self.attempts)} attempts",
            site_name=self.attempts[-1] if self.attempts else None
        )

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload['attempts'] = self.attempts
        return payload


class UpstreamUploadError(RelayError):
    def __init__(self, message: str, detail=None, upstream_status: Optional[int] = None):
        self.detail = detail
        self.upstream_status = upstream_status
        super().__init__(message)

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload['detail'] = self.detail
        return payload
