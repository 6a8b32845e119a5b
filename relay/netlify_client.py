"""
Netlify API client.

Thin wrapper over the three Netlify REST calls the relay needs: create a
site, upload a zip deploy, delete a site. Every call is bounded by the
configured (connect, read) timeout.
"""
import logging
from typing import Optional

import requests

from .config import RelaySettings
from .errors import NetlifyAPIError

logger = logging.getLogger(__name__)


class NetlifyClient:
    """Talks to the Netlify REST API with a bearer token."""

    def __init__(self, settings: RelaySettings, session: requests.Session = None):
        self.settings = settings
        self.base_url = settings.netlify_api_url.rstrip('/')
        self._session = session

    @property
    def session(self) -> requests.Session:
        """Lazy-create the HTTP session."""
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def _headers(self, content_type: str) -> dict:
        return {
            'Authorization': f"Bearer {self.settings.netlify_token}",
            'Content-Type': content_type,
        }

    def _request(self, method: str, path: str, content_type: str = 'application/json',
                 **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method,
                url,
                headers=self._headers(content_type),
                timeout=self.settings.timeout,
                **kwargs
            )
        except requests.exceptions.RequestException as e:
            raise NetlifyAPIError(f"Netlify request failed: {method} {path}: {e}") from e

        if not response.ok:
            body = _response_body(response)
            raise NetlifyAPIError(
                f"Netlify returned {response.status_code} for {method} {path}",
                status_code=response.status_code,
                body=body
            )
        return response

    def create_site(self, name: str) -> dict:
        """POST /sites. Returns the site JSON."""
        response = self._request('POST', '/sites', json={'name': name})
        return _json_or_raise(response, 'POST /sites')

    def create_deploy(self, site_id: str, archive: bytes) -> dict:
        """POST /sites/{id}/deploys with a zip body. Returns the deploy JSON."""
        path = f"/sites/{site_id}/deploys"
        response = self._request('POST', path, content_type='application/zip', data=archive)
        return _json_or_raise(response, f"POST {path}")

    def delete_site(self, site_id: str) -> bool:
        """DELETE /sites/{id}. A 404 counts as already deleted."""
        try:
            self._request('DELETE', f"/sites/{site_id}")
        except NetlifyAPIError as e:
            if e.upstream_status == 404:
                return True
            raise
        return True


def _response_body(response: requests.Response):
    try:
        return response.json()
    except ValueError:
        return response.text


def _json_or_raise(response: requests.Response, what: str) -> dict:
    try:
        data = response.json()
    except ValueError as e:
        raise NetlifyAPIError(
            f"Netlify returned a non-JSON body for {what}",
            status_code=response.status_code,
            body=response.text
        ) from e
    if not isinstance(data, dict):
        raise NetlifyAPIError(
            f"Netlify returned an unexpected body for {what}",
            status_code=response.status_code,
            body=data
        )
    return data


def build_client(settings: RelaySettings, session: Optional[requests.Session] = None) -> NetlifyClient:
    if not settings.has_token:
        logger.warning("NETLIFY_TOKEN is not set; Netlify calls will be rejected")
    return NetlifyClient(settings, session=session)
