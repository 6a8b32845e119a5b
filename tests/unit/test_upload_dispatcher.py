"""
Unit tests for UploadDispatcher and public_url.
"""
import pytest
import requests
from relay.upload_dispatcher import UploadDispatcher, public_url
from relay.models import SiteRecord, DeploymentRecord
from relay.errors import UpstreamUploadError


@pytest.fixture
def site():
    return SiteRecord(
        site_id='site-123',
        name='portfolio-jane',
        url='http://portfolio-jane.netlify.app',
        ssl_url='https://portfolio-jane.netlify.app'
    )


class TestDispatch:
    """Tests for dispatch method."""

    def test_returns_deployment_record(self, netlify_client, session, make_response, deploy_payload, site):
        """Successful upload returns the deploy id and state."""
        session.request.return_value = make_response(200, deploy_payload)
        deploy = UploadDispatcher(netlify_client).dispatch(site, b'PK')

        assert isinstance(deploy, DeploymentRecord)
        assert deploy.deploy_id == 'deploy-456'
        assert deploy.state == 'uploaded'

    def test_uploads_to_site(self, netlify_client, session, make_response, deploy_payload, site):
        """Archive goes to the site's deploys endpoint."""
        session.request.return_value = make_response(200, deploy_payload)
        UploadDispatcher(netlify_client).dispatch(site, b'PK-archive')

        args, kwargs = session.request.call_args
        assert args[1].endswith('/sites/site-123/deploys')
        assert kwargs['data'] == b'PK-archive'

    def test_error_status_echoes_body(self, netlify_client, session, make_response, site):
        """Upstream body is carried as error detail."""
        body = {'code': 422, 'message': 'Invalid zip'}
        session.request.return_value = make_response(422, body)

        with pytest.raises(UpstreamUploadError) as exc_info:
            UploadDispatcher(netlify_client).dispatch(site, b'PK')

        assert exc_info.value.detail == body
        assert exc_info.value.upstream_status == 422
        assert exc_info.value.to_dict()['detail'] == body

    def test_text_error_body(self, netlify_client, session, make_response, site):
        """Non-JSON error bodies are echoed as text."""
        session.request.return_value = make_response(500, text='Internal Server Error')

        with pytest.raises(UpstreamUploadError) as exc_info:
            UploadDispatcher(netlify_client).dispatch(site, b'PK')

        assert exc_info.value.detail == 'Internal Server Error'

    def test_transport_error(self, netlify_client, session, site):
        """Network failures become upload errors."""
        session.request.side_effect = requests.exceptions.ConnectionError('reset')

        with pytest.raises(UpstreamUploadError) as exc_info:
            UploadDispatcher(netlify_client).dispatch(site, b'PK')

        assert exc_info.value.upstream_status is None
        assert 'reset' in exc_info.value.detail

    def test_missing_deploy_id(self, netlify_client, session, make_response, site):
        """A 2xx without an id is still a failed upload."""
        session.request.return_value = make_response(200, {'state': 'error'})

        with pytest.raises(UpstreamUploadError):
            UploadDispatcher(netlify_client).dispatch(site, b'PK')


class TestPublicUrl:
    """Tests for public_url function."""

    def test_prefers_deploy_ssl_url(self, site):
        deploy = DeploymentRecord(deploy_id='d', ssl_url='https://deploy.netlify.app')
        assert public_url(site, deploy) == 'https://deploy.netlify.app'

    def test_falls_back_to_site_ssl_url(self, site):
        deploy = DeploymentRecord(deploy_id='d')
        assert public_url(site, deploy) == 'https://portfolio-jane.netlify.app'

    def test_falls_back_to_site_url(self):
        site = SiteRecord(site_id='s', name='n', url='http://n.netlify.app')
        assert public_url(site) == 'http://n.netlify.app'

    def test_falls_back_to_default(self):
        site = SiteRecord(site_id='s', name='portfolio-bob')
        assert public_url(site) == 'https://portfolio-bob.netlify.app'
