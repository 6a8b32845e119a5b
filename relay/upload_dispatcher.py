import logging

from .errors import NetlifyAPIError, UpstreamUploadError
from .models import DeploymentRecord, SiteRecord
from .netlify_client import NetlifyClient

logger = logging.getLogger(__name__)


def public_url(site: SiteRecord, deploy: DeploymentRecord = None) -> str:
    """Best live URL for a deployed site."""
    if deploy is not None and deploy.ssl_url:
        return deploy.ssl_url
    return site.ssl_url or site.url or site.default_url


class UploadDispatcher:
    """Uploads a zip archive as a new deploy of a site."""

    def __init__(self, client: NetlifyClient):
        self.client = client

    def dispatch(self, site: SiteRecord, archive: bytes) -> DeploymentRecord:
        try:
            data = self.client.create_deploy(site.site_id, archive)
        except NetlifyAPIError as e:
            logger.error(f"Deploy upload to {site.name} failed: {e}")
            raise UpstreamUploadError(
                'Failed to upload deploy to Netlify',
                detail=e.body if e.body is not None else e.message,
                upstream_status=e.upstream_status
            ) from e

        if not data.get('id'):
            logger.error(f"Deploy upload to {site.name} returned no deploy id")
            raise UpstreamUploadError('Netlify did not return a deploy id', detail=data)

        deploy = DeploymentRecord.from_api(data)
        logger.info(f"Uploaded deploy {deploy.deploy_id} to {site.name} (state={deploy.state})")
        return deploy
