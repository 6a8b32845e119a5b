"""
Deploy orchestration: provision -> archive -> upload.

Each request gets its own site. If the upload fails the freshly created
site is deleted again so no empty sites accumulate on the account
(disable with CLEANUP_ORPHANED_SITES=false).
"""
import logging

from .archive_builder import build_archive
from .config import RelaySettings
from .errors import NetlifyAPIError, UpstreamUploadError
from .html_sanitizer import looks_double_escaped, unescape_html
from .models import DeploymentRequest, DeploymentResult, SiteRecord
from .netlify_client import NetlifyClient
from .site_provisioner import SiteProvisioner
from .upload_dispatcher import UploadDispatcher, public_url

logger = logging.getLogger(__name__)


class DeployOrchestrator:
    """Turns a DeploymentRequest into a live Netlify URL."""

    def __init__(self, client: NetlifyClient, settings: RelaySettings):
        self.client = client
        self.settings = settings
        self.provisioner = SiteProvisioner(client, settings)
        self.dispatcher = UploadDispatcher(client)

    def prepare_html(self, request: DeploymentRequest):
        html = request.html
        if isinstance(html, str):
            if request.unescape:
                return unescape_html(html)
            if looks_double_escaped(html):
                logger.debug(f"HTML for {request.username!r} looks double-escaped; unescaping not requested")
        return html

    def deploy(self, request: DeploymentRequest) -> DeploymentResult:
        # Archive first: a site only exists once everything local has succeeded
        archive = build_archive(self.prepare_html(request))
        site = self.provisioner.provision(request.username)
        logger.info(f"Uploading {len(archive)} byte archive to {site.name}")

        try:
            deploy = self.dispatcher.dispatch(site, archive)
        except UpstreamUploadError:
            self._cleanup(site)
            raise

        return DeploymentResult(
            url=public_url(site, deploy),
            site_id=site.site_id,
            deploy_id=deploy.deploy_id,
            ssl_url=deploy.ssl_url or site.ssl_url,
        )

    def _cleanup(self, site: SiteRecord):
        if not self.settings.cleanup_orphaned_sites:
            logger.warning(f"Leaving orphaned site {site.name} ({site.site_id})")
            return
        try:
            self.client.delete_site(site.site_id)
            logger.info(f"Deleted orphaned site {site.name} ({site.site_id})")
        except NetlifyAPIError as e:
            logger.warning(f"Failed to delete orphaned site {site.name}: {e}")
