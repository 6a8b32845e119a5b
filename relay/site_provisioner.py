"""
Site provisioning with bounded name-collision retry.

Netlify site names are global. A taken name comes back as 422 (or, from
older API revisions, a 2xx body without an id); either way the next
candidate name is tried until ``max_name_attempts`` is reached.
"""
import logging
from itertools import islice
from typing import List

from .config import RelaySettings
from .errors import NetlifyAPIError, ProvisionExhaustedError, UpstreamProvisionError
from .models import SiteRecord
from .name_generator import base_site_name, candidate_names
from .netlify_client import NetlifyClient

logger = logging.getLogger(__name__)


class SiteProvisioner:
    """Creates one new site per call."""

    def __init__(self, client: NetlifyClient, settings: RelaySettings):
        self.client = client
        self.settings = settings

    def provision(self, username: str) -> SiteRecord:
        base = base_site_name(
            username,
            prefix=self.settings.site_name_prefix,
            max_length=self.settings.site_name_max_length
        )
        attempted: List[str] = []

        for name in islice(candidate_names(base), self.settings.max_name_attempts):
            attempted.append(name)
            try:
                data = self.client.create_site(name)
            except NetlifyAPIError as e:
                if e.is_name_collision:
                    logger.warning(f"Site name taken: {name}")
                    continue
                logger.error(f"Failed to create site {name}: {e}")
                raise UpstreamProvisionError(
                    f"Failed to create Netlify site: {e.message}", site_name=name
                ) from e

            if not data.get('id'):
                logger.warning(f"No site id returned for {name}, treating as collision")
                continue

            site = SiteRecord.from_api(data, requested_name=name)
            logger.info(f"Created site {site.name} ({site.site_id}) after {len(attempted)} attempt(s)")
            return site

        logger.error(f"Gave up creating a site for {username!r} after {len(attempted)} attempts")
        raise ProvisionExhaustedError(attempted)
