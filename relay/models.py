from dataclasses import dataclass
from typing import Optional, Union


HtmlPayload = Union[str, bytes]


@dataclass
class DeploymentRequest:
    username: str
    html: HtmlPayload
    unescape: bool = False


@dataclass
class SiteRecord:
    site_id: str
    name: str
    url: Optional[str] = None
    ssl_url: Optional[str] = None
    admin_url: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict, requested_name: str = None) -> "SiteRecord":
        return cls(
            site_id=data['id'],
            name=data.get('name') or requested_name,
            url=data.get('url'),
            ssl_url=data.get('ssl_url'),
            admin_url=data.get('admin_url'),
        )

    @property
    def default_url(self) -> str:
        return f"https://{self.name}.netlify.app"


@dataclass
class DeploymentRecord:
    deploy_id: str
    state: Optional[str] = None
    url: Optional[str] = None
    ssl_url: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "DeploymentRecord":
        return cls(
            deploy_id=data['id'],
            state=data.get('state'),
            url=data.get('url'),
            ssl_url=data.get('ssl_url'),
        )


@dataclass
class DeploymentResult:
    url: str
    site_id: str
    deploy_id: str
    ssl_url: Optional[str] = None

    def to_dict(self) -> dict:
        """Wire format returned by POST /deploy."""
        payload = {
            'success': True,
            'url': self.url,
            'siteId': self.site_id,
            'deployId': self.deploy_id,
        }
        if self.ssl_url:
            payload['sslUrl'] = self.ssl_url
        return payload
