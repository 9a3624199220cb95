"""
Client configuration.

Endpoint URLs, transport settings and connection limits for
AsyncAPIClient. Every field has a working default; override what you
need, e.g. point `content_url` at a local stub server in tests.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union
from urllib.parse import quote, urlsplit, urlunsplit
import ssl

import aiohttp


DROPBOX_CONTENT_URL = 'https://content.dropboxapi.com/2/'
DROPBOX_AUTHORIZE_URL = 'https://www.dropbox.com/oauth2/authorize'
DROPBOX_TOKEN_URL = 'https://api.dropboxapi.com/oauth2/token'


@dataclass
class ProxyConfig:
    """
    HTTP(S) proxy for all Dropbox traffic.

    Credentials, when given, are embedded in the proxy URL the way
    aiohttp expects them.
    """
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    def to_aiohttp_proxy(self) -> Optional[str]:
        if not self.url:
            return None
        if not (self.username and self.password):
            return self.url

        parts = urlsplit(self.url)
        if not parts.scheme:
            return self.url
        netloc = f"{quote(self.username, safe='')}:{quote(self.password, safe='')}@{parts.netloc}"
        return urlunsplit(parts._replace(netloc=netloc))


@dataclass
class SSLConfig:
    """TLS settings: verification, custom CA bundle, client certificate."""
    verify: bool = True
    ca_file: Optional[str] = None
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    check_hostname: bool = True

    def create_ssl_context(self) -> Union[ssl.SSLContext, bool]:
        """
        Build the value for aiohttp's `ssl=` argument.

        Returns False when verification is off.
        """
        if not self.verify:
            return False

        context = ssl.create_default_context(cafile=self.ca_file)
        if self.cert_file:
            context.load_cert_chain(self.cert_file, keyfile=self.key_file)
        context.check_hostname = self.check_hostname
        return context


@dataclass
class TimeoutConfig:
    """
    Request timeouts in seconds.

    A single request may carry a whole 150 MB chunk, hence the large
    total and read budgets.
    """
    total: float = 3600.0
    connect: float = 30.0
    sock_read: float = 300.0
    sock_connect: float = 30.0

    def to_aiohttp_timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read,
            sock_connect=self.sock_connect
        )


@dataclass
class APIConfig:
    """
    Configuration for AsyncAPIClient and AsyncAuthService.

    Attributes:
        content_url: Base URL of content-upload endpoints
        authorize_url: Page the user visits to authorize the app
        token_url: OAuth2 token endpoint
        require_role: Restrict authorization to a 'work' or 'personal' account
        user_agent: User-Agent header
        proxy: Optional proxy
        ssl: TLS settings
        timeout: Request timeouts
        extra_headers: Headers sent with every request
        log_level: Level for the client logger when logging is unconfigured
        limit: Total connection pool size
        limit_per_host: Connections per host
    """
    content_url: str = DROPBOX_CONTENT_URL
    authorize_url: str = DROPBOX_AUTHORIZE_URL
    token_url: str = DROPBOX_TOKEN_URL
    require_role: Optional[str] = None

    user_agent: str = 'dboxpy/1.0.0'
    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    extra_headers: Dict[str, str] = field(default_factory=dict)
    log_level: int = 20

    limit: int = 100
    limit_per_host: int = 10

    @classmethod
    def default(cls) -> 'APIConfig':
        return cls()

    @classmethod
    def with_proxy(cls, proxy_url: str, **kwargs) -> 'APIConfig':
        """Route all traffic through `proxy_url`."""
        return cls(proxy=ProxyConfig(url=proxy_url), **kwargs)

    @classmethod
    def insecure(cls, **kwargs) -> 'APIConfig':
        """Disable certificate verification (debugging proxies only)."""
        return cls(ssl=SSLConfig(verify=False, check_hostname=False), **kwargs)

    def content_endpoint(self, endpoint: str) -> str:
        """Full URL of a content endpoint such as 'files/upload'."""
        return f"{self.content_url.rstrip('/')}/{endpoint.lstrip('/')}"

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for aiohttp.TCPConnector."""
        return {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for aiohttp.ClientSession."""
        return {
            'headers': {'User-Agent': self.user_agent, **self.extra_headers},
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
