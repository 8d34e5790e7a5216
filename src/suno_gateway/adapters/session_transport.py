"""Browser-like HTTP session shared by the Clerk and Suno adapters."""

import random
from dataclasses import dataclass, field

import httpx

DEFAULT_TIMEOUT_SECONDS = 15

CHROME_USER_AGENTS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/128.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/127.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/128.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/128.0.0.0 Safari/537.36",
)


def random_user_agent(rng: random.Random | None = None) -> str:
    """Pick a realistic Chrome user agent."""
    return (rng or random).choice(CHROME_USER_AGENTS)


@dataclass
class SessionTransport:
    """HTTPX client with a persistent cookie jar and a fixed client identity.

    Headers are built per request: the raw cookie is always sent together
    with the jar cookies its policy allows for the URL, and the bearer token
    is attached whenever the caller passes one.
    """

    http_client: httpx.AsyncClient
    cookie: str = ""
    user_agent: str = field(default_factory=random_user_agent)

    @classmethod
    def create(cls, cookie: str) -> "SessionTransport":
        """Create a transport with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient(), cookie=cookie)

    def build_headers(self, url: str, token: str | None = None) -> dict[str, str]:
        """Return the headers for one outgoing request to ``url``."""
        headers = {"User-Agent": self.user_agent}
        cookie_header = self._cookie_header(url)
        if cookie_header:
            headers["Cookie"] = cookie_header
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _cookie_header(self, url: str) -> str:
        # An explicit Cookie header stops httpx from adding jar cookies itself,
        # so the jar's own policy picks them for a scratch request here.
        scratch = httpx.Request("GET", url)
        self.http_client.cookies.set_cookie_header(scratch)
        pairs = [self.cookie] if self.cookie else []
        jar_cookies = scratch.headers.get("Cookie")
        if jar_cookies:
            pairs.append(jar_cookies)
        return "; ".join(pairs)

    async def get(
        self,
        url: str,
        *,
        token: str | None = None,
        params: dict[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> httpx.Response:
        """Send a GET request through the shared session."""
        return await self.http_client.get(
            url,
            params=params,
            headers=self.build_headers(url, token),
            timeout=timeout,
        )

    async def post(
        self,
        url: str,
        *,
        token: str | None = None,
        params: dict[str, str] | None = None,
        json: dict[str, object] | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> httpx.Response:
        """Send a POST request through the shared session."""
        return await self.http_client.post(
            url,
            params=params,
            json=json,
            headers=self.build_headers(url, token),
            timeout=timeout,
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
