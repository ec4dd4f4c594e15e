import requests
from fake_useragent import UserAgent
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from modules.config import DEXTR_ORIGIN, IP_CHECK_URL, logger


class Browser:
    """HTTP session for the Dextr web API, one per wallet."""

    RETRY_STATUSES = (500, 502, 503, 504)

    def __init__(self, label, proxy=None):
        self.label = label
        self.proxy = proxy
        self.user_agent = UserAgent().random
        self.session = self.create_session()

    @property
    def proxies(self):
        if not self.proxy:
            return {}
        return {"http": self.proxy, "https": self.proxy}

    def default_headers(self):
        return {
            "Accept": "application/json, text/plain, */*",
            "Content-Type": "application/json",
            "Origin": DEXTR_ORIGIN,
            "Referer": f"{DEXTR_ORIGIN}/",
            "User-Agent": self.user_agent,
        }

    def create_session(self):
        session = requests.Session()

        # 3 retries on connection errors and 5xx, sleeping 1s, 2s, 4s
        adapter = HTTPAdapter(
            max_retries=Retry(
                total=3,
                backoff_factor=1,
                status_forcelist=self.RETRY_STATUSES,
                allowed_methods=frozenset(["GET", "POST"]),
                raise_on_status=False,
            )
        )
        for scheme in ("http://", "https://"):
            session.mount(scheme, adapter)

        session.proxies.update(self.proxies)
        session.headers.update(self.default_headers())
        return session

    def check_ip(self):
        """Log the exit IP the session is using, None if it can't be read."""
        try:
            ip = self.session.get(IP_CHECK_URL, timeout=10).json()["origin"]
        except Exception as error:
            logger.error(f"{self.label} Failed to get IP: {error}")
            return None

        logger.info(f"{self.label} Current IP: {ip}")
        return ip
