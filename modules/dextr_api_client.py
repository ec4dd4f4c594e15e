from models.browser import Browser
from modules.config import DEXTR_API_URL, logger


class DextrApiClient:
    def __init__(self, label, address, proxy=None, browser=None):
        self.label = label
        self.address = address
        self.browser = browser or Browser(label, proxy)
        self.session = self.browser.session
        self.base_url = DEXTR_API_URL

        if proxy:
            self.browser.check_ip()

    # Helper methods for GET and POST requests
    def _make_request(self, method, endpoint, **kwargs):
        """Wrapper function for making requests."""
        url = f"{self.base_url}{endpoint}"
        response = self.session.request(method, url, timeout=30, **kwargs)
        response.raise_for_status()
        return response.json()

    def get(self, endpoint, **kwargs):
        return self._make_request("GET", endpoint, **kwargs)

    def post(self, endpoint, **kwargs):
        return self._make_request("POST", endpoint, **kwargs)

    # API requests
    def is_registered(self) -> bool:
        """A failed status check counts as not registered."""
        try:
            data = self.get(f"/users/checkUserRegister/{self.address}")
        except Exception as error:
            logger.error(f"{self.label} Check registration error: {error}")
            return False

        return bool(data.get("status") and data.get("isRegisteredOnDB"))

    def register(self, referral_by="") -> dict:
        return self.post(
            "/users/registerByWallet",
            json={"walletAddress": self.address, "referralBy": referral_by},
        )
