import os
from dotenv import load_dotenv
from pydantic import BaseModel

from precifica.core.constants.sync import PRODUCTS_KEY


load_dotenv()


class Settings(BaseModel):
    # Local persistence (JSON files mirroring the browser's localStorage)
    data_dir: str = os.getenv("PRECIFICA_DATA_DIR", "./data")

    # Gold spot price feed
    gold_api_url: str = os.getenv(
        "GOLD_API_URL",
        "https://economia.awesomeapi.com.br/last/XAU-BRL",
    )
    gold_quote_key: str = os.getenv("GOLD_QUOTE_KEY", "XAUBRL")
    gold_refresh_seconds: int = int(os.getenv("GOLD_REFRESH_SECONDS", "60"))
    auto_start_price_feed: bool = os.getenv("AUTO_START_PRICE_FEED", "true").lower() == "true"

    # Outbound HTTP
    http_timeout_seconds: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "15"))

    # Remote file store (GitHub contents API)
    github_api_url: str = os.getenv("GITHUB_API_URL", "https://api.github.com")
    github_owner: str = os.getenv("GITHUB_OWNER", "")
    github_repo: str = os.getenv("GITHUB_REPO", "")
    github_path: str = os.getenv("GITHUB_PATH", "precifica_db.json")
    github_token: str = os.getenv("GITHUB_TOKEN", "")

    # Pricing
    default_plating_factor: float = float(os.getenv("DEFAULT_PLATING_FACTOR", "0.02"))

    @property
    def products_file(self) -> str:
        """Path of the JSON file holding the product list."""
        return os.path.join(self.data_dir, f"{PRODUCTS_KEY}.json")

    @property
    def settings_file(self) -> str:
        """Path of the JSON key/value file holding scalar settings."""
        return os.path.join(self.data_dir, "precifica_settings.json")


settings = Settings()
