# urldebug/config.py
from __future__ import annotations
from dataclasses import dataclass

# Some origins reject requests without a browser-looking agent.
USER_AGENT = "Gecko/20050511 Firefox/1.0.4"

IMAGE_MINIMUM_WIDTH = 5
IMAGE_MINIMUM_HEIGHT = 5


@dataclass
class ScraperOptions:
    save_tmp_image: bool = False
    tmp_image_dir: str = "./tmp"
    scrape_og_only: bool = False
    deep_image_inspection: bool = False
    min_width: int = IMAGE_MINIMUM_WIDTH
    min_height: int = IMAGE_MINIMUM_HEIGHT
    user_agent: str = USER_AGENT
    connect_timeout: float = 10
    total_timeout: float = 45
    max_redirects: int = 5
    max_bytes: int = 10_000_000
    # insecure by default: certificates and hostnames are not checked
    verify_tls: bool = False

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Raise ValueError on settings no scrape could run with."""
        if self.min_width < 0 or self.min_height < 0:
            raise ValueError("minimum image dimensions must be >= 0")
        if self.connect_timeout <= 0 or self.total_timeout <= 0:
            raise ValueError("timeouts must be positive")
        if self.connect_timeout > self.total_timeout:
            raise ValueError("connect_timeout cannot exceed total_timeout")
        if self.max_redirects < 0:
            raise ValueError("max_redirects must be >= 0")
        if self.max_bytes <= 0:
            raise ValueError("max_bytes must be positive")
        if not self.user_agent:
            raise ValueError("user_agent must not be empty")
        if self.save_tmp_image and not self.tmp_image_dir:
            raise ValueError("tmp_image_dir is required when save_tmp_image is set")
