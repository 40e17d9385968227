"""Network configuration constants for the quiz management API."""

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 8000
API_PREFIX: str = "/api"
