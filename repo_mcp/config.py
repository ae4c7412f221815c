# repo_mcp/config.py
from pathlib import Path
from pydantic_settings import BaseSettings

# Parent of the project checkout: repo_mcp/config.py -> repo_mcp -> project -> parent.
# Only meaningful for a source or editable checkout; an installed copy lands in
# site-packages/.., so set REPO_PATH there.
DEFAULT_REPO_PATH = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    # Repository root every tool is confined to
    REPO_PATH: Path = DEFAULT_REPO_PATH

    # HTTP MCP transport
    MCP_HTTP_HOST: str = "127.0.0.1"
    MCP_HTTP_PORT: int = 8080
    MCP_HTTP_PATH: str = "/mcp"

    # Security: Bearer token and allowed origins
    MCP_HTTP_BEARER_TOKEN: str = "change-me"         # set in .env for prod
    MCP_HTTP_ALLOWED_ORIGINS: str = "http://localhost, http://127.0.0.1"
    MCP_HTTP_ALLOW_NO_ORIGIN: bool = True            # allow non-browser clients

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
