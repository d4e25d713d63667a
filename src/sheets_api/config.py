"""Default credential locations.

Credentials are looked up relative to the working directory unless
overridden through the environment:
    SHEETS_API_CREDENTIALS - OAuth client credentials (credentials.json)
    SHEETS_API_TOKEN       - OAuth tokens (token.json)

This module auto-loads a .env file from the working directory on import,
so either variable may also be set there.
"""

import os
from pathlib import Path

ENV_FILE = Path.cwd() / ".env"


def _load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from a file.

    Args:
        env_path: Path to .env file.

    Returns:
        Dictionary of loaded variables.
    """
    loaded = {}
    if not env_path.exists():
        return loaded

    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip()

            # Remove surrounding quotes
            if (value.startswith('"') and value.endswith('"')) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]

            # Only set if not already in environment (env vars take precedence)
            if key and key not in os.environ:
                os.environ[key] = value
                loaded[key] = value

    return loaded


_loaded = _load_env_file(ENV_FILE)

CREDENTIALS_PATH = Path(os.environ.get("SHEETS_API_CREDENTIALS", "credentials.json"))
TOKEN_PATH = Path(os.environ.get("SHEETS_API_TOKEN", "token.json"))
