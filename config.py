import os
import secrets

from pydantic import BaseModel


class Settings(BaseModel):
    """Configuration for the visualizer web app."""

    # Flask
    secret_key: str = ""
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = 5000

    # Logging
    log_level: str = "INFO"

    # Run defaults (used until the user picks endpoints)
    default_start: str = "A"
    default_end: str = "D"

    # Cap for /api/run so one request can't spin forever on a huge graph
    max_run_steps: int = 100_000

    # In-memory runs kept before the least recently used is dropped
    max_runs: int = 1000

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from DIJKSTRA_* environment variables."""
        return cls(
            secret_key=os.getenv("DIJKSTRA_SECRET_KEY") or secrets.token_hex(32),
            debug=os.getenv("DIJKSTRA_DEBUG", "false").lower() == "true",
            host=os.getenv("DIJKSTRA_HOST", "127.0.0.1"),
            port=int(os.getenv("DIJKSTRA_PORT", "5000")),
            log_level=os.getenv("DIJKSTRA_LOG_LEVEL", "INFO").upper(),
            default_start=os.getenv("DIJKSTRA_DEFAULT_START", "A"),
            default_end=os.getenv("DIJKSTRA_DEFAULT_END", "D"),
            max_run_steps=int(os.getenv("DIJKSTRA_MAX_RUN_STEPS", "100000")),
            max_runs=int(os.getenv("DIJKSTRA_MAX_RUNS", "1000")),
        )


# Global settings instance
settings = Settings.from_env()
