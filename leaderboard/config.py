"""Runtime settings read from the environment (and an optional .env file)."""
import os

from dotenv import load_dotenv

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_DIR = os.path.dirname(BASE_DIR)

DEFAULT_PORT = 3000
DEFAULT_DRAIN_TIMEOUT = 10.0


class Settings:
    """Immutable bag of settings. Tests build one directly."""

    def __init__(
        self,
        port: int = DEFAULT_PORT,
        host: str = "0.0.0.0",
        db_path: str | None = None,
        static_dir: str | None = None,
        fallback_page: str = "index.html",
        drain_timeout: float | None = DEFAULT_DRAIN_TIMEOUT,
        log_level: str = "INFO",
    ):
        self._port = port
        self._host = host
        self._db_path = db_path or os.path.join(PROJECT_DIR, "leaderboard.db")
        self._static_dir = static_dir or os.path.join(PROJECT_DIR, "static")
        self._fallback_page = fallback_page
        self._drain_timeout = drain_timeout
        self._log_level = log_level.upper()

    @property
    def port(self) -> int:
        return self._port

    @property
    def host(self) -> str:
        return self._host

    @property
    def db_path(self) -> str:
        return self._db_path

    @property
    def static_dir(self) -> str:
        return self._static_dir

    @property
    def fallback_page(self) -> str:
        return self._fallback_page

    @property
    def fallback_path(self) -> str:
        return os.path.join(self._static_dir, self._fallback_page)

    @property
    def drain_timeout(self) -> float | None:
        return self._drain_timeout

    @property
    def log_level(self) -> str:
        return self._log_level


def _env_port(raw: str | None) -> int:
    try:
        port = int((raw or "").strip())
    except ValueError:
        return DEFAULT_PORT
    return port if 0 < port < 65536 else DEFAULT_PORT


def _env_timeout(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return DEFAULT_DRAIN_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_DRAIN_TIMEOUT
    # Zero or negative means wait for in-flight requests indefinitely.
    return value if value > 0 else None


def load_settings(env_file: str | None = None) -> Settings:
    """Build Settings from os.environ after loading the project .env."""
    load_dotenv(env_file or os.path.join(PROJECT_DIR, ".env"))
    env = os.environ
    return Settings(
        port=_env_port(env.get("PORT")),
        host=env.get("HOST", "0.0.0.0").strip() or "0.0.0.0",
        db_path=env.get("LEADERBOARD_DB_PATH", "").strip() or None,
        static_dir=env.get("STATIC_DIR", "").strip() or None,
        fallback_page=env.get("FALLBACK_PAGE", "index.html").strip() or "index.html",
        drain_timeout=_env_timeout(env.get("DRAIN_TIMEOUT")),
        log_level=env.get("LOG_LEVEL", "INFO").strip() or "INFO",
    )
