"""Process runner -- logging setup, uvicorn, exit codes."""
import contextlib
import logging
import sys

import uvicorn

from leaderboard.application.lifecycle import LifecyclePhase
from leaderboard.config import load_settings
from leaderboard.main import create_app


class LeaderboardServer(uvicorn.Server):
    """uvicorn server whose SIGTERM/SIGINT stop ends with a normal return.

    Stock uvicorn re-raises captured signals once serving is over, which
    kills the process with the signal instead of letting main() exit 0.
    The drain has already run by then, so the captured signals are dropped.
    """

    @contextlib.contextmanager
    def capture_signals(self):
        with super().capture_signals():
            yield
            self._captured_signals.clear()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def main() -> int:
    """Run the server. 0 after a graceful stop, 1 if it never came up.

    A bind failure makes uvicorn call sys.exit(1) itself.
    """
    settings = load_settings()
    configure_logging(settings.log_level)
    app = create_app(settings)

    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        lifespan="on",
        timeout_graceful_shutdown=settings.drain_timeout,
        log_config=None,
    )
    server = LeaderboardServer(config)
    server.run()

    if not server.started or app.state.lifecycle.phase is LifecyclePhase.FAILED:
        logging.getLogger("leaderboard.startup").error("Server failed to start")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
