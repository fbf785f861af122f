import logging
import sys
from typing import Optional

from src.config.settings import Settings, StartupResult, initialize_settings
from src.infrastructure.adapters.telegram.telegram_chat_sender import TelegramChatSender
from src.infrastructure.adapters.telegram.telegram_client import TelegramClient
from src.infrastructure.inbound.cloudevents import cloudevent_server
from src.responder.services.reply_dispatcher import BackgroundReplyDispatcher
from src.responder.services.responder import Responder

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_responder(settings: Settings) -> Responder:
    client = TelegramClient(
        token=settings.TELEGRAM_API_KEY,
        base_url=settings.TELEGRAM_API_BASE_URL,
        timeout=settings.SEND_TIMEOUT_SECONDS,
    )
    return Responder(BackgroundReplyDispatcher(TelegramChatSender(client)))


def prepare(startup: Optional[StartupResult] = None) -> Optional[Settings]:
    """
    Startup step: configuration must be ready before the server is wired.
    Returns None (after logging why) when it is not.
    """
    startup = startup or initialize_settings()
    if not startup.ready:
        logger.critical(f"Startup failed: {startup.error}")
        return None

    cloudevent_server.setup_dependencies(build_responder(startup.settings))
    return startup.settings


def main() -> None:
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    settings = prepare()
    if settings is None:
        sys.exit(1)

    logging.getLogger().setLevel(settings.LOG_LEVEL)
    logger.info(f"Listening on {settings.HOST}:{settings.PORT}")
    cloudevent_server.run_server(host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
