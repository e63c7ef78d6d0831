import logging

from cosmos_getting_started.settings import get_settings
from cosmos_getting_started.store import connect
from cosmos_getting_started.workflow import run_demo

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def main() -> int:
    """Run the demo. Failures are logged, the exit code is always 0."""
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    try:
        settings = get_settings()
        logging.getLogger().setLevel(settings.log_level)
        with connect(settings) as client:
            run_demo(client, settings)
    except Exception:
        logger.exception("Cosmos DB demo failed")
    return 0
