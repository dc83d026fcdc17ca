import logging

from vctools.config import Settings, load_settings
from vctools.services.calculator_service import CalculatorService

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings):
    """Console logging, plus a file handler when VCTOOLS_LOG_FILE is set."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file, mode="a"))
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )


def create_service(settings: Settings | None = None) -> CalculatorService:
    """Entry point for a presentation layer: configured logging and a calculator service."""
    settings = settings or load_settings()
    configure_logging(settings)
    service = CalculatorService(memo_size=settings.memo_size)
    logger.info(
        f"VC tools engine ready: {len(service.tools)} calculators, memo size {settings.memo_size}"
    )
    return service
