"""
Support Portal - FastAPI Backend

File manager plus support ticket desk with live chat notification.
"""
from portal.app import create_app
from portal.config import get_settings
from portal.utils.logger import get_logger

logger = get_logger(__name__)

app = create_app()


def run() -> None:
    """Start the server on the configured host/port"""
    import uvicorn

    settings = get_settings()
    logger.info(f"Server running on port {settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
