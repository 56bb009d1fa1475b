"""
Main entry point for the arbitrage scanner HTTP service.
"""
import asyncio
import signal
import sys

# Try to use uvloop for better performance
try:
    import uvloop
    uvloop.install()
except ImportError:
    pass

from aiohttp import web

from config.settings import get_settings
from core.engine import ArbitrageService
from api.app import create_app
from utils.logger import configure_logging, get_logger

# Initialize logger
configure_logging()
logger = get_logger("main")


async def main():
    """Main application entry point."""
    settings = get_settings()

    logger.info(
        "Starting arbitrage scanner",
        version="1.0.0",
        debug=settings.DEBUG,
        pairs=len(settings.PAIRS),
        exchanges=settings.ENABLED_EXCHANGES
    )

    service = ArbitrageService(settings)
    app = create_app(service, static_dir=settings.STATIC_DIR)

    # aiohttp access log only in debug mode
    runner_kwargs = {} if settings.DEBUG else {"access_log": None}
    runner = web.AppRunner(app, **runner_kwargs)
    await runner.setup()

    site = web.TCPSite(runner, settings.HOST, settings.PORT)
    await site.start()

    logger.info("Server started", host=settings.HOST, port=settings.PORT)

    # Setup signal handlers for graceful shutdown
    shutdown_event = asyncio.Event()

    def signal_handler():
        logger.info("Shutdown signal received")
        shutdown_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            asyncio.get_running_loop().add_signal_handler(sig, signal_handler)
        except NotImplementedError:
            # Windows doesn't support add_signal_handler
            pass

    try:
        await shutdown_event.wait()
    except asyncio.CancelledError:
        pass
    finally:
        logger.info("Shutting down...")

        # Runs on_cleanup, which closes the service
        await runner.cleanup()

        logger.info("Shutdown complete")


def run():
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error("Fatal error", error=str(e), exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    run()
