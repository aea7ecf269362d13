#!/usr/bin/env python3
import logging
import argparse
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request

from xtreamgate import __version__
from xtreamgate.api import router, CORS_HEADERS, register_error_handlers
from xtreamgate.config import load_config
from xtreamgate.core import XtreamGateway
from xtreamgate.models import AppConfig
from xtreamgate.services import SessionStore
from xtreamgate.sources import UpstreamClient

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_app(config: AppConfig, client: Optional[UpstreamClient] = None,
               session_store: Optional[SessionStore] = None) -> tuple[FastAPI, XtreamGateway]:
    """Create FastAPI app and gateway instance"""
    gateway_instance = XtreamGateway(config, client=client, session_store=session_store)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await gateway_instance.initialize()
        yield
        await gateway_instance.cleanup()

    app = FastAPI(
        title="XtreamGate",
        description="Tokenized playlist gateway for Xtream Codes providers",
        version=__version__,
        lifespan=lifespan
    )

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    app.state.gateway = gateway_instance

    register_error_handlers(app)
    app.include_router(router)

    return app, gateway_instance


def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(description="Xtream Codes tokenizing gateway")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to configuration file (defaults are used when omitted)"
    )
    parser.add_argument("--host", help="Override bind host")
    parser.add_argument("--port", type=int, help="Override bind port")

    args = parser.parse_args()

    try:
        config = load_config(args.config)

        if args.host:
            config.bind_host = args.host
        if args.port:
            config.bind_port = args.port

        logging.getLogger().setLevel(getattr(logging, config.log_level.upper()))

        app, gateway = create_app(config)

        logger.info(f"Starting server on {config.bind_host}:{config.bind_port}")
        logger.info("Sessions are held in memory and do not survive a restart")
        uvicorn.run(
            app,
            host=config.bind_host,
            port=config.bind_port,
            log_level=config.log_level.lower()
        )

    except FileNotFoundError as e:
        logger.error(f"Configuration error: {e}")
    except Exception as e:
        logger.error(f"Failed to start: {e}")
        raise


if __name__ == "__main__":
    main()
