"""
webid_demo web app: Google login -> STS web identity federation -> S3 listing.
Routers: /api (JSON), /auth (Google OAuth), / (home page); static assets at the web root.
Run: python -m webid_demo.main --port 8080 --base_url localhost:$port
"""
import argparse
import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from webid_demo import config
from webid_demo.api import router as api_router
from webid_demo.auth import router as auth_router
from webid_demo.errors import WebIdDemoError
from webid_demo.frontend import router as frontend_router
from webid_demo.session_store import InMemorySessionStore, SessionStore
from webid_demo.sessions import SessionMiddleware

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"

DEFAULT_ERROR_MESSAGE = "Something went wrong"


def resolve_base_url(base_url: str, port: int) -> str:
    """Substitute the literal $port placeholder with the bound port."""
    return base_url.replace("$port", str(port))


async def handle_error(request: Request, exc: Exception) -> JSONResponse:
    """Error boundary: log, then 500 with the error's message when it has one."""
    logger.error("Request %s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse({"message": str(exc) or DEFAULT_ERROR_MESSAGE}, status_code=500)


def create_app(
    base_url: str | None = None,
    session_store: SessionStore | None = None,
    session_secret: str = config.SESSION_SECRET,
) -> FastAPI:
    app = FastAPI(title="AWS Web Identity Demo", version="0.1.0")
    app.state.base_url = base_url or resolve_base_url(config.DEFAULT_BASE_URL, config.DEFAULT_PORT)
    app.state.session_store = session_store if session_store is not None else InMemorySessionStore()

    app.add_middleware(SessionMiddleware, store=app.state.session_store, secret=session_secret)
    app.add_exception_handler(WebIdDemoError, handle_error)
    app.add_exception_handler(Exception, handle_error)

    @app.get("/health")
    def health():
        """Health check endpoint."""
        return {"status": "ok", "service": "webid_demo"}

    app.include_router(api_router, prefix="/api", tags=["api"])
    app.include_router(auth_router, prefix="/auth", tags=["auth"])
    app.include_router(frontend_router, tags=["frontend"])
    app.mount("/", StaticFiles(directory=str(STATIC_DIR)), name="static")
    return app


app = create_app()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="AWS web identity federation demo with Google login")
    parser.add_argument("-P", "--port", type=int, default=config.DEFAULT_PORT, help="A port to bind to")
    parser.add_argument(
        "-H",
        "--base_url",
        default=config.DEFAULT_BASE_URL,
        help="Publicly routable hostname of app, needed for oauth redirect urls",
    )
    parser.add_argument("--host", default="0.0.0.0", help="Interface to bind to")
    parser.add_argument("--log-level", default="info", choices=["debug", "info", "warning", "error"])
    return parser.parse_args(argv)


def cli(argv: list[str] | None = None) -> None:
    import uvicorn

    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    base_url = resolve_base_url(args.base_url, args.port)
    logger.info("Using port %d", args.port)
    logger.info("Using base url %s", base_url)

    # uvicorn logs a failed bind and exits with status 1
    uvicorn.run(create_app(base_url=base_url), host=args.host, port=args.port, log_level=args.log_level)


if __name__ == "__main__":
    cli()
