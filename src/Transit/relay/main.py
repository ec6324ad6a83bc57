import logging
from typing import Optional
from urllib.parse import quote

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from Transit.config import RelaySettings, configure_logging, load_relay_settings

logger = logging.getLogger(__name__)

KEY_PARAM = "key"
REDACTED = "***"


def _redact(text: str, secret: Optional[str]) -> str:
    if secret:
        for form in (secret, quote(secret, safe="")):
            text = text.replace(form, REDACTED)
    return text


def _proxy_failed(detail: str, secret: Optional[str]) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": "Proxy failed", "detail": _redact(detail, secret)},
    )


def _parse_target(target: str) -> httpx.URL:
    url = httpx.URL(target)
    if url.scheme not in ("http", "https") or not url.host:
        raise ValueError(f"Invalid target URL: {target}")
    return url


def create_app(
    settings: RelaySettings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the relay app around an explicit settings object.

    `transport` is handed to the outbound httpx client; tests use it to stand
    in for the directions provider.
    """
    app = FastAPI(title="Transit Relay")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    secret = settings.maps_api_key

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/api/proxy")
    async def proxy(target: Optional[str] = None):
        if not target:
            return JSONResponse(status_code=400, content={"error": "Missing target URL"})

        if not secret:
            logger.error("GOOGLE_MAPS_KEY is not configured; refusing to forward")
            return _proxy_failed("GOOGLE_MAPS_KEY is not configured", secret)

        try:
            url = _parse_target(target).copy_set_param(KEY_PARAM, secret)
            logger.info(f"Forwarding request to {url.host}{url.path}")

            async with httpx.AsyncClient(transport=transport, timeout=settings.timeout_sec) as client:
                response = await client.get(url)
                data = response.json()

            # rendered here so bodies like NaN fail inside the envelope
            return JSONResponse(status_code=200, content=data)
        except Exception as e:
            detail = str(e) or e.__class__.__name__
            logger.error(f"Proxy error: {_redact(detail, secret)}")
            return _proxy_failed(detail, secret)

    return app


configure_logging()
app = create_app(load_relay_settings())


def main():
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
