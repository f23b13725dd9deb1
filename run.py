import logging
import os
import uvicorn


if __name__ == "__main__":
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    workers_env = os.getenv("UVICORN_WORKERS") or os.getenv("WEB_CONCURRENCY")
    workers = int(workers_env) if workers_env and workers_env.isdigit() else 1
    log_level = os.getenv("LOG_LEVEL", "info").lower()

    proxy_headers = (os.getenv("PROXY_HEADERS", "true").lower() in ("1", "true", "yes", "on"))
    forwarded_allow_ips = os.getenv("FORWARDED_ALLOW_IPS", "*")

    logging.basicConfig(level=log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    # Note: multiple workers spawn multiple processes; in-memory job state will not be shared.
    uvicorn.run(
        "streamcrush.main:app",
        host=host,
        port=port,
        reload=False,
        workers=workers,
        log_level=log_level,
        proxy_headers=proxy_headers,
        forwarded_allow_ips=forwarded_allow_ips,
    )
