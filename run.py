"""
Uvicorn server runner with configurable logging.

Usage:
    python run.py

Environment variables (set in .env file):
    DEBUG=true - Enable debug logging
    PORT=3001 - Set server port (default: 3001)
    HOST=127.0.0.1 - Set server host (default: 127.0.0.1)
    GATEKEEPER_URL - Analysis endpoint (default: http://localhost:8080/api/analyze)
    GATEKEEPER_API_KEY - Sent as X-API-KEY to the analysis endpoint
    GITHUB_TOKEN - Enables PR diff/metadata enrichment
"""

import uvicorn
from app.config import get_settings

if __name__ == "__main__":
    # Load settings from .env file
    settings = get_settings()

    # Set log level based on DEBUG setting from .env
    log_level = "debug" if settings.debug else "info"

    print(f"Starting {settings.app_name} server...")
    print(f"Host: {settings.host}")
    print(f"Port: {settings.port}")
    print(f"Log Level: {log_level}")
    print(f"Debug Mode: {settings.debug}")
    print(f"Gatekeeper URL: {settings.gatekeeper_url}")
    print(f"GitHub enrichment: {'enabled' if settings.github_token else 'disabled'}")
    print(f"Webhook endpoint: http://{settings.host}:{settings.port}/webhook")

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=log_level,
        access_log=True,
    )
