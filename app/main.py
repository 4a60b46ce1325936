import logging
from typing import Optional
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from app.config import Settings, get_settings
from app.api.routes import webhook
from app.integrations.gatekeeper import AnalysisForwarder
from app.integrations.github import EnrichmentProvider, build_enrichment_provider
from app.models.api_responses import HealthResponse
from app.services.pipeline import WebhookPipeline
from app.services.result_buffer import ResultBuffer

settings = get_settings()

# Configure application logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Set log level for app modules
logger = logging.getLogger("app")
logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)

CORS_ORIGINS = ["*"]
CORS_METHODS = ["GET", "POST", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "X-API-KEY"]
PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": ", ".join(CORS_METHODS),
    "Access-Control-Allow-Headers": ", ".join(CORS_HEADERS),
}


def create_app(
    settings: Optional[Settings] = None,
    *,
    enrichment: Optional[EnrichmentProvider] = None,
    forwarder: Optional[AnalysisForwarder] = None,
    result_buffer: Optional[ResultBuffer] = None,
) -> FastAPI:
    """
    Build the webhook service.

    Collaborators default to the ones described by ``settings``; pass them
    explicitly to wire fakes or alternative implementations.
    """
    settings = settings or get_settings()
    result_buffer = result_buffer or ResultBuffer(capacity=settings.results_capacity)
    pipeline = WebhookPipeline(
        enrichment=enrichment or build_enrichment_provider(settings),
        forwarder=forwarder or AnalysisForwarder.from_settings(settings),
        result_buffer=result_buffer,
    )

    app = FastAPI(
        title=settings.app_name,
        description="GitHub pull request webhook relay for the AI Gatekeeper",
        version="0.1.0",
    )
    app.state.result_buffer = result_buffer
    app.state.pipeline = pipeline

    # Inner layer: CORS headers on simple requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    @app.middleware("http")
    async def short_circuit_options(request: Request, call_next):
        # Outermost layer: every OPTIONS request, preflight or not, gets a 200
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=PREFLIGHT_HEADERS)
        return await call_next(request)

    app.include_router(webhook.router, tags=["Webhook"])

    @app.get("/")
    async def root():
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": "0.1.0",
            "endpoints": {
                "webhook": "/webhook",
                "results": "/results",
                "reports": "/results/reports",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        return HealthResponse(
            github_token_configured=bool(settings.github_token),
            gatekeeper_url=settings.gatekeeper_url,
        )

    return app


app = create_app(settings)
