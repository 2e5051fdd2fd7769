import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from paybridge.core.config import Settings, settings as default_settings
from paybridge.api.v1.api import router as api_v1_router
from paybridge.services.payments.signature import SignatureVerifier
from paybridge.services.pos.factory import get_pos_adapter
from paybridge.services.reconciliation.dispatcher import ReconciliationDispatcher
from paybridge.services.status.store import PaymentStatusStore

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, pos=None) -> FastAPI:
    settings = settings or default_settings
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="PayMongo POS Bridge", version="0.1.0")

    # everything the routes share is built here and dies with the app
    app.state.settings = settings
    app.state.verifier = SignatureVerifier(tolerance=settings.WEBHOOK_TOLERANCE_SECONDS)
    app.state.store = PaymentStatusStore()
    app.state.pos = pos or get_pos_adapter(settings)
    app.state.dispatcher = ReconciliationDispatcher(
        app.state.pos,
        terminal_statuses=settings.POS_TERMINAL_STATUSES,
        max_attempts=settings.POS_MAX_ATTEMPTS,
    )

    if not settings.webhook_secret_configured:
        logger.error("PAYMONGO_WEBHOOK_SECRET is not set, every webhook delivery will be rejected")

    # set up CORS so the POS frontend can talk to us
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS or ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/health")
    def health(request: Request):
        state = request.app.state
        return {
            "status": "ok",
            "env": state.settings.APP_ENV,
            "tracked_sources": len(state.store),
            "pending_dispatch_retries": len(state.dispatcher.pending_retries),
            "webhook_secret_configured": state.settings.webhook_secret_configured,
            "pos": state.pos.health_check(),
        }

    return app


app = create_app()
