from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware

from core.config import get_settings
from core.errors import TransactionProcessingError, get_status_code
from core.logging import get_logger

from .models import BatchRequest, BatchResponse
from .service import TransactionProcessor

logger = get_logger(__name__)


def create_app(root_path: str = "") -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="Transaction Validation API",
        description="Validates transaction batches against user limits, IBAN checksums and BIN ranges",
        version=settings.app.version,
        root_path=root_path,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    processor = TransactionProcessor(config=settings.processing)

    @app.get("/health", tags=["System"])
    def health_check():
        return {"status": "healthy", "service": settings.app.name}

    @app.post("/batches", response_model=BatchResponse, tags=["Batches"])
    def process_batch(request: BatchRequest) -> BatchResponse:
        try:
            return processor.process_batch(request)
        except TransactionProcessingError as e:
            logger.warning("batch_rejected", error=e.message, **e.details)
            raise HTTPException(status_code=get_status_code(e), detail=e.message)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    server = get_settings().server
    uvicorn.run(app, host=server.host, port=server.port)
