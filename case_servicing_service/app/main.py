# FastAPI Application Entry Point
import logging
from fastapi import FastAPI

# Configuration and Observability
from case_servicing_service.app.config import settings
from case_servicing_service.app.observability import setup_opentelemetry, logger

# Initialize OpenTelemetry
setup_opentelemetry(service_name=settings.SERVICE_NAME_API)

# Import instrumentors after OTel SDK is initialized
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.pymongo import PymongoInstrumentor

# Database connection and startup data
from case_servicing_service.infrastructure.database.connection import connect_to_mongo, close_mongo_connection, get_db
from case_servicing_service.infrastructure.database.seed import ensure_indexes, seed_transaction_types

# API Routers
from case_servicing_service.app.api.v1.endpoints import health as health_router
from case_servicing_service.app.api.v1.endpoints import cases as cases_router
from case_servicing_service.app.api.v1.endpoints import interactions as interactions_router
from case_servicing_service.app.api.v1.endpoints import transactions as transactions_router

API_PREFIX = "/api/casemanagement/v1"

# --- FastAPI Application Instance ---
app = FastAPI(
    title="Case Servicing Service",
    description="Tracks customer service requests as cases, interactions and transactions.",
    version="1.0.0"
)

# --- Event Handlers for DB Connection & OTel Instrumentation ---
@app.on_event("startup")
async def startup_event():
    logger.info("FastAPI application startup...")
    try:
        await connect_to_mongo()
        async for db in get_db():
            await ensure_indexes(db)
            if settings.SEED_TRANSACTION_TYPES:
                await seed_transaction_types(db)
            break
        logger.info("MongoDB connection established, indexes ensured.")

        PymongoInstrumentor().instrument()
        logger.info("PyMongo instrumentation complete.")
    except Exception as e:
        logger.error(f"Failed during startup: {e}", exc_info=True)

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("FastAPI application shutdown...")
    close_mongo_connection()
    logger.info("MongoDB connection closed.")

FastAPIInstrumentor.instrument_app(app)
logger.info("FastAPI instrumentation complete.")

# Include API Routers
app.include_router(health_router.router, prefix=API_PREFIX)
app.include_router(cases_router.router, prefix=API_PREFIX)
app.include_router(interactions_router.router, prefix=API_PREFIX)
app.include_router(transactions_router.router, prefix=API_PREFIX)

logger.info("API routers included. Application setup complete.")

# To run: uvicorn case_servicing_service.app.main:app --reload --port 8000
