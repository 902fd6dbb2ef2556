# -*- coding: utf-8 -*-
"""
Oficina Manager - Main FastAPI Application
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from oficina.config import get_settings
from oficina.exceptions import OficinaError
from oficina.api import (
    auth_router, cars_router, stock_router, budgets_router, employees_router, payroll_router,
    finance_router, problems_router, audit_router, workshop_router, store_router,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events"""
    settings = get_settings()
    logger.info(f"Starting {settings.APP_NAME} {settings.APP_VERSION}...")
    logger.info(f"Preferences stored in {settings.DATA_DIR}")

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")


# Create FastAPI app
app = FastAPI(
    title="Oficina Manager",
    description="Gestão de funilaria e pintura: etapas de serviço, estoque, folha de pagamento e orçamentos",
    version=get_settings().APP_VERSION,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(OficinaError)
async def oficina_error_handler(request: Request, exc: OficinaError):
    """Domain errors become JSON responses with their status code"""
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "details": exc.details},
    )


# Include API routers
app.include_router(auth_router, prefix="/api")
app.include_router(cars_router, prefix="/api")
app.include_router(stock_router, prefix="/api")
app.include_router(budgets_router, prefix="/api")
app.include_router(employees_router, prefix="/api")
app.include_router(payroll_router, prefix="/api")
app.include_router(finance_router, prefix="/api")
app.include_router(problems_router, prefix="/api")
app.include_router(audit_router, prefix="/api")
app.include_router(workshop_router, prefix="/api")
app.include_router(store_router, prefix="/api")


# ==================== Health Check ====================

@app.get("/health", tags=["system"])
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "oficina-manager"}


# ==================== Run Server ====================

if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "oficina.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
