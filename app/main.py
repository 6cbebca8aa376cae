from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.common.error_handlers import register_error_handlers
from app.core.config import settings
from app.core.database import init_db
from app.logger_config import logger
from app.api.v1 import (
    branches,
    ledger,
    opening_balances,
    parties,
    payments,
    purchases,
    returns,
    sales,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"{settings.APP_NAME} started ({settings.APP_ENV})")
    yield


app = FastAPI(title=settings.APP_NAME, version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Register API routers
app.include_router(parties.router, prefix="/api/v1/parties", tags=["parties"])
app.include_router(branches.router, prefix="/api/v1/branches", tags=["branches"])
app.include_router(sales.router, prefix="/api/v1/sales", tags=["sales"])
app.include_router(
    purchases.router, prefix="/api/v1/purchases", tags=["purchases"])
app.include_router(
    payments.router, prefix="/api/v1/payments", tags=["payments"])
app.include_router(returns.router, prefix="/api/v1/returns", tags=["returns"])
app.include_router(
    opening_balances.router, prefix="/api/v1/opening-balances", tags=["opening balances"])
app.include_router(ledger.router, prefix="/api/v1", tags=["ledger"])


@app.get("/")
def read_root():
    return {"message": f"Welcome to the {settings.APP_NAME} APIs!"}
