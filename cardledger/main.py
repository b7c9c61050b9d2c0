from fastapi import FastAPI
from contextlib import asynccontextmanager
from cardledger.api.v1 import routers
from cardledger.core.logging_config import setup_logging
from cardledger.db.session import connect_db_pool, close_db_pool

setup_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    await connect_db_pool()
    yield
    await close_db_pool()

app = FastAPI(
    title="Card Ledger API",
    description="Card-to-card transfers and a recent-activity leaderboard",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(routers.router)

@app.get("/")
async def root():
    return {"message": "Welcome to Card Ledger API"}
