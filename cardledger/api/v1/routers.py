# cardledger/api/v1/routers.py
from fastapi import APIRouter
from cardledger.api.v1.endpoints import transactions

router = APIRouter()

router.include_router(transactions.router)
