import logging
import traceback

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from cardledger.api.v1.deps import get_activity_reporter, get_transfer_service
from cardledger.core.exceptions import TransferErrorCode
from cardledger.schemas.transaction_schema import TransferIn, TransferResult
from cardledger.schemas.user_schema import TopUserOut
from cardledger.services.activity_service import ActivityReporter
from cardledger.services.transfer_service import TransferService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/transactions", tags=["transactions"])

ERROR_STATUS = {
    TransferErrorCode.VALIDATION_ERROR: 422,
    TransferErrorCode.CARD_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    TransferErrorCode.INSUFFICIENT_FUNDS: status.HTTP_400_BAD_REQUEST,
}


@router.post("/transfer", response_model=TransferResult)
async def transfer(
        body: TransferIn,
        tx_service: TransferService = Depends(get_transfer_service),
):
    try:
        result = await tx_service.transfer(body.source, body.destination, body.amount)
    except Exception as e:
        logger.error(f"Internal Server Error in transfer: {e}\n{traceback.format_exc()}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="An unknown error occurred.")

    if not result.ok:
        return JSONResponse(status_code=ERROR_STATUS[result.error], content=result.model_dump(mode="json"))
    return result


@router.get("/top-users", response_model=list[TopUserOut])
async def top_users(reporter: ActivityReporter = Depends(get_activity_reporter)):
    try:
        return await reporter.top_users()
    except Exception as e:
        logger.error(f"Error fetching top users: {e}\n{traceback.format_exc()}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Failed to fetch top users.")
