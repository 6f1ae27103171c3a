"""Metrics API routes."""

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from accounthub.domain.services.account_metrics_service import AccountMetricsService
from accounthub.infrastructure.api.schemas import AccountMetricsResponse, ErrorResponse
from accounthub.infrastructure.persistence.database import get_db_session

router = APIRouter()


@router.get(
    "/accounts",
    status_code=status.HTTP_200_OK,
    response_model=AccountMetricsResponse,
    responses={400: {"model": ErrorResponse, "description": "No bound given"}},
)
async def get_account_metrics(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    greater_than: Decimal | None = Query(None, description="Exclusive lower bound"),
    less_than: Decimal | None = Query(None, description="Exclusive upper bound"),
) -> AccountMetricsResponse:
    """Count accounts whose balance is within the given exclusive bounds."""
    metrics = await AccountMetricsService(session).get_account_metrics(
        greater_than=greater_than, less_than=less_than
    )
    return AccountMetricsResponse.model_validate(metrics)
