"""ms_account REST API: 4 endpoints, all scoped to one customer."""

from decimal import Decimal
from typing import Annotated

import redis.asyncio as aioredis
from fastapi import APIRouter, Depends, Path, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.ms_account.application.schemas import (
    AccountItem,
    AccountListResponse,
    CreateAccountRequest,
)
from src.ms_account.application.service import AccountApplicationService
from src.ms_account.domain.cache import parse_ttl
from src.ms_account.domain.models import Account
from src.ms_account.infrastructure.cache import RedisAccountCache
from src.ms_common.database import get_db_session
from src.ms_common.redis_client import get_redis
from src.ms_common.request_context import current_request_context
from src.ms_common.response import ApiResponse, success_response

router = APIRouter(prefix="/accounts", tags=["accounts"])

_CACHE_TTL = parse_ttl(settings.CACHE_TTL)


async def bind_customer_id(
    customer_id: Annotated[str, Path(min_length=1, max_length=64)],
) -> str:
    """Record the path customer id in the request context for logs and errors."""
    current_request_context().set(customer_id)
    return customer_id


async def get_account_service(
    redis: Annotated[aioredis.Redis, Depends(get_redis)],
) -> AccountApplicationService:
    return AccountApplicationService(cache=RedisAccountCache(redis, _CACHE_TTL))


CustomerId = Annotated[str, Depends(bind_customer_id)]
Service = Annotated[AccountApplicationService, Depends(get_account_service)]
Db = Annotated[AsyncSession, Depends(get_db_session)]


def _with_request_id(resp: ApiResponse, request: Request) -> ApiResponse:
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{customer_id}")
async def get_accounts(
    customer_id: CustomerId,
    service: Service,
    db: Db,
    request: Request,
) -> ApiResponse:
    accounts = await service.get_accounts_by_customer_id(db, customer_id)
    data = AccountListResponse(
        customer_id=customer_id,
        items=[AccountItem.from_domain(a) for a in accounts],
    )
    return _with_request_id(success_response(data.model_dump()), request)


@router.post("/{customer_id}", status_code=status.HTTP_201_CREATED)
async def create_account(
    body: CreateAccountRequest,
    customer_id: CustomerId,
    service: Service,
    db: Db,
    request: Request,
) -> ApiResponse:
    account = Account(iban=body.iban, customer_id=customer_id, balance=body.balance)
    created = await service.create_account(db, account, customer_id)
    data = AccountItem.from_domain(created)
    return _with_request_id(success_response(data.model_dump()), request)


@router.put("/{customer_id}/update")
async def update_account(
    customer_id: CustomerId,
    service: Service,
    db: Db,
    request: Request,
    iban: str = Query(..., min_length=1, description="IBAN of the account to update"),
    balance: Decimal = Query(
        ..., gt=0, max_digits=19, decimal_places=2,
        description="New balance, must be greater than 0",
    ),
) -> ApiResponse:
    stored = await service.update_account(db, iban, balance, customer_id)
    data = {"iban": iban, "balance": str(stored)}
    return _with_request_id(success_response(data), request)


@router.delete("/{customer_id}/delete/{iban}")
async def delete_account(
    customer_id: CustomerId,
    service: Service,
    db: Db,
    request: Request,
    iban: Annotated[str, Path(min_length=1)],
) -> ApiResponse:
    await service.delete_account(db, iban, customer_id)
    return _with_request_id(success_response({"iban": iban}), request)
