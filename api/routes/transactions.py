"""
api/routes/transactions.py
───────────────────────────
CRUD de transacciones de un usuario.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from api.dependencies import get_transaction_service
from api.schemas import TransactionIn, TransactionOut
from services.exceptions import ValidationError
from services.transaction_service import TransactionService

router = APIRouter(prefix="/users/{user_id}/transactions", tags=["transactions"])


@router.post("", response_model=TransactionOut, status_code=status.HTTP_201_CREATED)
def add_transaction(
    user_id: int,
    payload: TransactionIn,
    service: TransactionService = Depends(get_transaction_service),
):
    return TransactionOut.from_transaction(service.add(user_id, payload.to_input()))


@router.get("", response_model=list[TransactionOut])
def list_transactions(
    user_id: int,
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    service: TransactionService = Depends(get_transaction_service),
):
    if start is None and end is None:
        txs = service.list_by_user(user_id)
    elif start is None or end is None:
        raise ValidationError("Both start and end are required to filter by date.")
    else:
        txs = service.list_by_user_between(user_id, start, end)
    return [TransactionOut.from_transaction(t) for t in txs]


@router.get("/{transaction_id}", response_model=TransactionOut)
def get_transaction(
    user_id: int,
    transaction_id: int,
    service: TransactionService = Depends(get_transaction_service),
):
    return TransactionOut.from_transaction(service.get_by_id_for_user(transaction_id, user_id))


@router.put("/{transaction_id}", response_model=TransactionOut)
def update_transaction(
    user_id: int,
    transaction_id: int,
    payload: TransactionIn,
    service: TransactionService = Depends(get_transaction_service),
):
    updated = service.update(user_id, transaction_id, payload.to_input())
    return TransactionOut.from_transaction(updated)


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(
    user_id: int,
    transaction_id: int,
    service: TransactionService = Depends(get_transaction_service),
):
    service.delete(user_id, transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
