"""Stateless tax and totals endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from ...api.errors import APIError
from ...core.config import Settings, get_settings
from ...core.logging import get_logger
from ...models.documents import CamelModel, Document, DocumentTotals, LineItem, LineItemCalc
from ...services.totals import (
    calculate_document_total,
    calculate_document_totals,
    calculate_line_item,
    is_inter_state,
    supply_state_code,
)
from ...services.words import OVERFLOW, number_to_words, round_rupees
from ...utils.formatting import format_currency

router = APIRouter(prefix="/compute")
logger = get_logger(__name__)


class LineItemRequest(CamelModel):
    item: LineItem
    is_inter_state: bool = False


class TotalsRequest(CamelModel):
    document: Document
    seller_state_code: Optional[str] = None


class TotalsResponse(CamelModel):
    is_inter_state: bool
    supply_state_code: Optional[str] = None
    breakdown: DocumentTotals
    total: float
    formatted_total: str
    amount_in_words: Optional[str] = None


class AmountRequest(CamelModel):
    amount: float


class WordsResponse(CamelModel):
    rupees: int
    words: str


class FormatResponse(CamelModel):
    formatted: str


def words_or_none(amount: float) -> Optional[str]:
    words = number_to_words(amount)
    if words == OVERFLOW:
        logger.warning("amount_in_words_overflow", amount=amount)
        return None
    return words


@router.post("/line-item", response_model=LineItemCalc)
async def compute_line_item(payload: LineItemRequest) -> LineItemCalc:
    return calculate_line_item(payload.item, payload.is_inter_state)


@router.post("/totals", response_model=TotalsResponse)
async def compute_totals(
    payload: TotalsRequest,
    settings: Settings = Depends(get_settings),
) -> TotalsResponse:
    document = payload.document
    seller_code = payload.seller_state_code or settings.seller_state_code
    inter_state = is_inter_state(document.place_of_supply, seller_code)
    total = calculate_document_total(document)
    return TotalsResponse(
        is_inter_state=inter_state,
        supply_state_code=supply_state_code(document.place_of_supply),
        breakdown=calculate_document_totals(document, inter_state),
        total=total,
        formatted_total=format_currency(total),
        amount_in_words=words_or_none(total),
    )


@router.post("/words", response_model=WordsResponse)
async def compute_words(payload: AmountRequest) -> WordsResponse:
    words = number_to_words(payload.amount)
    if words == OVERFLOW:
        raise APIError(
            code="AMOUNT_OUT_OF_RANGE",
            message="Amount cannot be expressed in words",
            status_code=422,
            details={"amount": payload.amount},
        )
    return WordsResponse(rupees=round_rupees(payload.amount), words=words)


@router.post("/format", response_model=FormatResponse)
async def compute_format(payload: AmountRequest) -> FormatResponse:
    return FormatResponse(formatted=format_currency(payload.amount))
