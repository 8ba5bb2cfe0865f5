"""
Special tax and stamp tax routes.

Listings accept ``casinoId``, ``startDate`` and ``endDate`` filters; dates may
be given as ``dd/mm/yyyy`` or ``yyyy-mm-dd``.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import ValidationError

from casino_registry.api.deps import CurrentUserDep, PaginationDep, SessionDep
from casino_registry.core.errors import from_pydantic
from casino_registry.schemas.common import MessageResponse, Page
from casino_registry.schemas.tax import (
    SpecialTaxCreate,
    SpecialTaxResponse,
    SpecialTaxUpdate,
    StampTaxCreate,
    StampTaxResponse,
    StampTaxUpdate,
    TaxFilter,
)
from casino_registry.services.tax_service import SpecialTaxService, StampTaxService

special_taxes_router = APIRouter(prefix="/special-taxes", tags=["special-taxes"])
stamp_taxes_router = APIRouter(prefix="/stamp-taxes", tags=["stamp-taxes"])


def get_tax_filter(
    casino_filter: Annotated[Optional[str], Query(alias="casinoId")] = None,
    start_date: Annotated[Optional[str], Query(alias="startDate")] = None,
    end_date: Annotated[Optional[str], Query(alias="endDate")] = None,
) -> TaxFilter:
    try:
        return TaxFilter(casino_id=casino_filter, start_date=start_date, end_date=end_date)
    except ValidationError as e:
        raise from_pydantic(e) from e


TaxFilterDep = Annotated[TaxFilter, Depends(get_tax_filter)]


# Special taxes

@special_taxes_router.get("", response_model=Page[SpecialTaxResponse])
def list_special_taxes(
    current_user: CurrentUserDep,
    session: SessionDep,
    filters: TaxFilterDep,
    pagination: PaginationDep,
) -> Page[SpecialTaxResponse]:
    taxes, meta = SpecialTaxService(session).get_all(filters, pagination)
    return Page[SpecialTaxResponse](
        data=[SpecialTaxResponse.model_validate(t) for t in taxes],
        pagination=meta,
    )


@special_taxes_router.post("", response_model=SpecialTaxResponse, status_code=status.HTTP_201_CREATED)
def create_special_tax(
    current_user: CurrentUserDep,
    tax_in: SpecialTaxCreate,
    session: SessionDep,
) -> SpecialTaxResponse:
    """
    Declare a casino's gaming results for one day.

    Raises:
        NotFound: If the casino does not exist
        Conflict: If the casino already declared that day
    """
    tax = SpecialTaxService(session).create(tax_in, user_id=current_user.id)
    return SpecialTaxResponse.model_validate(tax)


@special_taxes_router.get("/{tax_id}", response_model=SpecialTaxResponse)
def get_special_tax(current_user: CurrentUserDep, tax_id: str, session: SessionDep) -> SpecialTaxResponse:
    return SpecialTaxResponse.model_validate(SpecialTaxService(session).get(tax_id))


@special_taxes_router.patch("/{tax_id}", response_model=SpecialTaxResponse)
def update_special_tax(
    current_user: CurrentUserDep,
    tax_id: str,
    tax_in: SpecialTaxUpdate,
    session: SessionDep,
) -> SpecialTaxResponse:
    return SpecialTaxResponse.model_validate(SpecialTaxService(session).update(tax_id, tax_in))


@special_taxes_router.delete("/{tax_id}", response_model=MessageResponse)
def delete_special_tax(current_user: CurrentUserDep, tax_id: str, session: SessionDep) -> MessageResponse:
    SpecialTaxService(session).delete(tax_id)
    return MessageResponse(message="Special tax deleted successfully")


# Stamp taxes

@stamp_taxes_router.get("", response_model=Page[StampTaxResponse])
def list_stamp_taxes(
    current_user: CurrentUserDep,
    session: SessionDep,
    filters: TaxFilterDep,
    pagination: PaginationDep,
) -> Page[StampTaxResponse]:
    taxes, meta = StampTaxService(session).get_all(filters, pagination)
    return Page[StampTaxResponse](
        data=[StampTaxResponse.model_validate(t) for t in taxes],
        pagination=meta,
    )


@stamp_taxes_router.get("/casino/{casino_id}", response_model=Page[StampTaxResponse])
def list_casino_stamp_taxes(
    current_user: CurrentUserDep,
    casino_id: str,
    session: SessionDep,
    filters: TaxFilterDep,
    pagination: PaginationDep,
) -> Page[StampTaxResponse]:
    taxes, meta = StampTaxService(session).get_for_casino(casino_id, filters, pagination)
    return Page[StampTaxResponse](
        data=[StampTaxResponse.model_validate(t) for t in taxes],
        pagination=meta,
    )


@stamp_taxes_router.post("", response_model=StampTaxResponse, status_code=status.HTTP_201_CREATED)
def create_stamp_tax(
    current_user: CurrentUserDep,
    tax_in: StampTaxCreate,
    session: SessionDep,
) -> StampTaxResponse:
    tax = StampTaxService(session).create(tax_in, user_id=current_user.id)
    return StampTaxResponse.model_validate(tax)


@stamp_taxes_router.get("/{tax_id}", response_model=StampTaxResponse)
def get_stamp_tax(current_user: CurrentUserDep, tax_id: str, session: SessionDep) -> StampTaxResponse:
    return StampTaxResponse.model_validate(StampTaxService(session).get(tax_id))


@stamp_taxes_router.patch("/{tax_id}", response_model=StampTaxResponse)
def update_stamp_tax(
    current_user: CurrentUserDep,
    tax_id: str,
    tax_in: StampTaxUpdate,
    session: SessionDep,
) -> StampTaxResponse:
    return StampTaxResponse.model_validate(StampTaxService(session).update(tax_id, tax_in))


@stamp_taxes_router.delete("/{tax_id}", response_model=MessageResponse)
def delete_stamp_tax(current_user: CurrentUserDep, tax_id: str, session: SessionDep) -> MessageResponse:
    StampTaxService(session).delete(tax_id)
    return MessageResponse(message="Stamp tax deleted successfully")
