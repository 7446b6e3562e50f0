from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends

from api.report import actions
from api.responses import unwrap
from auth.context import RequestContext, get_request_context

router = APIRouter()


@router.get("/vat-return")
def get_vat_return(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    ctx: RequestContext = Depends(get_request_context),
):
    return unwrap(actions.get_vat_return_data(ctx, start_date, end_date))
