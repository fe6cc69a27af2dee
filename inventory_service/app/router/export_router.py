from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from shared.core.database import get_db
from shared.core.auth import validate_current_token
from shared.core.schemas import ExportResponse
from shared.exporthelper import to_csv
from ..crud import export_crud as crud


router = APIRouter(
    prefix="/api/export",
    tags=["Export"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("/stock", response_model=ExportResponse)
def export_stock(db: Session = Depends(get_db)):
    return crud.export_stock(db)


@router.get("/transactions", response_model=ExportResponse)
def export_transactions(db: Session = Depends(get_db)):
    return crud.export_transactions(db)


@router.get("/stock.csv")
def export_stock_csv(db: Session = Depends(get_db)):
    export = crud.export_stock(db)
    return Response(
        content=to_csv(export),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'}
    )
