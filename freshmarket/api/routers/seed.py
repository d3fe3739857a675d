from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from freshmarket.data.database import get_db
from freshmarket.data.seed import seed
from freshmarket.domain.schemas import MessageOut

router = APIRouter(tags=["seed"])


@router.post("/init-data", response_model=MessageOut)
def init_data(db: Session = Depends(get_db)):
    seed(db)
    return {"message": "Sample data initialized"}
