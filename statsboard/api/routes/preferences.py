from fastapi import APIRouter
from fastapi import Depends
from sqlalchemy.orm import Session

from statsboard.api.schemas.preferences import Layout
from statsboard.api.schemas.preferences import Preferences
from statsboard.api.schemas.preferences import PreferencesUpdate
from statsboard.db import get_db
from statsboard.services.preferences_service import get_layout
from statsboard.services.preferences_service import get_preferences
from statsboard.services.preferences_service import reset_layout
from statsboard.services.preferences_service import save_layout
from statsboard.services.preferences_service import update_preferences


router = APIRouter()


@router.get("/preferences/{login}", response_model=Preferences)
def read_preferences(login: str, db: Session = Depends(get_db)) -> Preferences:
    return get_preferences(db, login)


@router.put("/preferences/{login}", response_model=Preferences)
def write_preferences(
    login: str, payload: PreferencesUpdate, db: Session = Depends(get_db)
) -> Preferences:
    return update_preferences(db, login, payload)


@router.get("/layout/{login}", response_model=Layout)
def read_layout(login: str, db: Session = Depends(get_db)) -> Layout:
    return get_layout(db, login)


@router.put("/layout/{login}", response_model=Layout)
def write_layout(login: str, payload: Layout, db: Session = Depends(get_db)) -> Layout:
    return save_layout(db, login, payload)


@router.delete("/layout/{login}", status_code=204)
def delete_layout(login: str, db: Session = Depends(get_db)) -> None:
    """Forget the saved layout so the default section order applies again."""

    reset_layout(db, login)
