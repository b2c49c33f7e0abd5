"""
Server-rendered home page.
"""
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.templating import Jinja2Templates

from webid_demo.session_store import Session
from webid_demo.sessions import get_session

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
router = APIRouter()

HOME_MESSAGE = "Log in with Google, then list the demo bucket with federated AWS credentials."


@router.get("/")
def home(request: Request, session: Session = Depends(get_session)):
    return templates.TemplateResponse(
        request,
        "home.html",
        {"message": HOME_MESSAGE, "is_authenticated": session.is_authenticated},
    )
