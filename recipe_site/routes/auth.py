"""Authentication routes."""
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from ..application.services import AuthService
from ..config import LOGIN_PATH, SESSION_COOKIE, TEMPLATES_DIR
from ..dependencies import get_auth_service, get_csrf_token, get_root_path, template_globals

router = APIRouter()
templates = Jinja2Templates(directory=TEMPLATES_DIR, context_processors=[template_globals])

LOGIN_ERROR = "Invalid login attempt."


def render_login(request: Request, error: str | None = None, login: str = "", status_code: int = 200):
    return templates.TemplateResponse(
        request,
        "login.html",
        {
            "error": error,
            "login": login,
            "csrf_token": get_csrf_token(request)
        },
        status_code=status_code
    )


@router.get(LOGIN_PATH)
async def login_page(request: Request, auth_service: AuthService = Depends(get_auth_service)):
    """Show login page."""
    # If already logged in, redirect to homepage
    session_id = request.cookies.get(SESSION_COOKIE)
    if session_id and await auth_service.get_session(session_id):
        return RedirectResponse(url=get_root_path(request) + "/", status_code=302)

    return render_login(request)


@router.post(LOGIN_PATH)
async def login(
    request: Request,
    username_or_email: str = Form("", alias="Input.UsernameOrEmail"),
    password: str = Form("", alias="Input.Password"),
    remember_me: bool = Form(False, alias="Input.RememberMe"),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Process login form."""
    user = await auth_service.authenticate(username_or_email, password)

    if not user:
        return render_login(request, error=LOGIN_ERROR, login=username_or_email, status_code=401)

    session_id = await auth_service.create_session(user["id"], remember_me=remember_me)

    # Redirect to homepage with session cookie
    response = RedirectResponse(url=get_root_path(request) + "/", status_code=302)
    response.set_cookie(
        key=SESSION_COOKIE,
        value=session_id,
        httponly=True,
        samesite="lax",
        # Browser-session cookie unless the user asked to be remembered
        max_age=auth_service.session_hours(True) * 3600 if remember_me else None
    )
    return response


@router.get("/logout")
async def logout(request: Request, auth_service: AuthService = Depends(get_auth_service)):
    """Logout user."""
    session_id = request.cookies.get(SESSION_COOKIE)
    if session_id:
        await auth_service.delete_session(session_id)

    response = RedirectResponse(url=get_root_path(request) + LOGIN_PATH, status_code=302)
    response.delete_cookie(SESSION_COOKIE)
    return response
