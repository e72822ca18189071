# ---------- routes/auth_routes.py ----------
"""
Account routes: registration with emailed confirmation codes, login,
password recovery and the authenticated profile endpoints.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from auth import hash_password, verify_password, create_token, generate_token, get_current_user
from database import get_db
from limiter import limiter
from mailer import MailDeliveryError
from models.user import User
from schemas import (
    CheckPasswordRequest,
    CreateAccountRequest,
    EmailRequest,
    LoginRequest,
    NewPasswordRequest,
    TokenRequest,
    UpdatePasswordRequest,
    UpdateUserRequest,
    UserOut,
)
from services.email_service import AuthEmail, get_auth_email
from services.user_service import UserService
from validation import SERVER_ERROR, invalid_param, parse_body

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"], dependencies=[Depends(limiter)])


def _server_error():
    return HTTPException(status_code=500, detail=SERVER_ERROR)


def validate_reset_token(token: str = Path()) -> str:
    if len(token) != 6:
        raise invalid_param("token", token, "Token no válido")
    return token


# ── Public routes ─────────────────────────────────────────────────
@router.post("/create-account", status_code=201)
def create_account(
    db: Session = Depends(get_db),
    mail: AuthEmail = Depends(get_auth_email),
    body: CreateAccountRequest = Depends(parse_body(CreateAccountRequest)),
):
    """Register an unconfirmed account and email its confirmation code."""
    if UserService.get_by_email(db, body.email):
        raise HTTPException(status_code=409, detail="Este correo ya está en uso")

    user = UserService.create(
        db,
        name=body.name,
        email=body.email,
        hashed_password=hash_password(body.password),
        token=generate_token(),
    )
    if user is None:
        raise _server_error()

    try:
        mail.send_confirmation_email(name=user.name, email=user.email, token=user.token)
    except MailDeliveryError as e:
        logger.error(f"Confirmation email to {user.email} failed: {e}")
        raise _server_error()

    return "Cuenta creada"


@router.post("/confirm-account")
def confirm_account(
    db: Session = Depends(get_db),
    body: TokenRequest = Depends(parse_body(TokenRequest)),
):
    user = UserService.get_by_token(db, body.token)
    if not user:
        raise HTTPException(status_code=401, detail="Token no válido")

    if not UserService.confirm(db, user):
        raise _server_error()
    logger.info(f"Account {user.id} confirmed")
    return "Cuenta confirmada"


@router.post("/login")
def login(db: Session = Depends(get_db), body: LoginRequest = Depends(parse_body(LoginRequest))):
    """Checks run in order: account exists, is confirmed, password matches."""
    user = UserService.get_by_email(db, body.email)
    if not user:
        raise HTTPException(status_code=404, detail="Este usuario no existe")

    if not user.confirmed:
        raise HTTPException(status_code=403, detail="La cuenta no ha sido confirmada")

    if not verify_password(body.password, user.password):
        logger.warning(f"Failed login for user {user.id}")
        raise HTTPException(status_code=401, detail="Contraseña incorrecta")

    return create_token(user.id)


@router.post("/forgot-password")
def forgot_password(
    db: Session = Depends(get_db),
    mail: AuthEmail = Depends(get_auth_email),
    body: EmailRequest = Depends(parse_body(EmailRequest)),
):
    user = UserService.get_by_email(db, body.email)
    if not user:
        raise HTTPException(status_code=404, detail="Este usuario no existe")

    if not UserService.set_token(db, user, generate_token()):
        raise _server_error()

    try:
        mail.send_password_reset_token(name=user.name, email=user.email, token=user.token)
    except MailDeliveryError as e:
        logger.error(f"Password reset email to {user.email} failed: {e}")
        raise _server_error()

    return "Revisa tu correo para instrucciones"


@router.post("/validate-token")
def validate_token(
    db: Session = Depends(get_db),
    body: TokenRequest = Depends(parse_body(TokenRequest)),
):
    if not UserService.get_by_token(db, body.token):
        raise HTTPException(status_code=404, detail="Token no válido")
    return "Token válido, asigna una nueva contraseña"


@router.post("/reset-password/{token}")
def reset_password_with_token(
    token: str = Depends(validate_reset_token),
    db: Session = Depends(get_db),
    body: NewPasswordRequest = Depends(parse_body(NewPasswordRequest)),
):
    user = UserService.get_by_token(db, token)
    if not user:
        raise HTTPException(status_code=404, detail="Token no válido")

    if not UserService.reset_password(db, user, hash_password(body.password)):
        raise _server_error()
    return "Su contraseña ha sido modificada"


# ── Authenticated routes ──────────────────────────────────────────
@router.get("/user", response_model=UserOut)
def current_user(user: User = Depends(get_current_user)):
    return user


@router.put("/user")
def update_user(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    body: UpdateUserRequest = Depends(parse_body(UpdateUserRequest)),
):
    existing = UserService.get_by_email(db, body.email)
    if existing and existing.id != user.id:
        raise HTTPException(status_code=409, detail="Este correo ya está en uso")

    if not UserService.update_profile(db, user, name=body.name, email=body.email):
        raise _server_error()
    return "Perfil actualizado"


@router.post("/update-password")
def update_current_user_password(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    body: UpdatePasswordRequest = Depends(parse_body(UpdatePasswordRequest)),
):
    if not verify_password(body.current_password, user.password):
        raise HTTPException(status_code=401, detail="La contraseña actual es incorrecta")

    if not UserService.set_password(db, user, hash_password(body.password)):
        raise _server_error()
    return "Contraseña actualizada"


@router.post("/check-password")
def check_password(
    user: User = Depends(get_current_user),
    body: CheckPasswordRequest = Depends(parse_body(CheckPasswordRequest)),
):
    if not verify_password(body.password, user.password):
        raise HTTPException(status_code=401, detail="La contraseña es incorrecta")
    return "Contraseña correcta"
