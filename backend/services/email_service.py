"""
email_service.py — Account emails
Renders the confirmation and password reset messages carrying the user's
one-time code and hands them to the configured transport.
"""

from html import escape

from fastapi import Depends

from config import FRONTEND_URL
from mailer import MailMessage, get_mail_transport


class AuthEmail:
    def __init__(self, transport, frontend_url: str = FRONTEND_URL):
        self.transport = transport
        self.frontend_url = frontend_url.rstrip("/")

    def send_confirmation_email(self, name: str, email: str, token: str):
        html = (
            f"<p>Hola {escape(name)}, has creado tu cuenta en CashTrackr. ¡Ya está casi lista!</p>"
            "<p>Visita el siguiente enlace:</p>"
            f"<a href='{self.frontend_url}/auth/confirm-account'>Confirmar cuenta</a>"
            f"<p>E ingresa el siguiente código: <b>{token}</b></p>"
        )
        self.transport.send(MailMessage(
            to=email,
            subject="CashTrackr - Confirmación de tu cuenta",
            html=html,
            context={"name": name, "token": token, "kind": "confirmation"},
        ))

    def send_password_reset_token(self, name: str, email: str, token: str):
        html = (
            f"<p>Hola {escape(name)}, has solicitado reestablecer tu contraseña.</p>"
            "<p>Visita el siguiente enlace:</p>"
            f"<a href='{self.frontend_url}/auth/new-password'>Reestablecer contraseña</a>"
            f"<p>E ingresa el siguiente código: <b>{token}</b></p>"
        )
        self.transport.send(MailMessage(
            to=email,
            subject="CashTrackr - Reestablecer Contraseña",
            html=html,
            context={"name": name, "token": token, "kind": "password_reset"},
        ))


def get_auth_email(transport=Depends(get_mail_transport)) -> AuthEmail:
    return AuthEmail(transport)
