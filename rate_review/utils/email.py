"""이메일 발송 유틸리티 — Brevo SMTP (aiosmtplib).

SMTP 설정은 config.py의 SMTP_* 환경 변수로 관리.
가입 확인 링크 메일 본문도 여기서 만든다.
"""

from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape
from urllib.parse import urlencode

import aiosmtplib

from rate_review.config import settings


async def send_email(
    to: str,
    subject: str,
    html: str,
    text: str | None = None,
) -> None:
    """이메일 발송.

    Args:
        to: 수신자 이메일 주소
        subject: 제목
        html: HTML 본문
        text: 플레인텍스트 본문 (없으면 생략)
    """
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = f"{settings.SMTP_FROM_NAME} <{settings.SMTP_FROM_EMAIL}>"
    msg["To"] = to

    if text:
        msg.attach(MIMEText(text, "plain", "utf-8"))
    msg.attach(MIMEText(html, "html", "utf-8"))

    await aiosmtplib.send(
        msg,
        hostname=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        username=settings.SMTP_USER,
        password=settings.SMTP_PASSWORD,
        start_tls=True,
    )


def build_confirmation_link(token: str) -> str:
    """가입 확인 콜백 URL 생성 — 토큰만 퍼센트 인코딩해 싣는다."""
    return f"{settings.APP_BASE_URL.rstrip('/')}/auth/callback?{urlencode({'token': token})}"


def build_confirmation_email(name: str, link: str) -> tuple[str, str]:
    """가입 확인 메일 본문 (html, text) 생성."""
    html = (
        f"<p>Hi {escape(name)},</p>"
        f"<p>Follow the link below to complete your registration.</p>"
        f'<p><a href="{link}">Confirm my email</a></p>'
        f"<p>If you did not sign up, you can ignore this message.</p>"
    )
    text = (
        f"Hi {name},\n\n"
        f"Follow the link below to complete your registration:\n{link}\n\n"
        f"If you did not sign up, you can ignore this message.\n"
    )
    return html, text
