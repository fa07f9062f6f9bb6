"""폼 필드 형식 검증 규칙.

Form field format rules shared by registration, admin account creation and
store creation. Every validator returns an error message, or an empty
string when the value is acceptable.

Rules:
    name     — 20~60자 (length in [20, 60])
    address  — 400자 이하 (length <= 400)
    password — 8~16자, 대문자 1개 이상, 특수문자 1개 이상
    email    — ``local@domain.tld`` 형식 (RFC-like pattern)
"""

import re
from typing import Callable

NAME_MIN_LENGTH: int = 20
NAME_MAX_LENGTH: int = 60
ADDRESS_MAX_LENGTH: int = 400
PASSWORD_MIN_LENGTH: int = 8
PASSWORD_MAX_LENGTH: int = 16

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
_UPPERCASE_PATTERN = re.compile(r"[A-Z]")
_SPECIAL_CHAR_PATTERN = re.compile(r"[!@#$%^&*(),.?\":{}|<>]")

# 흔한 이메일 도메인 오타 — Common misspellings of popular mail domains
COMMON_DOMAIN_TYPOS: dict[str, str] = {
    "gamil.com": "gmail.com",
    "gmial.com": "gmail.com",
    "gnail.com": "gmail.com",
    "gmal.com": "gmail.com",
    "gmil.com": "gmail.com",
    "hotmal.com": "hotmail.com",
    "hotmial.com": "hotmail.com",
    "hotmal.co": "hotmail.com",
    "yaho.com": "yahoo.com",
    "yahooo.com": "yahoo.com",
    "outlok.com": "outlook.com",
    "outloo.com": "outlook.com",
}


def validate_name(value: str) -> str:
    if len(value) < NAME_MIN_LENGTH or len(value) > NAME_MAX_LENGTH:
        return "Name must be between 20 and 60 characters"
    return ""


def validate_address(value: str) -> str:
    if len(value) > ADDRESS_MAX_LENGTH:
        return "Address must not exceed 400 characters"
    return ""


def validate_password(value: str) -> str:
    """비밀번호 규칙 검사 — 길이, 대문자, 특수문자 순으로 첫 위반만 보고."""
    if len(value) < PASSWORD_MIN_LENGTH or len(value) > PASSWORD_MAX_LENGTH:
        return "Password must be between 8 and 16 characters"
    if not _UPPERCASE_PATTERN.search(value):
        return "Password must include at least one uppercase letter"
    if not _SPECIAL_CHAR_PATTERN.search(value):
        return "Password must include at least one special character"
    return ""


def validate_email(value: str) -> str:
    if not EMAIL_PATTERN.match(value):
        return "Please enter a valid email address"
    return ""


def suggest_email(value: str) -> str | None:
    """도메인 오타가 있으면 교정된 주소를 반환합니다.

    Return the corrected address when the domain is a known misspelling
    (e.g. ``jane@gamil.com`` -> ``jane@gmail.com``), otherwise None.
    """
    if "@" not in value:
        return None
    local_part, domain = value.lower().rsplit("@", 1)
    corrected: str | None = COMMON_DOMAIN_TYPOS.get(domain)
    if corrected is None:
        return None
    return f"{local_part}@{corrected}"


VALIDATORS: dict[str, Callable[[str], str]] = {
    "name": validate_name,
    "address": validate_address,
    "password": validate_password,
    "email": validate_email,
}


def validate_field(field_name: str, value: str) -> str:
    """단일 필드 검증 — 규칙이 없는 필드는 통과."""
    validator = VALIDATORS.get(field_name)
    if validator is None:
        return ""
    return validator(value)


def validate_form(form_data: dict[str, str]) -> dict[str, str]:
    """폼 전체 검증 — 오류가 있는 필드만 담은 딕셔너리 반환.

    Validate every field in ``form_data`` and return ``{field: message}``
    for the fields that fail. An empty dict means the form is valid.
    """
    errors: dict[str, str] = {}
    for field_name, value in form_data.items():
        error: str = validate_field(field_name, value)
        if error:
            errors[field_name] = error
    return errors


def validate_registration_form(form_data: dict[str, str]) -> dict[str, str]:
    """가입 폼 검증 — 형식 규칙에 더해 이메일 도메인 오타도 거부."""
    errors: dict[str, str] = validate_form(form_data)
    email: str | None = form_data.get("email")
    if email and "email" not in errors:
        suggestion: str | None = suggest_email(email)
        if suggestion is not None:
            errors["email"] = f"Did you mean {suggestion}?"
    return errors
