"""
Quick-action links built from a quote's customer contact fields.
"""

import re
from typing import Optional
from urllib.parse import quote

from .config import settings


def format_money(amount: float) -> str:
    """USD with thousands separators, e.g. $13,980.00."""
    if amount < 0:
        return f"-${abs(amount):,.2f}"
    return f"${amount:,.2f}"


def phone_digits(phone: str) -> str:
    """Digits and + only."""
    return re.sub(r"[^\d+]", "", phone or "")


def tel_link(phone: str) -> Optional[str]:
    digits = phone_digits(phone)
    return f"tel:{digits}" if digits else None


def mailto_link(email: str) -> Optional[str]:
    email = (email or "").strip()
    return f"mailto:{email}" if email else None


def sms_link(phone: str, total: float, company_name: str = None) -> Optional[str]:
    """Text-message link with the quoted total in the body."""
    digits = phone_digits(phone)
    if not digits:
        return None
    company = company_name or settings.COMPANY_NAME
    body = f"{company} estimate: {format_money(total)}"
    return f"sms:{digits}?&body={quote(body, safe='')}"


def quick_actions(estimate) -> dict:
    customer = estimate.customer
    return {
        "tel": tel_link(customer.phone),
        "mailto": mailto_link(customer.email),
        "sms": sms_link(customer.phone, estimate.totals.total),
        "total_display": format_money(estimate.totals.total),
    }
