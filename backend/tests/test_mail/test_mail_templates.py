"""Tests for invitation e-mail rendering."""

from datetime import date

import pytest

from app.mail.templates import DEFAULT_FROM_ADDRESS, render_invitation_email
from app.models.couple import CoupleProfile
from app.models.guest import Guest


@pytest.fixture
def couple() -> CoupleProfile:
    return CoupleProfile(
        groom_name="陳大文",
        bride_name="林小美",
        wedding_date=date(2025, 6, 1),
        wedding_time="18:00",
        wedding_location="台北",
        wedding_theme="現代簡約",
    )


@pytest.fixture
def guest() -> Guest:
    return Guest(name="王小明", relationship="朋友", email="xm@example.com")


def test_headers(couple: CoupleProfile, guest: Guest):
    message = render_invitation_email(couple, guest, "內容", "wedding@example.com")

    assert message["Subject"] == "婚禮邀請 - 陳大文 & 林小美"
    assert "wedding@example.com" in message["From"]
    assert "陳大文 & 林小美" in message["From"]
    assert "xm@example.com" in message["To"]


def test_plain_and_html_parts(couple: CoupleProfile, guest: Guest):
    message = render_invitation_email(couple, guest, "第一段\n第二段 <b>", "wedding@example.com")

    plain = message.get_body(preferencelist=("plain",)).get_content()
    html = message.get_body(preferencelist=("html",)).get_content()

    assert "第一段\n第二段 <b>" in plain
    assert "第一段<br>" in html
    assert "&lt;b&gt;" in html
    assert "2025-06-01 18:00" in html
    assert "台北" in html


def test_default_sender(couple: CoupleProfile, guest: Guest):
    message = render_invitation_email(couple, guest, "內容", "")
    assert DEFAULT_FROM_ADDRESS in message["From"]
