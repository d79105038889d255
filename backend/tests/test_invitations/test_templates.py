"""Tests for deterministic template invitations."""

from datetime import date

import pytest

from app.invitations.templates import (
    COLLEAGUE,
    ELDER,
    FAMILY,
    FRIEND,
    GENERIC,
    build_template_invitation,
    relationship_category,
)
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


@pytest.mark.parametrize(
    "relationship, category",
    [
        ("朋友", FRIEND),
        ("大學摯友", FRIEND),
        ("Best Friend", FRIEND),
        ("表親", FAMILY),
        ("家人", FAMILY),
        ("大學老師", ELDER),
        ("mentor", ELDER),
        ("同事", COLLEAGUE),
        ("高中同學", COLLEAGUE),
        ("鄰居", GENERIC),
        ("", GENERIC),
        (None, GENERIC),
    ],
)
def test_relationship_category(relationship, category):
    assert relationship_category(relationship) == category


class TestTemplateInvitation:
    def test_friend_with_how_met(self, couple: CoupleProfile):
        guest = Guest(name="王小明", relationship="朋友", how_met="大學")

        text = build_template_invitation(guest, couple)

        assert text.startswith("摯友 王小明：")
        assert "還記得我們在大學相識的日子嗎" in text
        assert "2025-06-01 18:00在台北" in text
        assert "現代簡約" in text
        assert text.endswith("陳大文 & 林小美 敬上")

    def test_generic_paragraph_without_personal_details(self, couple: CoupleProfile):
        text = build_template_invitation(Guest(name="陳阿姨", relationship="家人"), couple)
        assert text.startswith("親愛的陳阿姨：")
        assert "關愛與支持" in text

    def test_all_personal_fragments(self, couple: CoupleProfile):
        guest = Guest(
            name="Emily",
            relationship="exchange buddy",
            how_met="宿舍",
            memories="夜市探險",
            preferences="甜點",
        )

        text = build_template_invitation(guest, couple)

        assert text.startswith("尊敬的Emily：")
        assert "宿舍" in text
        assert "夜市探險" in text
        assert "甜點" in text

    def test_never_raises_on_missing_fields(self):
        text = build_template_invitation(Guest(), CoupleProfile())
        assert "敬上" in text

    def test_deterministic(self, couple: CoupleProfile):
        guest = Guest(name="李志豪", relationship="同事", memories="趕專案")
        assert build_template_invitation(guest, couple) == build_template_invitation(guest, couple)
