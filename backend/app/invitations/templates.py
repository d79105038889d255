"""Deterministic template invitations, used whenever the LLM path is unavailable.

Everything here is plain string assembly over whatever fields exist and must
never raise.
"""

from app.invitations.prompts import format_wedding_date
from app.models.couple import CoupleProfile
from app.models.guest import Guest

FAMILY = "family"
FRIEND = "friend"
ELDER = "elder"
COLLEAGUE = "colleague"
GENERIC = "generic"

# Checked in order; the first category with a matching keyword wins.
RELATIONSHIP_KEYWORDS: list[tuple[str, tuple[str, ...]]] = [
    (FAMILY, ("親", "家人", "family", "relative", "parent", "sibling")),
    (FRIEND, ("朋友", "摯友", "friend")),
    (ELDER, ("老師", "長輩", "teacher", "mentor", "elder")),
    (COLLEAGUE, ("同事", "同學", "colleague", "coworker", "classmate")),
]

GREETINGS = {
    FAMILY: "親愛的{name}：",
    FRIEND: "摯友 {name}：",
    ELDER: "敬愛的{name}：",
    COLLEAGUE: "親愛的{name}：",
    GENERIC: "尊敬的{name}：",
}

HOW_MET_FRAGMENT = "還記得我們在{how_met}相識的日子嗎？那段時光至今歷歷在目，是我們生命中珍貴的回憶。"
MEMORIES_FRAGMENT = (
    "一起經歷的{memories}，那些笑聲與感動早已成為我們情誼中不可或缺的一部分，"
    "也讓我們更期待在這個特別的日子與您分享喜悅。"
)
PREFERENCES_FRAGMENT = "知道您喜愛{preferences}，我們特別在婚禮中安排了相關的元素，希望您在當天也能享受熟悉的美好。"

GENERIC_PARAGRAPHS = {
    FAMILY: "多年來您給予我們的關愛與支持，一直是我們前進的動力。在人生的重要時刻，您的祝福對我們格外珍貴。",
    FRIEND: "感謝這些年來您的友誼與陪伴，這段珍貴的情誼讓我們的生活更加豐富多彩，很高興能與您分享這份喜悅。",
    GENERIC: "感謝您在我們生命中扮演的重要角色，能在這個特別的日子邀請您出席，是我們莫大的榮幸。",
}

WEDDING_DETAILS = (
    "婚禮將於{date} {time}在{location}舉行。我們以「{theme}」為主題精心籌備，"
    "希望與您一起創造難忘的時刻。"
)

CLOSING = (
    "我們誠摯地邀請您出席這個對我們意義非凡的典禮，您的蒞臨將為婚禮增添無限光彩。"
    "期待在這個充滿愛與祝福的日子裡，與您一同見證我們人生的新篇章。\n\n懷著感恩與期待的心情"
)


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def relationship_category(relationship: str | None) -> str:
    """Map a free-text relationship onto a greeting category."""
    value = _text(relationship).lower()
    for category, keywords in RELATIONSHIP_KEYWORDS:
        if any(keyword in value for keyword in keywords):
            return category
    return GENERIC


def build_template_invitation(guest: Guest, couple: CoupleProfile) -> str:
    """Assemble an invitation from fixed fragments and the guest's details."""
    category = relationship_category(getattr(guest, "relationship", None))
    name = _text(getattr(guest, "name", None))

    fragments = []
    how_met = _text(getattr(guest, "how_met", None))
    if how_met:
        fragments.append(HOW_MET_FRAGMENT.format(how_met=how_met))
    memories = _text(getattr(guest, "memories", None))
    if memories:
        fragments.append(MEMORIES_FRAGMENT.format(memories=memories))
    preferences = _text(getattr(guest, "preferences", None))
    if preferences:
        fragments.append(PREFERENCES_FRAGMENT.format(preferences=preferences))
    personal = "".join(fragments) or GENERIC_PARAGRAPHS.get(category, GENERIC_PARAGRAPHS[GENERIC])

    details = WEDDING_DETAILS.format(
        date=format_wedding_date(getattr(couple, "wedding_date", None)),
        time=_text(getattr(couple, "wedding_time", None)),
        location=_text(getattr(couple, "wedding_location", None)),
        theme=_text(getattr(couple, "wedding_theme", None)),
    )
    sign_off = (
        f"{_text(getattr(couple, 'groom_name', None))} & "
        f"{_text(getattr(couple, 'bride_name', None))} 敬上"
    )

    return "\n\n".join(
        [GREETINGS[category].format(name=name), personal, details, CLOSING, sign_off]
    )
