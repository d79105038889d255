"""Prompts for invitation generation and the output length ceiling."""

from app.models.couple import CoupleProfile
from app.models.guest import Guest

ELLIPSIS = "..."
SENTENCE_ENDINGS = "。！？!?\n"

INVITATION_SYSTEM_PROMPT = """You are a professional writer of personalized wedding invitations. \
Write a heartfelt invitation that reflects the specific relationship between the couple and this guest.

Rules:
1. Write in Traditional Chinese, between {min_length} and {max_length} characters. Do not be overly brief.
2. Weave in every personal detail that is provided (how they met, shared memories, preferences).
3. Keep a warm, elegant tone suitable for a wedding, with paragraph breaks for readability.
4. Include the wedding date, time and location.
5. End with the couple's signature exactly as given.
6. Do not include any e-mail address and do not use markdown.
7. Reply with the invitation text only, without explanations before or after it.
"""

FEEDBACK_SYSTEM_PROMPT = """You revise wedding invitations according to the couple's feedback. \
Keep the warm, elegant tone of the original, write {min_length}-{max_length} Traditional Chinese \
characters, and work the requested changes into the text itself instead of appending them. \
Do not use markdown, do not include e-mail addresses or other private information, and reply \
with the invitation text only.
"""


def signature(couple: CoupleProfile) -> str:
    """The couple's sign-off line."""
    return f"{couple.groom_name} & {couple.bride_name} 敬上"


def format_wedding_date(value: object) -> str:
    """ISO date string for a date/datetime, or '' when missing."""
    if value is None:
        return ""
    if hasattr(value, "isoformat"):
        return value.isoformat()[:10]
    return str(value)


def _missing_fields(guest: Guest, couple: CoupleProfile) -> list[str]:
    required = {
        "guest.name": guest.name,
        "guest.relationship": guest.relationship,
        "couple.groom_name": couple.groom_name,
        "couple.bride_name": couple.bride_name,
        "couple.wedding_date": couple.wedding_date,
    }
    return [field for field, value in required.items() if not value]


def _optional_lines(pairs: list[tuple[str, str | None]]) -> list[str]:
    return [f"- {label}: {value.strip()}" for label, value in pairs if value and value.strip()]


def _guest_lines(guest: Guest) -> list[str]:
    return [
        f"- 姓名: {guest.name}",
        f"- 與新人關係: {guest.relationship}",
        *_optional_lines(
            [
                ("相識方式", guest.how_met),
                ("共同回憶", guest.memories),
                ("個人喜好", guest.preferences),
            ]
        ),
    ]


def build_system_prompt(min_length: int, max_length: int) -> str:
    return INVITATION_SYSTEM_PROMPT.format(min_length=min_length, max_length=max_length)


def build_feedback_system_prompt(min_length: int, max_length: int) -> str:
    return FEEDBACK_SYSTEM_PROMPT.format(min_length=min_length, max_length=max_length)


def build_invitation_prompt(
    guest: Guest,
    couple: CoupleProfile,
    min_length: int = 300,
    max_length: int = 400,
) -> str:
    """Build the user prompt asking the LLM for one guest's invitation.

    Raises:
        ValueError: if the guest name/relationship or the couple's names or
            wedding date are empty.
    """
    missing = _missing_fields(guest, couple)
    if missing:
        raise ValueError(f"Missing required fields for invitation prompt: {', '.join(missing)}")

    wedding_lines = [
        f"- 新郎: {couple.groom_name}",
        f"- 新娘: {couple.bride_name}",
        f"- 婚禮日期: {format_wedding_date(couple.wedding_date)}",
        *_optional_lines(
            [
                ("婚禮時間", couple.wedding_time),
                ("婚禮地點", couple.wedding_location),
                ("婚禮主題", couple.wedding_theme),
                ("新人背景故事", couple.background_story),
            ]
        ),
    ]

    sections = [
        "請為以下賓客創作一封個人化的婚禮邀請函。",
        "賓客資料:\n" + "\n".join(_guest_lines(guest)),
        "婚禮資訊:\n" + "\n".join(wedding_lines),
        "\n".join(
            [
                "要求:",
                "1. 使用繁體中文",
                f"2. 篇幅約 {min_length}-{max_length} 個中文字符",
                "3. 如有提供相識方式、共同回憶或個人喜好，請自然地融入內容並適當展開",
                f"4. 結尾署名格式為: {signature(couple)}",
                "5. 不要使用 markdown 格式，也不要提及電子郵件地址",
            ]
        ),
    ]
    return "\n\n".join(sections)


def build_feedback_prompt(
    guest: Guest,
    current_text: str,
    feedback: str,
    min_length: int = 300,
    max_length: int = 400,
) -> str:
    """Build the user prompt asking the LLM to merge feedback into an existing invitation."""
    sections = [
        "請根據以下反饋，重新編寫這封婚禮邀請函。",
        f"原始邀請函:\n{current_text.strip()}",
        "賓客資料:\n" + "\n".join(_guest_lines(guest)),
        f"用戶反饋:\n{feedback.strip()}",
        (
            "請將反饋中提及的內容和要求融合進原邀請函之中，而不是附加在末尾。"
            f"保持原有的溫暖、優雅風格，篇幅控制在 {min_length}-{max_length} 個中文字符之間。"
        ),
    ]
    return "\n\n".join(sections)


def enforce_length_ceiling(text: str, couple: CoupleProfile, max_length: int) -> str:
    """Cap ``text`` at ``max_length`` characters without losing the signature.

    Over-long text is cut (at the last sentence ending inside the allowed
    window when one exists in its second half) and finished with an ellipsis
    and the couple's signature, so the result never ends mid-sentence.

    Raises:
        ValueError: if ``max_length`` cannot hold the ellipsis and signature.
    """
    text = text.strip()
    if len(text) <= max_length:
        return text

    sign_off = signature(couple)
    suffix = f"{ELLIPSIS}\n\n{sign_off}"
    room = max_length - len(suffix)
    if room <= 0:
        raise ValueError(
            f"max_length {max_length} leaves no room for text before the signature {sign_off!r}"
        )

    window = text[:room]
    boundary = max(window.rfind(ch) for ch in SENTENCE_ENDINGS)
    cut = boundary + 1 if boundary >= room // 2 else room
    return window[:cut].rstrip() + suffix
