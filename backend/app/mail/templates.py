"""Invitation e-mail rendering."""

import html
from email.headerregistry import Address
from email.message import EmailMessage

from app.invitations.prompts import format_wedding_date
from app.models.couple import CoupleProfile
from app.models.guest import Guest

DEFAULT_FROM_ADDRESS = "invitations@localhost"
SUBJECT = "婚禮邀請 - {groom} & {bride}"

HTML_BODY = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <style>
    body {{ font-family: Arial, sans-serif; color: #333; line-height: 1.6; max-width: 600px; margin: 0 auto; padding: 20px; }}
    .header {{ text-align: center; margin-bottom: 30px; }}
    .header h1 {{ color: #8b5a2b; font-size: 24px; margin-bottom: 10px; }}
    .couple-names {{ font-weight: bold; font-style: italic; color: #8b5a2b; }}
    .content {{ background-color: #f9f7f2; padding: 30px; border-radius: 5px; margin-bottom: 20px; }}
    .footer {{ text-align: center; font-size: 14px; color: #666; margin-top: 20px; }}
  </style>
</head>
<body>
  <div class="header">
    <h1>婚禮邀請函</h1>
    <p class="couple-names">{groom} &amp; {bride}</p>
  </div>
  <div class="content">{content}</div>
  <div class="footer">
    <p>婚禮日期: {date} {time}</p>
    <p>婚禮地點: {location}</p>
  </div>
</body>
</html>
"""


def render_invitation_email(
    couple: CoupleProfile,
    guest: Guest,
    content: str,
    from_address: str,
) -> EmailMessage:
    """Build a multipart (plain + HTML) invitation e-mail for one guest."""
    message = EmailMessage()
    message["Subject"] = SUBJECT.format(groom=couple.groom_name, bride=couple.bride_name)
    message["From"] = Address(
        display_name=f"{couple.groom_name} & {couple.bride_name}",
        addr_spec=from_address or DEFAULT_FROM_ADDRESS,
    )
    message["To"] = Address(display_name=guest.name, addr_spec=guest.email)

    message.set_content(content)
    message.add_alternative(
        HTML_BODY.format(
            groom=html.escape(couple.groom_name),
            bride=html.escape(couple.bride_name),
            content=html.escape(content).replace("\n", "<br>\n"),
            date=format_wedding_date(couple.wedding_date),
            time=html.escape(couple.wedding_time or ""),
            location=html.escape(couple.wedding_location or ""),
        ),
        subtype="html",
    )
    return message
