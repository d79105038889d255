"""Pydantic v2 schemas for invitation e-mail delivery."""

import uuid

from pydantic import BaseModel


class EmailRecipient(BaseModel):
    id: uuid.UUID
    name: str
    email: str


class SendInvitationResponse(BaseModel):
    """Result of sending (or simulating) one invitation e-mail."""

    message: str
    guest: EmailRecipient
    test_mode: bool = False
