"""Tests for the invitation e-mail endpoint."""

import uuid

import pytest
import pytest_asyncio
from httpx import AsyncClient

from app.api.deps import get_mailer
from app.mail.sender import InvitationMailer
from app.main import app
from app.models.couple import CoupleProfile

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def generated_guest(client: AsyncClient, test_guest: dict) -> dict:
    response = await client.post(
        "/api/v1/invitations/generate", json={"guest_id": test_guest["id"]}
    )
    assert response.status_code == 200
    return test_guest


class TestSendInvitation:
    async def test_send(
        self, client: AsyncClient, generated_guest: dict, mailer: InvitationMailer
    ) -> None:
        response = await client.post(f"/api/v1/emails/send/{generated_guest['id']}")
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Invitation sent"
        assert data["test_mode"] is False
        assert data["guest"]["email"] == generated_guest["email"]

        mailer.send.assert_awaited_once()
        message = mailer.send.await_args.args[0]
        assert message["Subject"] == "婚禮邀請 - 陳大文 & 林小美"
        assert generated_guest["email"] in message["To"]

        guest = (await client.get(f"/api/v1/guests/{generated_guest['id']}")).json()
        assert guest["status"] == "sent"

    async def test_test_mode_does_not_send(
        self, client: AsyncClient, generated_guest: dict, mailer: InvitationMailer
    ) -> None:
        response = await client.post(
            f"/api/v1/emails/send/{generated_guest['id']}", params={"test_mode": "true"}
        )
        assert response.status_code == 200
        assert response.json()["test_mode"] is True
        mailer.send.assert_not_awaited()

        guest = (await client.get(f"/api/v1/guests/{generated_guest['id']}")).json()
        assert guest["status"] == "generated"

    async def test_already_sent(self, client: AsyncClient, generated_guest: dict) -> None:
        await client.post(f"/api/v1/emails/send/{generated_guest['id']}")

        response = await client.post(f"/api/v1/emails/send/{generated_guest['id']}")
        assert response.status_code == 409

    async def test_no_invitation_yet(self, client: AsyncClient, test_guest: dict) -> None:
        response = await client.post(f"/api/v1/emails/send/{test_guest['id']}")
        assert response.status_code == 400

    async def test_unknown_guest(self, client: AsyncClient) -> None:
        response = await client.post(f"/api/v1/emails/send/{uuid.uuid4()}")
        assert response.status_code == 404

    async def test_guest_without_couple(self, client: AsyncClient, make_guest) -> None:
        orphan = await make_guest(uuid.uuid4(), status="generated", invitation_content="內容")

        response = await client.post(f"/api/v1/emails/send/{orphan.id}")
        assert response.status_code == 500

    async def test_smtp_not_configured(self, client: AsyncClient, generated_guest: dict) -> None:
        app.dependency_overrides[get_mailer] = lambda: InvitationMailer(
            host="", port=587, from_address=""
        )

        response = await client.post(f"/api/v1/emails/send/{generated_guest['id']}")
        assert response.status_code == 503

    async def test_smtp_not_configured_test_mode(
        self, client: AsyncClient, generated_guest: dict
    ) -> None:
        app.dependency_overrides[get_mailer] = lambda: InvitationMailer(
            host="", port=587, from_address=""
        )

        response = await client.post(
            f"/api/v1/emails/send/{generated_guest['id']}", params={"test_mode": "true"}
        )
        assert response.status_code == 200

    async def test_delivery_failure(
        self,
        client: AsyncClient,
        generated_guest: dict,
        mailer: InvitationMailer,
    ) -> None:
        mailer.send.side_effect = OSError("connection refused")

        response = await client.post(f"/api/v1/emails/send/{generated_guest['id']}")
        assert response.status_code == 502

        guest = (await client.get(f"/api/v1/guests/{generated_guest['id']}")).json()
        assert guest["status"] == "generated"

    async def test_edited_guest_can_be_sent(
        self, client: AsyncClient, test_couple: CoupleProfile, make_guest
    ) -> None:
        guest = await make_guest(test_couple.id, status="edited", invitation_content="親手修改的內容")

        response = await client.post(f"/api/v1/emails/send/{guest.id}")
        assert response.status_code == 200
