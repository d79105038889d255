"""Seed the database with a demo couple and guest list.

Creates the tables if needed, replaces any existing couple profile (and, by
cascade, its guests) with the demo wedding, and adds guests covering each
relationship category used by the template invitations.

Run from the backend directory:
    python -m scripts.seed_data
"""

import asyncio
import sys
from datetime import date
from pathlib import Path

# Add backend to path so imports work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import delete

from app.database import async_session_factory, create_all, engine
from app.models.couple import CoupleProfile
from app.models.guest import Guest, GuestStatus

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

COUPLE = {
    "groom_name": "陳大文",
    "bride_name": "林小美",
    "wedding_date": date(2025, 6, 1),
    "wedding_time": "18:00",
    "wedding_location": "台北晶華酒店",
    "wedding_theme": "現代簡約",
    "background_story": "兩人在大學攝影社相識，一起走過十年，去年在阿里山日出時求婚成功。",
}

GUESTS = [
    {
        "name": "王小明",
        "relationship": "朋友",
        "email": "xiaoming.wang@example.com",
        "how_met": "大學",
        "memories": "畢業旅行一起在墾丁看星星",
        "preferences": "爵士樂",
    },
    {
        "name": "陳阿姨",
        "relationship": "家人",
        "email": "auntie.chen@example.com",
        "preferences": "台式甜點",
    },
    {
        "name": "張老師",
        "relationship": "大學老師",
        "email": "prof.chang@example.com",
        "how_met": "攝影課",
    },
    {
        "name": "李志豪",
        "relationship": "同事",
        "email": "chihao.lee@example.com",
        "memories": "一起熬夜趕專案上線",
    },
    {
        "name": "Emily Carter",
        "relationship": "friend from exchange year",
        "email": "emily.carter@example.com",
        "how_met": "交換學生宿舍",
    },
]


# ---------------------------------------------------------------------------
# Main seed function
# ---------------------------------------------------------------------------


async def seed() -> None:
    """Populate the database with the demo wedding.

    Idempotent: deletes every existing couple profile and guest first.
    """
    await create_all()

    async with async_session_factory() as session:
        await session.execute(delete(Guest))
        await session.execute(delete(CoupleProfile))
        await session.flush()

        couple = CoupleProfile(**COUPLE)
        session.add(couple)
        await session.flush()
        print(f"✅ Created couple profile: {couple.groom_name} & {couple.bride_name} (id={couple.id})")

        for guest_data in GUESTS:
            session.add(Guest(couple_id=couple.id, status=GuestStatus.PENDING.value, **guest_data))
        await session.flush()
        await session.commit()

        print(f"✅ Created {len(GUESTS)} guests")
        print()
        print("=" * 60)
        print("📊 Seed Summary")
        print("=" * 60)
        print(f"   Wedding:  {couple.wedding_date} {couple.wedding_time} @ {couple.wedding_location}")
        print(f"   Guests:   {len(GUESTS)} (all pending)")
        print("=" * 60)
        print("🎉 Done! Generate invitations at POST /api/v1/invitations/generate")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
