from types import SimpleNamespace

import discord
import pytest

from d2rtz_bot.classes.discord.message_helpers import (
    find_image_url,
    message_image_url,
    send_large_messages,
)
from fakes import FakeContext, FakeMessage, image_attachment


class TestMessageImageUrl:
    def test_image_attachment(self):
        message = FakeMessage(attachments=[image_attachment(content_type="application/pdf", url="https://cdn.example.com/a.pdf"), image_attachment()])
        assert message_image_url(message) == "https://cdn.example.com/item.png"

    def test_attachment_without_content_type_matches_extension(self):
        message = FakeMessage(attachments=[image_attachment(url="https://cdn.example.com/item.JPG?ex=1", content_type=None)])
        assert message_image_url(message) == "https://cdn.example.com/item.JPG?ex=1"

    def test_embed_image(self):
        embed = SimpleNamespace(image=SimpleNamespace(url=None), thumbnail=SimpleNamespace(url="https://media.example.com/thumb.webp"))
        assert message_image_url(FakeMessage(embeds=[embed])) == "https://media.example.com/thumb.webp"

    def test_sticker(self):
        sticker = SimpleNamespace(url="https://media.example.com/stickers/1.png")
        assert message_image_url(FakeMessage(stickers=[sticker])) == "https://media.example.com/stickers/1.png"

    def test_link_in_content(self):
        message = FakeMessage(content="看看这个 <https://i.example.com/shot.png> 怎么样")
        assert message_image_url(message) == "https://i.example.com/shot.png"

    def test_no_image(self):
        assert message_image_url(FakeMessage(content="https://example.com/page")) is None


@pytest.mark.asyncio
async def test_find_image_url_prefers_own_message():
    quoted = FakeMessage(attachments=[image_attachment(url="https://cdn.example.com/quoted.png")])
    message = FakeMessage(attachments=[image_attachment()], reference=SimpleNamespace(resolved=quoted, message_id=1))
    assert await find_image_url(message) == "https://cdn.example.com/item.png"


@pytest.mark.asyncio
async def test_find_image_url_from_resolved_reply():
    quoted = FakeMessage(attachments=[image_attachment(url="https://cdn.example.com/quoted.png")])
    message = FakeMessage(reference=SimpleNamespace(resolved=quoted, message_id=1))
    assert await find_image_url(message) == "https://cdn.example.com/quoted.png"


@pytest.mark.asyncio
async def test_find_image_url_fetches_uncached_reply():
    quoted = FakeMessage(attachments=[image_attachment(url="https://cdn.example.com/fetched.png")])
    fetched = []

    async def fetch_message(message_id):
        fetched.append(message_id)
        return quoted

    message = FakeMessage(reference=SimpleNamespace(resolved=None, message_id=77), channel=SimpleNamespace(fetch_message=fetch_message))
    assert await find_image_url(message) == "https://cdn.example.com/fetched.png"
    assert fetched == [77]


@pytest.mark.asyncio
async def test_find_image_url_tolerates_missing_reply():
    async def fetch_message(message_id):
        raise discord.NotFound(SimpleNamespace(status=404, reason="Not Found"), "Unknown Message")

    message = FakeMessage(reference=SimpleNamespace(resolved=None, message_id=77), channel=SimpleNamespace(fetch_message=fetch_message))
    assert await find_image_url(message) is None


@pytest.mark.asyncio
async def test_send_large_messages_splits_on_lines():
    ctx = FakeContext()
    text = "\n".join(f"{index:03d}" + "x" * 96 for index in range(25))

    await send_large_messages(ctx, text)

    assert len(ctx.sent) == 2
    assert all(len(chunk) <= 2000 for chunk in ctx.sent)
    assert "\n".join(ctx.sent) == text


@pytest.mark.asyncio
async def test_send_large_messages_short_text():
    ctx = FakeContext()
    await send_large_messages(ctx, "TZ：A")
    assert ctx.sent == ["TZ：A"]


@pytest.mark.asyncio
async def test_send_large_messages_line_at_limit():
    ctx = FakeContext()
    await send_large_messages(ctx, "x" * 2000 + "\ny")
    assert ctx.sent == ["x" * 2000, "y"]


@pytest.mark.asyncio
async def test_send_large_messages_line_over_limit():
    ctx = FakeContext()
    await send_large_messages(ctx, "z" * 4000 + "\nend")
    assert [len(chunk) for chunk in ctx.sent] == [2000, 2000, 3]
    assert ctx.sent[-1] == "end"
