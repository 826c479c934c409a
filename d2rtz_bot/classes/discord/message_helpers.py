import logging, re
import discord

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp", ".gif")
URL_PATTERN = re.compile(r"https?://[^\s<>()\[\]]+")


async def send_large_messages(ctx, text, max_chars=2000):
    if len(text) <= max_chars:
        return await ctx.send(text)

    chunks = []
    buffer = ""
    for line in text.split("\n"):
        while len(line) > max_chars:
            if buffer:
                chunks.append(buffer)
                buffer = ""
            chunks.append(line[:max_chars])
            line = line[max_chars:]
        candidate = f"{buffer}\n{line}" if buffer else line
        if len(candidate) > max_chars:
            chunks.append(buffer)
            buffer = line
        else:
            buffer = candidate
    if buffer.strip():
        chunks.append(buffer)

    response = None
    for chunk in chunks:
        response = await ctx.send(chunk)
    return response


def message_image_url(message):
    """Return the first image carried by a message: attachment, embed, sticker, or bare link."""
    for attachment in getattr(message, "attachments", None) or []:
        content_type = getattr(attachment, "content_type", None) or ""
        if content_type.startswith("image/") or attachment.url.split("?")[0].lower().endswith(IMAGE_EXTENSIONS):
            return attachment.url

    for embed in getattr(message, "embeds", None) or []:
        for part in (getattr(embed, "image", None), getattr(embed, "thumbnail", None)):
            url = getattr(part, "url", None)
            if url:
                return url

    for sticker in getattr(message, "stickers", None) or []:
        if getattr(sticker, "url", None):
            return sticker.url

    for url in URL_PATTERN.findall(getattr(message, "content", None) or ""):
        if url.split("?")[0].lower().endswith(IMAGE_EXTENSIONS):
            return url
    return None


async def referenced_message(message):
    reference = getattr(message, "reference", None)
    if reference is None:
        return None
    resolved = getattr(reference, "resolved", None)
    if resolved is not None:
        # DeletedReferencedMessage carries no content.
        return resolved if hasattr(resolved, "attachments") else None
    if reference.message_id is None:
        return None
    try:
        return await message.channel.fetch_message(reference.message_id)
    except discord.HTTPException as e:
        logger.warning(f"Could not fetch referenced message {reference.message_id}: {e}")
        return None


async def find_image_url(message):
    url = message_image_url(message)
    if url:
        return url
    quoted = await referenced_message(message)
    if quoted is not None:
        return message_image_url(quoted)
    return None
