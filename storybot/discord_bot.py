from __future__ import annotations

import asyncio
import logging

from storybot.config import Settings
from storybot.engine.narrative_engine import NarrativeEngine
from storybot.render import Reply, error_notice, render_result

log = logging.getLogger(__name__)

try:
    import discord
except Exception:  # pragma: no cover
    discord = None

DISCORD_MESSAGE_LIMIT = 2000
DISCORD_LABEL_LIMIT = 80


async def _advance(engine: NarrativeEngine, settings: Settings, user_id: str, text: str) -> Reply:
    try:
        result = await asyncio.to_thread(engine.advance, user_id, text)
    except Exception:
        log.exception("advance_failed user=%s", user_id)
        return Reply(error_notice(settings))
    return render_result(result, settings)


def _build_view(engine: NarrativeEngine, settings: Settings, reply: Reply):
    if not reply.options:
        return None
    view = discord.ui.View(timeout=None)
    for option in reply.options[: settings.max_buttons]:
        button = discord.ui.Button(label=option.label[:DISCORD_LABEL_LIMIT], style=discord.ButtonStyle.primary)
        button.callback = _button_callback(engine, settings, option.value)
        view.add_item(button)
    return view


def _button_callback(engine: NarrativeEngine, settings: Settings, value: str):
    async def callback(interaction) -> None:
        reply = await _advance(engine, settings, str(interaction.user.id), value)
        try:
            await interaction.response.send_message(
                reply.text[:DISCORD_MESSAGE_LIMIT],
                view=_build_view(engine, settings, reply) or discord.utils.MISSING,
            )
        except discord.HTTPException:
            log.warning("reply_delivery_failed user=%s", interaction.user.id, exc_info=True)

    return callback


def run_discord_bot(engine: NarrativeEngine, settings: Settings) -> None:
    if discord is None:
        raise RuntimeError("discord.py not installed")
    if not settings.discord_token:
        raise RuntimeError("DISCORD_TOKEN is required to run the Discord bot")

    intents = discord.Intents.default()
    intents.message_content = True
    client = discord.Client(intents=intents)

    @client.event
    async def on_ready() -> None:
        user_name = str(client.user) if client.user else "unknown"
        log.info("logged_in_as=%s", user_name)

    @client.event
    async def on_message(message) -> None:
        if message.author == client.user or message.author.bot:
            return
        channel_name = getattr(message.channel, "name", "")
        if channel_name != settings.bot_channel:
            return
        if not message.content:
            return
        reply = await _advance(engine, settings, str(message.author.id), message.content)
        try:
            await message.channel.send(
                reply.text[:DISCORD_MESSAGE_LIMIT],
                view=_build_view(engine, settings, reply) or discord.utils.MISSING,
            )
        except discord.HTTPException:
            log.warning("reply_delivery_failed user=%s", message.author.id, exc_info=True)

    log.info("starting_discord_bot channel=%s", settings.bot_channel)
    client.run(settings.discord_token)
