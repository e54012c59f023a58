"""Entrypoint: python -m chat_client --user 7 [--me 3] [--pages 2]"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from chat_client.application.dto.identity import Identity
from chat_client.application.dto.render import ErrorNotice, RenderRow
from chat_client.config import settings
from chat_client.domain.entities.conversation import ConversationKey
from chat_client.infrastructure.http.client import HttpMessageTransport
from chat_client.infrastructure.http.hooks import correlation_scope
from chat_client.services.conversation_service import ConversationController

logger = logging.getLogger(__name__)


class ConsoleView:
    def state_changed(self) -> None:
        pass

    def show_error(self, notice: ErrorNotice) -> None:
        print(f"error: {notice.message}", file=sys.stderr)

    def scroll_to_end(self, *, animated: bool) -> None:
        pass


def format_row(row: RenderRow) -> str:
    who = "me" if row.is_mine else (row.message.sender_name or str(row.message.sender_id))
    if row.voice is not None:
        text = f"[voice {row.voice.duration}s] {row.voice.text_part}".rstrip()
    else:
        text = row.text or ""
    if row.message.attachments and row.voice is None:
        text = f"{text} ({len(row.message.attachments)} attachment(s))".strip()
    if row.message.reply_snapshot is not None:
        reply = row.message.reply_snapshot
        text = f"> {reply.sender_name}: {reply.body_preview}\n        {text}"
    return f"{row.time_label} {who}: {text}"


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="chat_client", description="Print a conversation's history.")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--user", type=int, help="one-to-one conversation with this user id")
    target.add_argument("--group", type=int, help="group conversation id")
    parser.add_argument("--me", type=int, default=None, help="current user id, marks own messages")
    parser.add_argument("--pages", type=int, default=1, help="number of history pages to load")
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> int:
    key = ConversationKey.group(args.group) if args.group is not None else ConversationKey.user(args.user)
    identity = Identity(user_id=args.me) if args.me is not None else None

    async with HttpMessageTransport() as transport:
        controller = ConversationController(key, transport, identity, view=ConsoleView())
        with correlation_scope() as cid:
            logger.debug("Loading %s [%s]", key, cid)
            await controller.load()
        for _ in range(args.pages - 1):
            if not controller.pagination.state.has_more:
                break
            with correlation_scope():
                await controller.on_load_more()
        controller.close()

    rows = controller.render()
    for row in rows:
        if row.show_date_separator:
            print(f"--- {row.date_label} ---")
        print(format_row(row))
    logger.info("Printed %d messages for %s", len(rows), key)
    return 0


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sys.exit(asyncio.run(_run(_parse_args(argv))))


if __name__ == "__main__":
    main()
