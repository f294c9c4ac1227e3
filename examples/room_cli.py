"""Interactive room client.

Reads connection settings from a YAML file given with ``--config`` or from
``SDN_*`` environment variables (see :class:`sdn_sdk.ClientConfig`), prints
incoming room messages, and accepts commands on stdin::

    room list
    room create <name>
    room join <room_id_or_alias>
    room leave <room_id>
    room invite <room_id> <user_id>
    room kick <room_id> <user_id>
    room members <room_id>
    room rename <room_id> <name>
    room send <room_id> <text>
    room state <room_id> <event_type> [state_key]

Requires a user id and access token; obtaining them needs a
wallet signer, see :meth:`sdn_sdk.Client.login`.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from sdn_sdk import Client, ClientConfig, SDNError
from sdn_sdk.models.events import Event

log = logging.getLogger("room_cli")


async def sync_forever(client: Client, restart_delay: float) -> None:
    while True:
        try:
            await client.sync()
            return
        except SDNError as exc:
            log.error("sync stopped: %s", exc)
        await asyncio.sleep(restart_delay)


async def run_command(client: Client, parts: list[str]) -> None:
    if len(parts) < 2 or parts[0] != "room":
        return
    action, args = parts[1], parts[2:]
    if action == "list":
        print(await client.rooms.joined_rooms())
    elif action == "create":
        print((await client.rooms.create(args[0])).room_id)
    elif action == "join":
        print((await client.rooms.join(args[0])).room_id)
    elif action == "leave":
        await client.rooms.leave(args[0])
        print("leave success")
    elif action == "invite":
        await client.rooms.invite(args[0], args[1])
        print("invite success")
    elif action == "kick":
        await client.rooms.kick(args[0], args[1])
        print("kick success")
    elif action == "members":
        print((await client.rooms.joined_members(args[0])).joined)
    elif action == "rename":
        await client.rooms.set_name(args[0], " ".join(args[1:]))
        print("rename success")
    elif action == "send":
        print((await client.messages.send_text(args[0], " ".join(args[1:]))).event_id)
    elif action == "state":
        state_key = args[2] if len(args) > 2 else ""
        print(await client.rooms.get_state_event(args[0], args[1], state_key))


async def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--restart-delay", type=float, default=5.0,
                        help="seconds to wait before restarting a failed sync")
    parser.add_argument("-c", "--config", help="YAML config file; defaults to SDN_* environment variables")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    config = ClientConfig.load(args.config) if args.config else ClientConfig.from_env()
    if not config.logged_in:
        parser.error("user_id and access_token must be set")

    async with Client.from_config(config) as client:
        @client.on("m.room.message")
        def on_message(event: Event) -> None:
            print(f"[{event.room_id}] {event.sender}: {event.body()}")

        sync_task = asyncio.create_task(sync_forever(client, args.restart_delay))
        loop = asyncio.get_running_loop()
        try:
            while True:
                line = await loop.run_in_executor(None, sys.stdin.readline)
                if not line:
                    break
                try:
                    await run_command(client, line.split())
                except (SDNError, IndexError) as exc:
                    print(f"err: {exc}")
        finally:
            client.stop_sync()
            sync_task.cancel()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
