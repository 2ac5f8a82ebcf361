# -*- coding: utf-8 -*-
# BSD 3-Clause License
#
# Copyright (c) 2020-2023, Faster Speeding
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# * Redistributions of source code must retain the above copyright notice, this
#   list of conditions and the following disclaimer.
#
# * Redistributions in binary form must reproduce the above copyright notice,
#   this list of conditions and the following disclaimer in the documentation
#   and/or other materials provided with the distribution.
#
# * Neither the name of the copyright holder nor the names of its
#   contributors may be used to endorse or promote products derived from
#   this software without specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
# DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE
# FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
# DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
# SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
# CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
# OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
# OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.

# pyright: reportPrivateUsage=none
# pyright: reportUnknownMemberType=none
# This leads to too many false-positives around mocks.

import asyncio
import typing
from collections import abc as collections

import hikari
import pytest

from reactwidgets import errors
from reactwidgets import transport as transport_

_T = typing.TypeVar("_T")

SELF_ID = hikari.Snowflake(111111111111111111)
CHANNEL_ID = hikari.Snowflake(222222222222222222)


class FakeSubscription(transport_.AbstractSubscription[_T]):
    __slots__ = ("_queue", "_queues")

    def __init__(self, queues: list["asyncio.Queue[typing.Optional[_T]]"]) -> None:
        self._queue: typing.Optional[asyncio.Queue[typing.Optional[_T]]] = None
        self._queues = queues

    def open(self) -> None:
        self._queue = asyncio.Queue()
        self._queues.append(self._queue)

    def close(self) -> None:
        if self._queue is not None:
            self._queues.remove(self._queue)
            self._queue = None

    async def receive(self) -> typing.Optional[_T]:
        assert self._queue is not None
        return await self._queue.get()


class FakeTransport(transport_.AbstractTransport):
    """In-memory transport which records every call made to it."""

    def __init__(self) -> None:
        self.calls: list[tuple[typing.Any, ...]] = []
        self.failures: dict[str, Exception] = {}
        self.message_queues: list[asyncio.Queue[typing.Optional[transport_.MessageCreated]]] = []
        self.reaction_queues: list[asyncio.Queue[typing.Optional[transport_.ReactionAdded]]] = []
        self.sent: list[transport_.MessageRef] = []
        self._next_id = 900000000000000000

    def _record(self, name: str, *args: typing.Any) -> None:
        self.calls.append((name, *args))
        if exc := self.failures.get(name):
            raise exc

    def calls_to(self, name: str) -> list[tuple[typing.Any, ...]]:
        return [call[1:] for call in self.calls if call[0] == name]

    async def wait_until(self, predicate: collections.Callable[[], bool], /, timeout: float = 2.0) -> None:
        async def poll() -> None:
            while not predicate():
                await asyncio.sleep(0.001)

        await asyncio.wait_for(poll(), timeout)

    def emit_reaction(self, event: transport_.ReactionAdded, /) -> None:
        for queue in self.reaction_queues:
            queue.put_nowait(event)

    def emit_message(self, event: transport_.MessageCreated, /) -> None:
        for queue in self.message_queues:
            queue.put_nowait(event)

    def reaction(
        self,
        emoji: str,
        user_id: int,
        /,
        *,
        message: typing.Optional[transport_.MessageRef] = None,
    ) -> transport_.ReactionAdded:
        message = message or self.sent[-1]
        return transport_.ReactionAdded(
            channel_id=message.channel_id,
            message_id=message.id,
            user_id=hikari.Snowflake(user_id),
            emoji_name=emoji,
        )

    async def send_message(
        self,
        channel: hikari.SnowflakeishOr[hikari.PartialChannel],
        /,
        content: hikari.UndefinedOr[str] = hikari.UNDEFINED,
        *,
        embed: hikari.UndefinedOr[hikari.Embed] = hikari.UNDEFINED,
    ) -> transport_.MessageRef:
        self._record("send_message", channel, content, embed)
        self._next_id += 1
        message = transport_.MessageRef(id=hikari.Snowflake(self._next_id), channel_id=hikari.Snowflake(channel))
        self.sent.append(message)
        return message

    async def edit_message(
        self,
        channel: hikari.SnowflakeishOr[hikari.PartialChannel],
        message: hikari.SnowflakeishOr[hikari.PartialMessage],
        /,
        content: hikari.UndefinedOr[str] = hikari.UNDEFINED,
        *,
        embed: hikari.UndefinedOr[hikari.Embed] = hikari.UNDEFINED,
    ) -> transport_.MessageRef:
        self._record("edit_message", channel, message, content, embed)
        return transport_.MessageRef(id=hikari.Snowflake(message), channel_id=hikari.Snowflake(channel))

    async def delete_message(
        self,
        channel: hikari.SnowflakeishOr[hikari.PartialChannel],
        message: hikari.SnowflakeishOr[hikari.PartialMessage],
        /,
    ) -> None:
        self._record("delete_message", channel, message)

    async def add_reaction(
        self,
        channel: hikari.SnowflakeishOr[hikari.PartialChannel],
        message: hikari.SnowflakeishOr[hikari.PartialMessage],
        emoji: typing.Union[str, hikari.CustomEmoji],
        /,
    ) -> None:
        self._record("add_reaction", channel, message, emoji)

    async def remove_reaction(
        self,
        channel: hikari.SnowflakeishOr[hikari.PartialChannel],
        message: hikari.SnowflakeishOr[hikari.PartialMessage],
        emoji: typing.Union[str, hikari.CustomEmoji],
        user: hikari.SnowflakeishOr[hikari.PartialUser],
        /,
    ) -> None:
        self._record("remove_reaction", channel, message, emoji, user)

    async def remove_all_reactions(
        self,
        channel: hikari.SnowflakeishOr[hikari.PartialChannel],
        message: hikari.SnowflakeishOr[hikari.PartialMessage],
        /,
    ) -> None:
        self._record("remove_all_reactions", channel, message)

    def subscribe_reaction_added(self) -> transport_.AbstractSubscription[transport_.ReactionAdded]:
        return FakeSubscription(self.reaction_queues)

    def subscribe_message_created(self) -> transport_.AbstractSubscription[transport_.MessageCreated]:
        return FakeSubscription(self.message_queues)

    async def fetch_self_id(self) -> hikari.Snowflake:
        self._record("fetch_self_id")
        return SELF_ID


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def transport_error() -> errors.TransportError:
    return errors.TransportError("Service unavailable")
