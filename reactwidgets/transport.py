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
"""The transport interface widgets use to talk to the chat service.

[AbstractTransport][reactwidgets.transport.AbstractTransport] is everything a
widget needs from the outside world: sending, editing and deleting messages,
managing reactions and listening for events. [HikariTransport][reactwidgets.transport.HikariTransport]
implements it on top of Hikari's REST client and event manager.
"""
from __future__ import annotations

__all__: list[str] = [
    "AbstractSubscription",
    "AbstractTransport",
    "HikariTransport",
    "MessageCreated",
    "MessageRef",
    "ReactionAdded",
]

import abc
import dataclasses
import typing

import hikari

from . import _internal
from . import errors

if typing.TYPE_CHECKING:
    import types
    from collections import abc as collections

    from typing_extensions import Self

    _EventT = typing.TypeVar("_EventT", bound=hikari.Event)

_T = typing.TypeVar("_T")


@dataclasses.dataclass(frozen=True)
class MessageRef:
    """Reference to a message sent through a transport."""

    id: hikari.Snowflake
    """ID of the message."""

    channel_id: hikari.Snowflake
    """ID of the channel the message is in."""


@dataclasses.dataclass(frozen=True)
class ReactionAdded:
    """Event for when a user adds a reaction to a message."""

    channel_id: hikari.Snowflake
    message_id: hikari.Snowflake
    user_id: hikari.Snowflake
    emoji_name: typing.Optional[str]
    """Name of the emoji.

    For unicode emojis this is the emoji itself.
    """

    emoji_id: typing.Optional[hikari.Snowflake] = None
    """ID of the emoji if it's a custom emoji."""

    is_animated: bool = False

    @property
    def emoji_identifier(self) -> _internal.EmojiIdentifierT:
        """The key used to look up the handler for this reaction."""
        identifier = self.emoji_id or self.emoji_name
        assert identifier is not None
        return identifier

    @property
    def emoji(self) -> _internal.EmojiT:
        """The emoji which was reacted with, in a form the transport can remove."""
        if self.emoji_id is not None:
            return hikari.CustomEmoji(id=self.emoji_id, name=self.emoji_name, is_animated=self.is_animated)

        assert self.emoji_name is not None
        return self.emoji_name


@dataclasses.dataclass(frozen=True)
class MessageCreated:
    """Event for when a message is sent."""

    channel_id: hikari.Snowflake
    message_id: hikari.Snowflake
    author_id: hikari.Snowflake
    content: typing.Optional[str]


class AbstractSubscription(abc.ABC, typing.Generic[_T]):
    """A scoped subscription to a stream of events.

    This should be used as an async context manager so that it's always
    unsubscribed from, even if the wait is abandoned:

    ```py
    async with transport.subscribe_reaction_added() as subscription:
        while (event := await subscription.receive()) is not None:
            ...
    ```
    """

    __slots__ = ()

    @abc.abstractmethod
    def open(self) -> None:
        """Start receiving events."""

    @abc.abstractmethod
    def close(self) -> None:
        """Stop receiving events.

        This should be safe to call multiple times.
        """

    @abc.abstractmethod
    async def receive(self) -> typing.Optional[_T]:
        """Wait for the next event.

        This is safe to cancel; an event is never lost to a cancelled call.

        Returns
        -------
        _T | None
            The next event or [None][] if the subscription has ended.
        """

    async def __aenter__(self) -> Self:
        self.open()
        return self

    async def __aexit__(
        self,
        exc_type: typing.Optional[type[BaseException]],
        exc: typing.Optional[BaseException],
        exc_traceback: typing.Optional[types.TracebackType],
    ) -> None:
        self.close()


class AbstractTransport(abc.ABC):
    """Interface of the chat service operations a widget relies on.

    Implementations should raise [reactwidgets.errors.TransportError][] when a
    request fails.
    """

    __slots__ = ()

    @abc.abstractmethod
    async def send_message(
        self,
        channel: hikari.SnowflakeishOr[hikari.PartialChannel],
        /,
        content: hikari.UndefinedOr[str] = hikari.UNDEFINED,
        *,
        embed: hikari.UndefinedOr[hikari.Embed] = hikari.UNDEFINED,
    ) -> MessageRef:
        """Send a message.

        Parameters
        ----------
        channel
            The channel to send the message in.
        content
            The message's text content.
        embed
            The message's embed.

        Returns
        -------
        MessageRef
            Reference to the created message.
        """

    @abc.abstractmethod
    async def edit_message(
        self,
        channel: hikari.SnowflakeishOr[hikari.PartialChannel],
        message: hikari.SnowflakeishOr[hikari.PartialMessage],
        /,
        content: hikari.UndefinedOr[str] = hikari.UNDEFINED,
        *,
        embed: hikari.UndefinedOr[hikari.Embed] = hikari.UNDEFINED,
    ) -> MessageRef:
        """Edit a message.

        Returns
        -------
        MessageRef
            Reference to the edited message.
        """

    @abc.abstractmethod
    async def delete_message(
        self,
        channel: hikari.SnowflakeishOr[hikari.PartialChannel],
        message: hikari.SnowflakeishOr[hikari.PartialMessage],
        /,
    ) -> None:
        """Delete a message."""

    @abc.abstractmethod
    async def add_reaction(
        self,
        channel: hikari.SnowflakeishOr[hikari.PartialChannel],
        message: hikari.SnowflakeishOr[hikari.PartialMessage],
        emoji: _internal.EmojiT,
        /,
    ) -> None:
        """Add a reaction to a message as the transport's own user."""

    @abc.abstractmethod
    async def remove_reaction(
        self,
        channel: hikari.SnowflakeishOr[hikari.PartialChannel],
        message: hikari.SnowflakeishOr[hikari.PartialMessage],
        emoji: _internal.EmojiT,
        user: hikari.SnowflakeishOr[hikari.PartialUser],
        /,
    ) -> None:
        """Remove a user's reaction from a message."""

    @abc.abstractmethod
    async def remove_all_reactions(
        self,
        channel: hikari.SnowflakeishOr[hikari.PartialChannel],
        message: hikari.SnowflakeishOr[hikari.PartialMessage],
        /,
    ) -> None:
        """Remove every reaction from a message."""

    @abc.abstractmethod
    def subscribe_reaction_added(self) -> AbstractSubscription[ReactionAdded]:
        """Subscribe to reactions being added to any message."""

    @abc.abstractmethod
    def subscribe_message_created(self) -> AbstractSubscription[MessageCreated]:
        """Subscribe to messages being created in any channel."""

    @abc.abstractmethod
    async def fetch_self_id(self) -> hikari.Snowflake:
        """Get the ID of the user this transport acts as."""


def _to_reaction_added(event: hikari.ReactionAddEvent, /) -> ReactionAdded:
    return ReactionAdded(
        channel_id=event.channel_id,
        message_id=event.message_id,
        user_id=event.user_id,
        emoji_name=event.emoji_name,
        emoji_id=event.emoji_id,
        is_animated=event.is_animated,
    )


def _to_message_created(event: hikari.MessageCreateEvent, /) -> MessageCreated:
    return MessageCreated(
        channel_id=event.message.channel_id,
        message_id=event.message.id,
        author_id=event.message.author.id,
        content=event.message.content,
    )


def _to_ref(message: hikari.Message, /) -> MessageRef:
    return MessageRef(id=message.id, channel_id=message.channel_id)


class _EventStreamSubscription(AbstractSubscription[_T]):
    """Subscription backed by a Hikari event stream."""

    __slots__ = ("_converter", "_event_manager", "_event_type", "_stream")

    def __init__(
        self,
        event_manager: hikari.api.EventManager,
        event_type: type[_EventT],
        converter: collections.Callable[[_EventT], _T],
        /,
    ) -> None:
        self._converter: collections.Callable[[typing.Any], _T] = converter
        self._event_manager = event_manager
        self._event_type: type[hikari.Event] = event_type
        self._stream: typing.Optional[hikari.api.EventStream[typing.Any]] = None

    def open(self) -> None:
        # <<inherited docstring from AbstractSubscription>>.
        if self._stream is None:
            self._stream = self._event_manager.stream(self._event_type, timeout=None)
            self._stream.open()

    def close(self) -> None:
        # <<inherited docstring from AbstractSubscription>>.
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    async def receive(self) -> typing.Optional[_T]:
        # <<inherited docstring from AbstractSubscription>>.
        if self._stream is None:
            raise RuntimeError("Subscription isn't open")

        try:
            event = await anext(self._stream)

        except StopAsyncIteration:
            return None

        return self._converter(event)


class HikariTransport(AbstractTransport):
    """Transport implementation which uses Hikari's REST client and event manager."""

    __slots__ = ("_event_manager", "_rest", "_self_id")

    def __init__(self, *, rest: hikari.api.RESTClient, event_manager: hikari.api.EventManager) -> None:
        """Initialise a Hikari transport.

        !!! note
            For an easier way to initialise the transport from a bot see
            [HikariTransport.from_gateway_bot][reactwidgets.transport.HikariTransport.from_gateway_bot].

        Parameters
        ----------
        rest
            The REST client to make requests with.
        event_manager
            The event manager to listen for reaction and message events with.
        """
        self._event_manager = event_manager
        self._rest = rest
        self._self_id: typing.Optional[hikari.Snowflake] = None

    @classmethod
    def from_gateway_bot(cls, bot: _internal.GatewayBotProto, /) -> Self:
        """Build a transport from a gateway bot.

        Parameters
        ----------
        bot : hikari.traits.EventManagerAware & hikari.traits.RESTAware
            The bot to build a transport for.

        Returns
        -------
        HikariTransport
            The transport for the bot.
        """
        return cls(rest=bot.rest, event_manager=bot.event_manager)

    async def send_message(
        self,
        channel: hikari.SnowflakeishOr[hikari.PartialChannel],
        /,
        content: hikari.UndefinedOr[str] = hikari.UNDEFINED,
        *,
        embed: hikari.UndefinedOr[hikari.Embed] = hikari.UNDEFINED,
    ) -> MessageRef:
        # <<inherited docstring from AbstractTransport>>.
        try:
            message = await self._rest.create_message(channel, content, embed=embed)

        except hikari.HTTPError as exc:
            raise errors.TransportError(f"Failed to send message: {exc}") from exc

        return _to_ref(message)

    async def edit_message(
        self,
        channel: hikari.SnowflakeishOr[hikari.PartialChannel],
        message: hikari.SnowflakeishOr[hikari.PartialMessage],
        /,
        content: hikari.UndefinedOr[str] = hikari.UNDEFINED,
        *,
        embed: hikari.UndefinedOr[hikari.Embed] = hikari.UNDEFINED,
    ) -> MessageRef:
        # <<inherited docstring from AbstractTransport>>.
        try:
            result = await self._rest.edit_message(channel, message, content, embed=embed)

        except hikari.HTTPError as exc:
            raise errors.TransportError(f"Failed to edit message: {exc}") from exc

        return _to_ref(result)

    async def delete_message(
        self,
        channel: hikari.SnowflakeishOr[hikari.PartialChannel],
        message: hikari.SnowflakeishOr[hikari.PartialMessage],
        /,
    ) -> None:
        # <<inherited docstring from AbstractTransport>>.
        try:
            await self._rest.delete_message(channel, message)

        except hikari.HTTPError as exc:
            raise errors.TransportError(f"Failed to delete message: {exc}") from exc

    async def add_reaction(
        self,
        channel: hikari.SnowflakeishOr[hikari.PartialChannel],
        message: hikari.SnowflakeishOr[hikari.PartialMessage],
        emoji: _internal.EmojiT,
        /,
    ) -> None:
        # <<inherited docstring from AbstractTransport>>.
        try:
            await self._rest.add_reaction(channel, message, emoji)

        except hikari.HTTPError as exc:
            raise errors.TransportError(f"Failed to add reaction: {exc}") from exc

    async def remove_reaction(
        self,
        channel: hikari.SnowflakeishOr[hikari.PartialChannel],
        message: hikari.SnowflakeishOr[hikari.PartialMessage],
        emoji: _internal.EmojiT,
        user: hikari.SnowflakeishOr[hikari.PartialUser],
        /,
    ) -> None:
        # <<inherited docstring from AbstractTransport>>.
        try:
            await self._rest.delete_reaction(channel, message, user, emoji)

        except hikari.HTTPError as exc:
            raise errors.TransportError(f"Failed to remove reaction: {exc}") from exc

    async def remove_all_reactions(
        self,
        channel: hikari.SnowflakeishOr[hikari.PartialChannel],
        message: hikari.SnowflakeishOr[hikari.PartialMessage],
        /,
    ) -> None:
        # <<inherited docstring from AbstractTransport>>.
        try:
            await self._rest.delete_all_reactions(channel, message)

        except hikari.HTTPError as exc:
            raise errors.TransportError(f"Failed to remove reactions: {exc}") from exc

    def subscribe_reaction_added(self) -> AbstractSubscription[ReactionAdded]:
        # <<inherited docstring from AbstractTransport>>.
        return _EventStreamSubscription(self._event_manager, hikari.ReactionAddEvent, _to_reaction_added)

    def subscribe_message_created(self) -> AbstractSubscription[MessageCreated]:
        # <<inherited docstring from AbstractTransport>>.
        return _EventStreamSubscription(self._event_manager, hikari.MessageCreateEvent, _to_message_created)

    async def fetch_self_id(self) -> hikari.Snowflake:
        # <<inherited docstring from AbstractTransport>>.
        if self._self_id is None:
            try:
                user = await self._rest.fetch_my_user()

            except hikari.HTTPError as exc:
                raise errors.TransportError(f"Failed to fetch own user: {exc}") from exc

            self._self_id = user.id

        return self._self_id
