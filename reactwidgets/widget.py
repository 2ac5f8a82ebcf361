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
"""A message bound widget which is driven by reactions."""
from __future__ import annotations

__all__: list[str] = ["CallbackSig", "Widget"]

import asyncio
import datetime
import logging
import threading
import typing
from collections import abc as collections

import hikari

from . import _internal
from . import errors
from . import timeouts
from . import transport as transport_

if typing.TYPE_CHECKING:
    import alluka as alluka_
    from typing_extensions import Self

    _CallbackSigT = typing.TypeVar("_CallbackSigT", bound="CallbackSig")


_LOGGER = logging.getLogger("hikari.reactwidgets")

CallbackSig = collections.Callable[..., collections.Coroutine[typing.Any, typing.Any, None]]
"""Type-hint of a reaction callback.

This is called with the widget and the [reactwidgets.transport.ReactionAdded][]
event which triggered it.
"""

REACTION_CLEANUP_DELAY: typing.Final[float] = 0.25
"""How many seconds the widget waits before removing a user's reaction after handling it."""


class Widget:
    r"""A message with reaction buttons which trigger callbacks.

    The widget owns a single message: [Widget.spawn][reactwidgets.widget.Widget.spawn]
    sends it, adds a reaction for every registered handler and then listens for
    reactions on it until the widget times out or is closed.

    Examples
    --------
    ```py
    widget = Widget(transport, channel_id, hikari.Embed(title="Counter: 0"))
    count = 0

    @widget.with_handler("\N{HEAVY PLUS SIGN}")
    async def increment(widget: Widget, event: ReactionAdded) -> None:
        nonlocal count
        count += 1
        await widget.update_content(hikari.Embed(title=f"Counter: {count}"))

    await widget.spawn()
    ```
    """

    __slots__ = (
        "_alluka",
        "_authors",
        "_channel_id",
        "_cleanup_tasks",
        "_close_event",
        "_content",
        "_handlers",
        "_lock",
        "_loop",
        "_message",
        "_remove_reactions",
        "_running",
        "_spawner",
        "_timeout",
        "_transport",
    )

    def __init__(
        self,
        transport: transport_.AbstractTransport,
        channel: hikari.SnowflakeishOr[hikari.PartialChannel],
        /,
        content: typing.Optional[hikari.Embed] = None,
        *,
        authors: collections.Iterable[hikari.SnowflakeishOr[hikari.User]] = (),
        timeout: typing.Optional[datetime.timedelta] = None,
        remove_reactions: bool = True,
        alluka: typing.Optional[alluka_.abc.Client] = None,
    ) -> None:
        """Initialise a widget.

        Parameters
        ----------
        transport
            The transport used to send the widget's message and receive reactions.
        channel
            The channel the widget should be spawned in.
        content
            The embed to send when the widget's spawned.
        authors
            IDs of the users who can use this widget.

            If no users are provided then the widget will be public (meaning
            that anybody can use it).
        timeout
            How long after being spawned the widget should stop listening for reactions.

            This is a fixed deadline which isn't reset by activity. If left as
            [None][] (or zero) then the widget will run until closed.
        remove_reactions
            Whether users' reactions should be removed from the message after
            they've been handled.
        alluka
            The Alluka client to use for callback dependency injection.
        """
        self._alluka = alluka
        self._authors = set(map(hikari.Snowflake, authors))
        self._channel_id = hikari.Snowflake(channel)
        self._cleanup_tasks: set[asyncio.Task[None]] = set()
        self._close_event: typing.Optional[asyncio.Event] = None
        self._content = content
        self._handlers: dict[_internal.EmojiIdentifierT, tuple[_internal.EmojiT, CallbackSig]] = {}
        self._lock = threading.Lock()
        self._loop: typing.Optional[asyncio.AbstractEventLoop] = None
        self._message: typing.Optional[transport_.MessageRef] = None
        self._remove_reactions = remove_reactions
        self._running = False
        self._spawner: typing.Optional[hikari.Snowflake] = None
        self._timeout = timeout
        self._transport = transport

    @property
    def authors(self) -> collections.Set[hikari.Snowflake]:
        """Set of the users who can use this widget.

        !!! note
            If this is empty then the widget is considered public and
            any user will be able to trigger it.
        """
        return frozenset(self._authors)

    @property
    def channel_id(self) -> hikari.Snowflake:
        """ID of the channel this widget is spawned in."""
        return self._channel_id

    @property
    def content(self) -> typing.Optional[hikari.Embed]:
        """The embed this widget displays."""
        return self._content

    @content.setter
    def content(self, content: typing.Optional[hikari.Embed], /) -> None:
        self._content = content

    @property
    def emojis(self) -> collections.Sequence[_internal.EmojiT]:
        """The emojis of the registered handlers in the order they were registered."""
        with self._lock:
            return [emoji for emoji, _ in self._handlers.values()]

    @property
    def locked_to(self) -> typing.Optional[hikari.Snowflake]:
        """ID of the user this widget's been locked to, if set."""
        return self._spawner

    @property
    def message(self) -> typing.Optional[transport_.MessageRef]:
        """Reference to the widget's message.

        This is [None][] until the widget's been spawned and is kept after the
        widget stops running.
        """
        return self._message

    @property
    def running(self) -> bool:
        """Whether the widget's event loop is currently running."""
        with self._lock:
            return self._running

    @property
    def timeout(self) -> typing.Optional[datetime.timedelta]:
        """How long the widget listens for reactions for once spawned."""
        return self._timeout

    @timeout.setter
    def timeout(self, timeout: typing.Optional[datetime.timedelta], /) -> None:
        self._timeout = timeout

    @property
    def transport(self) -> transport_.AbstractTransport:
        """The transport this widget uses."""
        return self._transport

    def is_running(self) -> bool:
        """Whether the widget's event loop is currently running."""
        return self.running

    def add_author(self, user: hikari.SnowflakeishOr[hikari.User], /) -> Self:
        """Add a author/owner to this widget.

        Parameters
        ----------
        user
            The user to add as an owner for this widget.
        """
        self._authors.add(hikari.Snowflake(user))
        return self

    def remove_author(self, user: hikari.SnowflakeishOr[hikari.User], /) -> None:
        """Remove a author/owner from this widget.

        !!! note
            If the provided user isn't already a registered owner of this widget
            then this should pass silently without raising.
        """
        self._authors.discard(hikari.Snowflake(user))

    def lock_to_user(self, user: typing.Union[str, hikari.SnowflakeishOr[hikari.User]], /) -> None:
        """Ignore reactions from anyone other than the given user.

        Parameters
        ----------
        user
            The user to lock this widget to.

        Raises
        ------
        reactwidgets.errors.InvalidIDError
            If `user` isn't a valid user ID.
        """
        self._spawner = _internal.parse_user_id(user)

    def unlock_from_user(self) -> None:
        """Let anyone allowed by [Widget.authors][reactwidgets.widget.Widget.authors] use this widget again."""
        self._spawner = None

    def _add_handler(self, emoji: _internal.EmojiT, callback: CallbackSig, /) -> bool:
        identifier = _internal.to_emoji_identifier(emoji)
        with self._lock:
            if identifier in self._handlers:
                return False

            self._handlers[identifier] = (emoji, callback)
            return True

    def set_handler(self, emoji: _internal.EmojiT, callback: CallbackSig, /) -> Self:
        """Register a callback for an emoji.

        If a callback's already registered for the emoji then this does nothing.

        !!! note
            This won't add a reaction to an already spawned message; use
            [Widget.handle][reactwidgets.widget.Widget.handle] for that.

        Parameters
        ----------
        emoji
            The emoji to register the callback for.
        callback
            The callback to call when a user reacts with `emoji`.

        Returns
        -------
        Self
            The widget to enable chained calls.
        """
        self._add_handler(emoji, callback)
        return self

    def with_handler(self, emoji: _internal.EmojiT, /) -> collections.Callable[[_CallbackSigT], _CallbackSigT]:
        """Register a callback for an emoji through a decorator call.

        Parameters
        ----------
        emoji
            The emoji to register the callback for.

        Returns
        -------
        collections.abc.Callable[[CallbackSig], CallbackSig]
            A decorator to register a callback.
        """

        def decorator(callback: _CallbackSigT, /) -> _CallbackSigT:
            self.set_handler(emoji, callback)
            return callback

        return decorator

    def remove_handler(self, emoji: _internal.EmojiT, /) -> None:
        """Remove the callback registered for an emoji.

        Raises
        ------
        KeyError
            If no callback's registered for the emoji.
        """
        identifier = _internal.to_emoji_identifier(emoji)
        with self._lock:
            del self._handlers[identifier]

    async def handle(self, emoji: _internal.EmojiT, callback: CallbackSig, /) -> None:
        """Register a callback for an emoji and add its reaction to a live message.

        If a callback's already registered for the emoji then this does nothing.

        Parameters
        ----------
        emoji
            The emoji to register the callback for.
        callback
            The callback to call when a user reacts with `emoji`.

        Raises
        ------
        reactwidgets.errors.TransportError
            If adding the reaction to the message failed. The callback stays
            registered.
        """
        if not self._add_handler(emoji, callback):
            return

        message = self._message
        if self.running and message is not None:
            await self._transport.add_reaction(message.channel_id, message.id, emoji)

    async def spawn(self) -> None:
        """Send the widget's message and handle reactions until the widget stops.

        This returns once the widget's timed out or been closed.

        Raises
        ------
        reactwidgets.errors.AlreadyRunningError
            If the widget is already running.
        reactwidgets.errors.NilContentError
            If the widget has no content to send.
        reactwidgets.errors.TransportError
            If sending the widget's message failed.
        """
        with self._lock:
            if self._running:
                raise errors.AlreadyRunningError("Widget is already running")

            content = self._content
            if content is None:
                raise errors.NilContentError("Widget has no content to send")

            self._running = True
            self._message = None
            close_event = self._close_event = asyncio.Event()
            self._loop = asyncio.get_running_loop()

        try:
            await self._run(content, close_event)

        finally:
            with self._lock:
                self._running = False
                self._close_event = None
                self._loop = None

            _LOGGER.debug("Widget in channel %s stopped", self._channel_id)

    async def _run(self, content: hikari.Embed, close_event: asyncio.Event, /) -> None:
        async with self._transport.subscribe_reaction_added() as subscription:
            self_id = await self._transport.fetch_self_id()
            message = self._message = await self._transport.send_message(self._channel_id, embed=content)
            timeout = timeouts.from_timedelta(self._timeout)
            _LOGGER.debug("Spawned widget on message %s", message.id)

            for emoji in self.emojis:
                try:
                    await self._transport.add_reaction(message.channel_id, message.id, emoji)

                except errors.TransportError as exc:
                    _LOGGER.debug("Failed to add reaction %r to message %s: %s", emoji, message.id, exc)

            while (event := await self._wait_for_reaction(subscription, close_event, timeout)) is not None:
                if not self._should_dispatch(event, message, self_id):
                    continue

                try:
                    await self._dispatch(event)

                finally:
                    if self._remove_reactions:
                        self._schedule_cleanup(event)

    async def _wait_for_reaction(
        self,
        subscription: transport_.AbstractSubscription[transport_.ReactionAdded],
        close_event: asyncio.Event,
        timeout: timeouts.AbstractTimeout,
        /,
    ) -> typing.Optional[transport_.ReactionAdded]:
        if close_event.is_set() or timeout.has_expired:
            return None

        receive = asyncio.ensure_future(subscription.receive())
        closed = asyncio.ensure_future(close_event.wait())
        try:
            await asyncio.wait((receive, closed), timeout=timeout.remaining, return_when=asyncio.FIRST_COMPLETED)

        finally:
            receive.cancel()
            closed.cancel()

        # Closing takes priority over an event which arrived at the same time.
        if close_event.is_set() or not receive.done():
            return None

        return receive.result()

    def _should_dispatch(
        self, event: transport_.ReactionAdded, message: transport_.MessageRef, self_id: hikari.Snowflake, /
    ) -> bool:
        if event.message_id != message.id or event.user_id == self_id:
            return False

        if self._spawner is not None and event.user_id != self._spawner:
            return False

        return not self._authors or event.user_id in self._authors

    async def _dispatch(self, event: transport_.ReactionAdded, /) -> None:
        with self._lock:
            entry = self._handlers.get(event.emoji_identifier)

        if entry is None:
            return

        _, callback = entry
        try:
            if self._alluka:
                await self._alluka.call_with_async_di(callback, self, event)

            else:
                await callback(self, event)

        except Exception:
            _LOGGER.exception("Reaction callback for %r on message %s failed", event.emoji_identifier, event.message_id)

    def _schedule_cleanup(self, event: transport_.ReactionAdded, /) -> None:
        task = asyncio.create_task(self._remove_reaction_later(event))
        self._cleanup_tasks.add(task)
        task.add_done_callback(self._cleanup_tasks.discard)

    async def _remove_reaction_later(self, event: transport_.ReactionAdded, /) -> None:
        await asyncio.sleep(REACTION_CLEANUP_DELAY)
        try:
            await self._transport.remove_reaction(event.channel_id, event.message_id, event.emoji, event.user_id)

        except errors.TransportError as exc:
            _LOGGER.debug("Failed to remove reaction from message %s: %s", event.message_id, exc)

    async def update_content(self, content: hikari.Embed, /) -> transport_.MessageRef:
        """Edit the widget's message to display new content.

        Parameters
        ----------
        content
            The embed to display.

        Returns
        -------
        reactwidgets.transport.MessageRef
            Reference to the edited message.

        Raises
        ------
        reactwidgets.errors.NotRunningError
            If the widget isn't running.
        reactwidgets.errors.NilMessageError
            If the widget's message hasn't been sent yet.
        reactwidgets.errors.TransportError
            If editing the message failed.
        """
        with self._lock:
            if not self._running:
                raise errors.NotRunningError("Widget is not running")

            message = self._message

        if message is None:
            raise errors.NilMessageError("Widget's message hasn't been sent")

        result = await self._transport.edit_message(message.channel_id, message.id, embed=content)
        self._content = content
        return result

    def close(self) -> None:
        """Stop the widget's event loop.

        This is safe to call multiple times, from any thread, and does nothing
        if the widget isn't running.
        """
        with self._lock:
            close_event = self._close_event
            loop = self._loop

        if close_event is None or loop is None:
            return

        try:
            current_loop = asyncio.get_running_loop()

        except RuntimeError:
            current_loop = None

        if current_loop is loop:
            close_event.set()

        else:
            loop.call_soon_threadsafe(close_event.set)

    async def _try_delete(self, message: transport_.MessageRef, /) -> None:
        try:
            await self._transport.delete_message(message.channel_id, message.id)

        except errors.TransportError as exc:
            _LOGGER.debug("Failed to delete message %s: %s", message.id, exc)

    async def query_input(
        self,
        prompt: str,
        user: hikari.SnowflakeishOr[hikari.User],
        /,
        *,
        timeout: typing.Union[datetime.timedelta, float] = 10.0,
    ) -> transport_.MessageCreated:
        """Ask a user for text input in the widget's channel.

        The prompt and the user's reply are both deleted once a reply's received.

        Parameters
        ----------
        prompt
            The prompt to send. This is prefixed with a mention of the user.
        user
            The user to wait for a reply from.
        timeout
            How long to wait for a reply.

        Returns
        -------
        reactwidgets.transport.MessageCreated
            The user's reply.

        Raises
        ------
        asyncio.TimeoutError
            If the user didn't reply in time.
        reactwidgets.errors.TransportError
            If sending the prompt failed.
        """
        if isinstance(timeout, datetime.timedelta):
            timeout = timeout.total_seconds()

        user_id = hikari.Snowflake(user)
        async with self._transport.subscribe_message_created() as subscription:
            prompt_message = await self._transport.send_message(self._channel_id, f"<@{user_id}>, {prompt}")
            try:
                response = await asyncio.wait_for(self._wait_for_reply(subscription, user_id), timeout)

            finally:
                await self._try_delete(prompt_message)

        await self._try_delete(transport_.MessageRef(id=response.message_id, channel_id=response.channel_id))
        return response

    async def _wait_for_reply(
        self, subscription: transport_.AbstractSubscription[transport_.MessageCreated], user_id: hikari.Snowflake, /
    ) -> transport_.MessageCreated:
        while (message := await subscription.receive()) is not None:
            if message.channel_id == self._channel_id and message.author_id == user_id:
                return message

        raise asyncio.TimeoutError("Message subscription ended before the user replied")
