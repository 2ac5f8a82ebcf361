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
"""A reaction driven paginator built on top of [reactwidgets.widget.Widget][]."""
from __future__ import annotations

__all__: list[str] = [
    "FIRST",
    "JUMP",
    "JUMP_PROMPT",
    "JUMP_PROMPT_TIMEOUT",
    "LAST",
    "NEXT",
    "PREVIOUS",
    "DoneBehaviour",
    "Paginator",
]

import asyncio
import dataclasses
import datetime
import logging
import threading
import typing
from collections import abc as collections

import hikari

from . import errors
from . import widget as widget_

if typing.TYPE_CHECKING:
    import alluka as alluka_

    from . import transport as transport_


_LOGGER = logging.getLogger("hikari.reactwidgets")

FIRST: typing.Final[hikari.UnicodeEmoji] = hikari.UnicodeEmoji(
    "\N{BLACK LEFT-POINTING DOUBLE TRIANGLE WITH VERTICAL BAR}\N{VARIATION SELECTOR-16}"
)
"""The emoji used to go back to the first page."""
PREVIOUS: typing.Final[hikari.UnicodeEmoji] = hikari.UnicodeEmoji(
    "\N{BLACK LEFT-POINTING TRIANGLE}\N{VARIATION SELECTOR-16}"
)
"""The emoji used to go back a page."""
NEXT: typing.Final[hikari.UnicodeEmoji] = hikari.UnicodeEmoji(
    "\N{BLACK RIGHT-POINTING TRIANGLE}\N{VARIATION SELECTOR-16}"
)
"""The emoji used to continue to the next page."""
LAST: typing.Final[hikari.UnicodeEmoji] = hikari.UnicodeEmoji(
    "\N{BLACK RIGHT-POINTING DOUBLE TRIANGLE WITH VERTICAL BAR}\N{VARIATION SELECTOR-16}"
)
"""The emoji used to skip to the last page."""
JUMP: typing.Final[hikari.UnicodeEmoji] = hikari.UnicodeEmoji("\N{INPUT SYMBOL FOR NUMBERS}")
"""The emoji used to jump to a page number entered by the user."""

JUMP_PROMPT: typing.Final[str] = "enter the page number you would like to open"
"""The prompt sent when a user asks to jump to a page."""
JUMP_PROMPT_TIMEOUT: typing.Final[datetime.timedelta] = datetime.timedelta(seconds=10)
"""How long a user has to answer the jump prompt by default."""


@dataclasses.dataclass(frozen=True)
class DoneBehaviour:
    """What a paginator should do to its message once it stops running."""

    delete_message: bool = False
    """Whether the message should be deleted."""

    colour: typing.Optional[hikari.Colorish] = None
    """Colour to set on the final page's embed.

    This is ignored if `delete_message` is set.
    """

    remove_reactions: bool = False
    """Whether all reactions should be removed from the message."""


class Paginator:
    """Reaction paginator for navigating through a list of embeds.

    The paginator registers the [FIRST][reactwidgets.paginator.FIRST],
    [PREVIOUS][reactwidgets.paginator.PREVIOUS], [NEXT][reactwidgets.paginator.NEXT],
    [LAST][reactwidgets.paginator.LAST] and [JUMP][reactwidgets.paginator.JUMP]
    buttons on its widget in that order.

    Examples
    --------
    ```py
    paginator = Paginator(transport, channel_id, loop=True, timeout=datetime.timedelta(minutes=5))
    paginator.add(hikari.Embed(title="Cats"), hikari.Embed(title="More cats"))
    paginator.set_page_footers()
    paginator.lock_to_user(ctx.author.id)
    await paginator.spawn()
    ```
    """

    __slots__ = ("_done_behaviour", "_index", "_jump_timeout", "_lock", "_pages", "_running", "_widget", "loop")

    def __init__(
        self,
        transport: transport_.AbstractTransport,
        channel: hikari.SnowflakeishOr[hikari.PartialChannel],
        /,
        pages: collections.Iterable[hikari.Embed] = (),
        *,
        loop: bool = False,
        authors: collections.Iterable[hikari.SnowflakeishOr[hikari.User]] = (),
        timeout: typing.Optional[datetime.timedelta] = None,
        done_behaviour: DoneBehaviour = DoneBehaviour(),
        jump_timeout: datetime.timedelta = JUMP_PROMPT_TIMEOUT,
        alluka: typing.Optional[alluka_.abc.Client] = None,
    ) -> None:
        """Initialise a paginator.

        Parameters
        ----------
        transport
            The transport used to send the paginator's message and receive reactions.
        channel
            The channel the paginator should be spawned in.
        pages
            The initial pages.
        loop
            Whether going past the last or first page should wrap around.
        authors
            IDs of the users who can use this paginator.

            If no users are provided then the paginator will be public.
        timeout
            How long after being spawned the paginator should stop.
        done_behaviour
            What to do to the message once the paginator stops.
        jump_timeout
            How long a user has to answer the jump to page prompt.
        alluka
            The Alluka client to use for callback dependency injection.
        """
        self._done_behaviour = done_behaviour
        self._index = 0
        self._jump_timeout = jump_timeout
        self._lock = threading.Lock()
        self._pages: list[hikari.Embed] = list(pages)
        self._running = False
        self._widget = widget_.Widget(transport, channel, authors=authors, timeout=timeout, alluka=alluka)
        self.loop = loop
        """Whether going past the last or first page wraps around."""

        (
            self._widget.set_handler(FIRST, self._on_first)
            .set_handler(PREVIOUS, self._on_previous)
            .set_handler(NEXT, self._on_next)
            .set_handler(LAST, self._on_last)
            .set_handler(JUMP, self._on_jump)
        )

    @property
    def done_behaviour(self) -> DoneBehaviour:
        """What this does to its message once it stops running."""
        return self._done_behaviour

    @done_behaviour.setter
    def done_behaviour(self, done_behaviour: DoneBehaviour, /) -> None:
        self._done_behaviour = done_behaviour

    @property
    def index(self) -> int:
        """Index of the current page."""
        with self._lock:
            return self._index

    @property
    def pages(self) -> collections.Sequence[hikari.Embed]:
        """The paginator's pages."""
        with self._lock:
            return tuple(self._pages)

    @property
    def running(self) -> bool:
        """Whether the paginator is currently running."""
        with self._lock:
            return self._running

    @property
    def widget(self) -> widget_.Widget:
        """The widget this paginator drives."""
        return self._widget

    def is_running(self) -> bool:
        """Whether the paginator is currently running."""
        return self.running

    def add(self, *pages: hikari.Embed) -> None:
        """Add pages to the end of the paginator."""
        with self._lock:
            self._pages.extend(pages)

    def page(self) -> hikari.Embed:
        """Get the current page.

        Raises
        ------
        reactwidgets.errors.IndexOutOfBoundsError
            If the current index doesn't point at a page, e.g. because there
            are no pages.
        """
        with self._lock:
            if not 0 <= self._index < len(self._pages):
                raise errors.IndexOutOfBoundsError(f"Page index {self._index} is out of bounds")

            return self._pages[self._index]

    def goto(self, index: int, /) -> None:
        """Jump to a page.

        Parameters
        ----------
        index
            Zero-based index of the page.

        Raises
        ------
        reactwidgets.errors.IndexOutOfBoundsError
            If there's no page at `index`.
        """
        with self._lock:
            if not 0 <= index < len(self._pages):
                raise errors.IndexOutOfBoundsError(f"Page index {index} is out of bounds")

            self._index = index

    def next_page(self) -> None:
        """Move to the next page.

        Raises
        ------
        reactwidgets.errors.IndexOutOfBoundsError
            If already on the last page and not looping.
        """
        with self._lock:
            if 0 <= self._index + 1 < len(self._pages):
                self._index += 1

            elif self.loop and self._pages:
                self._index = 0

            else:
                raise errors.IndexOutOfBoundsError("Already on the last page")

    def previous_page(self) -> None:
        """Move to the previous page.

        Raises
        ------
        reactwidgets.errors.IndexOutOfBoundsError
            If already on the first page and not looping.
        """
        with self._lock:
            if 0 <= self._index - 1 < len(self._pages):
                self._index -= 1

            elif self.loop and self._pages:
                self._index = len(self._pages) - 1

            else:
                raise errors.IndexOutOfBoundsError("Already on the first page")

    def set_page_footers(self) -> None:
        """Set each page's footer to its position, e.g. `#[2 / 5]`."""
        with self._lock:
            total = len(self._pages)
            for index, page in enumerate(self._pages, start=1):
                page.set_footer(f"#[{index} / {total}]")

    def lock_to_user(self, user: typing.Union[str, hikari.SnowflakeishOr[hikari.User]], /) -> None:
        """Ignore reactions from anyone other than the given user.

        Raises
        ------
        reactwidgets.errors.InvalidIDError
            If `user` isn't a valid user ID.
        """
        self._widget.lock_to_user(user)

    def unlock_from_user(self) -> None:
        """Stop ignoring reactions from users other than the one this was locked to."""
        self._widget.unlock_from_user()

    def close(self) -> None:
        """Stop the paginator.

        This is safe to call multiple times.
        """
        self._widget.close()

    async def update(self) -> transport_.MessageRef:
        """Edit the paginator's message to show the current page.

        Raises
        ------
        reactwidgets.errors.NilMessageError
            If the paginator's message hasn't been sent.
        reactwidgets.errors.IndexOutOfBoundsError
            If the current index doesn't point at a page.
        reactwidgets.errors.NotRunningError
            If the paginator's widget isn't running.
        reactwidgets.errors.TransportError
            If editing the message failed.
        """
        if self._widget.message is None:
            raise errors.NilMessageError("Paginator's message hasn't been sent")

        return await self._widget.update_content(self.page())

    async def spawn(self) -> None:
        """Send the current page and handle navigation until the paginator stops.

        The configured [DoneBehaviour][reactwidgets.paginator.DoneBehaviour] is
        applied to the message after the paginator stops, even if it stopped
        because of an error.

        Raises
        ------
        reactwidgets.errors.AlreadyRunningError
            If the paginator is already running.
        reactwidgets.errors.IndexOutOfBoundsError
            If the paginator has no pages.
        reactwidgets.errors.TransportError
            If sending the paginator's message failed.
        """
        with self._lock:
            if self._running or self._widget.running:
                raise errors.AlreadyRunningError("Paginator is already running")

            self._running = True

        previous_message = self._widget.message
        try:
            self._widget.content = self.page()
            await self._widget.spawn()

        finally:
            with self._lock:
                self._running = False

            message = self._widget.message
            # Only clean up a message this call actually sent.
            if message is not None and message != previous_message:
                await self._finish(message)

    async def _finish(self, message: transport_.MessageRef, /) -> None:
        transport = self._widget.transport
        behaviour = self._done_behaviour
        if behaviour.delete_message:
            try:
                await transport.delete_message(message.channel_id, message.id)

            except errors.TransportError as exc:
                _LOGGER.debug("Failed to delete paginator message %s: %s", message.id, exc)

            else:
                return

        elif behaviour.colour is not None:
            try:
                page = self.page()

            except errors.IndexOutOfBoundsError:
                pass

            else:
                page.color = behaviour.colour
                try:
                    await transport.edit_message(message.channel_id, message.id, embed=page)

                except errors.TransportError as exc:
                    _LOGGER.debug("Failed to recolour paginator message %s: %s", message.id, exc)

        if behaviour.remove_reactions:
            try:
                await transport.remove_all_reactions(message.channel_id, message.id)

            except errors.TransportError as exc:
                _LOGGER.debug("Failed to remove reactions from paginator message %s: %s", message.id, exc)

    async def _on_first(self, _: widget_.Widget, __: transport_.ReactionAdded, /) -> None:
        try:
            self.goto(0)

        except errors.IndexOutOfBoundsError:
            return

        await self.update()

    async def _on_previous(self, _: widget_.Widget, __: transport_.ReactionAdded, /) -> None:
        try:
            self.previous_page()

        except errors.IndexOutOfBoundsError:
            return

        await self.update()

    async def _on_next(self, _: widget_.Widget, __: transport_.ReactionAdded, /) -> None:
        try:
            self.next_page()

        except errors.IndexOutOfBoundsError:
            return

        await self.update()

    async def _on_last(self, _: widget_.Widget, __: transport_.ReactionAdded, /) -> None:
        try:
            self.goto(len(self._pages) - 1)

        except errors.IndexOutOfBoundsError:
            return

        await self.update()

    async def _on_jump(self, widget: widget_.Widget, event: transport_.ReactionAdded, /) -> None:
        try:
            response = await widget.query_input(JUMP_PROMPT, event.user_id, timeout=self._jump_timeout)

        except asyncio.TimeoutError:
            return

        except errors.TransportError as exc:
            _LOGGER.debug("Failed to prompt user %s for a page number: %s", event.user_id, exc)
            return

        try:
            self.goto(int((response.content or "").strip()) - 1)

        except (ValueError, errors.IndexOutOfBoundsError):
            return

        await self.update()
