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
"""Internal functions and types used in reactwidgets."""
from __future__ import annotations

__all__: list[str] = []

import re
import typing

import hikari

from . import errors

EmojiT = typing.Union[str, hikari.CustomEmoji]
"""Type hint of an emoji which can be used as a reaction button."""

EmojiIdentifierT = typing.Union[str, hikari.Snowflake]
"""Type hint of the key a reaction emoji is identified by.

This is the emoji's ID for custom emojis and the emoji itself for unicode emojis.
"""

_SNOWFLAKE_PATTERN: typing.Final[re.Pattern[str]] = re.compile(r"^[0-9]{15,21}$")
_MAX_SNOWFLAKE: typing.Final[int] = (1 << 64) - 1


class GatewayBotProto(hikari.EventManagerAware, hikari.RESTAware, typing.Protocol):
    """Protocol of a cacheless Hikari Gateway bot."""


def to_emoji_identifier(emoji: EmojiT, /) -> EmojiIdentifierT:
    """Get the key used to identify an emoji in reaction events."""
    if isinstance(emoji, hikari.CustomEmoji):
        return emoji.id

    return str(emoji)


def parse_user_id(user: typing.Union[str, hikari.SnowflakeishOr[hikari.User]], /) -> hikari.Snowflake:
    """Validate and normalise a user ID.

    Raises
    ------
    reactwidgets.errors.InvalidIDError
        If `user` doesn't look like a snowflake.
    """
    if isinstance(user, str):
        if not _SNOWFLAKE_PATTERN.match(user):
            raise errors.InvalidIDError(f"{user!r} is not a valid user ID")

        user = int(user)

    elif isinstance(user, bool) or not isinstance(user, (int, hikari.Unique)):
        raise errors.InvalidIDError(f"{user!r} is not a valid user ID")

    value = int(user)
    if not 0 < value <= _MAX_SNOWFLAKE:
        raise errors.InvalidIDError(f"{value!r} is not a valid user ID")

    return hikari.Snowflake(value)
