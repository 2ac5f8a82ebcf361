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
"""Classes used for bounding how long a widget listens for reactions."""
from __future__ import annotations

__all__ = ["AbstractTimeout", "NeverTimeout", "StaticTimeout", "from_timedelta"]

import abc
import datetime
import typing


class AbstractTimeout(abc.ABC):
    """Abstract interface used to manage timing out a widget's event loop."""

    __slots__ = ()

    @property
    @abc.abstractmethod
    def has_expired(self) -> bool:
        """Whether this has timed-out."""

    @property
    @abc.abstractmethod
    def remaining(self) -> typing.Optional[float]:
        """How many seconds are left before this times out.

        This will be [None][] if this never times out and is never negative.
        """


class NeverTimeout(AbstractTimeout):
    """Timeout implementation which never expires."""

    __slots__ = ()

    @property
    def has_expired(self) -> bool:
        # <<inherited docstring from AbstractTimeout>>.
        return False

    @property
    def remaining(self) -> typing.Optional[float]:
        # <<inherited docstring from AbstractTimeout>>.
        return None


class StaticTimeout(AbstractTimeout):
    """Timeout at a specific time.

    Unlike an idle timer this is never pushed back by activity; a widget using
    this will stop at `timeout_at` no matter how often it's used.
    """

    __slots__ = ("_timeout_at",)

    def __init__(self, timeout_at: datetime.datetime, /) -> None:
        """Initialise a static timeout.

        Parameters
        ----------
        timeout_at
            When this should time out.
        """
        self._timeout_at = timeout_at

    @property
    def timeout_at(self) -> datetime.datetime:
        """When this times out."""
        return self._timeout_at

    @property
    def has_expired(self) -> bool:
        # <<inherited docstring from AbstractTimeout>>.
        return datetime.datetime.now(tz=self._timeout_at.tzinfo) >= self._timeout_at

    @property
    def remaining(self) -> typing.Optional[float]:
        # <<inherited docstring from AbstractTimeout>>.
        remaining = self._timeout_at - datetime.datetime.now(tz=self._timeout_at.tzinfo)
        return max(remaining.total_seconds(), 0.0)


def from_timedelta(timeout: typing.Optional[datetime.timedelta], /) -> AbstractTimeout:
    """Create a timeout which expires `timeout` from now.

    Parameters
    ----------
    timeout
        How long until this times out.

        [None][] or a zero duration disables the timeout.

    Returns
    -------
    AbstractTimeout
        The created timeout.
    """
    if not timeout:
        return NeverTimeout()

    return StaticTimeout(datetime.datetime.now(tz=datetime.timezone.utc) + timeout)
