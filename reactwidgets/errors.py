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
"""Errors raised by widgets, paginators and transports."""
from __future__ import annotations

__all__: list[str] = [
    "AlreadyRunningError",
    "IndexOutOfBoundsError",
    "InvalidIDError",
    "NilContentError",
    "NilMessageError",
    "NotRunningError",
    "TransportError",
    "WidgetError",
]


class WidgetError(Exception):
    """Base class for all errors raised by this library."""


class AlreadyRunningError(WidgetError):
    """Error raised when spawning a widget or paginator which is already running."""


class IndexOutOfBoundsError(WidgetError, IndexError):
    """Error raised when a page index falls outside of a paginator's pages."""


class NilMessageError(WidgetError):
    """Error raised when an action needs the widget's message before it's been sent."""


class NilContentError(WidgetError):
    """Error raised when spawning a widget which has no content to send."""


class NotRunningError(WidgetError):
    """Error raised when an action needs the widget to be running."""


class InvalidIDError(WidgetError, ValueError):
    """Error raised when a user ID isn't a valid snowflake."""


class TransportError(WidgetError):
    """Error raised by a transport when a request to the chat service fails.

    The original error (e.g. [hikari.HTTPError][]) is available as `__cause__`.
    """
