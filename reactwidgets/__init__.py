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
"""Reaction driven widgets and paginators for Hikari."""

from __future__ import annotations

__all__: list[str] = [
    "AbstractTransport",
    "AlreadyRunningError",
    "DoneBehaviour",
    "HikariTransport",
    "IndexOutOfBoundsError",
    "InvalidIDError",
    "MessageCreated",
    "MessageRef",
    "NilContentError",
    "NilMessageError",
    "NotRunningError",
    "Paginator",
    "ReactionAdded",
    "TransportError",
    "Widget",
    "WidgetError",
    "errors",
    "paginator",
    "timeouts",
    "transport",
    "widget",
]

from . import errors
from . import paginator
from . import timeouts
from . import transport
from . import widget
from .errors import AlreadyRunningError
from .errors import IndexOutOfBoundsError
from .errors import InvalidIDError
from .errors import NilContentError
from .errors import NilMessageError
from .errors import NotRunningError
from .errors import TransportError
from .errors import WidgetError
from .paginator import DoneBehaviour
from .paginator import Paginator
from .transport import AbstractTransport
from .transport import HikariTransport
from .transport import MessageCreated
from .transport import MessageRef
from .transport import ReactionAdded
from .widget import Widget
