# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Solution record decoding and byte stream parsing.

A solution stream is a sequence of text lines, one navigation epoch each::

    <utc> <lat(deg)> <lon(deg)> <height(m)> <ve> <vn> <vu> <flag> <dop>

Fields are separated by runs of whitespace.  Bytes arrive one at a time;
``$`` (or any control byte other than CR/LF) restarts the current line and
LF completes it.  The line ``$_DISCONNECT`` marks an intentional end of
stream.
"""

from __future__ import annotations

import logging
import math
import re
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Optional, Tuple

import numpy as np

from ..coordinate.transforms import enu2ecef, llh2ecef
from ..core.constants import (COMMENTH, D2R, JST_OFFSET, MAXSOLMSG, MSG_DISCONN,
                              SOLSYNC, SOLTYPE_XYZ, TIMES_JST, TIMES_UTC)
from ..core.data_structures import SOLOPT_DEFAULT, ReadConfig, Solution, SolutionOptions
from ..core.time import TIME_MAX, TIME_MIN, GTime, screent, timeadd, utc2gpst
from ..logger import LogLevel

if TYPE_CHECKING:
    from .solution_buffer import SolutionBuffer

logger = logging.getLogger(__name__)

CR = 0x0D
LF = 0x0A
NFIELD = 9  # utc, lat, lon, height, ve, vn, vu, flag, dop

# Plain decimal literals as read by scanf, no digit separators
_REAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INTEGER = re.compile(r"[+-]?[0-9]+")


class ParseEvent(Enum):
    """Outcome of feeding one byte to a SolutionStreamParser"""
    PENDING = 0     # line not complete yet
    RECORD = 1      # line decoded into a solution
    INVALID = 2     # line complete but not a solution record
    DISCONNECT = 3  # disconnect message received


class ParserState(Enum):
    """Line synchronization state"""
    SEEKING = 0
    ACCUMULATING = 1


class InputStatus(IntEnum):
    """Result of input_sol()"""
    DISCONNECT = -1  # disconnect message received
    NONE = 0         # no solution (incomplete, invalid or screened out)
    SOLUTION = 1     # solution decoded and added to the buffer


def _isprint(data: int) -> bool:
    return 0x20 <= data <= 0x7E


def _decode_time(utc: float, opt: SolutionOptions) -> GTime:
    whole = int(utc)
    time = GTime(whole, utc - whole)
    if opt.times >= TIMES_UTC:
        if opt.times == TIMES_JST:
            time = timeadd(time, -JST_OFFSET)
        time = utc2gpst(time)
    return time


def decode_sol(buff: str, opt: SolutionOptions = SOLOPT_DEFAULT) -> Optional[Solution]:
    """Decode one solution line

    Parameters
    ----------
    buff : str
        Line without terminator; a leading ``$`` marker is ignored
    opt : SolutionOptions
        Solution options, ``opt.times`` gives the time system of the time tag

    Returns
    -------
    Solution or None
        Solution with ECEF position and velocity, or None if the line is a
        comment, has fewer than 9 fields, a non-numeric or non-finite field,
        a quality flag outside 0..255 or a time tag outside the calendar
        range (years 1 to 9999)
    """
    text = buff.strip()
    if text.startswith(chr(SOLSYNC)):
        text = text[1:]
    if not text or text.startswith(COMMENTH):
        return None

    tokens = text.split()
    if len(tokens) < NFIELD:
        return None
    if not all(_REAL.fullmatch(token) for token in tokens[:7] + tokens[8:NFIELD]):
        return None
    if not _INTEGER.fullmatch(tokens[7]):
        return None
    val = [float(token) for token in tokens[:7]]
    flag = int(tokens[7])
    dop = float(tokens[8])
    if not all(math.isfinite(v) for v in val) or not math.isfinite(dop):
        return None
    if not 0 <= flag <= 255:
        return None

    pos = np.array([val[1] * D2R, val[2] * D2R, val[3]])
    rr = np.zeros(6)
    rr[:3] = llh2ecef(pos)
    rr[3:] = enu2ecef(pos, np.array(val[4:7]))

    time = _decode_time(val[0], opt)
    if not TIME_MIN <= time.time <= TIME_MAX:
        return None

    return Solution(time=time, rr=rr, type=SOLTYPE_XYZ, stat=flag)


class SolutionStreamParser:
    """Reassemble solution lines from a byte stream

    The parser holds the partial line between calls so that independent
    streams can be parsed side by side with one parser each.
    """

    def __init__(self):
        self.buff = bytearray()

    @property
    def nb(self) -> int:
        """Number of bytes in the line buffer"""
        return len(self.buff)

    @property
    def state(self) -> ParserState:
        return ParserState.ACCUMULATING if self.buff else ParserState.SEEKING

    def reset(self):
        """Discard any partial line"""
        self.buff.clear()

    def push(self, data: int) -> Optional[str]:
        """Add one byte, returning the line it completes (or None)

        A line is completed by LF or by reaching MAXSOLMSG bytes; CR and LF
        are never stored.
        """
        if data == SOLSYNC or (not _isprint(data) and data not in (CR, LF)):
            self.buff.clear()
        if data not in (CR, LF):
            self.buff.append(data)
        if data != LF and len(self.buff) < MAXSOLMSG:
            return None

        line = self.buff.decode("latin-1")
        self.buff.clear()
        return line

    def feed(self, data: int,
             opt: SolutionOptions = SOLOPT_DEFAULT) -> Tuple[ParseEvent, Optional[Solution]]:
        """Add one byte and decode the line it completes

        Returns
        -------
        tuple : (ParseEvent, Solution or None)
            The solution is only set for ParseEvent.RECORD
        """
        line = self.push(data)
        if line is None:
            return ParseEvent.PENDING, None

        if line.startswith(MSG_DISCONN[:-2]):
            return ParseEvent.DISCONNECT, None

        sol = decode_sol(line, opt)
        if sol is None:
            logger.debug("Invalid solution line: %.64s", line)
            return ParseEvent.INVALID, None
        return ParseEvent.RECORD, sol


def input_sol(data: int, solbuf: SolutionBuffer, config: Optional[ReadConfig] = None,
              opt: SolutionOptions = SOLOPT_DEFAULT) -> InputStatus:
    """Input solution data from stream

    Parameters
    ----------
    data : int
        Stream byte (0-255)
    solbuf : SolutionBuffer
        Solution buffer; its parser keeps the partial line and its current
        time follows every decoded record
    config : ReadConfig, optional
        Time window (ts/te), interval (tint) and quality flag (qflag)
    opt : SolutionOptions
        Solution options

    Returns
    -------
    InputStatus
        SOLUTION if a record was added, DISCONNECT on the disconnect
        message, NONE otherwise
    """
    if config is None:
        config = ReadConfig()

    event, sol = solbuf.parser.feed(data, opt)
    if event == ParseEvent.DISCONNECT:
        logger.debug("Disconnect received")
        return InputStatus.DISCONNECT
    if event != ParseEvent.RECORD:
        return InputStatus.NONE

    solbuf.time = sol.time

    if not screent(sol.time, config.ts, config.te, config.tint):
        logger.log(LogLevel.TRACE.value, "Screened out by time: %s", sol.time)
        return InputStatus.NONE
    if config.qflag and sol.stat != config.qflag:
        logger.log(LogLevel.TRACE.value, "Screened out by quality: stat=%d", sol.stat)
        return InputStatus.NONE

    return InputStatus.SOLUTION if solbuf.insert(sol) else InputStatus.NONE
