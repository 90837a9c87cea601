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

"""Read solution files into a solution buffer.

Each source is read byte by byte through input_sol(), screened by the
configured window, interval and quality flag, and collected into one
buffer which is sorted by time once every source has been consumed.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Iterable, Optional, Tuple, Union

from ..core.data_structures import SOLOPT_DEFAULT, ReadConfig, SolutionOptions
from .solution import LF, InputStatus, input_sol
from .solution_buffer import SolutionBuffer

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class StreamEnd(Enum):
    """How reading one source ended"""
    EOF = 0         # end of file
    DISCONNECT = 1  # disconnect message received
    ERROR = 2       # solution buffer allocation failed


def read_solution_stream(fp: BinaryIO, solbuf: SolutionBuffer,
                         config: Optional[ReadConfig] = None,
                         opt: SolutionOptions = SOLOPT_DEFAULT,
                         chunk_size: int = 65536) -> StreamEnd:
    """Read solution data from one binary stream

    Parameters
    ----------
    fp : BinaryIO
        Stream opened in binary mode
    solbuf : SolutionBuffer
        Buffer receiving the screened solutions
    config : ReadConfig, optional
        Time window, interval and quality flag
    opt : SolutionOptions
        Solution options
    chunk_size : int
        Read size; bytes are still parsed one at a time

    Returns
    -------
    StreamEnd
        EOF, DISCONNECT (remaining bytes are not read) or ERROR

    Notes
    -----
    Each stream starts with an empty line buffer, and a last line without
    a terminator is decoded at end of file.
    """
    solbuf.parser.reset()
    while True:
        chunk = fp.read(chunk_size)
        if not chunk:
            break
        for data in chunk:
            stat = input_sol(data, solbuf, config, opt)
            if stat == InputStatus.DISCONNECT:
                return StreamEnd.DISCONNECT
            if solbuf.alloc_failed:
                return StreamEnd.ERROR

    if solbuf.parser.nb > 0:
        stat = input_sol(LF, solbuf, config, opt)
        if stat == InputStatus.DISCONNECT:
            return StreamEnd.DISCONNECT
        if solbuf.alloc_failed:
            return StreamEnd.ERROR
    return StreamEnd.EOF


def read_solutions(paths: Union[PathLike, Iterable[PathLike]],
                   config: Optional[ReadConfig] = None,
                   opt: Optional[SolutionOptions] = None) -> Tuple[bool, SolutionBuffer]:
    """Read solution data from solution files

    Parameters
    ----------
    paths : path or iterable of paths
        Solution files, read in order
    config : ReadConfig, optional
        Time window (ts/te), interval (tint), quality flag (qflag) and
        buffer mode (cyclic/nmax); reads everything into a growable buffer
        by default
    opt : SolutionOptions, optional
        Solution options, SOLOPT_DEFAULT by default

    Returns
    -------
    tuple : (bool, SolutionBuffer)
        Status (True: at least one solution read) and the buffer, sorted by
        time unless cyclic

    Notes
    -----
    Files that cannot be opened are skipped.  An allocation failure ends the
    pass with an empty buffer.
    """
    if config is None:
        config = ReadConfig()
    if opt is None:
        opt = SOLOPT_DEFAULT
    if isinstance(paths, (str, Path)):
        paths = [paths]

    solbuf = SolutionBuffer(config.cyclic, config.nmax)

    for path in paths:
        try:
            fp = open(path, "rb")
        except OSError as e:
            logger.warning("Solution file open error %s: %s", path, e)
            continue

        with fp:
            end = read_solution_stream(fp, solbuf, config, opt)

        if end == StreamEnd.ERROR:
            logger.error("Reading solutions aborted at %s", path)
            return False, solbuf
        if end == StreamEnd.DISCONNECT:
            logger.info("Disconnect received in %s", path)
        logger.debug("Read %s: n=%d", path, solbuf.n)

    if solbuf.n <= 0:
        logger.warning("No solution read")
        return False, solbuf

    if not solbuf.cyclic:
        solbuf.sort_chronological()
    return True, solbuf


def readsol(paths: Union[PathLike, Iterable[PathLike]],
            opt: Optional[SolutionOptions] = None) -> Tuple[bool, SolutionBuffer]:
    """Read every solution of the files without screening"""
    return read_solutions(paths, ReadConfig(), opt)
