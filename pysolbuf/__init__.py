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

"""
PySolBuf - GNSS Solution Stream Ingestion and Buffering

A Python library for reading navigation solution streams: byte-level line
resynchronization, record decoding, linear and ring solution buffers,
time window screening, and the time-system and ECEF/geodetic/ENU
transforms they rely on.
Inspired by RTKLIB.
"""

__version__ = "1.0.0"
__author__ = "PySolBuf Development Team"
__title__ = "pysolbuf"
__description__ = "GNSS solution stream ingestion and buffering"

import logging

from .core import *
from .coordinate import *
from .io import *
from .logger import LogLevel, get_logger, setup_logger, setup_logger_from_config

logging.getLogger(__name__).addHandler(logging.NullHandler())
