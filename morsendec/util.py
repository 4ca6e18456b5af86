"""
MIT License

Copyright (c) 2020-24 PyKOB - MorseKOB in Python

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
"""
"""
util.py - Utilities functions.

Small helpers used by the configuration and the applications, and the
millisecond clock used to drive the decoder and encoder.
"""
import time
from typing import Optional

_T0 = time.monotonic()

def millis() -> int:
    """
    Milliseconds since this module was loaded.

    Monotonic, so it is not affected by changes to the system time. This is
    the `now` value passed to `Decoder.tick` and `Encoder.tick`.
    """
    return int((time.monotonic() - _T0) * 1000)

def on_off_from_bool(b:bool) -> str:
    """
    Return 'ON' if `b` is `True` and 'OFF' if `b` is `False`
    """
    return "ON" if b else "OFF"

def str_none_or_value(s:str) -> Optional[str]:
    """
    Return `None` if `s` is None, empty, or the value 'NONE', else the string value.
    """
    r = None if not s or not s.strip() or s.upper() == 'NONE' else s
    return r

def strtobool(val):
    """
    (from distutils) Convert a string representation of truth to true (1) or false (0).

    True values are 'y', 'yes', 't', 'true', 'on', and '1'; false values
    are 'n', 'no', 'f', 'false', 'off', and '0'.  Raises ValueError if
    'val' is anything else.
    """
    val = str(val).lower()
    if val in ('y', 'yes', 't', 'true', 'on', '1'):
        return 1
    elif val in ('n', 'no', 'f', 'false', 'off', '0'):
        return 0
    else:
        raise ValueError("invalid truth value %r" % (val,))
