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
log module

Logs status, debug and error messages to the console.

The level is a single integer. Messages are written when the current level
is at or above the threshold of the message:
    >0  DEBUG (higher values enable more detail)
     0  INFO
    -1  WARN
    -2  ERROR
    -3  nothing is written
"""
import sys
import datetime

DEBUG_MIN_LEVEL = 1
INFO_LEVEL = 0
WARN_LEVEL = -1
ERROR_LEVEL = -2
LOGGING_MIN_LEVEL = -3

_logging_level = INFO_LEVEL

def _timestamp():
    return str(datetime.datetime.now())[:19]

def log(msg, type="", dt=None, level_threshold=INFO_LEVEL):
    if _logging_level < level_threshold:
        return
    dtl = dt if dt is not None else _timestamp()
    typestr = " {0}".format(type) if type else ""
    if not typestr and not dtl:
        sys.stdout.write(msg)
    else:
        sys.stdout.write('{0}{1}: \t{2}\n'.format(dtl, typestr, msg))
    sys.stdout.flush()

def logErr(msg, dt=None):
    if _logging_level < ERROR_LEVEL:
        return
    dtstr = (_timestamp() + " ") if dt is None else dt
    log(msg, type="ERROR", dt=dtstr, level_threshold=ERROR_LEVEL)
    sys.stderr.write('{0}ERROR:\t{1}\n'.format(dtstr, msg))
    sys.stderr.flush()

def debug(msg, level=DEBUG_MIN_LEVEL, dt=None):
    if _logging_level >= level:
        log(msg, type="DEBUG[{}]".format(level), dt=dt, level_threshold=level)

def err(msg, dt=None):
    """
    Log an error. If called while handling an exception, the exception value
    is added to the message.
    """
    val = sys.exc_info()[1]
    if val is not None:
        msg = "{0}\n{1}".format(msg, val)
    logErr(msg, dt=dt)

error = err

def info(msg, dt=None):
    log(msg, type="INFO", dt=dt, level_threshold=INFO_LEVEL)

def warn(msg, dt=None):
    log(msg, type="WARN", dt=dt, level_threshold=WARN_LEVEL)

def get_logging_level():
    return _logging_level

def set_logging_level(level):
    global _logging_level
    _logging_level = level if level >= LOGGING_MIN_LEVEL else INFO_LEVEL
    debug("log.set_logging_level: " + str(_logging_level))
