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
morse.py

Provides classes for decoding and encoding International Morse code.

Both classes are driven from the application's loop by calling `tick` with
the current time in milliseconds (see `util.millis`). Neither one blocks or
sleeps, so they return immediately and several of them can share one loop
(for example one decoder per input line plus an encoder). The loop has to
run often enough that no key transition is missed, a few milliseconds at
most.

Speeds are in words per minute using the 1:3:7 dot:dash:word space ratio
and integer millisecond lengths:
    dot = 1200 / wpm, dash = 3 * 1200 / wpm, word space = 7 * 1200 / wpm
"""

from enum import IntEnum, unique
from morsendec import log
from morsendec.codetable import morse_table, path_to, NotFound, \
    TREETOP, TOPJUMP, NOCHAR, ERRORCHAR, WORDSPACE

DEFAULT_WPM     = 13
DEBOUNCE        = 20   # time to ignore key transitions due to contact bounce (ms)
AUDIO_THRESHOLD = 700  # audio level (0-1023) above which a tone is present

def _timing(wpm):
    """
    Return the (clamped) speed and the dot, dash and word space lengths in ms.
    """
    wpm = int(wpm)
    if wpm <= 0:
        wpm = 1
    return (wpm, 1200 // wpm, 3 * 1200 // wpm, 7 * 1200 // wpm)


@unique
class InputMode(IntEnum):
    key = 1     # on/off level from a key, keyer or receiver output
    audio = 2   # amplitude samples of a received tone


"""
Code decoder class

Callback function (optional) is called whenever a character is decoded:
    def callback(char)
        char - decoded character, ' ' for a word space or '#' for a
               character that had too many dots and dashes
"""

class Decoder:
    """
    Decodes Morse by walking the Morse table one dot or dash at a time.

    Each dot moves toward the start of the table and each dash toward the
    end, by a step that halves every time. After a long enough space the
    character at the current position is decoded and the walk starts over
    at the top of the table. The input is sampled once per `tick`.

    There is room for one decoded character. Check with `available` and
    get it with `read`. A character that is not read before the next one is
    decoded is lost.
    """

    def __init__(self, wpm=DEFAULT_WPM, inputMode=InputMode.key, source=None,
            debounce=DEBOUNCE, audioThreshold=AUDIO_THRESHOLD, callback=None, table=morse_table):
        self._inputMode = inputMode
        self._source = source              # object with a `read()` method, or None if `tick` is passed samples
        self._debounce = debounce
        self._audioThreshold = audioThreshold
        self._callback = callback
        self._table = table
        self.set_speed(wpm)
        self._tablePointer = TREETOP       # current position in the Morse table
        self._jump = TOPJUMP               # step to the next position (halves after each dot or dash)
        self._lastLevel = False            # key level at the previous tick
        self._signal = False               # debounced key state, or tone present
        self._lastDebounce = 0             # time of the last key change, or of the last loud audio sample
        self._markTime = 0                 # start of the latest mark
        self._spaceTime = 0                # start of the latest space
        self._markDone = True              # the latest mark has been handled
        self._wordSpaceDone = True         # a word space has been decoded for the current space
        self._decoded = ''                 # decoded character waiting to be read

    @property
    def wpm(self):
        return self._wpm

    @property
    def dot_len(self):
        return self._dotLen

    @property
    def dash_len(self):
        return self._dashLen

    @property
    def word_space_len(self):
        return self._wordSpace

    @property
    def debounce_len(self):
        """Debounce time in use: the configured time, at most half a dot."""
        return self._debounceLen

    @property
    def input_mode(self):
        return self._inputMode

    @property
    def signal(self) -> bool:
        """True while a (debounced) mark is being received."""
        return self._signal

    def set_speed(self, wpm):
        """
        Set the expected code speed. Values less than 1 are taken as 1.
        Takes effect with the next `tick`.
        """
        self._wpm, self._dotLen, self._dashLen, self._wordSpace = _timing(wpm)
        # A dot has to outlast the debounce time to be seen at all
        self._debounceLen = min(self._debounce, self._dotLen // 2)
        log.debug("morse.Decoder: {} wpm, dot {}ms dash {}ms word space {}ms debounce {}ms".format(
            self._wpm, self._dotLen, self._dashLen, self._wordSpace, self._debounceLen), 3)

    def available(self) -> bool:
        return self._decoded != ''

    def read(self) -> str:
        """
        Return the decoded character and clear it, or '' if there is none.
        """
        c = self._decoded
        self._decoded = ''
        return c

    def reset(self):
        """Go back to the top of the Morse table."""
        self._tablePointer = TREETOP
        self._jump = TOPJUMP

    def tick(self, now, sample=None):
        """
        Take one input sample and decode.

        `now` is the time in ms. `sample` is the key level (key mode) or the
        audio amplitude (audio mode). If it isn't given it is read from the
        source, and with no source it is taken as no signal.
        """
        if sample is None:
            sample = self._source.read() if self._source else 0
        if self._inputMode == InputMode.audio:
            self._read_audio(now, sample)
        else:
            self._read_key(now, bool(sample))

        if self._signal:
            # Nothing to do until the mark ends
            self._markDone = False
            self._wordSpaceDone = False
            return

        space = now - self._spaceTime
        if not self._markDone:
            if self._jump > 0:
                # Wait half a dot so contact chatter isn't taken as the end of the mark
                if space > self._dotLen // 2:
                    self._classify(self._spaceTime - self._markTime)
            else:
                log.debug("morse.Decoder: too many dots and dashes for a character.", 2)
                self._markDone = True
                self.reset()
                self._decode(ERRORCHAR)
                return
        # End of character if the space is longer than 2 dots
        if space >= 2 * self._dotLen and self._jump < TOPJUMP:
            c = self._table.character_at(self._tablePointer)
            self.reset()
            self._decode(c)
            return
        # Word space if the space is longer than 2/3 of a word space
        if space > self._wordSpace * 2 // 3 and not self._wordSpaceDone:
            self._wordSpaceDone = True
            self._decode(WORDSPACE)

    def _read_key(self, now, level):
        if level != self._lastLevel:
            self._lastDebounce = now  # restart the debounce time
        if now - self._lastDebounce > self._debounceLen:
            # The level has been steady for longer than the debounce time
            self._signal = level
            if level:
                self._markTime = self._lastDebounce
            else:
                self._spaceTime = self._lastDebounce
        self._lastLevel = level

    def _read_audio(self, now, level):
        hold = self._dotLen // 2
        if level > self._audioThreshold:
            if now - self._lastDebounce > hold:
                # New mark
                self._markTime = now
                self._signal = True
            self._lastDebounce = now
        elif self._signal and now - self._lastDebounce > hold:
            # New space, starting at the last loud sample
            self._spaceTime = self._lastDebounce
            self._signal = False

    def _classify(self, mark):
        if mark <= self._dotLen // 4:
            return  # too short, noise
        if mark < self._dashLen // 2:
            self._tablePointer -= self._jump  # dot
        elif mark < self._dashLen + self._dotLen:
            self._tablePointer += self._jump  # dash
        else:
            return  # too long for a dash
        self._jump //= 2
        self._markDone = True

    def _decode(self, char):
        log.debug("morse.Decoder: '{}'".format(char), 4)
        self._decoded = char
        if self._callback:
            self._callback(char)


"""
Code encoder class
"""

@unique
class _Phase(IntEnum):
    MARK = 1    # keyed for a dot or a dash
    SPACE = 2   # unkeyed after a dot or a dash

class Encoder:
    """
    Sends one character at a time to an output (the sink).

    The sink is any object with `on()` and `off()` methods (for example a
    `kob.KeyInterface` or an `audio.Tone`). The dots and dashes for a
    character are found by tracing its position in the Morse table back to
    the top of the table. Only one character is sent at a time: check
    `available` before calling `write`.
    """

    def __init__(self, wpm=DEFAULT_WPM, sink=None, table=morse_table):
        self._sink = sink
        self._table = table
        self.set_speed(wpm)
        self._char = ''            # character waiting to be sent
        self._plan = ''            # dots and dashes (or a word space) being sent
        self._signalNr = 0         # element of the plan being sent
        self._phase = _Phase.MARK
        self._timer = 0            # time of the last key change
        self._sending = False

    @property
    def wpm(self):
        return self._wpm

    @property
    def dot_len(self):
        return self._dotLen

    @property
    def dash_len(self):
        return self._dashLen

    @property
    def word_space_len(self):
        return self._wordSpace

    @property
    def plan(self) -> str:
        return self._plan

    @property
    def sending(self) -> bool:
        return self._sending

    def set_speed(self, wpm):
        """
        Set the sending speed. Values less than 1 are taken as 1.
        """
        self._wpm, self._dotLen, self._dashLen, self._wordSpace = _timing(wpm)
        log.debug("morse.Encoder: {} wpm, dot {}ms dash {}ms word space {}ms".format(
            self._wpm, self._dotLen, self._dashLen, self._wordSpace), 3)

    def available(self) -> bool:
        """True if a character can be written."""
        return not self._sending

    def write(self, char):
        """
        Set the next character to send. Ignored while a character is being
        sent, and if it isn't a single character. Sending starts with the
        next `tick`.
        """
        if not isinstance(char, str) or len(char) != 1:
            return
        if not self._sending and char != NOCHAR:
            self._char = char

    def tick(self, now):
        if not self._sending and self._char:
            self._start(now)
        if not self._sending:
            return
        e = self._plan[self._signalNr]
        elapsed = now - self._timer
        if e == WORDSPACE:
            # The space between letters is already part of the word space
            if elapsed > self._wordSpace - self._dashLen:
                self._signalNr += 1
        elif self._phase == _Phase.MARK:
            if elapsed >= (self._dotLen if e == '.' else self._dashLen):
                self._key(False)
                self._timer = now
                self._phase = _Phase.SPACE
        elif self._signalNr < len(self._plan) - 1:
            # Space between the dots and dashes of a letter
            if elapsed >= self._dotLen:
                self._signalNr += 1
                self._key(True)
                self._timer = now
                self._phase = _Phase.MARK
        elif elapsed >= self._dashLen:
            # Space between letters
            self._signalNr += 1
            self._timer = now
        if self._signalNr >= len(self._plan):
            self._sending = False
            self._char = ''
            self._plan = ''

    def _start(self, now):
        c = self._char
        if c.islower():
            c = c.upper()
        try:
            position = self._table.lookup_position_of(c)
        except NotFound:
            log.debug("morse.Encoder: '{}' is not in the Morse table. Not sent.".format(c), 2)
            self._char = ''
            return
        self._plan = path_to(position) if position != TREETOP else WORDSPACE
        self._signalNr = 0
        self._phase = _Phase.MARK
        self._timer = now
        self._sending = True
        log.debug("morse.Encoder: '{}' {}".format(c, self._plan), 4)
        if self._plan != WORDSPACE:
            self._key(True)

    def _key(self, on):
        if self._sink:
            if on:
                self._sink.on()
            else:
                self._sink.off()
