"""
Shared helpers for the MorsEnDec tests.

The decoder and encoder are driven by a simulated millisecond clock: one
`tick` per ms, starting at `START` so that the first mark is well clear of
the zero initial times.
"""

import pytest

from morsendec.morse import Encoder, InputMode

START = 1000
LOUD = 1023     # audio sample for a tone
QUIET = 0


class Sink:
    """Encoder output that remembers its level and every change."""

    def __init__(self):
        self.level = False
        self.changes = []
        self.now = None

    def on(self):
        self.level = True
        self.changes.append((self.now, True))

    def off(self):
        self.level = False
        self.changes.append((self.now, False))


class Source:
    """Decoder input that returns a fixed level until it is changed."""

    def __init__(self, level=False):
        self.level = level
        self.reads = 0

    def read(self):
        self.reads += 1
        return self.level


def _sample(decoder, level):
    if decoder.input_mode == InputMode.audio:
        return LOUD if level else QUIET
    return level


@pytest.fixture
def sink():
    return Sink()


@pytest.fixture
def source():
    return Source()


@pytest.fixture
def play():
    """
    Feed a decoder a list of (duration ms, level) segments followed by
    `tail` ms of silence, one tick per ms. Returns the decoded characters
    (read as soon as each is available) and the time after the last tick.
    """
    def _play(decoder, segments, tail=0, start=START):
        out = []
        t = start
        for duration, level in list(segments) + [(tail, False)]:
            for _ in range(duration):
                decoder.tick(t, _sample(decoder, level))
                if decoder.available():
                    out.append(decoder.read())
                t += 1
        return out, t
    return _play


@pytest.fixture
def keyed():
    """
    Build (duration, level) segments for a string of dots and dashes keyed
    with the given lengths.
    """
    def _keyed(code, dot, dash, gap=None):
        gap = dot if gap is None else gap
        segments = []
        for i, e in enumerate(code):
            if i:
                segments.append((gap, False))
            segments.append((dot if e == '.' else dash, True))
        return segments
    return _keyed


@pytest.fixture
def transmit():
    """
    Send text with an encoder and feed its output straight into a decoder,
    one tick per ms. Returns the decoded text.
    """
    def _transmit(text, decoder, wpm=13, tail=1500, start=START):
        sink = Sink()
        encoder = Encoder(wpm, sink=sink)
        chars = list(text)
        out = []
        t = start

        def step():
            sink.now = t
            encoder.tick(t)
            decoder.tick(t, _sample(decoder, sink.level))
            if decoder.available():
                out.append(decoder.read())

        while chars or encoder.sending:
            if encoder.available() and chars:
                encoder.write(chars.pop(0))
            step()
            t += 1
        for _ in range(tail):
            step()
            t += 1
        return ''.join(out)
    return _transmit
