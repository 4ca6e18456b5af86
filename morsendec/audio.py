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
audio module

Computer audio for Morse: a tone that can be used as the output of a
`morse.Encoder` and a listener that measures the level of the audio input
for a `morse.Decoder` in audio mode.

Both use PyAudio callback streams. The callbacks run on PyAudio's thread and
only exchange a single value (tone on/off, latest level) with the
application's loop. If PyAudio can't be loaded, or there is no audio device,
the tone is silent and the listener always reads 0.
"""

import numpy as np
from morsendec import log

MAX_LEVEL = 1023  # audio level range is 0..1023

class Tone:
    FRAMES_PER_BUFFER = 64
    SAMPLE_RATE = 44100

    def __init__(self, frequency=700, volume=0.5):
        self._audio_available = False
        self._pyaudio = None
        self._pa = None
        self._strm = None
        self._on = False
        self._phase = 0.0
        self._step = 2.0 * np.pi * frequency / Tone.SAMPLE_RATE
        self._amplitude = int(32767 * max(0.0, min(volume, 1.0)))
        try:
            import pyaudio
            self._pyaudio = pyaudio
        except ModuleNotFoundError:
            log.warn("Audio: PyAudio can't be loaded. Tone will not be available.")
            return
        try:
            self._pa = pyaudio.PyAudio()
            self._strm = self._pa.open(
                rate=Tone.SAMPLE_RATE,
                channels=1,
                format=pyaudio.paInt16,
                output=True,
                frames_per_buffer=Tone.FRAMES_PER_BUFFER,
                stream_callback=self._audio_callback
            )
            self._audio_available = True
            log.debug("audio: tone {}Hz".format(frequency), 2)
        except OSError as ex:
            log.warn("Audio: No audio output device. Tone will not be available.")
            log.debug(ex)

    def _audio_callback(self, in_data, frame_count, time_info, status_flags):
        if not self._on:
            self._phase = 0.0
            return (bytes(2 * frame_count), self._pyaudio.paContinue)
        t = self._phase + np.arange(frame_count) * self._step
        frames = (self._amplitude * np.sin(t)).astype(np.int16)
        self._phase = (self._phase + frame_count * self._step) % (2.0 * np.pi)
        return (frames.tobytes(), self._pyaudio.paContinue)

    def audio_available(self):
        return self._audio_available

    def on(self):
        self._on = True

    def off(self):
        self._on = False

    def exit(self):
        self._on = False
        if self._strm:
            self._strm.stop_stream()
            self._strm.close()
            self._strm = None
        if self._pa:
            self._pa.terminate()
            self._pa = None
        self._audio_available = False


class Listener:
    """
    Level of the audio input, as the peak of the most recent buffer scaled
    to 0..1023 (the range of a 10 bit analog input).
    """
    FRAMES_PER_BUFFER = 32
    SAMPLE_RATE = 8000

    def __init__(self, sampleRate=SAMPLE_RATE):
        self._audio_available = False
        self._pyaudio = None
        self._pa = None
        self._strm = None
        self._level = 0
        try:
            import pyaudio
            self._pyaudio = pyaudio
        except ModuleNotFoundError:
            log.warn("Audio: PyAudio can't be loaded. Audio input will not be available.")
            return
        try:
            self._pa = pyaudio.PyAudio()
            self._strm = self._pa.open(
                rate=sampleRate,
                channels=1,
                format=pyaudio.paInt16,
                input=True,
                frames_per_buffer=Listener.FRAMES_PER_BUFFER,
                stream_callback=self._audio_callback
            )
            self._audio_available = True
        except OSError as ex:
            log.warn("Audio: No audio input device. Audio input will not be available.")
            log.debug(ex)

    def _audio_callback(self, in_data, frame_count, time_info, status_flags):
        self._level = level_of(in_data)
        return (None, self._pyaudio.paContinue)

    def audio_available(self):
        return self._audio_available

    def read(self) -> int:
        return self._level

    def exit(self):
        if self._strm:
            self._strm.stop_stream()
            self._strm.close()
            self._strm = None
        if self._pa:
            self._pa.terminate()
            self._pa = None
        self._audio_available = False
        self._level = 0


def level_of(frames) -> int:
    """
    Peak level (0..1023) of a buffer of 16 bit signed samples.
    """
    n = len(frames) // 2
    if n == 0:
        return 0
    samples = np.frombuffer(frames, dtype=np.int16, count=n)
    peak = int(np.abs(samples.astype(np.int32)).max())
    return min(peak * (MAX_LEVEL + 1) // 32768, MAX_LEVEL)
