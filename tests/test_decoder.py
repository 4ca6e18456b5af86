"""
Tests for the Morse decoder, key and audio input.

At 13 wpm: dot 92ms, dash 276ms, word space 646ms.
"""

import pytest

from morsendec.morse import Decoder, Encoder, InputMode

DOT = 92
DASH = 276


def test_timing():
    d = Decoder()
    assert (d.wpm, d.dot_len, d.dash_len, d.word_space_len) == (13, 92, 276, 646)
    d.set_speed(20)
    assert (d.dot_len, d.dash_len, d.word_space_len) == (60, 180, 420)


@pytest.mark.parametrize("wpm", [0, -5])
def test_speed_clamped(wpm):
    d = Decoder(wpm)
    assert d.wpm == 1
    assert (d.dot_len, d.dash_len, d.word_space_len) == (1200, 3600, 8400)


def test_decoder_speed_independent_of_encoder():
    d = Decoder(13)
    e = Encoder(13)
    d.set_speed(25)
    assert e.wpm == 13
    assert e.dot_len == 92


def test_single_dot(play):
    out, _ = play(Decoder(), [(DOT, True)], tail=300)
    assert out == ['E']


def test_letter_then_one_word_space(play):
    out, _ = play(Decoder(), [(DOT, True)], tail=5000)
    assert out == ['E', ' ']


def test_letter(play, keyed):
    out, _ = play(Decoder(), keyed('-.-.', DOT, DASH), tail=300)
    assert out == ['C']


def test_word_space_between_words(play, keyed):
    segments = keyed('..', DOT, DASH) + [(7 * DOT, False)] + keyed('-', DOT, DASH)
    out, _ = play(Decoder(), segments, tail=300)
    assert out == ['I', ' ', 'T']


def test_letter_space(play, keyed):
    segments = keyed('.', DOT, DASH) + [(3 * DOT, False)] + keyed('-', DOT, DASH)
    out, _ = play(Decoder(), segments, tail=300)
    assert out == ['E', 'T']


@pytest.mark.parametrize("mark, expected", [
    (23, []),       # dot/4: noise
    (24, ['E']),    # shortest dot
    (137, ['E']),   # longest dot
    (138, ['T']),   # half a dash is a dash
    (367, ['T']),   # longest dash
    (368, []),      # dash + dot: too long
    (1000, []),
])
def test_mark_classification(play, mark, expected):
    out, _ = play(Decoder(), [(mark, True)], tail=300)
    assert out == expected


def test_discarded_mark_keeps_position(play, keyed):
    # A long mark in the middle of a character is ignored
    segments = keyed('.', DOT, DASH) + [(DOT, False), (1000, True), (DOT, False)] + keyed('-', DOT, DASH)
    out, _ = play(Decoder(), segments, tail=300)
    assert out == ['A']


def test_contact_bounce_ignored(play):
    # Bounces shorter than the debounce time don't end the dot
    out, _ = play(Decoder(), [(40, True), (5, False), (52, True)], tail=300)
    assert out == ['E']


def test_glitch_ignored(play):
    out, _ = play(Decoder(), [(10, True)], tail=1000)
    assert out == []


def test_six_elements_unassigned(play, keyed):
    out, _ = play(Decoder(), keyed('......', DOT, DASH), tail=300)
    assert out == ['*']


def test_too_many_elements(play, keyed):
    out, _ = play(Decoder(), keyed('.......', DOT, DASH), tail=1000)
    assert out == ['#', ' ']


def test_too_many_elements_reported_once(play, keyed):
    # The error restarts decoding, so the eighth dot is a new character
    out, _ = play(Decoder(), keyed('........', DOT, DASH), tail=1000)
    assert out == ['#', 'E', ' ']


def test_decodes_after_error(play, keyed):
    d = Decoder()
    out, t = play(d, keyed('.......', DOT, DASH), tail=1000)
    assert out == ['#', ' ']
    out, _ = play(d, keyed('.-', DOT, DASH), tail=300, start=t)
    assert out == ['A']


def test_read_clears_mailbox(play):
    d = Decoder()
    play(d, [(DOT, True)], tail=300)
    # `play` reads as it goes, so nothing is left over
    assert not d.available()
    assert d.read() == ''


def test_unread_character_overwritten():
    d = Decoder()
    t = 1000
    for level, duration in ((True, DOT), (False, 1000)):
        for _ in range(duration):
            d.tick(t, level)
            t += 1
    assert d.available()
    assert d.read() == ' '
    assert d.read() == ''


def test_letter_before_word_space():
    # A late tick that is past both the letter and the word space time
    # reports the letter first and the word space on the next tick
    d = Decoder()
    t = 1000
    for level, duration in ((True, DOT), (False, 60)):
        for _ in range(duration):
            d.tick(t, level)
            t += 1
    assert not d.available()
    d.tick(1000 + DOT + 1000, False)
    assert d.read() == 'E'
    d.tick(1000 + DOT + 1001, False)
    assert d.read() == ' '


def test_callback(play, keyed):
    decoded = []
    d = Decoder(callback=decoded.append)
    segments = keyed('-', DOT, DASH) + [(7 * DOT, False)] + keyed('-', DOT, DASH)
    play(d, segments, tail=2000)
    assert decoded == ['T', ' ', 'T', ' ']


def test_reset(play):
    d = Decoder()
    # A dot, then a reset before the letter is decoded
    out, t = play(d, [(DOT, True)], tail=60)
    assert out == []
    d.reset()
    out, _ = play(d, [], tail=1000, start=t)
    assert out == [' ']


def test_source(source):
    d = Decoder(source=source)
    source.level = True
    for t in range(1000, 1000 + DOT):
        d.tick(t)
    source.level = False
    decoded = []
    for t in range(1000 + DOT, 1500):
        d.tick(t)
        if d.available():
            decoded.append(d.read())
    assert source.reads == 500
    assert decoded == ['E']


def test_no_sample_no_source():
    d = Decoder()
    for t in range(1000, 3000):
        d.tick(t)
    assert not d.available()
    assert not d.signal


def test_faster_speed(play, keyed):
    d = Decoder(20)
    out, _ = play(d, keyed('-.-', 60, 180), tail=250)
    assert out == ['K']


def test_speed_change(play, keyed):
    d = Decoder(30)
    d.set_speed(5)
    # 30 wpm dots are too short to be dots at 5 wpm (dot/4 = 60ms)
    out, t = play(d, keyed('..', 40, 120), tail=1000)
    assert out == []
    out, _ = play(d, keyed('.-', 240, 720), tail=1000, start=t)
    assert out == ['A']


def test_audio(play, keyed):
    d = Decoder(inputMode=InputMode.audio)
    out, _ = play(d, keyed('.-..', DOT, DASH), tail=1000)
    assert out == ['L', ' ']


def test_audio_threshold():
    d = Decoder(inputMode=InputMode.audio)
    for t in range(1000, 1000 + DOT):
        d.tick(t, 700)
    assert not d.signal
    d.tick(1000 + DOT, 701)
    assert d.signal


def test_audio_gaps_within_tone_ignored(play):
    # Dips shorter than half a dot are part of the same tone
    d = Decoder(inputMode=InputMode.audio)
    segments = [(100, True), (20, False), (100, True)]
    out, _ = play(d, segments, tail=300)
    assert out == ['T']


def test_debounce_limited_to_half_a_dot():
    d = Decoder(13, debounce=20)
    assert d.debounce_len == 20
    d.set_speed(55)
    assert d.debounce_len == 10
    d.set_speed(13)
    assert d.debounce_len == 20


def test_dot_shorter_than_debounce_time(play, keyed):
    # 60 wpm: dot 20ms, dash 60ms
    out, _ = play(Decoder(60, debounce=20), keyed('.-.', 20, 60), tail=80)
    assert out == ['R']
