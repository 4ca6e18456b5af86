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

"""Decode.py

Decodes Morse from a key (serial port or GPIO interface) or from the computer
audio input and displays the text on the system console.

Settings not given on the command line are taken from the configuration
(see Configure.py).

Examples:
    python Decode.py -p /dev/ttyUSB0 -d 18
    python Decode.py -i AUDIO --threshold 600
"""

from morsendec import VERSION, audio, config, kob, log, morse, util

import argparse
import sys
from time import sleep

LINE_LEN = 8  # characters displayed per line (word spaces not counted)

myInterface = None
myListener = None
mySidetone = None

def exit_devices():
    for d in (mySidetone, myListener, myInterface):
        if d:
            d.exit()

try:
    arg_parser = argparse.ArgumentParser(description="Decodes Morse from a key or the audio input, and displays the text.", \
        parents=\
        [\
        config.serial_port_override, \
        config.gpio_override, \
        config.key_line_override, \
        config.invert_key_input_override, \
        config.input_mode_override, \
        config.decode_speed_override, \
        config.debounce_override, \
        config.audio_threshold_override, \
        config.tone_frequency_override, \
        config.logging_level_override])
    arg_parser.add_argument("--sidetone", action='store_true', default=False, \
    help="Sound a tone while the key is closed (KEY input only).", dest="sidetone")
    args = arg_parser.parse_args()
    config.process_config_args(args)

    print('Python ' + sys.version + ' on ' + sys.platform)
    print('MorsEnDec ' + VERSION)

    if config.input_mode == morse.InputMode.audio:
        myListener = audio.Listener()
        source = myListener
        print("Decoding from the audio input at {} wpm.".format(config.decode_speed))
    else:
        myInterface = kob.KeyInterface(portToUse=config.serial_port, useGpio=config.gpio, \
            invertKeyInput=config.invert_key_input, keyLine=config.key_line)
        if not myInterface.hw_is_available:
            log.warn("No key interface is available. Nothing will be decoded.")
        source = myInterface
        if args.sidetone:
            mySidetone = audio.Tone(frequency=config.tone_frequency)
        print("Decoding from the key at {} wpm.".format(config.decode_speed))

    myDecoder = morse.Decoder(wpm=config.decode_speed, inputMode=config.input_mode, \
        debounce=config.debounce, audioThreshold=config.audio_threshold)
    nChars = 0
    while True:
        sample = source.read()
        if mySidetone:
            if sample:
                mySidetone.on()
            else:
                mySidetone.off()
        myDecoder.tick(util.millis(), sample)
        if myDecoder.available():
            c = myDecoder.read()
            if c != ' ':
                if nChars == LINE_LEN:
                    print()
                    nChars = 0
                nChars += 1
            print(c, end='', flush=True)
        sleep(0.001)
except ValueError as ex:
    print(ex.args[0])
    exit_devices()
    sys.exit(1)
except KeyboardInterrupt:
    exit_devices()
    print()
    sys.exit(0)     # Since the main program is an infinite loop, ^C is a normal, successful exit.
