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

"""Send.py

Sends text in Morse to the keying line of a key interface or as a tone on the
computer audio.

The text is taken from the command line, or read from the standard input if
none is given. With '--paris' the standard word PARIS is sent over and over,
one second apart, and the measured speed is displayed (to check the timing).

Examples:
    python Send.py -e 20 -o TONE cq cq de n0call
    python Send.py -p /dev/ttyUSB0 --paris --count 5
"""

from morsendec import VERSION, audio, config, kob, log, morse, util

import argparse
import sys
from time import sleep

PARIS = "PARIS "

myOutput = None

def wait_until_available(encoder):
    while not encoder.available():
        encoder.tick(util.millis())
        sleep(0.001)

def send(encoder, text, printChar=False):
    """
    Send the text and return when the last character has been sent.
    """
    for c in text:
        wait_until_available(encoder)
        encoder.write(c)
        encoder.tick(util.millis())
        if printChar:
            print(c.upper(), end='', flush=True)
    wait_until_available(encoder)

try:
    arg_parser = argparse.ArgumentParser(description="Sends text in Morse to a keying line or the computer audio.", \
        parents=\
        [\
        config.serial_port_override, \
        config.gpio_override, \
        config.output_mode_override, \
        config.encode_speed_override, \
        config.tone_frequency_override, \
        config.logging_level_override])
    arg_parser.add_argument("--paris", action='store_true', default=False, \
    help="Send PARIS repeatedly and display the measured speed.", dest="paris")
    arg_parser.add_argument("--count", type=int, metavar="n", default=0, \
    help="Number of times to send PARIS (default: until interrupted).", dest="count")
    arg_parser.add_argument("text", nargs='*', help="Text to send (read from the standard input if not given).")
    args = arg_parser.parse_args()
    config.process_config_args(args)

    if config.output_mode == config.OutputMode.tone:
        myOutput = audio.Tone(frequency=config.tone_frequency)
    else:
        myOutput = kob.KeyInterface(portToUse=config.serial_port, useGpio=config.gpio)
        if not myOutput.hw_is_available:
            log.warn("No key interface is available. Nothing will be keyed.")
    myEncoder = morse.Encoder(wpm=config.encode_speed, sink=myOutput)

    print('MorsEnDec ' + VERSION)
    if args.paris:
        n = 0
        while args.count == 0 or n < args.count:
            sleep(1.0)  # one second between each PARIS
            t0 = util.millis()
            send(myEncoder, PARIS)
            dt = (util.millis() - t0) / 1000.0
            n += 1
            print("PARIS {}: {:.2f} sec, {:.1f} wpm".format(n, dt, 60.0 / dt))
    elif args.text:
        send(myEncoder, ' '.join(args.text), printChar=True)
        print()
    else:
        for line in sys.stdin:
            send(myEncoder, line.rstrip('\r\n') + ' ', printChar=True)
            print()
    myOutput.exit()
except ValueError as ex:
    print(ex.args[0])
    if myOutput:
        myOutput.exit()
    sys.exit(1)
except KeyboardInterrupt:
    if myOutput:
        myOutput.exit()
    print()
    sys.exit(0)     # ^C is considered a normal exit.
