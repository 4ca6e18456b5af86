# MorsEnDec package
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

VERSION = '1.0.2'

"""

Change history:

1.0.2  2026-09-28
- kob: key line (CTS or DSR) selectable for the serial interface
- Send: added PARIS speed test

1.0.1  2026-09-14
- morse: decoder callback called for every decoded character
- config: INPUT_MODE and OUTPUT_MODE values

1.0.0  2026-08-30
- codetable: dichotomic (binary tree) Morse table shared by the decoder and
    the encoder
- morse: tick driven Decoder (key and audio front ends) and Encoder
- kob: serial and GPIO key/keying interface
- audio: PyAudio tone output and audio level input

"""
