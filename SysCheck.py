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
SysCheck.py

Displays version numbers of Python-related software and the names of
available serial ports.
"""

import sys
print('Python ' + sys.version)

try:
    import morsendec
    print('MorsEnDec ' + morsendec.VERSION)
except ModuleNotFoundError:
    print('MorsEnDec not installed')

try:
    import pyaudio
    print('PyAudio ' + pyaudio.get_portaudio_version_text())
except ModuleNotFoundError:
    print('PyAudio not installed')

try:
    import gpiozero
    from importlib.metadata import version
    print('gpiozero ' + version('gpiozero'))
except ModuleNotFoundError:
    print('gpiozero not installed (only needed for the Raspberry Pi GPIO interface)')

try:
    import serial
    print('pySerial ' + serial.VERSION)
    import serial.tools.list_ports
    systemSerialPorts = serial.tools.list_ports.comports()
    for sp in systemSerialPorts:
        dev = "Device: " + sp.device
        name = " Name: " + sp.name if sp.name else ""
        desc = " Desc: " + sp.description if sp.description else ""
        mfg = " Manufacturer:" + sp.manufacturer if sp.manufacturer else ""
        sn = " SN: " + sp.serial_number if sp.serial_number else ""
        print("{}{}{}{}{}".format(dev, name, desc, mfg, sn))
except ModuleNotFoundError:
    print('pySerial not installed')
