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
kob module

Handles an external key (input) and a keying line (output) connected through
a serial port interface or the GPIO pins of a Raspberry Pi.

A `KeyInterface` can be used as the source of a `morse.Decoder` (`read`
returns the key state) and as the sink of a `morse.Encoder` (`on` and `off`
drive the keying line, for example a transmitter key input or a sounder).

Serial interface:
    DTR - held on to power the interface
    CTS (or DSR) - key input
    RTS - keying output
GPIO interface:
    GPIO21 - key input (pulled up, key closes to ground)
    GPIO26 - keying output

GPIO takes priority if both are requested. If the required library or the
hardware isn't available, the error message handler is called and the
interface acts as a key that is never closed and ignores keying.
"""
from enum import IntEnum, unique
from morsendec import log
from typing import Optional

GPIO_KEY_PIN = 21
GPIO_KEYING_PIN = 26

@unique
class HWInterface(IntEnum):
    NONE = 0
    GPIO = 1
    SERIAL = 2

KEY_LINES = ("CTS", "DSR")

class KeyInterface:

    def __init__(
            self, portToUse:Optional[str]=None, useGpio:bool=False, invertKeyInput:bool=False,
            keyLine:str="CTS", err_msg_hndlr=None):
        """
        Open the hardware interface.

        `invertKeyInput` inverts the key state read (for a key input that is
        active low, ex: a modem or receiver output).
        """
        keyLine = keyLine.upper()
        if not keyLine in KEY_LINES:
            raise ValueError("Key line '{}' is not one of {}.".format(keyLine, KEY_LINES))
        self._port_to_use:Optional[str] = portToUse
        self._use_gpio:bool = useGpio
        self._invert_key_input:bool = invertKeyInput
        self._key_line:str = keyLine
        self._err_msg_hndlr = err_msg_hndlr if err_msg_hndlr else log.warn  # Function that can take a string
        #
        self._hw_interface:HWInterface = HWInterface.NONE
        self._gpio_key_read = None
        self._gpio_keying = None
        self._gpio_errors = (OSError,)
        self._port = None
        self._keyed:bool = False
        #
        self.__init_hw_interface()
        return

    def __init_hw_interface(self):
        """
        Load the GPIO or Serial library if requested and open the interface.
        """
        gpio_module_available = False
        serial_module_available = False
        if self._use_gpio:
            try:
                from gpiozero import LED, Button, GPIOZeroError

                gpio_module_available = True
                self._gpio_errors = (GPIOZeroError, OSError)
            except ModuleNotFoundError:
                self._err_msg_hndlr(
                    "Module 'gpiozero' is not available. GPIO interface cannot be used for a key."
                )
        if self._port_to_use and not gpio_module_available:
            try:
                import serial

                serial_module_available = True
            except ModuleNotFoundError:
                self._err_msg_hndlr(
                    "Module pySerial is not available. Serial interface cannot be used for a key."
                )
        #
        # At this point, we have either the GPIO or the Serial module available, or none.
        #
        if gpio_module_available:
            try:
                self._gpio_key_read = Button(GPIO_KEY_PIN, pull_up=True)
                self._gpio_keying = LED(GPIO_KEYING_PIN)
                self._hw_interface = HWInterface.GPIO
                log.info("The GPIO interface is available/active and will be used.")
            except self._gpio_errors as ex:
                self._hw_interface = HWInterface.NONE
                self._err_msg_hndlr(
                    "Interface for key on GPIO not available. GPIO key will not function."
                )
                log.debug(ex)
        elif serial_module_available:
            try:
                self._port = serial.Serial(self._port_to_use, timeout=0.5)
                self._port.dtr = True  # Provide power for the interface
                self._port.rts = False
                self._hw_interface = HWInterface.SERIAL
                log.info("The serial interface is available/active and will be used. Key on {}.".format(self._key_line))
            except (OSError, ValueError) as ex:
                self._hw_interface = HWInterface.NONE
                self._port = None
                self._err_msg_hndlr(
                    "Serial port '{}' is not available. Key will not function.".format(self._port_to_use)
                )
                log.debug(ex)
        return

    @property
    def hw_interface(self) -> HWInterface:
        return self._hw_interface

    @property
    def hw_is_available(self) -> bool:
        return (not self._hw_interface == HWInterface.NONE)

    @property
    def keyed(self) -> bool:
        """True if the keying output is on."""
        return self._keyed

    def read(self) -> bool:
        """
        Return True if the key is closed.

        This is the raw (not debounced) state.
        """
        kc = False
        if self._hw_interface == HWInterface.GPIO:
            try:
                kc = self._gpio_key_read.is_pressed
            except self._gpio_errors:
                self._hw_interface = HWInterface.NONE
                self._err_msg_hndlr("GPIO interface read error. Disabling interface.")
                return False
        elif self._hw_interface == HWInterface.SERIAL:
            try:
                kc = self._port.cts if self._key_line == "CTS" else self._port.dsr
            except OSError:
                self._hw_interface = HWInterface.NONE
                self._err_msg_hndlr("Serial interface read error. Disabling interface.")
                return False
        else:
            return False
        # Invert key state if configured to do so (ex: input is from a modem)
        if self._invert_key_input:
            kc = not kc
        return bool(kc)

    def on(self):
        self._set_keying(True)

    def off(self):
        self._set_keying(False)

    def _set_keying(self, energize: bool):
        log.debug("kob._set_keying: {}".format(energize), 5)
        self._keyed = energize
        if self._hw_interface == HWInterface.GPIO:
            try:
                if energize:
                    self._gpio_keying.on()  # Pin goes high
                else:
                    self._gpio_keying.off()  # Pin goes low
            except self._gpio_errors:
                self._hw_interface = HWInterface.NONE
                self._err_msg_hndlr("GPIO output error setting keying state. Disabling interface.")
        elif self._hw_interface == HWInterface.SERIAL:
            try:
                self._port.rts = energize
            except OSError:
                self._hw_interface = HWInterface.NONE
                self._err_msg_hndlr("Serial RTS error setting keying state. Disabling interface.")
        return

    def exit(self):
        """
        Release the keying line and close the interface.
        """
        if self._keyed:
            self.off()
        if self._port:
            if not self._port.closed:
                self._port.close()
            self._port = None
        if self._gpio_key_read:
            self._gpio_key_read.close()
            self._gpio_key_read = None
        if self._gpio_keying:
            self._gpio_keying.close()
            self._gpio_keying = None
        self._hw_interface = HWInterface.NONE
        return
