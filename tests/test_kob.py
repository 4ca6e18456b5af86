"""
Tests for the key interface, using a stand-in serial port and the gpiozero
mock pin factory.
"""

import pytest

from morsendec.kob import KeyInterface, HWInterface, GPIO_KEY_PIN, GPIO_KEYING_PIN
from morsendec.morse import Decoder, Encoder

serial = pytest.importorskip("serial")


class FakePort:
    """Just enough of `serial.Serial` for the key interface."""

    opened = []

    def __init__(self, port, timeout=None):
        self.port = port
        self.timeout = timeout
        self.cts = False
        self.dsr = False
        self.rts = False
        self.dtr = False
        self.closed = False
        FakePort.opened.append(self)

    def close(self):
        self.closed = True


class BrokenPort(FakePort):

    @property
    def cts(self):
        raise serial.SerialException("device disconnected")

    @cts.setter
    def cts(self, value):
        pass


@pytest.fixture
def port(monkeypatch):
    FakePort.opened = []
    monkeypatch.setattr(serial, "Serial", FakePort)
    return FakePort


@pytest.fixture
def errors():
    return []


def test_no_interface(errors):
    ki = KeyInterface(err_msg_hndlr=errors.append)
    assert ki.hw_interface == HWInterface.NONE
    assert not ki.hw_is_available
    assert ki.read() is False
    ki.on()
    assert ki.keyed
    ki.off()
    assert errors == []


def test_serial_open(port, errors):
    ki = KeyInterface(portToUse="/dev/ttyUSB0", err_msg_hndlr=errors.append)
    assert ki.hw_interface == HWInterface.SERIAL
    p = port.opened[0]
    assert p.port == "/dev/ttyUSB0"
    assert p.dtr
    assert not p.rts
    assert errors == []


def test_serial_key_read(port):
    ki = KeyInterface(portToUse="COM3")
    p = port.opened[0]
    assert ki.read() is False
    p.cts = True
    assert ki.read() is True
    p.dsr = False
    assert ki.read() is True


def test_serial_key_read_dsr(port):
    ki = KeyInterface(portToUse="COM3", keyLine="dsr")
    p = port.opened[0]
    p.cts = True
    assert ki.read() is False
    p.dsr = True
    assert ki.read() is True


def test_serial_key_inverted(port):
    ki = KeyInterface(portToUse="COM3", invertKeyInput=True)
    p = port.opened[0]
    assert ki.read() is True
    p.cts = True
    assert ki.read() is False


def test_serial_keying(port):
    ki = KeyInterface(portToUse="COM3")
    p = port.opened[0]
    ki.on()
    assert p.rts
    assert ki.keyed
    ki.off()
    assert not p.rts
    assert not ki.keyed


def test_serial_exit(port):
    ki = KeyInterface(portToUse="COM3")
    p = port.opened[0]
    ki.on()
    ki.exit()
    assert not p.rts
    assert p.closed
    assert ki.hw_interface == HWInterface.NONE


def test_serial_port_not_available(monkeypatch, errors):
    def no_port(port, timeout=None):
        raise serial.SerialException("could not open port")
    monkeypatch.setattr(serial, "Serial", no_port)
    ki = KeyInterface(portToUse="COM9", err_msg_hndlr=errors.append)
    assert ki.hw_interface == HWInterface.NONE
    assert len(errors) == 1
    assert "COM9" in errors[0]
    assert ki.read() is False


def test_serial_read_error_disables(monkeypatch, errors):
    monkeypatch.setattr(serial, "Serial", BrokenPort)
    ki = KeyInterface(portToUse="COM3", err_msg_hndlr=errors.append)
    assert ki.hw_interface == HWInterface.SERIAL
    assert ki.read() is False
    assert ki.hw_interface == HWInterface.NONE
    assert len(errors) == 1
    # no more errors once disabled
    assert ki.read() is False
    assert len(errors) == 1


def test_bad_key_line():
    with pytest.raises(ValueError):
        KeyInterface(keyLine="RI")


def test_serial_key_as_decoder_source(port):
    ki = KeyInterface(portToUse="COM3")
    p = port.opened[0]
    d = Decoder(source=ki)
    decoded = []
    for t in range(1000, 1600):
        p.cts = 1000 <= t < 1276    # a dash
        d.tick(t)
        if d.available():
            decoded.append(d.read())
    assert decoded == ['T']


def test_serial_keying_from_encoder(port):
    ki = KeyInterface(portToUse="COM3")
    p = port.opened[0]
    e = Encoder(sink=ki)
    e.write('T')
    keyed = 0
    for t in range(1000, 2000):
        e.tick(t)
        keyed += p.rts
    assert keyed == 276
    assert not p.rts


@pytest.fixture
def mock_pins():
    gpiozero = pytest.importorskip("gpiozero")
    mock = pytest.importorskip("gpiozero.pins.mock")
    gpiozero.Device.pin_factory = mock.MockFactory()
    yield gpiozero.Device.pin_factory
    gpiozero.Device.pin_factory.reset()


def test_gpio(mock_pins):
    ki = KeyInterface(useGpio=True, portToUse="COM3")
    assert ki.hw_interface == HWInterface.GPIO
    key = mock_pins.pin(GPIO_KEY_PIN)
    keying = mock_pins.pin(GPIO_KEYING_PIN)
    assert ki.read() is False
    key.drive_low()     # key closed to ground
    assert ki.read() is True
    key.drive_high()
    assert ki.read() is False
    ki.on()
    assert keying.state
    ki.off()
    assert not keying.state
    ki.exit()
    assert ki.hw_interface == HWInterface.NONE
