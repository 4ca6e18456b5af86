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

r"""
config module

Reads configuration information for the MorsEnDec modules and applications.

Configuration/preference values are read/written to:
    Windows:
        User: [user]\AppData\Local\morsendec\config-[user].ini
        Machine: \ProgramData\morsendec\config_app.ini
    Mac and Linux:
        User: ~/.morsendec/config-[user].ini
        Machine: ~/.morsendec/config_app.ini

The files are INI format with the values in a section named "MORSENDEC".
Reading the configuration doesn't create the files, `save_config` does.
"""
import argparse
import configparser
import getpass
import os
import platform
import socket
import sys
from enum import IntEnum, unique
import morsendec
from morsendec import log, util
from morsendec.morse import InputMode
from morsendec.kob import KEY_LINES
from morsendec.util import strtobool

@unique
class OutputMode(IntEnum):
    key = 1     # keying line of the key interface
    tone = 2    # computer audio tone

# Application name
_APP_NAME = "morsendec"
# INI Section
_CONFIG_SECTION = "MORSENDEC"
# System/Machine INI file Parameters/Keys
_SERIAL_PORT_KEY = "PORT"
_GPIO_KEY = "GPIO"
_KEY_LINE_KEY = "KEY_LINE"
# User INI file Parameters/Keys
_AUDIO_THRESHOLD_KEY = "AUDIO_THRESHOLD"
_DEBOUNCE_KEY = "DEBOUNCE"
_DECODE_SPEED_KEY = "DECODE_SPEED"
_ENCODE_SPEED_KEY = "ENCODE_SPEED"
_INPUT_MODE_KEY = "INPUT_MODE"
_INVERT_KEY_INPUT_KEY = "KEY_INPUT_INVERT"
_LOGGING_LEVEL_KEY = "LOGGING_LEVEL"
_OUTPUT_MODE_KEY = "OUTPUT_MODE"
_TONE_FREQUENCY_KEY = "TONE_FREQUENCY"

MIN_SPEED = 1
MAX_SPEED = 60

# Paths and Configurations
app_config_dir = None
app_config_file_path = None
app_config = None
user_config_dir = None
user_config_file_path = None
user_config = None

# System information
hostname = None
os_name = None
platform_name = None
pyaudio_version = None
pyserial_version = None
python_version = None
morsendec_version = None
system_name = None
system_version = None
user_home = None
user_name = None

# Machine/System Settings
serial_port = None
gpio = False
key_line = "CTS"

# User Settings
audio_threshold = 700
debounce = 20
decode_speed = 13
encode_speed = 13
input_mode = InputMode.key
invert_key_input = False
logging_level = log.INFO_LEVEL
output_mode = OutputMode.key
tone_frequency = 700

def create_config_files_if_needed():
    for file_path in (user_config_file_path, app_config_file_path):
        if not os.path.isfile(file_path):
            config_dir = os.path.dirname(file_path)
            if not os.path.isdir(config_dir):
                os.makedirs(config_dir)
            with open(file_path, 'w'):
                pass

def _int_in_range(s, name, lo, hi) -> int:
    try:
        v = int(s)
    except ValueError:
        msg = "{} value '{}' is not a valid integer value.".format(name, s)
        log.err(msg)
        raise ValueError(msg) from None
    if v < lo or v > hi:
        msg = "{} value '{}' is not in the range {}-{}.".format(name, v, lo, hi)
        log.err(msg)
        raise ValueError(msg)
    return v

def _bool_from_str(s, name) -> bool:
    try:
        return bool(strtobool(str(s)))
    except ValueError:
        msg = "{} value '{}' is not a valid boolean value.".format(name, s)
        log.err(msg)
        raise ValueError(msg) from None

def input_mode_from_str(s):
    """
    InputMode from its string representation.

    Parameters
    ----------
    s : str
        'K|KEY' for InputMode.key
        'A|AUDIO' for InputMode.audio

    Raise a value error if it isn't one of those values
    """
    s = s.upper()
    if s == "K" or s == "KEY":
        return InputMode.key
    elif s == "A" or s == "AUDIO":
        return InputMode.audio
    else:
        msg = "INPUT_MODE value '{}' is not a valid `Input Mode` value of 'KEY' or 'AUDIO'.".format(s)
        log.err(msg)
        raise ValueError(msg)

def output_mode_from_str(s):
    """
    OutputMode from its string representation.

    Parameters
    ----------
    s : str
        'K|KEY' for OutputMode.key
        'T|TONE' for OutputMode.tone

    Raise a value error if it isn't one of those values
    """
    s = s.upper()
    if s == "K" or s == "KEY":
        return OutputMode.key
    elif s == "T" or s == "TONE":
        return OutputMode.tone
    else:
        msg = "OUTPUT_MODE value '{}' is not a valid `Output Mode` value of 'KEY' or 'TONE'.".format(s)
        log.err(msg)
        raise ValueError(msg)

def set_audio_threshold(s):
    """Sets the audio level (0-1023) above which a tone is taken as present."""
    global audio_threshold
    audio_threshold = _int_in_range(s, "Audio threshold", 0, 1023)
    user_config.set(_CONFIG_SECTION, _AUDIO_THRESHOLD_KEY, str(audio_threshold))

def set_debounce(s):
    """Sets the key debounce time in milliseconds (0-100)."""
    global debounce
    debounce = _int_in_range(s, "Debounce", 0, 100)
    user_config.set(_CONFIG_SECTION, _DEBOUNCE_KEY, str(debounce))

def set_decode_speed(s):
    """Sets the speed (wpm) expected by the decoder."""
    global decode_speed
    decode_speed = _int_in_range(s, "Decode speed", MIN_SPEED, MAX_SPEED)
    user_config.set(_CONFIG_SECTION, _DECODE_SPEED_KEY, str(decode_speed))

def set_encode_speed(s):
    """Sets the speed (wpm) used by the encoder."""
    global encode_speed
    encode_speed = _int_in_range(s, "Encode speed", MIN_SPEED, MAX_SPEED)
    user_config.set(_CONFIG_SECTION, _ENCODE_SPEED_KEY, str(encode_speed))

def set_gpio(s):
    """
    Sets the GPIO interface enable state.

    Parameters
    ----------
    s : str
        Values of `YES`|`ON`|`TRUE` will enable GPIO. Values of `NO`|`OFF`|`FALSE`
        will disable it.
    """
    global gpio
    gpio = _bool_from_str(s, "GPIO")
    app_config.set(_CONFIG_SECTION, _GPIO_KEY, util.on_off_from_bool(gpio))

def set_input_mode(s):
    """
    Sets the decoder input mode.

    Parameters
    ----------
    s : str
        The value `K|KEY` will set the input to the key interface.
        The value `A|AUDIO` will set the input to the computer audio input.
    """
    global input_mode
    input_mode = input_mode_from_str(s)
    user_config.set(_CONFIG_SECTION, _INPUT_MODE_KEY, input_mode.name.upper())

def set_invert_key_input(s):
    """
    Enable/disable key input signal inversion (for an active low input).
    """
    global invert_key_input
    invert_key_input = _bool_from_str(s, "Invert key input")
    user_config.set(_CONFIG_SECTION, _INVERT_KEY_INPUT_KEY, util.on_off_from_bool(invert_key_input))

def set_key_line(s):
    """Sets the serial port line the key is read from (CTS|DSR)."""
    global key_line
    s = s.upper()
    if not s in KEY_LINES:
        msg = "KEY_LINE value '{}' is not one of {}.".format(s, KEY_LINES)
        log.err(msg)
        raise ValueError(msg)
    key_line = s
    app_config.set(_CONFIG_SECTION, _KEY_LINE_KEY, key_line)

def set_logging_level(s):
    """Sets the logging level (-3...)"""
    global logging_level
    try:
        level = int(s)
    except ValueError:
        log.err("Logging Level value '{}' is not a valid integer value.".format(s))
        raise
    logging_level = level if level >= log.LOGGING_MIN_LEVEL else log.LOGGING_MIN_LEVEL
    user_config.set(_CONFIG_SECTION, _LOGGING_LEVEL_KEY, str(logging_level))

def set_output_mode(s):
    """
    Sets the encoder output mode.

    Parameters
    ----------
    s : str
        The value `K|KEY` will set the output to the keying line.
        The value `T|TONE` will set the output to a computer audio tone.
    """
    global output_mode
    output_mode = output_mode_from_str(s)
    user_config.set(_CONFIG_SECTION, _OUTPUT_MODE_KEY, output_mode.name.upper())

def set_serial_port(p):
    """Sets the serial port name ('' or 'NONE' for no port)."""
    global serial_port
    serial_port = util.str_none_or_value(p)
    app_config.set(_CONFIG_SECTION, _SERIAL_PORT_KEY, serial_port if serial_port else "")

def set_tone_frequency(s):
    """Sets the tone frequency in Hz (100-2000)."""
    global tone_frequency
    tone_frequency = _int_in_range(s, "Tone frequency", 100, 2000)
    user_config.set(_CONFIG_SECTION, _TONE_FREQUENCY_KEY, str(tone_frequency))

def print_info():
    """Print system and MorsEnDec configuration information
    """
    print_system_info()
    print_config()

def print_system_info():
    """Print system information
    """
    print("User:", user_name)
    print("User Home Path:", user_home)
    print("User Configuration File:", user_config_file_path)
    print("App Configuration File", app_config_file_path)
    print("OS:", os_name)
    print("System:", system_name)
    print("Version:", system_version)
    print("Platform:", platform_name)
    print("MorsEnDec:", morsendec_version)
    print("Python:", python_version)
    print("PyAudio:", pyaudio_version)
    print("PySerial:", pyserial_version)
    print("Host:", hostname)

def print_config():
    """Print the MorsEnDec configuration
    """
    print("======================================")
    print("Serial port: '{}'".format(util.str_none_or_value(serial_port) or ''))
    print("Serial key line:", key_line)
    print("GPIO interface (Raspberry Pi):", util.on_off_from_bool(gpio))
    print("--------------------------------------")
    print("Decode speed (wpm):", decode_speed)
    print("Encode speed (wpm):", encode_speed)
    print("Input mode:", input_mode.name.upper())
    print("Output mode:", output_mode.name.upper())
    print("Invert key input:", util.on_off_from_bool(invert_key_input))
    print("Key debounce (ms):", debounce)
    print("Audio threshold (0-1023):", audio_threshold)
    print("Tone frequency (Hz):", tone_frequency)
    print()
    print("Logging level:", logging_level)

def save_config():
    """Save (write) the configuration values out to the user and
    system/machine config files.
    """
    create_config_files_if_needed()
    with open(user_config_file_path, 'w') as configfile:
        user_config.write(configfile, space_around_delimiters=False)
    with open(app_config_file_path, 'w') as configfile:
        app_config.write(configfile, space_around_delimiters=False)

def read_config(config_dir=None):
    """Read the configuration values from the user and machine config files.

    Parameters
    ----------
    config_dir : str
        Directory holding both files. If not given the system location is used.
    """
    global hostname, platform_name, os_name, morsendec_version, python_version
    global pyaudio_version, pyserial_version, system_name, system_version
    global app_config, app_config_dir, app_config_file_path
    global user_config, user_config_dir, user_config_file_path
    global user_home, user_name
    #
    global serial_port, gpio, key_line
    #
    global audio_threshold, debounce, decode_speed, encode_speed, input_mode
    global invert_key_input, logging_level, output_mode, tone_frequency

    # Get the system data
    try:
        user_name = getpass.getuser()
    except (KeyError, OSError):
        user_name = "user"
    user_home = os.path.expanduser('~')
    os_name = os.name
    system_name = platform.system()
    system_version = platform.release()
    platform_name = sys.platform
    morsendec_version = morsendec.VERSION
    python_version = "{}.{}.{}".format(sys.version_info.major, sys.version_info.minor, sys.version_info.micro)
    try:
        import pyaudio
        pyaudio_version = pyaudio.__version__
    except (ModuleNotFoundError, AttributeError):
        pyaudio_version = "PyAudio is not installed or the version information is not available (check installation)"
    try:
        import serial
        pyserial_version = serial.VERSION
    except (ModuleNotFoundError, AttributeError):
        pyserial_version = "PySerial is not installed or the version information is not available (check installation)"
    hostname = socket.gethostname()

    # User configuration file name
    userConfigFileName = "config-{}.ini".format(user_name)
    app_configFileName = "config_app.ini"

    # Create the user and application configuration paths
    if config_dir:
        user_config_dir = config_dir
        app_config_dir = config_dir
    elif system_name == "Windows":
        try:
            user_config_dir = os.path.join(os.environ["LOCALAPPDATA"], _APP_NAME)
            app_config_dir = os.path.join(os.environ["ProgramData"], _APP_NAME)
        except KeyError as ex:
            log.err("Key '{}' not found in environment.".format(ex.args[0]))
            raise
    else:  # Linux or Mac
        user_config_dir = os.path.join(user_home, ".{}".format(_APP_NAME))
        app_config_dir = user_config_dir
    user_config_file_path = os.path.join(user_config_dir, userConfigFileName)
    app_config_file_path = os.path.join(app_config_dir, app_configFileName)

    user_config_defaults = {
        _AUDIO_THRESHOLD_KEY:"700",
        _DEBOUNCE_KEY:"20",
        _DECODE_SPEED_KEY:"13",
        _ENCODE_SPEED_KEY:"13",
        _INPUT_MODE_KEY:"KEY",
        _INVERT_KEY_INPUT_KEY:"OFF",
        _LOGGING_LEVEL_KEY:"0",
        _OUTPUT_MODE_KEY:"KEY",
        _TONE_FREQUENCY_KEY:"700"
    }
    app_config_defaults = {_SERIAL_PORT_KEY:"", _GPIO_KEY:"OFF", _KEY_LINE_KEY:"CTS"}

    user_config = configparser.ConfigParser(defaults=user_config_defaults, allow_no_value=True, default_section=_CONFIG_SECTION)
    app_config = configparser.ConfigParser(defaults=app_config_defaults, allow_no_value=True, default_section=_CONFIG_SECTION)

    user_config.read(user_config_file_path)
    app_config.read(app_config_file_path)

    __option = ""
    __key = ""
    try:
        ###
        # Get the System (App) config values
        ###
        __option = "Serial port"
        __key = _SERIAL_PORT_KEY
        serial_port = util.str_none_or_value(app_config.get(_CONFIG_SECTION, __key))
        __option = "GPIO interface"
        __key = _GPIO_KEY
        gpio = app_config.getboolean(_CONFIG_SECTION, __key)
        __option = "Key line"
        __key = _KEY_LINE_KEY
        key_line = app_config.get(_CONFIG_SECTION, __key).upper()
        if not key_line in KEY_LINES:
            raise ValueError(key_line)

        ###
        # Get the User config values
        ###
        __option = "Audio threshold"
        __key = _AUDIO_THRESHOLD_KEY
        audio_threshold = user_config.getint(_CONFIG_SECTION, __key)
        __option = "Debounce"
        __key = _DEBOUNCE_KEY
        debounce = user_config.getint(_CONFIG_SECTION, __key)
        __option = "Decode speed"
        __key = _DECODE_SPEED_KEY
        decode_speed = user_config.getint(_CONFIG_SECTION, __key)
        __option = "Encode speed"
        __key = _ENCODE_SPEED_KEY
        encode_speed = user_config.getint(_CONFIG_SECTION, __key)
        __option = "Input mode"
        __key = _INPUT_MODE_KEY
        _input_mode = user_config.get(_CONFIG_SECTION, __key).upper()
        if _input_mode == "KEY":
            input_mode = InputMode.key
        elif _input_mode == "AUDIO":
            input_mode = InputMode.audio
        else:
            raise ValueError(_input_mode)
        __option = "Invert key input"
        __key = _INVERT_KEY_INPUT_KEY
        invert_key_input = user_config.getboolean(_CONFIG_SECTION, __key)
        __option = "Logging Level"
        __key = _LOGGING_LEVEL_KEY
        logging_level = user_config.getint(_CONFIG_SECTION, __key)
        __option = "Output mode"
        __key = _OUTPUT_MODE_KEY
        _output_mode = user_config.get(_CONFIG_SECTION, __key).upper()
        if _output_mode == "KEY":
            output_mode = OutputMode.key
        elif _output_mode == "TONE":
            output_mode = OutputMode.tone
        else:
            raise ValueError(_output_mode)
        __option = "Tone frequency"
        __key = _TONE_FREQUENCY_KEY
        tone_frequency = user_config.getint(_CONFIG_SECTION, __key)
    except ValueError as ex:
        log.err("{} option value '{}' is not a valid value. INI file key: {}.".format(__option, ex.args[0], __key))
        raise

def process_config_args(args):
    """
    Apply the values from the `*_override` parsers that are present in the
    parsed arguments.
    """
    setters = (
        ("audio_threshold", set_audio_threshold),
        ("debounce", set_debounce),
        ("decode_speed", set_decode_speed),
        ("encode_speed", set_encode_speed),
        ("gpio", set_gpio),
        ("input_mode", set_input_mode),
        ("invert_key_input", set_invert_key_input),
        ("key_line", set_key_line),
        ("logging_level", set_logging_level),
        ("output_mode", set_output_mode),
        ("serial_port", set_serial_port),
        ("tone_frequency", set_tone_frequency),
    )
    for dest, setter in setters:
        v = getattr(args, dest, None)
        if v is not None:
            setter(v)
    log.set_logging_level(logging_level)

# ### Mainline
read_config()

audio_threshold_override = argparse.ArgumentParser(add_help=False)
audio_threshold_override.add_argument("--threshold", default=audio_threshold, type=int,
help="The audio level (0-1023) above which a tone is taken as present.",
metavar="level", dest="audio_threshold")

debounce_override = argparse.ArgumentParser(add_help=False)
debounce_override.add_argument("-b", "--debounce", default=debounce, type=int,
help="The time in milliseconds to ignore key transitions due to contact bounce.",
metavar="ms", dest="debounce")

decode_speed_override = argparse.ArgumentParser(add_help=False)
decode_speed_override.add_argument("-d", "--decodespeed", default=decode_speed, type=int,
help="The code speed in words per minute expected by the decoder.",
metavar="wpm", dest="decode_speed")

encode_speed_override = argparse.ArgumentParser(add_help=False)
encode_speed_override.add_argument("-e", "--encodespeed", default=encode_speed, type=int,
help="The code speed in words per minute used to send.",
metavar="wpm", dest="encode_speed")

gpio_override = argparse.ArgumentParser(add_help=False)
gpio_override.add_argument(
    "-g",
    "--gpio",
    default="ON" if gpio else "OFF",
    choices=["ON","On","on","YES","Yes","yes","OFF","Off","off","NO","No","no"],
    help="'ON' or 'OFF' to indicate whether GPIO (Raspberry Pi) key interface should be used.\
 GPIO takes priority over the serial interface if both are specified.",
    metavar="gpio",
    dest="gpio",
)

input_mode_override = argparse.ArgumentParser(add_help=False)
input_mode_override.add_argument("-i", "--input", default=input_mode.name.upper(),
help="The decoder input (KEY|AUDIO) to use.", metavar="input-mode", dest="input_mode")

invert_key_input_override = argparse.ArgumentParser(add_help=False)
invert_key_input_override.add_argument("-M", "--iki", default="ON" if invert_key_input else "OFF",
help="'ON' or 'OFF' to Enable/Disable inverting the key input signal (for an active low input).",
metavar="invert-key-input", dest="invert_key_input")

key_line_override = argparse.ArgumentParser(add_help=False)
key_line_override.add_argument("-k", "--keyline", default=key_line, type=str.upper, choices=list(KEY_LINES),
help="The serial port line the key is read from (CTS|DSR).", metavar="line", dest="key_line")

logging_level_override = argparse.ArgumentParser(add_help=False)
logging_level_override.add_argument(
    "--logging-level",
    metavar="logging-level",
    dest="logging_level",
    type=int,
    help="Logging level. A value of '0' disables DEBUG output, '-1' disables INFO, '-2' disables WARN, '-3' disables ERROR. Higher values above '0' enable more DEBUG output."
)

output_mode_override = argparse.ArgumentParser(add_help=False)
output_mode_override.add_argument("-o", "--output", default=output_mode.name.upper(),
help="The encoder output (KEY|TONE) to use.", metavar="output-mode", dest="output_mode")

serial_port_override = argparse.ArgumentParser(add_help=False)
serial_port_override.add_argument("-p", "--port", default=serial_port,
help="The name of the serial port to use (or 'NONE').", metavar="portname", dest="serial_port")

tone_frequency_override = argparse.ArgumentParser(add_help=False)
tone_frequency_override.add_argument("-f", "--frequency", default=tone_frequency, type=int,
help="The tone frequency in Hz.", metavar="hz", dest="tone_frequency")
