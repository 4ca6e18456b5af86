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

"""Configure.py

Configures system values and user preferences for the MorsEnDec applications.

Provides a Command Line Interface (CLI) to the morsendec.config module. With
no arguments the system information and the configuration are displayed.
Values given on the command line are set and the configuration is saved.
"""
import argparse
import sys

from morsendec import config

def main(argv):
    arg_parser = argparse.ArgumentParser(prog="Configure",
            description="Display the MorsEnDec configuration as well as key system values. "
            + "Allow configuration values to be set and saved.",
            epilog="If configuration values are given, the configuration will be saved.\n",
            parents=
            [
                config.serial_port_override,
                config.gpio_override,
                config.key_line_override,
                config.invert_key_input_override,
                config.debounce_override,
                config.input_mode_override,
                config.audio_threshold_override,
                config.output_mode_override,
                config.tone_frequency_override,
                config.decode_speed_override,
                config.encode_speed_override,
                config.logging_level_override
            ])
    args = arg_parser.parse_args(argv)

    if len(argv) == 0:
        print("======================================")
        print("         System Information")
        print("======================================")
        config.print_system_info()
    else:
        config.process_config_args(args)
        config.save_config()
    print("======================================")
    print("           Configuration")
    config.print_config()
    sys.exit(0)

if __name__ == "__main__":
    try:
        main(sys.argv[1:])
    except ValueError as ex:
        print(ex.args[0])
        sys.exit(1)     # Indicate this was an abnormal exit
    except KeyboardInterrupt:
        print()
        sys.exit(0)     # Indicate this was a normal exit
