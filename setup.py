from setuptools import setup

setup(name = 'MorsEnDec',
      version = '1.0.2',
      description = 'Morse code decoder/encoder library package',
      license = 'MIT',
      packages = ['morsendec'],
      python_requires = '>=3.8',
      install_requires = ['numpy', 'pyserial'],
      extras_require = {
          'audio': ['PyAudio'],
          'gpio': ['gpiozero'],
          'test': ['pytest'],
      }
     )
