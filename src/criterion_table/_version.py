VERSION = "0.4.0"
__version__ = VERSION
