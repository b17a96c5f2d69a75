"""
Library code used by boxknife units: the hex and percent codecs, the logging and environment
configuration, the argument parser, and miscellaneous tools.
"""
