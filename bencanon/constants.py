"""Limits and defaults shared by the decoder and the value model."""

# Containers nested deeper than this are rejected unless the caller asks otherwise
DEFAULT_MAX_DEPTH = 256

# Integers are signed 64 bit
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# Longest digit run that can still hold a 64 bit magnitude
INT64_MAX_DIGITS = len(str(INT64_MAX))
