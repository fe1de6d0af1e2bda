"""COBS codec
"""
from .cobs import (
    buffer_size, encode_into, decode_into, decode_inplace,
    encode_exact, decode_exact, cobs_encode, cobs_decode,
    CobsError, InsufficientOutputBuffer, InputTooShort,
)
