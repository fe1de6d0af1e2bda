"""Consistent Overhead Byte Stuffing

Removes every zero byte from a buffer so that zero can delimit frames on
the wire. Overhead is at least one byte and at most one byte per 254.

The buffer functions (buffer_size, encode_into, decode_into, decode_inplace)
write into caller supplied buffers and signal failure by returning 0. The
cobs_* and *_exact functions wrap them and raise CobsError instead.
"""

COBS_BLOCK_MAX = 0xFF
COBS_BLOCK_DATA = COBS_BLOCK_MAX - 1


class CobsError(ValueError):
    pass


class InsufficientOutputBuffer(CobsError):
    def __init__(self, needed, size):
        super(InsufficientOutputBuffer, self).__init__(
            f"output buffer too small ({size} < {needed})"
        )
        self.needed = needed
        self.size = size


class InputTooShort(CobsError):
    def __init__(self, size):
        super(InputTooShort, self).__init__(f"encoded input too short ({size} < 2)")
        self.size = size


def buffer_size(size, delim=True):
    """Worst case encoded size.
    :param size: input length in bytes
    :param delim: account for a trailing zero delimiter
    :return: output length in bytes
    """
    output_size = size + (size // COBS_BLOCK_DATA) + 1

    if delim:
        output_size += 1

    return output_size


def encode_into(data, output, delim=True):
    """COBS-Encode bytes into a buffer.
    :param data: input bytes
    :param output: writable buffer of at least buffer_size(len(data), delim)
    :param delim: append a zero delimiter
    :return: bytes written, 0 if output is too small
    """
    if len(output) < buffer_size(len(data), delim):
        return 0

    read_index = 0
    write_index = 1
    code_index = 0
    code = 1

    while read_index < len(data):
        if not data[read_index]:
            output[code_index] = code
            code = 1
            code_index = write_index
            write_index += 1
            read_index += 1

        else:
            output[write_index] = data[read_index]
            read_index += 1
            write_index += 1
            code += 1

            # a full block ending the input needs no empty block after it
            if code == COBS_BLOCK_MAX and read_index < len(data):
                output[code_index] = code
                code = 1
                code_index = write_index
                write_index += 1

    output[code_index] = code

    if delim:
        output[write_index] = 0
        write_index += 1

    return write_index


def decode_into(data, output):
    """Decode a COBS buffer.
    :param data: encoded bytes, optionally ending with a zero delimiter
    :param output: writable buffer of at least len(data) - 1 bytes, may be data itself
    :return: bytes written, 0 if data is too short or output too small
    """
    if len(data) < 2 or not len(output) or len(output) < len(data) - 1:
        return 0

    end = len(data) - 1 if not data[-1] else len(data)
    read_index = 0
    write_index = 0

    # write_index <= read_index throughout, so output may alias data
    while True:
        code = data[read_index]

        if read_index + code > end:
            code = end - read_index

        read_index += 1

        for i in range(code - 1):
            output[write_index] = data[read_index]
            write_index += 1
            read_index += 1

        if read_index >= end:
            break

        if code != COBS_BLOCK_MAX:
            output[write_index] = 0
            write_index += 1

    return write_index


def decode_inplace(buf):
    """Decode a COBS buffer over itself.
    :param buf: writable encoded buffer
    :return: decoded length, the payload is buf[:length]
    """
    return decode_into(buf, buf)


def encode_exact(data, output, delim=True):
    size = encode_into(data, output, delim)

    if not size:
        raise InsufficientOutputBuffer(buffer_size(len(data), delim), len(output))

    return size


def decode_exact(data, output):
    """Like decode_into, but raises instead of returning 0 on bad arguments.

    A return of 0 then always means an empty payload.
    """
    if len(data) < 2:
        raise InputTooShort(len(data))

    if not len(output) or len(output) < len(data) - 1:
        raise InsufficientOutputBuffer(max(len(data) - 1, 1), len(output))

    return decode_into(data, output)


def cobs_encode(data, delim=False):
    """COBS-Encode bytes.
    :param data: input bytes
    :param delim: append a zero delimiter
    :return: cobs-encoded bytearray
    """
    output = bytearray(buffer_size(len(data), delim))
    return output[:encode_into(data, output, delim)]


def cobs_decode(data):
    """Decode a byte array.
    :param data: encoded bytes
    :return: decoded bytearray
    """
    output = bytearray(len(data))
    return output[:decode_exact(data, output)]
