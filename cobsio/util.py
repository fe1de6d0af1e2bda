import os
import re


def arg_env_or_none(key, default=None):
    """Return for argparse 'default=os.environ[key]' if set else default=None
    """
    return {'default': os.environ.get(key, default)}


def format_hex(data):
    return ' '.join(f"{v:02X}" for v in data)


def parse_hex(text):
    """Parse hex pairs, separated by whitespace, commas or nothing.

    Accepts an optional 0x prefix per pair.
    """
    if isinstance(text, (bytes, bytearray)):
        text = text.decode('ascii')

    text = re.sub(r"0[xX]([0-9a-fA-F]{2})", r"\1", text)
    text = re.sub(r"[\s,:]+", '', text)

    return bytearray.fromhex(text)
