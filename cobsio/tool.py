"""COBS command line tool.

Encodes and decodes buffers from arguments, files or stdin.
"""
import sys
import os
import argparse
import argcomplete
from warnings import warn

from . import util
from . import cobs


class CobsTool:
    FORMATS = ('raw', 'hex')

    @staticmethod
    def argparse_io_args(parser):
        parser.add_argument(
            'data',
            type=str,
            default='-',
            nargs='?',
            help='data to process or "-"/nothing for stdin'
        )

        parser.add_argument('-i', '--input', metavar='FILE', help='read data from file')
        parser.add_argument('-o', '--output', metavar='FILE', help='write result to file (default: stdout)')

    @staticmethod
    def main(argv=None):
        parser = argparse.ArgumentParser(prog="cobs")
        parser.add_argument(
            '-f', '--format',
            choices=CobsTool.FORMATS,
            help='input and output format (default: $COBS_FORMAT or raw)',
            **util.arg_env_or_none('COBS_FORMAT', 'raw')
        )
        parser.add_argument('-v', '--verbose', action='store_true', help='print sizes to stderr')
        subparsers = parser.add_subparsers(dest='command', title='commands', help='action to invoke', metavar='CMD')
        subparsers.required = True

        parser_size = subparsers.add_parser('size', help='print worst case encoded size')
        parser_size.add_argument('size', type=int, help='input size in bytes')
        parser_size.add_argument('-n', '--no-delim', action='store_true', help='without trailing delimiter')

        parser_encode = subparsers.add_parser('encode', aliases=['enc'], help='cobs-encode data')
        CobsTool.argparse_io_args(parser_encode)
        parser_encode.add_argument('-n', '--no-delim', action='store_true', help='omit trailing delimiter')
        CobsTool._command_enc = CobsTool._command_encode

        parser_decode = subparsers.add_parser('decode', aliases=['dec'], help='decode cobs data')
        CobsTool.argparse_io_args(parser_decode)
        parser_decode.add_argument('--inplace', action='store_true', help='decode over the input buffer')
        CobsTool._command_dec = CobsTool._command_decode

        argcomplete.autocomplete(parser)
        args = parser.parse_args(argv)

        if args.format not in CobsTool.FORMATS:
            parser.error(f"invalid format '{args.format}'")

        try:
            command = getattr(CobsTool, f"_command_{args.command}")
            return command(args)

        except KeyboardInterrupt:
            exit(os.linesep)

    @staticmethod
    def _read(args):
        if args.input:
            if args.data != '-':
                exit("error: cannot specify both data and input file")

            with open(args.input, 'rb') as inf:
                data = inf.read()

        elif args.data == '-':
            data = sys.stdin.buffer.read()

        else:
            data = args.data.encode()

        if args.format == 'hex':
            try:
                data = util.parse_hex(data)
            except ValueError as e:
                exit(f"error: bad hex input: {e}")

        return bytearray(data)

    @staticmethod
    def _write(args, data):
        if args.format == 'hex':
            data = (util.format_hex(data) + os.linesep).encode()

        if args.output:
            with open(args.output, 'wb') as out:
                out.write(data)

        else:
            sys.stdout.buffer.write(data)
            sys.stdout.flush()

    @staticmethod
    def _command_size(args):
        if args.size < 0:
            exit("error: size must not be negative")

        print(cobs.buffer_size(args.size, not args.no_delim))

        return 0

    @staticmethod
    def _command_encode(args):
        data = CobsTool._read(args)
        output = bytearray(cobs.buffer_size(len(data), not args.no_delim))
        size = cobs.encode_exact(data, output, not args.no_delim)

        if args.verbose:
            print(f"encode: {len(data)} -> {size} bytes (+{size - len(data)})", file=sys.stderr)

        CobsTool._write(args, output[:size])

        return 0

    @staticmethod
    def _command_decode(args):
        data = CobsTool._read(args)

        if len(data) < 2:
            exit(f"error: data too small ({len(data)})")

        if 0 in data[:-1]:
            warn(f"decode: unexpected zero at offset {data.index(0)}, output may be garbled")

        if args.inplace:
            size = cobs.decode_inplace(data)
            output = data
        else:
            output = bytearray(len(data))
            size = cobs.decode_exact(data, output)

        if args.verbose:
            print(f"decode: {len(data)} -> {size} bytes", file=sys.stderr)

        CobsTool._write(args, output[:size])

        return 0


if __name__ == '__main__':
    CobsTool.main()
