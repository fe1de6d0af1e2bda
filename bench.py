#!/usr/bin/env python3
# PYTHON_ARGCOMPLETE_OK
"""Codec throughput benchmarking.
"""
import time
import random
import argparse
import argcomplete
from cobsio.cobs import buffer_size, encode_into, decode_into, decode_inplace


def payload(size, zeros):
    return bytes(0 if random.random() < zeros else random.randint(1, 255) for _ in range(size))


def run(args):
    data = [payload(args.size, args.zeros) for _ in range(args.count)]
    encoded = bytearray(buffer_size(args.size))
    decoded = bytearray(len(encoded))

    enc_time = dec_time = 0
    enc_size = 0

    for _ in range(args.rounds):
        for item in data:
            elapsed = time.time()
            size = encode_into(item, encoded)
            enc_time += time.time() - elapsed
            enc_size += size

            elapsed = time.time()

            if args.inplace:
                buf = encoded[:size]
                length = decode_inplace(buf)
                result = buf[:length]
            else:
                result = decoded[:decode_into(encoded[:size], decoded)]

            dec_time += time.time() - elapsed

            if result != item:
                exit("error: round trip mismatch")

    total = args.size * args.count * args.rounds

    enc_rate = round(total / enc_time) if enc_time else 0
    dec_rate = round(total / dec_time) if dec_time else 0
    overhead = (enc_size - total) / (args.count * args.rounds)

    print(f"encode: {enc_rate:>10d} Bps  overhead {overhead:.2f} bytes/frame")
    print(f"decode: {dec_rate:>10d} Bps{'  (in place)' if args.inplace else ''}")


def main():
    parser = argparse.ArgumentParser(prog="bench")
    parser.add_argument('-s', '--size', type=int, default=1024, help='payload size (default: 1024)')
    parser.add_argument('-c', '--count', type=int, default=64, help='distinct payloads (default: 64)')
    parser.add_argument('-r', '--rounds', type=int, default=10, help='passes over all payloads (default: 10)')
    parser.add_argument('-z', '--zeros', type=float, default=0.01, help='probability of a zero byte (default: 0.01)')
    parser.add_argument('-i', '--inplace', action="store_true", help='decode in place')
    argcomplete.autocomplete(parser)
    args = parser.parse_args()

    if args.size < 0 or args.count < 1 or args.rounds < 1:
        exit("error: size must be >= 0, count and rounds >= 1")

    try:
        run(args)

    except KeyboardInterrupt:
        exit("")


if __name__ == '__main__':
    main()
