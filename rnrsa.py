import argparse
import json
import logging
import sys

from rnrsa_crypto import RsaEngine, RSAError


def _read_key(args, parser):
    if args.key:
        return args.key
    if args.keyfile:
        try:
            with open(args.keyfile, 'r', encoding='ascii') as key_file:
                return key_file.read()
        except (OSError, UnicodeDecodeError) as e:
            parser.error(f"cannot read key file '{args.keyfile}': {e}")
    parser.error("-e or -d requires either -k (key text) or -i (key file).")


def run(args, parser) -> int:
    engine = RsaEngine(args.bits)

    if args.generate:
        pair = engine.generate()
        print(json.dumps({'public': pair.public, 'private': pair.private}, indent=2))
    elif args.encrypt:
        print(engine.encrypt(args.text, _read_key(args, parser)))
    elif args.decrypt:
        print(engine.decrypt(args.text, _read_key(args, parser)))
    else:
        parser.print_help()
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="RSA-OAEP key generation and text encryption")

    action_group = parser.add_mutually_exclusive_group()
    action_group.add_argument('--generate', action='store_true', help='Generate an RSA key pair and print it as JSON')
    action_group.add_argument('-e', '--encrypt', action='store_true', help='Encrypt TEXT with a public key')
    action_group.add_argument('-d', '--decrypt', action='store_true', help='Decrypt Base64 TEXT with a private key')

    key_group = parser.add_mutually_exclusive_group()
    key_group.add_argument('-k', '--key', help='Encoded key (public key for encryption, private key for decryption)')
    key_group.add_argument('-i', '--keyfile', help='File containing the encoded key')

    parser.add_argument('text', nargs='?', help='Message to encrypt or ciphertext to decrypt')
    parser.add_argument('--bits', type=int, default=None, help='Key size for --generate (default: 2048 or $RNRSA_KEY_SIZE)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    if (args.encrypt or args.decrypt) and args.text is None:
        parser.error("-e or -d requires TEXT to encrypt or decrypt.")

    try:
        return run(args, parser)
    except RSAError as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return 1
    except ValueError as e:
        # Invalid key size from --bits or the environment
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
