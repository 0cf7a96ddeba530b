"""The Command Line Interface for textbookrsa, with interactive fallback.

Any argument missing from the command line is asked for interactively, unless `--non-interactive` is given, in which
case defaults are used where they exist and anything else is an error.

Typical usage example:

    textbookrsa keygen --p 37 --q 41 --pub-exponent 7
    textbookrsa -n encrypt --exponent 7 --modulus 1517 --message 123
    python -m textbookrsa
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import sys
import typing

import textbookrsa


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in textbookrsa.",
            choices=["keygen", "encrypt", "decrypt"],
        ),
    "keygen":
        HelpData("Key pair generation utility."),
    "encrypt":
        HelpData("Encryption utility."),
    "decrypt":
        HelpData("Decryption utility."),
    "generate":
        HelpData("Generate two fresh random primes."),
    "primes":
        HelpData("Build the key pair from known primes and public exponent."),
    "source":
        HelpData(
            description="Where the primes of the key pair come from.",
            choices=["generate", "primes"],
            default="generate",
        ),
    "p":
        HelpData(description="First prime.", format=int),
    "q":
        HelpData(description="Second prime.", format=int),
    "pub_exponent":
        HelpData(
            description="Exponent for the public key.",
            format=int,
            advanced=True,
            default=textbookrsa.keys.DEFAULT_PUBLIC_EXPONENT,
        ),
    "prime_bits":
        HelpData(
            description="Size of each generated prime (in bits).",
            format=int,
            advanced=True,
            default=textbookrsa.keys.PRIME_BITS,
        ),
    "exponent":
        HelpData(description="Key exponent, public for encryption and private for decryption.", format=int),
    "modulus":
        HelpData(description="Key modulus (product of the primes).", format=int),
    "message":
        HelpData(description="Integer message, plaintext for encryption and ciphertext for decryption.", format=int),
    "int_type":
        HelpData(
            description="Integer type the decrypted message has to fit.",
            choices=list(textbookrsa.INT_TYPES),
            advanced=True,
            default="u64",
        ),
}

needs = {
    "keygen": ("source",),
    "generate": ("prime_bits",),
    "primes": ("p", "q", "pub_exponent"),
    "encrypt": ("exponent", "modulus", "message"),
    "decrypt": ("exponent", "modulus", "message", "int_type"),
}

keyparts = argparse.ArgumentParser(add_help=False)
keyparts.add_argument("--exponent", "-e", type=help_dict["exponent"].format, help=help_dict["exponent"].description)
keyparts.add_argument("--modulus", "-m", type=help_dict["modulus"].format, help=help_dict["modulus"].description)
keyparts.add_argument("--message", "-M", type=help_dict["message"].format, help=help_dict["message"].description)
corep = argparse.ArgumentParser(prog="textbookrsa")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {textbookrsa.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

keygen = commands.add_parser("keygen", help=help_dict["keygen"].description)
keygen.add_argument("--source", "-s", choices=help_dict["source"].choices, help=help_dict["source"].description)
keygen.add_argument("--p", type=help_dict["p"].format, help=help_dict["p"].description)
keygen.add_argument("--q", type=help_dict["q"].format, help=help_dict["q"].description)
keygen.add_argument("--pub-exponent", type=help_dict["pub_exponent"].format, help=help_dict["pub_exponent"].description)
keygen.add_argument("--prime-bits", type=help_dict["prime_bits"].format, help=help_dict["prime_bits"].description)

encrypt = commands.add_parser("encrypt", parents=[keyparts], help=help_dict["encrypt"].description)
decrypt = commands.add_parser("decrypt", parents=[keyparts], help=help_dict["decrypt"].description)
decrypt.add_argument("--int-type",
                     "-t",
                     choices=help_dict["int_type"].choices,
                     help=help_dict["int_type"].description)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default is not None:
        return helper_data.default
    if mode[0]:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def choice_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    for choice in helper_data.choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if choice in help_dict:
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(choice + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in helper_data.choices:
            return ch
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr("Please select an option from the list.")


def input_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    if helper_data.default is not None:
        prntr(f"Default value: {helper_data.default}")
        prntr("To accept default just click enter. Otherwise specify value.")
    cls = helper_data.format
    while True:
        ch = input(f"{arg}: ")
        if not ch and helper_data.default is not None:
            return helper_data.default
        if ch == "":
            prntr("Please provide a value.")
            continue
        try:
            return cls(ch)
        except ValueError:
            prntr(f"We could not convert your value to {cls.__name__}.")


def gather(args: argparse.Namespace, group: str, mode: tuple[bool, bool], prntr: typing.Callable = print) -> None:
    """Fill in every argument `group` needs, prompting where the command line left a gap."""
    for reqs in needs[group]:
        if getattr(args, reqs, None) is None:
            if help_dict[reqs].choices is not None:
                res = choice_handler(reqs, mode, prntr)
            else:
                res = input_handler(reqs, mode, prntr)
            setattr(args, reqs, res)
        else:
            prntr(f"{reqs}: {getattr(args, reqs)}")


def main(argv: list[str] | None = None):
    """Core hybrid CLI/ICLI entry point."""
    args = corep.parse_args(argv)
    pstatus = (args.non_interactive, args.advanced)

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to textbookrsa!\n")
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", pstatus)
    if args.subcommand == "keygen" and getattr(args, "source", None) is None:
        if getattr(args, "p", None) is not None and getattr(args, "q", None) is not None:
            args.source = "primes"
    gather(args, args.subcommand, pstatus, pspr)
    if args.subcommand == "keygen":
        gather(args, args.source, pstatus, pspr)
    pspr("\nInput Complete! Executing...")
    try:
        match args.subcommand:
            case "keygen":
                if args.source == "primes":
                    pair = textbookrsa.KeyPair.from_primes(args.p, args.q, args.pub_exponent)
                else:
                    pair = textbookrsa.KeyPair.generate(int(args.prime_bits))
                pspr("Key pair generated!")
                print(f"public_exponent: {pair.public.exponent}")
                print(f"modulus: {pair.public.modulus}")
                print(f"private_exponent: {pair.private.exponent}")
            case "encrypt":
                ciph = textbookrsa.encrypt(args.message, args.exponent, args.modulus)
                pspr("Ciphertext:")
                print(ciph)
            case "decrypt":
                clear = textbookrsa.decrypt(args.message, args.exponent, args.modulus,
                                            textbookrsa.INT_TYPES[args.int_type])
                pspr("Cleartext:")
                print(clear)
    except (textbookrsa.KeyPairError, textbookrsa.MessageError) as err:
        print(f"Failed: {err}")
        sys.exit(1)
    pspr("Thank you for using textbookrsa!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
