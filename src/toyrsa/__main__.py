"""The Command Line Interface for the utility, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface) that generates the INTERACTIVE part
on-the-fly based on the missing components of the CLI interaction, including the option that none are included.
Keys are never stored: the same `--seed` regenerates the same keypair, which is how a later decryption finds it.

Typical usage example:

    toyrsa
    OR
    python -m toyrsa -n encrypt --seed 1234 --message "Hi there!"
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import random
import secrets
import sys
import typing

import toyrsa


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in Toy RSA.",
            choices=["keygen", "encrypt", "decrypt", "encrypt-codes", "decrypt-codes"],
        ),
    "keygen":
        HelpData("Key generation utility."),
    "encrypt":
        HelpData("Text encryption utility."),
    "decrypt":
        HelpData("Text decryption utility."),
    "encrypt-codes":
        HelpData("Binary code encryption utility."),
    "decrypt-codes":
        HelpData("Binary code decryption utility."),
    "seed":
        HelpData(
            description="Seed of the keypair. The same seed regenerates the same keypair.",
            format=int,
        ),
    "message":
        HelpData(
            description="Message or path to file containing payload. If Path start with `P:`",
            format=str,
        ),
    "pub_exponent":
        HelpData(
            description="Exponent for the public key.",
            format=int,
            advanced=True,
            default=toyrsa.keygen.DEFAULT_PUB_EXP,
        ),
}

needs = {
    "keygen": ("pub_exponent",),
    "encrypt": ("message", "pub_exponent"),
    "decrypt": ("seed", "message", "pub_exponent"),
    "encrypt-codes": ("message", "pub_exponent"),
    "decrypt-codes": ("seed", "message", "pub_exponent"),
}

seedp = argparse.ArgumentParser(add_help=False)
seedp.add_argument("--seed", "-s", type=help_dict["seed"].format, help=help_dict["seed"].description)
expo = argparse.ArgumentParser(add_help=False)
expo.add_argument("--pub-exponent", type=help_dict["pub_exponent"].format, help=help_dict["pub_exponent"].description)
payloads = argparse.ArgumentParser(add_help=False)
payloads.add_argument("--message", "-m", type=help_dict["message"].format, help=help_dict["message"].description)
trunc = argparse.ArgumentParser(add_help=False)
trunc.add_argument("--truncate", "-t", action="store_true", help="Cut codes to their width. Warning! Lossy.")
corep = argparse.ArgumentParser(prog="toyrsa")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {toyrsa.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

for name, parents in (("keygen", [seedp, expo]), ("encrypt", [seedp, expo, payloads]),
                      ("decrypt", [seedp, expo, payloads]), ("encrypt-codes", [seedp, expo, payloads, trunc]),
                      ("decrypt-codes", [seedp, expo, payloads, trunc])):
    commands.add_parser(name, parents=parents, help=help_dict[name].description)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default:
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
    choices = helper_data.choices
    vald = set(choices)
    for choice in choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in vald:
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


def check_message(mess: str) -> str:
    """Parse message for path-notice."""
    if mess.startswith("P:"):
        mess = mess[2:]
        with open(mess, "r", encoding="utf-8") as f:
            mess = f.read()
    return mess


def main():
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args()
    pstatus = (args.non_interactive, args.advanced)

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to Toy RSA!\n")
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", pstatus)
    for reqs in needs[args.subcommand]:
        if getattr(args, reqs, None) is None:
            if help_dict[reqs].choices is not None:
                res = choice_handler(reqs, pstatus)
            else:
                res = input_handler(reqs, pstatus)
            setattr(args, reqs, res)
        else:
            pspr(f"{reqs}: {getattr(args, reqs)}")
    if getattr(args, "seed", None) is None:
        args.seed = secrets.randbits(32)
        if args.subcommand != "keygen":
            # Goes to stderr so the payload on stdout stays clean.
            print(f"Generated seed: {args.seed}", file=sys.stderr)
    pspr("\nInput Complete! Executing...")
    try:
        cipher = toyrsa.RSACipher(rng=random.Random(args.seed), pub_exp=args.pub_exponent)
        match args.subcommand:
            case "keygen":
                print(f"Seed: {args.seed}")
                print(f"Public key: {cipher.public_key}")
                print(f"Private key: {cipher.private_key}")
            case "encrypt":
                ciph = cipher.encrypt_string(check_message(args.message))
                pspr("Ciphertext:")
                print(ciph)
            case "decrypt":
                clear = cipher.decrypt_string(check_message(args.message))
                pspr("Cleartext:")
                print(clear)
            case "encrypt-codes":
                ciph = cipher.encrypt_codes(check_message(args.message), args.truncate)
                pspr("Encrypted codes:")
                print(ciph)
            case "decrypt-codes":
                clear = cipher.decrypt_codes(check_message(args.message), args.truncate)
                pspr("Decrypted codes:")
                print(clear)
    except (ValueError, RuntimeError) as exc:
        print(f"Operation failed: {exc}")
        sys.exit(1)
    pspr("Thank you for using Toy RSA!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
