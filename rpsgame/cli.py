"""
Interactive command line for the Rock-Paper-Scissors game.

A local ledger is created with the accounts "owner", "player" and "other", and a game contract
owned by "owner" is deployed on it. Commands are executed on behalf of an account with the `as=`
argument (defaulting to "owner"), for example:

    commit hand=rock secret=hello
    init hand=rock secret=hello amount=0.1
    join game=0 hand=scissors amount=0.1 as=player
    judge game=0 secret=hello
    list

Amounts are given in coins (decimal); secrets as text (at most 31 bytes) or as 0x-prefixed hex.
"""

import argparse
import logging
import os
import random
import shlex
import traceback
from typing import Dict

from prompt_toolkit import prompt
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import FileHistory

from .commitment import calculate_commitment
from .environment import Environment, load_settings
from .errors import GameError
from .rules import Hand
from .utils import SECRET_LEN, format_amount, format_secret, parse_amount


class ActionArgumentCompleter(Completer):
    ACTION_ARGUMENTS = {
        "accounts": [],
        "cancel": ["game=", "as="],
        "commit": ["hand=", "secret=", "as="],
        "events": [],
        "fee": ["amount=", "as="],
        "init": ["hand=", "secret=", "commitment=", "amount=", "as="],
        "join": ["game=", "hand=", "amount=", "as="],
        "judge": ["game=", "secret=", "hand=", "as="],
        "list": [],
        "play": ["hand=", "amount="],
        "send": ["amount=", "as="],
        "show": ["game="],
    }

    def get_completions(self, document, complete_event):
        word_before_cursor = document.get_word_before_cursor(WORD=True)

        if ' ' not in document.text:
            # user is typing the action
            for action in self.ACTION_ARGUMENTS.keys():
                if action.startswith(word_before_cursor):
                    yield Completion(action, start_position=-len(word_before_cursor))
        else:
            # user is typing an argument, find which are valid
            action = document.text.split()[0]
            for argument in self.ACTION_ARGUMENTS.get(action, []):
                if argument not in document.text and argument.startswith(word_before_cursor):
                    yield Completion(argument, start_position=-len(word_before_cursor))


actions = list(ActionArgumentCompleter.ACTION_ARGUMENTS.keys())


def parse_secret(value: str) -> bytes:
    if value.startswith("0x"):
        secret = bytes.fromhex(value[2:])
        if len(secret) != SECRET_LEN:
            raise ValueError(f"A hex secret must be {SECRET_LEN} bytes long")
        return secret
    return format_secret(value)


def parse_args(input_line: str) -> tuple[str, Dict[str, str]]:
    """
    Splits a command line into the action and a dictionary of its arguments.
    Positional arguments are recorded with keys @0, @1, ...
    """

    input_line_list = shlex.split(input_line)
    if not input_line_list:
        return "", {}

    action = input_line_list[0].strip()

    args_dict = {}
    pos_count = 0  # count of positional arguments
    for item in input_line_list[1:]:
        parts = item.strip().split('=', 1)
        if len(parts) == 2:
            param, value = parts
            args_dict[param] = value
        else:
            args_dict['@' + str(pos_count)] = parts[0]
            pos_count += 1

    return action, args_dict


def print_game(env: Environment, game_id: int):
    game = env.contract.game(game_id)
    if game is None:
        print(f"Game {game_id} does not exist")
        return

    print(f"Game {game.id}: {game.status.name}")
    print(f"  owner:      {env.account_name(game.owner)}")
    print(f"  commitment: {game.owner_commitment.hex()}")
    print(f"  stake:      {format_amount(game.stake)}")
    # Hand.ROCK is falsy, hence the explicit checks
    player_hand = '-' if game.player_hand is None else game.player_hand
    owner_hand = '-' if game.owner_hand is None else game.owner_hand

    print(f"  player:     {env.account_name(game.player)} ({player_hand})")
    print(f"  owner hand: {owner_hand}")
    print(f"  winner:     {env.account_name(game.winner)}")


def execute_command(env: Environment, input_line: str):
    # consider lines starting with '#' (possibly prefixed with whitespaces) as comments
    if input_line.strip().startswith("#"):
        return

    try:
        action, args_dict = parse_args(input_line)
    except ValueError as e:
        print(f"Invalid command: {str(e)}")
        return

    if action == "":
        return
    elif action not in actions:
        print("Invalid action")
        return

    contract = env.contract
    # only actions that take `as=` act on behalf of an account
    sender = None
    if "as=" in ActionArgumentCompleter.ACTION_ARGUMENTS[action]:
        sender = env.account(args_dict.get("as", "owner"))

    if action == "accounts":
        for name, address in env.accounts.items():
            print(f"{name:8} {address.hex()} {format_amount(env.ledger.balance_of(address))}")
        print(f"{'contract':8} {contract.address.hex()} {format_amount(contract.balance)}")
    elif action == "commit":
        hand = Hand.parse(args_dict["hand"])
        secret = parse_secret(args_dict["secret"])
        print(calculate_commitment(sender, hand, secret).hex())
    elif action == "init":
        if "commitment" in args_dict:
            commitment = bytes.fromhex(args_dict["commitment"])
        else:
            commitment = calculate_commitment(sender, Hand.parse(args_dict["hand"]), parse_secret(args_dict["secret"]))
        amount = parse_amount(args_dict.get("amount", format_amount(contract.participation_fee)))

        game_id = contract.initialize_game(commitment, sender=sender, value=amount)
        print(f"Game {game_id} initialized")
    elif action == "join":
        game_id = int(args_dict["game"])
        hand = Hand.parse(args_dict["hand"])
        amount = parse_amount(args_dict["amount"])

        contract.join(game_id, hand, sender=sender, value=amount)
        print(f"Joined game {game_id} with {hand}")
    elif action == "judge":
        game_id = int(args_dict["game"])
        secret = parse_secret(args_dict["secret"])
        if "hand" in args_dict:
            winner = contract.judge_with_hand(game_id, Hand.parse(args_dict["hand"]), secret, sender=sender)
        else:
            winner = contract.judge(game_id, secret, sender=sender)
        print(f"Game {game_id} completed. Winner: {env.account_name(winner)}")
    elif action == "cancel":
        game_id = int(args_dict["game"])
        contract.cancel(game_id, sender=sender)
        print(f"Game {game_id} cancelled")
    elif action == "fee":
        if "amount" in args_dict:
            contract.configure_fee(parse_amount(args_dict["amount"]), sender=sender)
        print(f"Participation fee: {format_amount(contract.participation_fee)}")
    elif action == "send":
        contract.receive(sender=sender, value=parse_amount(args_dict["amount"]))
        print("Done")
    elif action == "list":
        for game in contract.games():
            print(game.id, game.status.name, format_amount(game.stake), env.account_name(game.winner))
    elif action == "show":
        print_game(env, int(args_dict["game"]))
    elif action == "events":
        for event in env.ledger.get_events():
            print(event.name, *event.args)
    elif action == "play":
        play_round(env, args_dict)


def play_round(env: Environment, args_dict: Dict[str, str]):
    """A full round: the owner commits to a random hand, the player joins, and the owner judges."""
    contract = env.contract
    owner, player = env.account("owner"), env.account("player")
    rng = random.SystemRandom()

    owner_hand = Hand(rng.randint(0, 2))
    player_hand = Hand.parse(args_dict["hand"]) if "hand" in args_dict else Hand(rng.randint(0, 2))
    amount = parse_amount(args_dict.get("amount", format_amount(contract.participation_fee)))
    secret = os.urandom(SECRET_LEN)

    game_id = contract.initialize_game(calculate_commitment(owner, owner_hand, secret), sender=owner, value=amount)
    print(f"Game {game_id} initialized by the owner")

    contract.join(game_id, player_hand, sender=player, value=amount)
    print(f"Player's move: {player_hand}")

    env.prompt(f"Revealing the owner's move for game {game_id}")

    winner = contract.judge(game_id, secret, sender=owner)
    print(f"Owner's move: {owner_hand}")
    print(f"Winner: {env.account_name(winner)}")


def cli_main(env: Environment):
    completer = ActionArgumentCompleter()
    # Create a history object
    history = FileHistory('.cli-history')

    while True:
        try:
            input_line = prompt("✊ ", history=history, completer=completer)
            execute_command(env, input_line)
        except (KeyboardInterrupt, EOFError):
            raise  # exit
        except GameError as err:
            print(f"Rejected: {err}")
        except Exception as err:
            print(f"Error: {err}")
            print(traceback.format_exc())


def script_main(env: Environment, script_filename: str):
    with open(script_filename, "r") as script_file:
        for input_line in script_file:
            try:
                execute_command(env, input_line)
            except Exception as e:
                print(f"Error executing command: {input_line.strip()} - Error: {str(e)}")
                break


def main():
    logging.basicConfig(filename='rps-cli.log', level=logging.DEBUG)

    parser = argparse.ArgumentParser(description="Commit-reveal Rock-Paper-Scissors game")

    # Script file option
    parser.add_argument("--script", "-s", type=str, help="Execute commands from script file")

    # Participation fee option
    parser.add_argument("--fee", type=str, help="Initial participation fee (default: RPS_PARTICIPATION_FEE, or 0.1)")

    # Non-interactive option
    parser.add_argument("--non-interactive", "-n", action="store_true", help="Run in non-interactive mode")

    args = parser.parse_args()

    env = Environment.from_settings(
        load_settings(),
        participation_fee=args.fee,
        interactive=False if (args.non_interactive or args.script) else None
    )

    if args.script:
        script_main(env, args.script)
    else:
        try:
            cli_main(env)
        except (KeyboardInterrupt, EOFError):
            pass  # exit


if __name__ == "__main__":
    main()
